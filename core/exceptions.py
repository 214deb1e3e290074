#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Error taxonomy for Translation Hub.

Internal stages raise these exceptions; the orchestrator and the provider
boundary convert them into TranslationResult errors so nothing unstructured
reaches the API or the session controller.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Classified failure kinds surfaced to callers."""
    AUTH = "auth"                              # bad/expired credential
    RATE_LIMITED = "rate_limited"
    NETWORK = "network"                        # transport failure
    PROVIDER = "provider"                      # non-2xx, provider-side fault
    EXTRACTION = "extraction"                  # local text extraction failed
    PROVIDER_ONLY = "provider_only"            # needs the document provider
    UNSUPPORTED_FORMAT = "unsupported_format"
    SIZE_EXCEEDED = "size_exceeded"
    VALIDATION = "validation"
    DELIVERY = "delivery"                      # artifact could not be handed over


class TranslatorError(Exception):
    """Base error carrying an ErrorKind and a user-facing message."""

    kind: ErrorKind = ErrorKind.PROVIDER

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} kind={self.kind.value} message={self.message!r}>"


class ValidationError(TranslatorError):
    kind = ErrorKind.VALIDATION


class UnsupportedFormatError(TranslatorError):
    kind = ErrorKind.UNSUPPORTED_FORMAT


class SizeExceededError(TranslatorError):
    kind = ErrorKind.SIZE_EXCEEDED


class ExtractionError(TranslatorError):
    kind = ErrorKind.EXTRACTION


class ProviderOnlyError(TranslatorError):
    kind = ErrorKind.PROVIDER_ONLY


class ProviderError(TranslatorError):
    """
    Failure reported by (or while reaching) an external provider.

    Attributes:
        status_code: HTTP status when the provider answered, else None.
    """

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.PROVIDER,
        status_code: Optional[int] = None
    ):
        super().__init__(message, kind)
        self.status_code = status_code

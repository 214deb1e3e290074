#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Data model for Translation Hub.

Classes:
    TranslationRequest: Text translation input.
    TranslationResult: Ok(text) | Error(kind, message).
    DocumentFormat: Supported upload formats and their properties.
    FileHandle / DocumentJob: Validated document translation input.
    ExtractedContent: Plain text plus the HTML tree kept for reconstruction.
    Artifact: A named output file ready for delivery.
    JobState / DocumentOutcome: Document job lifecycle and final result.
    HistoryEntry: A completed translation a caller chose to record.
"""

import uuid
from datetime import datetime
from enum import Enum
from pathlib import PurePath
from typing import Any, List, Optional
from dataclasses import dataclass, field

from config.constants import MAX_FILE_SIZE_BYTES, PROVIDER_ONLY_EXTENSIONS, SUPPORTED_EXTENSIONS
from .exceptions import (
    ErrorKind,
    TranslatorError,
    ValidationError,
    UnsupportedFormatError,
    SizeExceededError,
)
from .language import AUTO_DETECT, is_supported


def validate_language_pair(source_lang: str, target_lang: str) -> None:
    """
    Both codes must be in the catalogue, the target cannot be auto-detect,
    and source and target must differ unless the source is auto-detected.
    """
    if not target_lang:
        raise ValidationError("Target language is required")
    if not is_supported(source_lang):
        raise ValidationError(f"Unsupported source language: {source_lang}")
    if target_lang == AUTO_DETECT or not is_supported(target_lang):
        raise ValidationError(f"Unsupported target language: {target_lang}")
    if source_lang != AUTO_DETECT and source_lang == target_lang:
        raise ValidationError("Source and target languages cannot be the same")


@dataclass(frozen=True)
class TranslationRequest:
    """A text translation request"""
    source_text: str
    source_lang: str
    target_lang: str

    def validate(self) -> None:
        validate_language_pair(self.source_lang, self.target_lang)

    @property
    def is_empty(self) -> bool:
        return not self.source_text or not self.source_text.strip()


@dataclass(frozen=True)
class TranslationResult:
    """
    Tagged union: either translated text or a classified error, never both.

    Use TranslationResult.ok(...) / TranslationResult.error(...) to build one.
    """
    text: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    message: Optional[str] = None

    def __post_init__(self):
        if (self.text is None) == (self.error_kind is None):
            raise ValueError("TranslationResult must hold exactly one of text or error")

    @classmethod
    def ok(cls, text: str) -> 'TranslationResult':
        return cls(text=text)

    @classmethod
    def error(cls, kind: ErrorKind, message: str) -> 'TranslationResult':
        return cls(error_kind=kind, message=message)

    @classmethod
    def from_exception(cls, exc: TranslatorError) -> 'TranslationResult':
        return cls(error_kind=exc.kind, message=exc.message)

    @property
    def is_ok(self) -> bool:
        return self.error_kind is None

    def to_dict(self) -> dict:
        if self.is_ok:
            return {"ok": True, "text": self.text}
        return {"ok": False, "error": self.error_kind.value, "message": self.message}


class DocumentFormat(Enum):
    """Supported upload formats keyed by extension"""
    TXT = ".txt"
    HTML = ".html"
    DOCX = ".docx"
    DOC = ".doc"
    PDF = ".pdf"
    PPTX = ".pptx"
    PPT = ".ppt"

    @classmethod
    def from_filename(cls, filename: str) -> 'DocumentFormat':
        """
        Resolve the declared format from a filename extension.

        Raises:
            UnsupportedFormatError: extension outside the allowlist.
        """
        extension = PurePath(filename).suffix.lower()
        if extension not in SUPPORTED_EXTENSIONS:
            raise UnsupportedFormatError(
                f"Unsupported file format '{extension or filename}'. "
                f"Supported formats: {', '.join(SUPPORTED_EXTENSIONS)}"
            )
        return cls(extension)

    @property
    def is_paged(self) -> bool:
        """Page/slide formats only the document provider can translate"""
        return self.value in PROVIDER_ONLY_EXTENSIONS

    @property
    def is_word_processor(self) -> bool:
        return self in (DocumentFormat.DOCX, DocumentFormat.DOC)

    @property
    def media_type(self) -> str:
        return _MEDIA_TYPES[self]


_MEDIA_TYPES = {
    DocumentFormat.TXT: "text/plain",
    DocumentFormat.HTML: "text/html",
    DocumentFormat.DOCX: "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    DocumentFormat.DOC: "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    DocumentFormat.PDF: "application/pdf",
    DocumentFormat.PPTX: "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    DocumentFormat.PPT: "application/vnd.openxmlformats-officedocument.presentationml.presentation",
}


@dataclass(frozen=True)
class FileHandle:
    """
    Reference to an uploaded file.

    `source` is opaque to the core: a filesystem path, an upload id, or the
    bytes themselves, interpreted only by the FileReader in use.
    """
    name: str
    byte_size: int
    declared_format: DocumentFormat
    source: Any = None

    @property
    def base_name(self) -> str:
        base, dot, _ = self.name.rpartition(".")
        return base if dot else self.name

    @property
    def extension(self) -> str:
        _, dot, ext = self.name.rpartition(".")
        return ext if dot else ""


@dataclass(frozen=True)
class DocumentJob:
    """A validated document translation job"""
    file: FileHandle
    source_lang: str
    target_lang: str

    @classmethod
    def create(
        cls,
        name: str,
        byte_size: int,
        source_lang: str,
        target_lang: str,
        source: Any = None,
        max_bytes: int = MAX_FILE_SIZE_BYTES
    ) -> 'DocumentJob':
        """
        Validate and build a job before any network call is made.

        Raises:
            UnsupportedFormatError: extension outside the allowlist.
            SizeExceededError: file larger than max_bytes.
            ValidationError: identical source and target languages.
        """
        declared_format = DocumentFormat.from_filename(name)
        if byte_size > max_bytes:
            raise SizeExceededError(
                f"File must not exceed {max_bytes // (1024 * 1024)}MB "
                f"({byte_size} bytes given)"
            )
        validate_language_pair(source_lang, target_lang)
        handle = FileHandle(
            name=name,
            byte_size=byte_size,
            declared_format=declared_format,
            source=source
        )
        return cls(file=handle, source_lang=source_lang, target_lang=target_lang)

    @property
    def output_name(self) -> str:
        """{base}_{target}.{ext}"""
        return f"{self.file.base_name}_{self.target_lang}.{self.file.extension}"


@dataclass
class ExtractedContent:
    """Plain text from a document; `tree` is the parsed HTML (HTML only)."""
    text: str
    declared_format: DocumentFormat
    tree: Any = None


@dataclass(frozen=True)
class Artifact:
    """A named output file"""
    name: str
    data: bytes
    media_type: str

    @property
    def size(self) -> int:
        return len(self.data)


class JobState(Enum):
    """Document job states"""
    IDLE = "idle"
    VALIDATING_INPUT = "validating_input"
    CHECKING_PROVIDER = "checking_provider"
    ATTEMPTING_PRIMARY = "attempting_primary"
    ATTEMPTING_FALLBACK = "attempting_fallback"
    DELIVERED = "delivered"
    REJECTED = "rejected"


class TextJobState(Enum):
    """Text translation states"""
    IDLE = "idle"
    TRANSLATING = "translating"
    DONE = "done"
    FAILED = "failed"


@dataclass
class DocumentOutcome:
    """Final result of a document job: an artifact or a classified error."""
    state: JobState
    artifact: Optional[Artifact] = None
    error_kind: Optional[ErrorKind] = None
    message: Optional[str] = None
    used_fallback: bool = False
    transitions: List[JobState] = field(default_factory=list)

    @property
    def delivered(self) -> bool:
        return self.state == JobState.DELIVERED


@dataclass(frozen=True)
class HistoryEntry:
    """A completed translation recorded by the history collaborator"""
    source_text: str
    translated_text: str
    source_lang: str
    target_lang: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "source_text": self.source_text,
            "translated_text": self.translated_text,
            "source_lang": self.source_lang,
            "target_lang": self.target_lang,
            "timestamp": self.timestamp.isoformat(),
        }

#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Settings - Centralized configuration management

Built once at start-up and handed to every provider client; nothing below
the entry points reads the environment directly.
"""

from pathlib import Path
from typing import Dict
from dataclasses import dataclass, asdict
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    API_TIMEOUT_SECONDS,
    DEBOUNCE_SECONDS,
    DOCUMENT_POLL_INTERVAL,
    DOCUMENT_TIMEOUT_SECONDS,
    HISTORY_LIMIT,
    MAX_FILE_SIZE_BYTES,
    MIN_CREDENTIAL_LENGTH,
    TRANSLATION_MAX_TOKENS,
    TRANSLATION_TEMPERATURE,
)


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class ConfigurationError(ValueError):
    """Raised when a required credential is missing or malformed."""


@dataclass
class CredentialStatus:
    """Presence and sanity status of one API credential"""
    exists: bool
    valid: bool

    def to_dict(self) -> Dict[str, bool]:
        return asdict(self)


def check_credential(api_key: str) -> CredentialStatus:
    """Cheap sanity check: present and longer than the minimum length."""
    exists = bool(api_key)
    return CredentialStatus(
        exists=exists,
        valid=exists and len(api_key) > MIN_CREDENTIAL_LENGTH
    )


class Settings(BaseSettings):
    """Application settings"""

    # ========== API Keys ==========
    openrouter_api_key: str = ""   # chat translation (primary)
    deepl_api_key: str = ""        # document translation
    gemini_api_key: str = ""       # grammar check + word analysis

    # ========== Chat Translation ==========
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    chat_model: str = "deepseek/deepseek-chat"
    chat_temperature: float = TRANSLATION_TEMPERATURE
    chat_max_tokens: int = TRANSLATION_MAX_TOKENS
    app_url: str = "http://localhost:8000"
    app_title: str = "DeepSeek Translator"

    # ========== Document Translation ==========
    deepl_base_url: str = "https://api-free.deepl.com/v2"
    poll_interval: float = DOCUMENT_POLL_INTERVAL
    document_timeout: float = DOCUMENT_TIMEOUT_SECONDS  # 0 disables the deadline

    # ========== Analysis ==========
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    grammar_model: str = "gemini-pro"
    analysis_model: str = "gemini-1.5-flash"

    # ========== Performance ==========
    request_timeout: float = API_TIMEOUT_SECONDS

    # ========== Session & Upload ==========
    debounce_seconds: float = DEBOUNCE_SECONDS
    max_upload_bytes: int = MAX_FILE_SIZE_BYTES
    history_limit: int = HISTORY_LIMIT

    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Allow extra fields from .env that aren't defined in model
    )

    def credential_report(self) -> Dict[str, CredentialStatus]:
        """Status of each credential, reported independently."""
        return {
            "openrouter": check_credential(self.openrouter_api_key),
            "deepl": check_credential(self.deepl_api_key),
            "gemini": check_credential(self.gemini_api_key),
        }

    def require_primary_credential(self) -> str:
        """Return the chat translation key or raise ConfigurationError."""
        status = check_credential(self.openrouter_api_key)
        if not status.exists:
            raise ConfigurationError(
                "OpenRouter API key not found. Set OPENROUTER_API_KEY in your .env file."
            )
        if not status.valid:
            raise ConfigurationError(
                "OpenRouter API key is invalid. The key must be longer than "
                f"{MIN_CREDENTIAL_LENGTH} characters."
            )
        return self.openrouter_api_key

    def describe(self) -> Dict[str, object]:
        """Non-secret configuration summary for logs and the health endpoint."""
        return {
            "chat_model": self.chat_model,
            "grammar_model": self.grammar_model,
            "analysis_model": self.analysis_model,
            "document_timeout": self.document_timeout,
            "debounce_seconds": self.debounce_seconds,
            "max_upload_bytes": self.max_upload_bytes,
        }


def load_settings(**overrides) -> Settings:
    """Build the settings object once at process start."""
    return Settings(**overrides)

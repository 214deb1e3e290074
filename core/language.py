#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Language Support - Language catalogue and provider code mapping
"""

from typing import Optional, Dict, List
from dataclasses import dataclass


AUTO_DETECT = "auto"


@dataclass(frozen=True)
class LanguageInfo:
    """Language information shown in the UI and sent to providers"""
    code: str
    name: str               # English name, used in the chat prompt
    display_name: str       # Vietnamese label shown in the language picker
    document_code: str      # Code expected by the document provider


# Language database (picker order)
LANGUAGES: Dict[str, LanguageInfo] = {
    "auto": LanguageInfo("auto", "the source language", "Tự động phát hiện", ""),
    "vi": LanguageInfo("vi", "Vietnamese", "Tiếng Việt", "VI"),
    "en": LanguageInfo("en", "English", "Tiếng Anh", "EN"),
    "zh": LanguageInfo("zh", "Chinese", "Tiếng Trung", "ZH"),
    "ja": LanguageInfo("ja", "Japanese", "Tiếng Nhật", "JA"),
    "ko": LanguageInfo("ko", "Korean", "Tiếng Hàn", "KO"),
    "fr": LanguageInfo("fr", "French", "Tiếng Pháp", "FR"),
    "de": LanguageInfo("de", "German", "Tiếng Đức", "DE"),
    "ru": LanguageInfo("ru", "Russian", "Tiếng Nga", "RU"),
    "es": LanguageInfo("es", "Spanish", "Tiếng Tây Ban Nha", "ES"),
    "it": LanguageInfo("it", "Italian", "Tiếng Ý", "IT"),
    "pt": LanguageInfo("pt", "Portuguese", "Tiếng Bồ Đào Nha", "PT"),
    "ar": LanguageInfo("ar", "Arabic", "Tiếng Ả Rập", "AR"),
    "hi": LanguageInfo("hi", "Hindi", "Tiếng Hindi", "HI"),
    "th": LanguageInfo("th", "Thai", "Tiếng Thái", "TH"),
}

DEFAULT_TARGET = "vi"


def is_supported(code: str) -> bool:
    """Check whether a language code is in the catalogue"""
    return code in LANGUAGES


def get_language_info(code: str) -> Optional[LanguageInfo]:
    """Get LanguageInfo for a code"""
    return LANGUAGES.get(code)


def get_language_name(code: str) -> str:
    """
    English name used inside prompts.

    Unknown codes are passed through unchanged so callers may use free-form
    names ("Vietnamese") as well as codes.
    """
    info = LANGUAGES.get(code)
    return info.name if info else code


def to_document_code(code: str, default: str = "") -> str:
    """
    Convert a UI code to the document provider's code.

    "auto" maps to an empty string, which means "let the provider detect".
    """
    info = LANGUAGES.get(code)
    if info is None:
        return default
    return info.document_code or default


def source_options() -> List[LanguageInfo]:
    """Languages selectable as source (includes auto-detect)"""
    return list(LANGUAGES.values())


def target_options() -> List[LanguageInfo]:
    """Languages selectable as target (auto-detect excluded)"""
    return [info for info in LANGUAGES.values() if info.code != AUTO_DETECT]

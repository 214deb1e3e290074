"""
Providers Package
Translation Hub - External service clients

Supports:
- OpenRouter chat completions (DeepSeek) for text translation
- DeepL document API for layout-preserving file translation
- Google Gemini for grammar checks and word analysis

Usage:
    from config.settings import load_settings
    from providers import ChatTranslator

    settings = load_settings()
    translator = ChatTranslator(settings)

    result = await translator.translate_text("Hello world", "en", "vi")
    if result.is_ok:
        print(result.text)
"""

from .base import BaseProvider, ProviderType
from .chat_translator import ChatTranslator, extract_translation, build_system_prompt
from .document_translator import DocumentTranslator
from .gemini import GeminiProvider
from .grammar_checker import GrammarChecker
from .word_analyzer import WordAnalyzer, WordAnalysis, WordInfo, parse_analysis

__all__ = [
    # Base classes
    "BaseProvider",
    "ProviderType",
    "GeminiProvider",

    # Providers
    "ChatTranslator",
    "DocumentTranslator",
    "GrammarChecker",
    "WordAnalyzer",

    # Helpers
    "extract_translation",
    "build_system_prompt",
    "parse_analysis",
    "WordAnalysis",
    "WordInfo",
]

__version__ = "1.0.0"

"""
Chat Translator - DeepSeek chat model via OpenRouter
Translation Hub - Provider Clients

The model is instructed to wrap its answer in <translation> tags; the raw
answer is unwrapped by extract_translation().
"""

import re
from typing import List, Dict

from config.constants import (
    TRANSLATION_START_MARKER,
    TRANSLATION_END_MARKER,
    BOILERPLATE_PREFIXES,
    BOILERPLATE_SUFFIXES,
)
from config.logging_config import get_logger
from core.exceptions import ErrorKind, ProviderError
from core.language import get_language_name
from core.models import TranslationResult

from .base import BaseProvider, ProviderType

logger = get_logger(__name__)


_MARKER_PATTERN = re.compile(
    re.escape(TRANSLATION_START_MARKER) + r"([\s\S]*?)" + re.escape(TRANSLATION_END_MARKER),
    re.IGNORECASE
)


def build_system_prompt(source_lang: str, target_lang: str) -> str:
    """System instruction constraining the output to the marker-wrapped translation"""
    source_name = get_language_name(source_lang)
    target_name = get_language_name(target_lang)
    return f"""You are a pure translation tool that ONLY outputs translated text. NEVER introduce yourself. NEVER add any explanations before or after the translation. NEVER use phrases like "Here's the translation" or "Translation:". NEVER comment about your translation. JUST translate from {source_name} to {target_name} directly.

FORMAT:
{TRANSLATION_START_MARKER}
[translated text goes here with absolutely no additional text]
{TRANSLATION_END_MARKER}

Example input: "Hello world"
Example correct output: {TRANSLATION_START_MARKER}Xin chào thế giới{TRANSLATION_END_MARKER}

Example input: "I love programming"
Example correct output: {TRANSLATION_START_MARKER}Tôi yêu lập trình{TRANSLATION_END_MARKER}

ONLY output the translated text enclosed in the translation tags. NOTHING ELSE."""


def _strip_first(text: str, candidates: List[str], from_start: bool) -> str:
    lowered = text.lower()
    for candidate in candidates:
        needle = candidate.lower()
        if from_start and lowered.startswith(needle):
            return text[len(candidate):].strip()
        if not from_start and lowered.endswith(needle):
            return text[:len(text) - len(candidate)].strip()
    return text


def extract_translation(raw: str) -> str:
    """
    Unwrap a raw model answer.

    1. Text between the marker pair, trimmed, when present and non-empty.
    2. Otherwise strip the first matching boilerplate prefix, then the first
       matching boilerplate suffix (both case-insensitive).
    """
    result = raw.strip()

    match = _MARKER_PATTERN.search(result)
    if match and match.group(1):
        return match.group(1).strip()

    result = _strip_first(result, BOILERPLATE_PREFIXES, from_start=True)
    result = _strip_first(result, BOILERPLATE_SUFFIXES, from_start=False)
    return result


class ChatTranslator(BaseProvider):
    """
    Primary text translator.

    Sends a system + user message pair to the OpenRouter chat completions
    endpoint with a near-zero temperature. Never retries; callers decide.
    """

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType.OPENROUTER

    @property
    def api_key(self) -> str:
        return self.settings.openrouter_api_key

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "HTTP-Referer": self.settings.app_url,
            "X-Title": self.settings.app_title,
        }

    def build_payload(self, text: str, source_lang: str, target_lang: str) -> dict:
        return {
            "model": self.settings.chat_model,
            "messages": [
                {"role": "system", "content": build_system_prompt(source_lang, target_lang)},
                {"role": "user", "content": text},
            ],
            "temperature": self.settings.chat_temperature,
            "max_tokens": self.settings.chat_max_tokens,
        }

    async def translate_text(self, text: str, source_lang: str, target_lang: str) -> TranslationResult:
        """
        Translate text and return Ok(text) or a classified error.

        Empty or whitespace-only input returns Ok("") without a request.
        """
        if not text or not text.strip():
            return TranslationResult.ok("")

        if not self.api_key:
            logger.error(" OpenRouter API key is not configured")
            return TranslationResult.error(
                ErrorKind.AUTH,
                "API key does not exist. Please check your .env file."
            )

        logger.info(
            f" Calling OpenRouter: model={self.settings.chat_model}, "
            f"{source_lang}->{target_lang}, text_length={len(text)} chars"
        )

        try:
            response = await self._request(
                "POST",
                f"{self.settings.openrouter_base_url}/chat/completions",
                headers=self._headers(),
                json=self.build_payload(text, source_lang, target_lang),
            )
            data = response.json()
        except ProviderError as e:
            return TranslationResult.from_exception(e)
        except ValueError:
            logger.error(" OpenRouter returned a non-JSON body")
            return TranslationResult.error(ErrorKind.PROVIDER, "Unexpected API response format.")

        choices = data.get("choices") if isinstance(data, dict) else None
        if (
            not isinstance(choices, list)
            or not choices
            or not isinstance(choices[0], dict)
            or not isinstance(choices[0].get("message"), dict)
        ):
            logger.error(f" Unexpected API response format: {str(data)[:200]}")
            return TranslationResult.error(ErrorKind.PROVIDER, "Unexpected API response format.")

        content = choices[0]["message"].get("content") or ""
        result = extract_translation(content)
        logger.info(f" OpenRouter success: returned {len(result)} chars")
        return TranslationResult.ok(result)

    async def probe_availability(self) -> bool:
        """List models as a lightweight liveness check; never raises."""
        if not self.api_key:
            return False
        try:
            await self._request(
                "GET",
                f"{self.settings.openrouter_base_url}/models",
                headers=self._headers(),
            )
            return True
        except Exception as e:
            logger.warning(f" OpenRouter availability probe failed: {e}")
            return False

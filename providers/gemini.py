"""
Gemini Provider - generateContent plumbing shared by the analysis clients
Translation Hub - Provider Clients
"""

from typing import Any, Dict, Optional

from config.logging_config import get_logger
from core.exceptions import ProviderError

from .base import BaseProvider, ProviderType

logger = get_logger(__name__)


def candidate_text(data: Any) -> Optional[str]:
    """candidates[0].content.parts[0].text, or None when any step is missing"""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text or None


class GeminiProvider(BaseProvider):
    """Base for clients built on Gemini generateContent"""

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType.GEMINI

    @property
    def api_key(self) -> str:
        return self.settings.gemini_api_key

    async def generate(
        self,
        model: str,
        prompt: str,
        generation_config: Optional[Dict[str, Any]] = None
    ) -> Optional[str]:
        """
        POST {contents:[{parts:[{text: prompt}]}]} and return the first
        candidate's text.

        Raises:
            ProviderError: transport failure, non-2xx or non-JSON body.
        """
        body: Dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}
        if generation_config:
            body["generationConfig"] = generation_config

        logger.info(f" Calling Gemini: model={model}, prompt_length={len(prompt)} chars")
        response = await self._request(
            "POST",
            f"{self.settings.gemini_base_url}/models/{model}:generateContent",
            params={"key": self.api_key},
            headers={"Content-Type": "application/json"},
            json=body,
        )
        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError("Gemini returned a malformed response") from e
        return candidate_text(data)

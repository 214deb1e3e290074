"""
Base Provider - Shared HTTP plumbing
Translation Hub - Provider Clients
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional

import httpx

from config.settings import Settings, CredentialStatus, check_credential
from config.logging_config import get_logger
from core.exceptions import ErrorKind, ProviderError

logger = get_logger(__name__)


class ProviderType(Enum):
    """Supported external services"""
    OPENROUTER = "openrouter"   # chat translation
    DEEPL = "deepl"             # document translation
    GEMINI = "gemini"           # grammar + word analysis


class BaseProvider(ABC):
    """
    Abstract base class for provider clients.

    Each client receives the Settings object at construction time and an
    optional shared httpx.AsyncClient. When no client is given one is created
    lazily and closed by aclose().
    """

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self._client = client
        self._owns_client = client is None

    @property
    @abstractmethod
    def provider_type(self) -> ProviderType:
        """Return the provider type"""
        pass

    @property
    @abstractmethod
    def api_key(self) -> str:
        """Credential used by this provider"""
        pass

    def check_credential(self) -> CredentialStatus:
        """Presence and minimum-length check of this provider's key"""
        return check_credential(self.api_key)

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.settings.request_timeout)
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """
        Issue one HTTP request.

        Raises:
            ProviderError: NETWORK kind on any httpx.RequestError (DNS,
                refused, timeout, undecodable body); AUTH / RATE_LIMITED /
                PROVIDER kinds on non-2xx.
        """
        client = self._get_client()
        try:
            response = await client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            logger.error(f" {self.provider_type.value} network error: {type(e).__name__}: {e}")
            raise ProviderError(
                "Network connection error. Please check your internet connection.",
                kind=ErrorKind.NETWORK
            ) from e

        if response.is_success:
            return response

        error = self._status_error(response)
        logger.error(f" {self.provider_type.value} API error: {error.message}")
        raise error

    def _status_error(self, response: httpx.Response) -> ProviderError:
        """Map a non-2xx response to a classified ProviderError"""
        status = response.status_code
        if status == 401:
            return ProviderError(
                "API key is invalid or has expired. Please check it again.",
                kind=ErrorKind.AUTH,
                status_code=status
            )
        if status == 429:
            return ProviderError(
                "API rate limit exceeded. Please try again later.",
                kind=ErrorKind.RATE_LIMITED,
                status_code=status
            )
        detail = self._error_detail(response) or response.reason_phrase
        return ProviderError(
            f"{status} - {detail}",
            kind=ErrorKind.PROVIDER,
            status_code=status
        )

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        """Best-effort error message from a provider error body"""
        try:
            body: Any = response.json()
        except ValueError:
            return response.text[:200].strip()
        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict):
                return str(error.get("message", ""))
            if isinstance(error, str):
                return error
            if "message" in body:
                return str(body["message"])
        return ""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} provider={self.provider_type.value}>"

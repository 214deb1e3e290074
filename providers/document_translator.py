"""
Document Translator - DeepL document API
Translation Hub - Provider Clients

Three-step flow: submit the file, poll the job status until "done", then
fetch the translated binary. The poll loop itself is unbounded; callers wrap
translate_document() in a deadline.
"""

import asyncio
from typing import Dict, Optional

from config.constants import DOCUMENT_STATUS_DONE, DOCUMENT_STATUS_ERROR
from config.logging_config import get_logger
from core.exceptions import ErrorKind, ProviderError

from .base import BaseProvider, ProviderType

logger = get_logger(__name__)


class DocumentTranslator(BaseProvider):
    """Document-capable provider (keeps the original file layout)"""

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType.DEEPL

    @property
    def api_key(self) -> str:
        return self.settings.deepl_api_key

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"DeepL-Auth-Key {self.api_key}"}

    async def probe_availability(self) -> bool:
        """Query account usage as a lightweight liveness check; never raises."""
        if not self.api_key:
            return False
        try:
            await self._request(
                "GET",
                f"{self.settings.deepl_base_url}/usage",
                headers=self._headers(),
            )
            return True
        except Exception as e:
            logger.warning(f" DeepL availability probe failed: {e}")
            return False

    async def translate_document(
        self,
        data: bytes,
        filename: str,
        source_code: Optional[str],
        target_code: str
    ) -> bytes:
        """
        Translate a whole file and return the translated bytes.

        Args:
            data: Original file content.
            filename: Original file name (the provider infers the format).
            source_code: Provider source code, empty/None for auto-detect.
            target_code: Provider target code (e.g. "VI").

        Raises:
            ProviderError: any non-2xx at submit, poll or fetch, a job status
                of "error", or a malformed response. Completed stages are
                never retried.
        """
        if not self.api_key:
            raise ProviderError("DeepL API key is not configured", kind=ErrorKind.AUTH)

        logger.info(
            f" Sending document to DeepL: file={filename}, "
            f"source={source_code or 'auto'}, target={target_code}"
        )

        form = {"target_lang": target_code}
        if source_code:
            form["source_lang"] = source_code

        response = await self._request(
            "POST",
            f"{self.settings.deepl_base_url}/document",
            headers=self._headers(),
            data=form,
            files={"file": (filename, data)},
        )
        handle = self._json(response)
        document_id = handle.get("document_id")
        document_key = handle.get("document_key")
        if not document_id or not document_key:
            raise ProviderError("DeepL did not return a document handle")

        await self._wait_until_done(document_id, document_key)

        result = await self._request(
            "POST",
            f"{self.settings.deepl_base_url}/document/{document_id}/result",
            headers=self._headers(),
            data={"document_key": document_key},
        )
        logger.info(f" DeepL document ready: {len(result.content)} bytes")
        return result.content

    async def _wait_until_done(self, document_id: str, document_key: str) -> None:
        url = f"{self.settings.deepl_base_url}/document/{document_id}"
        while True:
            response = await self._request(
                "POST",
                url,
                headers=self._headers(),
                data={"document_key": document_key},
            )
            status = self._json(response).get("status")
            logger.debug(f" DeepL document {document_id} status: {status}")

            if status == DOCUMENT_STATUS_DONE:
                return
            if status == DOCUMENT_STATUS_ERROR:
                message = self._json(response).get("error_message") or "unknown error"
                raise ProviderError(f"DeepL document translation failed: {message}")

            await asyncio.sleep(self.settings.poll_interval)

    @staticmethod
    def _json(response) -> dict:
        try:
            body = response.json()
        except ValueError as e:
            raise ProviderError("DeepL returned a malformed response") from e
        if not isinstance(body, dict):
            raise ProviderError("DeepL returned a malformed response")
        return body

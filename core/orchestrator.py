#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Translation Orchestrator - provider selection and fallback.

Text mode:
    request -> validate -> chat provider -> TranslationResult (no fallback)

Document mode:
    IDLE -> VALIDATING_INPUT -> [CHECKING_PROVIDER (paged formats)]
         -> ATTEMPTING_PRIMARY (document provider)
         -> ATTEMPTING_FALLBACK (extract -> chat provider -> reconstruct)
         -> DELIVERED | REJECTED

Usage:
    orchestrator = TranslationOrchestrator(
        settings, ChatTranslator(settings), DocumentTranslator(settings),
        file_reader=LocalFileReader(), sink=DirectorySink("output"),
    )
    job = DocumentJob.create("report.docx", size, "en", "vi", source=path)
    outcome = await orchestrator.translate_document(job)
"""

import asyncio
from typing import Any, Callable, Optional

from config.logging_config import get_logger
from config.settings import Settings
from .exceptions import ErrorKind, ProviderError, TranslatorError
from .extractor import DocumentExtractor
from .file_io import ArtifactSink, FileReader
from .language import to_document_code
from .models import (
    Artifact,
    DocumentJob,
    DocumentOutcome,
    JobState,
    TranslationRequest,
    TranslationResult,
    validate_language_pair,
)
from .reconstructor import DocumentReconstructor

logger = get_logger(__name__)

ProgressCallback = Callable[[JobState, str], None]


class _JobRejected(Exception):
    """Terminal failure inside a document job"""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


class TranslationOrchestrator:
    """
    Routes text and document translations to the right provider.

    The orchestrator depends only on the provider clients and the
    FileReader / ArtifactSink capabilities; it never touches paths or UI.
    """

    def __init__(
        self,
        settings: Settings,
        chat_translator: Any,
        document_translator: Any,
        file_reader: FileReader,
        sink: ArtifactSink,
        extractor: Optional[DocumentExtractor] = None,
        reconstructor: Optional[DocumentReconstructor] = None,
        progress_callback: Optional[ProgressCallback] = None
    ):
        self.settings = settings
        self.chat_translator = chat_translator
        self.document_translator = document_translator
        self.file_reader = file_reader
        self.sink = sink
        self.extractor = extractor or DocumentExtractor()
        self.reconstructor = reconstructor or DocumentReconstructor()
        self.progress_callback = progress_callback

    # ------------------------------------------------------------------
    # Text mode
    # ------------------------------------------------------------------

    async def translate_text(self, request: TranslationRequest) -> TranslationResult:
        """Translate text with the chat provider. Failures are terminal."""
        try:
            request.validate()
        except TranslatorError as e:
            return TranslationResult.from_exception(e)

        if request.is_empty:
            return TranslationResult.ok("")

        result = await self.chat_translator.translate_text(
            request.source_text, request.source_lang, request.target_lang
        )
        if not result.is_ok:
            logger.warning(f" Text translation failed: {result.error_kind.value} - {result.message}")
        return result

    # ------------------------------------------------------------------
    # Document mode
    # ------------------------------------------------------------------

    async def submit_document(
        self,
        name: str,
        byte_size: int,
        source_lang: str,
        target_lang: str,
        source: Any = None
    ) -> DocumentOutcome:
        """Build the job and run it; construction errors become a rejection."""
        try:
            job = DocumentJob.create(
                name,
                byte_size,
                source_lang,
                target_lang,
                source=source,
                max_bytes=self.settings.max_upload_bytes,
            )
        except TranslatorError as e:
            outcome = DocumentOutcome(state=JobState.IDLE, transitions=[JobState.IDLE])
            self._advance(outcome, JobState.VALIDATING_INPUT, f"Checking {name}")
            return self._reject(outcome, e.kind, e.message)
        return await self.translate_document(job)

    async def translate_document(self, job: DocumentJob) -> DocumentOutcome:
        """
        Run one document job through the state machine.

        Returns:
            DocumentOutcome in DELIVERED (artifact handed to the sink) or
            REJECTED (classified error) state.
        """
        outcome = DocumentOutcome(state=JobState.IDLE, transitions=[JobState.IDLE])
        doc_format = job.file.declared_format

        self._advance(outcome, JobState.VALIDATING_INPUT, f"Checking {job.file.name}")
        try:
            validate_language_pair(job.source_lang, job.target_lang)
        except TranslatorError as e:
            return self._reject(outcome, e.kind, e.message)

        if doc_format.is_paged:
            self._advance(outcome, JobState.CHECKING_PROVIDER, "Checking document provider")
            if not await self.document_translator.probe_availability():
                return self._reject(
                    outcome,
                    ErrorKind.PROVIDER_ONLY,
                    f"{doc_format.value} files need the document translation service, "
                    "which is currently unavailable."
                )

        self._advance(outcome, JobState.ATTEMPTING_PRIMARY, "Translating with document provider")
        try:
            data = await self.file_reader.read_bytes(job.file)
        except Exception as e:
            logger.error(f" Cannot read {job.file.name}: {e}")
            return self._reject(outcome, ErrorKind.EXTRACTION, f"Cannot read file: {e}")

        try:
            translated = await self._attempt_primary(job, data)
            if not translated:
                raise ProviderError("Document provider returned an empty file")
        except ProviderError as e:
            logger.warning(f" Primary provider failed ({e.kind.value}): {e.message}")
        else:
            return await self._deliver(outcome, job, translated)

        self._advance(outcome, JobState.ATTEMPTING_FALLBACK, "Translating extracted text")
        outcome.used_fallback = True
        try:
            translated = await self._attempt_fallback(job, data)
        except _JobRejected as e:
            return self._reject(outcome, e.kind, e.message)
        return await self._deliver(outcome, job, translated)

    async def _attempt_primary(self, job: DocumentJob, data: bytes) -> bytes:
        call = self.document_translator.translate_document(
            data,
            job.file.name,
            to_document_code(job.source_lang),
            to_document_code(job.target_lang),
        )
        timeout = self.settings.document_timeout
        if not timeout:
            return await call
        try:
            return await asyncio.wait_for(call, timeout=timeout)
        except asyncio.TimeoutError as e:
            raise ProviderError(f"Document translation timed out after {timeout:g}s") from e

    async def _attempt_fallback(self, job: DocumentJob, data: bytes) -> bytes:
        doc_format = job.file.declared_format
        try:
            content = self.extractor.extract(data, doc_format)
        except TranslatorError as e:
            raise _JobRejected(e.kind, e.message) from e

        result = await self.chat_translator.translate_text(
            content.text, job.source_lang, job.target_lang
        )
        if not result.is_ok:
            raise _JobRejected(result.error_kind, result.message)

        try:
            return self.reconstructor.reconstruct(result.text, doc_format, content)
        except Exception as e:
            logger.error(f" Reconstruction failed for {job.file.name}: {e}")
            raise _JobRejected(
                ErrorKind.EXTRACTION, f"Cannot rebuild {doc_format.value} document: {e}"
            ) from e

    async def _deliver(self, outcome: DocumentOutcome, job: DocumentJob, data: bytes) -> DocumentOutcome:
        artifact = Artifact(
            name=job.output_name,
            data=data,
            media_type=job.file.declared_format.media_type,
        )
        try:
            await self.sink.deliver(artifact)
        except Exception as e:
            logger.error(f" Delivery of {artifact.name} failed: {type(e).__name__}: {e}")
            return self._reject(outcome, ErrorKind.DELIVERY, f"Cannot deliver {artifact.name}: {e}")
        outcome.artifact = artifact
        self._advance(outcome, JobState.DELIVERED, f"Translation complete: {artifact.name}")
        return outcome

    def _reject(self, outcome: DocumentOutcome, kind: ErrorKind, message: str) -> DocumentOutcome:
        outcome.error_kind = kind
        outcome.message = message
        self._advance(outcome, JobState.REJECTED, message)
        return outcome

    def _advance(self, outcome: DocumentOutcome, state: JobState, message: str) -> None:
        logger.info(f" [{outcome.state.value} -> {state.value}] {message}")
        outcome.state = state
        outcome.transitions.append(state)
        if self.progress_callback:
            self.progress_callback(state, message)

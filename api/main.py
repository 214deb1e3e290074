#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
FastAPI Web Server - REST API for Translation Hub.

This module exposes the translation core over HTTP:
- Text translation (chat provider)
- Document translation with fallback (multipart upload, file download)
- Grammar check and word analysis (Gemini)
- Credential / configuration health

Usage:
    # Start server
    uvicorn api.main:app --host 0.0.0.0 --port 8000

    # Or run directly
    python -m api.main

Key Endpoints:
    GET  /api/health     - Credential report and configuration summary
    GET  /api/languages  - Source and target language catalogue
    POST /api/translate  - Translate text
    POST /api/documents  - Translate an uploaded document
    POST /api/grammar    - Grammar check
    POST /api/analyze    - Word analysis

Configuration:
    Environment variables (or .env):
    - OPENROUTER_API_KEY: chat translation (required for translation)
    - DEEPL_API_KEY: document translation
    - GEMINI_API_KEY: grammar check and word analysis
"""

from typing import Optional
from urllib.parse import quote

import httpx
from fastapi import FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from config.logging_config import get_logger
from config.settings import ConfigurationError, Settings, load_settings
from core.exceptions import ErrorKind
from core.file_io import InMemoryFileReader, MemorySink
from core.language import source_options, target_options
from core.models import TranslationRequest
from core.orchestrator import TranslationOrchestrator
from providers import (
    ChatTranslator,
    DocumentTranslator,
    GrammarChecker,
    WordAnalyzer,
    __version__,
)

from .schemas import (
    AnalyzeRequest,
    AnalyzeResponse,
    ErrorResponse,
    GrammarRequest,
    GrammarResponse,
    HealthResponse,
    LanguagesResponse,
    TranslateRequest,
    TranslateResponse,
)

logger = get_logger(__name__)


# HTTP status per error kind
ERROR_STATUS = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNSUPPORTED_FORMAT: 415,
    ErrorKind.SIZE_EXCEEDED: 413,
    ErrorKind.EXTRACTION: 422,
    ErrorKind.PROVIDER_ONLY: 503,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.AUTH: 502,
    ErrorKind.NETWORK: 502,
    ErrorKind.PROVIDER: 502,
    ErrorKind.DELIVERY: 500,
}

# Documented error bodies per route
ERROR_RESPONSES = {
    status: {"model": ErrorResponse}
    for status in sorted(set(ERROR_STATUS.values()))
}

ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",  # Vite dev server
    "http://127.0.0.1:5173",
    "http://localhost:8000",
    "http://127.0.0.1:8000",
]


class _ErrorKindException(Exception):
    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


def create_app(settings: Optional[Settings] = None, client: Optional[httpx.AsyncClient] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings object; loaded from the environment when omitted.
        client: Optional shared httpx.AsyncClient for every provider.
    """
    settings = settings or load_settings()

    app = FastAPI(
        title="Translation Hub API",
        description="Text and document translation with provider fallback",
        version=__version__,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.chat = ChatTranslator(settings, client=client)
    app.state.documents = DocumentTranslator(settings, client=client)
    app.state.grammar = GrammarChecker(settings, client=client)
    app.state.analyzer = WordAnalyzer(settings, client=client)

    def build_orchestrator(sink: MemorySink) -> TranslationOrchestrator:
        return TranslationOrchestrator(
            settings,
            app.state.chat,
            app.state.documents,
            file_reader=InMemoryFileReader(),
            sink=sink,
        )

    def require_translation_credential() -> None:
        try:
            settings.require_primary_credential()
        except ConfigurationError as e:
            raise HTTPException(status_code=503, detail=str(e))

    @app.exception_handler(_ErrorKindException)
    async def error_kind_handler(request: Request, exc: _ErrorKindException):
        return JSONResponse(
            status_code=ERROR_STATUS.get(exc.kind, 500),
            content={"error": exc.kind.value, "message": exc.message},
        )

    @app.on_event("shutdown")
    async def close_providers():
        for provider in (app.state.chat, app.state.documents, app.state.grammar, app.state.analyzer):
            await provider.aclose()

    @app.get("/api/health", response_model=HealthResponse)
    async def health_check():
        """Credential report and non-secret configuration"""
        report = settings.credential_report()
        return {
            "status": "healthy" if report["openrouter"].valid else "misconfigured",
            "version": __version__,
            "credentials": {name: status.to_dict() for name, status in report.items()},
            "config": settings.describe(),
        }

    @app.get("/api/languages", response_model=LanguagesResponse)
    async def list_languages():
        def as_dict(info):
            return {"code": info.code, "name": info.name, "display_name": info.display_name}

        return {
            "source": [as_dict(info) for info in source_options()],
            "target": [as_dict(info) for info in target_options()],
        }

    @app.post("/api/translate", response_model=TranslateResponse, responses=ERROR_RESPONSES)
    async def translate_text(payload: TranslateRequest):
        require_translation_credential()
        orchestrator = build_orchestrator(MemorySink())
        result = await orchestrator.translate_text(
            TranslationRequest(
                source_text=payload.text,
                source_lang=payload.source_lang,
                target_lang=payload.target_lang,
            )
        )
        if not result.is_ok:
            raise _ErrorKindException(result.error_kind, result.message)
        return {
            "text": result.text,
            "source_lang": payload.source_lang,
            "target_lang": payload.target_lang,
        }

    @app.post("/api/documents", responses=ERROR_RESPONSES)
    async def translate_document(
        file: UploadFile = File(...),
        source_lang: str = Form("auto"),
        target_lang: str = Form("vi"),
    ):
        """Translate an uploaded document and return it as an attachment"""
        require_translation_credential()
        content = await file.read()
        logger.info(f" Upload received: {file.filename} ({len(content)} bytes)")

        sink = MemorySink()
        outcome = await build_orchestrator(sink).submit_document(
            file.filename or "",
            len(content),
            source_lang,
            target_lang,
            source=content,
        )
        if not outcome.delivered:
            raise _ErrorKindException(outcome.error_kind, outcome.message)

        artifact = outcome.artifact
        return Response(
            content=artifact.data,
            media_type=artifact.media_type,
            headers={
                "Content-Disposition": f"attachment; filename*=UTF-8''{quote(artifact.name)}",
                "X-Translation-Fallback": "true" if outcome.used_fallback else "false",
            },
        )

    @app.post("/api/grammar", response_model=GrammarResponse, responses=ERROR_RESPONSES)
    async def check_grammar(payload: GrammarRequest):
        result = await app.state.grammar.check_grammar(payload.text, payload.language)
        if not result.is_ok:
            raise _ErrorKindException(result.error_kind, result.message)
        return {"result": result.text}

    @app.post("/api/analyze", response_model=AnalyzeResponse)
    async def analyze_words(payload: AnalyzeRequest):
        analysis = await app.state.analyzer.analyze(payload.text, payload.language)
        return analysis.to_dict()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("api.main:app", host="0.0.0.0", port=8000, reload=False)

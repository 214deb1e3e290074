#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Interactive translation session.

Holds the state behind a live-typing translator: source text, language pair,
the displayed translation and its status. Typing schedules a debounced
automatic translation; manual translate and swap run immediately.

Every request carries a sequence number. A response older than the one
currently displayed is dropped, so a slow automatic call cannot overwrite a
newer manual result.
"""

import asyncio
import itertools
from typing import Optional

from config.constants import DEBOUNCE_SECONDS
from config.logging_config import get_logger
from config.settings import Settings
from .exceptions import ErrorKind
from .history import TranslationHistory
from .language import AUTO_DETECT, DEFAULT_TARGET
from .models import HistoryEntry, TextJobState, TranslationRequest, TranslationResult

logger = get_logger(__name__)


class TranslationSession:
    """Debounced interactive translation on top of the orchestrator"""

    def __init__(
        self,
        orchestrator,
        source_lang: str = AUTO_DETECT,
        target_lang: str = DEFAULT_TARGET,
        debounce_seconds: float = DEBOUNCE_SECONDS,
        auto_translate: bool = True,
        history: Optional[TranslationHistory] = None
    ):
        self.orchestrator = orchestrator
        self.source_lang = source_lang
        self.target_lang = target_lang
        self.debounce_seconds = debounce_seconds
        self.auto_translate = auto_translate
        self.history = history

        self.source_text = ""
        self.translated_text = ""
        self.status = TextJobState.IDLE
        self.error_kind: Optional[ErrorKind] = None
        self.error: Optional[str] = None

        self._sequence = itertools.count(1)
        self._displayed = 0
        self._pending: Optional[asyncio.Task] = None
        self._closed = False

    @classmethod
    def from_settings(
        cls,
        orchestrator,
        settings: Settings,
        history: Optional[TranslationHistory] = None,
        **kwargs
    ) -> 'TranslationSession':
        """Session using the configured quiet period and a history bounded by history_limit."""
        if history is None:
            history = TranslationHistory(limit=settings.history_limit)
        return cls(
            orchestrator,
            debounce_seconds=settings.debounce_seconds,
            history=history,
            **kwargs
        )

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def has_pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    def on_text_change(self, text: str) -> None:
        """New input; (re)start the quiet period or reset when emptied."""
        self.source_text = text
        self._cancel_pending()
        if not text or not text.strip():
            self._reset_output()
            return
        self._schedule()

    def set_languages(self, source_lang: Optional[str] = None, target_lang: Optional[str] = None) -> None:
        if source_lang is not None:
            self.source_lang = source_lang
        if target_lang is not None:
            self.target_lang = target_lang
        self._cancel_pending()
        if self.source_text.strip():
            self._schedule()

    async def translate_now(self) -> Optional[TranslationResult]:
        """
        Translate the current text immediately.

        Returns:
            The result, or None when there was nothing to translate or the
            response was discarded as stale.
        """
        self._cancel_pending()
        if not self.source_text.strip():
            return None
        return await self._run(self.source_text)

    async def swap(self) -> Optional[TranslationResult]:
        """
        Exchange source and target languages.

        With both a source text and a translation present, the translation
        becomes the new source text and is translated back at once. Does
        nothing while the source language is auto-detected.
        """
        if self.source_lang == AUTO_DETECT:
            return None

        self._cancel_pending()
        previous_text = self.source_text
        previous_translation = self.translated_text
        self.source_lang, self.target_lang = self.target_lang, self.source_lang

        if previous_text and previous_translation:
            self.source_text = previous_translation
            return await self._run(previous_translation)
        return None

    def clear(self) -> None:
        """Empty both panes and drop any pending or in-flight result."""
        self._cancel_pending()
        self.source_text = ""
        self._reset_output()
        self._displayed = next(self._sequence)

    def close(self) -> None:
        self._closed = True
        self._cancel_pending()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _schedule(self) -> None:
        if not self.auto_translate or self._closed:
            return
        self._pending = asyncio.ensure_future(self._debounced(self.source_text))

    async def _debounced(self, text: str) -> None:
        await asyncio.sleep(self.debounce_seconds)
        # Past this point the call is no longer cancelable
        self._pending = None
        await self._run(text)

    def _cancel_pending(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    def _reset_output(self) -> None:
        self.translated_text = ""
        self.status = TextJobState.IDLE
        self.error_kind = None
        self.error = None

    async def _run(self, text: str) -> Optional[TranslationResult]:
        if self._closed:
            return None

        sequence = next(self._sequence)
        source_lang, target_lang = self.source_lang, self.target_lang
        self.status = TextJobState.TRANSLATING
        self.error_kind = None
        self.error = None

        result = await self.orchestrator.translate_text(
            TranslationRequest(source_text=text, source_lang=source_lang, target_lang=target_lang)
        )

        if self._closed:
            logger.debug(f" Session closed, dropping response #{sequence}")
            return None
        if sequence < self._displayed:
            logger.debug(f" Dropping stale response #{sequence} (showing #{self._displayed})")
            return None

        self._displayed = sequence
        if result.is_ok:
            self.translated_text = result.text
            self.status = TextJobState.DONE
            if self.history is not None and result.text:
                self.history.add(HistoryEntry(
                    source_text=text,
                    translated_text=result.text,
                    source_lang=source_lang,
                    target_lang=target_lang,
                ))
        else:
            self.translated_text = ""
            self.status = TextJobState.FAILED
            self.error_kind = result.error_kind
            self.error = result.message
        return result

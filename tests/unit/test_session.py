"""
Unit tests for core/session.py - TranslationSession
"""
import asyncio
import pytest
from unittest.mock import AsyncMock, Mock

from conftest import make_settings
from core.exceptions import ErrorKind
from core.history import TranslationHistory
from core.models import TextJobState, TranslationResult
from core.session import TranslationSession

DEBOUNCE = 0.05


def echo_orchestrator():
    """Fake orchestrator answering '<target>:<text>'"""
    orchestrator = Mock()

    async def translate(request):
        return TranslationResult.ok(f"{request.target_lang}:{request.source_text}")

    orchestrator.translate_text = AsyncMock(side_effect=translate)
    return orchestrator


def make_session(orchestrator=None, **kwargs):
    kwargs.setdefault("source_lang", "en")
    kwargs.setdefault("target_lang", "vi")
    return TranslationSession(orchestrator or echo_orchestrator(), debounce_seconds=DEBOUNCE, **kwargs)


class TestDebounce:

    @pytest.mark.asyncio
    async def test_translates_after_quiet_period(self):
        session = make_session()
        session.on_text_change("Hello")

        assert session.orchestrator.translate_text.await_count == 0
        await asyncio.sleep(DEBOUNCE * 3)

        assert session.translated_text == "vi:Hello"
        assert session.status == TextJobState.DONE

    @pytest.mark.asyncio
    async def test_typing_restarts_quiet_period(self):
        session = make_session()
        session.on_text_change("H")
        await asyncio.sleep(DEBOUNCE / 2)
        session.on_text_change("He")
        await asyncio.sleep(DEBOUNCE / 2)
        session.on_text_change("Hello")
        await asyncio.sleep(DEBOUNCE * 3)

        assert session.orchestrator.translate_text.await_count == 1
        request = session.orchestrator.translate_text.await_args.args[0]
        assert request.source_text == "Hello"

    @pytest.mark.asyncio
    async def test_clearing_text_cancels(self):
        session = make_session()
        session.on_text_change("Hello")
        session.on_text_change("   ")
        await asyncio.sleep(DEBOUNCE * 3)

        session.orchestrator.translate_text.assert_not_awaited()
        assert session.translated_text == ""
        assert session.status == TextJobState.IDLE

    @pytest.mark.asyncio
    async def test_close_cancels(self):
        session = make_session()
        session.on_text_change("Hello")
        session.close()
        await asyncio.sleep(DEBOUNCE * 3)

        session.orchestrator.translate_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_auto_translate_off(self):
        session = make_session(auto_translate=False)
        session.on_text_change("Hello")
        await asyncio.sleep(DEBOUNCE * 3)

        session.orchestrator.translate_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_language_change_reschedules(self):
        session = make_session()
        session.on_text_change("Hello")
        await asyncio.sleep(DEBOUNCE * 3)
        session.set_languages(target_lang="ja")
        await asyncio.sleep(DEBOUNCE * 3)

        assert session.translated_text == "ja:Hello"


class TestManualActions:

    @pytest.mark.asyncio
    async def test_translate_now_skips_debounce(self):
        session = make_session()
        session.on_text_change("Hello")

        result = await session.translate_now()
        await asyncio.sleep(DEBOUNCE * 3)

        assert result.text == "vi:Hello"
        assert session.orchestrator.translate_text.await_count == 1

    @pytest.mark.asyncio
    async def test_swap_translates_previous_translation(self):
        session = make_session()
        session.on_text_change("Hello")
        await session.translate_now()

        await session.swap()

        assert session.source_lang == "vi"
        assert session.target_lang == "en"
        assert session.source_text == "vi:Hello"
        request = session.orchestrator.translate_text.await_args.args[0]
        assert request.source_text == "vi:Hello"
        assert request.source_lang == "vi"
        assert request.target_lang == "en"
        assert session.translated_text == "en:vi:Hello"

    @pytest.mark.asyncio
    async def test_swap_without_translation_only_swaps_languages(self):
        session = make_session(auto_translate=False)
        session.on_text_change("Hello")

        assert await session.swap() is None
        assert (session.source_lang, session.target_lang) == ("vi", "en")
        assert session.source_text == "Hello"
        session.orchestrator.translate_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_swap_noop_for_auto_source(self):
        session = make_session(source_lang="auto")
        session.on_text_change("Hello")
        await session.translate_now()

        await session.swap()

        assert (session.source_lang, session.target_lang) == ("auto", "vi")
        assert session.source_text == "Hello"
        assert session.orchestrator.translate_text.await_count == 1

    @pytest.mark.asyncio
    async def test_clear(self):
        session = make_session()
        session.on_text_change("Hello")
        await session.translate_now()

        session.clear()

        assert session.source_text == ""
        assert session.translated_text == ""
        assert session.status == TextJobState.IDLE

    @pytest.mark.asyncio
    async def test_failure_sets_error(self):
        orchestrator = Mock()
        orchestrator.translate_text = AsyncMock(
            return_value=TranslationResult.error(ErrorKind.NETWORK, "offline")
        )
        session = make_session(orchestrator)
        session.on_text_change("Hello")

        await session.translate_now()

        assert session.status == TextJobState.FAILED
        assert session.error_kind == ErrorKind.NETWORK
        assert session.error == "offline"
        assert session.translated_text == ""


class TestOrdering:

    @pytest.mark.asyncio
    async def test_stale_response_discarded(self):
        release_slow = asyncio.Event()
        orchestrator = Mock()

        async def translate(request):
            if request.source_text == "slow":
                await release_slow.wait()
            return TranslationResult.ok(f"t:{request.source_text}")

        orchestrator.translate_text = AsyncMock(side_effect=translate)
        session = make_session(orchestrator)

        session.source_text = "slow"
        slow = asyncio.ensure_future(session.translate_now())
        await asyncio.sleep(0)
        session.source_text = "fast"
        await session.translate_now()
        release_slow.set()

        assert await slow is None
        assert session.translated_text == "t:fast"

    @pytest.mark.asyncio
    async def test_closed_session_discards_inflight(self):
        release = asyncio.Event()
        orchestrator = Mock()

        async def translate(request):
            await release.wait()
            return TranslationResult.ok("late")

        orchestrator.translate_text = AsyncMock(side_effect=translate)
        session = make_session(orchestrator)
        session.source_text = "Hello"
        pending = asyncio.ensure_future(session.translate_now())
        await asyncio.sleep(0)

        session.close()
        release.set()

        assert await pending is None
        assert session.translated_text == ""


class TestHistoryRecording:

    @pytest.mark.asyncio
    async def test_successes_recorded(self):
        history = TranslationHistory()
        session = make_session(history=history)
        session.on_text_change("Hello")
        await session.translate_now()

        entries = history.entries()
        assert len(entries) == 1
        assert entries[0].source_text == "Hello"
        assert entries[0].translated_text == "vi:Hello"

    @pytest.mark.asyncio
    async def test_failures_not_recorded(self):
        history = TranslationHistory()
        orchestrator = Mock()
        orchestrator.translate_text = AsyncMock(
            return_value=TranslationResult.error(ErrorKind.PROVIDER, "500 - boom")
        )
        session = make_session(orchestrator, history=history)
        session.on_text_change("Hello")
        await session.translate_now()

        assert history.entries() == []


class TestFromSettings:

    @pytest.mark.asyncio
    async def test_configured_debounce_used(self):
        settings = make_settings(debounce_seconds=0.2)
        session = TranslationSession.from_settings(
            echo_orchestrator(), settings, source_lang="en", target_lang="vi"
        )
        assert session.debounce_seconds == 0.2

        session.on_text_change("Hello")
        await asyncio.sleep(0.05)
        assert session.orchestrator.translate_text.await_count == 0

        await asyncio.sleep(0.3)
        assert session.translated_text == "vi:Hello"

    @pytest.mark.asyncio
    async def test_history_bounded_by_history_limit(self):
        session = TranslationSession.from_settings(
            echo_orchestrator(), make_settings(history_limit=2), source_lang="en", target_lang="vi"
        )
        assert session.history.limit == 2

        for text in ("one", "two", "three"):
            session.on_text_change(text)
            await session.translate_now()

        assert [entry.source_text for entry in session.history.entries()] == ["three", "two"]

    def test_given_history_kept(self):
        history = TranslationHistory(limit=5)
        session = TranslationSession.from_settings(echo_orchestrator(), make_settings(), history=history)
        assert session.history is history

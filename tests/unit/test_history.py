"""
Unit tests for core/history.py - TranslationHistory
"""
from core.history import TranslationHistory
from core.models import HistoryEntry


def entry(source, translated="x"):
    return HistoryEntry(source_text=source, translated_text=translated, source_lang="en", target_lang="vi")


class TestTranslationHistory:

    def test_newest_first(self):
        history = TranslationHistory()
        first = history.add(entry("one"))
        second = history.add(entry("two"))
        assert history.entries() == [second, first]

    def test_limit_drops_oldest(self):
        history = TranslationHistory(limit=2)
        history.add(entry("one"))
        history.add(entry("two"))
        history.add(entry("three"))
        assert [e.source_text for e in history.entries()] == ["three", "two"]
        assert len(history) == 2

    def test_search_case_insensitive(self):
        history = TranslationHistory()
        history.add(entry("Hello World", "Xin chào"))
        history.add(entry("Goodbye", "Tạm biệt"))
        assert [e.source_text for e in history.search("WORLD")] == ["Hello World"]
        assert [e.source_text for e in history.search("tạm")] == ["Goodbye"]

    def test_delete_and_clear(self):
        history = TranslationHistory()
        kept = history.add(entry("keep"))
        gone = history.add(entry("drop"))
        assert history.delete(gone.id) is True
        assert history.delete(gone.id) is False
        assert history.entries() == [kept]
        history.clear()
        assert history.entries() == []

    def test_favorites(self):
        history = TranslationHistory()
        saved = history.add(entry("fav"))
        history.add_favorite(saved)
        history.clear()
        assert history.favorites() == [saved]
        assert history.remove_favorite(saved.id) is True
        assert history.favorites() == []

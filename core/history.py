#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
In-process translation history and favorites.

Session scoped, nothing is written to disk. Oldest entries are dropped once
the limit is reached.
"""

from collections import OrderedDict
from typing import Dict, List, Optional

from config.constants import HISTORY_LIMIT
from config.logging_config import get_logger
from .models import HistoryEntry

logger = get_logger(__name__)


class TranslationHistory:
    """Bounded store of completed translations"""

    def __init__(self, limit: int = HISTORY_LIMIT):
        self.limit = limit
        self._entries: "OrderedDict[str, HistoryEntry]" = OrderedDict()
        self._favorites: Dict[str, HistoryEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, entry: HistoryEntry) -> HistoryEntry:
        self._entries[entry.id] = entry
        while len(self._entries) > self.limit:
            dropped, _ = self._entries.popitem(last=False)
            logger.debug(f" History full, dropped {dropped}")
        return entry

    def entries(self) -> List[HistoryEntry]:
        """Newest first"""
        return list(reversed(self._entries.values()))

    def get(self, entry_id: str) -> Optional[HistoryEntry]:
        return self._entries.get(entry_id)

    def search(self, term: str) -> List[HistoryEntry]:
        """Case-insensitive match on source or translated text"""
        needle = term.lower()
        return [
            entry for entry in self.entries()
            if needle in entry.source_text.lower() or needle in entry.translated_text.lower()
        ]

    def delete(self, entry_id: str) -> bool:
        return self._entries.pop(entry_id, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def add_favorite(self, entry: HistoryEntry) -> None:
        self._favorites[entry.id] = entry

    def remove_favorite(self, entry_id: str) -> bool:
        return self._favorites.pop(entry_id, None) is not None

    def favorites(self) -> List[HistoryEntry]:
        return list(reversed(list(self._favorites.values())))

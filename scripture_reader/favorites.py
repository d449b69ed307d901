"""Favorite verses, kept as a duplicate-free list of formatted passages."""

import logging
from enum import Enum
from typing import List

from .config import FAVORITES_KEY
from .errors import PersistenceReadError, PersistenceWriteError
from .notices import Notice, NoticeLevel, Notifier, log_notice
from .store import DurableStore

logger = logging.getLogger(__name__)


class FavoriteOutcome(Enum):
    ADDED = "added"
    ALREADY_FAVORITE = "already_favorite"
    FAILED = "failed"


class FavoritesLedger:
    """Append-only set of favorite passages in insertion order.

    Each addition rewrites the whole list under the ``favorites`` key.
    There is no selective removal; wiping the store is the only way to
    empty the ledger.
    """

    def __init__(self, store: DurableStore, notify: Notifier = log_notice):
        self.store = store
        self.notify = notify

    def list(self) -> List[str]:
        """Stored favorites, oldest first. Unreadable data counts as empty."""
        try:
            return self._read_entries()
        except PersistenceReadError as e:
            logger.warning("Ignoring unreadable favorites: %s", e)
            return []

    def add(self, entry: str) -> FavoriteOutcome:
        # An unreadable record must not be replaced by a one-entry list
        try:
            entries = self._read_entries()
        except PersistenceReadError as e:
            logger.warning("Not saving favorite, existing favorites unreadable: %s", e)
            self.notify(Notice(NoticeLevel.ERROR, "Erro", "Não foi possível salvar o favorito."))
            return FavoriteOutcome.FAILED

        if entry in entries:
            self.notify(Notice(NoticeLevel.INFO, "Favorito", "Este versículo já está nos favoritos."))
            return FavoriteOutcome.ALREADY_FAVORITE

        try:
            self.store.set_json(FAVORITES_KEY, entries + [entry])
        except PersistenceWriteError as e:
            logger.warning("Failed to save favorite: %s", e)
            self.notify(Notice(NoticeLevel.ERROR, "Erro", "Não foi possível salvar o favorito."))
            return FavoriteOutcome.FAILED

        self.notify(Notice(NoticeLevel.INFO, "Favorito", "Versículo adicionado aos favoritos!"))
        return FavoriteOutcome.ADDED

    def _read_entries(self) -> List[str]:
        data = self.store.get_json(FAVORITES_KEY)
        if data is None:
            return []
        if not isinstance(data, list):
            raise PersistenceReadError(f"Favorites record is a {type(data).__name__}, not a list")

        entries = []
        seen = set()
        for item in data:
            if isinstance(item, str) and item not in seen:
                seen.add(item)
                entries.append(item)
        return entries

    def __contains__(self, entry: str) -> bool:
        return entry in self.list()

    def __len__(self) -> int:
        return len(self.list())

"""Application shell: wires the store, preferences, favorites and reading session."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from .config import APP_NAME, APP_VERSION, DATA_DIR
from .errors import PersistenceWriteError
from .favorites import FavoritesLedger
from .fetcher import BibleApiFetcher, ContentFetcher
from .notices import Notice, NoticeLevel, Notifier, log_notice
from .preferences import DisplaySettings, PreferenceManager
from .session import ReadingSession
from .store import DurableStore, FileStore

logger = logging.getLogger(__name__)


class ReaderApp:
    """Owns one instance of each component, all sharing a single store."""

    def __init__(
        self,
        store: DurableStore,
        fetcher: Optional[ContentFetcher] = None,
        notify: Notifier = log_notice,
    ):
        self.store = store
        self.fetcher = fetcher or BibleApiFetcher()
        self.notify = notify
        self.preferences = PreferenceManager(store, notify)
        self.favorites = FavoritesLedger(store, notify)
        self.session = ReadingSession(store, self.fetcher, self.favorites, notify)

    @classmethod
    def from_data_dir(cls, data_dir: Optional[Path] = None, **kwargs) -> "ReaderApp":
        # The store creates the directory on its first write
        return cls(FileStore(Path(data_dir) if data_dir else DATA_DIR), **kwargs)

    def close(self) -> None:
        self.fetcher.close()

    async def start(self) -> DisplaySettings:
        """Load preferences first, then resume the last chapter read."""
        self.preferences.load()
        self.preferences.load_font_size()
        await self.session.restore()
        return self.preferences.display

    def wipe_all_data(self) -> bool:
        """Erase every stored key and return all components to their defaults.

        This cannot be undone; callers must confirm with the user first.
        The process keeps running with a fresh, empty state.
        """
        try:
            self.store.clear()
        except PersistenceWriteError as e:
            logger.error("Failed to wipe data: %s", e)
            self.notify(Notice(
                NoticeLevel.ERROR,
                "Erro",
                "Ocorreu um erro ao tentar limpar os dados. Tente novamente.",
            ))
            return False

        self.preferences.reset()
        self.session.reset()
        self.notify(Notice(
            NoticeLevel.INFO,
            "Dados Removidos",
            "Todos os dados foram removidos com sucesso.",
        ))
        return True

    def export_data(self, path: Path) -> Path:
        """Write a JSON backup of preferences, reading position and favorites."""
        path = Path(path)
        last_read = self.session.last_read()
        data = {
            "app": APP_NAME,
            "version": APP_VERSION,
            "exported_at": datetime.now().isoformat(),
            "preferences": self.preferences.preferences.to_dict(),
            "fontSize": self.preferences.font_size.value,
            "lastRead": last_read.to_dict() if last_read else None,
            "favorites": self.favorites.list(),
        }
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        logger.info("Exported data to %s", path)
        return path

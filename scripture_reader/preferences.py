"""Display preferences: dark mode, active tab and font size."""

import logging
from dataclasses import dataclass, replace
from typing import Callable, List, Union

from .config import FONT_SIZE_KEY, PREFERENCES_KEY
from .errors import PersistenceReadError, PersistenceWriteError
from .models import FontSize, Preferences, Tab
from .notices import Notice, NoticeLevel, Notifier, log_notice
from .store import DurableStore
from .theme import Palette, palette_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DisplaySettings:
    """Snapshot of the preferences handed to everything that renders."""
    dark_mode: bool
    last_tab: Tab
    font_size: FontSize
    theme: Palette

    @property
    def point_size(self) -> int:
        return self.font_size.points


class PreferenceManager:
    """Owns the display preferences and is their only writer.

    ``preferences`` and ``fontSize`` are separate durable keys and are
    written independently. Every change produces exactly one write; a
    failed write leaves the in-memory value in place and raises a notice.
    """

    def __init__(self, store: DurableStore, notify: Notifier = log_notice):
        self.store = store
        self.notify = notify
        self._preferences = Preferences()
        self._font_size = FontSize.MEDIUM
        self._loaded = False
        self._loaded_callbacks: List[Callable[[DisplaySettings], None]] = []

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def preferences(self) -> Preferences:
        return replace(self._preferences)

    @property
    def font_size(self) -> FontSize:
        return self._font_size

    @property
    def display(self) -> DisplaySettings:
        return DisplaySettings(
            dark_mode=self._preferences.dark_mode,
            last_tab=self._preferences.last_tab,
            font_size=self._font_size,
            theme=palette_for(self._preferences.dark_mode),
        )

    def on_loaded(self, callback: Callable[[DisplaySettings], None]) -> None:
        """Run ``callback`` once preferences are loaded (immediately if they already are)."""
        if self._loaded:
            callback(self.display)
        else:
            self._loaded_callbacks.append(callback)

    def load(self) -> Preferences:
        """Read the stored preferences, falling back to defaults."""
        try:
            data = self.store.get_json(PREFERENCES_KEY)
        except PersistenceReadError as e:
            logger.warning("Ignoring unreadable preferences: %s", e)
            data = None

        if isinstance(data, dict):
            self._preferences = Preferences.from_dict(data)
        else:
            if data is not None:
                logger.warning("Ignoring preferences record of type %s", type(data).__name__)
            self._preferences = Preferences()

        if not self._loaded:
            self._loaded = True
            callbacks, self._loaded_callbacks = self._loaded_callbacks, []
            for callback in callbacks:
                callback(self.display)
        return self.preferences

    def save(self, dark_mode: bool, last_tab: Union[Tab, str]) -> bool:
        """Store dark mode and tab. Returns False if the write failed."""
        self._preferences = Preferences(dark_mode=bool(dark_mode), last_tab=Tab(last_tab))
        try:
            self.store.set_json(PREFERENCES_KEY, self._preferences.to_dict())
        except PersistenceWriteError as e:
            logger.warning("Failed to save preferences: %s", e)
            self.notify(Notice(NoticeLevel.ERROR, "Erro", "Erro ao salvar preferências."))
            return False
        return True

    def set_dark_mode(self, enabled: bool) -> bool:
        return self.save(enabled, self._preferences.last_tab)

    def set_tab(self, tab: Union[Tab, str]) -> bool:
        return self.save(self._preferences.dark_mode, tab)

    def load_font_size(self) -> FontSize:
        try:
            raw = self.store.get(FONT_SIZE_KEY)
        except PersistenceReadError as e:
            logger.warning("Ignoring unreadable font size: %s", e)
            raw = None
        self._font_size = FontSize.resolve(raw)
        return self._font_size

    def set_font_size(self, size: Union[FontSize, str]) -> bool:
        """Change the font size now and try to persist it.

        The in-memory size changes even when the write fails, so the
        stored value may lag behind until the next successful write.
        """
        self._font_size = FontSize.resolve(size)
        try:
            self.store.set(FONT_SIZE_KEY, self._font_size.value)
        except PersistenceWriteError as e:
            logger.warning("Failed to save font size: %s", e)
            self.notify(Notice(NoticeLevel.ERROR, "Erro", "Erro ao salvar o tamanho da fonte."))
            return False
        return True

    def reset(self) -> None:
        """Return to default preferences without touching the store."""
        self._preferences = Preferences()
        self._font_size = FontSize.MEDIUM

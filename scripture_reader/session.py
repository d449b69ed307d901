"""
Reading session: the selected book and chapter, its verses, and the
last-read pointer that lets the reader resume after a restart.
"""

import logging
from enum import Enum
from typing import Callable, List, Optional, Union

from .config import LAST_READ_KEY
from .errors import (
    ContentFetchError,
    NoBookSelectedError,
    PersistenceReadError,
    PersistenceWriteError,
)
from .favorites import FavoriteOutcome, FavoritesLedger
from .fetcher import ContentFetcher
from .models import ReadingPointer, Verse
from .notices import Notice, NoticeLevel, Notifier, log_notice
from .store import DurableStore

logger = logging.getLogger(__name__)

ChapterListener = Callable[[str, int], None]


class SessionState(Enum):
    IDLE = "idle"                    # no book
    BOOK_SELECTED = "book_selected"  # book set, no chapter
    LOADING = "loading"              # fetch in flight
    LOADED = "loaded"
    FAILED = "failed"


class ReadingSession:
    """State machine over book/chapter selection and chapter fetching.

    Only the most recent selection may change the visible verses. Each
    selection bumps a generation counter; when a fetch returns, its
    result is applied only if the generation and pointer it was issued
    for are still current, otherwise it is dropped.

    The ``lastRead`` pointer is written only after a successful,
    non-empty fetch, so failures never move the resume position.
    """

    def __init__(
        self,
        store: DurableStore,
        fetcher: ContentFetcher,
        favorites: FavoritesLedger,
        notify: Notifier = log_notice,
    ):
        self.store = store
        self.fetcher = fetcher
        self.favorites = favorites
        self.notify = notify
        self._state = SessionState.IDLE
        self._book: Optional[str] = None
        self._chapter: Optional[int] = None
        self._verses: List[Verse] = []
        self._generation = 0
        self._chapter_listeners: List[ChapterListener] = []

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def book(self) -> Optional[str]:
        return self._book

    @property
    def chapter(self) -> Optional[int]:
        return self._chapter

    @property
    def pointer(self) -> ReadingPointer:
        return ReadingPointer(self._book, self._chapter)

    @property
    def verses(self) -> List[Verse]:
        return list(self._verses)

    def on_chapter_change(self, callback: ChapterListener) -> None:
        """Call ``callback(book, chapter)`` whenever a chapter is selected."""
        self._chapter_listeners.append(callback)

    def last_read(self) -> Optional[ReadingPointer]:
        """The persisted resume position, or None if absent or unreadable."""
        try:
            data = self.store.get_json(LAST_READ_KEY)
        except PersistenceReadError as e:
            logger.warning("Ignoring unreadable last-read pointer: %s", e)
            return None
        if data is None:
            return None
        if not isinstance(data, dict):
            logger.warning("Ignoring last-read record of type %s", type(data).__name__)
            return None
        try:
            return ReadingPointer.from_dict(data)
        except ValueError as e:
            logger.warning("Ignoring last-read pointer: %s", e)
            return None

    def select_book(self, book: str) -> None:
        self._generation += 1
        self._book = book
        self._chapter = None
        self._verses = []
        self._state = SessionState.BOOK_SELECTED

    async def select_chapter(self, chapter: Union[int, str]) -> SessionState:
        """Select a chapter of the current book and load its verses.

        Returns the session state once the fetch has been handled. The
        chapter is not checked against the book's chapter count; an
        out-of-range chapter simply ends up ``FAILED``.
        """
        if self._book is None:
            raise NoBookSelectedError("Select a book before choosing a chapter")

        chapter = int(chapter)
        self._generation += 1
        generation = self._generation
        book = self._book

        self._chapter = chapter
        self._verses = []
        self._state = SessionState.LOADING
        for listener in list(self._chapter_listeners):
            listener(book, chapter)

        try:
            verses = await self.fetcher.fetch(book, chapter)
        except ContentFetchError as e:
            if not self._is_current(generation, book, chapter):
                logger.debug("Discarding failed fetch for superseded %s %s", book, chapter)
                return self._state
            logger.warning("Failed to load %s %s: %s", book, chapter, e)
            self._state = SessionState.FAILED
            self.notify(Notice(NoticeLevel.ERROR, "Erro", "Falha ao carregar os versículos."))
            return self._state

        if not self._is_current(generation, book, chapter):
            logger.debug("Discarding superseded fetch for %s %s", book, chapter)
            return self._state

        if not verses:
            self._state = SessionState.FAILED
            self.notify(Notice(
                NoticeLevel.ERROR,
                "Aviso",
                "Nenhum versículo encontrado para este capítulo.",
            ))
            return self._state

        self._verses = list(verses)
        self._state = SessionState.LOADED
        self._save_pointer(ReadingPointer(book, chapter))
        return self._state

    async def restore(self) -> Optional[ReadingPointer]:
        """Reopen the persisted position, if any, and start loading it."""
        pointer = self.last_read()
        if pointer is None:
            return None
        logger.info("Resuming at %s %s", pointer.book, pointer.chapter)
        self.select_book(pointer.book)
        await self.select_chapter(pointer.chapter)
        return pointer

    def favorite_verse(self, verse_number: int) -> FavoriteOutcome:
        """Add a verse of the loaded chapter to the favorites."""
        for verse in self._verses:
            if verse.verse == verse_number:
                return self.favorites.add(verse.favorite_entry)
        raise ValueError(f"Verse {verse_number} is not loaded")

    def reset(self) -> None:
        """Drop the selection and ignore any fetch still in flight."""
        self._generation += 1
        self._book = None
        self._chapter = None
        self._verses = []
        self._state = SessionState.IDLE

    def _is_current(self, generation: int, book: str, chapter: int) -> bool:
        return (
            generation == self._generation
            and self._book == book
            and self._chapter == chapter
        )

    def _save_pointer(self, pointer: ReadingPointer) -> bool:
        try:
            self.store.set_json(LAST_READ_KEY, pointer.to_dict())
        except PersistenceWriteError as e:
            logger.warning("Failed to save last-read pointer: %s", e)
            self.notify(Notice(NoticeLevel.ERROR, "Erro", "Erro ao salvar a última leitura."))
            return False
        return True

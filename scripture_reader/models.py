"""Data models for reading state, preferences and verses."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .config import DEFAULT_FONT_SIZE, DEFAULT_TAB, FONT_SIZES


class Tab(Enum):
    BIBLE = "bible"
    PLANNER = "planner"
    FAVORITES = "favorites"
    SETTINGS = "settings"
    LOGIN = "login"

    @classmethod
    def resolve(cls, value) -> "Tab":
        """Return the matching tab, or the default tab for unknown values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls(DEFAULT_TAB)


class FontSize(Enum):
    SMALL = "pequena"
    MEDIUM = "média"
    LARGE = "grande"

    @property
    def points(self) -> int:
        return FONT_SIZES[self.value]

    @classmethod
    def resolve(cls, value) -> "FontSize":
        """Return the matching font size, falling back to média."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls(DEFAULT_FONT_SIZE)


@dataclass
class Preferences:
    """Display preferences stored under the ``preferences`` key."""
    dark_mode: bool = False
    last_tab: Tab = Tab.BIBLE

    def to_dict(self) -> dict:
        return {
            "darkMode": self.dark_mode,
            "lastTab": self.last_tab.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Preferences":
        return cls(
            dark_mode=bool(data.get("darkMode")),
            last_tab=Tab.resolve(data.get("lastTab") or DEFAULT_TAB),
        )


@dataclass(frozen=True)
class ReadingPointer:
    """The book and chapter the reader is positioned at."""
    book: Optional[str] = None
    chapter: Optional[int] = None

    @property
    def is_complete(self) -> bool:
        return self.book is not None and self.chapter is not None

    def to_dict(self) -> dict:
        return {"book": self.book, "chapter": self.chapter}

    @classmethod
    def from_dict(cls, data: dict) -> "ReadingPointer":
        book = data.get("book")
        chapter = data.get("chapter")
        if not isinstance(book, str) or not book:
            raise ValueError(f"Invalid book in pointer: {book!r}")
        # Older records stored the chapter as the picker's label text
        if isinstance(chapter, str) and chapter.strip().isdigit():
            chapter = int(chapter)
        if isinstance(chapter, bool) or not isinstance(chapter, int):
            raise ValueError(f"Invalid chapter in pointer: {chapter!r}")
        return cls(book=book, chapter=chapter)


@dataclass(frozen=True)
class Verse:
    """A single verse as returned by the content provider."""
    book_name: str
    chapter: int
    verse: int
    text: str

    @property
    def reference(self) -> str:
        return f"{self.book_name} {self.chapter}:{self.verse}"

    @property
    def favorite_entry(self) -> str:
        """Format used to store this verse in the favorites ledger."""
        return format_favorite(self.book_name, self.chapter, self.verse, self.text)

    @classmethod
    def from_api(cls, data: dict) -> "Verse":
        return cls(
            book_name=str(data["book_name"]),
            chapter=int(data["chapter"]),
            verse=int(data["verse"]),
            text=str(data["text"]).strip(),
        )


def format_favorite(book: str, chapter: int, verse: int, text: str) -> str:
    """Build a favorite entry: ``"<book> <chapter>:<verse> - <text>"``."""
    return f"{book} {chapter}:{verse} - {text}"

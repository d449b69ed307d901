from __future__ import annotations

import asyncio

import pytest

from scripture_reader.errors import NetworkError, PersistenceWriteError
from scripture_reader.favorites import FavoritesLedger
from scripture_reader.models import Verse
from scripture_reader.notices import Notice, NoticeLevel
from scripture_reader.session import ReadingSession
from scripture_reader.store import MemoryStore


PSALM_23 = [
    "O Senhor é o meu pastor, nada me faltará.",
    "Deitar-me faz em verdes pastos, guia-me mansamente a águas tranquilas.",
    "Refrigera a minha alma; guia-me pelas veredas da justiça, por amor do seu nome.",
    "Ainda que eu andasse pelo vale da sombra da morte, não temeria mal algum.",
    "Preparas uma mesa perante mim na presença dos meus inimigos.",
    "Certamente que a bondade e a misericórdia me seguirão todos os dias da minha vida.",
]


def make_verses(book: str, chapter: int, count: int = 3) -> list[Verse]:
    return [Verse(book, chapter, n, f"{book} {chapter} versículo {n}") for n in range(1, count + 1)]


class NoticeCollector:
    def __init__(self):
        self.notices: list[Notice] = []

    def __call__(self, notice: Notice) -> None:
        self.notices.append(notice)

    def errors(self) -> list[Notice]:
        return [n for n in self.notices if n.level is NoticeLevel.ERROR]

    def messages(self) -> list[str]:
        return [n.message for n in self.notices]


class FakeFetcher:
    """Returns canned chapters; optionally waits on a gate per (book, chapter)."""

    def __init__(self, chapters: dict | None = None):
        self.chapters = dict(chapters or {})
        self.failures: set[tuple[str, int]] = set()
        self.gates: dict[tuple[str, int], asyncio.Event] = {}
        self.calls: list[tuple[str, int]] = []
        self.closed = False

    def gate(self, book: str, chapter: int) -> asyncio.Event:
        event = asyncio.Event()
        self.gates[(book, chapter)] = event
        return event

    async def fetch(self, book: str, chapter: int) -> list[Verse]:
        self.calls.append((book, chapter))
        gate = self.gates.get((book, chapter))
        if gate is not None:
            await gate.wait()
        if (book, chapter) in self.failures:
            raise NetworkError(f"offline: {book} {chapter}")
        return list(self.chapters.get((book, chapter), []))

    def close(self) -> None:
        self.closed = True


class FailingWriteStore(MemoryStore):
    """Memory store whose writes can be switched off."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.fail_writes = True
        self.write_attempts: list[str] = []

    def set(self, key, value):
        self.write_attempts.append(key)
        if self.fail_writes:
            raise PersistenceWriteError(f"disk full: {key}")
        super().set(key, value)

    def clear(self):
        if self.fail_writes:
            raise PersistenceWriteError("disk full")
        super().clear()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def notices() -> NoticeCollector:
    return NoticeCollector()


@pytest.fixture
def fetcher() -> FakeFetcher:
    psalm = [Verse("Salmos", 23, n, text) for n, text in enumerate(PSALM_23, 1)]
    return FakeFetcher({
        ("Salmos", 23): psalm,
        ("Salmos", 1): make_verses("Salmos", 1, 6),
        ("Salmos", 2): make_verses("Salmos", 2, 12),
        ("João", 3): make_verses("João", 3, 36),
    })


@pytest.fixture
def session(store, fetcher, notices) -> ReadingSession:
    ledger = FavoritesLedger(store, notices)
    return ReadingSession(store, fetcher, ledger, notices)

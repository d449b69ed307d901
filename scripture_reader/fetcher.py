"""Retrieve chapter text from the remote content provider."""

import asyncio
import logging
from typing import List, Optional
from urllib.parse import quote

import requests

from .config import BIBLE_API_URL, REQUEST_TIMEOUT, TRANSLATION, USER_AGENT
from .errors import NetworkError, ParseError
from .models import Verse

logger = logging.getLogger(__name__)


class ContentFetcher:
    """Capability the reading session uses to load a chapter.

    ``fetch`` raises ``NetworkError`` or ``ParseError`` and never retries;
    it must be safe to call again after a failure.
    """

    async def fetch(self, book: str, chapter: int) -> List[Verse]:
        raise NotImplementedError

    def close(self) -> None:
        """Release any connections held by the fetcher."""


class BibleApiFetcher(ContentFetcher):
    """Fetches chapters from bible-api.com (or a compatible service)."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        translation: str = TRANSLATION,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or BIBLE_API_URL).rstrip("/")
        self.translation = translation
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})

    def chapter_url(self, book: str, chapter: int) -> str:
        return f"{self.base_url}/{quote(f'{book} {chapter}', safe='')}"

    async def fetch(self, book: str, chapter: int) -> List[Verse]:
        # requests blocks, so keep it off the event loop
        return await asyncio.to_thread(self.fetch_sync, book, chapter)

    def fetch_sync(self, book: str, chapter: int) -> List[Verse]:
        url = self.chapter_url(book, chapter)
        logger.debug("Fetching %s", url)
        try:
            response = self.session.get(
                url,
                params={"translation": self.translation},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise NetworkError(f"Failed to fetch {book} {chapter}: {e}") from e
        return self._parse(response, book, chapter)

    def _parse(self, response: requests.Response, book: str, chapter: int) -> List[Verse]:
        try:
            data = response.json()
        except ValueError as e:
            raise ParseError(f"Response for {book} {chapter} is not JSON: {e}") from e

        if not isinstance(data, dict):
            raise ParseError(f"Unexpected response for {book} {chapter}: {type(data).__name__}")

        verses = data.get("verses")
        if verses is None:
            return []
        if not isinstance(verses, list):
            raise ParseError(f"'verses' for {book} {chapter} is not a list")

        try:
            return [Verse.from_api(v) for v in verses]
        except (KeyError, TypeError, ValueError) as e:
            raise ParseError(f"Malformed verse in {book} {chapter}: {e}") from e

    def close(self) -> None:
        self.session.close()

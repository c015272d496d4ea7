"""
Content Providers - where the schedule page text comes from.

The provider pattern lets us swap sources (a saved file for testing,
the web-read service in production) without touching the pipeline.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import requests

from .config import SourceConfig
from .models import ContentMetadata, WebReadResult

logger = logging.getLogger(__name__)


class ContentFetchError(RuntimeError):
    """The schedule page could not be fetched."""


class ContentProvider(ABC):
    """
    Abstract interface for schedule page content.

    The pipeline doesn't know or care where the text actually lives.
    """

    @abstractmethod
    def fetch(self) -> WebReadResult:
        """
        Fetch the schedule page.

        Returns:
            WebReadResult with page text and metadata

        Raises:
            ContentFetchError: Source unavailable
        """
        pass


class InMemoryContentProvider(ContentProvider):
    """
    In-memory provider for programmatic test setup.

    Useful for unit tests where you want to control the exact text.
    """

    def __init__(self, content: str = "", title: Optional[str] = None):
        self._content = content
        self._title = title

    def set_content(self, content: str):
        """Replace the page text."""
        self._content = content

    def fetch(self) -> WebReadResult:
        return WebReadResult(
            content=self._content,
            metadata=ContentMetadata(title=self._title, word_count=len(self._content.split())),
        )


class FileContentProvider(ContentProvider):
    """Reads a saved copy of the schedule page (markdown or plain text)."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def fetch(self) -> WebReadResult:
        if not self._path.exists():
            raise FileNotFoundError(f"Schedule file not found: {self._path}")

        try:
            content = self._path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ContentFetchError(f"Schedule file is not valid UTF-8: {self._path}: {e}") from e
        except OSError as e:
            raise ContentFetchError(f"Could not read schedule file {self._path}: {e}") from e
        logger.info(f"Read {len(content)} chars from {self._path}")
        return WebReadResult(
            content=content,
            metadata=ContentMetadata(title=self._path.stem, word_count=len(content.split())),
        )


class WebReadContentProvider(ContentProvider):
    """
    Fetches the schedule through a web-read service.

    The service takes {"url", "max_tokens"} and answers with the page as
    markdown-ish text: {"content": "...", "metadata": {...}}.
    """

    def __init__(
        self,
        endpoint: str,
        page_url: str,
        max_tokens: int = 4000,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.endpoint = endpoint
        self.page_url = page_url
        self.max_tokens = max_tokens
        self.timeout = timeout
        self._session = session

    @classmethod
    def from_config(cls, source: SourceConfig) -> "WebReadContentProvider":
        return cls(
            endpoint=source.web_read_endpoint,
            page_url=source.page_url,
            max_tokens=source.max_tokens,
            timeout=source.timeout_seconds,
        )

    def fetch(self) -> WebReadResult:
        body = {"url": self.page_url, "max_tokens": self.max_tokens}
        post = self._session.post if self._session is not None else requests.post

        logger.info(f"Fetching {self.page_url} via {self.endpoint}")
        try:
            response = post(self.endpoint, json=body, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise ContentFetchError(f"Web read failed for {self.page_url}: {e}") from e
        except ValueError as e:
            raise ContentFetchError(f"Web read returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ContentFetchError("Web read returned an unexpected payload")

        return _parse_web_read(data)


def _optional_str(value) -> Optional[str]:
    return value if isinstance(value, str) else None


def _parse_web_read(data: dict) -> WebReadResult:
    """
    Map the web-read JSON payload onto WebReadResult.

    Raises:
        ContentFetchError: content is not a string or metadata is not an object
    """
    content = data.get("content")
    if content is None:
        content = ""
    if not isinstance(content, str):
        raise ContentFetchError(
            f"Web read content must be a string, got {type(content).__name__}"
        )

    meta = data.get("metadata")
    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        raise ContentFetchError(
            f"Web read metadata must be an object, got {type(meta).__name__}"
        )

    try:
        word_count = int(meta.get("word_count") or 0)
    except (TypeError, ValueError):
        word_count = 0

    return WebReadResult(
        content=content,
        metadata=ContentMetadata(
            title=_optional_str(meta.get("title")),
            author=_optional_str(meta.get("author")),
            date=_optional_str(meta.get("date")),
            word_count=word_count,
        ),
    )

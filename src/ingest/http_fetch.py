"""HTTP fetch collaborator for source adapters.

This module wraps httpx for JSON downloads and line streaming.
Transport, status, and decode failures surface as SourceFetchError.
"""

from __future__ import annotations

import codecs
import io
from contextlib import contextmanager
from typing import Any, Iterator, Mapping

import httpx

from core.constants import DEFAULT_HTTP_TIMEOUT_SECONDS
from core.errors import SourceFetchError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


class HttpFetcher:
    """Fetches source payloads over HTTP.

    The fetcher owns its httpx client unless one is injected, in which
    case the caller stays responsible for closing it.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def __enter__(self) -> "HttpFetcher":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying client when owned by this fetcher."""
        if self._owns_client:
            self._client.close()

    def fetch_json(self, url: str, params: Mapping[str, str] | None = None) -> Any:
        """Download a URL and decode its body as JSON.

        Args:
            url: Absolute URL to fetch.
            params: Optional query parameters.

        Returns:
            Decoded JSON payload.

        Raises:
            SourceFetchError: If the request fails or the body is not JSON.
        """
        _LOGGER.info("source_fetch_started", url=url)
        try:
            response = self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPError as error:
            raise SourceFetchError(
                f"Failed to fetch {url}: {error}. Check the source location and retry."
            ) from error
        try:
            return response.json()
        except ValueError as error:
            raise SourceFetchError(
                f"Failed to decode JSON from {url}: {error}. "
                "Confirm the source returns a JSON document."
            ) from error


    @contextmanager
    def stream_lines(self, url: str) -> Iterator[Iterator[str]]:
        """Stream a URL body as strictly decoded UTF-8 text lines.

        Lines keep their terminators and are split only on ``\\n``,
        ``\\r\\n`` and ``\\r``, so quoted CSV cells spanning lines survive.
        A leading byte order mark is dropped.

        Args:
            url: Absolute URL to stream.

        Yields:
            Iterator over body lines including line terminators.

        Raises:
            SourceFetchError: If the request fails, or the body is not
                valid UTF-8, before or during streaming.
        """
        _LOGGER.info("source_stream_started", url=url)
        try:
            with self._client.stream("GET", url) as response:
                response.raise_for_status()
                yield _decode_lines(url, response.iter_bytes())
        except httpx.HTTPError as error:
            raise SourceFetchError(
                f"Failed to stream {url}: {error}. Check the source location and retry."
            ) from error


def _decode_lines(url: str, chunks: Iterator[bytes]) -> Iterator[str]:
    """Decode byte chunks into terminated lines.

    Raises:
        SourceFetchError: On transport interruption or invalid UTF-8.
    """
    decoder = codecs.getincrementaldecoder("utf-8-sig")(errors="strict")
    pending = ""
    try:
        for chunk in chunks:
            pending += decoder.decode(chunk)
            lines = io.StringIO(pending, newline="").readlines()
            # a trailing "\r" may still be followed by "\n" in the next chunk
            pending = lines.pop() if lines and not lines[-1].endswith("\n") else ""
            yield from lines
        pending += decoder.decode(b"", final=True)
    except httpx.HTTPError as error:
        raise SourceFetchError(
            f"Stream from {url} was interrupted: {error}. Retry the import."
        ) from error
    except UnicodeDecodeError as error:
        raise SourceFetchError(
            f"Failed to decode {url} as UTF-8: {error}. "
            "Confirm the source is a UTF-8 text export."
        ) from error
    yield from io.StringIO(pending, newline="").readlines()

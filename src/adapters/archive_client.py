"""archive.is capture client.

Protocol:
1. GET the landing page and scrape the hidden `submitid` token.
2. POST `url`, `anyway=1` and `submitid` to `/submit/`.
3. Read the archive URL from `Refresh`, then `Location`, then the body
   (`og:url` meta tag). A body starting with `<h1>Server Error</h1>` is a
   server-side failure for that URL.

A token stays valid for several minutes and may be reused by many concurrent
submissions. The client never retries on its own; see
`core.services.capture_pipeline` for batching and retry rounds.
"""

from __future__ import annotations

import logging
from types import TracebackType

import httpx

from adapters.archive_parsing import (
    extract_og_url,
    extract_submit_id,
    is_server_error,
    parse_capture_date,
    parse_refresh,
)
from adapters.http_client import build_async_client, find_meta_property
from core.config import AppSettings
from core.domain.errors import MissingToken, MissingUrl, ServerError, TransportError
from core.domain.models import Archived
from core.interfaces.capturer import Capturer

logger = logging.getLogger(__name__)


class ArchiveClient(Capturer):
    """Async client for the archive.is capture service.

    Use it as an async context manager, or call `aclose()` when done. An
    existing `httpx.AsyncClient` may be passed in; it is then left open.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._owns_client = http_client is None
        self._client = http_client or build_async_client(self._settings)

    async def __aenter__(self) -> ArchiveClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        return {"User-Agent": self._settings.user_agent}

    async def get_unique_token(self) -> str:
        """Fetch the landing page and return its `submitid` token."""

        url = self._settings.service_root
        try:
            response = await self._client.get(url, headers=self._headers())
        except httpx.HTTPError as exc:
            logger.warning("archiveis: token request to %s failed: %s", url, exc)
            raise TransportError(str(exc)) from exc

        # httpx decodes with errors="replace"; undecodable bytes never match the marker.
        token = extract_submit_id(response.text)
        if not token:
            logger.warning(
                "archiveis: no submitid on %s (HTTP %d)", url, response.status_code
            )
            raise MissingToken()

        logger.debug("archiveis: acquired token %s...", token[:8])
        return token

    async def capture_with_token(self, url: str, token: str) -> Archived:
        """Submit `url` for capture with an existing token.

        Raises `ServerError`/`MissingUrl` (retryable) or `TransportError`.
        """

        root = self._settings.service_root
        headers = {
            **self._headers(),
            "Content-Type": "application/x-www-form-urlencoded",
            "Origin": root.rstrip("/"),
            "Referer": root,
        }
        form = {"url": url, "anyway": "1", "submitid": token}

        try:
            response = await self._client.post(
                self._settings.submit_url,
                data=form,
                headers=headers,
                follow_redirects=False,
            )
        except httpx.HTTPError as exc:
            logger.warning("archiveis: capture request for %s failed: %s", url, exc)
            raise TransportError(str(exc), url=url) from exc

        refresh = response.headers.get("refresh")
        if refresh:
            archived_url = parse_refresh(refresh)
            if archived_url:
                return self._archived(url, archived_url, token, response)

        location = response.headers.get("location")
        if response.is_redirect and location:
            archived_url = str(response.url.join(location))
            logger.debug("archiveis: %s redirected to %s", url, archived_url)
            return self._archived(url, archived_url, token, response)

        html = response.text
        if is_server_error(html):
            logger.warning("archiveis: server error while capturing %s", url)
            raise ServerError(url)

        archived_url = extract_og_url(html) or find_meta_property(html=html, prop="og:url")
        if archived_url:
            logger.debug("archiveis: %s archived at %s (og:url)", url, archived_url)
            return Archived(target_url=url, archived_url=archived_url, token=token)

        logger.warning(
            "archiveis: no archive url for %s (HTTP %d)", url, response.status_code
        )
        raise MissingUrl(url)

    async def capture(self, url: str) -> Archived:
        """Fetch a fresh token, then capture `url` with it."""

        try:
            token = await self.get_unique_token()
        except (MissingToken, TransportError) as exc:
            exc.url = url
            raise
        return await self.capture_with_token(url, token)

    @staticmethod
    def _archived(url: str, archived_url: str, token: str, response: httpx.Response) -> Archived:
        time_stamp = parse_capture_date(response.headers.get("date"))
        logger.debug("archiveis: %s archived at %s", url, archived_url)
        return Archived(
            target_url=url,
            archived_url=archived_url,
            time_stamp=time_stamp,
            token=token,
        )

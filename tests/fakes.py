"""Test doubles and HTML fixtures for the capture client."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

from core.domain.errors import ArchiveError, MissingUrl
from core.domain.models import Archived

SERVICE = "https://archive.is"

LANDING_TOKEN = "1yPA39C6QcM84Dzspl+7s28rrAFOnliPMCiJtoP+OlTKmd5kJd21G4ucgTkx0mnZ"
LANDING_HTML = (
    '<html><body><form id="submiturl" action="https://archive.is/submit/" method="GET">'
    '<input type="hidden" name="anyway" value="1"/>'
    f'<input type="hidden" name="submitid" value="{LANDING_TOKEN}"/>'
    '<input id="url" type="text" name="url"/></form></body></html>'
)


class FakeCapturer:
    """Scripted `Capturer`: each url pops its next outcome, default success.

    A scripted outcome is an `Archived`, or an exception instance to raise.
    """

    def __init__(
        self,
        script: dict[str, list[Archived | Exception]] | None = None,
        *,
        delay: float = 0.0,
        token_error: ArchiveError | None = None,
    ) -> None:
        self.script = {url: list(outcomes) for url, outcomes in (script or {}).items()}
        self.delay = delay
        self.token_error = token_error
        self.tokens_issued = 0
        self.calls: list[tuple[str, str]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def get_unique_token(self) -> str:
        if self.token_error is not None:
            raise self.token_error
        self.tokens_issued += 1
        return f"token-{self.tokens_issued}"

    async def capture_with_token(self, url: str, token: str) -> Archived:
        self.calls.append((url, token))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            queue = self.script.get(url)
            outcome = queue.pop(0) if queue else None
        finally:
            self.in_flight -= 1

        if isinstance(outcome, Exception):
            raise outcome
        if outcome is not None:
            return outcome
        return archived_for(url, token=token)

    async def capture(self, url: str) -> Archived:
        token = await self.get_unique_token()
        return await self.capture_with_token(url, token)


def archived_for(url: str, *, token: str = "token-1") -> Archived:
    slug = url.rstrip("/").rsplit("/", 1)[-1] or "root"
    return Archived(
        target_url=url,
        archived_url=f"{SERVICE}/{slug}",
        time_stamp=datetime(2018, 10, 7, 16, 51, 57, tzinfo=timezone.utc),
        token=token,
    )


def failing(url: str, times: int = 1) -> list[ArchiveError]:
    return [MissingUrl(url) for _ in range(times)]

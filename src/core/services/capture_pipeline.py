"""Batch capture orchestration.

This module holds the flow that turns a list of links into archive URLs:
one shared token, a bounded fan-out of submissions, then retry rounds over
the recoverable failures. The CLI delegates all of it here, so the pipeline
stays reusable (library callers, tests) and free of printing.

Retry budget: `max_retries` counts *rounds*. Each round re-captures every
pending URL once, so `max_retries=N` means at most N extra attempts per URL.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Sequence

from core.domain.errors import ArchiveError, UnexpectedFailure, is_retryable
from core.domain.models import Archived, CaptureOutcome
from core.interfaces.capturer import Capturer

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 10


@dataclass
class RetryResult:
    """Outcomes after the retry rounds, plus how many rounds actually ran."""

    outcomes: list[CaptureOutcome]
    rounds_used: int = 0


@dataclass
class BatchReport:
    """Output of a full archive run."""

    archived: list[Archived] = field(default_factory=list)
    failures: list[ArchiveError] = field(default_factory=list)
    rounds_used: int = 0

    @property
    def failed_urls(self) -> list[str]:
        return [error.url for error in self.failures if error.url is not None]

    @property
    def ok(self) -> bool:
        return not self.failures


async def _gather_bounded(
    urls: Sequence[str],
    attempt: Callable[[str], Awaitable[Archived]],
    max_concurrency: int,
) -> list[CaptureOutcome]:
    """Run `attempt(url)` for every url, at most `max_concurrency` at a time.

    A raised `ArchiveError` becomes that url's outcome; any other exception is
    wrapped in `UnexpectedFailure`. Siblings keep running either way.
    """

    sem = asyncio.Semaphore(max(1, max_concurrency))

    async def run_one(url: str) -> CaptureOutcome:
        async with sem:
            try:
                return await attempt(url)
            except ArchiveError as exc:
                if exc.url is None:
                    exc.url = url
                return exc
            except Exception as exc:
                logger.warning("capture: unexpected error for %s: %r", url, exc)
                failure = UnexpectedFailure(url, repr(exc))
                failure.__cause__ = exc
                return failure

    return list(await asyncio.gather(*(run_one(url) for url in urls)))


async def capture_all(
    client: Capturer,
    urls: Sequence[str],
    *,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    token: str | None = None,
) -> list[CaptureOutcome]:
    """Capture every url with one shared token.

    Returns exactly one outcome per input url, in no guaranteed order. Failing
    to acquire the token raises.
    """

    if not urls:
        return []

    if token is None:
        token = await client.get_unique_token()

    async def attempt(url: str) -> Archived:
        return await client.capture_with_token(url, token)

    outcomes = await _gather_bounded(urls, attempt, max_concurrency)
    failed = sum(1 for outcome in outcomes if isinstance(outcome, ArchiveError))
    logger.info("capture: %d/%d links archived", len(outcomes) - failed, len(outcomes))
    return outcomes


async def retry_failures(
    client: Capturer,
    outcomes: Sequence[CaptureOutcome],
    max_retries: int,
    *,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> RetryResult:
    """Re-capture retryable failures for at most `max_retries` rounds.

    Each attempt goes through `client.capture`, which fetches a fresh token.
    Non-retryable failures pass through untouched. The result keeps one entry
    per url.
    """

    archived: list[CaptureOutcome] = []
    terminal: list[CaptureOutcome] = []
    pending: list[ArchiveError] = []
    for outcome in outcomes:
        if isinstance(outcome, Archived):
            archived.append(outcome)
        elif is_retryable(outcome):
            pending.append(outcome)
        else:
            terminal.append(outcome)

    remaining = max(0, max_retries)
    rounds = 0
    while remaining > 0 and pending:
        rounds += 1
        remaining -= 1
        logger.info("retry: round %d for %d links", rounds, len(pending))

        urls = [error.url for error in pending]
        retried = await _gather_bounded(urls, client.capture, max_concurrency)

        pending = []
        for outcome in retried:
            if isinstance(outcome, Archived):
                archived.append(outcome)
            elif is_retryable(outcome):
                pending.append(outcome)
            else:
                terminal.append(outcome)

    if pending:
        logger.warning("retry: %d links still failing after %d rounds", len(pending), rounds)

    return RetryResult(outcomes=[*archived, *terminal, *pending], rounds_used=rounds)


async def archive_links(
    client: Capturer,
    urls: Sequence[str],
    *,
    retries: int = 0,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> BatchReport:
    """Token, batch capture, retry rounds; split into successes and failures."""

    outcomes = await capture_all(client, urls, max_concurrency=max_concurrency)
    result = await retry_failures(
        client,
        outcomes,
        retries,
        max_concurrency=max_concurrency,
    )

    report = BatchReport(rounds_used=result.rounds_used)
    for outcome in result.outcomes:
        if isinstance(outcome, Archived):
            report.archived.append(outcome)
        else:
            report.failures.append(outcome)
    return report

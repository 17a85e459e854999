"""Capture errors.

Hierarchy:
- `ArchiveError`: base of everything the capture client raises.
- `TransportError`: network/HTTP failure, chained from the httpx exception.
- `MissingToken`: the landing page carried no `submitid`.
- `CaptureError`: per-URL failures. A retry round may recover `MissingUrl` and
  `ServerError`; `UnexpectedFailure` wraps anything else and is not retried.
"""

from __future__ import annotations


class ArchiveError(Exception):
    """Base error of the archive client.

    `url` is the offending target URL when one is known.
    """

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class TransportError(ArchiveError):
    def __init__(self, detail: str, *, url: str | None = None) -> None:
        target = f" for {url}" if url else ""
        super().__init__(f"transport error{target}: {detail}", url=url)


class MissingToken(ArchiveError):
    def __init__(self, reason: str = "no submitid on the landing page", *, url: str | None = None) -> None:
        super().__init__(f"missing token: {reason}", url=url)


class CaptureError(ArchiveError):
    """A capture request reached the service but produced no archive."""

    def __init__(self, message: str, *, url: str) -> None:
        super().__init__(message, url=url)


class MissingUrl(CaptureError):
    def __init__(self, url: str) -> None:
        super().__init__(f"no archive url in the response for {url}", url=url)


class ServerError(CaptureError):
    def __init__(self, url: str) -> None:
        super().__init__(f"the service reported a server error for {url}", url=url)


class UnexpectedFailure(CaptureError):
    """Any other exception raised while capturing `url`; not retried."""

    def __init__(self, url: str, detail: str) -> None:
        super().__init__(f"capturing {url} failed: {detail}", url=url)


class InvalidLink(ValueError):
    """An input link is not an absolute http(s) URL."""

    def __init__(self, link: str, *, line: int | None = None) -> None:
        where = f" (line {line})" if line is not None else ""
        super().__init__(f"Link {link!r} is no valid url{where}.")
        self.link = link
        self.line = line


def is_retryable(error: BaseException) -> bool:
    """Only failures that carry a recoverable target URL are retried."""

    return isinstance(error, (MissingUrl, ServerError))

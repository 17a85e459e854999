"""httpx wrapper.

Why a wrapper:
- Standardizes timeouts and headers (User-Agent) for every request to the service.
- Makes testing easy: respx mocks the transport of the client built here.
"""

from __future__ import annotations

import httpx
from bs4 import BeautifulSoup

from core.config import AppSettings


def build_async_client(settings: AppSettings | None = None) -> httpx.AsyncClient:
    """Create the `httpx.AsyncClient` every request to the service goes through.

    The user agent comes from the injected settings, never from global state.
    """

    settings = settings or AppSettings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers={"User-Agent": settings.user_agent},
    )


def find_meta_property(*, html: str, prop: str) -> str | None:
    """Return the `content` of `<meta property=prop>` using an HTML parser.

    Tolerates any attribute order and quoting, unlike the split-based scan.
    """

    if not html:
        return None

    soup = BeautifulSoup(html, "html.parser")
    tag = soup.find("meta", attrs={"property": prop})
    if tag and tag.get("content"):
        return str(tag.get("content")).strip() or None
    return None

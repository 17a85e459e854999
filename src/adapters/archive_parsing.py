"""Response parsing for the archive.is capture protocol.

The service has no API: every signal is scraped from headers or HTML.
- `submitid` token: hidden form field on the landing page.
- Archive URL: `Refresh` header, `Location` header, or the `og:url` meta tag.
- Capture time: `Date` header.
"""

from __future__ import annotations

from datetime import datetime, timezone

SUBMITID_MARKER = 'name="submitid'
OG_URL_MARKER = 'property="og:url"'
SERVER_ERROR_MARKER = "<h1>Server Error</h1>"

# RFC 1123, e.g. "Sun, 07 Oct 2018 16:51:57 GMT".
DATE_FORMAT = "%a, %d %b %Y %H:%M:%S GMT"


def extract_quoted_after(html: str, *, marker: str, attribute: str) -> str | None:
    """Split on the last `marker`, then return the first `attribute="..."` value after it."""

    if marker not in html:
        return None

    tail = html.rsplit(marker, 1)[-1]
    _, sep, rest = tail.partition(f'{attribute}="')
    if not sep:
        return None

    value, closed, _ = rest.partition('"')
    if not closed:
        return None
    return value


def extract_submit_id(html: str) -> str | None:
    return extract_quoted_after(html, marker=SUBMITID_MARKER, attribute="value")


def extract_og_url(html: str) -> str | None:
    value = extract_quoted_after(html, marker=OG_URL_MARKER, attribute="content")
    return value or None


def is_server_error(html: str) -> bool:
    return html.lstrip().startswith(SERVER_ERROR_MARKER)


def parse_refresh(header: str) -> str | None:
    """`0;url=https://archive.is/abc` -> `https://archive.is/abc`.

    Everything after the first `=` is the URL, so `=` inside its query survives.
    """

    _, sep, url = header.partition("=")
    url = url.strip()
    if not sep or not url:
        return None
    return url


def parse_capture_date(header: str | None) -> datetime | None:
    if not header:
        return None
    try:
        parsed = datetime.strptime(header.strip(), DATE_FORMAT)
    except ValueError:
        return None
    return parsed.replace(tzinfo=timezone.utc)

"""Input sources for links to archive.

- CLI arguments: `validate_links`.
- Line-separated text file: `read_links_file`; blank lines and `#` comments are skipped.

Every link must be an absolute http(s) URL, otherwise `InvalidLink` is raised
before anything is submitted.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import httpx

from core.domain.errors import InvalidLink


def validate_link(link: str, *, line: int | None = None) -> str:
    value = link.strip()
    try:
        url = httpx.URL(value)
    except httpx.InvalidURL as exc:
        raise InvalidLink(value, line=line) from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidLink(value, line=line)
    return value


def validate_links(links: Iterable[str]) -> list[str]:
    return [validate_link(link) for link in links if link.strip()]


def read_links_file(path: Path) -> list[str]:
    links: list[str] = []
    raw = path.read_text(encoding="utf-8")
    for number, raw_line in enumerate(raw.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        links.append(validate_link(line, line=number))
    return links

"""Capture client contract.

Why Protocol:
- Defines a structural contract (duck typing) without rigid inheritance.
- Lets the batch/retry pipeline run against the real HTTP client or an
  in-memory fake in tests without coupling the core to httpx.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import Archived


@runtime_checkable
class Capturer(Protocol):
    """Minimal contract of an archive capture client.

    Design rules:
    - Every method is async because it performs I/O (HTTP).
    - Failures are raised as `core.domain.errors.ArchiveError` subclasses.
    """

    async def get_unique_token(self) -> str:
        """Fetch a fresh submission token."""

        ...

    async def capture_with_token(self, url: str, token: str) -> Archived:
        """Submit `url` for capture using an already fetched `token`."""

        ...

    async def capture(self, url: str) -> Archived:
        """Fetch a fresh token, then submit `url`."""

        ...

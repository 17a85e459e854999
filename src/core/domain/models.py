"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  core to I/O libraries.
- Serialization of captures to JSON comes for free (`model_dump`).

Note:
- These models describe *what* a capture is, not *how* it is obtained.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.errors import ArchiveError


class Archived(BaseModel):
    """A successful capture of `target_url` by the archive service.

    Frozen because a single value may be shared between concurrent tasks.
    """

    model_config = ConfigDict(frozen=True)

    target_url: str = Field(
        ...,
        min_length=1,
        description="The URL that was submitted for capture.",
    )
    archived_url: str = Field(
        ...,
        min_length=1,
        description="Permanent archive URL of the snapshot.",
    )
    time_stamp: datetime | None = Field(
        default=None,
        description="Capture time taken from the response `Date` header (UTC).",
    )
    token: str = Field(
        ...,
        description="The submitid token used for the submission.",
    )


class CaptureRecord(BaseModel):
    """A `{target, archive}` pair written by the output sinks."""

    target: str = Field(..., description="The requested URL.")
    archive: str = Field(..., description="The archive URL for `target`.")

    @classmethod
    def from_archived(cls, archived: Archived) -> CaptureRecord:
        return cls(target=archived.target_url, archive=archived.archived_url)


# One entry per submitted URL: either the capture or the error it produced.
CaptureOutcome = Archived | ArchiveError

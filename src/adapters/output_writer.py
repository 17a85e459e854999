"""Export of archived links.

Formats:
- JSON (default): pretty list of `{"target", "archive"}` objects, or of
  archive URLs only.
- Text: one `target<TAB>archive` line per capture, or the archive URL only.

With `append=True` an existing file is extended instead of overwritten.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from core.domain.models import Archived, CaptureRecord


def render_captures(
    archives: Sequence[Archived],
    *,
    text: bool = False,
    archives_only: bool = False,
) -> str:
    records = [CaptureRecord.from_archived(a) for a in archives]

    if text:
        if archives_only:
            lines = [r.archive for r in records]
        else:
            lines = [f"{r.target}\t{r.archive}" for r in records]
        return "".join(line + "\n" for line in lines)

    if archives_only:
        payload: list = [r.archive for r in records]
    else:
        payload = [r.model_dump(mode="json") for r in records]
    return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"


def write_captures(
    *,
    archives: Sequence[Archived],
    output_path: Path,
    text: bool = False,
    archives_only: bool = False,
    append: bool = False,
) -> int:
    """Write `archives` to `output_path` and return how many were written."""

    content = render_captures(archives, text=text, archives_only=archives_only)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    mode = "a" if append and output_path.exists() else "w"
    with output_path.open(mode, encoding="utf-8") as fh:
        fh.write(content)
    return len(archives)

"""``append`` and ``prepend``: insert rendered content into a file.

Both operations read the current file (an absent file counts as empty),
optionally locate an insertion point with ``pattern`` and rewrite the file in
full.  With ``unique`` set, content that is already present is not inserted
again, so running the same operation twice has no further effect.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, NamedTuple

from genforge.engine import filesys
from genforge.engine.content import resolve_content
from genforge.engine.session import Session
from genforge.models import AmendOperation


class _Placement(NamedTuple):
    past_tense: str
    fallback: str


_PLACEMENTS: dict[str, _Placement] = {
    "append": _Placement("Appended", "appending to end instead"),
    "prepend": _Placement("Prepended", "prepending to beginning instead"),
}


def compile_pattern(pattern: str | re.Pattern[str]) -> re.Pattern[str]:
    """Literal strings are escaped; compiled patterns are used as-is."""
    if isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(re.escape(pattern))


def combine(
    kind: str,
    existing: str,
    new: str,
    separator: str,
    match: re.Match[str] | None = None,
) -> str:
    """Splice *new* into *existing*.

    With a *match*, append inserts after the end of the match and prepend
    before its start.  Without one, append adds to the very end and prepend
    to the very beginning.
    """
    if kind == "append":
        if match is None:
            return existing + separator + new
        at = match.end()
        return existing[:at] + separator + new + existing[at:]
    if match is None:
        return new + separator + existing
    at = match.start()
    return existing[:at] + new + separator + existing[at:]


async def amend(operation: AmendOperation, data: dict[str, Any], session: Session) -> Path | None:
    """Append or prepend according to ``operation.type``.

    Returns:
        The written path, or ``None`` when the content was already present.
    """
    logger = session.logger
    placement = _PLACEMENTS[operation.type]
    file_path = session.destination_path(operation.file_path, data)

    await filesys.ensure_dir(file_path.parent, logger)

    file_absent = not await filesys.exists(file_path)
    existing = "" if file_absent else await filesys.read_file(file_path, logger)

    template = await resolve_content(operation, data, session)
    rendered = session.renderer.render(template, data)

    if operation.unique and rendered in existing:
        logger.warn(f"Content already exists in {file_path}, skipping operation.")
        return None

    if not existing:
        if file_absent:
            logger.warn(f"File not found to {operation.type}: {file_path}. Creating.")
        content = rendered
    elif operation.pattern is not None:
        # First match only, searched in the content as it was before insertion.
        match = compile_pattern(operation.pattern).search(existing)
        if match is None:
            logger.warn(f"Pattern not found in {file_path}, {placement.fallback}.")
        content = combine(operation.type, existing, rendered, operation.separator, match)
    else:
        content = combine(operation.type, existing, rendered, operation.separator)

    await filesys.write_file(file_path, content, logger=logger)
    logger.success(f"{placement.past_tense} to file: {file_path}")
    return file_path

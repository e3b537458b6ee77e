"""Async file-system helpers used by the operation engine.

Blocking calls are pushed to a worker thread with ``asyncio.to_thread`` and
always awaited before the caller continues, so operations never overlap.
Failures are wrapped in the genforge error taxonomy with the original
``OSError`` kept as ``__cause__``.
"""

from __future__ import annotations

import asyncio
import glob
import os
from pathlib import Path

from genforge.errors import (
    MakeDirError,
    OperationFileExistsError,
    PathTraversalError,
    ReadError,
    WriteError,
)
from genforge.utils import Logger


def ensure_within_root(path: Path, root: Path) -> Path:
    """Return *path* if it is *root* or lies beneath it.

    The check is lexical: ``..`` segments are collapsed but symlinks are not
    followed, so a linked sub-directory of *root* still counts as inside.

    Raises:
        PathTraversalError: If the normalised path escapes *root*.
    """
    normalised = Path(os.path.abspath(path))
    root = Path(os.path.abspath(root))
    if normalised != root and root not in normalised.parents:
        raise PathTraversalError(normalised, root)
    return normalised


async def exists(path: Path) -> bool:
    return await asyncio.to_thread(path.exists)


async def read_file(path: Path, logger: Logger | None = None) -> str:
    """Read a UTF-8 text file.

    Raises:
        ReadError: Wrapping the underlying ``OSError``.
    """
    if logger:
        logger.debug(f"Reading from file: {path}")
    try:
        content = await asyncio.to_thread(_read_text, path)
    except (OSError, UnicodeDecodeError) as exc:
        if logger:
            logger.debug(f"Error reading file {path}: {exc!r}")
        raise ReadError(path) from exc
    if logger:
        logger.debug(f"Read {len(content)} characters from {path}")
    return content


async def write_file(
    path: Path,
    content: str,
    *,
    exclusive: bool = False,
    logger: Logger | None = None,
) -> None:
    """Write *content* to *path*, truncating any existing file.

    With ``exclusive=True`` the file is opened in ``"x"`` mode, so the
    existence check and the creation happen in one system call.

    Raises:
        OperationFileExistsError: ``exclusive`` is set and the file exists.
        WriteError: Any other ``OSError``.
    """
    if logger:
        logger.debug(f"Writing {len(content)} characters to {path} (exclusive={exclusive})")
    try:
        await asyncio.to_thread(_write_text, path, content, "x" if exclusive else "w")
    except FileExistsError as exc:
        if not exclusive:
            raise WriteError(path) from exc
        raise OperationFileExistsError(path) from exc
    except OSError as exc:
        raise WriteError(path) from exc


async def ensure_dir(path: Path, logger: Logger | None = None) -> None:
    """Create *path* and any missing parents; an existing directory is fine."""
    if logger:
        logger.debug(f"Ensuring directory exists: {path}")
    try:
        await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)
    except OSError as exc:
        # exist_ok only covers directories; a regular file in the way still fails.
        raise MakeDirError(path) from exc


async def glob_files(pattern: str | Path) -> list[Path]:
    """Expand an absolute glob *pattern* into a sorted list of files.

    ``**`` matches any number of directories.  Directories are excluded.
    """
    matches = await asyncio.to_thread(glob.glob, str(pattern), recursive=True)
    return sorted(Path(m) for m in matches if Path(m).is_file())


def glob_root(pattern: str | Path) -> Path:
    """Return the deepest leading directory of *pattern* without glob magic.

    ``/tpl/components/**/*.j2`` -> ``/tpl/components``
    """
    parts = Path(pattern).parts
    literal: list[str] = []
    for part in parts[:-1]:
        if glob.has_magic(part):
            break
        literal.append(part)
    return Path(*literal) if literal else Path(pattern).parent


def _read_text(path: Path) -> str:
    """Synchronous helper: read content with line endings left untouched."""
    with path.open("r", encoding="utf-8", newline="") as fh:
        return fh.read()


def _write_text(path: Path, content: str, mode: str) -> None:
    """Synchronous helper: write content with the given open mode."""
    with path.open(mode, encoding="utf-8", newline="") as fh:
        fh.write(content)

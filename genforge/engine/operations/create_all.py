"""``createAll``: render every template matched by a glob into a directory.

The matched template tree is mirrored under ``destinationPath``: the part of
each template path below ``templateBasePath`` (rendered, with a trailing
``.j2`` removed) becomes the destination path.  Files are processed in sorted
match order.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from genforge.engine import filesys
from genforge.engine.session import Session
from genforge.errors import (
    GenforgeError,
    NoGlobMatchesError,
    OperationFileExistsError,
    OperationValidationError,
)
from genforge.models import CreateAllOperation
from genforge.utils import error_message

TEMPLATE_SUFFIX = ".j2"


async def create_all(
    operation: CreateAllOperation, data: dict[str, Any], session: Session
) -> list[Path]:
    """Create one file per matched template.

    A per-file failure aborts the operation when ``haltOnError`` is set;
    otherwise it is logged and the next template is processed.  Files that
    were already written stay in place either way.

    Returns:
        The destination paths that were written, in match order.

    Raises:
        NoGlobMatchesError: The glob matched no files.
    """
    logger = session.logger
    renderer = session.renderer

    destination = session.destination_path(operation.destination_path, data)
    pattern = renderer.resolve_path(operation.template_files_glob, data, session.config_dir)
    if operation.template_base_path:
        base = renderer.resolve_path(operation.template_base_path, data, session.config_dir)
    else:
        base = filesys.glob_root(pattern)

    logger.debug(f"Template glob: {pattern}")
    logger.debug(f"Template base path: {base}")

    templates = await filesys.glob_files(pattern)
    if not templates:
        raise NoGlobMatchesError(str(pattern))

    outside = [t for t in templates if base not in t.parents]
    if outside:
        raise OperationValidationError(
            "createAll", f"template {outside[0]} is not inside templateBasePath {base}"
        )

    await filesys.ensure_dir(destination, logger)

    written: list[Path] = []
    skipped = 0
    failed = 0
    for template_path in templates:
        try:
            target = await _create_from_template(
                operation, template_path, base, destination, data, session
            )
        except GenforgeError as exc:
            if operation.halt_on_error:
                raise
            failed += 1
            logger.error(f"Failed to create file from {template_path}: {error_message(exc)}")
            continue

        if target is None:
            skipped += 1
            continue
        written.append(target)
        if operation.verbose:
            logger.success(f"Created file: {target}")

    summary = f"Created {len(written)} of {len(templates)} file(s) in {destination}"
    if skipped or failed:
        summary += f" ({skipped} skipped, {failed} failed)"
    if failed:
        logger.warn(summary)
    else:
        logger.success(summary)
    return written


async def _create_from_template(
    operation: CreateAllOperation,
    template_path: Path,
    base: Path,
    destination: Path,
    data: dict[str, Any],
    session: Session,
) -> Path | None:
    logger = session.logger

    relative = template_path.relative_to(base).as_posix()
    relative = relative.removesuffix(TEMPLATE_SUFFIX)
    target = filesys.ensure_within_root(
        destination / session.renderer.render(relative, data), session.destination_dir
    )

    if await filesys.exists(target):
        if operation.skip_if_exists:
            logger.warn(f"File already exists: {target}. Skipping.")
            return None
        if not operation.overwrite:
            raise OperationFileExistsError(target)
        logger.warn(f"File already exists: {target}. Overwriting.")

    template = await filesys.read_file(template_path, logger)
    content = session.renderer.render(template, data)

    await filesys.ensure_dir(target.parent, logger)
    await filesys.write_file(target, content, exclusive=not operation.overwrite, logger=logger)
    return target

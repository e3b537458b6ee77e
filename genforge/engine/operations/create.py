"""``create``: render one template into one new file."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from genforge.engine import filesys
from genforge.engine.content import resolve_content
from genforge.engine.session import Session
from genforge.errors import OperationFileExistsError
from genforge.models import CreateOperation


async def create(operation: CreateOperation, data: dict[str, Any], session: Session) -> Path | None:
    """Create the file described by *operation*.

    An existing target is skipped with ``skipIfExists``, replaced with
    ``overwrite`` and is an error otherwise.  Without ``overwrite`` the write
    uses exclusive creation, so a file appearing between the existence check
    and the write is still reported as existing rather than clobbered.

    Returns:
        The written path, or ``None`` when the file was skipped.
    """
    logger = session.logger
    file_path = session.destination_path(operation.file_path, data)

    if await filesys.exists(file_path):
        if operation.skip_if_exists:
            logger.warn(f"File already exists: {file_path}. Skipping.")
            return None
        if not operation.overwrite:
            raise OperationFileExistsError(file_path)
        logger.warn(f"File already exists: {file_path}. Overwriting.")

    template = await resolve_content(operation, data, session)
    content = session.renderer.render(template, data)

    await filesys.ensure_dir(file_path.parent, logger)
    await filesys.write_file(
        file_path, content, exclusive=not operation.overwrite, logger=logger
    )
    logger.success(f"Created file: {file_path}")
    return file_path

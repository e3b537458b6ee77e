"""Resolve the raw template text of a single-file operation."""

from __future__ import annotations

from typing import Any

from genforge.engine import filesys
from genforge.engine.session import Session
from genforge.errors import AmbiguousTemplateSourceError, NoTemplateFoundError
from genforge.models import SingleFileOperation


async def resolve_content(
    operation: SingleFileOperation, data: dict[str, Any], session: Session
) -> str:
    """Return the unrendered template text for *operation*.

    ``templateFilePath`` is itself rendered with *data* and resolved against
    the directory of the configuration file, not the destination base.

    Raises:
        NoTemplateFoundError: Neither source is set; an empty string counts
            as unset.
        AmbiguousTemplateSourceError: Both sources are set.
        ReadError: The template file cannot be read.
    """
    logger = session.logger
    has_file = bool(operation.template_file_path)
    has_str = bool(operation.template_str)

    if has_file and has_str:
        raise AmbiguousTemplateSourceError()

    if has_file:
        template_path = session.renderer.resolve_path(
            operation.template_file_path, data, session.config_dir
        )
        logger.info("Reading template from file")
        logger.debug(f"Resolved template path: {template_path}")
        return await filesys.read_file(template_path, logger)

    if has_str:
        logger.info("Using inline template string")
        return operation.template_str

    logger.error("No template source specified (templateStr or templateFilePath).")
    raise NoTemplateFoundError()

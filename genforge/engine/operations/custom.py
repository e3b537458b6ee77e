"""``custom`` operations and handlers registered under their own type name."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from genforge.engine import filesys
from genforge.engine.session import Session
from genforge.errors import UnknownOperationTypeError
from genforge.models import CustomOperation, RegisteredOperation
from genforge.utils import Logger, call_maybe_async


@dataclass(frozen=True)
class OperationContext:
    """Read-only view of the run handed to custom actions and handlers.

    Attributes:
        destination_path: Absolute destination base directory.
        config_path: Absolute directory of the configuration file.
        logger: The run's logger.
    """

    destination_path: Path
    config_path: Path
    logger: Logger

    @classmethod
    def from_session(cls, session: Session) -> "OperationContext":
        return cls(session.destination_dir, session.config_dir, session.logger)

    async def replace_in_file(
        self,
        file_path: str | Path,
        pattern: str | re.Pattern[str],
        replacement: str,
        count: int = 1,
    ) -> bool:
        """Replace *pattern* in a file below the destination base.

        A literal string pattern is matched verbatim and *replacement* is
        inserted verbatim; a compiled pattern follows ``re.sub`` rules.
        Only the first match is replaced unless *count* says otherwise;
        ``count=0`` replaces every occurrence.  The file is not rewritten when
        nothing changes.

        Returns:
            ``True`` if the file was rewritten.
        """
        full_path = filesys.ensure_within_root(
            self.destination_path / file_path, self.destination_path
        )
        self.logger.debug(f"Replacing content in file: {full_path}")

        content = await filesys.read_file(full_path, self.logger)
        if isinstance(pattern, re.Pattern):
            new_content = pattern.sub(replacement, content, count=count)
        else:
            new_content = re.sub(re.escape(pattern), lambda _m: replacement, content, count=count)

        if new_content == content:
            self.logger.debug("No changes made to file (pattern not found or replacement identical)")
            return False

        await filesys.write_file(full_path, new_content, logger=self.logger)
        self.logger.info(f"Replaced content in: {full_path}")
        return True


async def custom(operation: CustomOperation, data: dict[str, Any], session: Session) -> None:
    """Invoke the inline ``action(data, context)``; exceptions propagate."""
    session.logger.info(f"Running custom operation: {operation.name}")
    await call_maybe_async(operation.action, data, OperationContext.from_session(session))
    session.logger.success(f"Custom operation completed: {operation.name}")


async def registered(operation: RegisteredOperation, data: dict[str, Any], session: Session) -> None:
    """Invoke the handler registered under ``operation.type``."""
    handler = session.registry.get_handler(operation.type)
    if handler is None:
        raise UnknownOperationTypeError(operation.type)

    session.logger.info(f"Running registered operation: {operation.type}")
    await call_maybe_async(handler, data, OperationContext.from_session(session))
    session.logger.success(f"Registered operation completed: {operation.type}")

"""Shared utility functions for genforge.

Provides the Rich-based logger handed to every operation, the uniform
sync-or-async call helper used for user supplied functions, and a few
formatting helpers for error reporting.
"""

from __future__ import annotations

import inspect
import json
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.markup import escape

if TYPE_CHECKING:
    from genforge.config import Config

console = Console()
error_console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------


class Logger:
    """Levelled console logger.

    ``info`` messages are shown only in verbose mode and ``debug`` messages
    only in debug mode.  Warnings, errors and success messages are always
    printed.  All messages are markup-escaped so file paths containing
    square brackets are printed verbatim.
    """

    def __init__(
        self,
        *,
        verbose: bool = False,
        debug: bool = False,
        out: Console | None = None,
        err: Console | None = None,
    ) -> None:
        self.verbose = verbose
        self.debug_enabled = debug
        self.out = out or console
        self.err = err or error_console

    @classmethod
    def from_config(cls, config: Config) -> Logger:
        return cls(verbose=config.verbose, debug=config.debug)

    def info(self, message: str, *details: Any) -> None:
        if self.verbose:
            self.out.print(f"[blue]{_join(message, details)}[/blue]")

    def debug(self, message: str, *details: Any) -> None:
        if self.debug_enabled:
            self.out.print(f"[bright_cyan]\\[Debug][/bright_cyan] [dim]{_join(message, details)}[/dim]")

    def warn(self, message: str, *details: Any) -> None:
        self.err.print(f"[yellow]{_join(message, details)}[/yellow]")

    def error(self, message: str, *details: Any) -> None:
        self.err.print(f"[bold red]{_join(message, details)}[/bold red]")

    def success(self, message: str, *details: Any) -> None:
        self.out.print(f"[green]{_join(message, details)}[/green]")


def _join(message: str, details: tuple[Any, ...]) -> str:
    parts = [message, *(str(d) for d in details)]
    return escape(" ".join(parts))


# ---------------------------------------------------------------------------
# Sync-or-async calls
# ---------------------------------------------------------------------------


async def call_maybe_async(func: Callable[..., Any], *args: Any) -> Any:
    """Call *func* and await the result if it is awaitable.

    User supplied functions (``skip``, ``action``, ``items``,
    ``transformItem``, registered handlers) may be plain functions or
    coroutine functions; every call site goes through this helper.
    """
    result = func(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


# ---------------------------------------------------------------------------
# Error / data formatting
# ---------------------------------------------------------------------------


def error_message(exc: BaseException) -> str:
    """Return a non-empty message for *exc*."""
    return str(exc) or type(exc).__name__


def iter_causes(exc: BaseException) -> Iterator[BaseException]:
    """Yield the ``__cause__`` chain of *exc* (excluding *exc* itself)."""
    seen: set[int] = {id(exc)}
    cause = exc.__cause__
    while cause is not None and id(cause) not in seen:
        seen.add(id(cause))
        yield cause
        cause = cause.__cause__


def data_snapshot(data: Any) -> str:
    """Serialise template data for diagnostics; never raises."""
    try:
        return json.dumps(data, indent=2, ensure_ascii=False, default=repr)
    except (TypeError, ValueError):
        return repr(data)


def title_case(value: str) -> str:
    """``createAll`` -> ``Create All``; used for operation labels in logs."""
    words: list[str] = []
    current = ""
    for char in value:
        if char.isupper() and current:
            words.append(current)
            current = char
        elif char in "-_ ":
            if current:
                words.append(current)
            current = ""
        else:
            current += char
    if current:
        words.append(current)
    return " ".join(w[:1].upper() + w[1:] for w in words)

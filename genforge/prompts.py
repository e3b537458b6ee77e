"""Interactive terminal prompts using Rich + simple-term-menu.

Free-form questions (``input``, ``number``, ``confirm``, ``password``) are
asked with :mod:`rich.prompt`; list-style questions and the generator
selection menu use :class:`simple_term_menu.TerminalMenu`.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, FloatPrompt, Prompt
from simple_term_menu import TerminalMenu

from genforge.models import PromptSpec
from genforge.registry import Registry
from genforge.utils import Logger

_console = Console()


# ---------------------------------------------------------------------------
# Choices
# ---------------------------------------------------------------------------


def _choice_label(choice: Any) -> str:
    if isinstance(choice, Mapping):
        return str(choice.get("name", choice.get("value", "")))
    return str(choice)


def _choice_value(choice: Any) -> Any:
    if isinstance(choice, Mapping):
        return choice.get("value", choice.get("name"))
    return choice


def _menu_labels(prompt: PromptSpec) -> list[str]:
    labels = [_choice_label(c) for c in prompt.choices or []]
    if prompt.type == "rawlist":
        return [f"{i}) {label}" for i, label in enumerate(labels, start=1)]
    if prompt.type == "expand":
        # simple-term-menu turns a leading "[k] " into a shortcut key.
        keyed = []
        for choice, label in zip(prompt.choices or [], labels):
            key = choice.get("key") if isinstance(choice, Mapping) else None
            keyed.append(f"[{key}] {label}" if key else label)
        return keyed
    return labels


def _default_index(prompt: PromptSpec) -> int:
    values = [_choice_value(c) for c in prompt.choices or []]
    if isinstance(prompt.default, int) and not isinstance(prompt.default, bool):
        if 0 <= prompt.default < len(values):
            return prompt.default
    if prompt.default in values:
        return values.index(prompt.default)
    return 0


# ---------------------------------------------------------------------------
# Single prompts
# ---------------------------------------------------------------------------


def _show_menu(question: str, labels: list[str], **kwargs: Any) -> Any:
    _console.print(f"[bold cyan]?[/]  {escape(question)}")
    menu = TerminalMenu(
        labels,
        menu_cursor="> ",
        menu_cursor_style=("fg_cyan", "bold"),
        menu_highlight_style=("fg_cyan",),
        **kwargs,
    )
    selected = menu.show()
    if selected is None:
        raise SystemExit(1)
    return selected


def _ask_list(prompt: PromptSpec, question: str) -> Any:
    values = [_choice_value(c) for c in prompt.choices or []]
    index = int(_show_menu(question, _menu_labels(prompt), cursor_index=_default_index(prompt)))
    return values[index]


def _ask_checkbox(prompt: PromptSpec, question: str) -> list[Any]:
    choices = prompt.choices or []
    values = [_choice_value(c) for c in choices]
    defaults = prompt.default if isinstance(prompt.default, list) else []
    preselected = [
        i
        for i, choice in enumerate(choices)
        if (isinstance(choice, Mapping) and choice.get("checked")) or values[i] in defaults
    ]
    selected = _show_menu(
        question,
        _menu_labels(prompt),
        multi_select=True,
        show_multi_select_hint=True,
        preselected_entries=preselected or None,
    )
    return [values[i] for i in selected]


def _ask_number(question: str, default: Any) -> int | float:
    if default is None:
        value = FloatPrompt.ask(question, console=_console)
    else:
        value = FloatPrompt.ask(question, default=float(default), console=_console)
    return int(value) if float(value).is_integer() else value


def ask_prompt(prompt: PromptSpec) -> Any:
    """Ask a single question and return the typed answer."""
    question = prompt.message or f"{prompt.name}:"

    if prompt.type == "confirm":
        return Confirm.ask(question, default=bool(prompt.default), console=_console)
    if prompt.type == "number":
        return _ask_number(question, prompt.default)
    if prompt.type in ("input", "password"):
        kwargs: dict[str, Any] = {"password": prompt.type == "password", "console": _console}
        if prompt.default is not None:
            kwargs["default"] = str(prompt.default)
        return Prompt.ask(question, **kwargs)
    if prompt.type == "checkbox":
        return _ask_checkbox(prompt, question)
    return _ask_list(prompt, question)


def ask_prompts(prompts: Sequence[PromptSpec]) -> dict[str, Any]:
    """Ask every prompt in order and return ``{name: answer}``."""
    return {prompt.name: ask_prompt(prompt) for prompt in prompts}


# ---------------------------------------------------------------------------
# Generator selection
# ---------------------------------------------------------------------------


def select_generator(message: str, choices: Sequence[tuple[str, str]]) -> str:
    """Show the generator menu and return the chosen generator id."""
    labels = [f"{gid} - {description}" for gid, description in choices]
    index = int(_show_menu(message, labels))
    return choices[index][0]


def resolve_generator_id(
    requested: str,
    registry: Registry,
    message: str,
    logger: Logger,
) -> str:
    """Return *requested* when registered, otherwise ask the user to pick one."""
    if requested:
        if registry.get_generator(requested) is not None:
            logger.debug(f"Using selected generator: {requested}")
            return requested
        logger.error(f'Generator with ID "{requested}" not found.')

    selected = select_generator(message, registry.generator_choices())
    logger.debug(f"Using selected generator: {selected}")
    return selected

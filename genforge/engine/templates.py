"""Jinja2 template rendering for generator operations.

Provides the TemplateRenderer class which renders inline template strings
(file contents, file paths, glob patterns) against the data gathered for an
operation.  Configured helpers are registered as Jinja2 filters and globals,
and configured partials are available through ``{% include "name" %}``.
"""

from __future__ import annotations

import os
import re
from collections.abc import Callable, Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

from jinja2 import DictLoader, Environment, Template, TemplateError

from genforge.errors import TemplateRenderError
from genforge.utils import data_snapshot


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 template strings for scaffolding operations.

    Missing variables render as empty strings, so a path template such as
    ``"out/{{ name }}.txt"`` never fails for lack of data.  Compiled templates
    are memoised in a bounded cache keyed by the template source.
    """

    def __init__(
        self,
        filters: Mapping[str, Callable[..., Any]] | None = None,
        partials: Mapping[str, str] | None = None,
        cache_size: int = 256,
    ) -> None:
        self.env = Environment(
            loader=DictLoader(dict(partials or {})),
            autoescape=False,
            keep_trailing_newline=True,
        )
        self.env.filters.update(BUILTIN_FILTERS)
        for name, func in (filters or {}).items():
            self.env.filters[name] = func
            self.env.globals[name] = func
        self._compile: Callable[[str], Template] = lru_cache(maxsize=cache_size)(
            self.env.from_string
        )

    # -- Rendering -----------------------------------------------------------

    def render(self, template: str, data: Mapping[str, Any]) -> str:
        """Render *template* with *data*.

        Raises:
            TemplateRenderError: On a syntax error or when a filter raises.
        """
        try:
            return self._compile(template).render(dict(data))
        except TemplateError as exc:
            raise TemplateRenderError(str(exc), template, data_snapshot(data)) from exc
        except Exception as exc:
            raise TemplateRenderError(
                f"{type(exc).__name__}: {exc}", template, data_snapshot(data)
            ) from exc

    def resolve_path(
        self, path_template: str, data: Mapping[str, Any], base_dir: str | Path
    ) -> Path:
        """Render *path_template* and make it absolute against *base_dir*.

        ``..`` segments are collapsed; symlinks are left as they are.
        """
        rendered = self.render(path_template, data)
        return Path(os.path.abspath(Path(base_dir) / rendered))

    def clear_cache(self) -> None:
        self._compile.cache_clear()  # type: ignore[attr-defined]


# ---------------------------------------------------------------------------
# Built-in string filters
# ---------------------------------------------------------------------------

_WORD_BOUNDARY = re.compile(r"[-_.\s/]+")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def _words(value: Any) -> list[str]:
    if not isinstance(value, str):
        return []
    spaced = _CAMEL_BOUNDARY.sub(" ", value)
    return [w for w in _WORD_BOUNDARY.split(spaced) if w]


def _camel_case_filter(value: Any) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``someThing``."""
    pascal = _pascal_case_filter(value)
    return pascal[:1].lower() + pascal[1:]


def _pascal_case_filter(value: Any) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``."""
    return "".join(w[:1].upper() + w[1:].lower() for w in _words(value))


def _snake_case_filter(value: Any) -> str:
    """Convert ``SomeThing`` or ``some-thing`` to ``some_thing``."""
    return "_".join(w.lower() for w in _words(value))


def _kebab_case_filter(value: Any) -> str:
    return "-".join(w.lower() for w in _words(value))


def _dot_case_filter(value: Any) -> str:
    return ".".join(w.lower() for w in _words(value))


def _path_case_filter(value: Any) -> str:
    return "/".join(w.lower() for w in _words(value))


def _screaming_snake_case_filter(value: Any) -> str:
    return "_".join(w.upper() for w in _words(value))


def _title_case_filter(value: Any) -> str:
    return " ".join(w[:1].upper() + w[1:].lower() for w in _words(value))


def _sentence_case_filter(value: Any) -> str:
    sentence = " ".join(w.lower() for w in _words(value))
    return sentence[:1].upper() + sentence[1:]


def _slugify_filter(value: Any) -> str:
    """Convert a string to a URL/filename-safe slug."""
    if not isinstance(value, str):
        return ""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower().strip())
    return slug.strip("-")


def _truncate_words_filter(value: Any, limit: int, suffix: str = "...") -> str:
    if not isinstance(value, str):
        return ""
    words = value.split()
    if len(words) <= limit:
        return value
    return " ".join(words[:limit]) + suffix


BUILTIN_FILTERS: dict[str, Callable[..., Any]] = {
    "camel_case": _camel_case_filter,
    "pascal_case": _pascal_case_filter,
    "snake_case": _snake_case_filter,
    "kebab_case": _kebab_case_filter,
    "dot_case": _dot_case_filter,
    "path_case": _path_case_filter,
    "screaming_snake_case": _screaming_snake_case_filter,
    "title_case": _title_case_filter,
    "sentence_case": _sentence_case_filter,
    "slugify": _slugify_filter,
    "truncate_words": _truncate_words_filter,
}

"""The configuration API handed to a project's ``configure(api)`` function.

Everything a configuration file can declare goes through :class:`ConfigAPI`:
generators, template helpers (Jinja2 filters), partials and custom operation
handlers.  Definitions are validated as they are added, so by the time a
generator runs its operations are known to be well formed.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from genforge.config import Config
from genforge.engine.decorator import describe_validation_error
from genforge.errors import ConfigValidationError, GenforgeError, ReadError
from genforge.models import OPERATION_MODELS, GeneratorDefinition
from genforge.registry import Registry

_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class ConfigAPI:
    """Facade over a :class:`Config` and a :class:`Registry`."""

    def __init__(self, config: Config, registry: Registry) -> None:
        self._config = config
        self._registry = registry

    # -- Paths & selection -------------------------------------------------

    def get_config_file_path(self) -> Path | None:
        return self._config.config_file_path

    def get_destination_base_path(self) -> Path:
        return self._config.destination_dir

    def set_selection_prompt(self, prompt: str) -> None:
        if not isinstance(prompt, str) or not prompt.strip():
            raise ConfigValidationError("selectionPrompt", "must be a non-empty string")
        self._config.selection_prompt = prompt

    def get_selection_prompt(self) -> str:
        return self._config.selection_prompt

    # -- Generators --------------------------------------------------------

    def add_generator(self, generator_id: str, generator: Mapping[str, Any] | GeneratorDefinition) -> None:
        """Validate and register a generator under *generator_id*.

        Raises:
            ConfigValidationError: The id or definition is invalid.
        """
        if not isinstance(generator_id, str) or not generator_id.strip():
            raise ConfigValidationError("generatorId", "must be a non-empty string")
        self._registry.set_generator(generator_id, validate_generator(generator_id, generator))

    def get_generator(self, generator_id: str) -> GeneratorDefinition:
        return self._registry.require_generator(generator_id)

    def get_generators(self) -> dict[str, GeneratorDefinition]:
        return dict(self._registry.generators)

    # -- Helpers -----------------------------------------------------------

    def add_helper(self, name: str, helper: Callable[..., Any]) -> None:
        _check_name("helper", name)
        if not callable(helper):
            raise ConfigValidationError(f"helper {name!r}", "must be callable")
        self._registry.set_helper(name, helper)

    def get_helper(self, name: str) -> Callable[..., Any]:
        try:
            return self._registry.helpers[name]
        except KeyError:
            raise GenforgeError(
                f'Helper "{name}" not found in loaded configuration.', code="HELPER_NOT_FOUND"
            ) from None

    def get_helpers(self) -> dict[str, Callable[..., Any]]:
        return dict(self._registry.helpers)

    # -- Partials ----------------------------------------------------------

    def add_partial(self, name: str, template: str) -> None:
        if not isinstance(name, str) or not name.strip():
            raise ConfigValidationError("partial name", "must be a non-empty string")
        if not isinstance(template, str):
            raise ConfigValidationError(f"partial {name!r}", "must be a template string")
        self._registry.set_partial(name, template)

    def add_partial_from_file(self, name: str, template_file_path: str | Path) -> None:
        """Register a partial read from a file relative to the config directory."""
        path = self._config.config_dir / template_file_path
        try:
            template = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ReadError(path) from exc
        self.add_partial(name, template)

    def get_partial(self, name: str) -> str:
        try:
            return self._registry.partials[name]
        except KeyError:
            raise GenforgeError(
                f'Template partial "{name}" not found in loaded configuration.',
                code="PARTIAL_NOT_FOUND",
            ) from None

    def get_partials(self) -> dict[str, str]:
        return dict(self._registry.partials)

    # -- Custom operations -------------------------------------------------

    def add_operation(self, name: str, handler: Callable[..., Any]) -> None:
        """Register *handler* for operations whose ``type`` is *name*.

        Raises:
            ConfigValidationError: *name* is a built-in operation type or
                *handler* is not callable.
        """
        if not isinstance(name, str) or not name.strip():
            raise ConfigValidationError("operation name", "must be a non-empty string")
        if not callable(handler):
            raise ConfigValidationError(f"operation {name!r}", "handler must be callable")
        self._registry.set_operation(name, handler)

    def get_operation(self, name: str) -> Callable[..., Any]:
        handler = self._registry.get_handler(name)
        if handler is None:
            raise GenforgeError(
                f'Operation "{name}" is not registered.', code="UNKNOWN_OPERATION_TYPE"
            )
        return handler


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def validate_generator(
    generator_id: str, generator: Mapping[str, Any] | GeneratorDefinition
) -> GeneratorDefinition:
    """Check a generator definition and every built-in operation in it.

    Operations of a type that is not built-in are accepted here: custom
    handlers may be registered after the generator and are checked when the
    operation is dispatched.
    """
    field = f"generators[{generator_id!r}]"
    try:
        definition = GeneratorDefinition.model_validate(generator)
    except ValidationError as exc:
        raise ConfigValidationError(field, describe_validation_error(exc)) from exc

    if not definition.operations:
        raise ConfigValidationError(f"{field}.operations", "cannot be empty")

    for index, operation in enumerate(definition.operations):
        _validate_operation(f"{field}.operations[{index}]", operation)
    return definition


def _validate_operation(field: str, operation: Any) -> None:
    if not isinstance(operation, Mapping):
        # Already-built models were validated on construction.
        if isinstance(operation, tuple(OPERATION_MODELS.values())):
            return
        raise ConfigValidationError(field, "must be a mapping")

    op_type = operation.get("type")
    if not isinstance(op_type, str) or not op_type:
        raise ConfigValidationError(f"{field}.type", "is required")

    model = OPERATION_MODELS.get(op_type)
    if model is None:
        return
    try:
        decorated = model.model_validate(dict(operation))
    except ValidationError as exc:
        raise ConfigValidationError(field, describe_validation_error(exc)) from exc

    if op_type in ("create", "append", "prepend"):
        if not decorated.template_str and not decorated.template_file_path:
            raise ConfigValidationError(field, "must have either templateStr or templateFilePath")
    if op_type == "forMany":
        items = decorated.items
        if not callable(items) and not isinstance(items, list):
            raise ConfigValidationError(f"{field}.items", "must be a list or a function")
        if isinstance(items, list) and not items:
            raise ConfigValidationError(f"{field}.items", "list cannot be empty")


def _check_name(kind: str, name: Any) -> None:
    if not isinstance(name, str) or not _NAME_RE.match(name):
        raise ConfigValidationError(f"{kind} name", f"{name!r} is not a valid identifier")

"""In-memory registry of generators, template helpers, partials and
custom operation handlers.

A :class:`Registry` is populated once while the configuration file is
loaded and is treated as read-only afterwards.  It is passed explicitly to
the engine; there is no module-level instance.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from genforge.errors import ConfigValidationError, GeneratorNotFoundError
from genforge.models import BUILTIN_OPERATION_TYPES, GeneratorDefinition

OperationHandler = Callable[..., Any]
Helper = Callable[..., Any]


class Registry:
    """Insertion-ordered stores keyed by id/name."""

    def __init__(self) -> None:
        self.generators: dict[str, GeneratorDefinition] = {}
        self.helpers: dict[str, Helper] = {}
        self.partials: dict[str, str] = {}
        self.operations: dict[str, OperationHandler] = {}

    # -- Generators --------------------------------------------------------

    def set_generator(self, generator_id: str, generator: GeneratorDefinition) -> None:
        self.generators[generator_id] = generator

    def get_generator(self, generator_id: str) -> GeneratorDefinition | None:
        return self.generators.get(generator_id)

    def require_generator(self, generator_id: str) -> GeneratorDefinition:
        generator = self.generators.get(generator_id)
        if generator is None:
            raise GeneratorNotFoundError(generator_id)
        return generator

    def list_generator_ids(self) -> list[str]:
        return list(self.generators)

    def generator_choices(self) -> list[tuple[str, str]]:
        """``(id, description)`` pairs in registration order, for menus."""
        return [(gid, gen.description) for gid, gen in self.generators.items()]

    # -- Template components -------------------------------------------------

    def set_helper(self, name: str, helper: Helper) -> None:
        self.helpers[name] = helper

    def set_partial(self, name: str, template: str) -> None:
        self.partials[name] = template

    # -- Custom operations -----------------------------------------------------

    def set_operation(self, name: str, handler: OperationHandler) -> None:
        """Register *handler* under *name*.

        Raises:
            ConfigValidationError: *name* is a built-in operation type.
        """
        if name in BUILTIN_OPERATION_TYPES:
            raise ConfigValidationError(
                f"operation {name!r}", "is a reserved built-in operation type"
            )
        self.operations[name] = handler

    def get_handler(self, name: str) -> OperationHandler | None:
        return self.operations.get(name)

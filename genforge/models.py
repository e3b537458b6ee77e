"""Pydantic v2 models for generators, prompts and operations.

Operations are authored as plain dictionaries using camelCase keys
(``filePath``, ``templateStr``, ``skipIfExists``...).  Each built-in operation
type has a model whose defaults mirror the documented configuration format;
validating an authored dictionary against its model is what the engine calls
"decoration".  Models are frozen so a decorated operation is a new value and
the authored one is never mutated.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------

SIMPLE_PROMPT_TYPES = ("input", "number", "confirm", "password")
LIST_PROMPT_TYPES = ("list", "rawlist", "expand", "checkbox")


class PromptSpec(BaseModel):
    """A single input prompt shown before a generator runs."""

    model_config = ConfigDict(frozen=True, extra="allow")

    type: Literal["input", "number", "confirm", "password", "list", "rawlist", "expand", "checkbox"]
    name: str = Field(..., min_length=1)
    message: Optional[str] = Field(default=None, min_length=1)
    choices: Optional[list[Any]] = None
    default: Any = None

    @model_validator(mode="after")
    def _check_choices(self) -> "PromptSpec":
        if self.type in LIST_PROMPT_TYPES and not self.choices:
            raise ValueError(f'choices are required for prompt type "{self.type}"')
        return self


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


class BaseOperation(BaseModel):
    """Fields shared by every operation type."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        arbitrary_types_allowed=True,
    )

    type: str
    data: dict[str, Any] = Field(default_factory=dict)
    skip: Optional[Callable[..., Any]] = None
    halt_on_error: bool = True


class SingleFileOperation(BaseOperation):
    """An operation rendering one template into one file."""

    file_path: str = Field(..., min_length=1)
    template_str: Optional[str] = None
    template_file_path: Optional[str] = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def _check_single_source(self) -> "SingleFileOperation":
        if self.template_str and self.template_file_path is not None:
            raise ValueError("only one of templateStr or templateFilePath may be set")
        return self


class CreateOperation(SingleFileOperation):
    type: Literal["create"] = "create"
    skip_if_exists: bool = False
    overwrite: bool = False

    @model_validator(mode="after")
    def _check_exists_policy(self) -> "CreateOperation":
        if self.skip_if_exists and self.overwrite:
            raise ValueError("cannot have both skipIfExists and overwrite set to true")
        return self


class AmendOperation(SingleFileOperation):
    """Shared shape of ``append`` and ``prepend``."""

    type: Literal["append", "prepend"]
    separator: str = "\n"
    unique: bool = True
    pattern: Union[str, re.Pattern[str], None] = None


class AppendOperation(AmendOperation):
    type: Literal["append"] = "append"


class PrependOperation(AmendOperation):
    type: Literal["prepend"] = "prepend"


class CreateAllOperation(BaseOperation):
    type: Literal["createAll"] = "createAll"
    destination_path: str = Field(..., min_length=1)
    template_files_glob: str = Field(..., min_length=1)
    template_base_path: Optional[str] = Field(default=None, min_length=1)
    verbose: bool = True
    skip_if_exists: bool = False
    overwrite: bool = False

    @model_validator(mode="after")
    def _check_exists_policy(self) -> "CreateAllOperation":
        if self.skip_if_exists and self.overwrite:
            raise ValueError("cannot have both skipIfExists and overwrite set to true")
        return self


class ForManyOperation(BaseOperation):
    type: Literal["forMany"] = "forMany"
    generator_id: str = Field(..., min_length=1)
    # A literal list or a function of the parent data; checked when resolved.
    items: Any
    transform_item: Optional[Callable[..., Any]] = None


class CustomOperation(BaseOperation):
    type: Literal["custom"] = "custom"
    name: str = Field(..., min_length=1)
    action: Callable[..., Any]


class RegisteredOperation(BaseOperation):
    """An operation whose ``type`` names a handler registered at load time."""

    model_config = ConfigDict(extra="allow")


Operation = Union[
    CreateOperation,
    AppendOperation,
    PrependOperation,
    CreateAllOperation,
    ForManyOperation,
    CustomOperation,
    RegisteredOperation,
]

OPERATION_MODELS: dict[str, type[BaseOperation]] = {
    "create": CreateOperation,
    "append": AppendOperation,
    "prepend": PrependOperation,
    "createAll": CreateAllOperation,
    "forMany": ForManyOperation,
    "custom": CustomOperation,
}

BUILTIN_OPERATION_TYPES: frozenset[str] = frozenset(OPERATION_MODELS)


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------


class GeneratorDefinition(BaseModel):
    """A named bundle of prompts and an ordered list of operations.

    Operations are kept as authored; they are decorated each time they run.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    description: str = Field(..., min_length=1)
    prompts: list[PromptSpec] = Field(default_factory=list)
    operations: list[Any] = Field(default_factory=list)

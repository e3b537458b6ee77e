"""Exception hierarchy for genforge.

Every error raised by the engine derives from :class:`GenforgeError`, which
carries a stable machine-readable ``code`` next to the human message.  Errors
that wrap an underlying failure are raised with ``raise ... from exc`` so the
original exception is available as ``__cause__``.
"""

from __future__ import annotations

from pathlib import Path


class GenforgeError(Exception):
    """Base class for all genforge errors."""

    code = "GENFORGE_ERROR"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        if code is not None:
            self.code = code
        super().__init__(message)


# ---------------------------------------------------------------------------
# File-system errors
# ---------------------------------------------------------------------------


class ReadError(GenforgeError):
    """Raised when a file cannot be read."""

    code = "READ_ERROR"

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Error reading file: {path}")


class WriteError(GenforgeError):
    """Raised when a file cannot be written."""

    code = "WRITE_ERROR"

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Error writing file: {path}")


class MakeDirError(GenforgeError):
    """Raised when a directory cannot be created."""

    code = "MKDIR_ERROR"

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Error creating directory: {path}")


class OperationFileExistsError(GenforgeError):
    """Raised when a create target exists and neither skip nor overwrite is set."""

    code = "FILE_EXISTS"

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"File already exists: {path}")


class PathTraversalError(GenforgeError):
    """Raised when a rendered path escapes the destination base directory."""

    code = "PATH_TRAVERSAL_ERROR"

    def __init__(self, path: str | Path, root: str | Path) -> None:
        self.path = Path(path)
        self.root = Path(root)
        super().__init__(
            f'Path "{path}" escapes the destination directory "{root}". '
            "Paths must resolve within the destination base path."
        )


# ---------------------------------------------------------------------------
# Template errors
# ---------------------------------------------------------------------------


class NoTemplateFoundError(GenforgeError):
    code = "NO_TEMPLATE_FOUND"

    def __init__(self) -> None:
        super().__init__("Either templateFilePath or templateStr must be provided")


class AmbiguousTemplateSourceError(GenforgeError):
    code = "AMBIGUOUS_TEMPLATE_SOURCE"

    def __init__(self) -> None:
        super().__init__("Only one of templateFilePath or templateStr may be provided")


class NoGlobMatchesError(GenforgeError):
    code = "NO_GLOB_MATCHES"

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        super().__init__(f"No template files found matching: {pattern}")


class TemplateRenderError(GenforgeError):
    """Raised when a template fails to compile or render.

    Attributes:
        template: The offending template source.
        data_snapshot: JSON serialisation of the render data, for diagnostics.
    """

    code = "TEMPLATE_PROCESSING_ERROR"

    def __init__(self, reason: str, template: str, data_snapshot: str) -> None:
        self.template = template
        self.data_snapshot = data_snapshot
        super().__init__(f"Error processing template: {reason}")


# ---------------------------------------------------------------------------
# Operation / generator errors
# ---------------------------------------------------------------------------


class UnknownOperationTypeError(GenforgeError):
    code = "UNKNOWN_OPERATION_TYPE"

    def __init__(self, operation_type: str) -> None:
        self.operation_type = operation_type
        super().__init__(f'Unknown operation type: "{operation_type}"')


class GeneratorNotFoundError(GenforgeError):
    code = "GENERATOR_NOT_FOUND"

    def __init__(self, generator_id: str) -> None:
        self.generator_id = generator_id
        super().__init__(f'Generator "{generator_id}" not found in loaded configuration.')


class MissingOperationsError(GenforgeError):
    code = "MISSING_OPERATIONS_ERROR"

    def __init__(self, generator_id: str) -> None:
        self.generator_id = generator_id
        super().__init__(f'No operations found for generator "{generator_id}".')


class InvalidForManyItemsError(GenforgeError):
    code = "INVALID_FOR_MANY_ITEMS"

    def __init__(self, received: object) -> None:
        self.received = received
        super().__init__(
            'The "items" property must be a list or a function that returns a list, '
            f"got {type(received).__name__}."
        )


class OperationValidationError(GenforgeError):
    """Raised when an operation is malformed at execution time."""

    code = "OPERATION_VALIDATION_ERROR"

    def __init__(self, operation_type: str, reason: str) -> None:
        self.operation_type = operation_type
        super().__init__(f'Invalid "{operation_type}" operation: {reason}')


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------


class ConfigLoadError(GenforgeError):
    code = "CONFIG_LOAD_ERROR"


class ConfigValidationError(GenforgeError):
    """Raised when a generator, helper, partial or operation fails validation."""

    code = "VALIDATION_ERROR"

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        super().__init__(f"Validation failed for {field}: {reason}")

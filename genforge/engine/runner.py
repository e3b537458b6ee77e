"""Generator run loop.

Operations run strictly in declaration order.  Before each one the ``skip``
predicate is evaluated against the operation's effective data; a failure is
logged with its cause chain and then either re-raised or swallowed according
to the nearest ``haltOnError`` flag.
"""

from __future__ import annotations

import traceback
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from genforge.engine.decorator import decorate
from genforge.engine.dispatcher import dispatch
from genforge.engine.session import Session
from genforge.errors import MissingOperationsError
from genforge.models import BaseOperation, PromptSpec
from genforge.utils import Logger, call_maybe_async, error_message, iter_causes, title_case

PromptProvider = Callable[[Sequence[PromptSpec]], Any]


async def run_operations(
    operations: Sequence[Mapping[str, Any] | BaseOperation],
    data: Mapping[str, Any],
    session: Session,
    *,
    item_data: Mapping[str, Any] | None = None,
    halt_on_error: bool | None = None,
) -> int:
    """Run *operations* in order and return how many were dispatched.

    Each operation sees ``{**data, **operation.data, **item_data}``.  When
    *halt_on_error* is given (forMany fan-out) it replaces every operation's
    own ``haltOnError`` flag.
    """
    logger = session.logger
    dispatched = 0

    for raw in operations:
        operation = decorate(raw, session.registry)
        logger.info(f"Executing operation: {operation.type}")

        effective = {**data, **operation.data, **(item_data or {})}
        logger.debug(f"Merged operation data keys: {', '.join(effective) or '(none)'}")

        if operation.skip is not None:
            logger.info("Evaluating skip condition")
            if await call_maybe_async(operation.skip, effective):
                logger.info("Skipping operation due to skip condition")
                continue

        halt = operation.halt_on_error if halt_on_error is None else halt_on_error
        try:
            dispatched += 1
            await dispatch(operation, effective, session)
        except Exception as exc:
            log_failure(logger, operation.type, exc)
            if halt:
                logger.debug("haltOnError is true, stopping execution")
                raise
            logger.debug("haltOnError is false, continuing with next operation")
        else:
            logger.info("Operation completed successfully")

    return dispatched


def log_failure(logger: Logger, operation_type: str, exc: BaseException) -> None:
    """Log a failed operation with its message and cause chain."""
    logger.error(f"{title_case(operation_type)} operation failed.", error_message(exc))
    for cause in iter_causes(exc):
        logger.error(f"Caused by: {error_message(cause)}")
    logger.debug("Error details:", "".join(traceback.format_exception(exc)))


class GeneratorRunner:
    """Runs a registered generator end to end.

    Prompt answers come from *prompt_provider*, a callable (sync or async)
    receiving the generator's prompt list and returning an answers mapping.
    The interactive terminal prompts are used when none is given.
    """

    def __init__(self, session: Session, prompt_provider: PromptProvider | None = None) -> None:
        if prompt_provider is None:
            from genforge.prompts import ask_prompts

            prompt_provider = ask_prompts
        self.session = session
        self.prompt_provider = prompt_provider

    async def run(self, generator_id: str) -> int:
        """Prompt for input and run every operation of *generator_id*.

        Returns:
            The number of dispatched operations.

        Raises:
            GeneratorNotFoundError: *generator_id* is not registered.
            MissingOperationsError: The generator has no operations.
        """
        logger = self.session.logger
        logger.info(f"Starting generator: {generator_id}")

        generator = self.session.registry.require_generator(generator_id)
        logger.info(f"Loaded generator: {generator.description}")

        answers: dict[str, Any] = {}
        if generator.prompts:
            logger.info(f"Prompting for {len(generator.prompts)} input value(s)")
            answers = dict(await call_maybe_async(self.prompt_provider, generator.prompts))
        else:
            logger.info("No prompts defined for this generator")

        if not generator.operations:
            logger.error(f"No operations found for {generator_id}")
            raise MissingOperationsError(generator_id)

        logger.info(f"Running {len(generator.operations)} operations")
        dispatched = await run_operations(generator.operations, answers, self.session)
        logger.success(f"Completed generator: {generator_id}")
        return dispatched

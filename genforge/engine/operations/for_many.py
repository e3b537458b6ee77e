"""``forMany``: run another generator's operations once per item."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from genforge.engine.session import Session
from genforge.errors import InvalidForManyItemsError, MissingOperationsError
from genforge.models import ForManyOperation
from genforge.utils import call_maybe_async, data_snapshot


async def for_many(operation: ForManyOperation, data: dict[str, Any], session: Session) -> int:
    """Fan out over ``operation.items``.

    For each item (in list order) the optional ``transformItem(item, index,
    parent_data)`` is applied, the result is merged over the parent data and
    the target generator's full operation list is run with it.  A failing
    sub-operation is handled with this operation's ``haltOnError``, not the
    sub-operation's own flag.

    Returns:
        The number of items in the resolved list, skipped items included.

    Raises:
        GeneratorNotFoundError: ``generatorId`` is not registered.
        MissingOperationsError: The target generator has no operations.
        InvalidForManyItemsError: ``items`` did not resolve to a list.
    """
    from genforge.engine.runner import run_operations

    logger = session.logger

    logger.info(f'Looking for generator: "{operation.generator_id}"')
    generator = session.registry.require_generator(operation.generator_id)
    if not generator.operations:
        raise MissingOperationsError(operation.generator_id)
    logger.info(f"Generator found: {generator.description} ({len(generator.operations)} operations)")

    if callable(operation.items):
        logger.debug("Items provided by function")
        items = await call_maybe_async(operation.items, data)
    else:
        items = operation.items
    if not isinstance(items, list):
        raise InvalidForManyItemsError(items)

    logger.info(f"Running generator for {len(items)} items")
    for index, item in enumerate(items):
        if item is None:
            logger.info(f"Item {index + 1} of {len(items)} is empty, skipping")
            continue
        logger.info(f"Processing item {index + 1} of {len(items)}")

        if operation.transform_item is not None:
            item = await call_maybe_async(operation.transform_item, item, index, data)
            logger.debug(f"Transformed item data: {data_snapshot(item)}")
        item_data = dict(item) if isinstance(item, Mapping) else {}

        await run_operations(
            generator.operations,
            data,
            session,
            item_data=item_data,
            halt_on_error=operation.halt_on_error,
        )

    logger.success(f"ForMany operation completed with {len(items)} items")
    return len(items)

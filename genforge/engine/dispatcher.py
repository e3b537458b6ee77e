"""Route a decorated operation to its handler.

Built-in types are looked up first; only a type outside that closed set is
resolved against the registered custom operations.  Registration refuses
built-in names, so a registered handler can never shadow one.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from genforge.engine.decorator import decorate
from genforge.engine.operations import amend, create, create_all, custom, for_many, registered
from genforge.engine.session import Session
from genforge.models import BaseOperation

Handler = Callable[[Any, dict[str, Any], Session], Awaitable[Any]]

BUILTIN_HANDLERS: dict[str, Handler] = {
    "create": create,
    "append": amend,
    "prepend": amend,
    "createAll": create_all,
    "forMany": for_many,
    "custom": custom,
}


async def dispatch(
    operation: Mapping[str, Any] | BaseOperation,
    data: dict[str, Any],
    session: Session,
) -> Any:
    """Decorate *operation* and run it with *data*.

    Raises:
        UnknownOperationTypeError: The type is neither built-in nor registered.
    """
    decorated = decorate(operation, session.registry)
    handler = BUILTIN_HANDLERS.get(decorated.type)
    if handler is None:
        return await registered(decorated, data, session)
    return await handler(decorated, data, session)

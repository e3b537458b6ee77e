"""Built-in operation handlers.

Every handler has the signature ``async (operation, data, session)``.
"""

from genforge.engine.operations.amend import amend
from genforge.engine.operations.create import create
from genforge.engine.operations.create_all import create_all
from genforge.engine.operations.custom import OperationContext, custom, registered
from genforge.engine.operations.for_many import for_many

__all__ = [
    "OperationContext",
    "amend",
    "create",
    "create_all",
    "custom",
    "for_many",
    "registered",
]

"""genforge -- template driven file generator.

Projects declare generators in a ``genforge.config.py`` file; each generator
asks a few questions and then runs an ordered list of file operations
(``create``, ``append``, ``prepend``, ``createAll``, ``forMany``, ``custom``
and user registered types) rendered with Jinja2.
"""

from genforge.api import ConfigAPI
from genforge.config import Config
from genforge.engine import GeneratorRunner, Session, TemplateRenderer, run_operations
from genforge.engine.operations import OperationContext
from genforge.errors import GenforgeError
from genforge.registry import Registry

__version__ = "0.1.0"

__all__ = [
    "Config",
    "ConfigAPI",
    "GenforgeError",
    "GeneratorRunner",
    "OperationContext",
    "Registry",
    "Session",
    "TemplateRenderer",
    "run_operations",
]

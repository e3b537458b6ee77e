"""genforge operation engine.

Applies a generator's operations (create, append, prepend, createAll,
forMany, custom and registered types) to a destination directory.

Quick usage::

    from genforge.engine import GeneratorRunner, Session

    session = Session(config, registry)
    await GeneratorRunner(session, prompt_provider=lambda prompts: {"name": "Sam"}).run("greeting")
"""

from genforge.engine.dispatcher import dispatch
from genforge.engine.runner import GeneratorRunner, run_operations
from genforge.engine.session import Session
from genforge.engine.templates import TemplateRenderer

__all__ = [
    "GeneratorRunner",
    "Session",
    "TemplateRenderer",
    "dispatch",
    "run_operations",
]

"""Configuration file discovery and loading.

A project declares its generators in ``genforge.config.py``, a plain Python
module exposing a ``configure(api)`` function (sync or async).  The loader
finds that file, imports it under a private module name and calls the
function with a :class:`~genforge.api.ConfigAPI` bound to a fresh registry.
"""

from __future__ import annotations

import importlib.util
import traceback
from pathlib import Path

from genforge.api import ConfigAPI
from genforge.config import CONFIG_FILE_NAME, Config
from genforge.errors import ConfigLoadError
from genforge.registry import Registry
from genforge.utils import Logger, call_maybe_async, error_message

CONFIGURE_FUNCTION = "configure"


def find_config_file(start: Path | None = None) -> Path | None:
    """Search *start* (default: cwd) and its parents for the config file."""
    directory = (start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


async def load_config(config: Config, logger: Logger | None = None) -> Registry:
    """Load the configuration file and return the populated registry.

    ``config.config_file_path`` is used when set, otherwise the file is
    searched for.  On success the path is stored back on *config*, which
    also makes the config directory the default destination base.

    Raises:
        ConfigLoadError: The file is missing, does not define ``configure``,
            ``configure`` raises, or no generator was registered.
    """
    logger = logger or Logger.from_config(config)
    logger.info("Loading configuration")

    if config.config_file_path is not None:
        path = config.config_file_path.resolve()
        if not path.is_file():
            logger.error("No config file found")
            raise ConfigLoadError(f"Config file not found: {path}")
    else:
        logger.debug(f"Searching for {CONFIG_FILE_NAME} from {Path.cwd()}")
        found = find_config_file()
        if found is None:
            logger.error("No config file found")
            raise ConfigLoadError(
                "Config file not found. Create one to define your generators, helpers, and other options."
            )
        path = found

    logger.info(f"Found config file: {path}")
    config.config_file_path = path
    logger.debug(f"Destination base path: {config.destination_dir}")

    configure = getattr(_import_config_module(path), CONFIGURE_FUNCTION, None)
    if not callable(configure):
        logger.error("Invalid config file format")
        raise ConfigLoadError(
            f"Config file invalid. It must define a {CONFIGURE_FUNCTION}(api) function: {path}."
        )

    registry = Registry()
    try:
        logger.info("Executing config function")
        await call_maybe_async(configure, ConfigAPI(config, registry))
    except Exception as exc:
        message = error_message(exc)
        logger.error(f"Error in config function: {message}")
        logger.debug("Error details:", "".join(traceback.format_exception(exc)))
        raise ConfigLoadError(f"Error in config loading. {message}") from exc

    generator_ids = registry.list_generator_ids()
    logger.info(f"Found {len(generator_ids)} generators")
    if not generator_ids:
        logger.error("No generators found in configuration")
        raise ConfigLoadError(
            "No generators were found in the loaded configuration. Please define at least one generator."
        )

    logger.debug(f"Generator IDs: {', '.join(generator_ids)}")
    logger.debug(f"Registered {len(registry.helpers)} helpers, {len(registry.partials)} partials")
    return registry


def _import_config_module(path: Path):
    spec = importlib.util.spec_from_file_location("_genforge_user_config", path)
    if spec is None or spec.loader is None:
        raise ConfigLoadError(f"Config file cannot be imported: {path}")
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise ConfigLoadError(f"Error importing config file {path}. {error_message(exc)}") from exc
    return module

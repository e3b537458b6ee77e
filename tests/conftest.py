"""Shared pytest fixtures for the genforge test suite.

Provides reusable fixtures for:
- Temporary config and destination directories
- A fresh registry and configuration API
- A session wired to a mocked logger
- Recording consoles for logger output
"""

from __future__ import annotations

import io
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from genforge.api import ConfigAPI
from genforge.config import CONFIG_FILE_NAME, Config
from genforge.engine.session import Session
from genforge.registry import Registry
from genforge.utils import Logger


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Directory holding the (not necessarily existing) config file and templates."""
    directory = tmp_path / "project"
    directory.mkdir()
    return directory.resolve()


@pytest.fixture
def dest_dir(tmp_path: Path) -> Path:
    """Destination base directory for generated files."""
    directory = tmp_path / "dest"
    directory.mkdir()
    return directory.resolve()


# ---------------------------------------------------------------------------
# Configuration & registry
# ---------------------------------------------------------------------------


@pytest.fixture
def config(config_dir: Path, dest_dir: Path) -> Config:
    return Config(
        config_file_path=config_dir / CONFIG_FILE_NAME,
        destination_base_path=dest_dir,
    )


@pytest.fixture
def registry() -> Registry:
    return Registry()


@pytest.fixture
def api(config: Config, registry: Registry) -> ConfigAPI:
    return ConfigAPI(config, registry)


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pytest.fixture
def logger() -> MagicMock:
    """A mock with the Logger interface; assert on its level methods."""
    return MagicMock(spec=Logger)


@pytest.fixture
def recording_consoles() -> tuple[Console, Console]:
    """(out, err) consoles that record output instead of writing to a tty."""
    out = Console(file=io.StringIO(), record=True, width=400, color_system=None)
    err = Console(file=io.StringIO(), record=True, width=400, color_system=None)
    return out, err


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


@pytest.fixture
def session(config: Config, registry: Registry, logger: MagicMock) -> Session:
    """A session whose renderer picks up helpers/partials registered beforehand.

    Tests that register helpers or partials should do so before requesting
    this fixture, or build their own ``Session``.
    """
    return Session(config, registry, logger=logger)


@pytest.fixture
def logged(logger: MagicMock):
    """Return the messages passed to one level of the mocked logger.

    ``logged("warn")`` -> every first positional argument of ``logger.warn``.
    """

    def _messages(level: str) -> list[str]:
        return [c.args[0] for c in getattr(logger, level).call_args_list if c.args]

    return _messages

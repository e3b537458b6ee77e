"""genforge run configuration.

Typed settings for a single generator run.  The configuration is built once
by the CLI entry point (or by tests) and then passed through the rest of the
system; nothing in the engine reads process-wide state.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_SELECTION_PROMPT = "Select from available generators:"
CONFIG_FILE_NAME = "genforge.config.py"

_TRUTHY = {"1", "true", "yes", "on"}


class Config(BaseModel):
    """Settings shared by the loader, the prompts and the operation engine.

    ``destination_base_path`` is the directory every relative output path is
    resolved against.  When it is left empty the directory containing the
    configuration file is used.
    """

    config_file_path: Path | None = Field(default=None)
    destination_base_path: Path | None = Field(default=None)
    selection_prompt: str = Field(default=DEFAULT_SELECTION_PROMPT)
    selected_generator: str = Field(default="")
    verbose: bool = Field(default=False, description="Log progress messages")
    debug: bool = Field(default=False, description="Log internal details")
    template_cache_size: int = Field(default=256, ge=1)

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def config_dir(self) -> Path:
        """Directory containing the configuration file (cwd when unset)."""
        if self.config_file_path is None:
            return Path.cwd()
        return self.config_file_path.resolve().parent

    @property
    def destination_dir(self) -> Path:
        """Absolute destination base directory."""
        if self.destination_base_path is None:
            return self.config_dir
        return self.destination_base_path.resolve()

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            GENFORGE_CONFIG, GENFORGE_DESTINATION, GENFORGE_VERBOSE,
            GENFORGE_DEBUG.
        """
        config_file = os.environ.get("GENFORGE_CONFIG")
        destination = os.environ.get("GENFORGE_DESTINATION")
        return cls(
            config_file_path=Path(config_file) if config_file else None,
            destination_base_path=Path(destination) if destination else None,
            verbose=os.environ.get("GENFORGE_VERBOSE", "").lower() in _TRUTHY,
            debug=os.environ.get("GENFORGE_DEBUG", "").lower() in _TRUTHY,
        )

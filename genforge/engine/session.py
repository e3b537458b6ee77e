"""Per-run state shared by every operation handler."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from genforge.config import Config
from genforge.engine.filesys import ensure_within_root
from genforge.engine.templates import TemplateRenderer
from genforge.registry import Registry
from genforge.utils import Logger


class Session:
    """Bundles the configuration, registry, renderer and logger of a run.

    The session is constructed after the configuration file has been loaded
    and is passed by reference to the run loop and to every handler.
    """

    def __init__(
        self,
        config: Config,
        registry: Registry,
        *,
        logger: Logger | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.registry = registry
        self.logger = logger or Logger.from_config(config)
        self.renderer = renderer or TemplateRenderer(
            filters=registry.helpers,
            partials=registry.partials,
            cache_size=config.template_cache_size,
        )

    @property
    def destination_dir(self) -> Path:
        return self.config.destination_dir

    @property
    def config_dir(self) -> Path:
        return self.config.config_dir

    def destination_path(self, path_template: str, data: Mapping[str, Any]) -> Path:
        """Render *path_template* and resolve it inside the destination base.

        Raises:
            PathTraversalError: If the rendered path escapes the base.
        """
        resolved = self.renderer.resolve_path(path_template, data, self.destination_dir)
        return ensure_within_root(resolved, self.destination_dir)

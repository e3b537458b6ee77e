"""Unit tests for configuration discovery and loading (genforge.loader)."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from genforge.config import CONFIG_FILE_NAME, Config
from genforge.errors import ConfigLoadError
from genforge.loader import find_config_file, load_config


pytestmark = pytest.mark.unit


VALID_CONFIG = textwrap.dedent(
    """
    def configure(api):
        api.set_selection_prompt("Pick a generator")
        api.add_helper("shout", lambda value: str(value).upper())
        api.add_generator(
            "greeting",
            {
                "description": "Say hi",
                "operations": [
                    {"type": "create", "filePath": "{{ name }}.txt", "templateStr": "Hi"},
                ],
            },
        )
    """
)


def _write_config(directory: Path, source: str) -> Path:
    path = directory / CONFIG_FILE_NAME
    path.write_text(source, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# find_config_file
# ---------------------------------------------------------------------------


class TestFindConfigFile:
    def test_finds_in_start_directory(self, tmp_path: Path):
        path = _write_config(tmp_path, VALID_CONFIG)
        assert find_config_file(tmp_path) == path.resolve()

    def test_finds_in_parent_directory(self, tmp_path: Path):
        path = _write_config(tmp_path, VALID_CONFIG)
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == path.resolve()

    def test_returns_none_when_absent(self, tmp_path: Path):
        nested = tmp_path / "empty"
        nested.mkdir()
        assert find_config_file(nested) is None


# ---------------------------------------------------------------------------
# load_config
# ---------------------------------------------------------------------------


class TestLoadConfig:
    @pytest.mark.asyncio
    async def test_loads_explicit_path(self, tmp_path: Path, logger):
        path = _write_config(tmp_path, VALID_CONFIG)
        config = Config(config_file_path=path)

        registry = await load_config(config, logger)

        assert registry.list_generator_ids() == ["greeting"]
        assert "shout" in registry.helpers
        assert config.selection_prompt == "Pick a generator"
        assert config.config_file_path == path.resolve()
        assert config.destination_dir == tmp_path.resolve()

    @pytest.mark.asyncio
    async def test_searches_from_cwd(self, tmp_path: Path, monkeypatch, logger):
        path = _write_config(tmp_path, VALID_CONFIG)
        nested = tmp_path / "src"
        nested.mkdir()
        monkeypatch.chdir(nested)
        config = Config()

        await load_config(config, logger)

        assert config.config_file_path == path.resolve()

    @pytest.mark.asyncio
    async def test_destination_override_kept(self, tmp_path: Path, logger):
        path = _write_config(tmp_path, VALID_CONFIG)
        config = Config(config_file_path=path, destination_base_path=tmp_path / "out")

        await load_config(config, logger)

        assert config.destination_dir == (tmp_path / "out").resolve()

    @pytest.mark.asyncio
    async def test_async_configure(self, tmp_path: Path, logger):
        source = VALID_CONFIG.replace("def configure(api):", "async def configure(api):")
        config = Config(config_file_path=_write_config(tmp_path, source))

        registry = await load_config(config, logger)

        assert registry.list_generator_ids() == ["greeting"]

    @pytest.mark.asyncio
    async def test_missing_explicit_file(self, tmp_path: Path, logger):
        config = Config(config_file_path=tmp_path / CONFIG_FILE_NAME)
        with pytest.raises(ConfigLoadError, match="Config file not found"):
            await load_config(config, logger)

    @pytest.mark.asyncio
    async def test_missing_configure_function(self, tmp_path: Path, logger):
        config = Config(config_file_path=_write_config(tmp_path, "VALUE = 1\n"))
        with pytest.raises(ConfigLoadError, match="must define a configure"):
            await load_config(config, logger)

    @pytest.mark.asyncio
    async def test_configure_raises(self, tmp_path: Path, logger):
        source = "def configure(api):\n    raise RuntimeError('kaboom')\n"
        config = Config(config_file_path=_write_config(tmp_path, source))

        with pytest.raises(ConfigLoadError, match="Error in config loading. kaboom") as exc_info:
            await load_config(config, logger)

        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_invalid_generator_reported(self, tmp_path: Path, logger):
        source = "def configure(api):\n    api.add_generator('g', {'description': 'x', 'operations': []})\n"
        config = Config(config_file_path=_write_config(tmp_path, source))

        with pytest.raises(ConfigLoadError, match="cannot be empty"):
            await load_config(config, logger)

    @pytest.mark.asyncio
    async def test_no_generators(self, tmp_path: Path, logger):
        source = "def configure(api):\n    api.add_helper('shout', str.upper)\n"
        config = Config(config_file_path=_write_config(tmp_path, source))

        with pytest.raises(ConfigLoadError, match="No generators were found"):
            await load_config(config, logger)

    @pytest.mark.asyncio
    async def test_syntax_error_in_config(self, tmp_path: Path, logger):
        config = Config(config_file_path=_write_config(tmp_path, "def configure(api)\n"))

        with pytest.raises(ConfigLoadError, match="Error importing config file"):
            await load_config(config, logger)

"""Unit tests for the configuration API (genforge.api).

Covers:
- Path and selection prompt accessors
- Generator validation on registration
- Helpers, partials (inline and from file)
- Custom operation registration and reserved names
"""

from __future__ import annotations

from pathlib import Path

import pytest

from genforge.api import ConfigAPI, validate_generator
from genforge.errors import ConfigValidationError, GenforgeError, GeneratorNotFoundError, ReadError
from genforge.models import GeneratorDefinition


pytestmark = pytest.mark.unit


def _create_op(**overrides):
    op = {"type": "create", "filePath": "out/{{ name }}.txt", "templateStr": "Hi {{ name }}"}
    op.update(overrides)
    return op


# ---------------------------------------------------------------------------
# Paths & selection prompt
# ---------------------------------------------------------------------------


class TestPaths:
    def test_paths(self, api: ConfigAPI, config_dir: Path, dest_dir: Path):
        assert api.get_config_file_path() == config_dir / "genforge.config.py"
        assert api.get_destination_base_path() == dest_dir

    def test_selection_prompt(self, api: ConfigAPI):
        assert api.get_selection_prompt() == "Select from available generators:"
        api.set_selection_prompt("What shall we build?")
        assert api.get_selection_prompt() == "What shall we build?"

    def test_blank_selection_prompt_rejected(self, api: ConfigAPI):
        with pytest.raises(ConfigValidationError):
            api.set_selection_prompt("   ")


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------


class TestAddGenerator:
    def test_registers_valid_generator(self, api: ConfigAPI):
        api.add_generator("greeting", {"description": "Say hi", "operations": [_create_op()]})

        generator = api.get_generator("greeting")
        assert isinstance(generator, GeneratorDefinition)
        assert generator.description == "Say hi"
        assert list(api.get_generators()) == ["greeting"]

    def test_unknown_generator(self, api: ConfigAPI):
        with pytest.raises(GeneratorNotFoundError):
            api.get_generator("nope")

    def test_blank_id_rejected(self, api: ConfigAPI):
        with pytest.raises(ConfigValidationError, match="generatorId"):
            api.add_generator("", {"description": "x", "operations": [_create_op()]})

    def test_missing_description(self, api: ConfigAPI):
        with pytest.raises(ConfigValidationError, match="description"):
            api.add_generator("g", {"operations": [_create_op()]})

    def test_empty_operations(self, api: ConfigAPI):
        with pytest.raises(ConfigValidationError, match="cannot be empty"):
            api.add_generator("g", {"description": "x", "operations": []})

    def test_missing_template_source(self, api: ConfigAPI):
        op = {"type": "create", "filePath": "a.txt"}
        with pytest.raises(ConfigValidationError, match="either templateStr or templateFilePath"):
            api.add_generator("g", {"description": "x", "operations": [op]})

    def test_empty_template_str_is_missing(self, api: ConfigAPI):
        op = {"type": "append", "filePath": "a.txt", "templateStr": ""}
        with pytest.raises(ConfigValidationError, match="either templateStr or templateFilePath"):
            api.add_generator("g", {"description": "x", "operations": [op]})

    def test_both_template_sources(self, api: ConfigAPI):
        op = _create_op(templateFilePath="tpl.j2")
        with pytest.raises(ConfigValidationError, match="only one of"):
            api.add_generator("g", {"description": "x", "operations": [op]})

    def test_skip_and_overwrite(self, api: ConfigAPI):
        op = _create_op(skipIfExists=True, overwrite=True)
        with pytest.raises(ConfigValidationError, match="skipIfExists and overwrite"):
            api.add_generator("g", {"description": "x", "operations": [op]})

    def test_empty_for_many_items(self, api: ConfigAPI):
        op = {"type": "forMany", "generatorId": "child", "items": []}
        with pytest.raises(ConfigValidationError, match="list cannot be empty"):
            api.add_generator("g", {"description": "x", "operations": [op]})

    def test_for_many_items_function_accepted(self, api: ConfigAPI):
        op = {"type": "forMany", "generatorId": "child", "items": lambda data: []}
        api.add_generator("g", {"description": "x", "operations": [op]})

    def test_operation_without_type(self, api: ConfigAPI):
        with pytest.raises(ConfigValidationError, match="type"):
            api.add_generator("g", {"description": "x", "operations": [{"filePath": "a"}]})

    def test_unregistered_custom_type_accepted(self, api: ConfigAPI):
        # Handlers may be registered after the generator.
        api.add_generator("g", {"description": "x", "operations": [{"type": "touch"}]})
        assert api.get_generator("g").operations == [{"type": "touch"}]

    def test_invalid_prompt(self, api: ConfigAPI):
        generator = {
            "description": "x",
            "prompts": [{"type": "list", "name": "pick"}],
            "operations": [_create_op()],
        }
        with pytest.raises(ConfigValidationError, match="choices are required"):
            api.add_generator("g", generator)

    def test_error_names_operation_index(self):
        generator = {"description": "x", "operations": [_create_op(), {"type": "create", "filePath": "b"}]}
        with pytest.raises(ConfigValidationError) as exc_info:
            validate_generator("g", generator)
        assert exc_info.value.field == "generators['g'].operations[1]"


# ---------------------------------------------------------------------------
# Helpers & partials
# ---------------------------------------------------------------------------


class TestHelpersAndPartials:
    def test_helper_roundtrip(self, api: ConfigAPI):
        api.add_helper("shout", str.upper)
        assert api.get_helper("shout") is str.upper
        assert api.get_helpers() == {"shout": str.upper}

    def test_helper_must_be_callable(self, api: ConfigAPI):
        with pytest.raises(ConfigValidationError, match="must be callable"):
            api.add_helper("shout", "upper")

    def test_helper_name_must_be_identifier(self, api: ConfigAPI):
        with pytest.raises(ConfigValidationError):
            api.add_helper("not valid", str.upper)

    def test_unknown_helper(self, api: ConfigAPI):
        with pytest.raises(GenforgeError, match='Helper "nope" not found') as exc_info:
            api.get_helper("nope")
        assert exc_info.value.code == "HELPER_NOT_FOUND"

    def test_partial_roundtrip(self, api: ConfigAPI):
        api.add_partial("header", "# {{ title }}")
        assert api.get_partial("header") == "# {{ title }}"
        assert api.get_partials() == {"header": "# {{ title }}"}

    def test_unknown_partial(self, api: ConfigAPI):
        with pytest.raises(GenforgeError) as exc_info:
            api.get_partial("nope")
        assert exc_info.value.code == "PARTIAL_NOT_FOUND"

    def test_partial_from_file(self, api: ConfigAPI, config_dir: Path):
        (config_dir / "partials").mkdir()
        (config_dir / "partials" / "footer.j2").write_text("-- {{ author }}\n", encoding="utf-8")

        api.add_partial_from_file("footer", "partials/footer.j2")

        assert api.get_partial("footer") == "-- {{ author }}\n"

    def test_partial_from_missing_file(self, api: ConfigAPI):
        with pytest.raises(ReadError):
            api.add_partial_from_file("footer", "partials/missing.j2")


# ---------------------------------------------------------------------------
# Custom operations
# ---------------------------------------------------------------------------


class TestAddOperation:
    def test_register_and_get(self, api: ConfigAPI):
        def touch(data, ctx):
            return None

        api.add_operation("touch", touch)
        assert api.get_operation("touch") is touch

    @pytest.mark.parametrize("name", ["create", "append", "prepend", "createAll", "forMany", "custom"])
    def test_builtin_names_reserved(self, api: ConfigAPI, name: str):
        with pytest.raises(ConfigValidationError, match="reserved"):
            api.add_operation(name, lambda data, ctx: None)

    def test_handler_must_be_callable(self, api: ConfigAPI):
        with pytest.raises(ConfigValidationError):
            api.add_operation("touch", None)

    def test_unknown_operation(self, api: ConfigAPI):
        with pytest.raises(GenforgeError, match='Operation "nope" is not registered'):
            api.get_operation("nope")

from pathlib import Path

import pytest
import ujson as json
from fixture_types import Item, Message

from structschema import DEFAULT_SCHEMA, Generator, GeneratorConfig, load_generator_config
from structschema.config import resolve_target, save_generator_config


def test_resolve_target_imports_attribute() -> None:
    assert resolve_target("fixture_types:Item") is Item
    assert resolve_target("datetime:datetime.now") is not None


@pytest.mark.parametrize(
    "target",
    ["fixture_types", "fixture_types:", ":Item", "no_such_module_xyz:Item", "fixture_types:Nope"],
)
def test_resolve_target_rejects_bad_targets(target: str) -> None:
    with pytest.raises(ValueError):
        resolve_target(target)


def test_config_roundtrip_yaml_and_json(tmp_path: Path) -> None:
    config = GeneratorConfig(
        root="fixture_types:Message",
        definitions={"item": "fixture_types:Item"},
        indent=4,
    )
    for suffix in (".yaml", ".json"):
        path = tmp_path / f"schema{suffix}"
        save_generator_config(config, path)
        loaded = load_generator_config(path)
        assert loaded == config
        assert loaded.schema_uri == DEFAULT_SCHEMA


def test_load_config_rejects_unknown_keys(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"root": "fixture_types:Item", "colour": "red"}))
    with pytest.raises(ValueError, match="Invalid config"):
        load_generator_config(path)


def test_empty_yaml_config_uses_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yml"
    path.write_text("")
    config = load_generator_config(path)
    assert config.root is None
    assert config.definitions == {}
    assert config.indent == 2


def test_generator_from_config() -> None:
    config = GeneratorConfig(
        schema="urn:example",
        root="fixture_types:Message",
        definitions={"item": "fixture_types:Item"},
    )
    generator = Generator.from_config(config)
    assert generator.root is Message
    assert generator.definitions == {"item": Item}
    document = generator.generate()
    assert document.schema == "urn:example"
    assert set(document.definitions) == {"item"}

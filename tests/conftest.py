import pytest
from fixture_types import Child, Item, NestedItem, OtherDefinedType, Parent

from structschema import Generator, SchemaBuilder
from structschema.registry import DefinitionRegistry


@pytest.fixture()
def builder() -> SchemaBuilder:
    return SchemaBuilder()


@pytest.fixture()
def registry() -> DefinitionRegistry:
    return DefinitionRegistry.from_mapping(
        {"parent": Parent(), "child": Child, "item": Item(), "nestedItem": NestedItem}
    )


@pytest.fixture()
def domain_generator() -> Generator:
    return Generator().with_definitions({"nestedItem": NestedItem(), "other": OtherDefinedType()})

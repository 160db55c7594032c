import datetime as dt
import decimal
from collections.abc import Mapping, Sequence
from typing import Any, Optional, Union

import pytest
from fixture_types import Color, Item, Level

from structschema.kinds import (
    Kind,
    is_primitive,
    json_type,
    mapping_value,
    sequence_item,
    unwrap_optional,
)


@pytest.mark.parametrize(
    ("hint", "expected"),
    [
        (bool, ("boolean", "")),
        (int, ("integer", "")),
        (Level, ("integer", "")),
        (float, ("number", "")),
        (decimal.Decimal, ("number", "")),
        (str, ("string", "")),
        (Color, ("string", "")),
        (dt.datetime, ("string", "date-time")),
        (bytes, ("string", "")),
        (list[int], ("array", "")),
        (dict[str, int], ("object", "")),
        (Item, ("object", "")),
        (Any, ("", "")),
        (object, ("", "")),
    ],
)
def test_kind_mapping_table(hint: Any, expected: tuple[str, str]) -> None:
    assert json_type(hint)[:2] == expected


def test_bool_is_not_classified_as_integer() -> None:
    assert json_type(bool)[2] is Kind.BOOLEAN


@pytest.mark.parametrize("hint", [int | None, Optional[str], Union[Item, None]])
def test_optional_forms(hint: Any) -> None:
    assert json_type(hint)[2] is Kind.OPTIONAL
    assert unwrap_optional(hint) is not None


def test_multi_member_union_is_opaque() -> None:
    assert json_type(Union[int, str])[2] is Kind.OPAQUE
    assert unwrap_optional(Union[int, str, None]) is None


def test_primitives_include_temporal_but_not_bytes() -> None:
    assert is_primitive(dt.datetime)
    assert is_primitive(str)
    assert not is_primitive(bytes)
    assert not is_primitive(Item)


@pytest.mark.parametrize(
    ("hint", "item"),
    [
        (list[str], str),
        (Sequence[int], int),
        (set[float], float),
        (tuple[int, ...], int),
        (tuple[int, int], int),
        (tuple[int, str], Any),
        (list, Any),
    ],
)
def test_sequence_item(hint: Any, item: Any) -> None:
    assert json_type(hint)[2] is Kind.SEQUENCE
    assert sequence_item(hint) == item


def test_mapping_value() -> None:
    assert mapping_value(dict[str, bool]) is bool
    assert mapping_value(Mapping[str, Item]) is Item
    assert mapping_value(dict) is Any

from dataclasses import dataclass, field

import pytest

from geodemos.jsonconvert import dumps, dumps_tabbed, from_json, to_json
from geodemos.jsonvalue import JsonValue, parse


@dataclass
class Point:
    x: int = 0
    y: float = 0.0


@dataclass
class Shape:
    name: str = ""
    visible: bool = False
    corners: list = field(default_factory=list)
    origin: Point = field(default_factory=Point)


@dataclass(frozen=True)
class Frozen:
    a: int = 0
    b: str = ""


def test_dumps_scalars():
    assert dumps(None) == "null"
    assert dumps(True) == "true"
    assert dumps(False) == "false"
    assert dumps(42) == "42"


def test_dumps_escapes_quote_and_backslash():
    assert dumps('a"b') == '"a\\"b"'
    assert dumps("a\\b") == '"a\\\\b"'


def test_dumps_escapes_control_characters():
    assert dumps("\x0b") == '"\\u000B"'
    assert dumps("\n\t") == '"\\n\\t"'
    assert dumps("\x7f") == '"\\u007F"'


def test_dumps_compact_has_no_spaces_and_sorted_keys():
    text = dumps({"b": [1, 2], "a": "x"})
    assert " " not in text
    assert text.index('"a"') < text.index('"b"')


@pytest.mark.parametrize(
    "doc",
    ['{"a":[1,2,{"b":null}],"c":"x\\ny","d":-1.5e3}', "[]", "{}", '"\\u00e9"', "[true,false]"],
)
def test_dumps_round_trip(doc):
    val = parse(doc)
    assert parse(dumps(val)) == val


def test_dumps_keeps_number_text():
    assert dumps(parse("[1.50e+3]")) == "[1.50e+3]"


def test_tabbed_flat_array_stays_on_one_line():
    val = parse("[1,2,3]")
    assert dumps_tabbed(val, 4) == dumps(val)


def test_tabbed_empty_object():
    assert dumps_tabbed({}, 4) == "{}"


def test_tabbed_object_layout():
    assert dumps_tabbed({"a": [1]}, 2) == '{\n  "a": [1]\n}'


@pytest.mark.parametrize("width", [0, 2, 4])
def test_tabbed_round_trip(width):
    val = parse('{"list":[[1],{"k":"v"}],"empty":{},"n":null}')
    assert parse(dumps_tabbed(val, width)) == val


def test_tabbed_indent_applies_to_closing_brace():
    text = dumps_tabbed({"a": 1}, 4, 3)
    assert text.splitlines()[-1] == "   }"
    assert text.splitlines()[1].startswith(" " * 7)


def test_tabbed_rejects_negative_width():
    with pytest.raises(ValueError):
        dumps_tabbed([1], -1)


def test_to_json_dataclass():
    val = to_json(Point(3, 2.5))
    assert val == JsonValue({"x": 3, "y": 2.5})
    assert val["x"].number(0) == 3


def test_to_json_nested_and_tuple():
    val = to_json(Shape("tri", True, [(0, 1), (2, 3)], Point(1, 0.5)))
    assert val["corners"][1][0].number(0) == 2
    assert val["origin"]["y"].number(0.0) == 0.5
    assert val["visible"].is_true


def test_to_json_rejects_non_string_keys():
    with pytest.raises(TypeError):
        to_json({1: "a"})


def test_to_json_rejects_unknown_type():
    with pytest.raises(TypeError):
        to_json(object())


def test_from_json_dataclass_round_trip():
    original = Shape("quad", True, [1, 2, 3], Point(4, 1.25))
    restored = from_json(Shape(corners=[0]), to_json(original))
    assert restored == original


def test_from_json_missing_fields_take_defaults():
    p = Point(5, 6.0)
    result = from_json(p, parse("{}"))
    assert result is p
    assert p == Point()


def test_from_json_frozen_dataclass():
    result = from_json(Frozen(), parse('{"a":7,"b":"s"}'))
    assert result == Frozen(7, "s")


def test_from_json_scalars():
    assert from_json(True, parse("false")) is False
    assert from_json(False, parse("true")) is True
    assert from_json("old", parse("5")) == ""
    assert from_json(0, parse('"text"')) == 0
    assert from_json(0, parse("12.9")) == 12
    assert from_json(0.0, parse("2.5")) == 2.5


def test_from_json_list_resizes_in_place():
    items = [0, 0, 0, 0]
    result = from_json(items, parse("[7,8]"))
    assert result is items
    assert items == [7, 8]


def test_from_json_tuple_keeps_length():
    assert from_json((0, 0, 0), parse("[1,2]")) == (1, 2, 0)


def test_from_json_dict_updates_members():
    target = {"keep": 1, "change": 2}
    from_json(target, parse('{"change":5,"new":6}'))
    assert target == {"keep": 1, "change": 5, "new": 6}


def test_from_json_without_template():
    assert from_json(None, parse('{"a":[1,2.5,"s",null]}')) == {"a": [1, 2.5, "s", None]}


def test_from_json_accepts_type_target():
    assert from_json(Point, parse('{"x":9}')) == Point(9, 0.0)


def test_from_json_unknown_target():
    with pytest.raises(TypeError):
        from_json(object(), parse("1"))
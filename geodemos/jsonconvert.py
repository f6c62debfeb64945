"""Printing JSON values and converting Python objects to and from them.

Compact printing writes no whitespace at all.  Tabbed printing puts every
member of a nested array or object on its own line; an array that holds no
arrays or objects stays on one line.

Conversion maps ``bool``, numbers, ``str``, lists and tuples, mappings with
string keys and dataclass instances onto JSON values and back again.
"""

from __future__ import annotations

import dataclasses
import numbers
from collections.abc import Mapping
from typing import Any

from geodemos.jsonvalue import JsonValue

_NAMED_ESCAPES = {8: "\\b", 9: "\\t", 10: "\\n", 12: "\\f", 13: "\\r"}


def _escape_char(ch: str) -> str:
    code = ord(ch)
    if code < 32:
        return _NAMED_ESCAPES.get(code, f"\\u{code:04X}")
    if ch == '"':
        return '\\"'
    if ch == "\\":
        return "\\\\"
    if code == 127:
        return "\\u007F"
    return ch


def _escaped(text: str) -> str:
    return '"' + "".join(_escape_char(ch) for ch in text) + '"'


def _as_value(value: Any) -> JsonValue:
    return value if isinstance(value, JsonValue) else to_json(value)


def _compact(val: JsonValue) -> str:
    if val.is_null:
        return "null"
    if val.is_false:
        return "false"
    if val.is_true:
        return "true"
    if val.is_string:
        return _escaped(val.contents)
    if val.is_number:
        return val.contents
    if val.is_array:
        return "[" + ",".join(_compact(item) for item in val.array) + "]"
    members = (_escaped(key) + ":" + _compact(item) for key, item in val.object.items())
    return "{" + ",".join(members) + "}"


def dumps(value: Any) -> str:
    """JSON text of ``value`` with no whitespace; objects in key order."""
    return _compact(_as_value(value))


def _tabbed(val: JsonValue, tab_width: int, indent: int) -> str:
    space = indent + tab_width
    if val.is_array:
        items = val.array
        if not any(item.is_array or item.is_object for item in items):
            return _compact(val)
        body = ",".join(
            "\n" + " " * space + _tabbed(item, tab_width, space) for item in items
        )
        return "[" + body + "\n" + " " * indent + "]"
    if val.is_object:
        members = val.object
        if not members:
            return "{}"
        body = ",".join(
            "\n" + " " * space + _escaped(key) + ": " + _tabbed(item, tab_width, space)
            for key, item in members.items()
        )
        return "{" + body + "\n" + " " * indent + "}"
    return _compact(val)


def dumps_tabbed(value: Any, tab_width: int = 4, indent: int = 0) -> str:
    """Readable JSON text, nesting indented by ``tab_width`` spaces.

    ``indent`` is the indentation of the line the value starts on.
    """
    if tab_width < 0 or indent < 0:
        raise ValueError("tab width and indent must not be negative")
    return _tabbed(_as_value(value), tab_width, indent)


def to_json(obj: Any) -> JsonValue:
    """Convert a Python object to a JSON value.

    Dataclass instances become objects holding their fields.
    """
    if isinstance(obj, JsonValue):
        return JsonValue(obj)
    if obj is None or isinstance(obj, (bool, str)):
        return JsonValue(obj)
    if isinstance(obj, numbers.Integral):
        return JsonValue(int(obj))
    if isinstance(obj, numbers.Real):
        return JsonValue(float(obj))
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return JsonValue(
            {f.name: to_json(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
        )
    if isinstance(obj, Mapping):
        result: dict[str, JsonValue] = {}
        for key, item in obj.items():
            if not isinstance(key, str):
                raise TypeError("JSON object keys must be strings")
            result[key] = to_json(item)
        return JsonValue(result)
    if isinstance(obj, (list, tuple)):
        return JsonValue([to_json(item) for item in obj])
    raise TypeError(f"cannot convert {type(obj).__name__} to JSON")


def _to_python(val: JsonValue) -> Any:
    """Plain Python value for a JSON value when there is no template."""
    if val.is_null:
        return None
    if val.is_true:
        return True
    if val.is_false:
        return False
    if val.is_string:
        return val.contents
    if val.is_number:
        text = val.contents
        if any(ch in text for ch in ".eE"):
            return float(text)
        return int(text)
    if val.is_array:
        return [_to_python(item) for item in val.array]
    return {key: _to_python(item) for key, item in val.object.items()}


def _template_for_new(existing: list[Any]) -> Any:
    return existing[0] if existing else None


def from_json(target: Any, value: Any) -> Any:
    """Read ``value`` into something shaped like ``target`` and return it.

    ``target`` decides the type of the result.  A ``bool`` is true only for
    JSON ``true``; a number or string takes the default of its type when the
    value is of another kind; a tuple keeps its length; a list takes the
    length of the JSON array; a mapping gains or updates the members present
    in the JSON object; every field of a dataclass is read from the member of
    the same name, an absent member counting as null.  Lists, mappings and
    mutable dataclasses are updated in place.  A ``None`` target takes the
    plain Python form of the value, and a type is used through an instance
    made with no arguments.
    """
    val = _as_value(value)
    if isinstance(target, type):
        target = target()
    if target is None:
        return _to_python(val)
    if isinstance(target, bool):
        return val.is_true
    if isinstance(target, str):
        return val.string()
    if isinstance(target, numbers.Integral):
        return type(target)(val.number(0))
    if isinstance(target, numbers.Real):
        return type(target)(val.number(0.0))
    if dataclasses.is_dataclass(target):
        updates = {
            f.name: from_json(getattr(target, f.name), val[f.name])
            for f in dataclasses.fields(target)
        }
        params = getattr(type(target), "__dataclass_params__", None)
        if params is not None and params.frozen:
            return dataclasses.replace(target, **updates)
        for name, item in updates.items():
            setattr(target, name, item)
        return target
    if isinstance(target, tuple):
        return type(target)(from_json(item, val[i]) for i, item in enumerate(target))
    if isinstance(target, list):
        items = val.array
        template = _template_for_new(target)
        result = [
            from_json(target[i] if i < len(target) else template, item)
            for i, item in enumerate(items)
        ]
        target[:] = result
        return target
    if isinstance(target, dict):
        template = _template_for_new(list(target.values()))
        for key, item in val.object.items():
            target[key] = from_json(target.get(key, template), item)
        return target
    raise TypeError(f"cannot read JSON into {type(target).__name__}")
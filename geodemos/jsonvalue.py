"""In-memory JSON values and a strict JSON parser.

Numbers keep their JSON text exactly as written.  Objects behave like an
ordered map: keys are reported in sorted order, and a duplicate key in parsed
text keeps its first value.
"""

from __future__ import annotations

import enum
import re
from pathlib import Path
from typing import Any, Iterator, Mapping

_NUMBER_RE = re.compile(r"-?(0|[1-9][0-9]*)(\.[0-9]+)?([eE][+-]?[0-9]+)?")
_WHITESPACE = " \t\n\v\f\r"
_LEADING_INT_RE = re.compile(r"\s*([+-]?[0-9]+)")


class Kind(enum.Enum):
    """The seven categories of JSON value."""

    STRING = "string"
    NUMBER = "number"
    OBJECT = "object"
    ARRAY = "array"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"


class JsonParseError(ValueError):
    """Raised when text is not valid JSON."""

    def __init__(self, what: str) -> None:
        super().__init__("json parse error - " + what)


def is_json_number(text: str) -> bool:
    """True if ``text`` is exactly one number in JSON syntax."""
    return _NUMBER_RE.fullmatch(text) is not None


class JsonValue:
    """A JSON value: null, boolean, number, string, array or object.

    Plain Python values are converted on construction: ``None``, ``bool``,
    ``int``, ``float``, ``str``, mappings with string keys, lists and tuples.
    """

    __slots__ = ("_kind", "_contents", "_obj", "_arr")

    def __init__(self, value: Any = None) -> None:
        self._kind = Kind.NULL
        self._contents = ""
        self._obj: dict[str, JsonValue] = {}
        self._arr: list[JsonValue] = []
        if isinstance(value, JsonValue):
            self._kind = value._kind
            self._contents = value._contents
            self._obj = dict(value._obj)
            self._arr = list(value._arr)
        elif value is None:
            pass
        elif isinstance(value, bool):
            self._kind = Kind.TRUE if value else Kind.FALSE
        elif isinstance(value, int):
            self._kind = Kind.NUMBER
            self._contents = str(value)
        elif isinstance(value, float):
            self._kind = Kind.NUMBER
            self._contents = f"{value:g}"
        elif isinstance(value, str):
            self._kind = Kind.STRING
            self._contents = value
        elif isinstance(value, Mapping):
            self._kind = Kind.OBJECT
            for key, item in value.items():
                if not isinstance(key, str):
                    raise TypeError("JSON object keys must be strings")
                self._obj[key] = JsonValue(item)
        elif isinstance(value, (list, tuple)):
            self._kind = Kind.ARRAY
            self._arr = [JsonValue(item) for item in value]
        else:
            raise TypeError(f"cannot make a JSON value from {type(value).__name__}")

    @classmethod
    def _raw(cls, kind: Kind, contents: str = "") -> JsonValue:
        val = cls()
        val._kind = kind
        val._contents = contents
        return val

    @classmethod
    def from_number(cls, num: str) -> JsonValue:
        """A number value holding the JSON number text ``num`` verbatim."""
        if not is_json_number(num):
            raise ValueError(f"not a JSON number: {num!r}")
        return cls._raw(Kind.NUMBER, num)

    @property
    def kind(self) -> Kind:
        return self._kind

    @property
    def contents(self) -> str:
        """Text of a string, JSON text of a number, empty otherwise."""
        return self._contents

    @property
    def object(self) -> dict[str, JsonValue]:
        """Name/value pairs in key order, empty unless an object."""
        return {key: self._obj[key] for key in sorted(self._obj)}

    @property
    def array(self) -> list[JsonValue]:
        """Elements, empty unless an array."""
        return list(self._arr)

    @property
    def is_string(self) -> bool:
        return self._kind is Kind.STRING

    @property
    def is_number(self) -> bool:
        return self._kind is Kind.NUMBER

    @property
    def is_object(self) -> bool:
        return self._kind is Kind.OBJECT

    @property
    def is_array(self) -> bool:
        return self._kind is Kind.ARRAY

    @property
    def is_true(self) -> bool:
        return self._kind is Kind.TRUE

    @property
    def is_false(self) -> bool:
        return self._kind is Kind.FALSE

    @property
    def is_null(self) -> bool:
        return self._kind is Kind.NULL

    def __getitem__(self, key: int | str) -> JsonValue:
        """Array element or object member; null when absent."""
        if isinstance(key, str):
            return self._obj.get(key, JsonValue())
        if isinstance(key, int) and not isinstance(key, bool):
            if 0 <= key < len(self._arr):
                return self._arr[key]
            return JsonValue()
        raise TypeError("JSON values are indexed by int or str")

    def __iter__(self) -> Iterator[JsonValue]:
        return iter(self._arr)

    def __len__(self) -> int:
        return len(self._obj) if self.is_object else len(self._arr)

    def bool_or_default(self, default: bool) -> bool:
        if self.is_true:
            return True
        if self.is_false:
            return False
        return default

    def string(self, default: str = "") -> str:
        """The string, or ``default`` if this is not a string."""
        return self._contents if self.is_string else default

    def number(self, default: int | float = 0) -> int | float:
        """The number read as the type of ``default``, or ``default``.

        Read as an integer, only the leading integer part counts.
        """
        if not self.is_number:
            return default
        if isinstance(default, int) and not isinstance(default, bool):
            match = _LEADING_INT_RE.match(self._contents)
            return type(default)(int(match.group(1))) if match else type(default)()
        return type(default)(float(self._contents))

    def set(self, key: str, val: Any) -> None:
        """Set an object member, replacing any earlier value."""
        if not self.is_object:
            raise TypeError("set() needs an object value")
        self._obj[key] = JsonValue(val)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonValue):
            return NotImplemented
        return (
            self._kind is other._kind
            and self._contents == other._contents
            and self._obj == other._obj
            and self._arr == other._arr
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self.is_object:
            return f"JsonValue({self.object!r})"
        if self.is_array:
            return f"JsonValue({self._arr!r})"
        if self._kind in (Kind.STRING, Kind.NUMBER):
            return f"JsonValue({self._kind.value}:{self._contents!r})"
        return f"JsonValue({self._kind.value})"


def _decode_hex(ch: str) -> int:
    if "0" <= ch <= "9":
        return ord(ch) - ord("0")
    if "A" <= ch <= "F":
        return 10 + ord(ch) - ord("A")
    if "a" <= ch <= "f":
        return 10 + ord(ch) - ord("a")
    raise JsonParseError("invalid hex digit: " + ch)


_SIMPLE_ESCAPES = {
    '"': '"', "\\": "\\", "/": "/", "b": "\b",
    "f": "\f", "n": "\n", "r": "\r", "t": "\t",
}


def _decode_string(raw: str) -> str:
    if any(ord(ch) < 32 or ord(ch) == 127 for ch in raw):
        raise JsonParseError("control character found in string literal")
    if "\\" not in raw:
        return raw
    out: list[str] = []
    pos = 0
    end = len(raw)
    while pos < end:
        ch = raw[pos]
        if ch != "\\":
            out.append(ch)
            pos += 1
            continue
        pos += 1
        esc = raw[pos] if pos < end else ""
        if esc in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[esc])
            pos += 1
        elif esc == "u":
            if pos + 5 > end:
                raise JsonParseError("incomplete escape sequence: " + raw[pos - 1:])
            code = 0
            for digit in raw[pos + 1:pos + 5]:
                code = (code << 4) | _decode_hex(digit)
            out.append(chr(code))
            pos += 5
        else:
            raise JsonParseError("invalid escape sequence")
    return "".join(out)


def _is_ascii_alpha(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_number_char(ch: str) -> bool:
    return _is_ascii_alpha(ch) or ("0" <= ch <= "9") or ch in "+-."


def _tokenize(text: str) -> list[tuple[str, str]]:
    tokens: list[tuple[str, str]] = []
    pos = 0
    end = len(text)
    while True:
        while pos < end and text[pos] in _WHITESPACE:
            pos += 1
        if pos == end:
            tokens.append(("$", ""))
            return tokens
        ch = text[pos]
        if ch in "[],{}:":
            tokens.append((ch, ""))
            pos += 1
        elif ch == '"':
            start = pos + 1
            scan = start
            while scan < end and text[scan] != '"':
                scan += 2 if text[scan] == "\\" else 1
            if scan >= end:
                raise JsonParseError("String missing closing quote")
            tokens.append(('"', _decode_string(text[start:scan])))
            pos = scan + 1
        elif ch == "-" or "0" <= ch <= "9":
            scan = pos
            while scan < end and _is_number_char(text[scan]):
                scan += 1
            num = text[pos:scan]
            if not is_json_number(num):
                raise JsonParseError("Invalid number: " + num)
            tokens.append(("#", num))
            pos = scan
        elif _is_ascii_alpha(ch):
            scan = pos
            while scan < end and _is_ascii_alpha(text[scan]):
                scan += 1
            word = text[pos:scan]
            if word == "true":
                tokens.append(("t", ""))
            elif word == "false":
                tokens.append(("f", ""))
            elif word == "null":
                tokens.append(("n", ""))
            else:
                raise JsonParseError("Invalid token: " + word)
            pos = scan
        else:
            raise JsonParseError(f"Invalid character: '{ch}'")


class _Parser:
    def __init__(self, tokens: list[tuple[str, str]]) -> None:
        self._tokens = tokens
        self._pos = 0

    def _peek(self) -> tuple[str, str]:
        return self._tokens[self._pos]

    def match(self, kind: str) -> bool:
        if self._peek()[0] != kind:
            return False
        self._pos += 1
        return True

    def expect(self, kind: str, what: str) -> None:
        if not self.match(kind):
            raise JsonParseError("Syntax error: Expected " + what)

    def value(self) -> JsonValue:
        kind, text = self._peek()
        self._pos += 1
        if kind == "n":
            return JsonValue()
        if kind == "f":
            return JsonValue(False)
        if kind == "t":
            return JsonValue(True)
        if kind == '"':
            return JsonValue(text)
        if kind == "#":
            return JsonValue.from_number(text)
        if kind == "[":
            arr = JsonValue([])
            if self.match("]"):
                return arr
            while True:
                arr._arr.append(self.value())
                if self.match("]"):
                    return arr
                self.expect(",", ", or ]")
        if kind == "{":
            obj = JsonValue({})
            if self.match("}"):
                return obj
            while True:
                name = self._peek()[1]
                self.expect('"', "string")
                self.expect(":", ":")
                item = self.value()
                obj._obj.setdefault(name, item)
                if self.match("}"):
                    return obj
                self.expect(",", ", or }")
        raise JsonParseError("Expected value")


def parse(text: str) -> JsonValue:
    """Parse JSON text into a value; raise JsonParseError if it is invalid."""
    parser = _Parser(_tokenize(text))
    val = parser.value()
    parser.expect("$", "end-of-stream")
    return val


def parse_file(path: str | Path) -> JsonValue:
    """Parse the JSON document stored in the file at ``path``."""
    try:
        text = Path(path).read_bytes().decode("utf-8")
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"File Not Found: {path}") from exc
    return parse(text)
"""
Flagset typed values.

Overview
- Kind: closed enumeration of the supported flag payloads (int, float, bool, string).
- Value: an immutable tagged container pairing a Kind with its payload. It knows how
  to parse text into a new value of the same kind and how to render itself back.

Parsing rules
- int    → optional sign followed by base-10 digits; must fit the signed 64-bit range.
- float  → decimal or scientific notation, plus inf/infinity/nan (any case).
- bool   → true/1/yes/on or false/0/no/off (any case).
- string → verbatim; never fails.

Failures raise ValueParseError (a ValueError) whose message is the short,
user-facing reason (e.g., "not an integer"). Reading a value through the wrong
Python type raises KindMismatchError (a TypeError): that is a caller bug, not a
user-input error.

Quick example
    >>> port = Value(Kind.INT, 8080)
    >>> port.parse("9090").render()
    '9090'
    >>> port.get(int)
    8080
"""
import math
import re
from enum import Enum
from typing import final

from rich.text import Text

from .utils import *

INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+")
_FLOAT = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE
)
_TRUTHY = frozenset(("true", "1", "yes", "on"))
_FALSY = frozenset(("false", "0", "no", "off"))


class ValueParseError(ValueError):
    """
    Raised when text cannot be converted into a value's kind.

    Attributes
    - message: short reason shown to users ("not a float", "out of range for int64", ...).
    - kind: the Kind that was targeted.
    - text: the offending input.
    """

    def __init__(self, message, /, kind, text):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.text = text


class KindMismatchError(TypeError):
    """Raised when a value is read through a Python type that does not match its kind."""


class Kind(Enum):
    """
    supported flag kinds.

    the enum value doubles as the user-facing type name used in usage output.
    """
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    STRING = "string"

    @property
    def typename(self):
        return self.value

    @property
    def pytype(self):
        """Python type that holds payloads of this kind."""
        return {
            Kind.INT: int,
            Kind.FLOAT: float,
            Kind.BOOL: bool,
            Kind.STRING: str,
        }[self]

    @classmethod
    def infer(cls, payload, /):
        """
        Return the kind matching a Python payload.

        bool is checked before int because bool is an int subclass.
        """
        if isinstance(payload, bool):
            return cls.BOOL
        if isinstance(payload, int):
            return cls.INT
        if isinstance(payload, float):
            return cls.FLOAT
        if isinstance(payload, str):
            return cls.STRING
        raise TypeError(f"unsupported flag payload type {type(payload).__name__!r}")


def _sanitize_payload(kind, payload, /):
    """
    Validate a Python payload against a kind and return its normalized form.

    - int payloads are accepted for float (widened); bool is never accepted as a number.
    - int payloads outside the signed 64-bit range raise ValueError.
    """
    match kind:
        case Kind.INT:
            if not isinstance(payload, int) or isinstance(payload, bool):
                raise TypeError(f"int value must be an integer, not {type(payload).__name__!r}")
            if not INT64_MIN <= payload <= INT64_MAX:
                raise ValueError("int value is out of range for int64")
            return payload
        case Kind.FLOAT:
            if not isinstance(payload, int | float) or isinstance(payload, bool):
                raise TypeError(f"float value must be a number, not {type(payload).__name__!r}")
            return float(payload)
        case Kind.BOOL:
            if not isinstance(payload, bool):
                raise TypeError(f"bool value must be a boolean, not {type(payload).__name__!r}")
            return payload
        case Kind.STRING:
            if not isinstance(payload, str):
                raise TypeError(f"string value must be a string, not {type(payload).__name__!r}")
            return payload
        case _:
            raise TypeError("value kind must be a Kind member")


def _parse_int(text):
    if not _INTEGER.fullmatch(text):
        raise ValueParseError("not an integer", kind=Kind.INT, text=text)
    try:
        number = int(text)
    except ValueError:  # digit-count guard of int() on absurdly long inputs
        raise ValueParseError("out of range for int64", kind=Kind.INT, text=text) from None
    if not INT64_MIN <= number <= INT64_MAX:
        raise ValueParseError("out of range for int64", kind=Kind.INT, text=text)
    return number


def _parse_float(text):
    if not _FLOAT.fullmatch(text):
        raise ValueParseError("not a float", kind=Kind.FLOAT, text=text)
    number = float(text)
    # A finite literal that rounds to infinity overflowed.
    if math.isinf(number) and "inf" not in text.lower():
        raise ValueParseError("out of range for float", kind=Kind.FLOAT, text=text)
    return number


def _parse_bool(text):
    if (lowered := text.lower()) in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ValueParseError(
        "invalid boolean value, accepts true/false, 1/0, yes/no, on/off",
        kind=Kind.BOOL,
        text=text
    )


_PARSERS = {
    Kind.INT: _parse_int,
    Kind.FLOAT: _parse_float,
    Kind.BOOL: _parse_bool,
    Kind.STRING: str,
}


@final
class Value:
    """
    Immutable tagged payload of one of the supported kinds.

    The kind is fixed at construction; parse() always targets it and returns a
    fresh Value, so a flag's current and default values can never drift apart
    in kind.
    """

    __slots__ = ("_kind", "_payload")

    kind = mirror("kind")
    payload = mirror("payload")

    def __init__(self, kind, payload=Unset, /):
        """
        Create a value of the given kind.

        Parameters
        - kind: Kind
        - payload: Python object matching the kind. When omitted, the kind's zero
          value is used (0, 0.0, False, "").
        """
        if not isinstance(kind, Kind):
            raise TypeError("Value() first argument must be a Kind")
        self._kind = kind
        self._payload = _sanitize_payload(kind, coalesce(payload, kind.pytype()))

    @classmethod
    def of(cls, payload, /):
        """Build a value from a Python payload, inferring its kind."""
        return cls(Kind.infer(payload), payload)

    def parse(self, text, /):
        """
        Convert text into a new value of this value's kind.

        Raises
        - TypeError: when text is not a string.
        - ValueParseError: when the text does not denote a value of this kind.
        """
        if not isinstance(text, str):
            raise TypeError("parse() argument must be a string")
        return type(self)(self._kind, _PARSERS[self._kind](text))

    def render(self):
        """
        Return the canonical textual form.

        bool renders as "true"/"false", float as the shortest round-tripping
        decimal, int in base 10, string verbatim.
        """
        match self._kind:
            case Kind.BOOL:
                return "true" if self._payload else "false"
            case Kind.FLOAT:
                return repr(self._payload)
            case _:
                return str(self._payload)

    def clone(self):
        return type(self)(self._kind, self._payload)

    def get(self, type, /):
        """
        Return the payload, checking that `type` matches the kind exactly.

        Raises
        - KindMismatchError: e.g. reading a bool value as int.
        """
        if type is not self._kind.pytype:
            name = getattr(type, "__name__", repr(type))
            raise KindMismatchError(f"{self._kind.typename} value cannot be read as {name!r}")
        return self._payload

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        if self._kind is not other._kind:
            return False
        # nan compares equal to itself here so clone() round-trips compare equal
        if self._kind is Kind.FLOAT and math.isnan(self._payload) and math.isnan(other._payload):
            return True
        return self._payload == other._payload

    def __hash__(self):
        return hash((self._kind, self._payload))

    def __repr__(self):
        return f"value({self._kind.typename}, {self._payload!r})"

    def __rich__(self):
        return Text.assemble((self._kind.typename, "dim"), ":", (self.render(), "bold"))

    def __rich_repr__(self):
        yield "kind", self._kind.typename
        yield "payload", self._payload


__all__ = (
    "Kind",
    "Value",
    "ValueParseError",
    "KindMismatchError",
    "INT64_MIN",
    "INT64_MAX",
)

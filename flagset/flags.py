r"""
Flagset flag records.

Overview
- Flag: a named declaration pairing a current Value with its default snapshot,
  an optional one-character short alias, usage text, and an "explicitly set" marker.

Lifecycle
- Created once by FlagSet.declare(...) with current == default.
- Every parse first resets current to a clone of default and clears is_set.
- A successfully applied token overwrites current and flips is_set to True.

Metadata (sanitized on construction)
- name: required, non-empty; must not start with '-' and may not contain '='
  or whitespace (r"[^\s=-][^\s=]*").
- short: None or exactly one character other than '-', '=' or whitespace.
- usage: string (trimmed, may be empty).
- default: Python payload matching the kind; the kind is inferred when omitted.

The record is read-only from the outside: mutation happens only through the
registry's parser (see _reset/_apply).
"""
import functools
import operator
import re

from .utils import *
from .values import Kind, Value


def _sanitize_metadata(metadata, /):
    """
    Internal: validate and normalize flag declaration metadata in place.

    Raises
    - TypeError: when name/short/usage have the wrong type.
    - ValueError: when name/short are malformed.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError("flag 'name' must be a string")
    elif not (name := name.strip()):
        raise ValueError("flag 'name' cannot be empty")
    elif not re.fullmatch(r"[^\s=-][^\s=]*", name):
        raise ValueError(f"flag 'name' {name!r} must not start with '-' nor contain '=' or spaces")
    metadata["name"] = name

    if not isinstance(short := metadata["short"], str | None):
        raise TypeError("flag 'short' must be a single-character string")
    elif isinstance(short, str) and not re.fullmatch(r"[^\s=-]", short):
        raise ValueError(f"flag 'short' {short!r} must be exactly one character other than '-' or '='")

    if not isinstance(usage := metadata["usage"], str):
        raise TypeError("flag 'usage' must be a string")
    metadata["usage"] = usage.strip()


class Flag:
    """
    Named, typed flag declaration owned by a FlagSet.

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes.
    - value: shortcut for the current payload.
    """

    __introspectable__ = (
        "name",
        "short",
        "usage",
        "kind",
        "current",
        "default",
        "is_set",
    )

    name = mirror("name")
    short = mirror("short")
    usage = mirror("usage")
    kind = mirror("kind")
    current = mirror("current")
    default = mirror("default")
    is_set = mirror("is_set")

    def __init__(self, name, default, usage="", short=None, *, kind=Unset):
        """
        Construct a flag record.

        Parameters
        - name: long name (referenced as --name).
        - default: Python payload used before and between parses.
        - usage: help text.
        - short: optional one-character alias (referenced as -c).
        - kind: Kind; inferred from default when omitted.
        """
        metadata = {
            "name": name,
            "short": short,
            "usage": usage,
        }
        _sanitize_metadata(metadata)

        if not isinstance(kind, Kind | Unset):
            raise TypeError("flag 'kind' must be a Kind")
        default = Value(kind, default) if kind else Value.of(default)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._kind = default.kind
        self._default = default
        self._current = default.clone()
        self._is_set = False

    @property
    def value(self):
        return self._current.payload

    def get(self, type, /):
        """
        Return the current payload as `type`.

        Raises
        - KindMismatchError: when `type` does not match the flag's kind.
        """
        return self._current.get(type)

    def _reset(self):
        self._current = self._default.clone()
        self._is_set = False

    def _apply(self, text):
        """
        Parse text into the flag's kind and record it as explicitly set.

        ValueParseError propagates unchanged; the current value is untouched on failure.
        """
        self._current = self._current.parse(text)
        self._is_set = True

    def __repr__(self):
        return f"flag({
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        })"

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)


__all__ = (
    "Flag",
)

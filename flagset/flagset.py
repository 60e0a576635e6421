"""
Flagset registry: declare typed flags, parse argument vectors, read values back.

What this module provides
- FlagSet: an ordered registry of Flag records indexed by long name and by
  short alias, plus the positional arguments left over by the last parse.
  • declare(kind, ...) and the typed shorthands declare_int/float/bool/string.
  • lookup/lookup_short/is_set/get/positional for reading results.
  • parse(argv) → ParseResult (never raises for user-input errors).
  • run(argv): conventional driver (usage on help, error + usage on failure).
  • print_usage/print_error: rich rendering of the usage block and faults.

Quick start
    from flagset import FlagSet

    flags = FlagSet("server", "A tiny server")
    port = flags.declare_int("port", 8080, "port to listen on", "p")
    debug = flags.declare_bool("debug", False, "enable debug logging", "d")

    result = flags.parse(["server", "--port=9090", "-d", "extra"])
    if result:
        print(port.value, debug.value, flags.positional)  # 9090 True ['extra']

Design notes
- Every registry starts with a boolean help/h flag.
- Declarations are validated eagerly; collisions raise ValueError.
- parse() is repeatable: each call resets all flags to their defaults first.
"""
import copy
import os.path
import shlex
import sys
from collections.abc import Iterable

from rich.console import Console

from .faults import *
from .flags import Flag
from .formatter import render_usage
from .parser import Parser
from .utils import *
from .values import Kind


class FlagSet:
    """
    Ordered, indexed collection of flags owned by the caller.

    Invariants
    - every flag is reachable from exactly one long-name entry and at most one
      short-alias entry.
    - declaration order is preserved for iteration and usage rendering.

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes
      (containers are returned as copies).
    """

    __introspectable__ = (
        "name",
        "descr",
        "flags",
        "positional",
        "shell",
        "fancy",
        "colorful",
    )

    name = mirror("name")
    descr = mirror("descr")
    flags = mirror("flags")
    positional = mirror("positional")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")

    def __init__(self, name=Unset, descr=Unset, *, shell=False, fancy=False, colorful=True):
        """
        Create a registry holding only the built-in help flag.

        Parameters
        - name: program name shown in usage; defaults to basename(sys.argv[0]).
        - descr: optional description shown under the usage line.
        - shell: when True, run() prints faults and exits instead of raising.
        - fancy: wrap usage and faults in rich panels.
        - colorful: apply the palette (see __styles__ in __main__ for overrides).
        """
        if not isinstance(name := coalesce(name, os.path.basename(sys.argv[0]) or "prog"), str):
            raise TypeError("flagset 'name' must be a string")
        elif not (name := name.strip()):
            raise ValueError("flagset 'name' cannot be empty")

        if not isinstance(descr, str | Unset):
            raise TypeError("flagset 'descr' must be a string")
        elif isinstance(descr, str) and not (descr := descr.strip()):
            raise ValueError("flagset 'descr' cannot be empty")

        self._name = name
        self._descr = coalesce(descr)
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)

        self._flags = []
        self._longs = {}
        self._shorts = {}
        self._positional = []

        self.declare_bool("help", False, "show this help message", "h")

    def declare(self, kind, name, default, usage="", short=None):
        """
        Register a new flag and return its record.

        Parameters
        - kind: Kind of the flag.
        - name: long name (used as --name).
        - default: payload matching kind.
        - usage: help text.
        - short: optional one-character alias (used as -c).

        Raises
        - TypeError: wrong kind/default/name types.
        - ValueError: malformed names, or a name/short already declared.
        """
        if not isinstance(kind, Kind):
            raise TypeError("declare() first argument must be a Kind")

        flag = Flag(name, default, usage, short, kind=kind)

        if flag.name in self._longs:
            raise ValueError(f"flag name {flag.name!r} is already in use")
        if flag.short is not None and flag.short in self._shorts:
            raise ValueError(f"flag short name {flag.short!r} is already in use by {self._shorts[flag.short].name!r}")

        self._flags.append(flag)
        self._longs[flag.name] = flag
        if flag.short is not None:
            self._shorts[flag.short] = flag
        return flag

    def declare_int(self, name, default, usage="", short=None):
        return self.declare(Kind.INT, name, default, usage, short)

    def declare_float(self, name, default, usage="", short=None):
        return self.declare(Kind.FLOAT, name, default, usage, short)

    def declare_bool(self, name, default, usage="", short=None):
        return self.declare(Kind.BOOL, name, default, usage, short)

    def declare_string(self, name, default, usage="", short=None):
        return self.declare(Kind.STRING, name, default, usage, short)

    def lookup(self, name, /):
        """Return the flag declared with this long name, or None."""
        return self._longs.get(name)

    def lookup_short(self, char, /):
        """Return the flag aliased by this short character, or None."""
        return self._shorts.get(char)

    def is_set(self, name, /):
        """Report whether the last parse set the flag explicitly (False for unknown names)."""
        return (flag := self.lookup(name)) is not None and flag.is_set

    def get(self, name, type, /):
        """
        Return the current value of a flag as `type`.

        Raises
        - KeyError: no flag with this long name.
        - KindMismatchError: `type` does not match the flag's kind.
        """
        return self[name].get(type)

    def parse(self, argv=Unset, /):
        """
        Parse an argument vector into this registry.

        Parameters
        - argv:
          • Unset: sys.argv.
          • str: shell-like string, split with shlex.split.
          • Iterable[str]: used as-is.
          In every form the first element is the program name and is skipped.

        Returns
        - ParseResult: success (positional arguments) or the stopping fault.

        Raises
        - TypeError: when argv is not Unset/str/Iterable[str].
        """
        if argv is Unset:
            tokens = list(sys.argv)
        elif isinstance(argv, str):
            tokens = shlex.split(argv)
        elif isinstance(argv, Iterable):
            tokens = list(argv)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("parse() argument must be a string or an iterable of strings")
        else:
            raise TypeError("parse() argument must be a string or an iterable of strings")

        self._positional = []
        try:
            positional = Parser(self).parse(tokens)
        except ParseFault as fault:
            return ParseResult.failure(fault)
        self._positional = positional
        return ParseResult.success(positional)

    def run(self, argv=Unset, /):
        """
        Parse and apply the conventional command-line policy.

        - success: return the ParseResult.
        - help request: print usage to stdout and exit 0 (shell mode).
        - failure: print the fault then usage to stderr and exit 2 (shell mode).
        Outside shell mode the fault is raised instead.
        """
        result = self.parse(argv)
        if result:
            return result
        trigger(
            result.fault,
            prog=self.name,
            shell=self.shell,
            fancy=self.fancy,
            colorful=self.colorful,
            usage=render_usage(self),
        )

    def print_usage(self, file=Unset):
        """Print the usage block (stdout by default)."""
        console = Console(file=file) if file is not Unset else Console()
        console.print(render_usage(self, console))

    def print_error(self, result, file=Unset):
        """
        Print the fault carried by a failed ParseResult (stderr by default).

        Raises
        - ValueError: when the result is a success.
        """
        if not isinstance(result, ParseResult):
            raise TypeError("print_error() argument must be a parse result")
        if result:
            raise ValueError("print_error() argument must be a failed parse result")
        console = Console(file=file) if file is not Unset else Console(stderr=True)
        console.print(copy.replace(result.fault, prog=self.name, fancy=self.fancy, colorful=self.colorful))

    def __iter__(self):
        return iter(self._flags)

    def __len__(self):
        return len(self._flags)

    def __contains__(self, name):
        return name in self._longs

    def __getitem__(self, name):
        try:
            return self._longs[name]
        except KeyError:
            raise KeyError(f"unknown flag {name!r}") from None

    def __repr__(self):
        return f"flagset(name={self._name!r}, flags={[flag.name for flag in self._flags]!r})"

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)


__all__ = (
    "FlagSet",
)

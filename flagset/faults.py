"""
Flagset parse faults, parse results, and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every parse outcome that
  is not a plain success (help request, unknown flag, missing value, invalid value).
- ParseFault: base exception carrying a message plus read-only options, able to
  render itself with rich and to surface itself through trigger().
- ParseResult: the structured outcome of FlagSet.parse(): success with the
  positional arguments, or the fault that stopped the scan.
- trigger(): central entry point to surface a fault (respecting shell/fancy/colorful).

UX goals
- Position-first messages: every message names the ordinal position of the
  offending token (“at second position”).
- One short title, one-sentence body, one clear hint.

Integration
- The parser raises faults; FlagSet.parse() folds them into a ParseResult.
- FlagSet.run() hands a failed result's fault to trigger(): in library mode the
  fault is raised again, in shell mode it is printed and the process exits
  (0 for a help request, 2 for a user-input error).
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType
from typing import NamedTuple

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical parse fault codes (stable identifiers).

    grouping
    - requests (101xx)
      • HELP_REQUESTED: not an error; the caller conventionally prints usage and exits 0.
    - user-input errors (111xx)
      • UNKNOWN_FLAG, MISSING_VALUE, INVALID_VALUE

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- requests (10xxx) ---
    HELP_REQUESTED = 10100

    # --- flag errors (11xxx) ---
    UNKNOWN_FLAG   = 11101
    MISSING_VALUE  = 11102
    INVALID_VALUE  = 11103

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParseFault(Exception):
    """
    Base of every parse outcome that stops the scan.

    Attributes
    - message: one-sentence, lowercased description.
    - options: read-only mapping (code, title, hint, flag, token, index, and the
      rendering switches prog/shell/fancy/colorful/usage once triggered).
    """
    __faultcode__ = Unset
    __status__ = 2

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        if self.__faultcode__ is not Unset:
            options.setdefault("code", self.__faultcode__)
        self.message = message
        self.options = MappingProxyType(options)
        super().__init__(message)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def flag(self):
        """Offending flag: long name, or the bare character for unknown short flags."""
        return self.options.get("flag", "")

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options.get("prog", "error")), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.code.normalize() if self.code else "", styler("code")),
            " | ",
            text(self.options.get("title", "error").title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        if hint := self.options.get("hint"):
            body = Group(message, Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))
        else:
            body = Group(message)

        if self.options.get("fancy", False):
            return Panel(body, title=header, title_align="left")

        return Group(header, body)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if usage := self.options.get("usage"):
            console.print(usage)
        sys.exit(self.__status__)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class HelpRequested(ParseFault):
    """
    The user asked for help (--help, -h, -help).

    Not an error: in shell mode the usage is printed to stdout and the process
    exits with status 0.
    """
    __faultcode__ = FaultCode.HELP_REQUESTED
    __status__ = 0

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        if usage := self.options.get("usage"):
            Console().print(usage)
        sys.exit(self.__status__)


class UnknownFlagError(ParseFault):
    __faultcode__ = FaultCode.UNKNOWN_FLAG


class MissingValueError(ParseFault):
    __faultcode__ = FaultCode.MISSING_VALUE


class InvalidValueError(ParseFault):
    __faultcode__ = FaultCode.INVALID_VALUE


class ParseResult(NamedTuple):
    """
    Structured outcome of FlagSet.parse().

    - success: code is None and positional holds the leftover arguments in order.
    - failure: code/flag/message describe the fault; fault keeps the exception
      so it can be surfaced later through trigger().

    bool(result) is True only on success.
    """
    code: FaultCode | None = None
    flag: str = ""
    message: str = ""
    positional: tuple[str, ...] = ()
    fault: ParseFault | None = None

    @classmethod
    def success(cls, positional):
        return cls(positional=tuple(positional))

    @classmethod
    def failure(cls, fault):
        return cls(fault.code, fault.flag, fault.message, (), fault)

    @property
    def ok(self):
        return self.code is None

    def __bool__(self):
        return self.ok


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParseFault).
    - options are merged into the fault via copy.replace(...) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, the fault is raised.

    typical options
    - prog, shell, fancy, colorful, usage (a renderable printed after the fault).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "ParseFault",
    "HelpRequested",
    "UnknownFlagError",
    "MissingValueError",
    "InvalidValueError",
    "ParseResult",
    "trigger",
)

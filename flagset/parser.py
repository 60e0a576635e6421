"""
Flagset parser: walk an argument vector and apply it to a FlagSet.

Token classes (checked in this order)
- help:        '--help', '-h', '-help' → HelpRequested, even after '--'.
- after '--':  every token is positional, whatever it looks like.
- terminator:  a lone '--' ends flag scanning (never positional itself).
- positional:  anything not starting with '-', the empty string, and a lone '-'.
- long:        '--name=value', '--name value', '--name' (booleans imply "true").
- short:       '-cvalue', '-c value', '-c' (booleans imply "true").

Value lookahead differs between the two forms:
- long options only take the next token when it does not start with '-';
- short options take the next token unconditionally ('-n -5' sets n to -5).

Grouping ('-abc' as three switches) is not supported: only the character right
after '-' names a flag; the rest of the token is its value.

The scan stops at the first fault. Flags applied before it keep their values;
positional arguments are only published on success.
"""
import difflib
from collections import deque

from .faults import *
from .utils import *
from .values import Kind, ValueParseError

HELP_TOKENS = frozenset(("--help", "-h", "-help"))
TERMINATOR = "--"


class Parser:
    """
    Single-use scanner bound to one FlagSet for the duration of a parse.

    The registry is borrowed, not owned: parse() mutates its flags in place and
    returns the positional arguments; FlagSet.parse() publishes them.
    """

    def __init__(self, flagset, /):
        self._flagset = flagset
        self._tokens = deque()
        self._index = 0
        self._terminated = False
        self._positional = []

    def parse(self, argv, /):
        """
        Scan argv (argv[0] is the program name and is skipped).

        phases
        - reset: every flag gets a fresh clone of its default and is_set cleared,
          so parsing twice on one registry never leaks state.
        - loop: classify and consume tokens left to right.

        Returns
        - list[str]: positional arguments in their original relative order.

        Raises
        - HelpRequested, UnknownFlagError, MissingValueError, InvalidValueError.
        """
        for flag in self._flagset:
            flag._reset()

        self._tokens = deque(list(argv)[1:])
        self._index = 0
        self._terminated = False
        self._positional = []

        while self._tokens:
            token = self._advance()

            if token in HELP_TOKENS:
                raise HelpRequested(
                    "help requested at %s position" % ordinal(self._index),
                    title="help requested",
                    token=token,
                    index=self._index,
                )

            if self._terminated:
                self._positional.append(token)
            elif token == TERMINATOR:
                self._terminated = True
            elif not token.startswith("-") or token == "-":
                self._positional.append(token)
            elif token.startswith("--"):
                self._parse_long(token)
            else:
                self._parse_short(token)

        return self._positional

    def _advance(self):
        self._index += 1
        return self._tokens.popleft()

    def _route(self):
        return self._flagset.name

    def _parse_long(self, token):
        """
        handle '--name=value', '--name value' and '--name'.

        - with '=': split at the first '='; the value may be empty.
        - without: booleans imply "true"; others take the next token only when it
          exists and does not start with '-'.
        """
        index = self._index
        name, equals, value = token[2:].partition("=")

        if (flag := self._flagset.lookup(name)) is None:
            suggestions = difflib.get_close_matches(name, [flag.name for flag in self._flagset], 5)
            try:
                hint = "did you mean '--%s'? you can also run '%s --help' to see all flags" % (
                    suggestions[0],
                    self._route()
                )
            except IndexError:
                hint = "try '%s --help' to see all available flags" % self._route()
            raise UnknownFlagError(
                "unknown flag %r at %s position" % ("--" + name, ordinal(index)),
                title="unknown flag",
                flag=name,
                token=token,
                index=index,
                suggestions=suggestions,
                hint=hint,
            )

        if not equals:
            if flag.kind is Kind.BOOL:
                value = "true"
            elif self._tokens and not self._tokens[0].startswith("-"):
                value = self._advance()
            else:
                raise MissingValueError(
                    "flag %r at %s position needs a value" % ("--" + name, ordinal(index)),
                    title="missing value",
                    flag=flag.name,
                    token=token,
                    index=index,
                    hint="pass it inline or after a space (for example: --%s=<%s> or --%s <%s>)" % (
                        name, flag.kind.typename, name, flag.kind.typename
                    ),
                )

        self._apply(flag, "--" + name, value, token, index)

    def _parse_short(self, token):
        """
        handle '-cvalue', '-c value' and '-c'.

        - the remainder after the character is the value when present.
        - booleans imply "true"; others take the next token whatever it is.
        """
        index = self._index
        char, value = token[1], token[2:]

        if (flag := self._flagset.lookup_short(char)) is None:
            shorts = [flag.short for flag in self._flagset if flag.short]
            if char.swapcase() in shorts:
                hint = "did you mean '-%s'? short flags are case-sensitive" % char.swapcase()
            else:
                hint = "try '%s --help' to see all available flags" % self._route()
            raise UnknownFlagError(
                "unknown flag %r at %s position" % ("-" + char, ordinal(index)),
                title="unknown flag",
                flag=char,
                token=token,
                index=index,
                hint=hint,
            )

        if not value:
            if flag.kind is Kind.BOOL:
                value = "true"
            elif self._tokens:
                value = self._advance()
            else:
                raise MissingValueError(
                    "flag %r at %s position needs a value" % ("-" + char, ordinal(index)),
                    title="missing value",
                    flag=flag.name,
                    token=token,
                    index=index,
                    hint="pass it attached or after a space (for example: -%s<%s> or -%s <%s>)" % (
                        char, flag.kind.typename, char, flag.kind.typename
                    ),
                )

        self._apply(flag, "-" + char, value, token, index)

    def _apply(self, flag, input, value, token, index):
        try:
            flag._apply(value)
        except ValueParseError as error:
            raise InvalidValueError(
                "invalid value for flag %r at %s position: %s" % (input, ordinal(index), error.message),
                title="invalid value",
                flag=flag.name,
                token=token,
                index=index,
                value=value,
                reason=error.message,
                hint="expected a %s value for %r" % (flag.kind.typename, input),
            ) from error


__all__ = (
    "Parser",
    "HELP_TOKENS",
    "TERMINATOR",
)

"""
Argspell parser: the two-phase parse/validate lifecycle.

What this module provides
- ArgParser: owns an ordered set of option declarations and drives them
  through parse → validate → (reset) cycles.
- State: informational lifecycle marker (FRESH, PARSED, VALIDATED).

Lifecycle
- parse(tokens) / parse_positional(tokens)
  • Each token goes to the first option that accepts it (declaration order).
  • Strict mode (parse): a token nobody accepts is an UnknownArgumentError.
  • Permissive mode (parse_positional): such tokens are returned, in order.
  • No required/validator checks happen here.
  • The first failing token aborts the call; tokens after it are not looked
    at. Options assigned before the failure keep their values.
- validate()
  • Required options must have been seen; seen options must satisfy their
    validator. The first violation is raised, nothing is aggregated.
- reset()
  • Every option goes back to its default and unseen state, and the stored
    executable name is cleared.

Executable path
- With executable=True the first token is the program path: it is consumed,
  stored as executable_name (shown in usage) and never matched. An empty
  token list is then an EmptyArgumentListError.
- When tokens are omitted, sys.argv is used and executable defaults to True;
  with explicit tokens it defaults to False.

Accessors
- parser[name], get_switch(name), get_integer(name), get_decimal(name),
  get_text(name), get_custom(name): current values, NameNotFoundError when no
  option of that name (and kind) exists. Reading values before validate() is
  allowed; checking the lifecycle is the caller's job.

Quick start
    from argspell import ArgParser, Switch, Scalar

    parser = ArgParser(
        "cake baker",
        Switch("help", "-h", "--help", descr="show this help"),
        Scalar("exit", "-e=", "--exit=", type=int, descr="exit code"),
    )
    parser.parse(["-e=5"])
    parser.validate()
    parser.get_integer("exit")  # 5

Notes
- Not thread-safe: a shared parser needs external locking around the whole
  parse/validate/reset cycle.
"""
import sys
from collections.abc import Iterable
from enum import Enum

from .faults import *
from .options import Kind
from .registry import Registry
from .rendering import render_help, format_usage, format_help
from .utils import *


class State(Enum):
    FRESH = "fresh"
    PARSED = "parsed"
    VALIDATED = "validated"


class ArgParser:
    """
    Typed command-line option parser.

    Parameters
    - program: str
      Program title printed on the first line of usage/help.
    - entries: Option | Section
      Declarations, in the order they are matched and shown in help.
    - indent: int (keyword-only, default 25)
      Column where descriptions start in help.
    - colorful: bool (keyword-only, default False)
      Whether the rich rendering (__rich__) applies the palette.
    """

    def __init__(self, program, /, *entries, indent=25, colorful=False):
        if not isinstance(program, str):
            raise TypeError("parser 'program' must be a string")
        if not isinstance(indent, int) or isinstance(indent, bool):
            raise TypeError("parser 'indent' must be an integer")
        if indent < 0:
            raise ValueError("parser 'indent' cannot be negative")

        self._program = program
        self._registry = Registry(entries)
        self._indent = indent
        self._colorful = bool(colorful)
        self._executable_name = None
        self._state = State.FRESH

    program = mirror("program")
    indent = mirror("indent")
    colorful = mirror("colorful")
    executable_name = mirror("executable_name")
    state = mirror("state")

    @property
    def entries(self):
        return self._registry.entries

    @property
    def options(self):
        return self._registry.options

    def _prepare(self, tokens, executable, /):
        """
        Normalize the token source and consume the executable path if needed.
        """
        if tokens is Unset:
            tokens = sys.argv
            executable = coalesce(executable, True)
        elif isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("parse() argument must be an iterable of strings")

        tokens = list(tokens)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("parse() argument must be an iterable of strings")

        if coalesce(executable, False):
            if not tokens:
                raise EmptyArgumentListError()
            self._executable_name = tokens.pop(0)
        else:
            self._executable_name = None
        return tokens

    def parse(self, tokens=Unset, /, *, executable=Unset):
        """
        Strict parse: every token must be accepted by some option.

        Raises
        - EmptyArgumentListError, UnknownArgumentError, RepeatedOptionError,
          MissingValueError, ValueSyntaxError, ValueRangeError,
          CustomConversionError (first one encountered).
        """
        for token in self._prepare(tokens, executable):
            if self._registry.dispatch(token) is None:
                raise UnknownArgumentError(token=token)
        self._state = State.PARSED

    def parse_positional(self, tokens=Unset, /, *, executable=Unset):
        """
        Permissive parse: tokens nobody accepts are returned as positionals.

        Returns
        - list[str]: unmatched tokens in their original order.
        """
        positionals = []
        for token in self._prepare(tokens, executable):
            if self._registry.dispatch(token) is None:
                positionals.append(token)
        self._state = State.PARSED
        return positionals

    def validate(self):
        """
        Enforce required options and validators, in declaration order.

        Raises
        - RequiredOptionError, InvalidValueError (first one encountered).
        """
        self._registry.validate()
        self._state = State.VALIDATED

    def reset(self):
        self._executable_name = None
        self._registry.reset()
        self._state = State.FRESH

    def option(self, name, /):
        """
        Return the declaration named `name` (NameNotFoundError otherwise).
        """
        return self._registry.lookup(name)

    def __getitem__(self, name):
        return self._registry.lookup(name).value

    def __contains__(self, name):
        return name in self._registry

    def get_switch(self, name, /):
        return self._registry.lookup(name, Kind.SWITCH).value

    def get_integer(self, name, /):
        return self._registry.lookup(name, Kind.INTEGER).value

    def get_decimal(self, name, /):
        return self._registry.lookup(name, Kind.DECIMAL).value

    def get_text(self, name, /):
        return self._registry.lookup(name, Kind.TEXT).value

    def get_custom(self, name, /):
        return self._registry.lookup(name, Kind.CUSTOM).value

    def usage(self):
        return format_usage(self)

    def help(self):
        return format_help(self)

    def __rich__(self):
        return render_help(self)

    def __repr__(self):
        return f"arg-parser(program={self._program!r}, options={len(self._registry)}, state={self._state.value!r})"


__all__ = (
    "ArgParser",
    "State",
)

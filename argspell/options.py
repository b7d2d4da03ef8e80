r"""
Argspell option declarations.

Overview
- Variants (one closed set, dispatched polymorphically)
  • Switch: presence-only; the token must equal one spelling exactly, and the
    option then takes its `const` value (True by default).
  • Scalar[_T]: value-bearing; the token must start with a spelling and the
    remainder is converted to an integer, a decimal or text depending on `type`.
  • Custom[_T]: value-bearing; the remainder goes through a user converter.
  • Section: not an option. A titled separator shown in help, never matched.

- Kind
  • Runtime tag of every option (SWITCH, INTEGER, DECIMAL, TEXT, CUSTOM) and
    its display marker ("", "I", "D", "T", "S").

- Introspection & representation
  • OptionType metaclass provides stable __repr__/__rich_repr__ and exposes the
    declaration fields listed in __introspectable__ as read-only properties.

State
- Declaration fields (name, spellings, kind, required, default, validator,
  descr, hidden, deprecated) never change after construction.
- `value` and `seen` are the only mutable parts. They change through assign()
  and reset() only.

Matching
- Switch: exact equality with one of the spellings.
- Value-bearing: a spelling must be a strict prefix of the token, so the
  fragment is never empty. When several spellings qualify, the first declared
  one wins.

Quick example:
    >>> from argspell.options import Switch, Scalar
    >>> verbose = Switch("verbose", "-v", "--verbose", descr="chatty output")
    >>> count = Scalar("count", "-n=", "--count=", type=int, default=1)
    >>> count.assign("--count=3")
    >>> count.value
    3

Public API
- Classes: Option, Switch, Scalar, Custom, Section, Kind
- Functions: accept_all
"""
import functools
import operator
import re
from enum import Enum

from rich.text import Text

from .conversions import Integral, Floating, destination, convert, to_custom
from .faults import *
from .utils import *


class Kind(Enum):
    """
    Runtime tag of an option; the value is the marker used in usage/help.
    """
    SWITCH = ""
    INTEGER = "I"
    DECIMAL = "D"
    TEXT = "T"
    CUSTOM = "S"

    @property
    def marker(self):
        return self.value

    @classmethod
    def of(cls, type, /):
        """
        Tag for a normalized scalar destination.
        """
        match type:
            case Integral():
                return cls.INTEGER
            case Floating():
                return cls.DECIMAL
            case _:
                return cls.TEXT


def accept_all(value, /):
    """
    Default validator: every assigned value is valid.
    """
    return True


class OptionType(type):
    """
    Metaclass that turns declarations into introspectable descriptors.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in construction errors.
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - scalar(name='count', spellings=('-n=',), kind=<Kind.INTEGER: 'I'>, ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate the fields shared by every option.

    - name: required non-empty string (trimmed); used for lookups and messages.
    - descr: optional description. If omitted (Unset), it becomes None.
      If provided, it must be a non-empty string after trimming.
    - validator: optional predicate. If omitted, accept_all is used.

    Raises
    - TypeError: on wrong types.
    - ValueError: on empty strings.

    Notes
    - This function mutates the provided metadata dict in place.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    metadata["name"] = name

    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)

    if not callable(validator := coalesce(metadata["validator"], accept_all)):
        raise TypeError(f"{cls.__typename__} 'validator' must be callable")
    metadata["validator"] = validator


def _sanitize_spellings(cls, metadata, /):
    """
    Internal: validate the accepted spellings of an option.

    - At least one spelling is required.
    - Each spelling must be a non-empty string; it is kept verbatim (no
      trimming), since the spelling is matched character by character.
    - Duplicates are rejected.
    - Declaration order is preserved: it decides which spelling wins when
      several are prefixes of the same token.
    """
    spellings = []
    if not metadata["spellings"]:
        raise TypeError(f"{cls.__typename__} must specify at least one spelling")

    for spelling in metadata["spellings"]:
        if not isinstance(spelling, str):
            raise TypeError(f"{cls.__typename__} spellings must be strings")
        elif not spelling:
            raise ValueError(f"{cls.__typename__} spellings cannot be empty-strings")
        elif spelling in spellings:
            raise ValueError(f"{cls.__typename__} spellings cannot contain duplicates")
        spellings.append(spelling)

    metadata["spellings"] = tuple(spellings)


class Option(metaclass=OptionType):
    """
    Common behaviour of every declared option.

    Subclasses provide _resolve(token), which returns the typed value for a
    token or raises the matching parse fault, and matches(token).
    """

    __displayable__ = (
        "name",
        "spellings",
        "kind",
        "required",
        "value",
        "seen",
    )

    def __new__(cls, *args, **kwargs):
        if cls is Option:
            raise TypeError("type 'Option' cannot be instantiated directly; use Switch, Scalar or Custom")
        return super().__new__(cls)

    def _setup(self, metadata, /):
        # Mirror sanitized metadata into private fields; read-only properties expose them.
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._value = self._default
        self._seen = False

    @property
    def value(self):
        """
        Current typed value: the default until a successful assign().
        """
        return self._value

    @property
    def seen(self):
        return self._seen

    @property
    def marker(self):
        return self._kind.marker

    def matches(self, token, /):
        raise NotImplementedError

    def _resolve(self, token, /):
        raise NotImplementedError

    def assign(self, token, /):
        """
        Take the value carried by `token`.

        Steps
        - RepeatedOptionError when the option was already seen in this cycle.
        - Resolve the token into a typed value (may raise a parsing fault; in
          that case neither value nor seen flag changes).
        - Store the value, mark the option as seen.
        - Deprecated options emit a DeprecatedOptionWarning afterwards.
        """
        if self._seen:
            raise RepeatedOptionError(name=self._name, token=token)

        value = self._resolve(token)

        self._value = value
        self._seen = True

        if self._deprecated:
            DeprecatedOptionWarning(name=self._name, token=token).__trigger__(stacklevel=2)

    def check_validity(self):
        """
        Enforce required-ness and the validator.

        - RequiredOptionError: required and never seen.
        - InvalidValueError: seen, and the validator rejects the value.
        Unseen optional options always pass; their default is not validated.
        """
        if self._required and not self._seen:
            raise RequiredOptionError(name=self._name, spellings=", ".join(self._spellings))
        if self._seen and not self._validator(self._value):
            raise InvalidValueError(name=self._name, value=str(self._value))

    def reset(self):
        self._value = self._default
        self._seen = False


class Switch(Option):
    """
    Presence-only option.

    A token equal to one of the spellings sets the value to `const`. Switches
    are optional unless declared with required=True.
    """

    __introspectable__ = (
        "name",
        "spellings",
        "kind",
        "const",
        "default",
        "required",
        "validator",
        "descr",
        "hidden",
        "deprecated",
    )

    def __new__(
            cls,
            name,
            /,
            *spellings,
            descr=Unset,
            const=True,
            default=False,
            required=False,
            validator=Unset,
            hidden=False,
            deprecated=False
    ):
        """
        Construct a Switch.

        Parameters
        - name: str
          Identifier used by accessors and messages.
        - spellings: one or more str
          Exact tokens that turn the switch on (e.g. "-h", "--help").
        - descr: Unset | str
          Short description for help.
        - const: Any
          Value taken when the switch is seen (True by default).
        - default: Any
          Value while unseen (False by default).
        - required: bool
          Whether validate() demands the switch.
        - validator: Unset | Callable[[Any], bool]
          Predicate over an assigned value.
        - hidden / deprecated: bool
          Help visibility and deprecation warning.
        """
        metadata = {
            "name": name,
            "spellings": spellings,
            "kind": Kind.SWITCH,
            "const": const,
            "default": default,
            "required": bool(required),
            "validator": validator,
            "descr": descr,
            "hidden": bool(hidden),
            "deprecated": bool(deprecated),
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_spellings(cls, metadata)

        self = super().__new__(cls)
        self._setup(metadata)
        return self

    def matches(self, token, /):
        return token in self._spellings

    def _resolve(self, token, /):
        if token not in self._spellings:
            raise UnknownArgumentError(token=token)
        return self._const


class _Parametric(Option):
    """
    Value-bearing option: spelling prefix followed by a mandatory fragment.
    """

    def _split(self, token, /):
        # First declared spelling that is a strict prefix of the token.
        for spelling in self._spellings:
            if len(token) > len(spelling) and token.startswith(spelling):
                return spelling, token[len(spelling):]
        return None

    def matches(self, token, /):
        return self._split(token) is not None

    def _resolve(self, token, /):
        if (parts := self._split(token)) is None:
            if token in self._spellings:
                raise MissingValueError(name=self._name, spelling=token, token=token)
            raise UnknownArgumentError(token=token)
        spelling, fragment = parts
        return self._convert(fragment, token)

    def _convert(self, fragment, token, /):
        raise NotImplementedError


class Scalar[_T](_Parametric):
    """
    Integer, decimal or text option.

    The destination `type` decides both the conversion and the kind:
    - Integral (int8 … uint64) or int (int64) → Kind.INTEGER
    - Floating (float32, float64) or float (float64) → Kind.DECIMAL
    - str → Kind.TEXT

    The option is required iff no default is given; a required option holds
    None until assigned.
    """

    __introspectable__ = (
        "name",
        "spellings",
        "kind",
        "type",
        "default",
        "required",
        "validator",
        "descr",
        "hidden",
        "deprecated",
    )

    def __new__(
            cls,
            name,
            /,
            *spellings,
            type=int,
            default=Unset,
            descr=Unset,
            validator=Unset,
            hidden=False,
            deprecated=False
    ):
        metadata = {
            "name": name,
            "spellings": spellings,
            "type": destination(type),
            "default": default,
            "required": default is Unset,
            "validator": validator,
            "descr": descr,
            "hidden": bool(hidden),
            "deprecated": bool(deprecated),
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_spellings(cls, metadata)
        metadata["kind"] = Kind.of(metadata["type"])
        metadata["default"] = coalesce(default)

        self = super().__new__(cls)
        self._setup(metadata)
        return self

    def _convert(self, fragment, token, /):
        return convert(fragment, self._type, name=self._name, token=token)


class Custom[_T](_Parametric):
    """
    Option whose fragment is converted by a user-supplied callable.

    The converter receives the fragment (never empty) and returns the value.
    Any exception it raises is reported as CustomConversionError carrying the
    converter's own message. Required iff no default is given.
    """

    __introspectable__ = (
        "name",
        "spellings",
        "kind",
        "converter",
        "default",
        "required",
        "validator",
        "descr",
        "hidden",
        "deprecated",
    )

    def __new__(
            cls,
            name,
            /,
            *spellings,
            converter,
            default=Unset,
            descr=Unset,
            validator=Unset,
            hidden=False,
            deprecated=False
    ):
        if not callable(converter):
            raise TypeError(f"{cls.__typename__} 'converter' must be callable")

        metadata = {
            "name": name,
            "spellings": spellings,
            "kind": Kind.CUSTOM,
            "converter": converter,
            "default": default,
            "required": default is Unset,
            "validator": validator,
            "descr": descr,
            "hidden": bool(hidden),
            "deprecated": bool(deprecated),
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_spellings(cls, metadata)
        metadata["default"] = coalesce(default)

        self = super().__new__(cls)
        self._setup(metadata)
        return self

    def _convert(self, fragment, token, /):
        return to_custom(fragment, self._converter, name=self._name, token=token)


class Section(metaclass=OptionType):
    """
    Titled separator among option declarations; only used by help output.
    """

    __introspectable__ = (
        "title",
    )

    def __new__(cls, title, /):
        if not isinstance(title, str | Text):
            raise TypeError(f"{cls.__typename__} 'title' must be a string")
        self = super().__new__(cls)
        self._title = title
        return self


__all__ = (
    # Classes
    "Option",
    "Switch",
    "Scalar",
    "Custom",
    "Section",
    "Kind",

    # Functions
    "accept_all",
)

# Not part of the public API.
del OptionType

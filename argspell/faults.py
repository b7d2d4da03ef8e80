"""
Argspell faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every parse, conversion,
  validation and lookup issue. Codes are grouped by phase to keep searches in
  logs predictable.
- ParserException / ParserWarning: base types that carry structured fields
  (option name, token, fragment, bounds, ...) instead of a baked-in string.
  The human-readable message is produced on demand from a per-class template.
- Phase bases: ParsingError (raised by parse), ConversionError (a parsing
  error raised while turning a fragment into a value) and ValidationError
  (raised by validate).
- getdoc(): optional description lookup for a code from the host application.

Structured payload
- Every fault keeps its fields in a read-only mapping, `fault.options`, and
  exposes each field as an attribute as well (fault.name, fault.token, ...).
- str(fault) formats `template` with those fields; missing fields render as "?".
- __rich__ renders a header/message/hint block for rich consoles, honouring the
  `colorful` and `fancy` fields when present.

Integration
- The library raises faults and never prints or exits by itself. Callers that
  want a friendly report use argspell.rendering.report(fault).
- Host applications may define __codes__ (FaultCode -> label), __docs__
  (FaultCode -> text) and __styles__ (palette overrides) in __main__.
"""
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text


class FaultCode(IntEnum):
    """
    canonical fault codes used across the library (stable identifiers).

    grouping (by phase)
    - parsing (2110x)
      • UNKNOWN_ARGUMENT, REPEATED_OPTION, MISSING_VALUE, EMPTY_ARGUMENT_LIST
    - conversion (2112x)
      • VALUE_SYNTAX, VALUE_RANGE, CUSTOM_CONVERSION
    - validation (2113x)
      • REQUIRED_OPTION, INVALID_VALUE
    - lookup (2114x)
      • NAME_NOT_FOUND
    - warnings (22xxx)
      • DEPRECATED_OPTION

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- parsing errors (2110x) ---
    UNKNOWN_ARGUMENT            = 21101
    REPEATED_OPTION             = 21102
    MISSING_VALUE               = 21103
    EMPTY_ARGUMENT_LIST         = 21104

    # --- conversion errors (2112x) ---
    VALUE_SYNTAX                = 21121
    VALUE_RANGE                 = 21122
    CUSTOM_CONVERSION           = 21123

    # --- validation errors (2113x) ---
    REQUIRED_OPTION             = 21131
    INVALID_VALUE               = 21132

    # --- lookup errors (2114x) ---
    NAME_NOT_FOUND              = 21141

    # --- warnings (22xxx) ---
    DEPRECATED_OPTION           = 22111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class _Fault:
    """
    shared payload/rendering behaviour of exceptions and warnings.

    subclasses declare
    - code: FaultCode
    - title: short lowercased headline
    - template: %-style mapping template for the message
    - hint: %-style mapping template for the one-line hint (may be empty)
    """
    code = None
    title = "fault"
    template = "%(message)s"
    hint = ""
    palette = {}

    def __init__(self, /, **options):
        self.options = MappingProxyType(options)
        super().__init__(self.message)

    def __getattr__(self, name):
        # Only reached for names not found normally: expose the structured fields.
        try:
            return self.__dict__["options"][name]
        except KeyError:
            raise AttributeError(
                "%r object has no attribute %r" % (type(self).__name__, name)
            ) from None

    @property
    def message(self):
        return self.template % defaultdict(lambda: "?", self.options)

    def __str__(self):
        return self.message

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, type(self).palette | getattr(main, "__styles__", {}))

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

        header = Text.assemble(
            "[ ",
            text(self.options.get("program") or getattr(main, "__prog__", "argspell"), styler("prog-name")),
            " — ",
            text(self.code.normalize(), styler("code")),
            " | ",
            text(self.title.title(), styler("title")),
            " ]"
        )
        message = text(self.message, styler("message"))
        renders = [message]

        if hint := self.hint % defaultdict(lambda: "?", self.options):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(**{**self.options, **overrides})


class ParserException(_Fault, Exception):
    palette = {
        # header parts
        "prog-name": "bold #E6E6F0",  # near-white program name
        "code": "bold #00E5FF",  # neon cyan fault code
        "title": "bold #FF4DA6",  # friendly pinky title

        # body
        "message": "#C8C8D0",  # soft light gray message
        "hint-arrow": "#9CE19C dim",  # gentle green arrow
        "hint": "italic #9CE19C",  # gentle green hint text
    }


class ParsingError(ParserException): ...
class ConversionError(ParsingError): ...
class ValidationError(ParserException): ...


class UnknownArgumentError(ParsingError):
    code = FaultCode.UNKNOWN_ARGUMENT
    title = "unknown argument"
    template = "unknown argument %(token)r"
    hint = "check the accepted spellings in the help text"


class RepeatedOptionError(ParsingError):
    code = FaultCode.REPEATED_OPTION
    title = "repeated option"
    template = "option %(name)r repeated multiple times: %(token)r"
    hint = "keep a single occurrence; each option can be specified only once"


class MissingValueError(ParsingError):
    code = FaultCode.MISSING_VALUE
    title = "missing value"
    template = "option %(name)r requires a value after %(spelling)r: %(token)r"
    hint = "write the value right after the spelling (for example: %(spelling)s<value>)"


class EmptyArgumentListError(ParsingError, IndexError):
    code = FaultCode.EMPTY_ARGUMENT_LIST
    title = "empty argument list"
    template = "the argument list is empty, expected the executable path first"


class ValueSyntaxError(ConversionError):
    code = FaultCode.VALUE_SYNTAX
    title = "malformed value"
    template = "option %(name)r: %(fragment)r is not %(expected)s: %(token)r"
    hint = "the whole value must be %(expected)s"


class ValueRangeError(ConversionError):
    code = FaultCode.VALUE_RANGE
    title = "value out of range"
    template = (
        "option %(name)r: out of range %(kind)s %(fragment)r"
        " (must be between %(minimum)s and %(maximum)s): %(token)r"
    )
    hint = "pick %(kind)s between %(minimum)s and %(maximum)s"


class CustomConversionError(ConversionError):
    code = FaultCode.CUSTOM_CONVERSION
    title = "conversion failed"
    template = "%(reason)s"
    hint = "option %(name)r rejected %(fragment)r"


class RequiredOptionError(ValidationError):
    code = FaultCode.REQUIRED_OPTION
    title = "required option"
    template = "option %(name)r is required"
    hint = "add it using one of %(spellings)s"


class InvalidValueError(ValidationError):
    code = FaultCode.INVALID_VALUE
    title = "invalid value"
    template = "option %(name)r: value %(value)s is not allowed"


class NameNotFoundError(ParserException, LookupError):
    code = FaultCode.NAME_NOT_FOUND
    title = "name not found"
    template = "no %(kind)s option named %(name)r"

    def __init__(self, /, **options):
        options.setdefault("kind", "declared")
        super().__init__(**options)


class ParserWarning(_Fault, Warning):
    palette = {
        # header parts
        "prog-name": "bold #E6E6F0",  # near-white program name
        "code": "bold #FFB400",  # amber fault code for warnings
        "title": "bold #FFC2E0",  # softer pinky title for warnings

        # body
        "message": "#D6D6DE",  # slightly lighter gray body
        "hint-arrow": "#B8EFAF dim",  # softer green arrow
        "hint": "italic #B8EFAF",  # softer green hint text
    }

    def __trigger__(self, stacklevel=2):
        warnings.warn(self, stacklevel=stacklevel + 1)


class DeprecatedOptionWarning(ParserWarning):
    code = FaultCode.DEPRECATED_OPTION
    title = "deprecated option"
    template = "option %(name)r is deprecated: %(token)r"
    hint = "check the help text for current usage and alternatives"


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "ParserException",
    "ParsingError",
    "ConversionError",
    "ValidationError",
    "UnknownArgumentError",
    "RepeatedOptionError",
    "MissingValueError",
    "EmptyArgumentListError",
    "ValueSyntaxError",
    "ValueRangeError",
    "CustomConversionError",
    "RequiredOptionError",
    "InvalidValueError",
    "NameNotFoundError",
    "ParserWarning",
    "DeprecatedOptionWarning",
    "getdoc",
)

"""
Argspell value conversion.

Turns a fragment (a token with its matched spelling stripped) into a typed
value, or fails with a structured fault.

Destinations
- Integral(name, minimum, maximum): bounded integers. Predefined: int8, int16,
  int32, int64, uint8, uint16, uint32, uint64. A destination whose minimum is 0
  is unsigned.
- Floating(name, maximum): bounded binary floating point, representable range
  [-maximum, maximum]. Predefined: float32, float64.
- str: text, taken verbatim.

Rules
- The whole fragment must be a literal of the expected kind; a parse that stops
  early (e.g. "12abc") is a ValueSyntaxError, never a partial success.
- Syntax is checked before range, so the two failures stay distinguishable.
- Unsigned destinations reject a leading '-' as a ValueRangeError before any
  conversion takes place ("-0" included); values are never wrapped.
- Decimal literals are read with decimal.Decimal (extended precision) and the
  range check uses the destination bounds, so "1e400" is a range error rather
  than a silent infinity.

Every fault carries `name` (option name), `fragment` and `token` (the full
original token); range faults also carry `minimum` and `maximum`.
"""
import re
import sys
from decimal import Decimal, InvalidOperation
from typing import NamedTuple

from .faults import *


_INTEGER = re.compile(r"\s*(?P<sign>[+-]?)0*(?P<digits>\d+)", re.ASCII)
_DECIMAL = re.compile(
    r"\s*(?P<sign>[+-]?)(?P<mantissa>\d+(\.\d*)?|\.\d+)([eE](?P<exponent>[+-]?\d+))?",
    re.ASCII
)


class Integral(NamedTuple):
    """
    Bounded integer destination.
    """
    name: str
    minimum: int
    maximum: int

    @property
    def signed(self):
        return self.minimum < 0

    def __repr__(self):
        return self.name


class Floating(NamedTuple):
    """
    Bounded floating point destination (symmetric range around zero).
    """
    name: str
    maximum: float

    @property
    def minimum(self):
        return -self.maximum

    def __repr__(self):
        return self.name


int8 = Integral("int8", -2 ** 7, 2 ** 7 - 1)
int16 = Integral("int16", -2 ** 15, 2 ** 15 - 1)
int32 = Integral("int32", -2 ** 31, 2 ** 31 - 1)
int64 = Integral("int64", -2 ** 63, 2 ** 63 - 1)
uint8 = Integral("uint8", 0, 2 ** 8 - 1)
uint16 = Integral("uint16", 0, 2 ** 16 - 1)
uint32 = Integral("uint32", 0, 2 ** 32 - 1)
uint64 = Integral("uint64", 0, 2 ** 64 - 1)

# Largest finite IEEE 754 binary32 value.
float32 = Floating("float32", 3.4028234663852886e+38)
float64 = Floating("float64", sys.float_info.max)


def destination(type, /):
    """
    Normalize a user-facing scalar type into a conversion destination.

    Accepted
    - Integral / Floating instances (returned unchanged)
    - int → int64, float → float64
    - str → str

    Raises
    - TypeError: for anything else.
    """
    if isinstance(type, Integral | Floating):
        return type
    if type is int:
        return int64
    if type is float:
        return float64
    if type is str:
        return str
    raise TypeError("scalar 'type' must be an integral or floating destination, int, float, or str")


def to_integer(fragment, bounds, /, *, name, token):
    """
    Convert a fragment into an int within `bounds`.

    Raises
    - ValueSyntaxError: the fragment is not entirely an optionally-signed
      run of decimal digits (leading whitespace is tolerated).
    - ValueRangeError: negative literal for an unsigned destination, or a value
      outside [bounds.minimum, bounds.maximum].
    """
    fields = {
        "name": name,
        "fragment": fragment,
        "token": token,
    }
    if not (match := _INTEGER.fullmatch(fragment)):
        raise ValueSyntaxError(expected="an integer", **fields)

    overflow = ValueRangeError(kind="integer", minimum=bounds.minimum, maximum=bounds.maximum, **fields)
    if not bounds.signed and match["sign"] == "-":
        raise overflow
    # Longer than any 64-bit bound; also keeps int() clear of its digit limit.
    if len(match["digits"]) > 20:
        raise overflow

    value = int(match["sign"] + match["digits"])
    if not bounds.minimum <= value <= bounds.maximum:
        raise overflow
    return value


def to_decimal(fragment, bounds, /, *, name, token):
    """
    Convert a fragment into a float within `bounds`.

    Raises
    - ValueSyntaxError: the fragment is not entirely a decimal literal
      (digits, optional fraction, optional exponent; no inf/nan/hex forms).
    - ValueRangeError: the exact literal lies outside [-maximum, maximum],
      including exponents too large for decimal.Decimal itself. Exponents too
      small for it yield a signed zero.
    """
    fields = {
        "name": name,
        "fragment": fragment,
        "token": token,
    }
    if not (match := _DECIMAL.fullmatch(fragment)):
        raise ValueSyntaxError(expected="a decimal", **fields)

    overflow = ValueRangeError(kind="decimal", minimum=bounds.minimum, maximum=bounds.maximum, **fields)
    try:
        value = Decimal(fragment.strip())
    except InvalidOperation:
        # Exponent outside the decimal context limits: underflow reads as a signed zero.
        if match["mantissa"].strip("0.") and not (match["exponent"] or "").startswith("-"):
            raise overflow from None
        return -0.0 if match["sign"] == "-" else 0.0

    if not Decimal(bounds.minimum) <= value <= Decimal(bounds.maximum):
        raise overflow
    return float(value)


def to_text(fragment, /, **unused):
    return fragment


def to_custom(fragment, converter, /, *, name, token):
    """
    Run a user converter over the fragment.

    Any exception raised by the converter surfaces as CustomConversionError;
    its message is the converter's own and the original exception is chained.
    """
    try:
        return converter(fragment)
    except Exception as exception:
        raise CustomConversionError(
            reason=str(exception) or type(exception).__name__,
            name=name,
            fragment=fragment,
            token=token,
        ) from exception


def convert(fragment, type, /, *, name, token):
    """
    Dispatch a fragment to the converter matching a normalized destination.
    """
    match type:
        case Integral():
            return to_integer(fragment, type, name=name, token=token)
        case Floating():
            return to_decimal(fragment, type, name=name, token=token)
        case builtin if builtin is str:
            return to_text(fragment)
        case _:
            raise TypeError("convert() destination must be normalized with destination()")


__all__ = (
    # Types
    "Integral",
    "Floating",

    # Destinations
    "int8",
    "int16",
    "int32",
    "int64",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "float32",
    "float64",

    # Functions
    "destination",
    "to_integer",
    "to_decimal",
    "to_text",
    "to_custom",
    "convert",
)

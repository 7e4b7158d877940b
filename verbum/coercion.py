"""
Conversion of single textual tokens into typed option values.

coerce(token, target) never raises: any conversion problem turns into the
Unset failure signal, and the caller decides whether to push the token back,
keep a default, or report it.

Supported targets
- Enum subclasses: case-insensitive member name, or the member's integer value.
- str: identity.
- datetime / date: ISO-8601 first, then the locale's %c, %x and "%x %X" forms.
- Int32 / Int64: signed integers range-checked to 32 and 64 bits.
- int: any integer.
Integers are an optional sign and ASCII digits; underscores and other digit
scripts are rejected.
"""
import datetime
import re
from enum import Enum
from typing import NewType

from .utils import Unset

Int32 = NewType("Int32", int)
Int64 = NewType("Int64", int)

_BOUNDS = {
    Int32: (-2 ** 31, 2 ** 31 - 1),
    Int64: (-2 ** 63, 2 ** 63 - 1),
}

_FORMATS = ("%c", "%x %X", "%x")


def _enumeration(token, target):
    folded = token.strip().casefold()
    for member in target:
        if member.name.casefold() == folded:
            return member
    # Integer values are accepted too (e.g., "2" for Level.HIGH = 2).
    return target(_integer(token, int))


def _integer(token, target):
    # Optional sign and ASCII digits, surrounding blanks allowed. No "1_000".
    if not re.fullmatch(r"\s*[+-]?[0-9]+\s*", token):
        raise ValueError("%r is not an integer" % token)
    value = int(token)
    if target in _BOUNDS:
        lower, upper = _BOUNDS[target]
        if not lower <= value <= upper:
            raise OverflowError("%d is out of range for %s" % (value, target.__name__))
    return value


def _moment(token, target):
    token = token.strip()
    try:
        value = datetime.datetime.fromisoformat(token)
    except ValueError:
        for format in _FORMATS:
            try:
                value = datetime.datetime.strptime(token, format)
                break
            except ValueError:
                continue
        else:
            raise ValueError("%r is not a recognized date/time" % token) from None
    return value.date() if target is datetime.date else value


_CONVERTERS = {
    str: lambda token, target: token,
    int: _integer,
    Int32: _integer,
    Int64: _integer,
    datetime.datetime: _moment,
    datetime.date: _moment,
}


def supports(target, /):
    """
    Tell whether coerce() knows how to produce values of ``target``.
    """
    return target in _CONVERTERS or isinstance(target, type) and issubclass(target, Enum)


def coerce(token, target, /):
    """
    Convert ``token`` into ``target``; return Unset when it cannot be done.
    """
    if not isinstance(token, str):
        raise TypeError("coerce() first argument must be a string")

    if isinstance(target, type) and issubclass(target, Enum):
        converter = _enumeration
    else:
        try:
            converter = _CONVERTERS[target]
        except (KeyError, TypeError):
            return Unset

    try:
        return converter(token, target)
    except (ValueError, OverflowError, TypeError):
        return Unset


def typename(target, /):
    """
    Short, human-readable name of a coercion target for messages and help.
    """
    return getattr(target, "__name__", str(target)).lower()


__all__ = (
    "Int32",
    "Int64",
    "coerce",
    "supports",
    "typename",
)

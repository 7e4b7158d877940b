"""
Verbum faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain so logs and searches stay predictable.
- VerbException / VerbWarning: base types that carry a message plus options and
  know how to render themselves with rich.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).

Taxonomy
- registration errors (ambiguous verb names, unnamed options, duplicated orders,
  duplicated option names, option types that cannot be coerced, unusable
  constructors): raised while the registry is
  built, never during a parse.
- parse errors (unknown verb, unknown option, unexpected token): structural and
  fatal, parsing stops at the offending token.
- value warnings (uncastable value, missing value): non-fatal, the option keeps
  its default and parsing continues.

Integration
- The binder and the registry raise or report faults; the app merges its runtime
  options into them and calls trigger(fault).
- In non-shell mode exceptions are raised and warnings go through warnings.warn;
  in shell mode both are rendered via rich on stderr.
"""
import inspect
import os.path
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - routing (1110x)
      • UNKNOWN_VERB
    - tokens (1111x)
      • UNEXPECTED_TOKEN, UNKNOWN_OPTION
    - registration (112xx)
      • AMBIGUOUS_VERB, UNNAMED_OPTION, DUPLICATE_ORDER, AMBIGUOUS_OPTION,
        BAD_CONSTRUCTOR, UNSUPPORTED_TYPE
    - warnings (121xx)
      • UNCASTABLE_VALUE, MISSING_VALUE
    """
    # --- routing errors (11xxx) ---
    UNKNOWN_VERB                = 11101

    # --- token errors (11xxx) ---
    UNEXPECTED_TOKEN            = 11111
    UNKNOWN_OPTION              = 11112

    # --- registration errors (112xx) ---
    AMBIGUOUS_VERB              = 11201
    UNNAMED_OPTION              = 11202
    DUPLICATE_ORDER             = 11203
    AMBIGUOUS_OPTION            = 11204
    BAD_CONSTRUCTOR             = 11205
    UNSUPPORTED_TYPE            = 11206

    # --- warnings (12xxx) ---
    UNCASTABLE_VALUE            = 12111
    MISSING_VALUE               = 12112

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, titlekey):
    """
    Build the rich renderable shared by exceptions and warnings.

    Header ``[ prog — code | title ]``, then the message and a single hint line.
    Wrapped in a Panel when the fault was triggered with fancy=True.
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", False)
    fancy = options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        return Text(str(fragment), styles[style])

    prog = getattr(main, "__prog__", options.get("prog") or os.path.basename(sys.argv[0]))
    code = options.get("code")

    header = Text.assemble(
        "[ ",
        text(prog, "prog-name"),
        " — ",
        text(code.normalize() if code is not None else "?", "code"),
        " | ",
        text(str(options.get("title", type(fault).__name__)).title(), titlekey),
        " ]"
    )
    message = text(fault.message, titlekey.replace("title", "message"))
    hint = Text.assemble(text(" → ", "hint-arrow"), text(options.get("hint", ""), "hint"))

    if fancy:
        return Panel(Group(message, hint), title=header, title_align="left")
    return Group(header, message, hint)


class VerbException(Exception):
    """
    Base class of every fatal fault.

    ``message`` is the one-sentence body; ``options`` is a read-only mapping
    with the rendering context (title, code, hint) and the fault payload
    (token, verb, ...).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        }, "error-title")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class RegistrationError(VerbException): ...
class AmbiguousVerbError(RegistrationError): ...
class UnnamedOptionError(RegistrationError): ...
class DuplicateOrderError(RegistrationError): ...
class AmbiguousOptionError(RegistrationError): ...
class ConstructorError(RegistrationError): ...
class UnsupportedTypeError(RegistrationError): ...

class ParseError(VerbException): ...
class UnknownVerbError(ParseError): ...
class UnknownOptionError(ParseError): ...
class UnexpectedTokenError(ParseError): ...


class VerbWarning(Warning):
    """
    Base class of every non-fatal fault (same options contract as VerbException).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",
            "warning-title": "bold #FFC2E0",
            "warning-message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        }, "warning-title")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UncastableValueWarning(VerbWarning): ...
class MissingValueWarning(VerbWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via the rich console; otherwise exceptions
      are raised and warnings are emitted through the warnings module.

    typical options
    - prog, shell, fancy, colorful, title, code, hint, and the payload the fault
      describes (token, verb, option, target).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "VerbException",
    "RegistrationError",
    "AmbiguousVerbError",
    "UnnamedOptionError",
    "DuplicateOrderError",
    "AmbiguousOptionError",
    "ConstructorError",
    "UnsupportedTypeError",
    "ParseError",
    "UnknownVerbError",
    "UnknownOptionError",
    "UnexpectedTokenError",
    "VerbWarning",
    "UncastableValueWarning",
    "MissingValueWarning",
    "trigger",
)

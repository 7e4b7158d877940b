"""
Verb declarations and metadata extraction.

What this module provides
- Verb: abstract base class of every verb. Subclasses declare Option attributes
  and implement ``async def run(self)``; after a parse, ``invocation`` holds the
  token that selected the verb and ``resolver`` the dependency resolver in use.
- verb(...): class decorator carrying the verb-level metadata
  (names, descr, usage, show).
- extract(cls): the VerbDescriptor of a verb class (explicit or derived names).
- options_of(cls): the verb's Option declarations, validated and with their
  value types resolved.

Name derivation
- Without explicit names, the class name loses a trailing "verb" suffix
  (case-insensitive) and is lower-cased: DoVerb -> "do", Publish -> "publish".
  A class named exactly "Verb" keeps its name ("verb").

Quick example:
    >>> @verb("do", "d", descr="does the thing", usage="do <target> [-q]")
    ... class DoVerb(Verb):
    ...     target: str = Option(order=0)
    ...     quiet: bool = Option("-q", "--quiet")
    ...
    ...     async def run(self):
    ...         ...
"""
import inspect
import re
import typing
from abc import ABC, abstractmethod
from typing import NamedTuple

from .faults import *
from .coercion import supports, typename
from .options import Option, ValueKind
from .utils import *


class Verb(ABC):
    """
    Base class of every verb handler.

    The binder assigns option values on the instance; ``invocation`` is the
    verb token as the user typed it and ``resolver`` the resolver used to
    build the instance (may be None).
    """

    invocation = None
    resolver = None

    @abstractmethod
    async def run(self):
        """
        Execute the verb once its options are bound.
        """


class VerbDescriptor(NamedTuple):
    """
    Identity of one verb: accepted names, help text, usage template, visibility.
    """
    names: tuple[str, ...]
    descr: str
    usage: str
    show: bool
    type: type

    @property
    def name(self):
        """
        Primary (first) name, used in messages.
        """
        return self.names[0]


def _sanitize_names(names, /):
    sanitized = []
    for name in names:
        if not isinstance(name, str):
            raise TypeError("verb names must be strings")
        elif not (name := name.strip()):
            raise ValueError("verb names cannot be empty-strings")
        elif not re.fullmatch(r"[^\W_][\w-]*", name):
            raise ValueError(f"verb names must be single words not starting with '-' (got {name!r})")
        elif name.casefold() in map(str.casefold, sanitized):
            raise ValueError("verb names cannot contain duplicates")
        sanitized.append(name)
    return tuple(sanitized)


def verb(*names, descr=Unset, usage=Unset, show=True):
    """
    Attach verb-level metadata to a Verb subclass.

    Usage
    - @verb                            derived name, no help text
    - @verb("do", "d", descr="...")   explicit names (first one is primary)
    - @verb(descr="...", show=False)   derived name, explicit help/visibility

    Parameters
    - names: accepted names, matched case-insensitively.
    - descr: help text listed in the general help.
    - usage: usage template shown in the verb's help (defaults to the first name).
    - show: list the verb in the general help.

    Metadata is stored on the class itself (``__verb__``) and is not inherited
    by subclasses, which derive their own names.
    """
    if len(names) == 1 and isinstance(names[0], type):
        # Bare form: @verb
        return verb()(names[0])

    metadata = {
        "names": _sanitize_names(names),
        "descr": descr,
        "usage": usage,
        "show": bool(show),
    }
    for key in ("descr", "usage"):
        if not isinstance(value := metadata[key], str | Unset):
            raise TypeError(f"verb {key!r} must be a string")
        metadata[key] = coalesce(value, "").strip()

    @rename("verb")
    def wrapper(cls, /):
        if not isinstance(cls, type) or not issubclass(cls, Verb):
            raise TypeError("@verb() must be applied to a Verb subclass")
        if "__verb__" in vars(cls):
            raise TypeError("@verb() must be applied only once")
        cls.__verb__ = metadata
        return cls

    return wrapper


def derive_name(typename, /):
    """
    Default verb name of a class: strip a trailing "verb" and lower-case.
    """
    if typename.casefold().endswith("verb") and len(typename) > len("verb"):
        typename = typename[:-len("verb")]
    return typename.lower()


def extract(cls, /):
    """
    Return the VerbDescriptor of ``cls``.

    Explicit names from @verb win; otherwise the name is derived from the class
    name while descr/usage/show declared on @verb are preserved.
    """
    if not isinstance(cls, type) or not issubclass(cls, Verb):
        raise TypeError("extract() argument must be a Verb subclass")

    metadata = vars(cls).get("__verb__", {})
    names = metadata.get("names") or (derive_name(cls.__name__),)
    return VerbDescriptor(
        names=names,
        descr=metadata.get("descr", ""),
        usage=metadata.get("usage") or names[0],
        show=metadata.get("show", True),
        type=cls,
    )


def _annotations(cls):
    try:
        return typing.get_type_hints(cls)
    except NameError:
        # Unresolvable forward references: keep the ones that are real objects.
        annotations = {}
        for klass in reversed(cls.__mro__):
            for name, annotation in inspect.get_annotations(klass).items():
                annotations[name] = Unset if isinstance(annotation, str) else annotation
        return annotations


def options_of(cls, /):
    """
    Collect, validate and resolve the Option declarations of ``cls``.

    Options are returned in declaration order, base classes first, as copies
    owned by ``cls``: each one gets its ValueType resolved from its explicit
    type, else the annotation ``cls`` gives the attribute, else str.

    Raises
    - UnnamedOptionError: an option with neither names nor order.
    - DuplicateOrderError: two positional options share an order.
    - AmbiguousOptionError: a short or long name is declared twice.
    - UnsupportedTypeError: a value type coerce() cannot produce.
    """
    descriptor = extract(cls)
    declared = {}
    for klass in reversed(cls.__mro__):
        for name, object in vars(klass).items():
            if isinstance(object, Option):
                declared[name] = object

    annotations = _annotations(cls)
    resolved = []
    orders = {}
    shorts = {}
    longs = {}

    for name, option in declared.items():
        if not option.positional and not option.named:
            raise UnnamedOptionError(
                "option %r of verb %r has neither a name nor an order" % (name, descriptor.name),
                title="unnamed option",
                code=FaultCode.UNNAMED_OPTION,
                hint="declare it as Option('-x'), Option('--name') or Option(order=n)",
                verb=descriptor.name,
                option=name,
            )
        option = option.__resolve__(annotations.get(name, Unset))
        kind, target = option.value
        if kind in (ValueKind.SCALAR, ValueKind.LIST) and not supports(target):
            raise UnsupportedTypeError(
                "option %r of verb %r holds %s values, which cannot be parsed from a token" % (
                    name, descriptor.name, typename(target)
                ),
                title="unsupported type",
                code=FaultCode.UNSUPPORTED_TYPE,
                hint="use str, int, Int32, Int64, datetime, date, bool, an Enum, or a list of those",
                verb=descriptor.name,
                option=name,
                target=target,
            )

        for seen, key, label, code, error in (
            (orders, option.order, "order", FaultCode.DUPLICATE_ORDER, DuplicateOrderError),
            (shorts, option.short and option.short.casefold(), "short name", FaultCode.AMBIGUOUS_OPTION, AmbiguousOptionError),
            (longs, option.long and option.long.casefold(), "long name", FaultCode.AMBIGUOUS_OPTION, AmbiguousOptionError),
        ):
            if key is None:
                continue
            if key in seen:
                raise error(
                    "options %r and %r of verb %r share the %s %r" % (seen[key], name, descriptor.name, label, key),
                    title="duplicated %s" % label,
                    code=code,
                    hint="give every option of a verb its own %s" % label,
                    verb=descriptor.name,
                    option=name,
                )
            seen[key] = name

        resolved.append(option)

    return tuple(resolved)


__all__ = (
    "Verb",
    "VerbDescriptor",
    "verb",
    "derive_name",
    "extract",
    "options_of",
)

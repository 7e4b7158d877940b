r"""
Verbum option declarations.

Overview
- Option: a bindable attribute of a verb class, declared as a class attribute.
  • named:      Option("-l", "--long-name")  (short and/or long form)
  • positional: Option(order=0)               (filled by position, before any flag)
  Options are data descriptors: reading an unbound option on an instance gives None,
  binding writes the value into the instance.

- ValueType: the closed variant describing what an option holds, resolved once
  per verb class when the registry is built:
  • SCALAR(type)          str, int, Int32, Int64, datetime, date
  • ENUMERATION(enum)     any Enum subclass (matched case-insensitively)
  • BOOLEAN               presence-only flag, never consumes a token
  • LIST(element type)    list[str], list[int], Sequence[Color], ...

Metadata (sanitized on construction)
- names: at most one short ("-x") and one long ("--name") form.
- order: Unset | int (>= 0). Mutually exclusive with names.
- type: Unset | type. When Unset, the class annotation of the attribute is used,
  falling back to str.
- default: any value, applied before tokens are consumed when not None.
- descr: Unset | str (help text), non-empty when provided.

An option with neither names nor order is accepted here and rejected when its
verb is registered (UnnamedOptionError), so the fault names the verb.

Quick example:
    >>> class DoVerb(Verb):
    ...     target: str = Option(order=0, descr="what to do")
    ...     retries: int = Option("-r", "--retries", default=3)
    ...     quiet: bool = Option("-q")
    ...     items: list[str] = Option("--items")
"""
import builtins
import collections.abc
import copy
import functools
import operator
import re
import types
import typing
from enum import Enum
from typing import NamedTuple

from .utils import *


class OptionType(type):
    """
    Metaclass that turns declarations into introspectable descriptors.

    Responsibilities
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and help output.
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    """
    __introspectable__ = ()

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
            - option(name='quiet', short='q', long=None, ...)
            """
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers (e.g., rich).
            """
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


class ValueKind(Enum):
    SCALAR = "scalar"
    ENUMERATION = "enumeration"
    BOOLEAN = "boolean"
    LIST = "list"


_SEQUENCES = (
    list,
    tuple,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Iterable,
    collections.abc.Collection,
)


class ValueType(NamedTuple):
    """
    What an option holds: a kind plus the concrete target (the element type for lists).
    """
    kind: ValueKind
    target: object

    @classmethod
    def of(cls, annotation, /):
        """
        Resolve a declared type or annotation into a ValueType.

        - ``X | None`` / ``Optional[X]`` resolve as X.
        - ``list`` without arguments is a list of str.
        - ``tuple[X, ...]`` and abstract sequences of X are lists of X.
        """
        origin = typing.get_origin(annotation)
        arguments = typing.get_args(annotation)

        if origin in (typing.Union, types.UnionType):
            concrete = [argument for argument in arguments if argument is not type(None)]
            if len(concrete) == 1:
                return cls.of(concrete[0])
            raise TypeError("option type %r must not be a union of several types" % annotation)

        if annotation in _SEQUENCES:
            return cls(ValueKind.LIST, str)

        if origin in _SEQUENCES:
            element = arguments[0] if arguments else str
            if cls.of(element).kind in (ValueKind.LIST, ValueKind.BOOLEAN):
                raise TypeError("option type %r must hold scalar or enumeration elements" % annotation)
            return cls(ValueKind.LIST, element)

        if annotation is bool:
            return cls(ValueKind.BOOLEAN, bool)

        if isinstance(annotation, type) and issubclass(annotation, Enum):
            return cls(ValueKind.ENUMERATION, annotation)

        return cls(ValueKind.SCALAR, annotation)


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate the help text.

    - descr: optional short description. Unset becomes "", a provided string
      must be non-empty after trimming.
    """
    if not isinstance(descr := metadata["descr"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr, "")

    # Plain classes, NewType aliases (Int32) and generic aliases (list[str]) are accepted.
    declared = metadata["type"]
    if not (
        declared is Unset or
        isinstance(declared, builtins.type | typing.NewType) or
        typing.get_origin(declared) is not None
    ):
        raise TypeError(f"{cls.__typename__} 'type' must be a type")


def _sanitize_named_metadata(cls, metadata, /):
    r"""
    Internal: validate option names and split them into short and long forms.

    - short: "-x", exactly one letter or digit after the dash.
    - long: "--name" or "--long-name", unicode letters allowed.
    At most one of each. Names are stored without their dashes.
    """
    short = long = None
    for name in metadata.pop("names"):
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} names must be strings")
        elif not (name := name.strip()):
            raise ValueError(f"{cls.__typename__} names cannot be empty-strings")
        elif re.fullmatch(r"-[^\W_]", name):
            if short is not None:
                raise ValueError(f"{cls.__typename__} cannot have more than one short name")
            short = name[1:]
        elif re.fullmatch(r"--[^\W\d_](-?[^\W_]+)*", name):
            if long is not None:
                raise ValueError(f"{cls.__typename__} cannot have more than one long name")
            long = name[2:]
        else:
            raise ValueError(f"{cls.__typename__} names must look like '-x' or '--name' (got {name!r})")
    metadata["short"] = short
    metadata["long"] = long


def _sanitize_positional_metadata(cls, metadata, /):
    """
    Internal: validate the positional order and its exclusivity with names.
    """
    if (order := metadata["order"]) is Unset:
        metadata["order"] = None
        return
    if isinstance(order, bool) or not isinstance(order, int):
        raise TypeError(f"{cls.__typename__} 'order' must be an integer")
    if order < 0:
        raise ValueError(f"{cls.__typename__} 'order' must be zero or positive")
    if metadata["short"] is not None or metadata["long"] is not None:
        raise TypeError(f"{cls.__typename__} cannot be both positional and named")


class Option(metaclass=OptionType):
    """
    Bindable verb attribute: named (short/long) or positional (order).

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes
      mirroring the sanitized metadata values.
    - ``value`` is the resolved ValueType. It is Unset on the declaration and set
      on the per-verb copies made by __resolve__ when a verb is registered.
    """

    __introspectable__ = (
        "name",
        "short",
        "long",
        "order",
        "type",
        "default",
        "descr",
        "value",
    )

    def __init__(self, *names, order=Unset, type=Unset, default=None, descr=Unset):
        """
        Construct an Option with the provided metadata.

        Parameters
        - names: "-x" and/or "--name" forms (at most one of each).
        - order: position among the verb's positional options (>= 0).
        - type: declared value type; Unset defers to the class annotation.
        - default: value assigned before any token is consumed (None means no default).
        - descr: help text.

        Raises
        - TypeError/ValueError on malformed names, order, type or descr.
        """
        metadata = {
            "names": names,
            "order": order,
            "type": type,
            "default": default,
            "descr": descr,
        }
        # 'type' is shadowed by the parameter, hence builtins.type.
        _sanitize_metadata(builtins.type(self), metadata)
        _sanitize_named_metadata(builtins.type(self), metadata)
        _sanitize_positional_metadata(builtins.type(self), metadata)

        self._name = Unset  # Set by __set_name__ when assigned in a class body.
        self._value = Unset  # Resolved per verb by the registry.
        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @property
    def positional(self):
        return self._order is not None

    @property
    def named(self):
        return self._short is not None or self._long is not None

    def __set_name__(self, owner, name):
        self._name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return instance.__dict__.get(self._name)

    def __set__(self, instance, value):
        instance.__dict__[self._name] = value

    def __resolve__(self, annotation=Unset, /):
        """
        Return a copy of this option with its ValueType resolved for one verb.

        The explicit ``type`` wins over ``annotation``, which falls back to str.
        The declaration itself is left untouched: it may be inherited by verbs
        that annotate it differently.
        """
        resolved = copy.copy(self)
        resolved._value = ValueType.of(coalesce(self._type, coalesce(annotation, str)))
        return resolved


__all__ = (
    "Option",
    "ValueKind",
    "ValueType",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in star-imports. Not part of the public API.
del OptionType

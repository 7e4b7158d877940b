"""
Verb registry: the name -> verb index a parse selects from.

Sources
- Verb subclasses, passed directly.
- Imported modules: every concrete Verb subclass the module defines (classes
  it merely imports, such as HelpVerb, are skipped).
- Module names ("app.verbs") or package globs ("app.verbs.*", "app.**"),
  expanded with mglob() and imported.

Building the registry extracts every verb's metadata once (names, options,
value types, constructor shape) and rejects configuration defects:
- AmbiguousVerbError when two verbs share a name (case-insensitively),
- plus the option and constructor faults raised by options_of() and check().

A built registry is read-only and can be reused across parses.
"""
import difflib
import importlib
import inspect
from types import ModuleType
from typing import NamedTuple

from .faults import *
from .resolution import check
from .utils import *
from .verbs import Verb, VerbDescriptor, extract, options_of


class VerbEntry(NamedTuple):
    """
    A registered verb: its descriptor and its resolved option declarations.
    """
    descriptor: VerbDescriptor
    options: tuple

    @property
    def type(self):
        return self.descriptor.type


def discover(*sources):
    """
    Expand sources into an ordered, duplicate-free list of concrete verb classes.

    Raises
    - TypeError: a source that is neither a Verb subclass, a module, nor a string,
      or an abstract verb class passed explicitly.
    """
    classes = []

    def _collect(cls):
        if cls not in classes:
            classes.append(cls)

    for source in sources:
        if isinstance(source, str):
            modules = [importlib.import_module(name) for name in mglob(source)]
        elif isinstance(source, ModuleType):
            modules = [source]
        elif isinstance(source, type) and issubclass(source, Verb):
            if inspect.isabstract(source):
                raise TypeError(f"verb {source.__name__!r} is abstract and cannot be registered")
            _collect(source)
            continue
        else:
            raise TypeError("registry sources must be verb classes, modules or module names")

        for module in modules:
            # Verbs the module defines, not the ones it imports.
            for object in vars(module).values():
                if (
                    isinstance(object, type) and
                    issubclass(object, Verb) and
                    object.__module__ == module.__name__ and
                    not inspect.isabstract(object)
                ):
                    _collect(object)

    return classes


class Registry:
    """
    Case-insensitive index of verbs by every accepted name.

    Iterating yields each entry once, in registration order.
    """

    def __init__(self, *sources):
        self._entries = []
        self._index = {}

        for cls in discover(*sources):
            descriptor = extract(cls)
            entry = VerbEntry(descriptor, options_of(cls))
            check(descriptor)

            for name in descriptor.names:
                if (key := name.casefold()) in self._index:
                    other = self._index[key].descriptor
                    raise AmbiguousVerbError(
                        "verb name %r is declared by both %s and %s" % (name, other.type.__name__, cls.__name__),
                        title="ambiguous verb",
                        code=FaultCode.AMBIGUOUS_VERB,
                        hint="rename one of the verbs with @verb(...)",
                        verb=name,
                    )
                self._index[key] = entry
            self._entries.append(entry)

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __contains__(self, name):
        return isinstance(name, str) and name.casefold() in self._index

    def __repr__(self):
        return f"Registry({', '.join(entry.descriptor.name for entry in self._entries)})"

    @property
    def names(self):
        """
        Every accepted name, in registration order.
        """
        return tuple(name for entry in self._entries for name in entry.descriptor.names)

    def get(self, token, /):
        """
        Return the entry accepting ``token`` (case-insensitive), or None.
        """
        if not isinstance(token, str):
            raise TypeError("get() argument must be a string")
        return self._index.get(token.casefold())

    def lookup(self, token, /):
        """
        Return the entry accepting ``token``.

        Raises
        - UnknownVerbError: no verb accepts the token; close names are suggested.
        """
        if (entry := self.get(token)) is not None:
            return entry

        suggestions = difflib.get_close_matches(token.casefold(), [name.casefold() for name in self.names], 5)
        try:
            hint = "did you mean %r? run 'help' to see all verbs" % suggestions[0]
        except IndexError:
            hint = "run 'help' to see all verbs"
        raise UnknownVerbError(
            "unknown verb %r" % token,
            title="unknown verb",
            code=FaultCode.UNKNOWN_VERB,
            hint=hint,
            token=token,
            suggestions=suggestions,
        )


__all__ = (
    "VerbEntry",
    "Registry",
    "discover",
)

"""
Verbum utilities shared by the declaration, registry and app layers.

Overview
- Unset: "not provided" marker, distinct from None. Coercion also returns it
  for a token that cannot be converted, and Option uses it for metadata the
  caller left out (order, type, descr).
- coalesce(value, default): Unset -> default, anything else unchanged.
- rename("name"): decorator giving generated methods and decorator wrappers a
  readable __name__/__qualname__ in tracebacks and reprs.
- mirror("attr"): read-only property over self._attr. Lists, dicts and sets are
  handed out as copies so an Option default or an App setting cannot be
  mutated through the accessor.
- mglob(source): the module names a registry source string stands for:
      "app.verbs"      -> ["app.verbs"]
      "app.verbs.*"    -> the modules directly inside app.verbs
      "app.verbs.**"   -> every module below app.verbs, at any depth
"""
import functools
import importlib
import pkgutil
import re
from collections.abc import Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Type of the Unset marker: falsy, printed as "Unset", one instance per process.
    """

    def __or__(self, other, /):
        """
        Allow ``str | Unset`` in isinstance() checks and annotations.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Replace Unset with ``default``; None, 0, "" and [] are kept as given.
    """
    return default if object is Unset else object


def rename(name, /):
    """
    Decorator setting __name__ and __qualname__ of the decorated callable.
    """
    if not isinstance(name, str):
        raise TypeError("@rename() argument must be a string")

    def decorator(callable):
        callable.__name__ = callable.__qualname__ = name
        return callable

    decorator.__name__ = decorator.__qualname__ = "rename"
    return decorator


def _detach(object):
    # Tuples (verb names, value types) are immutable and shared as they are.
    if isinstance(object, list):
        return [_detach(item) for item in object]
    elif isinstance(object, Mapping):
        return {key: _detach(value) for key, value in object.items()}
    elif isinstance(object, Set) and not isinstance(object, frozenset):
        return set(object)
    return object


def mirror(name, /):
    """
    Read-only property returning a detached copy of ``self._<name>``.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _detach(getattr(self, "_" + name))

    return property(getter)


def mglob(source, /):
    """
    Expand a registry source string into importable module names.

    - A dotted name is returned as-is; importing it is left to the caller.
    - "pkg.*" lists the modules directly inside pkg, "pkg.**" every module
      below it. Names come back sorted.
    - A package that cannot be imported expands to nothing.

    Raises
    - ValueError: an empty string, or a wildcard anywhere but the last segment.
    """
    if not isinstance(source, str):
        raise TypeError("mglob() argument must be a string")
    elif not (source := source.strip()):
        raise ValueError("mglob() argument must be a non-empty string")

    package, _, last = source.rpartition(".")
    if last not in ("*", "**"):
        package = source
    if not re.fullmatch(r"(?!\d)\w+(\.(?!\d)\w+)*", package):
        raise ValueError(f"mglob() expects 'pkg.module', 'pkg.*' or 'pkg.**' (got {source!r})")
    if package == source:
        return [source]

    try:
        path = importlib.import_module(package).__path__
    except (ImportError, AttributeError):
        return []

    if last == "*":
        modules = pkgutil.iter_modules(path, package + ".")
    else:
        modules = pkgutil.walk_packages(path, package + ".")
    return sorted(module.name for module in modules)


Unset = UnsetType()


__all__ = (
    "coalesce",
    "rename",
    "mirror",
    "mglob",
    "UnsetType",
    "Unset",
)

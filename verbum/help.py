"""
Help text generation.

Every generator here is lazy: lines are computed while the caller iterates and
a sequence cannot be restarted. Nothing is printed; rendering belongs to the
caller (see HelpVerb in verbum.app).

Layout
- general help
      Usage: <prog> [verb] [Options]
      <blank>
         <name padded to the longest name>  <descr>      (per visible verb name)
- verb help
      Usage: <prog> <usage> [Options]
      <blank>
         <option usage padded to the longest usage> <descr>   (per option)
"""
from enum import IntEnum
from typing import NamedTuple

from rich.text import Text

from .options import ValueKind


class Level(IntEnum):
    ERROR = 1
    WARNING = 2
    INFO = 3
    VERBOSE = 4


_STYLES = {
    Level.ERROR: "bold #FF4DA6",
    Level.WARNING: "#FFB400",
    Level.INFO: "",
    Level.VERBOSE: "dim",
}


class HelpLine(NamedTuple):
    value: str
    level: Level = Level.INFO

    def __str__(self):
        return self.value

    def __rich__(self):
        return Text(self.value, _STYLES[self.level])


class HelpContent:
    """
    Lazily produced help lines, injectable into a verb constructor.

    Iterating consumes the underlying generator: the content is finite and
    can be walked only once.
    """

    __slots__ = ("_lines",)

    def __init__(self, lines, /):
        self._lines = iter(lines)

    def __iter__(self):
        return self._lines


def option_usage(option, /):
    """
    Render how an option is spelled on the command line.

    - positional:   <attribute>
    - named:        -l, --long  |  -l  |  --long
    - lists get a trailing " ..."
    """
    if option.positional:
        usage = "<%s>" % option.name
    else:
        usage = ", ".join(
            part for part in (
                "-" + option.short if option.short else None,
                "--" + option.long if option.long else None,
            ) if part
        )
    if option.value and option.value.kind is ValueKind.LIST:
        usage += " ..."
    return usage


def general_help(registry, prog, /):
    """
    Yield the verb listing: every name of every visible verb with its help text.
    """
    yield HelpLine("Usage: %s [verb] [Options]" % prog)
    yield HelpLine("")

    descriptors = [entry.descriptor for entry in registry if entry.descriptor.show]
    if not descriptors:
        return

    width = max(len(name) for descriptor in descriptors for name in descriptor.names)
    for descriptor in descriptors:
        for name in descriptor.names:
            yield HelpLine(f"   {name:<{width}}  {descriptor.descr}".rstrip())


def verb_help(entry, prog, /):
    """
    Yield the usage line of one verb followed by one line per option.
    """
    yield HelpLine("Usage: %s %s [Options]" % (prog, entry.descriptor.usage))
    yield HelpLine("")

    if not entry.options:
        return

    usages = [option_usage(option) for option in entry.options]
    width = max(map(len, usages))
    for usage, option in zip(usages, entry.options):
        yield HelpLine(f"   {usage:<{width}} {option.descr}".rstrip())


def build_help(registry, argv, prog, /):
    """
    Yield the help matching an invocation.

    ``argv[1]`` naming a registered verb selects that verb's help
    (``help do`` -> help of "do"); anything else gives the general help.
    """
    entry = registry.get(argv[1]) if len(argv) > 1 else None
    if entry is not None:
        yield from verb_help(entry, prog)
    else:
        yield from general_help(registry, prog)


__all__ = (
    "Level",
    "HelpLine",
    "HelpContent",
    "option_usage",
    "general_help",
    "verb_help",
    "build_help",
)

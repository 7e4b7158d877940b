"""
Verbum console application: select, build and bind a verb, then run it.

What this module provides
- App: owns a registry and the runtime options (prog, shell, fancy, colorful,
  resolver), and turns an argument vector into a bound verb.
  • parse(argv)       -> bound Verb instance
  • run_async(argv)   -> awaits the verb's run()
  • run(argv)         -> asyncio.run(run_async(argv))
- HelpVerb: the built-in "help" verb, registered unless a source already
  provides a verb named "help".
- parse(argv, *sources, resolver=None) and invoke(object, argv): one-shot helpers.

Flow
- argv (Unset → sys.argv[1:], str → shlex.split, iterable of str) → tokens;
  an empty vector behaves as ["help"].
- registry.lookup(tokens[0]) → instantiate(entry, resolver) → bind(rest).
- Every fault goes through App.trigger(): raised (or warned) outside shell mode,
  rendered with rich in shell mode, where fatal ones exit with status 1.

Quick start
    from verbum import App, Verb, Option, verb

    @verb("greet", descr="say hello")
    class GreetVerb(Verb):
        name: str = Option(order=0, default="world")
        loud: bool = Option("-l", "--loud")

        async def run(self):
            print(("hello %s" % self.name).upper() if self.loud else "hello %s" % self.name)

    if __name__ == "__main__":
        App(GreetVerb, shell=True, colorful=True).run()
"""
import asyncio
import os.path
import shlex
import sys
from collections.abc import Iterable

from rich.console import Console

from .binder import bind
from .faults import *
from .help import HelpContent, build_help
from .options import Option
from .registry import Registry, discover
from .resolution import Resolver, instantiate
from .tokens import TokenStream
from .utils import *
from .verbs import Verb, extract, verb

console = Console()


@verb("help", descr="show the available verbs, or the options of one verb", usage="help [verb]")
class HelpVerb(Verb):
    """
    Print the help lines injected through the constructor.
    """

    topic: str = Option(order=0, descr="verb to describe")

    def __init__(self, content: HelpContent):
        self.content = content

    async def run(self):
        for line in self.content:
            console.print(line)


class App:
    """
    A command-line application made of verbs.

    Parameters
    - sources: verb classes, modules, or module names/globs (see Registry).
    - resolver: object with resolve(type), consulted for constructor parameters.
    - prog: program name shown in usage lines and fault headers
      (defaults to __main__.__prog__, then the script name).
    - shell: render faults with rich and exit instead of raising.
    - fancy: render faults inside panels.
    - colorful: style rendered faults.

    Raises
    - RegistrationError subclasses when the sources are misdeclared (outside shell mode).
    """

    prog = mirror("prog")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")

    def __init__(self, *sources, resolver=None, prog=Unset, shell=False, fancy=False, colorful=False):
        if resolver is not None and not isinstance(resolver, Resolver):
            raise TypeError("App() 'resolver' must provide a resolve() method")
        if not isinstance(prog, str | Unset):
            raise TypeError("App() 'prog' must be a string")

        main = __import__("__main__")
        self._prog = coalesce(prog, getattr(main, "__prog__", os.path.basename(sys.argv[0]) or "app"))
        self._resolver = resolver
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)

        try:
            classes = discover(*sources)
            if not any("help" in map(str.casefold, extract(cls).names) for cls in classes):
                classes.append(HelpVerb)
            self._registry = Registry(*classes)
        except VerbException as fault:
            self.trigger(fault)

    @property
    def registry(self):
        return self._registry

    @property
    def resolver(self):
        return self._resolver

    def __repr__(self):
        return f"App(prog={self._prog!r}, verbs={list(self._registry.names)!r})"

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this app's runtime options merged in.
        """
        trigger(
            fault,
            **options,
            prog=self._prog,
            shell=self._shell,
            fancy=self._fancy,
            colorful=self._colorful,
        )

    @staticmethod
    def _tokenize(argv):
        if argv is Unset:
            return list(sys.argv[1:])
        if isinstance(argv, str):
            return shlex.split(argv)
        if isinstance(argv, Iterable):
            tokens = list(argv)
            for token in tokens:
                if not isinstance(token, str):
                    raise TypeError("parse() argument must be a string or an iterable of strings")
            return tokens
        raise TypeError("parse() argument must be a string or an iterable of strings")

    def parse(self, argv=Unset, /):
        """
        Turn an argument vector into a bound verb instance.

        Returns
        - the verb instance with its options assigned and ``invocation`` set to
          the verb token as typed.

        Raises (outside shell mode)
        - UnknownVerbError, UnknownOptionError, UnexpectedTokenError.
        """
        tokens = self._tokenize(argv) or ["help"]

        try:
            entry = self._registry.lookup(tokens[0])
            instance = instantiate(
                entry,
                self._resolver,
                help=lambda: HelpContent(build_help(self._registry, tokens, self._prog)),
            )
            instance.invocation = tokens[0]
            bind(instance, entry.options, TokenStream(tokens[1:]), verb=tokens[0], report=self.trigger)
        except VerbException as fault:
            self.trigger(fault)
        return instance

    async def run_async(self, argv=Unset, /):
        """
        Parse ``argv`` and await the selected verb's run().
        """
        return await self.parse(argv).run()

    def run(self, argv=Unset, /):
        """
        Parse ``argv`` and run the selected verb to completion.
        """
        return asyncio.run(self.run_async(argv))


def parse(argv, /, *sources, resolver=None):
    """
    One-shot parse: build an App over ``sources`` and parse ``argv``.
    """
    return App(*sources, resolver=resolver).parse(argv)


def invoke(object, argv=Unset, /):
    """
    Convenience runner for apps, verb classes or modules.

    - App: runs it with argv.
    - anything App() accepts as a source: wraps it in an App, then runs it.
    """
    if isinstance(object, App):
        return object.run(argv)
    return App(object).run(argv)


__all__ = (
    "App",
    "HelpVerb",
    "parse",
    "invoke",
)

# python
"""
Instantiation behavioral tests: resolver consultation, None pass-through,
parameter defaults and help-content injection.

Conventions
- Test method names follow CamelCase per project convention.
- The resolver fixture is a plain dict-backed object: any object with
  resolve(type) is a valid resolver.
"""

import unittest
from unittest import TestCase

from verbum import App, HelpContent, HelpVerb, Registry, Resolver, Verb, instantiate


class Clock:
    pass


class Mailer:
    pass


class Resolve:
    def __init__(self, **services):
        self.services = {type(service): service for service in services.values()}
        self.asked = []

    def resolve(self, type, /):
        self.asked.append(type)
        return self.services.get(type)


class NoticeVerb(Verb):
    def __init__(self, clock: Clock, mailer: Mailer, retries: int = 2):
        self.clock = clock
        self.mailer = mailer
        self.retries = retries

    async def run(self): ...


class PositionalOnlyVerb(Verb):
    def __init__(self, clock: Clock, /):
        self.clock = clock

    async def run(self): ...


class ExplainVerb(Verb):
    def __init__(self, content: HelpContent):
        self.content = content

    async def run(self): ...


class TunedVerb(Verb):
    def __init__(self, clock: Clock, retries=4):
        self.clock = clock
        self.retries = retries

    async def run(self): ...


class PlainVerb(Verb):
    async def run(self): ...


def entry(cls):
    return Registry(cls).lookup(cls.__name__[:-len("Verb")])


class TestInstantiate(TestCase):

    def testResolverSuppliesAnnotatedTypes(self):
        clock, mailer = Clock(), Mailer()
        resolver = Resolve(clock=clock, mailer=mailer)
        instance = instantiate(entry(NoticeVerb), resolver)
        self.assertIs(instance.clock, clock)
        self.assertIs(instance.mailer, mailer)
        self.assertIs(instance.resolver, resolver)
        self.assertEqual(resolver.asked, [Clock, Mailer, int])

    def testUnresolvedDependencyIsNone(self):
        instance = instantiate(entry(NoticeVerb), Resolve(clock=Clock()))
        self.assertIsNone(instance.mailer)

    def testUnresolvedParameterKeepsDefault(self):
        self.assertEqual(instantiate(entry(NoticeVerb), Resolve()).retries, 2)

    def testNoResolverResolvesNothing(self):
        instance = instantiate(entry(NoticeVerb))
        self.assertIsNone(instance.clock)
        self.assertIsNone(instance.resolver)

    def testPositionalOnlyParameter(self):
        clock = Clock()
        self.assertIs(instantiate(entry(PositionalOnlyVerb), Resolve(clock=clock)).clock, clock)

    def testHelpContentIsInjected(self):
        resolver = Resolve()
        instance = instantiate(entry(ExplainVerb), resolver, help=lambda: HelpContent(["a", "b"]))
        self.assertEqual(list(instance.content), ["a", "b"])
        self.assertEqual(resolver.asked, [])

    def testHelpContentDefaultsToEmpty(self):
        self.assertEqual(list(instantiate(entry(ExplainVerb)).content), [])

    def testUnannotatedParameterKeepsDefault(self):
        clock = Clock()
        resolver = Resolve(clock=clock)
        instance = instantiate(entry(TunedVerb), resolver)
        self.assertIs(instance.clock, clock)
        self.assertEqual(instance.retries, 4)
        self.assertEqual(resolver.asked, [Clock])

    def testZeroParameterConstructor(self):
        self.assertIsInstance(instantiate(entry(PlainVerb), Resolve()), PlainVerb)

    def testInvalidResolverRejected(self):
        with self.assertRaises(TypeError):
            instantiate(entry(PlainVerb), object())

    def testResolverProtocol(self):
        self.assertIsInstance(Resolve(), Resolver)
        self.assertNotIsInstance(object(), Resolver)


class TestAppResolution(TestCase):

    def testAppForwardsResolver(self):
        clock = Clock()
        bound = App(NoticeVerb, resolver=Resolve(clock=clock), prog="test").parse(["notice"])
        self.assertIs(bound.clock, clock)

    def testHelpVerbReceivesInvocationHelp(self):
        bound = App(PlainVerb, prog="test").parse(["help", "plain"])
        self.assertIsInstance(bound, HelpVerb)
        self.assertEqual(bound.topic, "plain")
        self.assertEqual(str(next(iter(bound.content))), "Usage: test plain [Options]")

    def testAppRejectsInvalidResolver(self):
        with self.assertRaises(TypeError):
            App(PlainVerb, resolver=object())


if __name__ == "__main__":
    unittest.main()

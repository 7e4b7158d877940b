"""
Verb instantiation through a host-supplied dependency resolver.

The engine only consumes one capability: ``resolve(type) -> object | None``.
Any container exposing such a method can be passed as-is. The resolver may
return None; that is not an error here, the verb finds out when it uses the
missing dependency.

Constructor contract
- Parameters are resolved by their type annotation.
- A parameter annotated with HelpContent receives the help lines of the
  current invocation instead of going through the resolver.
- When the resolver yields None and the parameter has a default, the default
  is kept.
- An unannotated parameter is never asked of the resolver; it must have a
  default, which it keeps.
- *args/**kwargs and unannotated parameters without a default are rejected
  when the verb is registered (ConstructorError).
"""
import inspect
import typing
from inspect import Parameter
from typing import Protocol, runtime_checkable

from .faults import *
from .help import HelpContent
from .utils import *


@runtime_checkable
class Resolver(Protocol):
    def resolve(self, type, /):
        """
        Return an instance of ``type``, or None when it cannot be provided.
        """


def _signature(cls):
    """
    Parameters of the class constructor (without self) and their resolved annotations.
    """
    if cls.__init__ is object.__init__:
        return [], {}
    parameters = list(inspect.signature(cls.__init__).parameters.values())[1:]
    try:
        hints = typing.get_type_hints(cls.__init__)
    except NameError:
        hints = {}
    annotations = {}
    for parameter in parameters:
        annotation = hints.get(parameter.name, parameter.annotation)
        annotations[parameter.name] = Unset if annotation is Parameter.empty or isinstance(annotation, str) else annotation
    return parameters, annotations


def check(descriptor, /):
    """
    Validate that the verb's constructor can be driven by a resolver.

    Raises
    - ConstructorError: variadic parameters, or a parameter with neither a
      resolvable type nor a default.
    """
    parameters, annotations = _signature(descriptor.type)
    for parameter in parameters:
        if parameter.kind in (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD):
            problem = "takes variadic parameter %r" % parameter.name
        elif annotations[parameter.name] is Unset and parameter.default is Parameter.empty:
            problem = "has no resolvable type for parameter %r" % parameter.name
        else:
            continue
        raise ConstructorError(
            "constructor of verb %r %s" % (descriptor.name, problem),
            title="unusable constructor",
            code=FaultCode.BAD_CONSTRUCTOR,
            hint="annotate every constructor parameter with the type to resolve, or give it a default",
            verb=descriptor.name,
            parameter=parameter.name,
        )


def instantiate(entry, resolver=None, /, help=Unset):
    """
    Build a verb instance, resolving its constructor parameters.

    Parameters
    - entry: the registry entry of the verb.
    - resolver: object with ``resolve(type)``; None resolves everything to None.
    - help: zero-argument callable producing the HelpContent; only called when
      the constructor asks for one.

    Returns
    - the new instance, with ``resolver`` recorded on it.
    """
    if resolver is not None and not isinstance(resolver, Resolver):
        raise TypeError("instantiate() resolver must provide a resolve() method")

    cls = entry.descriptor.type
    parameters, annotations = _signature(cls)
    args = []
    kwargs = {}

    for parameter in parameters:
        annotation = annotations[parameter.name]
        if annotation is HelpContent:
            value = help() if help is not Unset else HelpContent(())
        elif annotation is not Unset and resolver is not None:
            value = resolver.resolve(annotation)
        else:
            value = None

        if value is None and parameter.default is not Parameter.empty:
            value = parameter.default

        if parameter.kind is Parameter.POSITIONAL_ONLY:
            args.append(value)
        else:
            kwargs[parameter.name] = value

    self = cls(*args, **kwargs)
    self.resolver = resolver
    return self


__all__ = (
    "Resolver",
    "check",
    "instantiate",
)

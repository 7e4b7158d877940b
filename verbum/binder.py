"""
Option binder: maps the tokens that follow the verb onto the verb's options.

Phases
- defaults
  • every option whose default is not None is assigned before any token is read.
- positional pass
  • positional options in ascending order, one consumption attempt each, while
    tokens remain. A failed attempt is skipped silently: the option keeps its
    default and the next positional option tries the same stream.
- named pass
  • every remaining token must be "--long" or "-s" (exactly two characters) and
    match one declared name, case-insensitively. Anything else aborts the parse
    with UnexpectedTokenError / UnknownOptionError.

Consumption (one option, one stream)
- list:    pop and coerce tokens until the stream ends, a flag-shaped token shows
           up, or a token does not coerce (it is pushed back). Needs one element.
- boolean: consumes nothing, the value is True.
- scalar:  pop one token; a flag-shaped token is pushed back (value absent), an
           uncastable one is pushed back too.

Value problems are never fatal: they are reported as warnings and the option
keeps its prior value. Only structural token errors stop the parse.

Messages lead with the ordinal position of the token in the full invocation
(the verb itself is the first position).
"""
import difflib

from .coercion import coerce, typename
from .faults import *
from .options import ValueKind
from .tokens import LONG_MARKER, SHORT_MARKER, TokenStream, looks_like_flag
from .utils import *


def _ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


class _Binding:
    """
    State of one bind() call: the target instance, its options and the stream.
    """

    def __init__(self, instance, options, tokens, verb, report):
        self.instance = instance
        self.options = options
        self.tokens = tokens
        self.verb = verb
        self.report = report

    @property
    def position(self):
        # Position of the last popped token; the verb token is the first position.
        return _ordinal(self.tokens.consumed + 1)

    def _uncastable(self, option, token):
        self.report(UncastableValueWarning(
            "unable to parse %r as %s for option %r of verb %r at %s position" % (
                token, typename(option.value.target), option.name, self.verb, self.position
            ),
            title="uncastable value",
            code=FaultCode.UNCASTABLE_VALUE,
            hint="pass a valid %s (run 'help %s' to see the options)" % (typename(option.value.target), self.verb),
            token=token,
            verb=self.verb,
            option=option.name,
            target=option.value.target,
        ))

    def _missing(self, option, spelling):
        self.report(MissingValueWarning(
            "option %r of verb %r expects a value" % (spelling, self.verb),
            title="missing value",
            code=FaultCode.MISSING_VALUE,
            hint="pass a value right after %s" % spelling,
            token=spelling,
            verb=self.verb,
            option=option.name,
        ))

    def consume(self, option, spelling=Unset):
        """
        Apply the consumption rule of ``option``; return the value or Unset.

        ``spelling`` is the flag token that selected a named option; it is Unset
        during the positional pass, where absent values are not reported.
        """
        kind, target = option.value
        tokens = self.tokens

        match kind:
            case ValueKind.LIST:
                values = []
                while tokens and not looks_like_flag(tokens.peek()):
                    token = tokens.pop()
                    if (value := coerce(token, target)) is Unset:
                        self._uncastable(option, token)
                        tokens.push(token)
                        break
                    values.append(value)
                return values if values else Unset

            case ValueKind.BOOLEAN:
                return True

            case _:
                if not tokens or looks_like_flag(tokens.peek()):
                    if spelling:
                        self._missing(option, spelling)
                    return Unset
                token = tokens.pop()
                if (value := coerce(token, target)) is Unset:
                    self._uncastable(option, token)
                    tokens.push(token)
                    return Unset
                return value

    def match(self, token):
        """
        Find the named option selected by a flag token.

        Raises
        - UnexpectedTokenError: the token is neither "--long" nor "-s".
        - UnknownOptionError: no option of the verb carries that name.
        """
        named = [option for option in self.options if option.named]

        if token.startswith(LONG_MARKER):
            key = token[len(LONG_MARKER):].casefold()
            candidates = [option for option in named if option.long and option.long.casefold() == key]
        elif token.startswith(SHORT_MARKER) and len(token) == 2:
            key = token[1:].casefold()
            candidates = [option for option in named if option.short and option.short.casefold() == key]
        else:
            raise UnexpectedTokenError(
                "unexpected token %r for verb %r at %s position" % (token, self.verb, self.position),
                title="unexpected token",
                code=FaultCode.UNEXPECTED_TOKEN,
                hint="positional values go right after the verb; options look like -x or --name",
                token=token,
                verb=self.verb,
            )

        if len(candidates) == 1:
            return candidates[0]

        spellings = [
            spelling
            for option in named
            for spelling in ("-" + option.short if option.short else None, "--" + option.long if option.long else None)
            if spelling
        ]
        suggestions = difflib.get_close_matches(token, spellings, 5)
        try:
            hint = "did you mean %r? run 'help %s' to see all options" % (suggestions[0], self.verb)
        except IndexError:
            hint = "run 'help %s' to see all options" % self.verb
        raise UnknownOptionError(
            "unable to find option %r on %r at %s position" % (token, self.verb, self.position),
            title="unknown option",
            code=FaultCode.UNKNOWN_OPTION,
            hint=hint,
            token=token,
            verb=self.verb,
            suggestions=suggestions,
        )

    def assign(self, option, value):
        if value is not Unset:
            setattr(self.instance, option.name, value)

    def run(self):
        for option in self.options:
            if option.default is not None:
                setattr(self.instance, option.name, option.default)

        for option in sorted((option for option in self.options if option.positional), key=lambda x: x.order):
            if not self.tokens:
                break
            self.assign(option, self.consume(option))

        while self.tokens:
            token = self.tokens.pop()
            option = self.match(token)
            self.assign(option, self.consume(option, token))

        return self.instance


def bind(instance, options, tokens, /, *, verb=Unset, report=trigger):
    """
    Populate ``instance`` with option values taken from ``tokens``.

    Parameters
    - instance: the verb instance to write into.
    - options: its resolved Option declarations (see verbs.options_of).
    - tokens: a TokenStream or any iterable of strings (the arguments after the verb).
    - verb: name used in messages; defaults to the instance's invocation token.
    - report: callable receiving non-fatal faults (warnings). Defaults to trigger().

    Returns
    - the same instance.

    Raises
    - UnexpectedTokenError / UnknownOptionError on structural token errors.
    """
    if not isinstance(tokens, TokenStream):
        tokens = TokenStream(tokens)
    verb = coalesce(verb, getattr(instance, "invocation", None) or type(instance).__name__)
    return _Binding(instance, tuple(options), tokens, verb, report).run()


__all__ = (
    "bind",
)

"""
Token stream consumed by the binder.

A cursor over an immutable tuple of argument strings. Consumption advances the
cursor; a failed speculative consumption rewinds it by one with push().
"""

SHORT_MARKER = "-"
LONG_MARKER = "--"


def looks_like_flag(token, /):
    """
    Tell whether a token is flag-shaped (starts with the option marker).

    Negative numbers are flag-shaped too and cannot be passed as values.
    """
    return token.startswith(SHORT_MARKER)


class TokenStream:
    """
    Front-consumed view over the remaining argument tokens.

    Supports peek(), pop() and push(); push() only rewinds over tokens that
    were popped from this stream, so the underlying sequence is never aliased
    or modified.
    """

    __slots__ = ("_tokens", "_cursor")

    def __init__(self, tokens=(), /):
        tokens = tuple(tokens)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("TokenStream() tokens must be strings")
        self._tokens = tokens
        self._cursor = 0

    def __bool__(self):
        return self._cursor < len(self._tokens)

    def __len__(self):
        return len(self._tokens) - self._cursor

    def __iter__(self):
        return iter(self._tokens[self._cursor:])

    def __repr__(self):
        return f"TokenStream({list(self)!r})"

    @property
    def consumed(self):
        """
        Number of tokens popped so far (the 0-based index of the next one).
        """
        return self._cursor

    def peek(self):
        """
        Return the next token without consuming it, or None when exhausted.
        """
        if not self:
            return None
        return self._tokens[self._cursor]

    def pop(self):
        if not self:
            raise IndexError("pop from an exhausted token stream")
        token = self._tokens[self._cursor]
        self._cursor += 1
        return token

    def push(self, token, /):
        """
        Reinstate the last popped token at the front of the stream.
        """
        if self._cursor == 0 or self._tokens[self._cursor - 1] != token:
            raise ValueError("push() argument must be the last popped token")
        self._cursor -= 1


__all__ = (
    "SHORT_MARKER",
    "LONG_MARKER",
    "looks_like_flag",
    "TokenStream",
)

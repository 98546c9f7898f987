"""Request tokens.

A token correlates an action or permission request started by a case with
the result event the host delivers later. Tokens derived from the same tag
are identical across processes and interpreter runs, so a case can always
recompute the token it registered with.

Example:
    >>> token_for("hello")
    7867
    >>> token_for("hello") == token_for("hello")
    True
"""

from __future__ import annotations

from requisite.exceptions import InvalidTokenError

__all__ = [
    "TOKEN_MAX",
    "string_hash",
    "token_for",
    "check_token",
]

# Largest request token a host accepts.
TOKEN_MAX = 0xFFFF

_INT32_MASK = 0xFFFFFFFF


def string_hash(value: str) -> int:
    """Return the 32-bit polynomial hash of ``value``.

    Computes ``s[0]*31^(n-1) + ... + s[n-1]`` over UTF-16 code units with
    signed 32-bit wrap-around. Unlike the builtin ``hash()`` this is not salted
    per process.
    """
    h = 0
    encoded = value.encode("utf-16-be")
    for i in range(0, len(encoded), 2):
        unit = (encoded[i] << 8) | encoded[i + 1]
        h = (31 * h + unit) & _INT32_MASK
    if h & 0x80000000:
        h -= 1 << 32
    return h


def token_for(tag: str | type, ceiling: int = TOKEN_MAX) -> int:
    """Derive a request token from a string or a class.

    Classes are identified by their qualified name (module + qualname), so two
    classes with the same simple name in different modules get different
    tokens.

    Args:
        tag: String tag or class to derive the token from.
        ceiling: Tokens are folded into ``0..ceiling - 1``.

    Returns:
        Non-negative token below ``ceiling``.
    """
    if isinstance(tag, type):
        tag = f"{tag.__module__}.{tag.__qualname__}"
    # Truncated remainder (sign of the dividend), folded to non-negative.
    return abs(string_hash(tag)) % ceiling


def check_token(token: int, ceiling: int = TOKEN_MAX) -> int:
    """Validate an explicitly supplied token and return it.

    Raises:
        InvalidTokenError: If ``token`` is outside ``0..ceiling``.
    """
    if isinstance(token, bool) or not 0 <= token <= ceiling:
        raise InvalidTokenError(token, ceiling)
    return token

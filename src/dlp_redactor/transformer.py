"""Transformer — the main API.  One pure function per mode.

Usage:
    from dlp_redactor import Transformer, Mode

    transformer = Transformer()              # DEFAULT_PATTERNS
    transformer.transform(b"My SSN is 123-45-6789", Mode.REDACT)
    # b"My [redacted] is 123-45-6789"

    transformer.transform(b"Hello world", "tokenize", token="***")
    # b"*** ***"

tokenize is a blanket mask over every word; redact only touches the
phrases in the pattern set.  detokenize does NOT restore what tokenize
erased: no mapping from token occurrences back to the original words is
kept, so it can only re-emit the token literals it finds.  Recovering the
original text would require storing, for every token occurrence, its
position and the fragment it replaced.
"""

from __future__ import annotations
import re

from .patterns import DEFAULT_PATTERNS, PatternSet
from .types import Mode

DEFAULT_TOKEN = "[TOKEN]"
REDACTED = b"[redacted]"

_WORD = re.compile(rb"\b(\w+)\b")


def _as_bytes(token: str | bytes) -> bytes:
    return token.encode("utf-8") if isinstance(token, str) else token


def tokenize(document: bytes, token: str | bytes = DEFAULT_TOKEN) -> bytes:
    """Replace every maximal run of word characters with token."""
    literal = _as_bytes(token)
    return _WORD.sub(lambda m: literal, document)


def detokenize(document: bytes, token: str | bytes = DEFAULT_TOKEN) -> bytes:
    """Replace each word-bounded token occurrence with its trimmed self.

    This is the identity for any token without surrounding whitespace.
    It cannot undo tokenize().
    """
    literal = _as_bytes(token)
    pattern = re.compile(rb"\b" + re.escape(literal) + rb"\b")
    return pattern.sub(lambda m: m.group().strip(), document)


def redact(document: bytes, patterns: PatternSet = DEFAULT_PATTERNS) -> bytes:
    """Replace redactable PII phrases, then SPII phrases, with [redacted]."""
    document = patterns.redact_pii.sub(lambda m: REDACTED, document)
    return patterns.redact_spii.sub(lambda m: REDACTED, document)


def transform(
    document: bytes,
    mode: Mode | str,
    token: str | bytes = DEFAULT_TOKEN,
    patterns: PatternSet = DEFAULT_PATTERNS,
) -> bytes:
    """Apply one mode to a whole document and return the new bytes.

    Raises UnknownModeError for anything but tokenize, detokenize, redact.
    """
    mode = Mode.parse(mode)
    if mode is Mode.TOKENIZE:
        return tokenize(document, token)
    if mode is Mode.DETOKENIZE:
        return detokenize(document, token)
    return redact(document, patterns)


class Transformer:
    """Transformer bound to one PatternSet."""

    __slots__ = ("patterns",)

    def __init__(self, patterns: PatternSet | None = None) -> None:
        self.patterns = patterns or DEFAULT_PATTERNS

    def transform(
        self,
        document: bytes,
        mode: Mode | str,
        token: str | bytes = DEFAULT_TOKEN,
    ) -> bytes:
        return transform(document, mode, token, self.patterns)

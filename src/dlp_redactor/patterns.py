"""Detector — lexical PII / SPII pattern sets over raw bytes.

Patterns are compiled as bytes so a document never has to be decoded.
Word characters and boundaries are therefore ASCII-only.

A PatternSet carries two kinds of regex:

  * detection (``pii``, ``spii``) — counted for the per-file report,
    each phrase may be preceded by one qualifier word ("my SSN",
    "patient medical record")
  * redaction (``redact_pii``, ``redact_spii``) — the narrower phrases
    the redact mode replaces, without the qualifier word
"""

from __future__ import annotations
import re
from dataclasses import dataclass

from .types import Category, ScanReport

_FLAGS = re.IGNORECASE

_QUALIFIER = r"(?:[a-z]+\s)?"

_PII_PHRASES = (
    r"(?:SSN|social security number|driver's license|passport"
    r"|credit card|debit card|bank account)"
)
_NAME_FIELDS = r"(?:first|last|middle|maiden|previous|current)\s?(?:name|initials)"
_CONTACT_FIELDS = r"(?:phone|fax|email|address|city|state|zip|postal)\s?(?:number|code)"

_HEALTH_FIELDS = (
    r"(?:medical|health|insurance|benefits|prescription|treatment)"
    r"\s?(?:information|record)"
)
_IDENTITY_FIELDS = r"(?:ethnicity|race|sexual|gender|religion)\s?(?:identity|orientation)"

PII_PATTERN = (
    rf"(\b{_QUALIFIER}{_PII_PHRASES}\b"
    rf"|\b{_QUALIFIER}{_NAME_FIELDS}\b"
    rf"|\b{_QUALIFIER}{_CONTACT_FIELDS}\b)"
)
SPII_PATTERN = (
    rf"(\b{_QUALIFIER}{_HEALTH_FIELDS}\b"
    rf"|\b{_QUALIFIER}{_IDENTITY_FIELDS}\b)"
)
REDACT_PII_PATTERN = rf"\b{_PII_PHRASES}\b"
REDACT_SPII_PATTERN = rf"\b{_HEALTH_FIELDS}\b"


def compile_pattern(pattern: str | bytes) -> re.Pattern[bytes]:
    """Compile a pattern for case-insensitive matching against bytes."""
    if isinstance(pattern, str):
        pattern = pattern.encode("utf-8")
    return re.compile(pattern, _FLAGS)


@dataclass(frozen=True, slots=True)
class PatternSet:
    """The regexes the Detector and Transformer run against a document."""
    pii: re.Pattern[bytes]
    spii: re.Pattern[bytes]
    redact_pii: re.Pattern[bytes]
    redact_spii: re.Pattern[bytes]

    @classmethod
    def from_strings(
        cls,
        *,
        pii: str | bytes = PII_PATTERN,
        spii: str | bytes = SPII_PATTERN,
        redact_pii: str | bytes = REDACT_PII_PATTERN,
        redact_spii: str | bytes = REDACT_SPII_PATTERN,
    ) -> PatternSet:
        """Build a PatternSet, falling back to the default for any omitted regex."""
        return cls(
            pii=compile_pattern(pii),
            spii=compile_pattern(spii),
            redact_pii=compile_pattern(redact_pii),
            redact_spii=compile_pattern(redact_spii),
        )

    def detector(self, category: Category | str) -> re.Pattern[bytes]:
        if Category(category) is Category.PII:
            return self.pii
        return self.spii


DEFAULT_PATTERNS = PatternSet.from_strings()


def count_matches(
    document: bytes,
    category: Category | str,
    patterns: PatternSet = DEFAULT_PATTERNS,
) -> int:
    """Count non-overlapping, leftmost-first matches of one category."""
    return sum(1 for _ in patterns.detector(category).finditer(document))


def scan(document: bytes, patterns: PatternSet = DEFAULT_PATTERNS) -> ScanReport:
    """Count PII and SPII matches independently (overlaps count twice)."""
    return ScanReport(
        pii=count_matches(document, Category.PII, patterns),
        spii=count_matches(document, Category.SPII, patterns),
    )

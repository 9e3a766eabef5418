"""Tests for the detection patterns and the three transformation modes."""

import re
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from dlp_redactor import (
    DEFAULT_PATTERNS, PatternSet, Transformer, Mode, Category, ScanReport,
    UnknownModeError, InputError, count_matches, scan, transform,
    tokenize, detokenize, redact,
)


def _pii(doc: bytes) -> list[bytes]:
    return [m.group() for m in DEFAULT_PATTERNS.pii.finditer(doc)]


def _spii(doc: bytes) -> list[bytes]:
    return [m.group() for m in DEFAULT_PATTERNS.spii.finditer(doc)]


# ── Detector ─────────────────────────────────────────────────────────

def test_pii_phrase_with_qualifier():
    assert _pii(b"My SSN is 123-45-6789") == [b"My SSN"]
    assert count_matches(b"My SSN is 123-45-6789", Category.PII) == 1


def test_pii_name_and_contact_fields():
    doc = b"Please send your first name and phone number"
    assert _pii(doc) == [b"your first name", b"and phone number"]


def test_pii_vocabulary():
    for phrase in (
        b"SSN", b"social security number", b"driver's license", b"passport",
        b"credit card", b"debit card", b"bank account",
        b"maiden name", b"middle initials", b"lastname",
        b"fax number", b"zip code", b"postalcode",
    ):
        assert count_matches(phrase, "pii") == 1, phrase
    # contact fields need a trailing number|code
    assert count_matches(b"email address", "pii") == 0


def test_spii_fields():
    doc = b"Her gender identity and health information"
    assert _spii(doc) == [b"Her gender identity", b"and health information"]
    assert count_matches(b"prescription record", Category.SPII) == 1
    assert count_matches(b"sexual orientation", Category.SPII) == 1


def test_detection_is_case_insensitive():
    assert count_matches(b"PASSPORT", Category.PII) == 1
    assert count_matches(b"Medical Record", Category.SPII) == 1


def test_detection_respects_word_boundaries():
    assert count_matches(b"passports", Category.PII) == 0
    assert count_matches(b"SSNs", Category.PII) == 0


def test_matches_do_not_overlap_within_a_category():
    # the qualifier swallows the first "ssn", leaving one more match
    assert _pii(b"ssn ssn ssn") == [b"ssn ssn", b"ssn"]
    assert count_matches(b"ssn ssn ssn", Category.PII) == 2


def test_categories_are_counted_independently():
    doc = b"passport medical record"
    assert _pii(doc) == [b"passport"]
    assert _spii(doc) == [b"passport medical record"]
    assert scan(doc) == ScanReport(pii=1, spii=1)


def test_scan_clean_text():
    assert scan(b"The weather is nice today in Melbourne") == ScanReport(pii=0, spii=0)


def test_unknown_category():
    with pytest.raises(ValueError):
        count_matches(b"SSN", "phi")


def test_alternate_pattern_set():
    patterns = PatternSet.from_strings(pii=r"\bsecret\b")
    assert scan(b"top secret SSN", patterns) == ScanReport(pii=1, spii=0)
    assert scan(b"top secret SSN") == ScanReport(pii=1, spii=0)
    assert patterns.spii.pattern == DEFAULT_PATTERNS.spii.pattern


def test_pattern_set_is_immutable():
    with pytest.raises(AttributeError):
        DEFAULT_PATTERNS.pii = re.compile(b"x")


# ── Redact ───────────────────────────────────────────────────────────

def test_redact_ssn_phrase_only():
    assert redact(b"My SSN is 123-45-6789") == b"My [redacted] is 123-45-6789"


def test_redact_medical_record():
    assert redact(b"Patient medical record attached") == b"Patient [redacted] attached"


def test_redact_multiple_phrases():
    doc = b"Credit Card and bank account; Driver's License, insurance information."
    assert redact(doc) == b"[redacted] and [redacted]; [redacted], [redacted]."


def test_redact_scope_is_narrower_than_detection():
    # detected, but outside the redaction vocabulary
    for doc in (b"first name", b"phone number", b"gender identity"):
        assert scan(doc) != ScanReport(pii=0, spii=0)
        assert redact(doc) == doc


def test_redact_is_idempotent():
    docs = [
        b"My SSN is 123-45-6789",
        b"passport medical record, credit card and treatment information",
        b"ssn ssn ssn\nhealth record",
        b"nothing sensitive here",
        b"",
    ]
    for doc in docs:
        once = redact(doc)
        assert redact(once) == once


def test_redact_with_alternate_patterns():
    t = Transformer(PatternSet.from_strings(redact_pii=r"\bsecret\b"))
    assert t.transform(b"Top Secret SSN", Mode.REDACT) == b"Top [redacted] SSN"


# ── Tokenize ─────────────────────────────────────────────────────────

def test_tokenize_hello_world():
    assert tokenize(b"Hello world", "***") == b"*** ***"


def test_tokenize_masks_every_word():
    assert tokenize(b"Hi, Bob! 42_x.", "T") == b"T, T! T."
    assert tokenize(b"My SSN is 123-45-6789") == b"[TOKEN] [TOKEN] [TOKEN] [TOKEN]-[TOKEN]-[TOKEN]"


def test_tokenize_preserves_non_word_bytes():
    doc = b"  Name:\tJane Doe\n(555) 010-9999; ok?!  "
    out = tokenize(doc, "#")
    assert out.split(b"#") == re.split(rb"\w+", doc)


def test_tokenize_inserts_token_literally():
    assert tokenize(b"a b", r"\1") == rb"\1 \1"


def test_tokenize_word_characters_are_ascii():
    assert tokenize("café".encode("utf-8")) == "[TOKEN]é".encode("utf-8")


# ── Detokenize ───────────────────────────────────────────────────────

def test_detokenize_does_not_reverse_tokenize():
    doc = b"Hello world"
    masked = tokenize(doc, "[TOKEN]")
    assert detokenize(masked, "[TOKEN]") == masked
    assert detokenize(masked, "[TOKEN]") != doc


def test_detokenize_round_trip_only_when_document_is_all_tokens():
    assert detokenize(tokenize(b"X X", "X"), "X") == b"X X"
    assert detokenize(tokenize(b"X Y", "X"), "X") != b"X Y"


def test_detokenize_is_identity_on_token_literals():
    doc = b"see TOKEN and xTOKENx here"
    assert detokenize(doc, "TOKEN") == doc


def test_detokenize_trims_whitespace_inside_token():
    assert detokenize(b"a x b", " x ") == b"axb"


def test_detokenize_escapes_token():
    assert detokenize(b"aaa", "a+") == b"aaa"


# ── Mode dispatch ────────────────────────────────────────────────────

def test_transform_dispatch():
    assert transform(b"Hello world", "tokenize", "***") == b"*** ***"
    assert transform(b"Hello world", Mode.DETOKENIZE, "***") == b"Hello world"
    assert transform(b"My SSN", "redact") == b"My [redacted]"


def test_transform_unknown_mode():
    with pytest.raises(UnknownModeError) as exc:
        transform(b"My SSN", "shred")
    assert isinstance(exc.value, InputError)
    assert isinstance(exc.value, ValueError)
    assert exc.value.mode == "shred"
    assert str(exc.value) == "Unknown mode shred"


def test_mode_parse():
    assert Mode.parse("redact") is Mode.REDACT
    assert Mode.parse(Mode.TOKENIZE) is Mode.TOKENIZE
    with pytest.raises(UnknownModeError):
        Mode.parse("Redact")


def test_transform_does_not_mutate_input():
    doc = bytearray(b"My SSN")
    out = transform(bytes(doc), "redact")
    assert doc == bytearray(b"My SSN")
    assert out == b"My [redacted]"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

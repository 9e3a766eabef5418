"""Core types and errors."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class DlpError(Exception):
    """Base class for every error raised by dlp-redactor."""


class InputError(DlpError):
    """A file, directory or option supplied by the caller is unusable."""


class IllegalPathError(InputError):
    """The target is a system or top-level directory."""


class UnknownModeError(InputError, ValueError):
    """Mode is not one of tokenize, detokenize, redact."""

    def __init__(self, mode: object) -> None:
        super().__init__(f"Unknown mode {mode}")
        self.mode = mode


class OutputError(DlpError):
    """The transformed document could not be written."""


class ConfigError(DlpError, ValueError):
    """A configuration file or dict is malformed."""


class Mode(str, Enum):
    TOKENIZE = "tokenize"
    DETOKENIZE = "detokenize"
    REDACT = "redact"

    @classmethod
    def parse(cls, value: Mode | str) -> Mode:
        """Return the Mode for value, raising UnknownModeError otherwise."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownModeError(value) from None


class Category(str, Enum):
    PII = "pii"
    SPII = "spii"


@dataclass(frozen=True, slots=True)
class ScanReport:
    """Match counts for one document, computed before transformation."""
    pii: int
    spii: int


@dataclass(slots=True)
class FileResult:
    """Outcome of processing a single file."""
    source: Path
    output: Path | None = None           # None when nothing was written
    report: ScanReport | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

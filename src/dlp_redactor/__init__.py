"""dlp-redactor — tokenize, detokenize or redact PII / SPII in text files."""

from .patterns import DEFAULT_PATTERNS, PatternSet, count_matches, scan
from .transformer import Transformer, transform, tokenize, detokenize, redact, DEFAULT_TOKEN
from .config import DlpConfig, load_config, load_from_yaml
from .driver import process_file, process_path
from .types import (
    Mode, Category, ScanReport, FileResult,
    DlpError, InputError, IllegalPathError, UnknownModeError, OutputError, ConfigError,
)

__all__ = [
    "DEFAULT_PATTERNS", "PatternSet", "count_matches", "scan",
    "Transformer", "transform", "tokenize", "detokenize", "redact", "DEFAULT_TOKEN",
    "DlpConfig", "load_config", "load_from_yaml",
    "process_file", "process_path",
    "Mode", "Category", "ScanReport", "FileResult",
    "DlpError", "InputError", "IllegalPathError", "UnknownModeError", "OutputError", "ConfigError",
]
__version__ = "0.1.0"

"""CLI interface for dlp-redactor.

Usage:
    # Mask every word in a file (writes notes_redacted.txt beside it)
    dlp-redactor --mode tokenize --file notes.txt --token '***'

    # Redact PII / SPII phrases in every file of a directory, no prompts
    dlp-redactor --mode redact --file ./exports --output ./clean --yes

    # Same, with options from a YAML file (flags win over the file)
    python -m dlp_redactor.cli --config dlp.yaml --file ./exports

Without --yes every file is confirmed interactively.
"""

from __future__ import annotations
import argparse
import logging
import os
import sys
from pathlib import Path

from .config import DlpConfig, load_from_yaml
from .driver import process_path
from .transformer import DEFAULT_TOKEN
from .types import ConfigError, DlpError, Mode

TOKEN_ENV = "DLP_REDACTOR_TOKEN"


def _ask(question: str) -> bool:
    sys.stdout.write(question)
    sys.stdout.flush()
    try:
        answer = input()
    except EOFError:
        return False
    return answer.strip().lower() == "y"


def approve_file(path: Path) -> bool:
    """Prompt the user to approve a file for processing."""
    return _ask(f"Process file {path}? (y/n): ")


def confirm_all(count: int) -> bool:
    return _ask(f"Found {count} files in directory. Do you want to process all of them? (y/n): ")


def _build_config(args: argparse.Namespace) -> DlpConfig:
    config = load_from_yaml(args.config) if args.config else DlpConfig()
    if args.mode is not None:
        config.mode = args.mode
    if args.token is not None:
        config.token = args.token
    if args.output is not None:
        config.output_dir = Path(args.output).expanduser()
    return config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dlp-redactor",
        description="Tokenize, detokenize or redact PII / SPII in text files",
    )
    parser.add_argument(
        "--mode", default=None,
        help=f"DLP mode: {', '.join(m.value for m in Mode)} (default: tokenize)",
    )
    parser.add_argument("--file", required=True, help="File or directory path")
    parser.add_argument("--output", default=None, help="Output directory path")
    parser.add_argument(
        "--token", default=os.environ.get(TOKEN_ENV),
        help=f"Token used for tokenization (default: ${TOKEN_ENV} or {DEFAULT_TOKEN})",
    )
    parser.add_argument("--config", default=None, help="YAML config file")
    parser.add_argument("--yes", action="store_true", help="Process every file without prompting")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Errors only")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.ERROR if args.quiet else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(message)s", stream=sys.stderr)

    try:
        config = _build_config(args)
    except ConfigError as e:
        sys.stderr.write(f"Error: {e}\n")
        return 2

    try:
        results = process_path(
            args.file,
            config,
            approve=None if args.yes else approve_file,
            confirm_all=None if args.yes else confirm_all,
        )
    except DlpError as e:
        sys.stderr.write(f"Error: {e}\n")
        return 1

    return 0 if all(r.ok for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())

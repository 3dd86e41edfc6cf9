"""CLI entrypoint for the annodoc compiler."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .compiler import compile_file
from .config import ConfigError
from .errors import AnnodocError, UsageError
from .logging import configure_logging, get_logger

logger = get_logger("cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="annodoc",
        description="Compile annotated Markdown into a Python module that attaches documentation metadata.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="Annotation markdown file to compile.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the generated module to this file instead of stdout.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to .annodoc.yml (defaults to the one next to INPUT).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=False,
        help="Only log warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write debug logs to this file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for annodoc."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose), quiet=bool(args.quiet), log_file=args.log_file
    )

    try:
        generated = compile_file(args.input, config_path=args.config)
    except UsageError as exc:
        parser.error(str(exc))
    except (AnnodocError, ConfigError, FileNotFoundError) as exc:
        parser.exit(1, f"annodoc: {exc}\n")

    if args.output is None:
        sys.stdout.write(generated)
        return

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(generated, encoding="utf-8")
    logger.info("Generated module written to %s", args.output)


if __name__ == "__main__":
    main(sys.argv[1:])

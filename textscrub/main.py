from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
from typing import Optional, Sequence

import jsonschema
from pydantic import ValidationError

from textscrub.config_loader import load_settings
from textscrub.env_loader import load_env_file
from textscrub.logging_setup import setup_logging
from textscrub.pipeline import normalize_fragment, normalize_html, normalize_markdown
from textscrub.utils import write_json

logger = logging.getLogger(__name__)

FORMAT_CHOICES = ["auto", "html", "markdown", "text"]
_SUFFIX_FORMATS = {
    ".html": "html",
    ".htm": "html",
    ".md": "markdown",
    ".markdown": "markdown",
}
_NORMALIZERS = {
    "html": normalize_html,
    "markdown": normalize_markdown,
    "text": normalize_fragment,
}


def _resolve_format(requested: str, input_path: Optional[Path]) -> str:
    if requested != "auto":
        return requested
    if input_path is None:
        return "text"
    return _SUFFIX_FORMATS.get(input_path.suffix.lower(), "text")


def build_parser() -> argparse.ArgumentParser:
    config_default = os.getenv("TEXTSCRUB_CONFIG")

    parser = argparse.ArgumentParser(description="Normalize HTML/Markdown/plain text into training tokens")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Normalize one document")
    source = run_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--input", help="Path to an HTML, Markdown or text file")
    source.add_argument("--text", help="Inline text to normalize")
    run_parser.add_argument("--format", choices=FORMAT_CHOICES, default="auto", help="Input format")
    run_parser.add_argument("--config", default=config_default, help="Settings YAML/JSON")
    run_parser.add_argument("--out", help="Write the JSON result to this path instead of stdout")
    return parser


def run_command(args: argparse.Namespace) -> int:
    try:
        settings = load_settings(args.config)
    except (FileNotFoundError, ValueError, RuntimeError, jsonschema.ValidationError, ValidationError) as exc:
        logger.error("settings_invalid path=%s error=%s", args.config, exc)
        return 2

    input_path = Path(args.input) if args.input else None
    if input_path is not None:
        if not input_path.is_file():
            logger.error("input_missing path=%s", input_path)
            return 2
        text = input_path.read_text(encoding="utf-8", errors="ignore")
    else:
        text = args.text

    fmt = _resolve_format(args.format, input_path)
    logger.info("cli_run_start input=%s format=%s chars=%s", input_path, fmt, len(text))
    result = _NORMALIZERS[fmt](text, settings=settings)
    payload = result.model_dump()

    if args.out:
        write_json(args.out, payload)
    else:
        print(json.dumps(payload, ensure_ascii=False))
    logger.info(
        "cli_run_done tokens=%s accepted=%s rejected=%s",
        len(result.tokens),
        result.accepted,
        result.rejected,
    )
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_env_file()
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose)

    if args.command == "run":
        return run_command(args)

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())

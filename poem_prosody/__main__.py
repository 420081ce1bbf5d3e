"""Command line entry point: ``python -m poem_prosody [FILE]``."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Sequence

from .config import Settings
from .core.cmudict_loader import CMUDictLoader
from .core.poem import analyze_poem
from .errors import DictionaryLoadError
from .utils.logging_config import configure_logging
from .utils.observability import get_logger

_logger = get_logger(__name__).bind(component="cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="poem_prosody",
        description=(
            "Analyse a poem's stress, meter, rhymes, sound patterns, structure, "
            "emotion and form and print the result as JSON."
        ),
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="Path to a UTF-8 text file. Reads standard input when omitted.",
    )
    parser.add_argument(
        "--cmudict",
        help="Plain-text CMU dictionary to use instead of the bundled copy.",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING...). Defaults to POEM_PROSODY_LOG_LEVEL or INFO.",
    )
    parser.add_argument(
        "--compact",
        action="store_true",
        help="Emit single-line JSON instead of indented output.",
    )
    return parser


def _read_text(path: str | None) -> str:
    if not path:
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    configure_logging(args.log_level or settings.log_level)

    try:
        text = _read_text(args.file)
    except OSError as error:
        parser.error(f"cannot read {args.file}: {error}")

    loader = CMUDictLoader(args.cmudict) if args.cmudict else CMUDictLoader(settings.cmudict_path)
    try:
        loader.load(strict=True)
    except DictionaryLoadError as error:
        _logger.error("Dictionary unavailable", context={"path": str(error.path), "error": str(error)})
        return 2

    result = analyze_poem(text, loader)

    indent = None if args.compact else 2
    json.dump(result.as_dict(), sys.stdout, indent=indent, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

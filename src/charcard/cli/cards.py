from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from charcard.config import Settings, load_settings
from charcard.errors import ConfigError
from charcard.examples import example_cards
from charcard.render import report, stringify

LOGGER = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _read_input(path: str | None) -> str:
    if path is None or path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _print_examples(settings: Settings) -> int:
    for title, card in example_cards().items():
        print(f"## {title}")
        print(stringify(card, indent=settings.indent, ensure_ascii=settings.ensure_ascii))
        print()
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="charcard-cards",
        description="Validate, backfill and upgrade character cards",
    )
    parser.add_argument(
        "command",
        choices=["validate", "backfill", "upgrade", "examples"],
        help="Operation to run",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Card JSON file (default: stdin)",
    )
    parser.add_argument(
        "--notice",
        action="store_true",
        help="backfill: replace V1 fields with an obsolescence notice",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a YAML settings file (default: $CHARCARD_CONFIG)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (overrides the settings file)",
    )
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except ConfigError as exc:
        parser.error(str(exc))
    logging.basicConfig(
        level=(args.log_level or settings.log_level).upper(),
        format="%(levelname)s: %(message)s",
    )

    if args.command == "examples":
        return _print_examples(settings)

    try:
        text = _read_input(args.path)
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.error("Cannot read %s: %s", args.path, exc)
        return 2

    mode = args.command
    if mode == "backfill" and args.notice:
        mode = "backfill-notice"
    result = report(mode, text, settings=settings)
    print(result.render(settings))
    return 0 if result.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())

"""Command-line entry point for emitting a single log line.

Settings come from the environment and $CALLSITE_LOG_CONFIG, as for any other
caller of the facility.

Usage:
    python -m callsite_log --level warn disk is almost full
"""

import argparse

from callsite_log.facility import get_log
from callsite_log.levels import EMITTING_LEVELS, Level


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Write one line through the log facility.")
    parser.add_argument(
        "--level",
        default="info",
        type=str.lower,
        choices=[level.label for level in EMITTING_LEVELS],
        help="Severity of the message (default: info).",
    )
    parser.add_argument("message", nargs="+", help="Message words, joined by spaces.")

    args = parser.parse_args(argv)

    get_log().log(Level[args.level.upper()], *args.message)


if __name__ == "__main__":
    main()

import argparse
import logging
import sys

from rich.markup import escape

from . import calendar_view
from .dates import DateSpecError
from .shared import TRACE_LEVEL_NUM, err_console


def non_negative_int(value):
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value}")
    return number


def main():
    parser = argparse.ArgumentParser(
        description="activitycal - Calendar view of recorded activity"
    )
    parser.add_argument(
        "-C",
        "--context",
        type=non_negative_int,
        help="Show additional months for context",
        default=None,
    )
    parser.add_argument("--file", type=str, help="Path to activity log", default=None)
    parser.add_argument(
        "--topic", type=str, help="Only count activity of this topic", default=None
    )
    parser.add_argument("--debug", action="store_true", help="Log at trace level")
    parser.add_argument(
        "date_args",
        nargs="*",
        metavar="DATE",
        help="Month name and/or year, e.g. 'may', '2020' or 'may 2020'",
    )

    args = parser.parse_args()

    try:
        calendar_view.run(
            date_args=args.date_args,
            context=args.context,
            file_path=args.file,
            topic=args.topic,
            log_level=TRACE_LEVEL_NUM if args.debug else logging.INFO,
        )
    except DateSpecError as e:
        err_console.print(f"[bold red]Failed to parse date spec: {escape(str(e))}[/]")
        sys.exit(1)


if __name__ == "__main__":
    main()

import calendar
import datetime
import logging

from .activity import RenderContext, build_histogram, grade_style
from .dates import (
    DateSpecError,
    YearMonth,
    date_range,
    parse_date_args,
    resolve_date_spec,
)
from .shared import (
    ACTIVITY_FILE_PATH,
    parse_activity,
    query_activity,
    read_activity_file,
    setup_logging,
)

RESET = "\033[0m"
BOLD = "\033[1m"

MONTH_LINES = 7
MONTH_WIDTH = 21
GUTTER = "   "
MONTHS_PER_ROW = 3
WEEKDAY_HEADER = " Su Mo Tu We Th Fr Sa"
BLANK_CELL = "   "


def render_day(date, ctx):
    cell = ""
    if not ctx.is_future(date):
        cell += grade_style(ctx.grade_for(date))

    if ctx.is_today(date):
        cell += f"{BOLD}#"
    else:
        cell += " "

    return f"{cell}{date.day:2}{RESET}"


def render_month(year, month, ctx):
    """
    Renders a single month as a block of lines, 21 columns wide:

              May 2020
         Su Mo Tu We Th Fr Sa
                        1  2
          3  4  5  6  7  8  9
         ...

    Only the weeks the month spans are emitted and there is no trailing
    newline, merge_months pads shorter months when laying them out.
    """
    cal = calendar.Calendar(firstweekday=calendar.SUNDAY)

    title = f"{calendar.month_name[month]} {year}"
    lines = [f"{title:^{MONTH_WIDTH}}", WEEKDAY_HEADER]

    for week in cal.monthdayscalendar(year, month):
        cells = []
        for day in week:
            if day == 0:
                cells.append(BLANK_CELL)
            else:
                cells.append(render_day(datetime.date(year, month, day), ctx))
        lines.append("".join(cells))

    return "\n".join(lines)


def merge_months(blocks):
    """Lays out month blocks side by side, padded to MONTH_LINES + 1 lines."""
    blocks = [list(block) for block in blocks]
    blank = " " * MONTH_WIDTH

    out = []
    for i in range(MONTH_LINES + 1):
        line = GUTTER.join(block[i] if i < len(block) else blank for block in blocks)
        out.append(line)
    return "\n".join(out)


def chunk_months(months, ctx):
    rendered = [render_month(year, month, ctx).split("\n") for year, month in months]
    rows = [
        merge_months(rendered[i : i + MONTHS_PER_ROW])
        for i in range(0, len(rendered), MONTHS_PER_ROW)
    ]
    return "\n".join(rows)


def render(spec, ctx):
    if isinstance(spec, YearMonth):
        return render_month(spec.year, spec.month, ctx)
    return chunk_months(spec.months(), ctx)


def run(
    date_args=(),
    context=None,
    file_path=None,
    topic=None,
    today=None,
    log_level=logging.INFO,
):
    if file_path is None:
        file_path = ACTIVITY_FILE_PATH
    if today is None:
        today = datetime.date.today()

    logger = setup_logging(log_level)
    logger.info("--- Calendar started ---")

    try:
        tokens = parse_date_args(date_args)
        spec = resolve_date_spec(tokens, context, today)
    except DateSpecError as e:
        logger.error(f"Failed to parse date spec: {e}")
        raise

    start, end = date_range(spec)
    logger.debug(f"Resolved {spec} to range [{start}, {end})")

    since = datetime.datetime.combine(start, datetime.time())
    until = None
    if end is not None:
        until = datetime.datetime.combine(end, datetime.time())

    lines = read_activity_file(file_path, logger)
    activities = parse_activity(lines, logger)
    events = query_activity(
        activities,
        since=since,
        until=until,
        topic=topic,
    )

    histogram = build_histogram(events, logger)
    ctx = RenderContext.from_histogram(histogram, today)

    print(render(spec, ctx))

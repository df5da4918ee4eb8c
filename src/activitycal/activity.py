import datetime
import itertools
from dataclasses import dataclass, field
from enum import IntEnum


class ActivityGrade(IntEnum):
    NONE = 0
    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4


# the only place the grade colors live, swap these for a plain text mode
GRADE_STYLES = {
    ActivityGrade.NONE: "\033[97m\033[48;5;238m",
    ActivityGrade.ONE: "\033[30m\033[48;5;148m",
    ActivityGrade.TWO: "\033[30m\033[48;5;71m",
    ActivityGrade.THREE: "\033[97m\033[48;5;34m",
    ActivityGrade.FOUR: "\033[97m\033[48;5;22m",
}


def grade_style(grade):
    return GRADE_STYLES[grade]


def grade_activity(count, max_count):
    """
    Buckets a day's event count into quarters of the busiest day in range.
    Boundaries round down, so a count of exactly max/4 is still ONE.
    """
    if not count or not max_count:
        return ActivityGrade.NONE

    step = max_count / 4
    x = count / step

    if x <= 1:
        return ActivityGrade.ONE
    elif x <= 2:
        return ActivityGrade.TWO
    elif x <= 3:
        return ActivityGrade.THREE
    return ActivityGrade.FOUR


@dataclass(frozen=True)
class ActivityHistogram:
    counts: dict = field(default_factory=dict)
    max: int = 0


def build_histogram(events, logger):
    """
    Counts events per calendar date in a single pass.
    Events with the same date have to arrive next to each other, the store
    query hands them over sorted by time which guarantees that.
    """
    counts = {}
    max_count = 0
    total = 0

    for date, run in itertools.groupby(events, key=lambda event: event.time.date()):
        count = sum(1 for _ in run)
        counts[date] = count
        total += count
        if count > max_count:
            max_count = count

    logger.debug(f"Found {total} events in selected range across {len(counts)} days.")
    logger.debug(f"Maximum events per day is {max_count}")
    return ActivityHistogram(counts=counts, max=max_count)


@dataclass(frozen=True)
class RenderContext:
    counts: dict
    max: int
    today: datetime.date

    @classmethod
    def from_histogram(cls, histogram, today):
        return cls(counts=histogram.counts, max=histogram.max, today=today)

    def is_today(self, date):
        return self.today == date

    def is_future(self, date):
        return self.today < date

    def grade_for(self, date):
        return grade_activity(self.counts.get(date, 0), self.max)

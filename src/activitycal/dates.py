import calendar
import datetime
import re
from dataclasses import dataclass

MONTH_NAMES = {
    "jan": 1,
    "january": 1,
    "feb": 2,
    "february": 2,
    "mar": 3,
    "march": 3,
    "apr": 4,
    "april": 4,
    "may": 5,
    "jun": 6,
    "june": 6,
    "jul": 7,
    "july": 7,
    "aug": 8,
    "august": 8,
    "sep": 9,
    "september": 9,
    "oct": 10,
    "october": 10,
    "nov": 11,
    "november": 11,
    "dec": 12,
    "december": 12,
}

NUMBER_RE = re.compile(r"[+-]?[0-9]+")


class DateSpecError(ValueError):
    pass


class InvalidDateToken(DateSpecError):
    def __init__(self, text):
        self.text = text
        super().__init__(f"Input is not a month and not a number: '{text}'")


class TooManyDateArgs(DateSpecError):
    def __init__(self, count):
        self.count = count
        super().__init__(f"Too many date arguments ({count}), at most 2 are allowed")


class InvalidDateArgCombination(DateSpecError):
    pass


class YearOutOfRange(DateSpecError):
    pass


def days_in_month(year, month):
    return calendar.monthrange(year, month)[1]


def shift_month(year, month, delta):
    """Moves (year, month) by delta months, wrapping across year boundaries."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def next_month(year, month):
    return shift_month(year, month, 1)


def month_start(year, month):
    """First day of the month, None once it lies past datetime.date.max."""
    if year > datetime.MAXYEAR:
        return None
    return datetime.date(year, month, 1)


@dataclass(frozen=True)
class Month:
    month: int


@dataclass(frozen=True)
class Num:
    value: int


def parse_date_token(text):
    """
    Parses one positional date argument.
    Month names and their three letter abbreviations become Month tokens,
    anything else has to be a plain (signed) integer.
    """
    month = MONTH_NAMES.get(text.lower())
    if month is not None:
        return Month(month)

    if not NUMBER_RE.fullmatch(text):
        raise InvalidDateToken(text)
    return Num(int(text))


def parse_date_args(args):
    args = list(args)
    if len(args) > 2:
        raise TooManyDateArgs(len(args))
    return [parse_date_token(arg) for arg in args]


@dataclass(frozen=True)
class Year:
    year: int

    def start(self):
        return datetime.date(self.year, 1, 1)

    def end(self):
        return month_start(self.year + 1, 1)

    def months(self):
        return [(self.year, month) for month in range(1, 13)]


@dataclass(frozen=True)
class YearMonth:
    year: int
    month: int

    def start(self):
        return datetime.date(self.year, self.month, 1)

    def end(self):
        return month_start(*next_month(self.year, self.month))

    def months(self):
        return [(self.year, self.month)]


@dataclass(frozen=True)
class YearMonthContext:
    year: int
    month: int
    context: int

    def start(self):
        return datetime.date(*shift_month(self.year, self.month, -self.context), 1)

    def end(self):
        # context only reaches backwards
        return month_start(*next_month(self.year, self.month))

    def months(self):
        return [
            shift_month(self.year, self.month, offset)
            for offset in range(-self.context, 1)
        ]


def date_range(spec):
    return spec.start(), spec.end()


def _kind(token):
    return None if token is None else type(token)


# (first token, second token, context given) -> builder(today, year, month, context)
RESOLVER_RULES = {
    (None, None, False): lambda today, y, m, c: YearMonth(today.year, today.month),
    (None, None, True): lambda today, y, m, c: YearMonthContext(
        today.year, today.month, c
    ),
    (Month, None, False): lambda today, y, m, c: YearMonth(today.year, m),
    (Num, None, False): lambda today, y, m, c: Year(y),
    (Month, None, True): lambda today, y, m, c: YearMonthContext(today.year, m, c),
    (Month, Num, False): lambda today, y, m, c: YearMonth(y, m),
    (Num, Month, False): lambda today, y, m, c: YearMonth(y, m),
    (Month, Num, True): lambda today, y, m, c: YearMonthContext(y, m, c),
    (Num, Month, True): lambda today, y, m, c: YearMonthContext(y, m, c),
}


def resolve_date_spec(tokens, context, today):
    tokens = list(tokens)
    if len(tokens) > 2:
        raise TooManyDateArgs(len(tokens))

    if context is not None and context < 0:
        raise InvalidDateArgCombination(
            f"Context must not be negative, got {context}"
        )

    first = tokens[0] if len(tokens) > 0 else None
    second = tokens[1] if len(tokens) > 1 else None
    rule = RESOLVER_RULES.get((_kind(first), _kind(second), context is not None))
    if rule is None:
        raise InvalidDateArgCombination("Combination of date arguments is invalid")

    month = next((t.month for t in tokens if isinstance(t, Month)), None)
    year = next((t.value for t in tokens if isinstance(t, Num)), None)
    spec = rule(today, year, month, context)

    try:
        date_range(spec)
    except (ValueError, OverflowError) as e:
        raise YearOutOfRange(f"{spec} is outside the supported years: {e}") from e

    return spec

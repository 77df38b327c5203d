"""Month name resolution against a fixed set of twelve names."""
from typing import Optional

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_LOOKUP: dict[str, int] = {}
for _number, _name in enumerate(MONTH_NAMES, start=1):
    _LOOKUP[_name.lower()] = _number
    _LOOKUP[_name[:3].lower()] = _number
_LOOKUP["sept"] = 9


class MonthError(ValueError):
    """Raised when a month parameter is missing or not a month name."""


class MissingMonthError(MonthError):
    pass


class InvalidMonthError(MonthError):
    pass


def resolve_month(month: Optional[str]) -> int:
    """
    Resolve a month name ("March", "mar", " MARCH ") to 1..12.

    Raises MissingMonthError for None/blank input and InvalidMonthError for
    anything outside the twelve names and their abbreviations.
    """
    if month is None or not month.strip():
        raise MissingMonthError("Month parameter is required")
    number = _LOOKUP.get(month.strip().lower())
    if number is None:
        raise InvalidMonthError(f"Unknown month name: {month!r}")
    return number


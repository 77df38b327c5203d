"""Tests for month name resolution."""
import pytest
from salesboard.query.months import (
    MONTH_NAMES,
    InvalidMonthError,
    MissingMonthError,
    resolve_month,
)


def test_resolve_all_month_names():
    """Every canonical name maps to its calendar number."""
    for number, name in enumerate(MONTH_NAMES, start=1):
        assert resolve_month(name) == number


def test_resolve_examples():
    """March is 3 and December is 12."""
    assert resolve_month("March") == 3
    assert resolve_month("December") == 12


def test_resolve_is_idempotent():
    """Resolving the canonical name of a result gives the same number."""
    for name in MONTH_NAMES:
        number = resolve_month(name)
        assert resolve_month(MONTH_NAMES[number - 1]) == number


def test_resolve_case_and_whitespace():
    """Case and surrounding whitespace are ignored."""
    assert resolve_month("march") == 3
    assert resolve_month("  MARCH ") == 3


def test_resolve_abbreviations():
    """Three-letter abbreviations and Sept are accepted."""
    assert resolve_month("Mar") == 3
    assert resolve_month("sep") == 9
    assert resolve_month("Sept") == 9


@pytest.mark.parametrize("value", [None, "", "   "])
def test_missing_month(value):
    """Absent or blank month is a missing parameter."""
    with pytest.raises(MissingMonthError):
        resolve_month(value)


@pytest.mark.parametrize("value", ["Smarch", "3", "March 1", "Marc"])
def test_invalid_month(value):
    """Values outside the fixed names are rejected."""
    with pytest.raises(InvalidMonthError):
        resolve_month(value)


from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from math import isclose

import pytest

from backend.core.valuation import compute_interest, parse_amount, parse_date

NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "start, end",
    [
        (None, "2024-01-01"),
        ("2023-01-01", None),
        (None, None),
        ("", "2024-01-01"),
        ("not a date", "2024-01-01"),
    ],
)
def test_missing_dates_give_zero_interest(start, end):
    assert compute_interest(1_000_000, 10, start, end, NOW) == 0


def test_zero_rate_gives_zero_interest():
    assert compute_interest(1_000_000, 0, "2020-01-01", "2024-01-01", NOW) == 0


def test_same_day_gives_zero_interest():
    assert compute_interest(500_000, 5, "2023-03-15", "2023-03-15", NOW) == 0


def test_start_after_end_gives_zero_not_negative():
    assert compute_interest(1_000_000, 10, "2024-01-01", "2023-01-01", NOW) == 0


def test_one_year_at_ten_percent():
    """365 days over a 365.25-day year: slightly under the full 100,000."""
    interest = compute_interest(1_000_000, 10, "2023-01-01", "2024-01-01", NOW)
    assert isclose(interest, 100_000, rel_tol=1e-3)
    assert isclose(interest, 100_000 * 365 / 365.25, rel_tol=1e-12)


def test_interest_grows_with_elapsed_time():
    ends = ["2023-01-01", "2023-02-01", "2023-07-01", "2024-01-01", "2030-01-01"]
    values = [compute_interest(250_000, 12, "2023-01-01", end, NOW) for end in ends]
    assert values == sorted(values)
    assert values[0] == 0
    assert values[-1] > values[-2]


def test_unparseable_numbers_give_zero():
    assert compute_interest("abc", 10, "2023-01-01", "2024-01-01", NOW) == 0
    assert compute_interest(1_000_000, "ten", "2023-01-01", "2024-01-01", NOW) == 0
    assert compute_interest(None, 10, "2023-01-01", "2024-01-01", NOW) == 0


def test_numeric_strings_are_accepted():
    as_text = compute_interest("1000000", "10", "2023-01-01", "2024-01-01", NOW)
    as_numbers = compute_interest(1_000_000, 10, "2023-01-01", "2024-01-01", NOW)
    assert as_text == as_numbers


def test_date_objects_and_timestamps_agree():
    from_strings = compute_interest(100_000, 6, "2022-01-01", "2023-01-01", NOW)
    from_dates = compute_interest(100_000, 6, date(2022, 1, 1), date(2023, 1, 1), NOW)
    from_zulu = compute_interest(100_000, 6, "2022-01-01T00:00:00Z", "2023-01-01T00:00:00Z", NOW)
    assert from_strings == from_dates == from_zulu


def test_dynamic_start_resolves_to_now():
    assert compute_interest(100_000, 6, "dynamic", "2020-01-01", NOW) == 0
    assert compute_interest(100_000, 6, "dynamic", "dynamic", NOW) == 0


def test_parse_amount_is_strict():
    assert parse_amount("10,000") is None
    assert parse_amount("") is None
    assert parse_amount("nan") is None
    assert parse_amount(True) is None
    assert parse_amount(" 42.5 ") == 42.5


def test_parse_date_normalises_to_utc():
    kst = parse_date("2024-01-01T09:00:00+09:00")
    assert kst == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert parse_date("2024-01-01") == datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_parse_amount_rejects_values_a_float_cannot_hold():
    assert parse_amount(10**400) is None
    assert parse_amount(Decimal("sNaN")) is None
    assert parse_amount("1e400") is None


def test_date_at_the_edge_of_the_calendar_counts_as_missing():
    assert parse_date("0001-01-01T00:00:00+09:00") is None
    assert compute_interest(100, 5, "0001-01-01T00:00:00+09:00", "2024-01-01", NOW) == 0

"""Tests for work-history duration formatting."""

from datetime import date

import pytest

from app.core.durations import calculate_duration, months_between


@pytest.mark.parametrize("start,end,expected", [
    (date(2023, 1, 15), date(2023, 2, 1), "1 month"),
    (date(2023, 1, 1), date(2023, 1, 31), "0 months"),
    (date(2023, 1, 1), date(2023, 6, 1), "5 months"),
    (date(2020, 3, 1), date(2021, 3, 1), "1 year"),
    (date(2018, 3, 1), date(2021, 3, 1), "3 years"),
    (date(2020, 1, 1), date(2021, 2, 1), "1 year, 1 month"),
    (date(2019, 1, 1), date(2021, 8, 1), "2 years, 7 months"),
])
def test_calculate_duration(start, end, expected):
    assert calculate_duration(start, end) == expected


def test_future_start_clamps_to_zero():
    assert calculate_duration(date(2030, 1, 1), date(2025, 1, 1)) == "0 months"


def test_open_ended_runs_until_today():
    today = date.today()
    assert calculate_duration(today) == "0 months"


def test_months_between_ignores_days():
    assert months_between(date(2024, 1, 31), date(2024, 2, 1)) == 1

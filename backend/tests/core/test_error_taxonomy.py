"""Tests for the persistence error taxonomy."""

import pytest

from app.core.error_taxonomy import (
    ERROR_TABLE, GENERIC_MESSAGE, is_not_found_error, is_unique_violation, map_error,
)


@pytest.mark.parametrize("code,status", [
    ("23505", 409),
    ("23503", 400),
    ("23502", 400),
    ("23514", 400),
    ("42501", 403),
    ("42P01", 403),
    ("PGRST116", 404),
    ("PGRST102", 409),
    ("PGRST301", 401),
    ("28000", 401),
    ("28P01", 401),
    ("PGRST302", 401),
])
def test_known_codes_map_to_fixed_status(code, status):
    assert map_error(code).http_status == status


def test_unique_violation_message():
    assert map_error("23505").message == "A record with this value already exists"


def test_unknown_code_is_generic_500():
    mapped = map_error("XX000", "something exploded")
    assert mapped.http_status == 500
    assert mapped.message == GENERIC_MESSAGE


def test_missing_code_is_generic_500():
    assert map_error(None).http_status == 500


def test_zero_rows_fallback_by_message():
    assert map_error(None, "JSON object requested, multiple (or no) rows returned").http_status == 404


def test_zero_rows_fallback_by_details():
    assert map_error("XX000", "oops", "The result contains 0 rows").http_status == 404


def test_table_is_read_only():
    with pytest.raises(TypeError):
        ERROR_TABLE["99999"] = map_error(None)


def test_is_not_found_error():
    assert is_not_found_error("PGRST116")
    assert is_not_found_error(None, details="0 rows")
    assert not is_not_found_error("23505")


def test_is_unique_violation():
    assert is_unique_violation("23505")
    assert not is_unique_violation("23503")
    assert not is_unique_violation(None)

"""Tests for RowStore error translation against a real (SQLite) engine."""

import uuid

import pytest
from sqlalchemy import select

from app.core.error_taxonomy import NO_ROWS, UNIQUE_VIOLATION
from app.infrastructure.row_store import PersistenceError, RowStore
from app.models.job_seeker import JobSeeker


def _seeker(user_id: uuid.UUID) -> JobSeeker:
    return JobSeeker(
        user_id=user_id, first_name="Ana", last_name="Reyes",
        profession="Midwife", location="Davao",
    )


async def test_insert_and_fetch(test_db):
    store = RowStore(test_db)
    created = await store.insert(_seeker(uuid.uuid4()))
    found = await store.fetch_one(select(JobSeeker).where(JobSeeker.id == created.id))
    assert found.first_name == "Ana"


async def test_duplicate_key_is_unique_violation(test_db):
    store = RowStore(test_db)
    user_id = uuid.uuid4()
    await store.insert(_seeker(user_id))
    with pytest.raises(PersistenceError) as exc_info:
        await store.insert(_seeker(user_id))
    assert exc_info.value.code == UNIQUE_VIOLATION


async def test_fetch_one_of_nothing_is_no_rows(test_db):
    store = RowStore(test_db)
    with pytest.raises(PersistenceError) as exc_info:
        await store.fetch_one(select(JobSeeker).where(JobSeeker.id == uuid.uuid4()))
    assert exc_info.value.code == NO_ROWS
    assert "0 rows" in exc_info.value.details


async def test_update_of_missing_row_is_no_rows(test_db):
    store = RowStore(test_db)
    with pytest.raises(PersistenceError) as exc_info:
        await store.update(JobSeeker, {"bio": "x"}, JobSeeker.id == uuid.uuid4())
    assert exc_info.value.code == NO_ROWS


async def test_delete_reports_rowcount(test_db):
    store = RowStore(test_db)
    created = await store.insert(_seeker(uuid.uuid4()))
    assert await store.delete(JobSeeker, JobSeeker.id == created.id) == 1
    assert await store.delete(JobSeeker, JobSeeker.id == created.id) == 0


async def test_store_is_usable_after_failure(test_db):
    store = RowStore(test_db)
    user_id = uuid.uuid4()
    await store.insert(_seeker(user_id))
    with pytest.raises(PersistenceError):
        await store.insert(_seeker(user_id))
    assert await store.count(JobSeeker) == 1

"""
Pytest fixtures for the allocation dashboard tests.

Every test gets its own in-memory SQLite database, so stores never share state.
"""

from typing import Iterator

import pytest
from sqlalchemy import Engine

from database import build_engine, build_session_factory, init_database
from models import AllocationEntry
from utils.store import RecordStore, TargetStore


@pytest.fixture
def engine() -> Iterator[Engine]:
    engine = build_engine("sqlite://")
    init_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def record_store(session_factory) -> RecordStore:
    return RecordStore(session_factory)


@pytest.fixture
def target_store(session_factory) -> TargetStore:
    return TargetStore(session_factory)


def make_entry(
    budget: float,
    split: dict[str, float],
    country: str = "Honduras",
    fiscal_year: str = "FY25",
    record_type: str = "PROJECT",
    record_id: str = "",
) -> AllocationEntry:
    return AllocationEntry(
        id=record_id,
        name=f"Record {record_id}",
        record_type=record_type,
        country=country,
        fiscal_year=fiscal_year,
        budget=budget,
        sector_split=split,
    )


@pytest.fixture
def entry_factory():
    return make_entry

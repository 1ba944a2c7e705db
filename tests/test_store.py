import math
from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy.pool import StaticPool

from database import build_engine, build_session_factory, init_database
from settings import is_in_memory_dsn
from utils.definitions import SECTORS
from utils.store import RecordStore


class TestRecordStore:
    def test_add_appends_in_order(self, record_store, entry_factory):
        record_store.add(entry_factory(1000, {"Health": 100}, record_id="A"))
        records = record_store.add({"id": "B", "budget": 500})
        assert [record.id for record in records] == ["A", "B"]
        assert len(record_store) == 2

    def test_add_blank_record(self, record_store):
        (record,) = record_store.add()
        assert record.id == ""
        assert record.budget == 0.0
        assert record.record_type == "PROJECT"
        assert all(record.sector_split[sector] == 0.0 for sector in SECTORS)

    def test_add_with_keyword_fields(self, record_store):
        (record,) = record_store.add(country="Nicaragua", fiscal_year="FY26")
        assert record.country == "Nicaragua"
        assert record.fiscal_year == "FY26"

    def test_add_coerces_invalid_numbers(self, record_store):
        (record,) = record_store.add(
            {"budget": "lots", "sector_split": {"Health": "half", "Education": "50"}}
        )
        assert record.budget == 0.0
        assert record.sector_split["Health"] == 0.0
        assert record.sector_split["Education"] == 50.0

    def test_update_by_index(self, record_store, entry_factory):
        record_store.add(entry_factory(1000, {"Health": 100}, record_id="A"))
        record_store.add(entry_factory(2000, {"Health": 100}, record_id="B"))
        records = record_store.update(1, "budget", "2500")
        assert records[1].budget == 2500.0
        assert records[0].budget == 1000.0

    def test_update_by_id_hits_first_match(self, record_store, entry_factory):
        record_store.add(entry_factory(1000, {}, record_id="DUP"))
        record_store.add(entry_factory(2000, {}, record_id="DUP"))
        records = record_store.update("DUP", "name", "Renamed")
        assert records[0].name == "Renamed"
        assert records[1].name != "Renamed"

    def test_update_non_numeric_budget_becomes_zero(self, record_store, entry_factory):
        record_store.add(entry_factory(1000, {"Health": 100}))
        (record,) = record_store.update(0, "budget", "not a number")
        assert record.budget == 0.0
        assert not math.isnan(record.budget)

    def test_update_sector_share(self, record_store, entry_factory):
        record_store.add(entry_factory(1000, {"Health": 100}))
        record_store.update(0, "Health", 60)
        (record,) = record_store.update(0, "Education", "40")
        assert record.sector_split["Health"] == 60.0
        assert record.sector_split["Education"] == 40.0

    def test_update_sector_share_invalid_is_zero(self, record_store, entry_factory):
        record_store.add(entry_factory(1000, {"Health": 100}))
        (record,) = record_store.update(0, "Health", None)
        assert record.sector_split["Health"] == 0.0

    def test_update_text_fields(self, record_store):
        record_store.add()
        record_store.update(0, "country", " Honduras ")
        record_store.update(0, "record_type", "cn")
        (record,) = record_store.update(0, "id", "HN-9")
        assert record.country == "Honduras"
        assert record.record_type == "CN"
        assert record.id == "HN-9"

    def test_update_missing_record_is_noop(self, record_store, entry_factory):
        record_store.add(entry_factory(1000, {"Health": 100}))
        before = record_store.all()
        assert record_store.update(5, "budget", 1) == before
        assert record_store.update(-1, "budget", 1) == before
        assert record_store.update("missing", "budget", 1) == before

    def test_update_unknown_field_raises(self, record_store):
        record_store.add()
        with pytest.raises(ValueError):
            record_store.update(0, "colour", "blue")

    def test_delete_by_index_and_id(self, record_store, entry_factory):
        for record_id in ("A", "B", "C"):
            record_store.add(entry_factory(100, {}, record_id=record_id))
        records = record_store.delete(1)
        assert [record.id for record in records] == ["A", "C"]
        records = record_store.delete("C")
        assert [record.id for record in records] == ["A"]

    def test_delete_missing_is_noop(self, record_store, entry_factory):
        record_store.add(entry_factory(100, {}, record_id="A"))
        assert len(record_store.delete("missing")) == 1
        assert len(record_store.delete(10)) == 1

    def test_snapshots_are_detached(self, record_store, entry_factory):
        record_store.add(entry_factory(100, {"Health": 100}))
        snapshot = record_store.all()
        record_store.update(0, "budget", 999)
        assert snapshot[0].budget == 100.0

    def test_clear(self, record_store):
        record_store.add()
        record_store.clear()
        assert record_store.all() == []

    def test_concurrent_sessions_on_shared_connection(self, record_store):
        def add_and_read(worker: int) -> None:
            for i in range(50):
                record_store.add(id=f"W{worker}-{i}", budget=i)
                record_store.all()

        with ThreadPoolExecutor(max_workers=8) as executor:
            futures = [executor.submit(add_and_read, worker) for worker in range(8)]
            errors = [future.exception() for future in futures]

        assert errors == [None] * 8
        assert len(record_store) == 400


class TestTargetStore:
    def test_unknown_country_is_zero_filled(self, target_store):
        targets = target_store.get("Guatemala")
        assert targets == dict.fromkeys(SECTORS, 0.0)
        assert target_store.get(None) == dict.fromkeys(SECTORS, 0.0)

    def test_set_overwrites_value(self, target_store):
        target_store.set("Honduras", "Health", 10)
        targets = target_store.set("Honduras", "Health", "12.5")
        assert targets["Health"] == 12.5
        assert targets["Education"] == 0.0

    def test_set_invalid_value_becomes_zero(self, target_store):
        target_store.set("Honduras", "Health", 10)
        assert target_store.set("Honduras", "Health", "n/a")["Health"] == 0.0

    def test_set_unknown_sector_raises(self, target_store):
        with pytest.raises(ValueError):
            target_store.set("Honduras", "Transport", 5)

    def test_countries_are_independent(self, target_store):
        target_store.set("Honduras", "Health", 10)
        target_store.set("Nicaragua", "Health", 20)
        everything = target_store.all()
        assert everything["Honduras"]["Health"] == 10.0
        assert everything["Nicaragua"]["Health"] == 20.0

    def test_load_and_clear(self, target_store):
        target_store.load({"Honduras": {"Education": 2, "Peacebuilding": 55.2}})
        assert target_store.get("Honduras")["Peacebuilding"] == 55.2
        target_store.clear()
        assert target_store.all() == {}


@pytest.mark.parametrize(
    "dsn, expected",
    [
        ("sqlite://", True),
        ("sqlite:///:memory:", True),
        ("sqlite:///allocations.db", False),
        ("postgresql://user@localhost/allocations", False),
    ],
)
def test_is_in_memory_dsn(dsn, expected):
    assert is_in_memory_dsn(dsn) is expected


def test_file_database_does_not_share_one_connection(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'allocations.db'}")
    init_database(engine)
    store = RecordStore(build_session_factory(engine))
    store.add(id="A", budget=100)
    assert [record.id for record in store.all()] == ["A"]
    assert not isinstance(engine.pool, StaticPool)
    engine.dispose()

from utils.definitions import ALL_FISCAL_YEARS, SECTORS, fiscal_year_filter
from utils.table import (
    TableChange,
    add_table_row,
    apply_record_edits,
    apply_target_edits,
    diff_rows,
    records_to_rows,
    summaries_to_rows,
    targets_to_rows,
)
from utils.aggregate import aggregate


def test_records_to_rows_flattens_sectors(entry_factory):
    (row,) = records_to_rows([entry_factory(1000, {"Health": 60, "Education": 30}, record_id="A")])
    assert row["id"] == "A"
    assert row["budget"] == 1000.0
    assert row["Health"] == 60.0
    assert row["Peacebuilding"] == 0.0
    assert row["split_total"] == 90.0
    assert all(sector in row for sector in SECTORS)


def test_targets_to_rows():
    rows = targets_to_rows({"Health": 12.0})
    assert [row["sector"] for row in rows] == list(SECTORS)
    assert rows[SECTORS.index("Health")]["target"] == 12.0
    assert rows[0]["target"] == 0.0


def test_summaries_to_rows(entry_factory):
    rows = summaries_to_rows(aggregate([entry_factory(100, {"Health": 100})], {}))
    assert rows[SECTORS.index("Health")]["actual_percent"] == 100.0
    assert set(rows[0]) >= {"sector", "dollar_total", "deviation"}


def test_diff_detects_cell_edits():
    previous = [{"id": "A", "budget": 100}, {"id": "B", "budget": 200}]
    current = [{"id": "A", "budget": 100}, {"id": "B", "budget": "abc"}]
    assert diff_rows(previous, current) == [TableChange("update", 1, "budget", "abc")]


def test_diff_detects_sector_edit():
    previous = [{"id": "A", "Health": 10}]
    current = [{"id": "A", "Health": 40}]
    assert diff_rows(previous, current) == [TableChange("update", 0, "Health", 40)]


def test_diff_ignores_read_only_columns():
    previous = [{"id": "A", "split_total": 10}]
    current = [{"id": "A", "split_total": 40}]
    assert diff_rows(previous, current) == []


def test_diff_detects_deleted_row():
    previous = [{"id": "A"}, {"id": "B"}, {"id": "C"}]
    current = [{"id": "A"}, {"id": "C"}]
    assert diff_rows(previous, current) == [TableChange("delete", 1)]


def test_diff_deletes_highest_index_first():
    previous = [{"id": "A"}, {"id": "B"}, {"id": "C"}, {"id": "D"}]
    current = [{"id": "B"}, {"id": "D"}]
    assert diff_rows(previous, current) == [TableChange("delete", 2), TableChange("delete", 0)]


def test_diff_deleted_duplicate_row():
    previous = [{"id": "A"}, {"id": "A"}]
    current = [{"id": "A"}]
    assert diff_rows(previous, current) == [TableChange("delete", 1)]


def test_diff_without_previous_data():
    assert diff_rows(None, [{"id": "A"}]) == []
    assert diff_rows(None, None) == []


def test_diff_with_custom_fields():
    previous = [{"sector": "Health", "target": 1}]
    current = [{"sector": "Health", "target": "5"}]
    assert diff_rows(previous, current, fields=("target",)) == [
        TableChange("update", 0, "target", "5")
    ]


def test_table_edits_round_trip_through_store(record_store, entry_factory):
    record_store.add(entry_factory(1000, {"Health": 100}, record_id="A"))
    record_store.add(entry_factory(500, {"Education": 100}, record_id="B"))
    previous = records_to_rows(record_store.all())
    current = [dict(row) for row in previous]
    current[0]["budget"] = "bad input"
    current[1]["Health"] = 25

    for change in diff_rows(previous, current):
        record_store.update(change.index, change.field, change.value)

    records = record_store.all()
    assert records[0].budget == 0.0
    assert records[1].sector_split["Health"] == 25.0


def test_fiscal_year_filter():
    assert fiscal_year_filter(ALL_FISCAL_YEARS) is None
    assert fiscal_year_filter(None) is None
    assert fiscal_year_filter("FY26") == "FY26"


def test_add_table_row_uses_selected_filters(record_store):
    add_table_row(record_store, "Nicaragua", "FY26")
    (record,) = record_store.all()
    assert record.country == "Nicaragua"
    assert record.fiscal_year == "FY26"
    assert record.budget == 0.0


def test_add_table_row_with_all_years_leaves_fiscal_year_blank(record_store):
    add_table_row(record_store, "Honduras", ALL_FISCAL_YEARS)
    add_table_row(record_store, None, None)
    first, second = record_store.all()
    assert first.country == "Honduras"
    assert first.fiscal_year == ""
    assert second.country == ""
    assert second.fiscal_year == ""


def test_apply_record_edits_updates_and_deletes(record_store, entry_factory):
    for record_id in ("A", "B", "C"):
        record_store.add(entry_factory(1000, {"Health": 100}, record_id=record_id))
    previous = records_to_rows(record_store.all())
    current = [dict(row) for row in previous]
    current[2]["budget"] = "2,500"

    assert apply_record_edits(record_store, previous, current) == 1
    assert record_store.all()[2].budget == 2500.0

    previous = records_to_rows(record_store.all())
    current = [previous[0], previous[2]]
    assert apply_record_edits(record_store, previous, current) == 1
    assert [record.id for record in record_store.all()] == ["A", "C"]


def test_apply_record_edits_without_changes(record_store, entry_factory):
    record_store.add(entry_factory(1000, {"Health": 100}, record_id="A"))
    rows = records_to_rows(record_store.all())
    assert apply_record_edits(record_store, rows, [dict(row) for row in rows]) == 0
    assert apply_record_edits(record_store, None, rows) == 0


def test_apply_target_edits_stores_edited_values(target_store):
    previous = targets_to_rows(target_store.get("Honduras"))
    current = [dict(row) for row in previous]
    current[SECTORS.index("Health")]["target"] = "12.5"

    assert apply_target_edits(target_store, "Honduras", previous, current) == 1
    assert target_store.get("Honduras")["Health"] == 12.5
    assert target_store.get("Nicaragua")["Health"] == 0.0


def test_apply_target_edits_without_country_stores_nothing(target_store):
    previous = targets_to_rows(target_store.get(None))
    current = [dict(row) for row in previous]
    current[0]["target"] = 30

    assert apply_target_edits(target_store, None, previous, current) == 0
    assert apply_target_edits(target_store, "", previous, current) == 0
    assert target_store.all() == {}

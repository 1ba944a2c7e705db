"""
Conversion between store snapshots and Dash DataTable rows, and detection of the
edits a user made to a table between two renders, which are then applied to the
stores.
"""

import logging
from typing import Any, Literal, NamedTuple, Sequence

from models import AllocationEntry, SectorSummary
from utils.definitions import (
    RECORD_NUMERIC_FIELDS,
    RECORD_TEXT_FIELDS,
    SECTORS,
    fiscal_year_filter,
)
from utils.store import RecordStore, TargetStore

logger = logging.getLogger(__name__)

RECORD_FIELDS: tuple[str, ...] = RECORD_TEXT_FIELDS + RECORD_NUMERIC_FIELDS + SECTORS


class TableChange(NamedTuple):
    action: Literal["update", "delete"]
    index: int
    field: str | None = None
    value: Any = None


def records_to_rows(entries: Sequence[AllocationEntry]) -> list[dict[str, Any]]:
    """Flatten entries into table rows, one column per sector."""
    rows = []
    for entry in entries:
        row: dict[str, Any] = {
            "id": entry.id,
            "name": entry.name,
            "record_type": entry.record_type,
            "country": entry.country,
            "fiscal_year": entry.fiscal_year,
            "budget": entry.budget,
        }
        for sector in SECTORS:
            row[sector] = entry.sector_share(sector)
        row["split_total"] = sum(entry.sector_split.values())
        rows.append(row)
    return rows


def targets_to_rows(targets: dict[str, float]) -> list[dict[str, Any]]:
    return [{"sector": sector, "target": targets.get(sector, 0.0)} for sector in SECTORS]


def summaries_to_rows(summaries: Sequence[SectorSummary]) -> list[dict[str, Any]]:
    return [summary.model_dump() for summary in summaries]


def _deleted_indices(
    previous: Sequence[dict[str, Any]], current: Sequence[dict[str, Any]]
) -> list[int]:
    """Positions of `previous` rows missing from `current`, matched in order."""
    deleted = []
    j = 0
    for i, row in enumerate(previous):
        if j < len(current) and current[j] == row:
            j += 1
        else:
            deleted.append(i)
    return deleted


def diff_rows(
    previous: Sequence[dict[str, Any]] | None,
    current: Sequence[dict[str, Any]] | None,
    fields: Sequence[str] = RECORD_FIELDS,
) -> list[TableChange]:
    """
    Work out what changed between two versions of an editable table.

    Deleted rows are reported from the highest index down, so applying the changes
    in order never shifts a position that is still to be deleted.
    Cell edits are reported per (row, field), only for `fields`.
    """
    previous = list(previous or [])
    current = list(current or [])

    if len(current) < len(previous):
        return [
            TableChange("delete", index)
            for index in sorted(_deleted_indices(previous, current), reverse=True)
        ]

    changes = []
    for index, (old, new) in enumerate(zip(previous, current)):
        for field in fields:
            if old.get(field) != new.get(field):
                changes.append(TableChange("update", index, field, new.get(field)))
    return changes


def add_table_row(store: RecordStore, country: str | None, fiscal_year: str | None) -> None:
    """Append a blank record in the selected country and fiscal year ("All years" leaves it blank)."""
    store.add(country=country, fiscal_year=fiscal_year_filter(fiscal_year) or "")


def apply_record_edits(
    store: RecordStore,
    previous: Sequence[dict[str, Any]] | None,
    current: Sequence[dict[str, Any]] | None,
) -> int:
    """Forward the deletions and cell edits between two table versions to `store`."""
    changes = diff_rows(previous, current)
    for change in changes:
        if change.action == "delete":
            store.delete(change.index)
        else:
            store.update(change.index, change.field, change.value)
    if changes:
        logger.info("Applied %d record table change(s)", len(changes))
    return len(changes)


def apply_target_edits(
    store: TargetStore,
    country: str | None,
    previous: Sequence[dict[str, Any]] | None,
    current: Sequence[dict[str, Any]] | None,
) -> int:
    """
    Store the target values edited in the targets table of `country`.
    Without a selected country there is nowhere to put them and nothing is stored.
    """
    if not country:
        return 0
    changes = diff_rows(previous, current, fields=("target",))
    changes = [change for change in changes if change.action == "update"]
    rows = list(current or [])
    for change in changes:
        store.set(country, rows[change.index]["sector"], change.value)
    if changes:
        logger.info("Updated %d target(s) for %s", len(changes), country)
    return len(changes)

import logging
from typing import Any, Mapping

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from database import SessionFactory, get_sync_session
from models import AllocationEntry, AllocationRecord, SectorTarget, normalize_sector_split
from utils.definitions import SECTORS
from utils.helper import to_budget, to_number, to_text

logger = logging.getLogger(__name__)

# Table column -> entry field for the text columns
_TEXT_COLUMNS = {
    "id": "record_id",
    "name": "name",
    "record_type": "record_type",
    "country": "country",
    "fiscal_year": "fiscal_year",
}


def _to_entry(record: AllocationRecord) -> AllocationEntry:
    return AllocationEntry(
        id=record.record_id,
        name=record.name,
        record_type=record.record_type,
        country=record.country,
        fiscal_year=record.fiscal_year,
        budget=record.budget,
        sector_split=record.sector_split,
    )


class RecordStore:
    """
    Ordered collection of projects and country notes.

    Records are addressed either by position (int, in the order they were added)
    or by their user supplied id (str, first match wins since ids are not unique).
    Every mutation returns the full, updated collection.
    """

    def __init__(self, session_factory: SessionFactory = get_sync_session):
        self.session_factory = session_factory

    def _locate(self, session: Session, index_or_id: int | str) -> AllocationRecord | None:
        stmt = select(AllocationRecord).order_by(AllocationRecord.pk)
        if isinstance(index_or_id, str):
            stmt = stmt.where(AllocationRecord.record_id == index_or_id)
        else:
            if index_or_id < 0:
                return None
            stmt = stmt.offset(index_or_id)
        return session.execute(stmt.limit(1)).scalars().first()

    def all(self) -> list[AllocationEntry]:
        """Snapshot of every record in insertion order."""
        with self.session_factory() as session:
            records = (
                session.execute(select(AllocationRecord).order_by(AllocationRecord.pk))
                .scalars()
                .all()
            )
            return [_to_entry(record) for record in records]

    def __len__(self) -> int:
        with self.session_factory() as session:
            return session.execute(select(func.count(AllocationRecord.pk))).scalar_one()

    def add(
        self, record: AllocationEntry | Mapping[str, Any] | None = None, **fields: Any
    ) -> list[AllocationEntry]:
        """Append a record, fields not supplied stay blank."""
        if isinstance(record, AllocationEntry):
            values = record.model_dump()
        else:
            values = dict(record or {})
        values.update(fields)
        # Validation coerces every numeric field
        entry = AllocationEntry.model_validate(values)

        with self.session_factory() as session:
            session.add(
                AllocationRecord(
                    record_id=entry.id,
                    name=entry.name,
                    record_type=entry.record_type,
                    country=entry.country,
                    fiscal_year=entry.fiscal_year,
                    budget=entry.budget,
                    sector_split=dict(entry.sector_split),
                )
            )
        logger.debug("Added record %r (%s, %s)", entry.id, entry.country, entry.fiscal_year)
        return self.all()

    def add_many(self, records: list[AllocationEntry | Mapping[str, Any]]) -> list[AllocationEntry]:
        for record in records:
            self.add(record)
        return self.all()

    def update(self, index_or_id: int | str, field: str, value: Any) -> list[AllocationEntry]:
        """
        Overwrite one field of one record.
        `field` is a text column ("id", "name", "record_type", "country", "fiscal_year"),
        "budget" or a sector name. Numeric input that does not parse is stored as 0.
        """
        if field not in _TEXT_COLUMNS and field != "budget" and field not in SECTORS:
            raise ValueError(f"Unknown record field: {field}")

        with self.session_factory() as session:
            record = self._locate(session, index_or_id)
            if record is None:
                logger.warning("Update of %s ignored, no record %r", field, index_or_id)
            elif field == "budget":
                record.budget = to_budget(value)
            elif field in SECTORS:
                # Reassign so the JSON column is flagged as changed
                split = normalize_sector_split(record.sector_split)
                split[field] = to_number(value)
                record.sector_split = split
            elif field == "record_type":
                record.record_type = to_text(value).upper() or "PROJECT"
            else:
                setattr(record, _TEXT_COLUMNS[field], to_text(value))
        return self.all()

    def delete(self, index_or_id: int | str) -> list[AllocationEntry]:
        """Remove one record, missing records are ignored."""
        with self.session_factory() as session:
            record = self._locate(session, index_or_id)
            if record is None:
                logger.warning("Delete ignored, no record %r", index_or_id)
            else:
                session.delete(record)
                logger.debug("Deleted record %r", index_or_id)
        return self.all()

    def clear(self) -> None:
        with self.session_factory() as session:
            session.execute(delete(AllocationRecord))


class TargetStore:
    """Per-country strategic targets, sector -> percentage points."""

    def __init__(self, session_factory: SessionFactory = get_sync_session):
        self.session_factory = session_factory

    def set(self, country: str, sector: str, value: Any) -> dict[str, float]:
        """Overwrite the target of one (country, sector) pair and return the country's targets."""
        if sector not in SECTORS:
            raise ValueError(f"Unknown sector: {sector}")
        with self.session_factory() as session:
            session.merge(SectorTarget(country=country, sector=sector, value=to_number(value)))
        return self.get(country)

    def get(self, country: str | None) -> dict[str, float]:
        """Targets of `country` for every sector, zero-filled when nothing was set."""
        targets = dict.fromkeys(SECTORS, 0.0)
        if not country:
            return targets
        with self.session_factory() as session:
            rows = session.execute(
                select(SectorTarget.sector, SectorTarget.value).where(
                    SectorTarget.country == country
                )
            ).all()
        for sector, value in rows:
            targets[sector] = value
        return targets

    def all(self) -> dict[str, dict[str, float]]:
        with self.session_factory() as session:
            countries = session.execute(select(SectorTarget.country).distinct()).scalars().all()
        return {country: self.get(country) for country in countries}

    def load(self, targets: Mapping[str, Mapping[str, Any]]) -> None:
        """Set every (country, sector) pair found in `targets`."""
        for country, sectors in targets.items():
            for sector, value in sectors.items():
                self.set(country, sector, value)

    def clear(self) -> None:
        with self.session_factory() as session:
            session.execute(delete(SectorTarget))


record_store = RecordStore()
target_store = TargetStore()

"""
Immutable snapshots handed out by the stores and returned by the aggregation engine.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from utils.definitions import SECTORS, is_country_note
from utils.helper import to_budget, to_number, to_text


def normalize_sector_split(split: Any) -> dict[str, float]:
    """Full sector -> percentage mapping, missing sectors are 0 and unknown keys are dropped."""
    split = split if isinstance(split, dict) else {}
    return {sector: to_number(split.get(sector)) for sector in SECTORS}


class AllocationEntry(BaseModel):
    """A project or country note as seen by the aggregation engine."""

    model_config = ConfigDict(frozen=True, validate_default=True)

    id: str = ""
    name: str = ""
    record_type: str = "PROJECT"
    country: str = ""
    fiscal_year: str = ""
    budget: float = 0.0
    # Sector -> percentage points (0-100) of the budget
    sector_split: dict[str, float] = {}

    @field_validator("id", "name", "country", "fiscal_year", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return to_text(value)

    @field_validator("record_type", mode="before")
    @classmethod
    def _record_type(cls, value: Any) -> str:
        return to_text(value).upper() or "PROJECT"

    @field_validator("budget", mode="before")
    @classmethod
    def _budget(cls, value: Any) -> float:
        return to_budget(value)

    @field_validator("sector_split", mode="before")
    @classmethod
    def _sector_split(cls, value: Any) -> dict[str, float]:
        return normalize_sector_split(value)

    @property
    def is_country_note(self) -> bool:
        return is_country_note(self.record_type)

    def sector_share(self, sector: str) -> float:
        """Percentage points of the budget assigned to `sector`, 0 when absent."""
        return self.sector_split.get(sector, 0.0)


class SectorSummary(BaseModel):
    """Aggregated allocation of one sector."""

    model_config = ConfigDict(frozen=True)

    sector: str
    dollar_total: float = 0.0
    actual_percent: float = 0.0
    target_percent: float = 0.0
    # actual_percent - target_percent, in percentage points
    deviation: float = 0.0
    # Only set when projects and country notes were aggregated together
    projected_percent: float | None = None
    projected_dollars: float | None = None

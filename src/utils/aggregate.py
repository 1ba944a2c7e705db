"""
Allocation aggregation: per-sector dollar totals, percentage shares and deviations
from the strategic targets.

Everything here is a pure function of its inputs and is recomputed on every call.
Percentages are in points (0-100). Nothing in this module raises on data, divisions
by a zero total yield 0.
"""

from typing import Iterable, Mapping, Sequence

from models import AllocationEntry, SectorSummary
from utils.definitions import FISCAL_YEARS, SECTORS

TargetMapping = Mapping[str, Mapping[str, float]]


def filter_records(
    records: Iterable[AllocationEntry],
    country: str | None = None,
    fiscal_year: str | None = None,
) -> list[AllocationEntry]:
    """Keep records matching both filters, an omitted filter matches everything."""
    return [
        record
        for record in records
        if (not country or record.country == country)
        and (not fiscal_year or record.fiscal_year == fiscal_year)
    ]


def grand_total(
    records: Iterable[AllocationEntry],
    country: str | None = None,
    fiscal_year: str | None = None,
) -> float:
    """Sum of budgets of the filtered records."""
    return sum(record.budget for record in filter_records(records, country, fiscal_year))


def sector_dollar_totals(records: Iterable[AllocationEntry]) -> dict[str, float]:
    """Dollars per sector, budget fractions not assigned to any sector are dropped."""
    totals = dict.fromkeys(SECTORS, 0.0)
    for record in records:
        for sector in SECTORS:
            totals[sector] += record.sector_share(sector) / 100 * record.budget
    return totals


def _share(part: float, total: float) -> float:
    return part / total * 100 if total > 0 else 0.0


def summarize(
    records: Iterable[AllocationEntry],
    targets: TargetMapping,
    country: str | None = None,
    fiscal_year: str | None = None,
) -> list[SectorSummary]:
    """
    Aggregate the given records into one summary per sector, in `SECTORS` order.
    Record types are not looked at, the caller decides which subset to pass.
    """
    filtered = filter_records(records, country, fiscal_year)
    total = sum(record.budget for record in filtered)
    dollars = sector_dollar_totals(filtered)
    country_targets = targets.get(country, {}) if country else {}

    summaries = []
    for sector in SECTORS:
        actual = _share(dollars[sector], total)
        target = country_targets.get(sector, 0.0)
        summaries.append(
            SectorSummary(
                sector=sector,
                dollar_total=dollars[sector],
                actual_percent=actual,
                target_percent=target,
                deviation=actual - target,
            )
        )
    return summaries


def aggregate(
    records: Sequence[AllocationEntry],
    targets: TargetMapping,
    country: str | None = None,
    fiscal_year: str | None = None,
    projected: bool = False,
) -> list[SectorSummary]:
    """
    Actual allocation from committed projects, optionally with the projected allocation
    of projects and country notes combined.

    Args:
        records: Every record in the store, projects and country notes.
        targets: Country -> sector -> target percentage.
        country: Only aggregate records of this country. Also selects the targets.
        fiscal_year: Only aggregate records of this fiscal year.
        projected: Also fill `projected_percent` and `projected_dollars`.
    Returns:
        list[SectorSummary]: One summary per sector, in `SECTORS` order.
    """
    projects = [record for record in records if not record.is_country_note]
    actual = summarize(projects, targets, country, fiscal_year)
    if not projected:
        return actual

    # Independent pass over a separate list, projects and CNs together
    combined = summarize(list(records), targets, country, fiscal_year)
    return [
        summary.model_copy(
            update={
                "projected_percent": projection.actual_percent,
                "projected_dollars": projection.dollar_total,
            }
        )
        for summary, projection in zip(actual, combined)
    ]


def aggregate_by_fiscal_year(
    records: Sequence[AllocationEntry],
    targets: TargetMapping,
    country: str | None = None,
    fiscal_years: Sequence[str] = FISCAL_YEARS,
    projected: bool = False,
) -> dict[str, list[SectorSummary]]:
    """Multi-year breakdown, one `aggregate` per fiscal year (in the given order)."""
    return {
        fiscal_year: aggregate(records, targets, country, fiscal_year, projected)
        for fiscal_year in fiscal_years
    }

from typing import Literal


ChartTypeLiteral = Literal["PIE", "BAR", "LINE"]

# Display order, computation does not depend on it
SECTORS: tuple[str, ...] = (
    "Education",
    "Food Security & Livelihoods",
    "Health",
    "Humanitarian Assistance",
    "Peacebuilding",
)

COUNTRIES: tuple[str, ...] = ("Honduras", "Nicaragua")
FISCAL_YEARS: tuple[str, ...] = ("FY25", "FY26", "FY27")
CHART_TYPES: tuple[str, ...] = ("PIE", "BAR", "LINE")
RECORD_TYPES: tuple[str, ...] = ("PROJECT", "CN")

# Editable record fields other than the per-sector split values
RECORD_TEXT_FIELDS: tuple[str, ...] = ("id", "name", "record_type", "country", "fiscal_year")
RECORD_NUMERIC_FIELDS: tuple[str, ...] = ("budget",)

# Strategic plan targets in percentage points, not required to sum to 100
DEFAULT_TARGETS: dict[str, dict[str, float]] = {
    "Honduras": {
        "Education": 2.0,
        "Food Security & Livelihoods": 22.4,
        "Health": 0.0,
        "Humanitarian Assistance": 18.1,
        "Peacebuilding": 55.2,
    },
    "Nicaragua": {
        "Education": 14.9,
        "Food Security & Livelihoods": 35.3,
        "Health": 20.3,
        "Humanitarian Assistance": 9.0,
        "Peacebuilding": 20.4,
    },
}


def is_country_note(record_type: str | None) -> bool:
    """Country notes are tagged "CN", anything else counts as a committed project."""
    return (record_type or "").strip().upper() == "CN"


# Fiscal year selector value that disables the fiscal year filter
ALL_FISCAL_YEARS = "ALL"


def fiscal_year_filter(fiscal_year: str | None) -> str | None:
    return None if not fiscal_year or fiscal_year == ALL_FISCAL_YEARS else fiscal_year

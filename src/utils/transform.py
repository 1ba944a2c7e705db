from typing import Mapping, Sequence

import pandas as pd

from models import SectorSummary

SUMMARY_COLUMNS = [
    "sector",
    "dollar_total",
    "actual_percent",
    "target_percent",
    "deviation",
    "projected_percent",
    "projected_dollars",
]


class SummaryTransformer:
    def __init__(self, summaries: Sequence[SectorSummary]):
        self.summaries = summaries

    def transform_data(self) -> pd.DataFrame:
        """One row per sector with every summary field as a column."""
        if not self.summaries:
            return pd.DataFrame(columns=SUMMARY_COLUMNS)
        return pd.DataFrame([summary.model_dump() for summary in self.summaries])[SUMMARY_COLUMNS]

    def transform_long(self) -> pd.DataFrame:
        """
        Long format for grouped bar and line charts: one row per (sector, measure).
        Measures are "Actual", "Target" and, when present, "Projected".
        """
        df = self.transform_data()
        value_columns = {"actual_percent": "Actual", "target_percent": "Target"}
        if df["projected_percent"].notna().any():
            value_columns["projected_percent"] = "Projected"
        long_df = df.melt(
            id_vars=["sector"],
            value_vars=list(value_columns),
            var_name="measure",
            value_name="percent",
        )
        long_df["measure"] = long_df["measure"].map(value_columns)
        return long_df


class FiscalYearTransformer:
    def __init__(self, breakdown: Mapping[str, Sequence[SectorSummary]]):
        self.breakdown = breakdown

    def transform_data(self) -> pd.DataFrame:
        """One row per (fiscal year, sector) in breakdown order."""
        rows = [
            {
                "fiscal_year": fiscal_year,
                "sector": summary.sector,
                "dollar_total": summary.dollar_total,
                "actual_percent": summary.actual_percent,
                "target_percent": summary.target_percent,
                "deviation": summary.deviation,
            }
            for fiscal_year, summaries in self.breakdown.items()
            for summary in summaries
        ]
        return pd.DataFrame(
            rows,
            columns=[
                "fiscal_year",
                "sector",
                "dollar_total",
                "actual_percent",
                "target_percent",
                "deviation",
            ],
        )

"""State and city income tax comparison.

Builds the numbers behind the comparison tables and chart: effective tax and
effective rate per jurisdiction at a set of gross incomes, a stacked NY + NYC
total, and collapsed marginal-rate segments. Values are left unrounded and
unformatted; the presentation layer decides how to show them.

- Effective rates are relative to gross income (the NY exemption lowers them).
- The "NYC Total" column is NY and NYC computed independently and added.
- The standard/extended income range is just a choice of income list; pass
  ``income_levels(extended=True)`` for the long range.
"""

import logging
from dataclasses import asdict, dataclass, field, fields

from income_tax import compress_to_segments, effective_tax, stacked_effective_tax
from schedules import get_schedule

logger = logging.getLogger(__name__)

# Incomes shown in the marginal-rate table
BRACKET_INCOME_LEVELS = [
    0,
    10_000,
    25_000,
    50_000,
    75_000,
    100_000,
    150_000,
    200_000,
    300_000,
    500_000,
    750_000,
    1_000_000,
    1_500_000,
    2_000_000,
    5_000_000,
    10_000_000,
    25_000_000,
]

# Incomes shown in the effective-rate and amount tables
STANDARD_INCOME_LEVELS = [100_000, 200_000, 300_000, 500_000, 750_000, 1_000_000]
EXTENDED_INCOME_LEVELS = STANDARD_INCOME_LEVELS + [
    1_500_000,
    2_000_000,
    3_000_000,
    5_000_000,
    10_000_000,
    25_000_000,
]

# Row order of the marginal-rate table
BRACKET_TABLE_ORDER = ["NJ", "NY", "CT", "NYC"]


def income_levels(extended: bool = False) -> list[int]:
    return list(EXTENDED_INCOME_LEVELS if extended else STANDARD_INCOME_LEVELS)


@dataclass
class ComparisonInputs:
    income_levels: list[float] = field(default_factory=lambda: list(STANDARD_INCOME_LEVELS))
    jurisdictions: list[str] = field(default_factory=lambda: ["CT", "NJ", "NY"])
    base: str | None = "NY"
    surcharge: str | None = "NYC"
    stacked_label: str = "NYC Total"


@dataclass
class ComparisonRow:
    income: float
    jurisdiction: str  # column label; stacked_label for the stacked total
    tax: float
    effective_rate: float


@dataclass
class SegmentRow:
    jurisdiction: str
    rate: float
    start_index: int
    end_index: int
    span: int
    start_income: float
    end_income: float


def compare(inputs: ComparisonInputs | None = None) -> list[ComparisonRow]:
    """One row per income level and jurisdiction, plus the stacked total."""
    inputs = inputs or ComparisonInputs()

    stacked = inputs.base is not None and inputs.surcharge is not None

    # Fail on a bad identifier before doing any work
    for jurisdiction in inputs.jurisdictions + ([inputs.base, inputs.surcharge] if stacked else []):
        get_schedule(jurisdiction)

    rows: list[ComparisonRow] = []
    for income in inputs.income_levels:
        for jurisdiction in inputs.jurisdictions:
            tax, rate = effective_tax(income, jurisdiction)
            rows.append(ComparisonRow(income=income, jurisdiction=jurisdiction, tax=tax, effective_rate=rate))

        if stacked:
            tax, rate = stacked_effective_tax(income, inputs.base, inputs.surcharge)
            rows.append(
                ComparisonRow(income=income, jurisdiction=inputs.stacked_label, tax=tax, effective_rate=rate)
            )

    logger.debug("Built %d comparison rows for %d incomes", len(rows), len(inputs.income_levels))
    return rows


def marginal_segments(
    levels: list[float] | None = None,
    jurisdictions: list[str] | None = None,
) -> list[SegmentRow]:
    """Collapsed marginal-rate cells for each jurisdiction, in table order."""
    levels = list(BRACKET_INCOME_LEVELS if levels is None else levels)
    jurisdictions = list(BRACKET_TABLE_ORDER if jurisdictions is None else jurisdictions)

    rows: list[SegmentRow] = []
    for jurisdiction in jurisdictions:
        for seg in compress_to_segments(levels, jurisdiction):
            rows.append(
                SegmentRow(
                    jurisdiction=jurisdiction,
                    rate=seg.rate,
                    start_index=seg.start_index,
                    end_index=seg.end_index,
                    span=seg.span,
                    start_income=levels[seg.start_index],
                    end_income=levels[seg.end_index],
                )
            )
    return rows


def to_dataframe(rows: list[ComparisonRow] | list[SegmentRow], row_type: type = ComparisonRow):
    """DataFrame with one column per row field; ``row_type`` names the columns when ``rows`` is empty."""
    try:
        import pandas as pd
    except ImportError:
        raise RuntimeError("pandas is required to build a DataFrame output")
    columns = [f.name for f in fields(type(rows[0]) if rows else row_type)]
    return pd.DataFrame([asdict(r) for r in rows], columns=columns)


def pivot(df, value: str = "effective_rate"):
    """Wide table: one row per income, one column per jurisdiction label."""
    if df.empty:
        return df.set_index("income").iloc[:, :0]

    wide = df.pivot(index="income", columns="jurisdiction", values=value)
    # pivot sorts columns; keep the order rows were built in
    wide = wide[list(dict.fromkeys(df["jurisdiction"]))]
    wide.columns.name = None
    return wide

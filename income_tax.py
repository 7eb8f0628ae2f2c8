"""Income tax bracket utilities.

This module provides a simple progressive tax calculator over the schedules
in ``schedules``, e.g. for New Jersey:
    [Bracket(rate=1.40, min=0, max=20000), Bracket(rate=1.75, min=20001, ...), ...]

Rates are percentages and all amounts are plain dollars. Nothing is rounded
here; formatting is left to the caller.
"""
from dataclasses import dataclass
from typing import Iterable, List, NamedTuple, Sequence

from schedules import Bracket, get_exemption, get_schedule


class TaxResult(NamedTuple):
    amount: float  # total tax in dollars
    rate: float    # percent of gross income


@dataclass(frozen=True)
class BracketSegment:
    rate: float
    start_index: int
    end_index: int
    span: int


def taxable_income(income: float, exemption: float = 0.0) -> float:
    return max(0.0, income - exemption)


def rate_for_income(taxable: float, brackets: Sequence[Bracket]) -> float:
    """Marginal rate of the bracket holding ``taxable``.

    Brackets are contiguous from 0, so the first one whose max is not below
    the income is the one containing it. Cents between two whole-dollar
    brackets belong to the upper one, as they do in compute_tax.
    """
    for b in brackets:
        if taxable <= b.max:
            return b.rate
    return brackets[-1].rate


def compute_tax(taxable: float, brackets: Sequence[Bracket]) -> float:
    """Compute tax owed under progressive brackets.

    Args:
        taxable: income subject to the brackets (after any exemption).
        brackets: ordered low-to-high list of Bracket.

    Returns:
        Total tax in dollars. Income above the last bracket's max is taxed
        at the last bracket's rate.
    """
    if taxable <= 0:
        return 0.0

    tax = 0.0
    previous = 0.0
    last = len(brackets) - 1
    for i, b in enumerate(brackets):
        upper = float('inf') if i == last else b.max
        amount_in_bracket = min(taxable, upper) - previous
        if amount_in_bracket > 0:
            tax += amount_in_bracket * b.rate / 100
        if taxable <= upper:
            break
        previous = upper
    return tax


def marginal_rate(income: float, jurisdiction: str) -> float:
    taxable = taxable_income(income, get_exemption(jurisdiction))
    return rate_for_income(taxable, get_schedule(jurisdiction))


def effective_tax(income: float, jurisdiction: str) -> TaxResult:
    """Total tax and effective rate for a gross income.

    The rate is relative to gross income, so an exemption lowers it.
    """
    brackets = get_schedule(jurisdiction)
    taxable = taxable_income(income, get_exemption(jurisdiction))
    if taxable <= 0:
        return TaxResult(0.0, 0.0)

    tax = compute_tax(taxable, brackets)
    return TaxResult(tax, tax / income * 100)


def stacked_effective_tax(income: float, base: str, surcharge: str) -> TaxResult:
    """Base tax plus a surcharge (e.g. NY + NYC) on the same gross income."""
    base_tax = effective_tax(income, base)
    surcharge_tax = effective_tax(income, surcharge)
    return TaxResult(
        base_tax.amount + surcharge_tax.amount,
        base_tax.rate + surcharge_tax.rate,
    )


def compress_to_segments(sample_incomes: Iterable[float], jurisdiction: str) -> List[BracketSegment]:
    """Merge adjacent samples with the same marginal rate into segments."""
    brackets = get_schedule(jurisdiction)
    exemption = get_exemption(jurisdiction)

    segments: List[BracketSegment] = []
    for index, income in enumerate(sample_incomes):
        rate = rate_for_income(taxable_income(income, exemption), brackets)
        if segments and segments[-1].rate == rate:
            current = segments[-1]
            segments[-1] = BracketSegment(
                rate=rate,
                start_index=current.start_index,
                end_index=index,
                span=current.span + 1,
            )
        else:
            segments.append(BracketSegment(rate=rate, start_index=index, end_index=index, span=1))
    return segments

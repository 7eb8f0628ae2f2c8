"""State and city income tax schedules.

Each jurisdiction is an ordered list of marginal brackets like:
    Bracket(rate=1.40, min=0, max=20000)

Rates are percentages (6.37 means 6.37%). Brackets are contiguous on whole
dollars: every bracket starts one dollar above the previous bracket's max, and
the last one ends at OPEN_ENDED. Tables are validated when this module is
imported, so a transcription error fails at startup instead of in a report.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Sequence

logger = logging.getLogger(__name__)

OPEN_ENDED = 999_999_999  # max of the top bracket


class ConfigurationError(ValueError):
    """A schedule or exemption table is malformed."""


class UnknownJurisdiction(KeyError):
    """The jurisdiction identifier is not one of the configured schedules."""

    def __init__(self, jurisdiction):
        super().__init__(jurisdiction)
        self.jurisdiction = jurisdiction

    def __str__(self):
        known = ", ".join(sorted(SCHEDULES))
        return f"unknown jurisdiction {self.jurisdiction!r} (expected one of: {known})"


@dataclass(frozen=True)
class Bracket:
    rate: float  # percent, e.g. 6.37
    min: int
    max: int


def validate_brackets(jurisdiction: str, brackets: Sequence[Bracket]) -> None:
    """Raise ConfigurationError unless ``brackets`` is a well-formed schedule."""
    if not brackets:
        raise ConfigurationError(f"{jurisdiction}: schedule has no brackets")
    if brackets[0].min != 0:
        raise ConfigurationError(
            f"{jurisdiction}: first bracket starts at {brackets[0].min}, expected 0"
        )

    previous = None
    for b in brackets:
        if b.rate < 0:
            raise ConfigurationError(f"{jurisdiction}: negative rate in {b}")
        if b.min > b.max:
            raise ConfigurationError(f"{jurisdiction}: min above max in {b}")
        if previous is not None and b.min != previous.max + 1:
            raise ConfigurationError(
                f"{jurisdiction}: {b} does not start right after {previous}"
            )
        previous = b


def load_schedules(
    tables: Mapping[str, Sequence[Bracket]],
    exemptions: Mapping[str, float],
) -> Mapping[str, tuple[Bracket, ...]]:
    """Validate the literal tables and freeze them into a read-only mapping."""
    for jurisdiction, amount in exemptions.items():
        if jurisdiction not in tables:
            raise ConfigurationError(f"exemption given for unknown jurisdiction {jurisdiction!r}")
        if amount < 0:
            raise ConfigurationError(f"{jurisdiction}: negative exemption {amount}")

    loaded = {}
    for jurisdiction, brackets in tables.items():
        validate_brackets(jurisdiction, brackets)
        loaded[jurisdiction] = tuple(brackets)
        logger.debug("Loaded %s schedule with %d brackets", jurisdiction, len(brackets))
    return MappingProxyType(loaded)


# Schedules used by the comparison (top NJ bracket is 10.75%, not 10.25%)
_TABLES: dict[str, list[Bracket]] = {
    "NJ": [
        Bracket(rate=1.40, min=0, max=20000),
        Bracket(rate=1.75, min=20001, max=35000),
        Bracket(rate=3.50, min=35001, max=40000),
        Bracket(rate=5.53, min=40001, max=75000),
        Bracket(rate=6.37, min=75001, max=500000),
        Bracket(rate=8.97, min=500001, max=1000000),
        Bracket(rate=10.75, min=1000001, max=OPEN_ENDED),
    ],
    "NY": [
        Bracket(rate=4.00, min=0, max=8500),
        Bracket(rate=4.50, min=8501, max=11700),
        Bracket(rate=5.25, min=11701, max=13900),
        Bracket(rate=5.50, min=13901, max=80650),
        Bracket(rate=6.00, min=80651, max=215400),
        Bracket(rate=6.85, min=215401, max=1077550),
        Bracket(rate=9.65, min=1077551, max=5000000),
        Bracket(rate=10.30, min=5000001, max=25000000),
        Bracket(rate=10.90, min=25000001, max=OPEN_ENDED),
    ],
    "CT": [
        Bracket(rate=2.00, min=0, max=10000),
        Bracket(rate=4.50, min=10001, max=50000),
        Bracket(rate=5.50, min=50001, max=100000),
        Bracket(rate=6.00, min=100001, max=200000),
        Bracket(rate=6.50, min=200001, max=250000),
        Bracket(rate=6.90, min=250001, max=500000),
        Bracket(rate=6.99, min=500001, max=OPEN_ENDED),
    ],
    # City surcharge, stacked on top of NY
    "NYC": [
        Bracket(rate=3.08, min=0, max=12000),
        Bracket(rate=3.76, min=12001, max=25000),
        Bracket(rate=3.82, min=25001, max=50000),
        Bracket(rate=3.88, min=50001, max=OPEN_ENDED),
    ],
}

# Flat-dollar personal exemption subtracted before bracket lookup
_EXEMPTIONS: dict[str, float] = {"NY": 8000.0}

SCHEDULES = load_schedules(_TABLES, _EXEMPTIONS)
EXEMPTIONS = MappingProxyType({j: float(_EXEMPTIONS.get(j, 0.0)) for j in SCHEDULES})

JURISDICTIONS: tuple[str, ...] = ("CT", "NJ", "NY", "NYC")


def get_schedule(jurisdiction: str) -> tuple[Bracket, ...]:
    try:
        return SCHEDULES[jurisdiction]
    except KeyError:
        raise UnknownJurisdiction(jurisdiction) from None


def get_exemption(jurisdiction: str) -> float:
    try:
        return EXEMPTIONS[jurisdiction]
    except KeyError:
        raise UnknownJurisdiction(jurisdiction) from None


def max_marginal_rate(jurisdiction: str) -> float:
    return max(b.rate for b in get_schedule(jurisdiction))

"""
Social Security Administration rules and reference data.

This module holds the statutory constants used by the benefit calculator:
Full Retirement Age by birth year, early reduction and delayed credit rates,
claiming age limits and the maximum benefit at FRA by year.

Sources:
- https://www.ssa.gov/benefits/retirement/planner/agereduction.html
- https://www.ssa.gov/benefits/retirement/planner/delayret.html
"""

from datetime import datetime
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

# Birth year -> (years, months)
FRA_TABLE: Mapping[int, Tuple[int, int]] = MappingProxyType(
    {
        # Born 1943-1954: FRA is 66
        **{year: (66, 0) for year in range(1943, 1955)},
        # Gradual increase from 66 to 67
        1955: (66, 2),
        1956: (66, 4),
        1957: (66, 6),
        1958: (66, 8),
        1959: (66, 10),
        # Born 1960 or later: FRA is 67
        1960: (67, 0),
    }
)

FRA_TABLE_FIRST_YEAR = 1943
FRA_TABLE_LAST_YEAR = 1960
DEFAULT_FRA: Tuple[int, int] = (67, 0)
PRE_TABLE_FRA: Tuple[int, int] = (66, 0)

# First 36 months before FRA: 5/9 of 1% per month, beyond that 5/12 of 1%
EARLY_REDUCTION_RATE_36 = (5 / 9) / 100
EARLY_REDUCTION_RATE_BEYOND = (5 / 12) / 100
EARLY_REDUCTION_TIER_MONTHS = 36

# 2/3 of 1% per month (8% per year) from FRA to age 70
DELAYED_CREDIT_RATE = (2 / 3) / 100

SPOUSAL_BENEFIT_RATE = 0.5

MIN_CLAIMING_AGE = 62
MAX_CLAIMING_AGE = 70

# Monthly benefit at FRA, published annually by the SSA
MAX_BENEFIT_BY_YEAR: Mapping[int, int] = MappingProxyType(
    {
        2024: 3822,
        2025: 4018,
    }
)
MAX_BENEFIT_FALLBACK_YEAR = 2025

# Entered benefit amounts may exceed the published maximum by up to 25%
MAX_BENEFIT_OVERAGE_FACTOR = 1.25

HISTORICAL_COLA: Mapping[str, float] = MappingProxyType(
    {
        "2020": 1.6,
        "2021": 1.3,
        "2022": 5.9,
        "2023": 8.7,
        "2024": 3.2,
        "2025": 2.5,
        "average_10_year": 2.8,
        "average_20_year": 2.6,
    }
)

# Rates are percentages (2.5 == 2.5%)
ASSUMPTION_PRESETS: Mapping[str, Mapping[str, float]] = MappingProxyType(
    {
        "conservative": MappingProxyType(
            {"investment_growth_rate": 2.0, "cola_rate": 2.5, "inflation_rate": 2.0}
        ),
        "moderate": MappingProxyType(
            {"investment_growth_rate": 5.0, "cola_rate": 2.5, "inflation_rate": 3.0}
        ),
        "historical": MappingProxyType(
            {"investment_growth_rate": 7.0, "cola_rate": 2.6, "inflation_rate": 3.0}
        ),
    }
)


def get_max_benefit(year: Optional[int] = None) -> int:
    """
    Get the maximum monthly benefit at FRA for a year.

    Args:
        year: Year to look up (defaults to the current year)

    Returns:
        Maximum monthly benefit, falling back to the 2025 value for
        years the table does not cover yet
    """
    target_year = year if year is not None else datetime.now().year
    return MAX_BENEFIT_BY_YEAR.get(
        target_year, MAX_BENEFIT_BY_YEAR[MAX_BENEFIT_FALLBACK_YEAR]
    )


def get_assumption_preset(preset: str) -> Dict[str, float]:
    """Get a copy of the rates for a named assumption preset."""
    if preset not in ASSUMPTION_PRESETS:
        raise ValueError(
            f"Unknown assumption preset '{preset}', "
            f"expected one of {sorted(ASSUMPTION_PRESETS)}"
        )
    return dict(ASSUMPTION_PRESETS[preset])

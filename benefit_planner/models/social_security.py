"""
Social Security benefit calculation engine.

This module implements the SSA rules for Full Retirement Age, early
retirement reductions, delayed retirement credits and spousal benefits.
All functions are pure: the same inputs always produce the same result.
"""

import math
from datetime import date, datetime
from typing import Optional

from .scenario import FRA, BenefitCalculation, SpousalBenefitResult
from .ssa_rules import (
    DEFAULT_FRA,
    DELAYED_CREDIT_RATE,
    EARLY_REDUCTION_RATE_36,
    EARLY_REDUCTION_RATE_BEYOND,
    EARLY_REDUCTION_TIER_MONTHS,
    FRA_TABLE,
    FRA_TABLE_FIRST_YEAR,
    FRA_TABLE_LAST_YEAR,
    MAX_BENEFIT_OVERAGE_FACTOR,
    MAX_CLAIMING_AGE,
    MIN_CLAIMING_AGE,
    PRE_TABLE_FRA,
    SPOUSAL_BENEFIT_RATE,
    get_max_benefit,
)


def calculate_fra(birth_date: date) -> FRA:
    """
    Calculate Full Retirement Age from a birth date.

    Args:
        birth_date: The individual's birth date

    Returns:
        Full Retirement Age in years and months
    """
    birth_year = birth_date.year

    if birth_year >= FRA_TABLE_LAST_YEAR:
        years, months = DEFAULT_FRA
    elif birth_year < FRA_TABLE_FIRST_YEAR:
        years, months = PRE_TABLE_FRA
    else:
        years, months = FRA_TABLE.get(birth_year, DEFAULT_FRA)

    return FRA(years=years, months=months)


def get_fra_as_decimal(fra: FRA) -> float:
    """Get FRA as a decimal age (e.g., 66.5 for 66 years 6 months)."""
    return fra.as_decimal()


def calculate_early_reduction_percentage(claiming_age: float, fra: FRA) -> float:
    """
    Calculate the reduction for claiming before FRA.

    The first 36 months before FRA reduce the benefit by 5/9 of 1% per month,
    each additional month by 5/12 of 1%.

    Args:
        claiming_age: Age when claiming benefits
        fra: Full Retirement Age

    Returns:
        Reduction as a negative fraction (e.g., -0.25 for a 25% reduction)
    """
    months_before_fra = fra.total_months() - claiming_age * 12

    if months_before_fra <= 0:
        return 0.0

    if months_before_fra <= EARLY_REDUCTION_TIER_MONTHS:
        reduction = months_before_fra * EARLY_REDUCTION_RATE_36
    else:
        reduction = (
            EARLY_REDUCTION_TIER_MONTHS * EARLY_REDUCTION_RATE_36
            + (months_before_fra - EARLY_REDUCTION_TIER_MONTHS)
            * EARLY_REDUCTION_RATE_BEYOND
        )

    return -reduction


def calculate_delayed_credit_percentage(claiming_age: float, fra: FRA) -> float:
    """
    Calculate delayed retirement credits for claiming after FRA.

    Credits accrue at 2/3 of 1% per month and stop at age 70.

    Args:
        claiming_age: Age when claiming benefits
        fra: Full Retirement Age

    Returns:
        Credit as a positive fraction (e.g., 0.24 for a 24% increase)
    """
    fra_months = fra.total_months()
    months_after_fra = claiming_age * 12 - fra_months

    if months_after_fra <= 0:
        return 0.0

    max_months = (MAX_CLAIMING_AGE - fra_months / 12) * 12
    effective_months = min(months_after_fra, max_months)

    return effective_months * DELAYED_CREDIT_RATE


def calculate_benefit(
    base_amount: float, birth_date: date, claiming_age: float
) -> BenefitCalculation:
    """
    Calculate the monthly benefit at a claiming age.

    Args:
        base_amount: Monthly benefit at Full Retirement Age (PIA)
        birth_date: Individual's birth date
        claiming_age: Age when claiming benefits (62-70)

    Returns:
        Benefit calculation with the applied adjustment

    Raises:
        ValueError: If claiming_age is outside 62-70
    """
    if not MIN_CLAIMING_AGE <= claiming_age <= MAX_CLAIMING_AGE:
        raise ValueError(
            f"Claiming age must be between {MIN_CLAIMING_AGE} and "
            f"{MAX_CLAIMING_AGE}, got {claiming_age}"
        )

    fra = calculate_fra(birth_date)
    fra_age = fra.as_decimal()

    adjustment = 0.0
    if claiming_age < fra_age:
        adjustment = calculate_early_reduction_percentage(claiming_age, fra)
    elif claiming_age > fra_age:
        adjustment = calculate_delayed_credit_percentage(claiming_age, fra)

    monthly_benefit = base_amount * (1 + adjustment)

    return BenefitCalculation(
        monthly_benefit=monthly_benefit,
        annual_benefit=monthly_benefit * 12,
        adjustment_percentage=adjustment * 100,
        fra=fra,
    )


def calculate_spousal_benefit(
    own_base_amount: float,
    partner_base_amount: float,
    spouse_birth_date: date,
    spouse_claiming_age: float,
) -> SpousalBenefitResult:
    """
    Calculate the benefit a spouse receives.

    The spouse receives the higher of their own retirement benefit and 50% of
    the partner's PIA. The spousal portion is reduced for claiming before the
    spouse's FRA but never earns delayed credits.

    Args:
        own_base_amount: Spouse's own benefit at FRA
        partner_base_amount: Partner's benefit at FRA
        spouse_birth_date: Spouse's birth date
        spouse_claiming_age: Age when the spouse claims

    Returns:
        Selected benefit with both candidates
    """
    own_benefit = calculate_benefit(
        own_base_amount, spouse_birth_date, spouse_claiming_age
    ).monthly_benefit

    spousal_benefit = partner_base_amount * SPOUSAL_BENEFIT_RATE
    spouse_fra = calculate_fra(spouse_birth_date)
    if spouse_claiming_age < spouse_fra.as_decimal():
        reduction = calculate_early_reduction_percentage(
            spouse_claiming_age, spouse_fra
        )
        spousal_benefit = spousal_benefit * (1 + reduction)

    return SpousalBenefitResult(
        monthly_benefit=max(own_benefit, spousal_benefit),
        source="own" if own_benefit >= spousal_benefit else "spousal",
        own_benefit=own_benefit,
        spousal_benefit=spousal_benefit,
    )


def project_max_benefit_at_fra(
    birth_date: date, cola_rate: float = 0.025, current_year: Optional[int] = None
) -> float:
    """
    Project the statutory maximum benefit to the year a person reaches FRA.

    Args:
        birth_date: The individual's birth date
        cola_rate: Expected annual COLA as a fraction (0.025 for 2.5%)
        current_year: Year to project from (defaults to the current year)

    Returns:
        Projected maximum monthly benefit at FRA
    """
    if current_year is None:
        current_year = datetime.now().year

    current_max_benefit = get_max_benefit(current_year)

    fra = calculate_fra(birth_date)
    fra_year = birth_date.year + math.floor(fra.as_decimal())
    years_until_fra = fra_year - current_year

    if years_until_fra <= 0:
        return current_max_benefit

    projected = current_max_benefit * (1 + cola_rate) ** years_until_fra
    return math.floor(projected + 0.5)


def validate_benefit_amount(amount: float, max_benefit: float) -> bool:
    """Check that a benefit does not exceed the maximum by more than 25%."""
    return amount <= max_benefit * MAX_BENEFIT_OVERAGE_FACTOR


def calculate_age(birth_date: date, as_of: Optional[date] = None) -> float:
    """
    Calculate age in years at whole-month resolution.

    Args:
        birth_date: Birth date
        as_of: Date to calculate age as of (defaults to today)

    Returns:
        Age in years with a fractional part for months
    """
    if as_of is None:
        as_of = date.today()
    months = (as_of.year - birth_date.year) * 12 + (as_of.month - birth_date.month)
    return months / 12

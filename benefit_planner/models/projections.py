"""
Financial projections for Social Security benefits.

This module projects benefits year by year with COLA, accumulates running
totals, and models the opportunity cost and investment returns of receiving
benefits earlier.

Two inflation models exist and they are not interchangeable:

- project_benefits fills ``inflation_adjusted`` with a real growth model,
  compounding the starting benefit at (COLA - inflation).
- apply_inflation replaces ``inflation_adjusted`` with a discount model,
  dividing the nominal benefit by (1 + inflation) ** (year - base_year).

Series built with different models must not be compared with each other.
"""

import logging
import math
from datetime import date, datetime
from typing import Dict, List, Optional

import numpy as np

from .scenario import CumulativeBenefit, Scenario, ScenarioProjection, YearlyBenefit
from .social_security import calculate_benefit, calculate_spousal_benefit

logger = logging.getLogger(__name__)


def _growth_factors(rate: float, periods: np.ndarray) -> np.ndarray:
    """Compound growth factors for a percentage rate over the given periods."""
    return np.power(1 + rate / 100, periods)


def project_benefits(
    starting_benefit: float,
    claiming_age: float,
    end_age: int,
    cola_rate: float,
    birth_date: date,
    inflation_rate: Optional[float] = None,
) -> List[YearlyBenefit]:
    """
    Project benefits year by year with COLA adjustments.

    The claiming year receives no COLA. ``inflation_adjusted`` uses the real
    growth model: the benefit in today's dollars grows when COLA exceeds
    inflation and shrinks when it falls short.

    Args:
        starting_benefit: Monthly benefit at claiming age
        claiming_age: Age when benefits start
        end_age: Last age to project (inclusive)
        cola_rate: Annual COLA in percent (2.5 for 2.5%)
        birth_date: Birth date used to derive calendar years
        inflation_rate: Annual inflation in percent (defaults to cola_rate)

    Returns:
        One row per age from ceil(claiming_age) to end_age
    """
    if inflation_rate is None:
        inflation_rate = cola_rate

    first_age = math.ceil(claiming_age)
    if end_age < first_age:
        return []

    ages = np.arange(first_age, end_age + 1)
    years_from_claiming = ages - first_age

    nominal = starting_benefit * _growth_factors(cola_rate, years_from_claiming)
    real = starting_benefit * _growth_factors(
        cola_rate - inflation_rate, years_from_claiming
    )

    return [
        YearlyBenefit(
            age=int(age),
            year=birth_date.year + int(age),
            monthly_benefit=float(nominal_benefit),
            annual_benefit=float(nominal_benefit) * 12,
            cola_adjusted=float(nominal_benefit),
            inflation_adjusted=float(real_benefit),
        )
        for age, nominal_benefit, real_benefit in zip(ages, nominal, real)
    ]


def apply_inflation(
    benefits: List[YearlyBenefit],
    inflation_rate: float,
    base_year: Optional[int] = None,
) -> List[YearlyBenefit]:
    """
    Discount nominal benefits to base-year dollars.

    This replaces the real growth values set by project_benefits.

    Args:
        benefits: Yearly benefits
        inflation_rate: Annual inflation in percent (3.0 for 3%)
        base_year: Year whose dollars to express values in (defaults to now)

    Returns:
        New rows with ``inflation_adjusted`` discounted
    """
    if base_year is None:
        base_year = datetime.now().year

    return [
        benefit.model_copy(
            update={
                "inflation_adjusted": benefit.cola_adjusted
                / (1 + inflation_rate / 100) ** (benefit.year - base_year)
            }
        )
        for benefit in benefits
    ]


def calculate_cumulative_benefits(
    benefits: List[YearlyBenefit], use_todays_dollars: bool = True
) -> List[CumulativeBenefit]:
    """
    Calculate running benefit totals.

    Both the nominal and the today's-dollars totals are always produced;
    ``use_todays_dollars`` only records the caller's display preference.

    Args:
        benefits: Yearly benefits ordered by age
        use_todays_dollars: Whether the caller displays today's dollars

    Returns:
        One cumulative row per yearly row, in the same order
    """
    if not benefits:
        return []

    cumulative = np.cumsum([benefit.annual_benefit for benefit in benefits])
    cumulative_adjusted = np.cumsum(
        [benefit.inflation_adjusted * 12 for benefit in benefits]
    )

    return [
        CumulativeBenefit(
            age=benefit.age,
            year=benefit.year,
            cumulative=float(total),
            cumulative_adjusted=float(adjusted_total),
        )
        for benefit, total, adjusted_total in zip(
            benefits, cumulative, cumulative_adjusted
        )
    ]


def calculate_opportunity_cost(
    early_claiming_age: float,
    early_benefit: float,
    delayed_claiming_age: float,
    current_age: float,
    growth_rate: float,
) -> float:
    """
    Calculate the invested value of benefits received by claiming early.

    Each year of early benefits received before the delayed claiming age is
    compounded forward at growth_rate to current_age.

    Args:
        early_claiming_age: Age for the early claiming scenario
        early_benefit: Annual benefit for early claiming
        delayed_claiming_age: Age for the delayed claiming scenario
        current_age: Age to value the investments at
        growth_rate: Investment growth rate in percent (5.0 for 5%)

    Returns:
        Accumulated value, 0 before the delayed claiming age
    """
    if current_age < delayed_claiming_age:
        return 0.0

    years_of_early_benefits = delayed_claiming_age - early_claiming_age
    # One payment per started year: 2.5 years of early benefits -> 3 payments
    offsets = np.arange(0, years_of_early_benefits)
    years_of_growth = current_age - (early_claiming_age + offsets)

    return float(np.sum(early_benefit * _growth_factors(growth_rate, years_of_growth)))


def project_scenario(scenario: Scenario) -> ScenarioProjection:
    """
    Project yearly and cumulative benefits for a complete scenario.

    The benefit amount is already in today's dollars, so no COLA is applied
    between FRA and the claiming year. When the scenario has complete spouse
    data the spouse's projection is joined onto the primary's by age.

    Args:
        scenario: Scenario configuration

    Returns:
        Yearly and cumulative series
    """
    individual_benefit = calculate_benefit(
        scenario.benefit_amount, scenario.birth_date, scenario.claiming_age
    )

    yearly_benefits = project_benefits(
        individual_benefit.monthly_benefit,
        scenario.claiming_age,
        scenario.lifetime_age,
        scenario.cola_rate,
        scenario.birth_date,
        scenario.inflation_rate,
    )

    if scenario.has_spouse_data:
        spousal_benefit = calculate_spousal_benefit(
            scenario.spouse_benefit_amount,
            scenario.benefit_amount,
            scenario.spouse_birth_date,
            scenario.spouse_claiming_age,
        )
        spouse_benefits: Dict[int, YearlyBenefit] = {
            benefit.age: benefit
            for benefit in project_benefits(
                spousal_benefit.monthly_benefit,
                scenario.spouse_claiming_age,
                scenario.lifetime_age,
                scenario.cola_rate,
                scenario.spouse_birth_date,
                scenario.inflation_rate,
            )
        }
        yearly_benefits = [
            _merge_spouse_benefit(benefit, spouse_benefits.get(benefit.age))
            for benefit in yearly_benefits
        ]
        logger.debug(
            f"Scenario {scenario.id}: merged {len(spouse_benefits)} spouse rows "
            f"({spousal_benefit.source} benefit)"
        )

    cumulative_benefits = calculate_cumulative_benefits(yearly_benefits, True)

    if scenario.include_spouse:
        household_totals = np.cumsum(
            [
                benefit.household_annual_benefit
                if benefit.household_annual_benefit is not None
                else benefit.annual_benefit
                for benefit in yearly_benefits
            ]
        )
        cumulative_benefits = [
            cumulative.model_copy(update={"household_cumulative": float(total)})
            for cumulative, total in zip(cumulative_benefits, household_totals)
        ]

    return ScenarioProjection(
        yearly_benefits=yearly_benefits, cumulative_benefits=cumulative_benefits
    )


def _merge_spouse_benefit(
    benefit: YearlyBenefit, spouse_benefit: Optional[YearlyBenefit]
) -> YearlyBenefit:
    """Attach the spouse's benefit for the same age to a primary row."""
    if spouse_benefit is None:
        return benefit.model_copy(
            update={"household_annual_benefit": benefit.annual_benefit}
        )

    return benefit.model_copy(
        update={
            "spouse_monthly_benefit": spouse_benefit.monthly_benefit,
            "spouse_annual_benefit": spouse_benefit.annual_benefit,
            "household_annual_benefit": benefit.annual_benefit
            + spouse_benefit.annual_benefit,
        }
    )


def get_total_lifetime_benefit(
    cumulative_benefits: List[CumulativeBenefit], end_age: int
) -> float:
    """
    Get the today's-dollars total at an exact age.

    Args:
        cumulative_benefits: Cumulative series
        end_age: Age to read the total at

    Returns:
        cumulative_adjusted at end_age, 0 if the series has no such age
    """
    for benefit in cumulative_benefits:
        if benefit.age == end_age:
            return benefit.cumulative_adjusted
    return 0.0


def compare_with_opportunity_cost(
    early_scenario: Scenario, delayed_scenario: Scenario, growth_rate: float
) -> List[CumulativeBenefit]:
    """
    Adjust a delayed scenario's totals for the opportunity cost of waiting.

    Args:
        early_scenario: Scenario with the earlier claiming age
        delayed_scenario: Scenario with the later claiming age
        growth_rate: Investment growth rate in percent

    Returns:
        Delayed scenario's cumulative series with opportunity_cost and net_value
    """
    early_projection = project_scenario(early_scenario)
    delayed_projection = project_scenario(delayed_scenario)

    early_annual_benefit = (
        early_projection.yearly_benefits[0].annual_benefit
        if early_projection.yearly_benefits
        else 0.0
    )

    results = []
    for cumulative in delayed_projection.cumulative_benefits:
        opportunity_cost = calculate_opportunity_cost(
            early_scenario.claiming_age,
            early_annual_benefit,
            delayed_scenario.claiming_age,
            cumulative.age,
            growth_rate,
        )
        results.append(
            cumulative.model_copy(
                update={
                    "opportunity_cost": opportunity_cost,
                    "net_value": cumulative.cumulative_adjusted - opportunity_cost,
                }
            )
        )

    return results


def add_investment_returns(
    cumulative_benefits: List[CumulativeBenefit],
    yearly_benefits: List[YearlyBenefit],
    growth_rate: float,
    investment_ratio: float = 100,
) -> List[CumulativeBenefit]:
    """
    Add the value of investing part of each year's benefit.

    Each age contributes ``annual_benefit * investment_ratio / 100`` and every
    contribution compounds forward at growth_rate to each later age.

    Args:
        cumulative_benefits: Cumulative series
        yearly_benefits: Yearly series supplying the annual benefit per age
        growth_rate: Investment growth rate in percent
        investment_ratio: Percentage of each benefit invested (0-100)

    Returns:
        New cumulative rows with the investment fields filled in

    Raises:
        ValueError: If investment_ratio is outside 0-100
    """
    if not 0 <= investment_ratio <= 100:
        raise ValueError(
            f"Investment ratio must be between 0 and 100, got {investment_ratio}"
        )

    annual_by_age = {benefit.age: benefit.annual_benefit for benefit in yearly_benefits}
    growth = 1 + growth_rate / 100

    results = []
    principal = 0.0
    invested_value = 0.0
    previous_age: Optional[int] = None
    for cumulative in cumulative_benefits:
        if previous_age is not None:
            invested_value *= growth ** (cumulative.age - previous_age)
        contribution = annual_by_age.get(cumulative.age, 0.0) * investment_ratio / 100
        principal += contribution
        invested_value += contribution
        previous_age = cumulative.age

        results.append(
            cumulative.model_copy(
                update={
                    "investment_principal": principal,
                    "invested_value": invested_value,
                    "cumulative_with_investment": cumulative.cumulative
                    + invested_value,
                }
            )
        )

    return results

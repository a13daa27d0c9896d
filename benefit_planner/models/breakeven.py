"""
Breakeven analysis between claiming scenarios.

The breakeven age is where the cumulative totals of two scenarios cross.
Crossovers are detected as a strict sign change of the difference between
consecutive ages and located by linear interpolation.
"""

import math
from typing import Callable, Dict, List, Optional, Sequence

from .projections import add_investment_returns
from .scenario import (
    BestScenarios,
    BreakevenAnalysis,
    CumulativeBenefit,
    ScenarioSeries,
    YearlyBenefit,
)

ValueGetter = Callable[[CumulativeBenefit], float]


def _comparison_value(benefit: CumulativeBenefit) -> float:
    """Net value when opportunity cost was applied, otherwise today's dollars."""
    if benefit.net_value is not None:
        return benefit.net_value
    return benefit.cumulative_adjusted


def _find_crossover(
    series_a: Sequence[CumulativeBenefit],
    series_b: Sequence[CumulativeBenefit],
    value_of: ValueGetter,
) -> Optional[float]:
    """
    Scan the overlapping ages for the first crossover.

    A difference of exactly zero does not count as a crossover and becomes
    the previous difference, so a crossing that touches zero at a sampled
    age is not reported.
    """
    if not series_a or not series_b:
        return None

    min_age = max(series_a[0].age, series_b[0].age)
    max_age = min(series_a[-1].age, series_b[-1].age)
    if min_age > max_age:
        return None

    by_age_a = {benefit.age: benefit for benefit in series_a}
    by_age_b = {benefit.age: benefit for benefit in series_b}

    previous_age: Optional[int] = None
    previous_diff = 0.0
    for age in range(min_age, max_age + 1):
        benefit_a = by_age_a.get(age)
        benefit_b = by_age_b.get(age)
        if benefit_a is None or benefit_b is None:
            continue

        diff = value_of(benefit_a) - value_of(benefit_b)

        if previous_age is not None and previous_diff * diff < 0:
            fractional_offset = abs(previous_diff / (diff - previous_diff))
            return previous_age + fractional_offset

        previous_age = age
        previous_diff = diff

    return None


def find_breakeven_age(
    series_a: List[CumulativeBenefit], series_b: List[CumulativeBenefit]
) -> Optional[float]:
    """
    Find the age where two scenarios' cumulative totals cross.

    Args:
        series_a: Cumulative benefits for the first scenario
        series_b: Cumulative benefits for the second scenario

    Returns:
        Interpolated breakeven age, or None if they never cross
    """
    return _find_crossover(series_a, series_b, _comparison_value)


def get_display_value(
    benefit: CumulativeBenefit,
    with_inflation: bool,
    with_investment: bool,
    yearly_benefit: Optional[YearlyBenefit] = None,
) -> float:
    """
    Get the value a chart shows for a cumulative row.

    Investment totals take priority over inflation-adjusted totals, which
    take priority over nominal totals.

    Args:
        benefit: Cumulative row
        with_inflation: Whether today's-dollars values are shown
        with_investment: Whether investment returns are shown
        yearly_benefit: Yearly row for the same age (unused by the value)

    Returns:
        The value to compare
    """
    if with_investment and benefit.cumulative_with_investment is not None:
        return benefit.cumulative_with_investment
    if with_inflation:
        return _comparison_value(benefit)
    return benefit.cumulative


def find_breakeven_age_with_toggles(
    series_a: List[CumulativeBenefit],
    series_b: List[CumulativeBenefit],
    with_inflation: bool,
    with_investment: bool,
    yearly_a: Optional[List[YearlyBenefit]] = None,
    yearly_b: Optional[List[YearlyBenefit]] = None,
    growth_rate_a: Optional[float] = None,
    growth_rate_b: Optional[float] = None,
    investment_ratio: float = 100,
) -> Optional[float]:
    """
    Find the breakeven age using the values displayed for the given toggles.

    Investment returns are added to a series only when investment is enabled
    and both its yearly series and growth rate are supplied.

    Args:
        series_a: Cumulative benefits for the first scenario
        series_b: Cumulative benefits for the second scenario
        with_inflation: Whether today's-dollars values are compared
        with_investment: Whether investment returns are compared
        yearly_a: Yearly benefits for the first scenario
        yearly_b: Yearly benefits for the second scenario
        growth_rate_a: Investment growth rate for the first scenario
        growth_rate_b: Investment growth rate for the second scenario
        investment_ratio: Percentage of benefits invested (0-100)

    Returns:
        Interpolated breakeven age, or None if they never cross
    """
    if with_investment:
        if yearly_a is not None and growth_rate_a is not None:
            series_a = add_investment_returns(
                series_a, yearly_a, growth_rate_a, investment_ratio
            )
        if yearly_b is not None and growth_rate_b is not None:
            series_b = add_investment_returns(
                series_b, yearly_b, growth_rate_b, investment_ratio
            )

    return _find_crossover(
        series_a,
        series_b,
        lambda benefit: get_display_value(benefit, with_inflation, with_investment),
    )


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def calculate_all_breakevens(
    scenarios: Dict[str, List[CumulativeBenefit]], scenario_names: Dict[str, str]
) -> List[BreakevenAnalysis]:
    """
    Calculate the breakeven for every pair of scenarios.

    Args:
        scenarios: Scenario id -> cumulative benefits
        scenario_names: Scenario id -> display name

    Returns:
        One analysis per unordered pair, in insertion order
    """
    results = []
    scenario_ids = list(scenarios)

    for i, id_1 in enumerate(scenario_ids):
        for id_2 in scenario_ids[i + 1 :]:
            data_1 = scenarios[id_1]
            data_2 = scenarios[id_2]
            name_1 = scenario_names.get(id_1, "Scenario 1")
            name_2 = scenario_names.get(id_2, "Scenario 2")

            breakeven_age = find_breakeven_age(data_1, data_2)

            if breakeven_age is None:
                final_1 = _comparison_value(data_1[-1]) if data_1 else 0.0
                final_2 = _comparison_value(data_2[-1]) if data_2 else 0.0
                if final_1 > final_2:
                    description = f"{name_1} is always better than {name_2}"
                else:
                    description = f"{name_2} is always better than {name_1}"
            else:
                description = (
                    f"{name_1} breaks even with {name_2} "
                    f"at age {_round_half_up(breakeven_age)}"
                )

            results.append(
                BreakevenAnalysis(
                    scenario_id_1=id_1,
                    scenario_id_2=id_2,
                    breakeven_age=breakeven_age,
                    description=description,
                )
            )

    return results


def _value_at_age(cumulative_benefits: List[CumulativeBenefit], age: int) -> float:
    for benefit in cumulative_benefits:
        if benefit.age == age:
            return _comparison_value(benefit)
    return 0.0


def _best_at_age(scenarios: List[ScenarioSeries], age: int) -> str:
    best = scenarios[0]
    best_value = _value_at_age(best.cumulative_benefits, age)
    for scenario in scenarios[1:]:
        value = _value_at_age(scenario.cumulative_benefits, age)
        if value > best_value:
            best, best_value = scenario, value
    return best.id


def find_best_scenarios(
    scenarios: List[ScenarioSeries],
    short_term_age: int = 75,
    medium_term_age: int = 85,
    long_term_age: int = 95,
) -> BestScenarios:
    """
    Pick the best scenario for short, medium and long life expectancies.

    Ties keep the scenario that comes first.

    Args:
        scenarios: Scenarios with their cumulative benefits
        short_term_age: Age for the short-term comparison
        medium_term_age: Age for the medium-term comparison
        long_term_age: Age for the long-term comparison

    Returns:
        Best scenario id per horizon

    Raises:
        ValueError: If no scenarios are given
    """
    if not scenarios:
        raise ValueError("At least one scenario is required")

    return BestScenarios(
        short_term=_best_at_age(scenarios, short_term_age),
        medium_term=_best_at_age(scenarios, medium_term_age),
        long_term=_best_at_age(scenarios, long_term_age),
    )


def simple_breakeven(scenario_a, scenario_b) -> Optional[float]:
    """Breakeven between two objects exposing ``cumulative_benefits``."""
    return find_breakeven_age(
        scenario_a.cumulative_benefits, scenario_b.cumulative_benefits
    )

"""Benefit calculation, projection and breakeven models."""

from .scenario import (
    FRA,
    BenefitCalculation,
    BestScenarios,
    BreakevenAnalysis,
    CumulativeBenefit,
    Scenario,
    ScenarioComparison,
    ScenarioProjection,
    ScenarioResults,
    ScenarioSeries,
    SpousalBenefitResult,
    YearlyBenefit,
)
from .social_security import (
    calculate_age,
    calculate_benefit,
    calculate_delayed_credit_percentage,
    calculate_early_reduction_percentage,
    calculate_fra,
    calculate_spousal_benefit,
    get_fra_as_decimal,
    project_max_benefit_at_fra,
    validate_benefit_amount,
)
from .projections import (
    add_investment_returns,
    apply_inflation,
    calculate_cumulative_benefits,
    calculate_opportunity_cost,
    compare_with_opportunity_cost,
    get_total_lifetime_benefit,
    project_benefits,
    project_scenario,
)
from .breakeven import (
    calculate_all_breakevens,
    find_best_scenarios,
    find_breakeven_age,
    find_breakeven_age_with_toggles,
    get_display_value,
    simple_breakeven,
)
from .defaults import (
    PRESET_LABELS,
    SCENARIO_TEMPLATES,
    apply_assumption_preset,
    can_claim_now,
    create_default_scenario,
    get_earliest_claiming_date,
    get_suggested_scenario_name,
)

__all__ = [
    "FRA",
    "BenefitCalculation",
    "BestScenarios",
    "BreakevenAnalysis",
    "CumulativeBenefit",
    "Scenario",
    "ScenarioComparison",
    "ScenarioProjection",
    "ScenarioResults",
    "ScenarioSeries",
    "SpousalBenefitResult",
    "YearlyBenefit",
    "calculate_age",
    "calculate_benefit",
    "calculate_delayed_credit_percentage",
    "calculate_early_reduction_percentage",
    "calculate_fra",
    "calculate_spousal_benefit",
    "get_fra_as_decimal",
    "project_max_benefit_at_fra",
    "validate_benefit_amount",
    "add_investment_returns",
    "apply_inflation",
    "calculate_cumulative_benefits",
    "calculate_opportunity_cost",
    "compare_with_opportunity_cost",
    "get_total_lifetime_benefit",
    "project_benefits",
    "project_scenario",
    "calculate_all_breakevens",
    "find_best_scenarios",
    "find_breakeven_age",
    "find_breakeven_age_with_toggles",
    "get_display_value",
    "simple_breakeven",
    "PRESET_LABELS",
    "SCENARIO_TEMPLATES",
    "apply_assumption_preset",
    "can_claim_now",
    "create_default_scenario",
    "get_earliest_claiming_date",
    "get_suggested_scenario_name",
]

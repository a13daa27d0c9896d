"""Default scenarios, assumption presets and claiming-date helpers."""

from datetime import date
from typing import Any, Dict, Optional

from benefit_planner.config import get_global_settings

from .scenario import AssumptionPreset, Scenario
from .ssa_rules import (
    ASSUMPTION_PRESETS,
    MIN_CLAIMING_AGE,
    get_assumption_preset,
    get_max_benefit,
)

SCENARIO_TEMPLATES = {
    "early_retirement": {
        "name": "Early Retirement (62)",
        "claiming_age": 62,
        "description": "Start benefits as soon as possible",
    },
    "full_retirement_age": {
        "name": "Full Retirement Age (67)",
        "claiming_age": 67,
        "description": "Wait until full retirement age for unreduced benefits",
    },
    "delayed_retirement": {
        "name": "Delayed Retirement (70)",
        "claiming_age": 70,
        "description": "Maximize benefits by delaying until 70",
    },
}

PRESET_LABELS = {
    "conservative": "Conservative",
    "moderate": "Moderate",
    "historical": "Historical",
    "custom": "Custom",
}


def _years_after(start: date, years: int) -> date:
    """Same month and day ``years`` later, Feb 29 falling back to Feb 28."""
    try:
        return start.replace(year=start.year + years)
    except ValueError:
        return start.replace(year=start.year + years, day=28)


def _preset_matching(rates: Dict[str, float]) -> str:
    """Name of the preset with exactly these rates, or 'custom'."""
    for name, preset_rates in ASSUMPTION_PRESETS.items():
        if dict(preset_rates) == rates:
            return name
    return "custom"


def create_default_scenario(**overrides: Any) -> Scenario:
    """
    Create a scenario with sensible starting values.

    The default claimant is 62 today, has 70% of the current maximum benefit
    and claims at 67. Rates and lifetime age come from the configured
    defaults; the preset label is the preset those rates match, otherwise
    'custom'.

    Args:
        **overrides: Scenario fields to override

    Returns:
        New scenario
    """
    settings = get_global_settings()
    rates = {
        "investment_growth_rate": settings.default_investment_growth_rate,
        "cola_rate": settings.default_cola_rate,
        "inflation_rate": settings.default_inflation_rate,
    }
    values = {
        "name": "Untitled Scenario",
        "birth_date": _years_after(date.today(), -62),
        "benefit_amount": round(get_max_benefit() * 0.7),
        "claiming_age": 67,
        "include_spouse": False,
        "assumption_preset": _preset_matching(rates),
        **rates,
        "display_mode": "today-dollars",
        "include_opportunity_cost": False,
        "lifetime_age": settings.default_lifetime_age,
    }
    values.update(overrides)
    return Scenario(**values)


def apply_assumption_preset(scenario: Scenario, preset: str) -> Scenario:
    """
    Return a copy of the scenario using a named preset's rates.

    The 'custom' preset keeps the scenario's current rates and only changes
    the label.
    """
    rates = {} if preset == "custom" else get_assumption_preset(preset)
    return Scenario(
        **{**scenario.model_dump(), **rates, "assumption_preset": preset}
    )


def get_suggested_scenario_name(
    claiming_age: float, assumption_preset: AssumptionPreset
) -> str:
    """Suggest a name like 'Retire @ 67, Moderate'."""
    age = int(claiming_age) if float(claiming_age).is_integer() else claiming_age
    return f"Retire @ {age}, {PRESET_LABELS[assumption_preset]}"


def get_earliest_claiming_date(birth_date: date) -> date:
    """Get the 62nd birthday."""
    return _years_after(birth_date, MIN_CLAIMING_AGE)


def can_claim_now(birth_date: date, today: Optional[date] = None) -> bool:
    """Check whether benefits can be claimed today."""
    if today is None:
        today = date.today()
    return today >= get_earliest_claiming_date(birth_date)

"""
Pydantic models for Social Security claiming scenarios.

This module defines the scenario input configuration and the immutable value
objects produced by the benefit calculator, the financial projector and the
breakeven analyzer.
"""

from datetime import date, datetime
from typing import Dict, List, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .ssa_rules import (
    MAX_BENEFIT_OVERAGE_FACTOR,
    MAX_CLAIMING_AGE,
    MIN_CLAIMING_AGE,
    get_max_benefit,
)

AssumptionPreset = Literal["conservative", "moderate", "historical", "custom"]
DisplayMode = Literal["today-dollars", "future-dollars"]
LifetimeAge = Literal[85, 90, 95, 100]
BenefitSource = Literal["own", "spousal"]


class FRA(BaseModel):
    """Full Retirement Age in years and months."""

    model_config = ConfigDict(frozen=True)

    years: int = Field(..., ge=0, description="Whole years of the FRA")
    months: int = Field(..., ge=0, le=11, description="Additional months of the FRA")

    def total_months(self) -> int:
        """Get the FRA expressed in months."""
        return self.years * 12 + self.months

    def as_decimal(self) -> float:
        """Get the FRA as a decimal age (66 years 6 months -> 66.5)."""
        return self.years + self.months / 12


class BenefitCalculation(BaseModel):
    """Monthly benefit for one claimant at one claiming age."""

    model_config = ConfigDict(frozen=True)

    monthly_benefit: float = Field(..., description="Adjusted monthly benefit")
    annual_benefit: float = Field(..., description="Monthly benefit times 12")
    adjustment_percentage: float = Field(
        ..., description="Adjustment in percent (-30.0 for a 30% reduction)"
    )
    fra: FRA = Field(..., description="Full Retirement Age of the claimant")


class SpousalBenefitResult(BaseModel):
    """The higher of a spouse's own benefit and the spousal benefit."""

    model_config = ConfigDict(frozen=True)

    monthly_benefit: float = Field(..., description="Benefit actually received")
    source: BenefitSource = Field(..., description="Which benefit was selected")
    own_benefit: float = Field(..., description="Spouse's own adjusted benefit")
    spousal_benefit: float = Field(
        ..., description="Spousal benefit based on the partner's PIA"
    )


class YearlyBenefit(BaseModel):
    """
    Projected benefit for a single age.

    Spouse fields are None for individual projections. For household
    projections household_annual_benefit is always set and the spouse
    fields are set for the ages the spouse is collecting.
    """

    model_config = ConfigDict(frozen=True)

    age: int = Field(..., description="Age of the primary claimant")
    year: int = Field(..., description="Calendar year")
    monthly_benefit: float = Field(..., description="Nominal monthly benefit")
    annual_benefit: float = Field(..., description="Nominal annual benefit")
    cola_adjusted: float = Field(..., description="Nominal monthly benefit after COLA")
    inflation_adjusted: float = Field(
        ..., description="Monthly benefit in today's dollars"
    )
    spouse_monthly_benefit: Optional[float] = Field(
        default=None, description="Spouse's nominal monthly benefit"
    )
    spouse_annual_benefit: Optional[float] = Field(
        default=None, description="Spouse's nominal annual benefit"
    )
    household_annual_benefit: Optional[float] = Field(
        default=None, description="Own plus spouse annual benefit"
    )

    @property
    def is_household(self) -> bool:
        """Whether this row belongs to a household projection."""
        return self.household_annual_benefit is not None


class CumulativeBenefit(BaseModel):
    """Running benefit totals up to and including an age."""

    model_config = ConfigDict(frozen=True)

    age: int = Field(..., description="Age of the primary claimant")
    year: int = Field(..., description="Calendar year")
    cumulative: float = Field(..., description="Running nominal total")
    cumulative_adjusted: float = Field(
        ..., description="Running total in today's dollars"
    )
    opportunity_cost: Optional[float] = Field(
        default=None, description="Invested value of forgone early benefits"
    )
    net_value: Optional[float] = Field(
        default=None, description="cumulative_adjusted minus opportunity_cost"
    )
    spouse_cumulative: Optional[float] = Field(
        default=None, description="Running spouse total"
    )
    household_cumulative: Optional[float] = Field(
        default=None, description="Running household total"
    )
    investment_principal: Optional[float] = Field(
        default=None, description="Total principal invested"
    )
    invested_value: Optional[float] = Field(
        default=None, description="Principal plus accumulated returns"
    )
    cumulative_with_investment: Optional[float] = Field(
        default=None, description="cumulative plus invested_value"
    )


class Scenario(BaseModel):
    """
    A claiming scenario for an individual and optional spouse.

    Rates are expressed in percent (2.5 means 2.5%). Benefit amounts are
    monthly amounts at FRA (the PIA) in today's dollars.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(default_factory=lambda: str(uuid4()), description="Scenario id")
    name: str = Field(
        default="Untitled Scenario",
        min_length=1,
        max_length=100,
        description="Scenario name",
    )
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    # Individual
    birth_date: date = Field(..., description="Birth date of the primary claimant")
    benefit_amount: float = Field(..., gt=0, description="Monthly benefit at FRA")
    claiming_age: float = Field(
        ...,
        ge=MIN_CLAIMING_AGE,
        le=MAX_CLAIMING_AGE,
        description="Age when benefits are claimed",
    )

    # Spouse
    include_spouse: bool = Field(default=False, description="Include a spouse")
    spouse_birth_date: Optional[date] = Field(default=None)
    spouse_benefit_amount: Optional[float] = Field(default=None, gt=0)
    spouse_claiming_age: Optional[float] = Field(
        default=None, ge=MIN_CLAIMING_AGE, le=MAX_CLAIMING_AGE
    )

    # Financial assumptions
    assumption_preset: AssumptionPreset = Field(default="moderate")
    investment_growth_rate: float = Field(default=5.0, ge=-5, le=20)
    cola_rate: float = Field(default=2.5, ge=-5, le=20)
    inflation_rate: float = Field(default=3.0, ge=-5, le=20)

    # Display preferences
    display_mode: DisplayMode = Field(default="today-dollars")
    include_opportunity_cost: bool = Field(default=False)
    lifetime_age: LifetimeAge = Field(
        default=90, description="Age the projection runs to"
    )

    @field_validator("benefit_amount", "spouse_benefit_amount")
    @classmethod
    def validate_benefit_amount(cls, v: Optional[float]) -> Optional[float]:
        """Reject benefit amounts far above the statutory maximum."""
        if v is None:
            return v
        max_benefit = get_max_benefit()
        if v > max_benefit * MAX_BENEFIT_OVERAGE_FACTOR:
            raise ValueError(
                f"Benefit amount seems unrealistic. Maximum is ${max_benefit}/month"
            )
        return v

    @field_validator("birth_date", "spouse_birth_date")
    @classmethod
    def validate_birth_date(cls, v: Optional[date]) -> Optional[date]:
        """Birth dates must give an age between 18 and 150."""
        if v is None:
            return v
        age = (date.today() - v).days / 365.25
        if not 18 <= age < 150:
            raise ValueError("Birth date must result in age between 18 and 150")
        return v

    @model_validator(mode="after")
    def validate_timestamps(self):
        if self.updated_at < self.created_at:
            raise ValueError("updated_at must be >= created_at")
        return self

    @property
    def has_spouse_data(self) -> bool:
        """Whether the spouse is included and fully described."""
        return (
            self.include_spouse
            and self.spouse_birth_date is not None
            and self.spouse_benefit_amount is not None
            and self.spouse_claiming_age is not None
        )


class ScenarioProjection(BaseModel):
    """Yearly and cumulative series for one scenario."""

    model_config = ConfigDict(frozen=True)

    yearly_benefits: List[YearlyBenefit] = Field(default_factory=list)
    cumulative_benefits: List[CumulativeBenefit] = Field(default_factory=list)


class BreakevenAnalysis(BaseModel):
    """Breakeven between two scenarios."""

    model_config = ConfigDict(frozen=True)

    scenario_id_1: str
    scenario_id_2: str
    breakeven_age: Optional[float] = Field(
        default=None, description="Age where the totals cross, None if never"
    )
    description: str = Field(..., description="Human-readable summary")


class ScenarioSeries(BaseModel):
    """A scenario's cumulative series identified by id and name."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    cumulative_benefits: List[CumulativeBenefit]


class BestScenarios(BaseModel):
    """Best scenario id for each life-expectancy horizon."""

    model_config = ConfigDict(frozen=True)

    short_term: str
    medium_term: str
    long_term: str


class ScenarioResults(BaseModel):
    """Complete calculation results for a scenario."""

    model_config = ConfigDict(frozen=True)

    scenario: Scenario
    individual_benefit: BenefitCalculation
    spousal_benefit: Optional[SpousalBenefitResult] = None
    yearly_benefits: List[YearlyBenefit]
    cumulative_benefits: List[CumulativeBenefit]
    total_lifetime_benefit: float
    breakevens: Optional[Dict[str, Optional[float]]] = Field(
        default=None, description="Breakeven age against each other scenario id"
    )


class ScenarioComparison(BaseModel):
    """Comparison of several scenarios."""

    model_config = ConfigDict(frozen=True)

    scenarios: List[ScenarioResults]
    breakevens: List[BreakevenAnalysis]
    best_scenarios: BestScenarios

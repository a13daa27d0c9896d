"""
Scenario calculation service.

This service runs the benefit calculator, the financial projector and the
breakeven analyzer for one or more scenarios and assembles the results
consumed by the API layer.
"""

import logging
from typing import List, Optional

from benefit_planner.config import get_global_settings
from benefit_planner.models.breakeven import calculate_all_breakevens, find_best_scenarios
from benefit_planner.models.projections import get_total_lifetime_benefit, project_scenario
from benefit_planner.models.scenario import (
    Scenario,
    ScenarioComparison,
    ScenarioResults,
    ScenarioSeries,
)
from benefit_planner.models.social_security import (
    calculate_benefit,
    calculate_spousal_benefit,
)

logger = logging.getLogger(__name__)


class ScenarioCalculationService:
    """Service for calculating and comparing claiming scenarios."""

    def __init__(self) -> None:
        """Initialize the scenario calculation service."""
        self.logger = logging.getLogger(__name__)

    def calculate(self, scenario: Scenario) -> ScenarioResults:
        """Calculate benefits and projections for a single scenario.

        Args:
            scenario: Scenario to calculate

        Returns:
            Benefit calculations, yearly and cumulative series, and the
            lifetime total at the scenario's lifetime age

        Raises:
            ValueError: If the scenario violates the calculator's contract
        """
        try:
            self.logger.info(
                f"Calculating scenario {scenario.id} (claiming at {scenario.claiming_age})"
            )

            individual_benefit = calculate_benefit(
                scenario.benefit_amount, scenario.birth_date, scenario.claiming_age
            )

            spousal_benefit = None
            if scenario.has_spouse_data:
                spousal_benefit = calculate_spousal_benefit(
                    scenario.spouse_benefit_amount,
                    scenario.benefit_amount,
                    scenario.spouse_birth_date,
                    scenario.spouse_claiming_age,
                )

            projection = project_scenario(scenario)

            results = ScenarioResults(
                scenario=scenario,
                individual_benefit=individual_benefit,
                spousal_benefit=spousal_benefit,
                yearly_benefits=projection.yearly_benefits,
                cumulative_benefits=projection.cumulative_benefits,
                total_lifetime_benefit=get_total_lifetime_benefit(
                    projection.cumulative_benefits, scenario.lifetime_age
                ),
            )

            self.logger.info(f"Completed scenario {scenario.id}")
            return results

        except Exception as e:
            self.logger.error(f"Scenario {scenario.id} failed: {str(e)}")
            raise

    def compare(
        self,
        scenarios: List[Scenario],
        short_term_age: Optional[int] = None,
        medium_term_age: Optional[int] = None,
        long_term_age: Optional[int] = None,
    ) -> ScenarioComparison:
        """Compare several scenarios.

        Args:
            scenarios: Scenarios to compare (at least one)
            short_term_age: Short-term horizon (defaults to settings)
            medium_term_age: Medium-term horizon (defaults to settings)
            long_term_age: Long-term horizon (defaults to settings)

        Returns:
            Results per scenario, pairwise breakevens and best scenarios

        Raises:
            ValueError: If no scenarios are given
        """
        if not scenarios:
            raise ValueError("At least one scenario is required")

        settings = get_global_settings()
        short_term_age = short_term_age or settings.short_term_age
        medium_term_age = medium_term_age or settings.medium_term_age
        long_term_age = long_term_age or settings.long_term_age

        self.logger.info(f"Comparing {len(scenarios)} scenarios")

        results = [self.calculate(scenario) for scenario in scenarios]

        breakevens = calculate_all_breakevens(
            {r.scenario.id: r.cumulative_benefits for r in results},
            {r.scenario.id: r.scenario.name for r in results},
        )

        results = [
            result.model_copy(
                update={
                    "breakevens": self._breakevens_for(result.scenario.id, breakevens)
                }
            )
            for result in results
        ]

        best_scenarios = find_best_scenarios(
            [
                ScenarioSeries(
                    id=r.scenario.id,
                    name=r.scenario.name,
                    cumulative_benefits=r.cumulative_benefits,
                )
                for r in results
            ],
            short_term_age,
            medium_term_age,
            long_term_age,
        )

        return ScenarioComparison(
            scenarios=results, breakevens=breakevens, best_scenarios=best_scenarios
        )

    def _breakevens_for(self, scenario_id, breakevens):
        """Map each other scenario id to its breakeven age with this one."""
        result = {}
        for analysis in breakevens:
            if analysis.scenario_id_1 == scenario_id:
                result[analysis.scenario_id_2] = analysis.breakeven_age
            elif analysis.scenario_id_2 == scenario_id:
                result[analysis.scenario_id_1] = analysis.breakeven_age
        return result

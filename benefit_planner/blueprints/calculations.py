"""
Calculation blueprint for Social Security claiming analysis.

This module provides API endpoints for benefit calculations, scenario
projections, scenario comparisons, breakeven analysis, default scenarios and
assumption presets.
"""

import json
from datetime import date
from typing import Any, List, Optional

from flask import Blueprint, current_app, jsonify, request
from pydantic import BaseModel, Field, ValidationError

from benefit_planner.models.breakeven import find_breakeven_age
from benefit_planner.models.defaults import (
    PRESET_LABELS,
    SCENARIO_TEMPLATES,
    apply_assumption_preset,
    can_claim_now,
    create_default_scenario,
    get_earliest_claiming_date,
    get_suggested_scenario_name,
)
from benefit_planner.models.projections import (
    compare_with_opportunity_cost,
    project_scenario,
)
from benefit_planner.models.scenario import AssumptionPreset, Scenario
from benefit_planner.models.social_security import (
    calculate_benefit,
    calculate_spousal_benefit,
    project_max_benefit_at_fra,
)
from benefit_planner.models.ssa_rules import ASSUMPTION_PRESETS, HISTORICAL_COLA
from benefit_planner.services.scenario_service import ScenarioCalculationService

calculations_bp = Blueprint("calculations", __name__, url_prefix="/api")


class BenefitRequest(BaseModel):
    base_amount: float = Field(..., gt=0)
    birth_date: date
    claiming_age: float = Field(..., allow_inf_nan=False)


class SpousalBenefitRequest(BaseModel):
    own_base_amount: float = Field(..., gt=0)
    partner_base_amount: float = Field(..., gt=0)
    spouse_birth_date: date
    spouse_claiming_age: float = Field(..., allow_inf_nan=False)


class MaxBenefitRequest(BaseModel):
    birth_date: date
    cola_rate: float = Field(default=0.025, ge=-0.05, le=0.2)


class CompareRequest(BaseModel):
    scenarios: List[Scenario] = Field(..., min_length=1)
    short_term_age: Optional[int] = None
    medium_term_age: Optional[int] = None
    long_term_age: Optional[int] = None


class BreakevenRequest(BaseModel):
    early: Scenario
    delayed: Scenario
    growth_rate: Optional[float] = Field(default=None, ge=-5, le=20)


class DefaultScenarioRequest(BaseModel):
    template: Optional[str] = None
    preset: Optional[AssumptionPreset] = None


class ApplyPresetRequest(BaseModel):
    scenario: Scenario
    preset: AssumptionPreset


def _validation_error(e: ValidationError) -> Any:
    details = json.loads(e.json(include_url=False))
    return jsonify({"error": "Invalid request", "details": details}), 400


def _request_json() -> Any:
    data = request.get_json(silent=True)
    if data is None:
        raise ValueError("Request body must be JSON")
    return data


@calculations_bp.route("/benefits", methods=["POST"])
def benefit() -> Any:
    """Calculate the monthly benefit at a claiming age.

    Returns:
        JSON benefit calculation
    """
    try:
        payload = BenefitRequest.model_validate(_request_json())
        result = calculate_benefit(
            payload.base_amount, payload.birth_date, payload.claiming_age
        )
        return jsonify(result.model_dump(mode="json")), 200

    except ValidationError as e:
        return _validation_error(e)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        current_app.logger.error(f"Error calculating benefit: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@calculations_bp.route("/spousal-benefits", methods=["POST"])
def spousal_benefit() -> Any:
    """Calculate the benefit a spouse receives.

    Returns:
        JSON spousal benefit result
    """
    try:
        payload = SpousalBenefitRequest.model_validate(_request_json())
        result = calculate_spousal_benefit(
            payload.own_base_amount,
            payload.partner_base_amount,
            payload.spouse_birth_date,
            payload.spouse_claiming_age,
        )
        return jsonify(result.model_dump(mode="json")), 200

    except ValidationError as e:
        return _validation_error(e)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        current_app.logger.error(f"Error calculating spousal benefit: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@calculations_bp.route("/max-benefit", methods=["GET"])
def max_benefit() -> Any:
    """Project the maximum benefit to the year a person reaches FRA.

    Returns:
        JSON with the projected maximum monthly benefit
    """
    try:
        payload = MaxBenefitRequest.model_validate(request.args.to_dict())
        projected = project_max_benefit_at_fra(payload.birth_date, payload.cola_rate)
        return jsonify({"projected_max_benefit": projected}), 200

    except ValidationError as e:
        return _validation_error(e)
    except Exception as e:
        current_app.logger.error(f"Error projecting max benefit: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@calculations_bp.route("/scenarios/project", methods=["POST"])
def project() -> Any:
    """Calculate a single scenario.

    Returns:
        JSON scenario results
    """
    try:
        scenario = Scenario.model_validate(_request_json())
        results = ScenarioCalculationService().calculate(scenario)
        return jsonify(results.model_dump(mode="json")), 200

    except ValidationError as e:
        return _validation_error(e)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        current_app.logger.error(f"Error projecting scenario: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@calculations_bp.route("/scenarios/compare", methods=["POST"])
def compare() -> Any:
    """Compare several scenarios.

    Returns:
        JSON scenario comparison with breakevens and best scenarios
    """
    try:
        payload = CompareRequest.model_validate(_request_json())
        comparison = ScenarioCalculationService().compare(
            payload.scenarios,
            payload.short_term_age,
            payload.medium_term_age,
            payload.long_term_age,
        )
        return jsonify(comparison.model_dump(mode="json")), 200

    except ValidationError as e:
        return _validation_error(e)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        current_app.logger.error(f"Error comparing scenarios: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@calculations_bp.route("/breakeven", methods=["POST"])
def breakeven() -> Any:
    """Find the breakeven age between an early and a delayed scenario.

    The opportunity-adjusted age compares the early scenario against the
    delayed scenario net of the invested value of the early benefits.

    Returns:
        JSON with the plain and the opportunity-adjusted breakeven ages
    """
    try:
        payload = BreakevenRequest.model_validate(_request_json())
        growth_rate = (
            payload.growth_rate
            if payload.growth_rate is not None
            else payload.early.investment_growth_rate
        )

        early = project_scenario(payload.early)
        delayed = project_scenario(payload.delayed)
        adjusted_delayed = compare_with_opportunity_cost(
            payload.early, payload.delayed, growth_rate
        )

        return (
            jsonify(
                {
                    "breakeven_age": find_breakeven_age(
                        early.cumulative_benefits, delayed.cumulative_benefits
                    ),
                    "opportunity_adjusted_breakeven_age": find_breakeven_age(
                        early.cumulative_benefits, adjusted_delayed
                    ),
                    "growth_rate": growth_rate,
                }
            ),
            200,
        )

    except ValidationError as e:
        return _validation_error(e)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        current_app.logger.error(f"Error calculating breakeven: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@calculations_bp.route("/scenarios/default", methods=["GET"])
def default_scenario() -> Any:
    """Build a starting scenario from the configured defaults.

    Query parameters select an optional claiming template and assumption
    preset.

    Returns:
        JSON with the scenario, a suggested name and claiming eligibility
    """
    try:
        payload = DefaultScenarioRequest.model_validate(request.args.to_dict())

        overrides = {}
        if payload.template is not None:
            if payload.template not in SCENARIO_TEMPLATES:
                raise ValueError(
                    f"Unknown scenario template '{payload.template}', "
                    f"expected one of {sorted(SCENARIO_TEMPLATES)}"
                )
            template = SCENARIO_TEMPLATES[payload.template]
            overrides = {
                "name": template["name"],
                "claiming_age": template["claiming_age"],
            }

        scenario = create_default_scenario(**overrides)
        if payload.preset is not None:
            scenario = apply_assumption_preset(scenario, payload.preset)

        return (
            jsonify(
                {
                    "scenario": scenario.model_dump(mode="json"),
                    "suggested_name": get_suggested_scenario_name(
                        scenario.claiming_age, scenario.assumption_preset
                    ),
                    "earliest_claiming_date": get_earliest_claiming_date(
                        scenario.birth_date
                    ).isoformat(),
                    "can_claim_now": can_claim_now(scenario.birth_date),
                }
            ),
            200,
        )

    except ValidationError as e:
        return _validation_error(e)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        current_app.logger.error(f"Error building default scenario: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@calculations_bp.route("/scenarios/apply-preset", methods=["POST"])
def apply_preset() -> Any:
    """Apply an assumption preset to a scenario.

    Returns:
        JSON scenario with the preset's rates
    """
    try:
        payload = ApplyPresetRequest.model_validate(_request_json())
        scenario = apply_assumption_preset(payload.scenario, payload.preset)
        return jsonify(scenario.model_dump(mode="json")), 200

    except ValidationError as e:
        return _validation_error(e)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        current_app.logger.error(f"Error applying preset: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@calculations_bp.route("/presets", methods=["GET"])
def presets() -> Any:
    """List assumption presets, scenario templates and historical COLA data.

    Returns:
        JSON reference data for building scenarios
    """
    return (
        jsonify(
            {
                "presets": {
                    name: {"label": PRESET_LABELS[name], **rates}
                    for name, rates in ASSUMPTION_PRESETS.items()
                },
                "templates": SCENARIO_TEMPLATES,
                "historical_cola": dict(HISTORICAL_COLA),
            }
        ),
        200,
    )

"""
Tests for the calculation blueprint.

This module tests the API endpoints for benefit calculations, scenario
projections, comparisons, breakeven analysis, default scenarios and presets.
"""

import json
import os
from unittest.mock import patch

import pytest

from benefit_planner import create_app
from benefit_planner.config import reset_global_settings


@pytest.fixture
def client():
    """Test client for the application."""
    app = create_app()
    return app.test_client()


def _scenario(**overrides):
    data = {
        "name": "Scenario",
        "birth_date": "1960-01-01",
        "benefit_amount": 3000,
        "claiming_age": 67,
        "cola_rate": 2.5,
        "inflation_rate": 2.5,
        "investment_growth_rate": 5.0,
        "lifetime_age": 90,
    }
    data.update(overrides)
    return data


class TestBenefitEndpoints:
    """Test the benefit calculation endpoints."""

    def test_calculate_benefit(self, client):
        """Test calculating a reduced benefit."""
        response = client.post(
            "/api/benefits",
            json={"base_amount": 3000, "birth_date": "1960-01-01", "claiming_age": 62},
        )

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data["monthly_benefit"] == pytest.approx(2100)
        assert data["annual_benefit"] == pytest.approx(25200)
        assert data["adjustment_percentage"] == pytest.approx(-30.0)
        assert data["fra"] == {"years": 67, "months": 0}

    def test_claiming_age_out_of_range(self, client):
        """Test that an invalid claiming age is a client error."""
        response = client.post(
            "/api/benefits",
            json={"base_amount": 3000, "birth_date": "1960-01-01", "claiming_age": 71},
        )

        assert response.status_code == 400
        data = json.loads(response.data)
        assert "Claiming age must be between 62 and 70" in data["error"]

    def test_nan_claiming_age(self, client):
        """Test that a NaN claiming age is rejected."""
        response = client.post(
            "/api/benefits",
            data='{"base_amount": 3000, "birth_date": "1960-01-01", "claiming_age": NaN}',
            content_type="application/json",
        )

        assert response.status_code == 400
        data = json.loads(response.data)
        assert data["error"] == "Invalid request"
        assert data["details"][0]["loc"] == ["claiming_age"]

    def test_nan_spouse_claiming_age(self, client):
        """Test that a NaN spouse claiming age is rejected."""
        response = client.post(
            "/api/spousal-benefits",
            data=(
                '{"own_base_amount": 800, "partner_base_amount": 3000, '
                '"spouse_birth_date": "1960-01-01", "spouse_claiming_age": NaN}'
            ),
            content_type="application/json",
        )

        assert response.status_code == 400
        assert json.loads(response.data)["details"][0]["loc"] == [
            "spouse_claiming_age"
        ]

    def test_invalid_payload(self, client):
        """Test that schema errors are reported with details."""
        response = client.post(
            "/api/benefits", json={"base_amount": -1, "birth_date": "not-a-date"}
        )

        assert response.status_code == 400
        data = json.loads(response.data)
        assert data["error"] == "Invalid request"
        fields = {detail["loc"][0] for detail in data["details"]}
        assert fields == {"base_amount", "birth_date", "claiming_age"}

    def test_missing_body(self, client):
        """Test that a JSON body is required."""
        response = client.post("/api/benefits", data="not json")

        assert response.status_code == 400
        assert json.loads(response.data) == {"error": "Request body must be JSON"}

    def test_spousal_benefit(self, client):
        """Test calculating a spousal benefit."""
        response = client.post(
            "/api/spousal-benefits",
            json={
                "own_base_amount": 800,
                "partner_base_amount": 3000,
                "spouse_birth_date": "1960-01-01",
                "spouse_claiming_age": 67,
            },
        )

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data["source"] == "spousal"
        assert data["monthly_benefit"] == 1500
        assert data["own_benefit"] == 800

    def test_max_benefit(self, client):
        """Test projecting the maximum benefit for a past FRA."""
        response = client.get("/api/max-benefit?birth_date=1950-01-01")

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data["projected_max_benefit"] == 4018

    def test_max_benefit_requires_birth_date(self, client):
        """Test that the birth date query parameter is required."""
        response = client.get("/api/max-benefit")

        assert response.status_code == 400
        assert json.loads(response.data)["error"] == "Invalid request"


class TestScenarioEndpoints:
    """Test the scenario endpoints."""

    def test_project_scenario(self, client):
        """Test projecting a single scenario."""
        response = client.post("/api/scenarios/project", json=_scenario(claiming_age=62))

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data["individual_benefit"]["monthly_benefit"] == pytest.approx(2100)
        assert len(data["yearly_benefits"]) == 29
        assert data["cumulative_benefits"][-1]["age"] == 90
        assert data["total_lifetime_benefit"] == pytest.approx(25200 * 29)

    def test_project_invalid_scenario(self, client):
        """Test that an invalid scenario is rejected."""
        response = client.post(
            "/api/scenarios/project", json=_scenario(claiming_age=75)
        )

        assert response.status_code == 400
        assert json.loads(response.data)["error"] == "Invalid request"

    def test_compare_scenarios(self, client):
        """Test comparing two scenarios."""
        response = client.post(
            "/api/scenarios/compare",
            json={
                "scenarios": [
                    _scenario(
                        id="early", name="Claim at 62", claiming_age=62, lifetime_age=95
                    ),
                    _scenario(
                        id="late", name="Claim at 70", claiming_age=70, lifetime_age=95
                    ),
                ]
            },
        )

        assert response.status_code == 200
        data = json.loads(response.data)
        assert len(data["scenarios"]) == 2
        assert data["breakevens"][0]["scenario_id_1"] == "early"
        assert data["breakevens"][0]["description"] == (
            "Claim at 62 breaks even with Claim at 70 at age 79"
        )
        assert data["scenarios"][0]["breakevens"]["late"] == pytest.approx(
            data["breakevens"][0]["breakeven_age"]
        )
        assert data["best_scenarios"] == {
            "short_term": "early",
            "medium_term": "late",
            "long_term": "late",
        }

    def test_compare_requires_scenarios(self, client):
        """Test that at least one scenario is required."""
        response = client.post("/api/scenarios/compare", json={"scenarios": []})

        assert response.status_code == 400

    def test_unexpected_error(self, client):
        """Test that unexpected errors return 500."""
        with patch(
            "benefit_planner.blueprints.calculations.ScenarioCalculationService.calculate",
            side_effect=RuntimeError("unexpected"),
        ):
            response = client.post("/api/scenarios/project", json=_scenario())

        assert response.status_code == 500
        assert json.loads(response.data) == {"error": "Internal server error"}


class TestBreakevenEndpoint:
    """Test the breakeven endpoint."""

    def test_breakeven(self, client):
        """Test plain and opportunity-adjusted breakevens."""
        response = client.post(
            "/api/breakeven",
            json={
                "early": _scenario(claiming_age=62, lifetime_age=95),
                "delayed": _scenario(claiming_age=70, lifetime_age=95),
                "growth_rate": 1.0,
            },
        )

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data["breakeven_age"] == pytest.approx(
            (2100 * 61 - 3720 * 69) / (2100 - 3720)
        )
        assert data["opportunity_adjusted_breakeven_age"] > data["breakeven_age"]
        assert data["growth_rate"] == 1.0

    def test_growth_rate_defaults_to_early_scenario(self, client):
        """Test that the growth rate defaults to the early scenario's rate."""
        response = client.post(
            "/api/breakeven",
            json={
                "early": _scenario(claiming_age=62, investment_growth_rate=4.0),
                "delayed": _scenario(claiming_age=70),
            },
        )

        assert response.status_code == 200
        assert json.loads(response.data)["growth_rate"] == 4.0


class TestDefaultsEndpoints:
    """Test the default scenario and preset endpoints."""

    def test_default_scenario(self, client):
        """Test building the default scenario."""
        response = client.get("/api/scenarios/default")

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data["scenario"]["claiming_age"] == 67
        assert data["scenario"]["assumption_preset"] == "moderate"
        assert data["scenario"]["lifetime_age"] == 90
        assert data["suggested_name"] == "Retire @ 67, Moderate"
        assert data["can_claim_now"] is True

    def test_default_scenario_with_template_and_preset(self, client):
        """Test selecting a claiming template and an assumption preset."""
        response = client.get(
            "/api/scenarios/default?template=delayed_retirement&preset=conservative"
        )

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data["scenario"]["name"] == "Delayed Retirement (70)"
        assert data["scenario"]["claiming_age"] == 70
        assert data["scenario"]["investment_growth_rate"] == 2.0
        assert data["suggested_name"] == "Retire @ 70, Conservative"

    def test_default_scenario_uses_settings(self, client):
        """Test that configured defaults reach the default scenario."""
        with patch.dict(os.environ, {"DEFAULT_LIFETIME_AGE": "100"}):
            reset_global_settings()
            response = client.get("/api/scenarios/default")

        assert response.status_code == 200
        assert json.loads(response.data)["scenario"]["lifetime_age"] == 100

    def test_unknown_template(self, client):
        """Test that an unknown template is a client error."""
        response = client.get("/api/scenarios/default?template=never")

        assert response.status_code == 400
        assert "Unknown scenario template" in json.loads(response.data)["error"]

    def test_unknown_preset(self, client):
        """Test that an unknown preset fails validation."""
        response = client.get("/api/scenarios/default?preset=aggressive")

        assert response.status_code == 400
        assert json.loads(response.data)["error"] == "Invalid request"

    def test_apply_preset(self, client):
        """Test applying a preset to a scenario."""
        response = client.post(
            "/api/scenarios/apply-preset",
            json={"scenario": _scenario(id="mine"), "preset": "historical"},
        )

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data["id"] == "mine"
        assert data["assumption_preset"] == "historical"
        assert data["cola_rate"] == 2.6
        assert data["investment_growth_rate"] == 7.0

    def test_apply_custom_preset(self, client):
        """Test that the custom preset keeps the scenario's rates."""
        response = client.post(
            "/api/scenarios/apply-preset",
            json={"scenario": _scenario(cola_rate=1.9), "preset": "custom"},
        )

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data["assumption_preset"] == "custom"
        assert data["cola_rate"] == 1.9

    def test_presets(self, client):
        """Test listing presets, templates and historical COLA values."""
        response = client.get("/api/presets")

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data["presets"]["moderate"] == {
            "label": "Moderate",
            "investment_growth_rate": 5.0,
            "cola_rate": 2.5,
            "inflation_rate": 3.0,
        }
        assert set(data["templates"]) == {
            "early_retirement",
            "full_retirement_age",
            "delayed_retirement",
        }
        assert data["historical_cola"]["2023"] == 8.7

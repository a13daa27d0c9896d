"""
Pytest configuration and shared fixtures for the claiming planner tests.
"""

import os
from datetime import date
from unittest.mock import patch

import pytest

from benefit_planner.config import reset_global_settings
from benefit_planner.models.scenario import Scenario


@pytest.fixture(autouse=True)
def test_environment():
    """Provide a valid environment and fresh global settings for each test."""
    reset_global_settings()
    with patch.dict(
        os.environ,
        {"SECRET_KEY": "test-secret-key-123", "APP_ENV": "testing"},
        clear=True,
    ):
        yield
    reset_global_settings()


@pytest.fixture
def birth_date():
    """Birth date with an FRA of 67."""
    return date(1960, 1, 1)


@pytest.fixture
def make_scenario(birth_date):
    """Factory for scenarios with COLA equal to inflation."""

    def _make(**overrides):
        values = {
            "name": "Scenario",
            "birth_date": birth_date,
            "benefit_amount": 3000.0,
            "claiming_age": 67,
            "cola_rate": 2.5,
            "inflation_rate": 2.5,
            "investment_growth_rate": 5.0,
            "lifetime_age": 90,
        }
        values.update(overrides)
        return Scenario(**values)

    return _make

"""Tests for the health check endpoint."""

import json

from benefit_planner import create_app


def test_healthz_ok():
    """Test that the health endpoint returns 200 with correct JSON."""
    app = create_app()
    client = app.test_client()

    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.content_type == "application/json"

    data = json.loads(response.data)
    assert data == {"status": "ok", "rules_year": 2025}


def test_app_configuration():
    """Test that the app is configured from settings."""
    app = create_app()

    assert app.config["SECRET_KEY"] == "test-secret-key-123"
    assert app.config["TESTING"] is True
    assert app.config["DEBUG"] is False


def test_config_name_overrides_environment():
    """Test that an explicit configuration name wins over APP_ENV."""
    app = create_app("development")

    assert app.config["DEBUG"] is True
    assert app.config["TESTING"] is False

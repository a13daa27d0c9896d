"""Social Security claiming planner Flask application factory."""

from typing import Optional

from flask import Flask

from benefit_planner.config import get_global_settings


def create_app(config_name: Optional[str] = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config_name: Configuration name (development, testing, production),
            overriding APP_ENV

    Returns:
        Flask: Configured Flask application instance
    """
    app = Flask(__name__)

    # Configuration from Pydantic Settings
    settings = get_global_settings()
    app_env = config_name or settings.app_env
    app.config["SECRET_KEY"] = settings.secret_key
    app.config["ENV"] = app_env
    app.config["DEBUG"] = app_env == "development"
    app.config["TESTING"] = app_env == "testing"
    app.config["SETTINGS"] = settings
    app.logger.setLevel(settings.log_level)

    # Register blueprints
    from benefit_planner.blueprints.calculations import calculations_bp
    from benefit_planner.blueprints.health import health_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(calculations_bp)

    return app

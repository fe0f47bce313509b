"""Flask application entry point."""

import logging

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, MethodNotAllowed, NotFound

from .config import Settings, settings
from .exceptions import (
    AuthenticationError,
    DuplicateUsername,
    ResourceNotFound,
    TodoCoreError,
    ValidationError,
)
from .store import Stores, init_stores
from .store.seed import seed_demo_users
from .utils import isodatetime

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def _error_response(error: TodoCoreError, status: int):
    response = {
        "message": error.message,
        "type": error.__class__.__name__,
    }
    if error.details:
        response["details"] = error.details
    return jsonify(response), status


# Error handlers
def handle_validation_error(error):
    """Handle ValidationError exceptions."""
    return _error_response(error, 400)


def handle_duplicate_username(error):
    """Handle DuplicateUsername exceptions."""
    return _error_response(error, 400)


def handle_authentication_error(error):
    """Handle AuthFailure, Unauthorized and InvalidToken exceptions."""
    return _error_response(error, 401)


def handle_not_found(error):
    """Handle ResourceNotFound exceptions."""
    return _error_response(error, 404)


def handle_todo_core_error(error):
    """Handle generic TodoCoreError exceptions."""
    logger.error(f"Unhandled {error.__class__.__name__}: {error.message}")
    return _error_response(error, 500)


def handle_unmatched_route(error):
    """Unknown paths and unsupported methods both answer 404."""
    return jsonify({"message": "Resource not found", "type": "NotFound"}), 404


def handle_http_exception(error):
    """Handle any other werkzeug HTTP exception."""
    return jsonify({"message": error.description, "type": error.name}), error.code


def handle_internal_error(error):
    """Handle internal server errors."""
    logger.exception(f"Internal error: {error}")
    return jsonify({
        "message": "Internal server error",
        "type": "InternalServerError"
    }), 500


def log_request(response):
    """Access log line per request."""
    logger.debug(f"{request.method} {request.path} {response.status_code}")
    return response


def health():
    """Health check endpoint."""
    return jsonify({"status": "ok", "time": isodatetime.now()})


def create_app(config: Settings | None = None, stores: Stores | None = None) -> Flask:
    """
    Build a Flask app with its own stores.

    Args:
        config: Settings override (defaults to the module-level settings)
        stores: Pre-built stores (defaults to empty stores from config)

    Returns:
        Configured Flask application
    """
    config = config or settings
    stores = stores or Stores.from_settings(config)

    app = Flask(__name__)

    # CORS configuration
    CORS(app, origins=config.cors_origins, supports_credentials=True)

    init_stores(app, stores)
    if config.seed_demo_users:
        seed_demo_users(stores.credentials)

    app.register_error_handler(ValidationError, handle_validation_error)
    app.register_error_handler(DuplicateUsername, handle_duplicate_username)
    app.register_error_handler(AuthenticationError, handle_authentication_error)
    app.register_error_handler(ResourceNotFound, handle_not_found)
    app.register_error_handler(TodoCoreError, handle_todo_core_error)
    app.register_error_handler(NotFound, handle_unmatched_route)
    app.register_error_handler(MethodNotAllowed, handle_unmatched_route)
    app.register_error_handler(HTTPException, handle_http_exception)
    app.register_error_handler(Exception, handle_internal_error)

    app.after_request(log_request)
    app.add_url_rule("/health", "health", health)

    # Register API blueprints
    from .api.todos import todos_bp
    from .auth.api import auth_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(todos_bp)

    return app


# Create Flask app
app = create_app()


def run():
    """Console entry point: serve the module-level app."""
    logger.info(f"Server is running on port {settings.port}")
    app.run(host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()

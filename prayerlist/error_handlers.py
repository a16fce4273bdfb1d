from flask import Blueprint, current_app
from werkzeug.exceptions import HTTPException

from .errors import (
    AppError,
    AuthenticationError,
    DuplicateResourceError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from .utils import api_error

error_handlers_bp = Blueprint("error_handlers", __name__)


@error_handlers_bp.app_errorhandler(ValidationError)
def handle_validation_error(error):
    """Handles validation and business-rule errors."""
    current_app.logger.warning(f"Validation Error: {error.message}")
    return api_error(error.message, error.status_code)


@error_handlers_bp.app_errorhandler(AuthenticationError)
def handle_authentication_error(error):
    """Handles requests without a verified identity."""
    current_app.logger.warning(f"Authentication Error: {error.message}")
    return api_error(error.message, error.status_code)


@error_handlers_bp.app_errorhandler(PermissionDeniedError)
def handle_permission_denied_error(error):
    """Handles authenticated callers that lack the required role."""
    current_app.logger.warning(f"Permission Denied: {error.message}")
    return api_error(error.message, error.status_code)


@error_handlers_bp.app_errorhandler(DuplicateResourceError)
def handle_duplicate_resource_error(error):
    """Handles duplicate resource errors."""
    current_app.logger.warning(f"Duplicate Resource Error: {error.message}")
    return api_error(error.message, error.status_code, data=error.data)


@error_handlers_bp.app_errorhandler(NotFoundError)
def handle_not_found_error(error):
    """Handles not found errors."""
    current_app.logger.warning(f"Not Found Error: {error.message}")
    return api_error(error.message, error.status_code)


@error_handlers_bp.app_errorhandler(AppError)
def handle_app_error(error):
    """Handles generic application errors."""
    current_app.logger.error(f"Application Error: {error.message}")
    return api_error(error.message, error.status_code)


@error_handlers_bp.app_errorhandler(HTTPException)
def handle_http_exception(e):
    """Handles routing and method errors raised by werkzeug."""
    return api_error(e.description or e.name, e.code or 500)


@error_handlers_bp.app_errorhandler(Exception)
def handle_unexpected_error(e):
    """Handles unexpected server errors."""
    current_app.logger.error(f"Internal Server Error: {e}", exc_info=e)
    # Avoid exposing raw error details to the client
    return api_error("An unexpected error occurred.", 500)

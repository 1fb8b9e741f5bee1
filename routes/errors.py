from flask import jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from extensions import db
from services.errors import PortalError
from utils.logging_config import get_logger

logger = get_logger(__name__)


def _error(message: str, status: int):
    return jsonify({"success": False, "error": message}), status


def _validation_message(exc: ValidationError) -> str:
    first = exc.errors()[0]
    loc = ".".join(str(p) for p in first.get("loc", ()))
    msg = first.get("msg", "Invalid value")
    return f"{loc}: {msg}" if loc else msg


def register_error_handlers(app) -> None:
    """Every failure leaves the API as {"success": false, "error": ...}."""

    @app.errorhandler(PortalError)
    def handle_portal_error(exc: PortalError):
        return _error(str(exc), exc.status_code)

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return _error(_validation_message(exc), 400)

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return _error(exc.description or exc.name, exc.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        db.session.rollback()
        logger.exception("unhandled error")
        return _error("Internal server error", 500)

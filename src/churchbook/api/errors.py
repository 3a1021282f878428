"""Map domain errors to JSON responses."""

import structlog
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from churchbook.domain.errors import (
    ConflictError,
    DomainError,
    NotFoundError,
    PersistenceError,
    UnauthorizedError,
    ValidationError,
)

logger = structlog.get_logger(__name__)

STATUS_BY_ERROR = (
    (ValidationError, 400),
    (UnauthorizedError, 401),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def _error_response(message: str, kind: str, status: int):
    return jsonify({"error": message, "kind": kind}), status


def status_for(error: DomainError) -> int:
    for error_type, status in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        status = status_for(error)
        logger.info("request_rejected", kind=type(error).__name__, status=status, error=str(error))
        return _error_response(str(error), type(error).__name__, status)

    @app.errorhandler(PersistenceError)
    def handle_persistence_error(error: PersistenceError):
        logger.error("persistence_failure", error=str(error))
        return _error_response("Internal storage error", type(error).__name__, 500)

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        return _error_response(error.description, error.name, error.code)

"""Liveness and database health."""

import time

import structlog
from flask import Blueprint, jsonify

from churchbook import __version__
from churchbook.api.helpers import services
from churchbook.domain.errors import PersistenceError

logger = structlog.get_logger(__name__)

system_bp = Blueprint("system", __name__)


@system_bp.get("/health")
def health():
    start_time = time.monotonic()
    try:
        services().accounts.list_accounts(active_only=True)
    except PersistenceError as e:
        logger.error("health_check_failed", error=str(e))
        return jsonify({"status": "unavailable", "database": "error", "version": __version__}), 503

    elapsed_ms = (time.monotonic() - start_time) * 1000
    return jsonify({
        "status": "ok",
        "database": "ok",
        "response_time_ms": round(elapsed_ms, 2),
        "version": __version__,
    }), 200

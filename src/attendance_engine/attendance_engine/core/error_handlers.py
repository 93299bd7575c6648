"""
JSON error handlers: domain errors become 4xx, anything else a bare 500.
"""

from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .exceptions import DomainError, NotFoundError

logger = logging.getLogger(__name__)


def _domain_error_handler(exc: DomainError):
    status = 404 if isinstance(exc, NotFoundError) else 400
    return jsonify({"success": False, "message": str(exc)}), status


def _http_exception_handler(exc: HTTPException):
    return jsonify({"success": False, "message": exc.description}), exc.code


def _generic_exception_handler(exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    return jsonify({"success": False, "message": "Internal server error"}), 500


def register_error_handlers(app: Flask) -> None:
    """Attach all error handlers to the Flask app."""
    app.register_error_handler(DomainError, _domain_error_handler)
    app.register_error_handler(HTTPException, _http_exception_handler)
    app.register_error_handler(Exception, _generic_exception_handler)

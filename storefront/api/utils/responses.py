# storefront/api/utils/responses.py
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from flask import current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from storefront.errors import ApiError
from storefront.extensions import db

HTTP_OK = 200
HTTP_CREATED = 201
HTTP_BAD_REQUEST = 400
HTTP_NOT_FOUND = 404
HTTP_INTERNAL_SERVER_ERROR = 500

GENERIC_ERROR = "Internal server error"


def _plain(value):
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def success(data=None, status: int = HTTP_OK, message: str | None = None):
    body = {"success": True, "data": _plain(data)}
    if message:
        body["message"] = message
    return jsonify(body), status


def error(message: str, status: int = HTTP_INTERNAL_SERVER_ERROR):
    return jsonify({"success": False, "error": message}), status


def get_payload() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def register_error_handlers(app):
    """Map exceptions raised under /api to the JSON envelope."""

    def _is_api() -> bool:
        return request.path.startswith("/api/") or request.path == "/api"

    @app.errorhandler(ApiError)
    def _api_error(e: ApiError):
        db.session.rollback()
        if _is_api():
            return error(e.message, e.status_code)
        return e.message, e.status_code

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        if _is_api():
            return error(e.description or e.name, e.code or HTTP_INTERNAL_SERVER_ERROR)
        return e

    @app.errorhandler(SQLAlchemyError)
    def _db_error(e: SQLAlchemyError):
        db.session.rollback()
        current_app.logger.exception("database error on %s %s", request.method, request.path)
        if _is_api():
            return error(GENERIC_ERROR, HTTP_INTERNAL_SERVER_ERROR)
        return GENERIC_ERROR, HTTP_INTERNAL_SERVER_ERROR

    @app.errorhandler(Exception)
    def _unhandled(e: Exception):
        db.session.rollback()
        current_app.logger.exception("unhandled error on %s %s", request.method, request.path)
        if _is_api():
            return error(GENERIC_ERROR, HTTP_INTERNAL_SERVER_ERROR)
        return GENERIC_ERROR, HTTP_INTERNAL_SERVER_ERROR

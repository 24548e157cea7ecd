from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from .model import SessionFilter
from ..common.datetime_utils import now_local
from ..container import Container
from ..core.exceptions import (
    AlreadyClosedError,
    AuthenticationError,
    DomainError,
    DuplicateSessionError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def error_response(exc: Exception):
    """Map a domain error to a JSON response; unexpected errors become 500."""
    if isinstance(exc, DuplicateSessionError):
        return jsonify({"message": str(exc), "recordId": exc.record_id}), 400
    if isinstance(exc, (ValidationError, AlreadyClosedError)):
        return jsonify({"message": str(exc)}), 400
    if isinstance(exc, NotFoundError):
        return jsonify({"message": str(exc)}), 404
    if isinstance(exc, AuthenticationError):
        return jsonify({"success": False, "message": str(exc)}), 401
    if not isinstance(exc, DomainError):
        logger.exception(f"Unhandled error on {request.path}: {exc}")
    else:
        logger.error(f"Storage error on {request.path}: {exc}")
    return jsonify({"message": "Internal server error"}), 500


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def hr_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not session.get("hr_authenticated"):
                return jsonify({"message": "HR authentication required"}), 401
            return view(*args, **kwargs)

        return wrapper

    def _json_body() -> dict:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}

    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="clock_in")
    def clock_in():
        data = _json_body()
        try:
            record = service.clock_in(data.get("employeeName"), data.get("department"))
            return jsonify(record.to_dict()), 200
        except Exception as e:
            return error_response(e)

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="clock_out")
    def clock_out():
        data = _json_body()
        try:
            record = service.clock_out(data.get("recordId"))
            return jsonify(record.to_dict()), 200
        except Exception as e:
            return error_response(e)

    @app.route("/api/attendance/status/<path:employee_name>", methods=["GET"], endpoint="employee_status")
    def employee_status(employee_name: str):
        try:
            return jsonify(service.get_status(employee_name).to_dict()), 200
        except Exception as e:
            return error_response(e)

    @app.route("/api/attendance/records", methods=["GET"], endpoint="records")
    @hr_required
    def records():
        try:
            filters = SessionFilter.from_mapping(request.args)
            return jsonify([r.to_dict() for r in service.list_sessions(filters)]), 200
        except Exception as e:
            return error_response(e)

    @app.route("/api/attendance/records/<record_id>", methods=["GET"], endpoint="record_detail")
    @hr_required
    def record_detail(record_id: str):
        try:
            return jsonify(service.get_record(record_id).to_dict()), 200
        except Exception as e:
            return error_response(e)

    @app.route("/api/attendance/records.csv", methods=["GET"], endpoint="records_csv")
    @hr_required
    def records_csv():
        exporter = container.export_service
        try:
            rows = exporter.build_rows(SessionFilter.from_mapping(request.args))
        except Exception as e:
            return error_response(e)

        filename = exporter.filename_for(now_local().date())
        return app.response_class(
            exporter.to_csv(rows),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/attendance/statistics", methods=["GET"], endpoint="statistics")
    @hr_required
    def statistics():
        try:
            return jsonify(service.get_statistics().to_dict()), 200
        except Exception as e:
            return error_response(e)

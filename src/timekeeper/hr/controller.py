from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..attendance.controller import error_response
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/hr/authenticate", methods=["POST"], endpoint="hr_authenticate")
    def hr_authenticate():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}
        try:
            container.hr_auth_service.authenticate(str(data.get("password") or ""))
        except Exception as e:
            session.pop("hr_authenticated", None)
            return error_response(e)

        session["hr_authenticated"] = True
        return jsonify({"success": True, "message": "Authentication successful"}), 200

    @app.route("/api/hr/logout", methods=["POST"], endpoint="hr_logout")
    def hr_logout():
        session.pop("hr_authenticated", None)
        return jsonify({"success": True}), 200

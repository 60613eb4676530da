from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_hostel_id, error_response, student_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance")
    @student_required
    def api_attendance():
        try:
            data = container.attendance_service.get_attendance_ui(current_hostel_id())
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True, "attendance": data})

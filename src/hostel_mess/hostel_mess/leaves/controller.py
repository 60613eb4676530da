from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, current_hostel_id, current_role, error_response, student_required
from ..container import Container
from .model import Leave


def _leave_to_dict(leave: Leave) -> dict:
    return {
        "leave_id": leave.leave_id,
        "hostel_id": leave.hostel_id,
        "from": leave.from_date.strftime("%Y-%m-%d"),
        "to": leave.to_date.strftime("%Y-%m-%d"),
        "days": leave.days,
        "approved": leave.approved,
        "status": "Approved" if leave.approved else "Pending",
        "applied_on": leave.applied_on.strftime("%Y-%m-%d %H:%M"),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leaves", methods=["POST"], endpoint="api_submit_leave")
    @student_required
    def api_submit_leave():
        data = request.get_json(silent=True) or request.form
        try:
            result = container.leave_service.submit_leave(
                current_role=current_role(),
                hostel_id=current_hostel_id(),
                from_date=data.get("from") or data.get("startDate") or "",
                to_date=data.get("to") or data.get("endDate") or "",
            )
        except Exception as e:
            return error_response(e)
        return (
            jsonify(
                {
                    "success": True,
                    "adjusted": result.adjusted,
                    "message": result.message,
                    "leave": _leave_to_dict(result.leave),
                }
            ),
            201,
        )

    @app.route("/api/leaves", methods=["GET"], endpoint="api_my_leaves")
    @student_required
    def api_my_leaves():
        try:
            leaves = container.leave_service.list_my_leaves(hostel_id=current_hostel_id())
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True, "leaves": [_leave_to_dict(l) for l in leaves]})

    @app.route("/api/admin/leaves/pending", methods=["GET"], endpoint="api_pending_leaves")
    @admin_required
    def api_pending_leaves():
        try:
            rows = container.leave_service.list_pending(current_role=current_role())
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True, "leaves": list(rows)})

    @app.route("/api/admin/leaves/<int:leave_id>/approve", methods=["POST"], endpoint="api_approve_leave")
    @admin_required
    def api_approve_leave(leave_id: int):
        try:
            leave = container.leave_service.approve_leave(current_role=current_role(), leave_id=leave_id)
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True, "leave": _leave_to_dict(leave)})

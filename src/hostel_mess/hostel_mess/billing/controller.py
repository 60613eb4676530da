from __future__ import annotations

from flask import Flask, jsonify, request, send_file

from ..common.web import (
    admin_required,
    current_hostel_id,
    current_role,
    error_response,
    login_required,
    student_required,
)
from ..container import Container
from .model import BillResult, ExpenseRecord


def _bill_result_to_dict(result: BillResult) -> dict:
    return {
        "monthYear": result.month_year,
        "studentCount": result.student_count,
        "usersUpdated": result.users_updated,
        "ratePerPresentDay": result.rate_per_present_day,
        "partial": result.is_partial,
        "failures": [{"hostelId": f.hostel_id, "error": f.error} for f in result.failures],
    }


def _expense_to_dict(r: ExpenseRecord) -> dict:
    return {
        "monthYear": r.month_year,
        "kitchenRent": r.kitchen_rent,
        "kitchenExpense": r.kitchen_expense,
        "staffSalary": r.staff_salary,
        "totalExpense": r.total_expense,
        "ratePerDay": r.rate_per_day,
        "usersBilledCount": r.users_billed_count,
        "createdAt": r.created_at.strftime("%Y-%m-%d %H:%M"),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/bills", methods=["POST"], endpoint="api_generate_bill")
    @admin_required
    def api_generate_bill():
        data = request.get_json(silent=True) or request.form
        try:
            result = container.billing_service.generate_bill(
                current_role=current_role(),
                kitchen_rent=data.get("kitchenRent"),
                kitchen_expense=data.get("kitchenExpense"),
                staff_salary=data.get("staffSalary"),
                total_expense=data.get("totalExpense"),
            )
        except Exception as e:
            return error_response(e)

        if result.student_count == 0:
            message = "No students to bill"
        elif result.is_partial:
            message = f"Bill generated for {result.users_updated} of {result.student_count} students"
        else:
            message = f"Bill generated for {result.users_updated} students"
        return jsonify({"success": True, "message": message, **_bill_result_to_dict(result)})

    @app.route("/api/admin/expenses", methods=["GET"], endpoint="api_expense_log")
    @admin_required
    def api_expense_log():
        try:
            records = container.billing_service.list_expense_log(current_role=current_role())
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True, "expenses": [_expense_to_dict(r) for r in records]})

    @app.route("/api/admin/expenses/export", methods=["GET"], endpoint="api_export_expense_log")
    @admin_required
    def api_export_expense_log():
        try:
            out = container.billing_service.export_expense_log(current_role=current_role())
        except Exception as e:
            return error_response(e)
        return send_file(
            out,
            mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            as_attachment=True,
            download_name="expense_log.xlsx",
        )

    @app.route("/api/bills/status", methods=["GET"], endpoint="api_bill_status")
    @student_required
    def api_bill_status():
        try:
            flag = container.bill_notification_gate.peek_bill_flag(current_hostel_id())
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True, "newBill": flag})

    @app.route("/api/bills/latest", methods=["POST"], endpoint="api_consume_bill")
    @student_required
    def api_consume_bill():
        try:
            consumed = container.bill_notification_gate.consume_bill_flag(current_hostel_id())
        except Exception as e:
            return error_response(e)
        latest = consumed.latest
        return jsonify(
            {
                "success": True,
                "newBill": consumed.is_new,
                "latest": latest.as_dict() if latest else None,
            }
        )

    @app.route("/api/bills/history", methods=["GET"], endpoint="api_bill_history")
    @login_required
    def api_bill_history():
        try:
            history = container.billing_service.get_history(
                current_role=current_role(),
                requester_id=current_hostel_id(),
                hostel_id=request.args.get("hostel_id") or None,
            )
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True, "history": [h.as_dict() for h in history] if history else None})

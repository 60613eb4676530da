from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import current_hostel_id, error_response, student_required
from ..container import Container
from .model import Payment


def _payment_to_dict(p: Payment) -> dict:
    return {
        "payment_id": p.payment_id,
        "billing_cycle": p.billing_cycle,
        "amount": p.amount,
        "present_days": p.present_days,
        "status": p.status.value,
        "paid_at": p.paid_at.strftime("%Y-%m-%d %H:%M"),
        "gateway_payment_id": p.gateway_payment_id,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payments", methods=["POST"], endpoint="api_record_payment")
    @student_required
    def api_record_payment():
        data = request.get_json(silent=True) or request.form
        try:
            payment = container.payment_service.record_payment(
                hostel_id=current_hostel_id(),
                billing_cycle=data.get("billingCycle", ""),
                amount=data.get("amount"),
                gateway_payment_id=data.get("paymentId"),
                gateway_order_id=data.get("orderId"),
            )
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True, "payment": _payment_to_dict(payment)}), 201

    @app.route("/api/payments", methods=["GET"], endpoint="api_my_payments")
    @student_required
    def api_my_payments():
        try:
            payments = container.payment_service.list_payments(hostel_id=current_hostel_id())
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True, "payments": [_payment_to_dict(p) for p in payments]})

from __future__ import annotations

import logging

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_non_empty
from ..container import Container
from ..core.enums import PeriodType
from ..core.exceptions import (
    ConfigurationError,
    DomainError,
    NotFoundError,
    PayrollLockedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS = (
    (ValidationError, 400),
    (PayrollLockedError, 409),
    (NotFoundError, 404),
    (ConfigurationError, 422),
    (DomainError, 400),
)


def ok(data, status: int = 200):
    return jsonify({"success": True, "data": data}), status


def fail(message: str, status: int):
    return jsonify({"success": False, "error": message}), status


def _body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _date(value, field_name: str):
    try:
        return parse_iso_date(require_non_empty(str(value or ""), field_name))
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def _period_type(value) -> PeriodType:
    try:
        return PeriodType(str(value or "").upper())
    except ValueError:
        raise ValidationError(f"Unknown period type: {value}")


def _period_args(data: dict) -> dict:
    start = _date(data.get("start_date"), "start_date")
    end = _date(data.get("end_date"), "end_date")
    if end < start:
        raise ValidationError("end_date must not be before start_date")
    return {
        "period": require_non_empty(str(data.get("period") or ""), "period"),
        "period_type": _period_type(data.get("period_type")),
        "start_date": start,
        "end_date": end,
    }


def register(app: Flask, container: Container) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        for error_type, status in ERROR_STATUS:
            if isinstance(e, error_type):
                return fail(str(e), status)
        return fail(str(e), 400)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return fail(e.description or e.name, e.code or 500)
        logger.exception("unhandled error on %s %s", request.method, request.path)
        return fail("Internal server error", 500)

    @app.route("/api/payroll/generate", methods=["POST"], endpoint="payroll_generate")
    def generate():
        data = _body()
        employee_id = require_non_empty(str(data.get("employee_id") or ""), "employee_id")
        result = container.payroll_generator.generate(employee_id=employee_id, **_period_args(data))
        return ok({"payroll": result.payroll.to_dict(), "calculation_details": result.trace.to_dict()}, 201)

    @app.route("/api/payroll/bulk", methods=["POST"], endpoint="payroll_bulk")
    def generate_bulk():
        data = _body()
        employee_ids = data.get("employee_ids")
        if not isinstance(employee_ids, list) or not employee_ids:
            raise ValidationError("employee_ids must be a non-empty list")

        batch = container.payroll_generator.generate_bulk([str(e) for e in employee_ids], **_period_args(data))
        return ok(
            {
                "payrolls": [r.payroll.to_dict() for r in batch.successes],
                "failed": [{"employee_id": f.key, "error": str(f.error)} for f in batch.failures],
            }
        )

    @app.route("/api/payroll/<int:payroll_id>/approve", methods=["POST"], endpoint="payroll_approve")
    def approve(payroll_id: int):
        return ok(container.payroll_service.approve(payroll_id).to_dict())

    @app.route("/api/payroll/<int:payroll_id>/pay", methods=["POST"], endpoint="payroll_pay")
    def pay(payroll_id: int):
        return ok(container.payroll_service.pay(payroll_id).to_dict())

    @app.route("/api/payroll/<int:payroll_id>/cancel", methods=["POST"], endpoint="payroll_cancel")
    def cancel(payroll_id: int):
        return ok(container.payroll_service.cancel(payroll_id).to_dict())

    @app.route("/api/payroll/<int:payroll_id>/tax-deductions", methods=["POST"], endpoint="payroll_tax_deductions")
    def record_tax_deductions(payroll_id: int):
        data = request.get_json(silent=True) or {}
        gross = data.get("gross_earnings")
        if gross is None:
            gross = container.payroll_service.get(payroll_id).total_earnings
        try:
            gross = float(gross)
        except (TypeError, ValueError):
            raise ValidationError("gross_earnings must be a number")

        record = container.tax_deduction_service.record_payroll_tax_deductions(payroll_id, gross)
        return ok(
            {
                "total_tax": record.total_tax,
                "entries": [
                    {"tax_type": e.tax_type.value, "amount": e.amount, "tax_deduction_id": e.tax_deduction_id}
                    for e in record.entries
                ],
            }
        )

    @app.route("/api/payroll/tax-report", methods=["GET"], endpoint="payroll_tax_report")
    def tax_report():
        employee_id = require_non_empty(request.args.get("employee_id", ""), "employee_id")
        start = _date(request.args.get("start"), "start")
        end = _date(request.args.get("end"), "end")
        report = container.tax_deduction_service.generate_tax_report(employee_id, start, end)
        return ok(report.to_dict())

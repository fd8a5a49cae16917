from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, parse_month
from ..common.guards import current_organization_id, current_user_id, login_required, manager_required, part_time_required
from ..core.exceptions import ValidationError
from ..container import Container
from .export import breakdown_to_dict, detail_csv, employees_csv, report_to_dict, summary_csv


def register(app: Flask, container: Container) -> None:
    def _month_arg() -> date:
        value = request.args.get("month")
        if not value:
            return date.today().replace(day=1)
        try:
            return parse_month(value)
        except ValueError:
            raise ValidationError("month must be YYYY-MM")

    def _csv_response(text: str, filename: str):
        csv_bytes = text.encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    def _month_report():
        month = _month_arg()
        report = container.payroll_report_service.build_month_report(
            organization_id=current_organization_id(),
            month=month,
        )
        return month, report

    @app.route("/payroll", methods=["GET"], endpoint="payroll")
    @manager_required
    def payroll():
        _, report = _month_report()
        data = report_to_dict(report)
        data["transport_enabled"] = container.settings_service.resolve_pay_settings(
            current_organization_id()
        ).transport.enabled
        return jsonify(data)

    @app.route("/payroll/users.csv", methods=["GET"], endpoint="payroll_users_csv")
    @manager_required
    def payroll_users_csv():
        month, report = _month_report()
        return _csv_response(employees_csv(report), f"payroll_users_{month.strftime('%Y-%m')}.csv")

    @app.route("/payroll/detail.csv", methods=["GET"], endpoint="payroll_detail_csv")
    @manager_required
    def payroll_detail_csv():
        month, report = _month_report()
        return _csv_response(detail_csv(report), f"payroll_detail_{month.strftime('%Y-%m')}.csv")

    @app.route("/payroll/summary.csv", methods=["GET"], endpoint="payroll_summary_csv")
    @manager_required
    def payroll_summary_csv():
        month, report = _month_report()
        return _csv_response(summary_csv(report), f"payroll_summary_{month.strftime('%Y-%m')}.csv")

    @app.route("/payroll/shifts/<int:shift_id>", methods=["GET"], endpoint="payroll_shift")
    @manager_required
    def payroll_shift(shift_id: int):
        breakdown = container.payroll_report_service.calculate_shift(
            organization_id=current_organization_id(),
            shift_id=shift_id,
        )
        if breakdown is None:
            return jsonify({"error": "Shift not found"}), 404
        return jsonify(breakdown_to_dict(breakdown))

    @app.route("/me/payroll", methods=["GET"], endpoint="my_payroll")
    @part_time_required
    def my_payroll():
        include_pending = request.args.get("include_pending", "1") not in {"0", "false", "no"}
        report = container.payroll_report_service.build_my_estimate(
            organization_id=current_organization_id(),
            employee_id=current_user_id(),
            month=_month_arg(),
            include_pending=include_pending,
        )
        return jsonify(report_to_dict(report))

    @app.route("/holidays/<day>", methods=["GET"], endpoint="holiday_lookup")
    @login_required
    def holiday_lookup(day: str):
        try:
            d = parse_iso_date(day)
        except ValueError:
            raise ValidationError("date must be YYYY-MM-DD")
        name = container.payroll_report_service.holiday_name(d)
        return jsonify({"date": d.strftime("%Y-%m-%d"), "is_holiday": name is not None, "name": name})

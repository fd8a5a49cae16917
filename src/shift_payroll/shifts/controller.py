from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, parse_month
from ..common.guards import (
    current_organization_id,
    current_role,
    current_user_id,
    login_required,
    manager_required,
    part_time_required,
)
from ..core.enums import Role, ShiftStatus
from ..core.exceptions import ValidationError
from ..container import Container
from .model import ShiftRecord


def shift_to_dict(s: ShiftRecord) -> dict:
    return {
        "shift_id": s.shift_id,
        "employee_id": s.employee_id,
        "work_date": s.work_date.strftime("%Y-%m-%d"),
        "start_time": s.start_time,
        "end_time": s.end_time,
        "status": s.status.value,
        "hourly_wage": str(s.hourly_wage) if s.hourly_wage is not None else None,
        "note": s.note,
        "approved_by": s.approved_by,
        "approved_at": s.approved_at.isoformat() if s.approved_at else None,
        "reject_reason": s.reject_reason,
    }


def register(app: Flask, container: Container) -> None:
    def _body() -> dict:
        return request.get_json(silent=True) or {}

    def _parse_date(v: str) -> date:
        try:
            return parse_iso_date(v)
        except ValueError:
            raise ValidationError("work_date must be YYYY-MM-DD")

    @app.route("/shifts", methods=["GET"], endpoint="list_shifts")
    @login_required
    def list_shifts():
        month_s = request.args.get("month")
        try:
            month = parse_month(month_s) if month_s else date.today().replace(day=1)
        except ValueError:
            raise ValidationError("month must be YYYY-MM")

        if current_role() == Role.MANAGER:
            status_s = request.args.get("status")
            try:
                status = ShiftStatus(status_s) if status_s and status_s != "all" else None
            except ValueError:
                raise ValidationError("Unknown status filter")
            rows = container.shift_service.list_for_month(
                organization_id=current_organization_id(),
                month_start=month,
                status=status,
            )
        else:
            rows = container.shift_service.list_mine(
                organization_id=current_organization_id(),
                employee_id=current_user_id(),
                month_start=month,
            )
        return jsonify([shift_to_dict(s) for s in rows])

    @app.route("/shifts", methods=["POST"], endpoint="submit_shift")
    @part_time_required
    def submit_shift():
        data = _body()
        shift_id = container.shift_service.submit(
            current_role=current_role(),
            organization_id=current_organization_id(),
            employee_id=current_user_id(),
            work_date=_parse_date(data.get("work_date") or ""),
            start_time=data.get("start_time", ""),
            end_time=data.get("end_time", ""),
            note=data.get("note", ""),
        )
        return jsonify({"shift_id": shift_id}), 201

    @app.route("/shifts/<int:shift_id>", methods=["PUT"], endpoint="update_shift")
    @part_time_required
    def update_shift(shift_id: int):
        data = _body()
        shift = container.shift_service.update(
            current_role=current_role(),
            employee_id=current_user_id(),
            shift_id=shift_id,
            work_date=_parse_date(data.get("work_date") or ""),
            start_time=data.get("start_time", ""),
            end_time=data.get("end_time", ""),
            note=data.get("note", ""),
        )
        return jsonify(shift_to_dict(shift))

    @app.route("/shifts/<int:shift_id>", methods=["DELETE"], endpoint="delete_shift")
    @part_time_required
    def delete_shift(shift_id: int):
        container.shift_service.delete(
            current_role=current_role(),
            employee_id=current_user_id(),
            shift_id=shift_id,
        )
        return "", 204

    @app.route("/shifts/<int:shift_id>/approve", methods=["POST"], endpoint="approve_shift")
    @manager_required
    def approve_shift(shift_id: int):
        shift = container.shift_service.approve(
            current_role=current_role(),
            organization_id=current_organization_id(),
            manager_id=current_user_id(),
            shift_id=shift_id,
        )
        return jsonify(shift_to_dict(shift))

    @app.route("/shifts/<int:shift_id>/reject", methods=["POST"], endpoint="reject_shift")
    @manager_required
    def reject_shift(shift_id: int):
        shift = container.shift_service.reject(
            current_role=current_role(),
            organization_id=current_organization_id(),
            manager_id=current_user_id(),
            shift_id=shift_id,
            reason=_body().get("reason", ""),
        )
        return jsonify(shift_to_dict(shift))

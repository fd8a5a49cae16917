from __future__ import annotations

from decimal import Decimal

from flask import Flask, jsonify, request

from ..common.guards import current_organization_id, current_role, login_required, manager_required
from ..container import Container
from ..members.model import Member
from .model import Organization
from .service import pay_settings_to_mapping


def _organization_to_dict(org: Organization) -> dict:
    data = {}
    for key, value in pay_settings_to_mapping(org.pay_settings).items():
        data[key] = str(value) if isinstance(value, Decimal) else value
    data.update(
        {
            "organization_id": org.organization_id,
            "name": org.name,
            "shift_submission_enforced": org.submission.enforced,
            "shift_submission_min_days_before": org.submission.min_days_before,
        }
    )
    return data


def _member_to_dict(m: Member) -> dict:
    o = m.override
    return {
        "user_id": m.user_id,
        "display_name": m.display_name,
        "hourly_wage": str(o.hourly_wage) if o.hourly_wage is not None else None,
        "transport_allowance_per_shift": (
            str(o.transport_allowance_per_shift) if o.transport_allowance_per_shift is not None else None
        ),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/organization/settings", methods=["GET"], endpoint="organization_settings")
    @login_required
    def organization_settings():
        org = container.settings_service.get_settings(current_organization_id())
        return jsonify(_organization_to_dict(org))

    @app.route("/organization/settings", methods=["PUT"], endpoint="update_organization_settings")
    @manager_required
    def update_organization_settings():
        org = container.settings_service.update_settings(
            current_role=current_role(),
            organization_id=current_organization_id(),
            data=request.get_json(silent=True) or {},
        )
        return jsonify(_organization_to_dict(org))

    @app.route("/organization/members", methods=["GET"], endpoint="organization_members")
    @manager_required
    def organization_members():
        members = container.member_service.list_members(organization_id=current_organization_id())
        return jsonify([_member_to_dict(m) for m in members])

    @app.route("/organization/members/<int:user_id>", methods=["PUT"], endpoint="update_member")
    @manager_required
    def update_member(user_id: int):
        data = request.get_json(silent=True) or {}
        member = container.member_service.update_override(
            current_role=current_role(),
            organization_id=current_organization_id(),
            user_id=user_id,
            hourly_wage=data.get("hourly_wage"),
            transport_allowance_per_shift=data.get("transport_allowance_per_shift"),
        )
        return jsonify(_member_to_dict(member))

from __future__ import annotations

from flask import Flask, jsonify

from ..api.security import current_user, int_arg, json_body, make_login_required
from ..container import Container
from ..users.model import Account, Staff
from .model import ODRequest
from .service import ODRequestForm
from .workflow import can_approve


def _to_json(req: ODRequest, actor: Account) -> dict:
    out = req.to_dict()
    if isinstance(actor, Staff):
        out["canApprove"] = can_approve(req, actor)
    return out


def register(app: Flask, container: Container) -> None:
    login_required = make_login_required(container)

    @app.route("/od-requests", methods=["GET"], endpoint="list_od_requests")
    @login_required
    def list_od_requests():
        actor = current_user()
        items = container.od_request_service.list_requests(actor, student_id=int_arg("studentId"))
        return jsonify([_to_json(r, actor) for r in items])

    @app.route("/od-requests", methods=["POST"], endpoint="submit_od_request")
    @login_required
    def submit_od_request():
        actor = current_user()
        created = container.od_request_service.submit(actor, ODRequestForm.from_mapping(json_body()))
        return jsonify(_to_json(created, actor)), 201

    @app.route("/od-requests/counts", methods=["GET"], endpoint="od_request_counts")
    @login_required
    def od_request_counts():
        return jsonify(container.od_request_service.status_counts(current_user()))

    @app.route("/od-requests/<int:request_id>", methods=["GET"], endpoint="get_od_request")
    @login_required
    def get_od_request(request_id: int):
        actor = current_user()
        return jsonify(_to_json(container.od_request_service.get_request(actor, request_id), actor))

    @app.route("/od-requests/<int:request_id>/approve", methods=["POST"], endpoint="approve_od_request")
    @login_required
    def approve_od_request(request_id: int):
        actor = current_user()
        data = json_body()
        updated = container.od_request_service.approve(
            actor,
            request_id,
            data.get("comments"),
            approver_role=data.get("approverRole"),
        )
        return jsonify(_to_json(updated, actor))

    @app.route("/od-requests/<int:request_id>/reject", methods=["POST"], endpoint="reject_od_request")
    @login_required
    def reject_od_request(request_id: int):
        actor = current_user()
        data = json_body()
        updated = container.od_request_service.reject(
            actor,
            request_id,
            data.get("comments"),
            approver_role=data.get("approverRole"),
        )
        return jsonify(_to_json(updated, actor))

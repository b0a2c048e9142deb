from __future__ import annotations

from flask import Flask, jsonify, request

from ..api.security import current_user, json_body, make_login_required
from ..container import Container
from .service import EventForm


def register(app: Flask, container: Container) -> None:
    login_required = make_login_required(container)

    @app.route("/events", methods=["GET"], endpoint="list_events")
    @login_required
    def list_events():
        events = container.event_service.list_events(department=request.args.get("department"))
        return jsonify([e.to_dict() for e in events])

    @app.route("/events", methods=["POST"], endpoint="create_event")
    @login_required
    def create_event():
        event = container.event_service.create_event(current_user(), EventForm.from_mapping(json_body()))
        return jsonify(event.to_dict()), 201

    @app.route("/events/summary", methods=["GET"], endpoint="events_summary")
    @login_required
    def events_summary():
        return jsonify(container.event_service.summary(department=request.args.get("department") or None))

    @app.route("/events/<int:event_id>", methods=["GET"], endpoint="get_event")
    @login_required
    def get_event(event_id: int):
        return jsonify(container.event_service.get_event(event_id).to_dict())

    @app.route("/events/<int:event_id>", methods=["PUT"], endpoint="update_event")
    @login_required
    def update_event(event_id: int):
        event = container.event_service.update_event(current_user(), event_id, EventForm.from_mapping(json_body()))
        return jsonify(event.to_dict())

    @app.route("/events/<int:event_id>", methods=["DELETE"], endpoint="delete_event")
    @login_required
    def delete_event(event_id: int):
        container.event_service.delete_event(current_user(), event_id)
        return "", 204

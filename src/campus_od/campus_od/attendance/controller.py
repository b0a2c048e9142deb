from __future__ import annotations

from flask import Flask, jsonify, request

from ..api.security import current_user, int_arg, make_login_required
from ..container import Container
from ..core.constants import DEFAULT_TOP_STUDENTS


def register(app: Flask, container: Container) -> None:
    login_required = make_login_required(container)

    @app.route("/students/me/attendance", methods=["GET"], endpoint="my_attendance")
    @login_required
    def my_attendance():
        return jsonify(container.attendance_service.my_summary(current_user()))

    @app.route("/staff/top-students", methods=["GET"], endpoint="top_students")
    @login_required
    def top_students():
        limit = int_arg("limit") or DEFAULT_TOP_STUDENTS
        students = container.attendance_service.top_students(
            current_user(),
            limit=limit,
            department=request.args.get("department") or None,
        )
        return jsonify([s.to_dict() for s in students])

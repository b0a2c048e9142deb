from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..api.security import current_user, json_body, make_login_required
from ..container import Container
from .service import SignupForm

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    login_required = make_login_required(container)

    @app.route("/auth/signup", methods=["POST"], endpoint="signup")
    def signup():
        result = container.auth_service.signup(SignupForm.from_mapping(json_body()))
        return jsonify(result.to_dict()), 201

    @app.route("/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        result = container.auth_service.login(str(data.get("email") or ""), str(data.get("password") or ""))
        logger.info("login user_id=%s", result.user.user_id)
        return jsonify(result.to_dict())

    @app.route("/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        user = container.user_service.get_profile(current_user().user_id)
        return jsonify({"user": user.to_dict()})

    @app.route("/auth/logout", methods=["POST"], endpoint="logout")
    @login_required
    def logout():
        # Tokens are stateless; the client drops its stored copy.
        logger.info("logout user_id=%s", current_user().user_id)
        return "", 204

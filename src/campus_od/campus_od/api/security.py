from __future__ import annotations

from functools import wraps
from typing import Any, Optional

from flask import g, request

from ..container import Container
from ..core.exceptions import AuthenticationError, ValidationError
from ..users.model import Account


def bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def make_login_required(container: Container):
    """Build a decorator that resolves the bearer token into `g.current_user`."""

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            token = bearer_token()
            if token is None:
                raise AuthenticationError("Missing session token")
            g.current_user = container.auth_service.resolve_token(token)
            return view(*args, **kwargs)

        return wrapper

    return login_required


def current_user() -> Account:
    return g.current_user


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def int_arg(name: str) -> Optional[int]:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer", fields={name: "Must be an integer"})

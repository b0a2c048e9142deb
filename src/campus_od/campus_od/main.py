from __future__ import annotations

import importlib
import logging
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .api import catalog, errors
from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .database.demo_data import seed_demo
from .events.controller import register as register_events
from .od_requests.controller import register as register_od_requests
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def _load_settings(overrides: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    settings_module = get_settings_module()
    module = importlib.import_module(settings_module)
    settings = {name: getattr(module, name) for name in dir(module) if name.isupper()}
    settings["SETTINGS_MODULE"] = settings_module
    settings.update(overrides or {})
    return settings


def create_app(settings_overrides: Optional[Mapping[str, Any]] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    settings = _load_settings(settings_overrides)

    logging.basicConfig(
        level=str(settings.get("LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = settings["SECRET_KEY"]
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.config["TESTING"] = bool(settings.get("TESTING", False))

    storage_backend = str(settings.get("STORAGE_BACKEND", "mysql"))
    db_config = settings.get("DB_CONFIG") or {}

    if storage_backend == "mysql":
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings["SETTINGS_MODULE"],
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if container is None and settings.get("AUTO_INIT_DB"):
            apply_schema(db_config)
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
    else:
        logger.info("settings=%s storage=%s", settings["SETTINGS_MODULE"], storage_backend)

    if container is None:
        container = build_container(
            secret_key=app.secret_key,
            storage_backend=storage_backend,
            db_config=db_config,
            token_max_age=settings.get("TOKEN_MAX_AGE"),
        )

    if settings.get("AUTO_SEED_DB"):
        seed_demo(container.users_repo, container.events_repo, container.od_requests_repo)
        logger.info("demo seed ready")

    app.extensions["campus_od"] = container

    errors.register(app)
    catalog.register(app)
    register_users(app, container)
    register_attendance(app, container)
    register_events(app, container)
    register_od_requests(app, container)

    return app

from __future__ import annotations

from flask import Flask, jsonify

from ..core.constants import (
    DEGREE_NAMES,
    DEPARTMENT_EVENTS,
    DEPARTMENTS,
    LEAVE_TYPE_LABELS,
    OD_CATEGORY_LABELS,
    OD_STATUS_LABELS,
    SHIFT_LABELS,
    STREAMS,
)


def _options(labels: dict) -> list[dict]:
    return [{"value": value, "label": label} for value, label in labels.items()]


def register(app: Flask) -> None:
    @app.route("/catalog", methods=["GET"], endpoint="catalog")
    def catalog():
        """Static choices used by the signup, event and OD request forms."""

        return jsonify(
            {
                "departments": DEPARTMENTS,
                "degreeNames": DEGREE_NAMES,
                "streams": STREAMS,
                "odTypes": _options(LEAVE_TYPE_LABELS),
                "odCategories": _options(OD_CATEGORY_LABELS),
                "odStatuses": _options(OD_STATUS_LABELS),
                "shifts": _options(SHIFT_LABELS),
                "departmentEvents": DEPARTMENT_EVENTS,
            }
        )

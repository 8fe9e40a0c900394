from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..common.validators import require_mapping, require_non_empty, require_positive_int
from ..core.constants import DEFAULT_PREPARED_BY, DEFAULT_SETTINGS_HISTORY_LIMIT
from ..core.exceptions import NotFoundError, SettingsConfigurationError, StorageError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"message": "Authentication required"}), 401
            return view(*args, **kwargs)

        return wrapper

    def _modified_by() -> str:
        return session.get("name") or DEFAULT_PREPARED_BY

    def _fail(e: Exception, action: str):
        if isinstance(e, (ValidationError, SettingsConfigurationError)):
            return jsonify({"message": str(e)}), 400
        if isinstance(e, NotFoundError):
            return jsonify({"message": str(e)}), 404
        if isinstance(e, StorageError):
            logger.exception("Storage failure while %s", action)
            return jsonify({"message": "Database error"}), 500
        logger.exception("Unexpected error while %s", action)
        return jsonify({"message": "Internal server error"}), 500

    @app.route("/api/salary/settings", methods=["GET"], endpoint="get_salary_settings")
    @login_required
    def get_salary_settings():
        try:
            return jsonify({"settings": container.settings_service.get_settings().to_dict()})
        except Exception as e:
            return _fail(e, "loading salary settings")

    @app.route("/api/salary/settings", methods=["POST"], endpoint="save_salary_settings")
    @login_required
    def save_salary_settings():
        try:
            body = require_mapping(request.get_json(silent=True), "body")
            if not body:
                raise ValidationError("settings body is required")
            saved = container.settings_service.save_settings(body, modified_by=_modified_by())
            return jsonify({"message": "Salary settings saved", "settings": saved.to_dict()})
        except Exception as e:
            return _fail(e, "saving salary settings")

    @app.route("/api/salary/settings/history", methods=["GET"], endpoint="salary_settings_history")
    @login_required
    def salary_settings_history():
        try:
            raw_limit = request.args.get("limit")
            limit = require_positive_int(raw_limit, "limit") if raw_limit else DEFAULT_SETTINGS_HISTORY_LIMIT
            versions = container.settings_service.list_versions(limit=limit)
            return jsonify({"versions": [v.to_dict() for v in versions]})
        except Exception as e:
            return _fail(e, "listing salary settings history")

    @app.route("/api/salary/settings/reset", methods=["POST"], endpoint="reset_salary_settings")
    @login_required
    def reset_salary_settings():
        try:
            saved = container.settings_service.reset_to_defaults(modified_by=_modified_by())
            return jsonify({"message": "Salary settings reset to defaults", "settings": saved.to_dict()})
        except Exception as e:
            return _fail(e, "resetting salary settings")

    @app.route("/api/salary/settings/<category>", methods=["GET"], endpoint="get_salary_settings_category")
    @login_required
    def get_salary_settings_category(category: str):
        try:
            return jsonify({"category": category, "settings": container.settings_service.get_category(category)})
        except Exception as e:
            return _fail(e, "loading salary settings category")

    @app.route("/api/salary/settings/<category>", methods=["PATCH"], endpoint="update_salary_settings_category")
    @login_required
    def update_salary_settings_category(category: str):
        try:
            partial = require_mapping(request.get_json(silent=True), "body")
            if not partial:
                raise ValidationError(f"{category} update body is required")
            saved = container.settings_service.update_category(category, partial, modified_by=_modified_by())
            return jsonify({"message": f"{category} settings updated", "settings": saved.to_dict()})
        except Exception as e:
            return _fail(e, "updating salary settings category")

    @app.route("/api/salary/calculate", methods=["POST"], endpoint="calculate_salary")
    @login_required
    def calculate_salary():
        try:
            body = require_mapping(request.get_json(silent=True), "body")
            employee_type = require_non_empty(body.get("employeeType"), "employeeType")
            result = container.preview_service.calculate(
                employee_type, require_mapping(body.get("employeeData"), "employeeData")
            )
            return jsonify({"result": result})
        except Exception as e:
            return _fail(e, "calculating salary")

from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..common.validators import require_int, require_mapping, require_positive_int
from ..core.constants import DEFAULT_PREPARED_BY, DEFAULT_SLIP_LIST_LIMIT
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

    def _period(source) -> tuple[int, int, int]:
        worker_id = require_int(source.get("workerId"), "workerId")
        month = require_int(source.get("month"), "month")
        year = require_int(source.get("year"), "year")
        return worker_id, month, year

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

    @app.route("/api/salary/slip", methods=["GET"], endpoint="get_salary_slip")
    @login_required
    def get_salary_slip():
        try:
            worker_id, month, year = _period(request.args)
            slip = container.slip_service.get_slip(worker_id, month, year)
            return jsonify({"slip": slip.to_dict()})
        except Exception as e:
            return _fail(e, "loading salary slip")

    @app.route("/api/salary/slip", methods=["POST"], endpoint="save_salary_slip")
    @login_required
    def save_salary_slip():
        try:
            body = require_mapping(request.get_json(silent=True), "body")
            worker_id, month, year = _period(body)
            slip = container.slip_service.save_slip(
                worker_id,
                month,
                year,
                manual_inputs=require_mapping(body.get("manualInputs"), "manualInputs"),
                status=body.get("status"),
                prepared_by=session.get("name") or DEFAULT_PREPARED_BY,
            )
            return jsonify({"message": "Salary slip saved", "slip": slip.to_dict()})
        except Exception as e:
            return _fail(e, "saving salary slip")

    @app.route("/api/salary/slips", methods=["GET"], endpoint="list_salary_slips")
    @login_required
    def list_salary_slips():
        try:
            month = require_int(request.args.get("month"), "month")
            year = require_int(request.args.get("year"), "year")
            raw_limit = request.args.get("limit")
            limit = require_positive_int(raw_limit, "limit") if raw_limit else DEFAULT_SLIP_LIST_LIMIT
            slips = container.slip_service.list_month(month, year, limit=limit)
            return jsonify({"slips": [s.to_dict() for s in slips]})
        except Exception as e:
            return _fail(e, "listing salary slips")

from __future__ import annotations

from types import SimpleNamespace

import pytest
from flask import Flask

from src.wash_payroll.wash_payroll.core.exceptions import StorageError
from src.wash_payroll.wash_payroll.settings.controller import register as register_settings
from src.wash_payroll.wash_payroll.slips.controller import register as register_slips


def _app(container) -> Flask:
    app = Flask(__name__)
    app.secret_key = "test-secret"
    app.config["TESTING"] = True
    register_settings(app, container)
    register_slips(app, container)
    return app


@pytest.fixture
def container(slip_service, settings_service, preview_service):
    return SimpleNamespace(
        slip_service=slip_service,
        settings_service=settings_service,
        preview_service=preview_service,
    )


@pytest.fixture
def client(container):
    client = _app(container).test_client()
    with client.session_transaction() as sess:
        sess["user_id"] = 1
        sess["name"] = "Mariam"
    return client


def test_routes_require_login(container):
    anonymous = _app(container).test_client()

    res = anonymous.get("/api/salary/settings")

    assert res.status_code == 401
    assert res.get_json()["message"] == "Authentication required"


def test_get_slip_returns_unsaved_preview(client):
    res = client.get("/api/salary/slip?workerId=1&month=0&year=2025")

    assert res.status_code == 200
    slip = res.get_json()["slip"]
    assert slip["status"] == "new_preview"
    assert slip["id"] is None
    assert slip["closingBalance"] == "257.75"


def test_get_slip_validates_parameters(client):
    res = client.get("/api/salary/slip?workerId=1&year=2025")

    assert res.status_code == 400
    assert "month" in res.get_json()["message"]


def test_get_slip_for_unknown_worker_is_404(client):
    res = client.get("/api/salary/slip?workerId=404&month=0&year=2025")

    assert res.status_code == 404


def test_save_slip_records_preparer(client, slips_repo):
    res = client.post(
        "/api/salary/slip",
        json={"workerId": 1, "month": 0, "year": 2025, "manualInputs": {"advance": 100}, "status": "finalized"},
    )

    assert res.status_code == 200
    slip = res.get_json()["slip"]
    assert slip["preparedBy"] == "Mariam"
    assert slip["status"] == "finalized"
    assert slip["closingBalance"] == "157.75"
    assert len(slips_repo.rows) == 1

    listed = client.get("/api/salary/slips?month=0&year=2025").get_json()["slips"]
    assert [s["workerId"] for s in listed] == [1]


def test_save_slip_rejects_bad_status(client):
    res = client.post("/api/salary/slip", json={"workerId": 1, "month": 0, "year": 2025, "status": "paid"})

    assert res.status_code == 400


def test_storage_failure_is_500(container):
    def broken(*args, **kwargs):
        raise StorageError("connection lost")

    container.slip_service = SimpleNamespace(get_slip=broken)
    client = _app(container).test_client()
    with client.session_transaction() as sess:
        sess["user_id"] = 1

    res = client.get("/api/salary/slip?workerId=1&month=0&year=2025")

    assert res.status_code == 500
    assert res.get_json()["message"] == "Database error"


def test_settings_category_roundtrip(client):
    res = client.patch("/api/salary/settings/mall", json={"fixedAllowance": 300})

    assert res.status_code == 200
    settings = res.get_json()["settings"]
    assert settings["mall"]["fixedAllowance"] == 300.0
    assert settings["lastModifiedBy"] == "Mariam"
    assert settings["version"] == 2

    block = client.get("/api/salary/settings/mall").get_json()["settings"]
    assert block["fixedAllowance"] == 300.0
    assert block["oneWashRate"] == 3.0


def test_unknown_settings_category_is_400(client):
    assert client.get("/api/salary/settings/bonus").status_code == 400
    assert client.patch("/api/salary/settings/bonus", json={"a": 1}).status_code == 400


def test_reset_and_history(client):
    client.patch("/api/salary/settings/etisalat", json={"monthlyBillCap": 70})
    reset = client.post("/api/salary/settings/reset")

    assert reset.status_code == 200
    assert reset.get_json()["settings"]["etisalat"]["monthlyBillCap"] == 52.5

    history = client.get("/api/salary/settings/history?limit=2").get_json()["versions"]
    assert [v["version"] for v in history] == [3, 2]
    assert [v["isActive"] for v in history] == [True, False]


def test_calculate_endpoint(client):
    res = client.post(
        "/api/salary/calculate",
        json={"employeeType": "carwash", "employeeData": {"totalCars": 1000, "location": "Marina Plaza"}},
    )

    assert res.status_code == 200
    assert res.get_json()["result"]["totalEarnings"] == 1600.0

    unknown = client.post("/api/salary/calculate", json={"employeeType": "driver", "employeeData": {}})
    assert unknown.status_code == 400
    assert "Unknown employee type" in unknown.get_json()["message"]


def test_empty_category_update_is_400_and_keeps_version(client, settings_service):
    res = client.patch("/api/salary/settings/mall", json={})

    assert res.status_code == 400
    assert "required" in res.get_json()["message"]
    assert [v.version for v in settings_service.list_versions(limit=5)] == [1]


def test_invalid_year_and_amount_are_400(client, slips_repo):
    assert client.get("/api/salary/slip?workerId=1&month=0&year=0").status_code == 400

    res = client.post(
        "/api/salary/slip",
        json={"workerId": 1, "month": 0, "year": 2025, "manualInputs": {"advance": "NaN"}},
    )

    assert res.status_code == 400
    assert "advance" in res.get_json()["message"]
    assert slips_repo.rows == {}

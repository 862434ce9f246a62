from __future__ import annotations

from datetime import date, datetime

import pytest
from fastapi.testclient import TestClient

from shiftpay.api.deps import get_store
from shiftpay.api.main import app
from shiftpay.models import GrossPay, HoursBreakdown, Job, PayFrequency, PaySchedule, Payslip, Shift
from shiftpay.storage import DataStore


@pytest.fixture
def store():
    store = DataStore()
    store.add_job(Job(id="a", name="Cafe", hourly_rate=10.0))
    store.add_pay_schedule(PaySchedule(id="w", job_id="a", frequency=PayFrequency.WEEKLY, start_date=date(2025, 1, 6)))
    store.add_shift(
        Shift(
            id="s1",
            job_id="a",
            date=date(2025, 1, 6),
            start_time=datetime(2025, 1, 6, 9, 0),
            end_time=datetime(2025, 1, 6, 17, 0),
            break_duration=0.5,
        )
    )
    store.add_payslip(
        Payslip(
            id="slip",
            job_id="a",
            pay_date=date(2025, 1, 13),
            period_start_date=date(2025, 1, 6),
            period_end_date=date(2025, 1, 12),
            hours=HoursBreakdown(regular=8),
            gross=GrossPay(regular=80),
            net_pay=80,
        )
    )
    return store


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_list_jobs(client):
    response = client.get("/jobs")

    assert response.status_code == 200
    assert response.json() == [{"id": "a", "name": "Cafe", "hourly_rate": 10.0, "color": "Blue", "is_active": True}]


def test_pay_periods(client):
    response = client.get("/jobs/a/pay-periods", params={"start": "2025-01-01", "end": "2025-01-31"})

    assert response.status_code == 200
    body = response.json()
    assert [p["start_date"] for p in body] == ["2025-01-06", "2025-01-13", "2025-01-20", "2025-01-27"]
    assert body[0] == {
        "id": "w:2025-01-06",
        "schedule_id": "w",
        "start_date": "2025-01-06",
        "end_date": "2025-01-12",
        "pay_date": "2025-01-13",
    }


def test_pay_periods_for_unknown_job(client):
    response = client.get("/jobs/ghost/pay-periods", params={"start": "2025-01-01", "end": "2025-01-31"})

    assert response.status_code == 404


def test_invalid_schedule_maps_to_422(client, store):
    store.pay_schedules["w"].frequency = PayFrequency.CUSTOM
    store.pay_schedules["w"].custom_day_interval = 0

    response = client.get("/jobs/a/next-pay-date")

    assert response.status_code == 422
    assert "custom interval must be positive" in response.json()["detail"]


def test_next_pay_date_and_upcoming(client):
    assert client.get("/jobs/a/next-pay-date", params={"from_date": "2025-01-15"}).json() == {
        "job_id": "a",
        "pay_date": "2025-01-20",
    }
    upcoming = client.get("/jobs/a/upcoming-pay-dates", params={"today": "2025-02-01", "count": 2})
    assert upcoming.json() == ["2025-02-10", "2025-02-17"]


def test_payslip_draft(client):
    response = client.get("/jobs/a/payslip-draft", params={"date": "2025-01-08"})

    assert response.status_code == 200
    body = response.json()
    assert body["pay_period_id"] == "w:2025-01-06"
    assert body["hours"]["regular"] == 7.5
    assert body["net_pay"] == 75.0
    assert body["is_valid"] is True


def test_payslip_draft_before_anchor(client):
    response = client.get("/jobs/a/payslip-draft", params={"date": "2024-12-01"})

    assert response.status_code == 404


def test_comparison(client):
    response = client.get("/payslips/slip/comparison")

    assert response.status_code == 200
    body = response.json()
    assert body["job_name"] == "Cafe"
    assert body["expected"]["total_hours"] == 7.5
    assert body["expected_shift_ids"] == ["s1"]
    assert body["hours_difference"] == 0.5
    assert body["hours_accuracy"] == pytest.approx(93.33, abs=0.01)


def test_comparison_with_deleted_job(client, store):
    del store.jobs["a"]

    body = client.get("/payslips/slip/comparison").json()

    assert body["job_name"] == "Unknown job"
    assert body["job_resolved"] is False
    assert body["expected"]["total_pay"] == 0
    assert body["pay_accuracy"] == 0


def test_comparison_for_unknown_payslip(client):
    response = client.get("/payslips/nope/comparison")

    assert response.status_code == 404
    assert response.json() == {"detail": "Payslip nope not found"}


def test_list_payslips_and_summary(client):
    assert [p["id"] for p in client.get("/payslips", params={"job_id": "a"}).json()] == ["slip"]

    summary = client.get("/summary", params={"start": "2025-01-01", "end": "2025-01-31"}).json()

    assert summary["shift_count"] == 1
    assert summary["total_earnings"] == 75.0
    assert summary["jobs"] == [{"job_id": "a", "job_name": "Cafe", "hours": 7.5, "earnings": 75.0}]


def test_export_then_import(client, store):
    exported = client.get("/data/export").json()
    exported["theme_color"] = "Green"
    exported["jobs"][0]["name"] = "Cafe North"

    response = client.post("/data/import", json=exported)

    assert response.status_code == 200
    assert response.json() == {"jobs": 1, "shifts": 1}
    assert store.theme_color == "Green"
    assert store.require_job("a").name == "Cafe North"


def test_import_rejects_bad_document(client):
    response = client.post("/data/import", json={"jobs": []})

    assert response.status_code == 400


def test_import_with_invalid_shift_maps_to_422(client, store):
    exported = client.get("/data/export").json()
    exported["shifts"][0]["break_duration"] = 12.0

    response = client.post("/data/import", json=exported)

    assert response.status_code == 422
    assert "break is longer than the shift" in response.json()["detail"]
    assert store.require_job("a").name == "Cafe"


def test_list_shifts_with_filters(client, store):
    store.add_shift(
        Shift(
            id="s2",
            job_id="a",
            date=date(2025, 1, 20),
            start_time=datetime(2025, 1, 20, 9, 0),
            end_time=datetime(2025, 1, 20, 11, 0),
            is_paid=True,
        )
    )

    everything = client.get("/shifts").json()
    assert [s["id"] for s in everything] == ["s1", "s2"]
    assert everything[0]["hours"] == 7.5
    assert everything[0]["earnings"] == 75.0

    assert [s["id"] for s in client.get("/shifts", params={"is_paid": True}).json()] == ["s2"]
    assert [s["id"] for s in client.get("/shifts", params={"min_earnings": 50}).json()] == ["s1"]
    assert [s["id"] for s in client.get("/shifts", params={"job_id": ["b"]}).json()] == []
    week = client.get("/shifts", params={"window": "week", "today": "2025-01-22", "offset": -2}).json()
    assert [s["id"] for s in week] == ["s1"]


def test_list_shifts_rejects_inverted_range(client):
    response = client.get("/shifts", params={"start": "2025-02-01", "end": "2025-01-01"})

    assert response.status_code == 422

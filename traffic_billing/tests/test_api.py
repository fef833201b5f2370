from datetime import datetime, timedelta
from unittest.mock import patch


CITATION_BODY = {
    "license_number": "DL-12345678",
    "license_plate": "KCC-123K",
    "violation_code": "SPD10",
    "violation_date": "2026-03-02T09:00:00",
    "location": "Main St & 5th Ave",
    "notes": "Driver was speeding in school zone",
    "issued_at": "2026-03-02T10:00:00",
}


def create_citation(client, officer, **overrides):
    body = dict(CITATION_BODY, officer_id=officer.id, **overrides)
    return client.post("/api/v1/citations", json=body)


def test_issue_citation(client, officer):
    response = create_citation(client, officer)

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "success"
    assert body["data"]["status"] == "issued"
    assert body["data"]["actual_fine_amount"] == "1250.00"
    assert body["data"]["citation_number"].startswith("260302-")


def test_issue_citation_unknown_driver(client, officer):
    response = create_citation(client, officer, license_number="DL-00000000")

    assert response.status_code == 404
    assert response.json() == {
        "message": "Driver not found: DL-00000000",
        "status": "error",
        "error_code": "DriverNotFound",
    }


def test_issue_citation_inactive_officer(client, db, officer):
    officer.active_status = False
    db.commit()

    response = create_citation(client, officer)

    assert response.status_code == 422
    assert response.json()["error_code"] == "InactiveOfficer"


def test_payment_and_citation_detail(client, officer):
    number = create_citation(client, officer).json()["data"]["citation_number"]

    payment = client.post(f"/api/v1/citations/{number}/payments",
                          json={"amount": "500.00", "payment_method": "debit_card",
                                "paid_at": "2026-03-05T12:00:00"})
    assert payment.status_code == 201
    assert payment.json()["data"]["outstanding_amount"] == "750.00"

    detail = client.get(f"/api/v1/citations/{number}", params={"as_of": "2026-03-12"})
    assert detail.status_code == 200
    data = detail.json()["data"]
    assert data["total_paid"] == "500.00"
    assert data["days_since_issued"] == 10
    assert data["point_grants"][0]["points_added"] == 2
    assert data["payments"][0]["payment_method"] == "debit_card"


def test_overpayment_rejected(client, officer):
    number = create_citation(client, officer).json()["data"]["citation_number"]

    response = client.post(f"/api/v1/citations/{number}/payments",
                           json={"amount": "1300.00", "payment_method": "cash"})

    assert response.status_code == 422
    assert response.json()["error_code"] == "OverpaymentRejected"


def test_payment_for_unknown_citation(client):
    response = client.post("/api/v1/citations/000000-00000/payments",
                           json={"amount": "10.00", "payment_method": "cash"})

    assert response.status_code == 404
    assert response.json()["error_code"] == "CitationNotFound"


def test_non_positive_payment_fails_validation(client, officer):
    number = create_citation(client, officer).json()["data"]["citation_number"]

    response = client.post(f"/api/v1/citations/{number}/payments",
                           json={"amount": "0", "payment_method": "cash"})

    assert response.status_code == 422


def test_escalate_and_serve(client, officer):
    number = create_citation(client, officer).json()["data"]["citation_number"]

    early = client.post(f"/api/v1/citations/{number}/escalate", params={"as_of": "2026-04-01"})
    assert early.status_code == 200
    assert early.json()["message"] == "Citation not eligible for a warrant"

    escalated = client.post(f"/api/v1/citations/{number}/escalate", params={"as_of": "2026-06-10"})
    assert escalated.status_code == 201
    warrant = escalated.json()["data"]
    assert warrant["amount_due"] == "1250.00"

    served = client.post(f"/api/v1/warrants/{warrant['id']}/serve")
    assert served.status_code == 200
    assert served.json()["data"]["status"] == "served"

    again = client.post(f"/api/v1/warrants/{warrant['id']}/serve")
    assert again.status_code == 409
    assert again.json()["error_code"] == "InvalidWarrantState"


def test_warrant_sweep(client, officer):
    number = create_citation(client, officer).json()["data"]["citation_number"]

    response = client.post("/api/v1/warrants/sweep", params={"as_of": "2026-06-10"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["candidates"] == 1
    assert data["escalated"][0]["citation_number"] == number


def test_overdue_report(client, officer):
    number = create_citation(client, officer).json()["data"]["citation_number"]

    response = client.get("/api/v1/reports/overdue",
                          params={"min_days_overdue": 30, "as_of": "2026-04-11"})

    assert response.status_code == 200
    rows = response.json()["data"]
    assert len(rows) == 1
    assert rows[0]["citation_number"] == number
    assert rows[0]["days_overdue"] == 40
    assert rows[0]["driver_name"] == "John Muli"


def test_overdue_report_rejects_negative_days(client):
    response = client.get("/api/v1/reports/overdue", params={"min_days_overdue": -3})

    assert response.status_code == 422


def test_driver_points(client, officer):
    create_citation(client, officer)
    create_citation(client, officer, violation_code="DUI")

    response = client.get("/api/v1/drivers/DL-12345678/points", params={"as_of": "2026-05-01"})

    assert response.status_code == 200
    assert response.json()["data"]["total_points"] == 10


def test_health_reports_healthy_worker(client):
    with patch("traffic_billing.health.redis_client") as redis_client:
        redis_client.get.side_effect = lambda key: {
            "warrant_sweep_heartbeat": (datetime.utcnow() - timedelta(hours=2)).isoformat(),
        }.get(key)
        response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["worker_status"] == "healthy"


def test_health_reports_stale_worker(client):
    with patch("traffic_billing.health.redis_client") as redis_client, \
            patch("traffic_billing.health.send_slack_notification") as send_slack_notification:
        redis_client.get.side_effect = lambda key: {
            "warrant_sweep_heartbeat": (datetime.utcnow() - timedelta(days=2)).isoformat(),
        }.get(key)
        response = client.get("/api/v1/health")

    assert response.status_code == 500
    assert response.json()["detail"]["worker_status"] == "unhealthy"
    send_slack_notification.assert_called_once()
    redis_client.incr.assert_called_once_with("warrant_sweep_health_alert")


def test_malformed_reference_time(client):
    response = client.get("/api/v1/reports/overdue", params={"as_of": "not-a-date"})

    assert response.status_code == 422
    assert response.json()["error_code"] == "ConstraintViolation"


def test_overdue_report_huge_threshold(client, officer):
    create_citation(client, officer)

    response = client.get("/api/v1/reports/overdue", params={"min_days_overdue": 1000000})

    assert response.status_code == 200
    assert response.json()["data"] == []


def test_warrant_sweep_rejects_non_positive_limit(client):
    response = client.post("/api/v1/warrants/sweep", params={"limit": 0})

    assert response.status_code == 422

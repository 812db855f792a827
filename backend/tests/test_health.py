from services.metrics_service import metrics_service


def test_health_is_public(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    assert body["database"] == "connected"


def test_prometheus_metrics_exposed(client, auth_headers):
    client.post(
        "/api/v1/reports",
        json={"branch_name": "Bole", "atm_id": "ATM-1", "atm_status": "DOWN"},
        headers=auth_headers,
    )
    client.get("/api/v1/dashboard/summary", headers=auth_headers)

    response = client.get("/metrics")
    assert response.status_code == 200
    text = response.text
    assert 'atm_reports_submitted_total{status="DOWN"}' in text
    assert 'atm_status_count{status="DOWN"} 1.0' in text
    assert "http_requests_total" in text


def test_report_paths_are_normalized_for_metrics():
    assert (
        metrics_service._get_endpoint_name("/api/v1/reports/17")
        == "/api/v1/reports/{report_id}"
    )
    assert metrics_service._get_endpoint_name("/api/v1/reports") == "/api/v1/reports"

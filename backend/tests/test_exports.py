import csv
import io
from datetime import date, datetime, timedelta

from openpyxl import load_workbook

from models import Report
from services.dashboard_service import DashboardService
from services.export_service import export_service, title_from_key


def seed_reports(db_session):
    today = date.today()
    now = datetime.now()
    db_session.add_all(
        [
            Report(
                branch_name="Bole",
                atm_id="ATM-001",
                atm_status="DOWN",
                downtime_start=now - timedelta(minutes=130),
                downtime_end=now - timedelta(minutes=10),
                downtime_duration_hours=2.0,
                reason_for_downtime="HARD_FAULT",
                report_date=today,
                reporting_window="08:00-10:00",
            ),
            Report(
                branch_name="Piassa, Main",
                atm_id="ATM-002",
                atm_status="UP",
                report_date=today,
                reporting_window="10:00-12:00",
            ),
        ]
    )
    db_session.commit()


def test_reports_csv_export(client, auth_headers, db_session):
    seed_reports(db_session)

    response = client.get("/api/v1/reports/export/csv", headers=auth_headers)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert (
        response.headers["content-disposition"]
        == "attachment; filename=CBE_ATM_Report.csv"
    )

    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[0][:3] == ["Branch Name", "ATM ID", "ATM Status"]
    assert len(rows[0]) == 10
    # Latest window first; commas stay inside quoted cells
    assert rows[1][0] == "Piassa, Main"
    assert rows[1][3] == ""
    assert rows[2][1] == "ATM-001"
    assert rows[2][5] == "2.0"
    assert rows[2][6] == "HARD_FAULT"


def test_reports_xlsx_export(client, auth_headers, db_session):
    seed_reports(db_session)

    response = client.get("/api/v1/reports/export/xlsx", headers=auth_headers)
    assert response.status_code == 200
    assert (
        response.headers["content-disposition"]
        == "attachment; filename=CBE_ATM_Report.xlsx"
    )

    wb = load_workbook(io.BytesIO(response.content))
    ws = wb["ATM Report"]
    header = [cell.value for cell in ws[1]]
    assert header == [
        "Branch Name",
        "ATM ID",
        "ATM Status",
        "Reason",
        "Report Date",
        "Window",
        "Created At",
    ]
    assert ws.max_row == 3
    assert {ws.cell(row=r, column=2).value for r in (2, 3)} == {"ATM-001", "ATM-002"}


def test_dashboard_xlsx_export(client, auth_headers, db_session):
    seed_reports(db_session)

    response = client.get("/api/v1/dashboard/export/xlsx", headers=auth_headers)
    assert response.status_code == 200
    assert (
        response.headers["content-disposition"]
        == "attachment; filename=ATM_Dashboard.xlsx"
    )

    wb = load_workbook(io.BytesIO(response.content))
    assert wb.sheetnames == [
        "Dashboard Export",
        "Summary",
        "Faults",
        "SLA Breaches",
        "Branches",
    ]
    assert wb["Dashboard Export"].max_row == 3

    breaches = wb["SLA Breaches"]
    assert breaches.max_row == 2
    assert breaches.cell(row=2, column=1).value == "ATM-001"
    assert breaches.cell(row=2, column=4).value == 120
    assert breaches.cell(row=2, column=6).value == "HIGH"

    branches = {row[0]: row for row in wb["Branches"].iter_rows(min_row=2, values_only=True)}
    assert branches["Bole"] == ("Bole", 0, 1, 0, 1, 1, 9)
    assert branches["Piassa, Main"] == ("Piassa, Main", 1, 0, 0, 0, 0, 0)


def test_dashboard_pdf_export(client, auth_headers, db_session):
    seed_reports(db_session)

    response = client.get("/api/v1/dashboard/export/pdf", headers=auth_headers)
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert (
        response.headers["content-disposition"]
        == f"attachment; filename=ATM_Dashboard_{date.today().isoformat()}.pdf"
    )
    assert response.content.startswith(b"%PDF")


def test_pdf_renders_without_breaches():
    summary = DashboardService(sla_threshold_minutes=30).build_summary([])
    assert export_service.dashboard_to_pdf(summary).startswith(b"%PDF")


def test_exports_require_token(client):
    assert client.get("/api/v1/reports/export/csv").status_code == 401
    assert client.get("/api/v1/dashboard/export/xlsx").status_code == 401


def test_title_from_key():
    assert title_from_key("APP_OUT_OF_SERVICE") == "App Out Of Service"

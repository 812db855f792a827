from datetime import date, datetime, timedelta

from models import Report
from services.dashboard_service import DashboardService

NOW = datetime(2026, 3, 14, 13, 30)


def make_report(branch="Bole", atm_id="ATM-001", status="UP", **kwargs):
    return Report(
        branch_name=branch,
        atm_id=atm_id,
        atm_status=status,
        report_date=date(2026, 3, 14),
        reporting_window="12:00-14:00",
        **kwargs,
    )


def down(branch="Bole", atm_id="ATM-002", reason=None, minutes_ago=None, minutes=None):
    start = NOW - timedelta(minutes=minutes_ago) if minutes_ago is not None else None
    end = start + timedelta(minutes=minutes) if start and minutes is not None else None
    return make_report(
        branch=branch,
        atm_id=atm_id,
        status="DOWN",
        reason_for_downtime=reason,
        downtime_start=start,
        downtime_end=end,
    )


def summarize(reports, threshold=30):
    return DashboardService(sla_threshold_minutes=threshold).build_summary(reports, NOW)


def test_status_counts():
    summary = summarize(
        [make_report(), make_report(status="PARKED"), down(), down(), make_report()]
    )
    assert summary["atmStatus"] == {"UP": 2, "DOWN": 2, "PARKED": 1}


def test_empty_day():
    summary = summarize([])
    assert summary["atmStatus"] == {"UP": 0, "DOWN": 0, "PARKED": 0}
    assert set(summary["faults"]) == {
        "LOST_COMM",
        "CASH_OUT",
        "HARD_FAULT",
        "IN_REPLENISHMENT",
        "APP_OUT_OF_SERVICE",
        "SWITCH_LOST_COMM",
    }
    assert all(v == 0 for v in summary["faults"].values())
    assert summary["sla"] == {"thresholdMinutes": 30, "breaches": []}
    assert summary["branches"] == []


def test_fault_categories_normalize_and_sum_spellings():
    summary = summarize(
        [
            down(reason="CASH_OUT"),
            down(reason="cash out"),
            down(reason="Lost Comm"),
            down(reason="lost communication"),
            down(reason=None),
        ]
    )
    assert summary["faults"]["CASH_OUT"] == 2
    assert summary["faults"]["LOST_COMM"] == 1
    assert "LOST_COMMUNICATION" not in summary["faults"]
    # Uncategorized reasons still count as DOWN
    assert summary["atmStatus"]["DOWN"] == 5


def test_fault_categories_ignore_non_down_reports():
    summary = summarize([make_report(status="UP", reason_for_downtime="CASH_OUT")])
    assert summary["faults"]["CASH_OUT"] == 0


def test_open_breach_above_threshold():
    summary = summarize([down(atm_id="ATM-9", reason="lost comm", minutes_ago=50)])

    [breach] = summary["sla"]["breaches"]
    assert breach["atmId"] == "ATM-9"
    assert breach["branch"] == "Bole"
    assert breach["issue"] == "lost comm"
    assert breach["downMinutes"] == 50
    assert breach["since"] == NOW - timedelta(minutes=50)
    assert breach["severity"] == "LOW"


def test_open_period_below_configured_threshold_is_not_a_breach():
    summary = summarize([down(minutes_ago=50)], threshold=60)
    assert summary["sla"]["breaches"] == []
    assert summary["sla"]["thresholdMinutes"] == 60


def test_period_exactly_at_threshold_is_excluded():
    summary = summarize([down(minutes_ago=200, minutes=30), down(minutes_ago=200, minutes=31)])
    assert [b["downMinutes"] for b in summary["sla"]["breaches"]] == [31]


def test_closed_period_uses_end_time():
    summary = summarize([down(minutes_ago=300, minutes=90)])
    [breach] = summary["sla"]["breaches"]
    assert breach["downMinutes"] == 90
    assert breach["severity"] == "MEDIUM"


def test_breach_severity_tiers():
    summary = summarize(
        [down(minutes_ago=59), down(minutes_ago=60), down(minutes_ago=119), down(minutes_ago=120)]
    )
    assert [b["severity"] for b in summary["sla"]["breaches"]] == [
        "LOW",
        "MEDIUM",
        "MEDIUM",
        "HIGH",
    ]


def test_down_without_start_is_never_a_breach():
    assert summarize([down(minutes_ago=None)])["sla"]["breaches"] == []


def test_branch_heat_entries():
    summary = summarize(
        [
            make_report(branch="Piassa"),
            down(branch="Piassa", minutes_ago=150),
            down(branch="Piassa", minutes_ago=10),
            make_report(branch="Bole", status="PARKED"),
            make_report(branch="Bole"),
        ]
    )

    assert summary["branches"] == [
        {
            "branch": "Bole",
            "up": 1,
            "down": 0,
            "parked": 1,
            "faults": 0,
            "slaBreaches": 0,
            "heatScore": 0,
        },
        {
            "branch": "Piassa",
            "up": 1,
            "down": 2,
            "parked": 0,
            "faults": 2,
            "slaBreaches": 1,
            "heatScore": 1 * 5 + 2 * 3 + 2,
        },
    ]


def test_generated_at_is_the_summary_clock():
    assert summarize([])["generatedAt"] == NOW

"""
Report and dashboard exports
Renders report rows and the dashboard summary as CSV, XLSX and PDF documents
"""

import csv
import io
import logging
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from const import (
    DASHBOARD_XLSX_COLUMNS,
    FAULT_CATEGORIES,
    PDF_MAX_BREACHES,
    REPORT_CSV_COLUMNS,
    REPORT_XLSX_COLUMNS,
)
from models import Report
from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

logger = logging.getLogger(__name__)

CSV_MEDIA_TYPE = "text/csv"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PDF_MEDIA_TYPE = "application/pdf"

HEADER_COLOR = colors.HexColor("#1a5276")


def title_from_key(key: str) -> str:
    """LOST_COMM -> Lost Comm"""
    return str(key or "").replace("_", " ").title()


def _csv_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.isoformat(sep=" ")
    return str(value)


class ExportService:
    """Serializes reports and dashboard summaries for download"""

    def reports_to_csv(self, reports: Iterable[Report]) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow([header for header, _ in REPORT_CSV_COLUMNS])
        for report in reports:
            writer.writerow(
                [_csv_value(getattr(report, attr)) for _, attr in REPORT_CSV_COLUMNS]
            )
        return buffer.getvalue()

    def reports_to_xlsx(self, reports: Iterable[Report]) -> bytes:
        wb = Workbook()
        ws = wb.active
        ws.title = "ATM Report"
        self._write_rows(ws, REPORT_XLSX_COLUMNS, reports)
        return self._save(wb)

    def dashboard_to_xlsx(
        self, reports: Iterable[Report], summary: Dict[str, Any]
    ) -> bytes:
        """Report rows followed by the summary, faults, breaches and branches sheets"""
        wb = Workbook()
        ws = wb.active
        ws.title = "Dashboard Export"
        self._write_rows(ws, DASHBOARD_XLSX_COLUMNS, reports)

        self._write_table(
            wb.create_sheet("Summary"),
            ["Metric", "Value"],
            self._summary_rows(summary),
        )
        self._write_table(
            wb.create_sheet("Faults"),
            ["Fault Type", "Count"],
            [(FAULT_CATEGORIES.get(k, k), v) for k, v in summary["faults"].items()],
        )
        self._write_table(
            wb.create_sheet("SLA Breaches"),
            ["ATM ID", "Branch", "Issue", "Down (min)", "Since", "Severity"],
            [
                (
                    b["atmId"],
                    b["branch"],
                    b["issue"],
                    b["downMinutes"],
                    b["since"],
                    b["severity"],
                )
                for b in summary["sla"]["breaches"]
            ],
        )
        self._write_table(
            wb.create_sheet("Branches"),
            ["Branch", "UP", "DOWN", "PARKED", "Faults", "SLA Breaches", "Heat Score"],
            self._branch_rows(summary),
        )
        return self._save(wb)

    def dashboard_to_pdf(self, summary: Dict[str, Any]) -> bytes:
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=1.5 * cm,
            leftMargin=1.5 * cm,
            topMargin=1.5 * cm,
            bottomMargin=1.5 * cm,
            title="ATM Status Dashboard Report",
        )
        styles = getSampleStyleSheet()
        generated_at = summary.get("generatedAt") or datetime.now()

        elements = [
            Paragraph("ATM Status Dashboard Report", styles["Heading1"]),
            Paragraph(
                f"Generated: {generated_at.strftime('%Y-%m-%d %H:%M')}",
                styles["Normal"],
            ),
            Spacer(1, 0.4 * cm),
            self._pdf_table(
                ["Summary", "Value"],
                [(k, str(v)) for k, v in self._summary_rows(summary)],
            ),
            Spacer(1, 0.4 * cm),
            self._pdf_table(
                ["Fault Type", "Count"],
                [(title_from_key(k), str(v)) for k, v in summary["faults"].items()],
            ),
            Spacer(1, 0.4 * cm),
            self._pdf_table(
                ["Branch", "UP", "DOWN", "PARKED", "Faults", "SLA Breaches", "Heat"],
                [tuple(str(v) for v in row) for row in self._branch_rows(summary)],
            ),
        ]

        breaches = summary["sla"]["breaches"][:PDF_MAX_BREACHES]
        if breaches:
            elements.append(Spacer(1, 0.4 * cm))
            elements.append(
                self._pdf_table(
                    ["ATM ID", "Branch", "Issue", "Down(min)", "Since", "Severity"],
                    [
                        (
                            b["atmId"] or "-",
                            b["branch"] or "-",
                            title_from_key(b["issue"] or "-"),
                            str(b["downMinutes"]),
                            b["since"].strftime("%Y-%m-%d %H:%M"),
                            b["severity"],
                        )
                        for b in breaches
                    ],
                )
            )

        doc.build(elements)
        return buffer.getvalue()

    def _summary_rows(self, summary: Dict[str, Any]) -> List[Tuple[str, Any]]:
        status = summary["atmStatus"]
        return [
            ("UP", status.get("UP", 0)),
            ("DOWN", status.get("DOWN", 0)),
            ("PARKED", status.get("PARKED", 0)),
            ("SLA Threshold (minutes)", summary["sla"]["thresholdMinutes"]),
            ("SLA Breaches", len(summary["sla"]["breaches"])),
        ]

    def _branch_rows(self, summary: Dict[str, Any]) -> List[Tuple[Any, ...]]:
        return [
            (
                b["branch"],
                b["up"],
                b["down"],
                b["parked"],
                b["faults"],
                b["slaBreaches"],
                b["heatScore"],
            )
            for b in summary["branches"]
        ]

    def _write_rows(
        self,
        ws,
        columns: Sequence[Tuple[str, str, int]],
        reports: Iterable[Report],
    ):
        ws.append([header for header, _, _ in columns])
        for report in reports:
            ws.append([getattr(report, attr) for _, attr, _ in columns])
        for index, (_, _, width) in enumerate(columns, start=1):
            ws.column_dimensions[get_column_letter(index)].width = width
        for cell in ws[1]:
            cell.font = Font(bold=True)

    def _write_table(self, ws, headers: List[str], rows: Iterable[Sequence[Any]]):
        ws.append(headers)
        for row in rows:
            ws.append(list(row))
        for cell in ws[1]:
            cell.font = Font(bold=True)

    def _pdf_table(self, headers: List[str], rows: List[Sequence[str]]) -> Table:
        table = Table([headers] + [list(row) for row in rows], repeatRows=1)
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), HEADER_COLOR),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 8),
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                    ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.whitesmoke]),
                ]
            )
        )
        return table

    def _save(self, wb: Workbook) -> bytes:
        buffer = io.BytesIO()
        wb.save(buffer)
        return buffer.getvalue()


def attachment_headers(filename: str) -> Dict[str, str]:
    return {"Content-Disposition": f"attachment; filename={filename}"}


def dated_filename(prefix: str, extension: str, day: Optional[date] = None) -> str:
    day = day or date.today()
    return f"{prefix}_{day.isoformat()}.{extension}"


export_service = ExportService()

"""
Donation report exports.

XLSX is written with openpyxl, PDF with reportlab platypus (landscape A4).
Both take already-filtered rows and return the file bytes.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from io import BytesIO
from typing import List, Optional, Sequence

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from dpf_cms.core.models.io.donations import DonationRead, DonationReportSummary

from .donation_report import ReportFilters

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PDF_MEDIA_TYPE = "application/pdf"

EXCEL_HEADINGS = [
    "Donation Code",
    "Donor",
    "Email",
    "Phone",
    "Program",
    "Source",
    "Method",
    "Channel",
    "Status",
    "Amount",
    "Paid At",
    "Created At",
]

FORMAT_ALIASES = {"pdf": "pdf", "xlsx": "xlsx", "excel": "xlsx"}


@dataclass(frozen=True)
class ExportFile:
    content: bytes
    filename: str
    media_type: str


def resolve_format(value: Optional[str]) -> Optional[str]:
    """Map a requested export format to ``pdf`` or ``xlsx``; None when unsupported."""
    return FORMAT_ALIASES.get((value or "pdf").strip().lower())


def export_filename(generated_at: datetime, extension: str) -> str:
    return f"donation-report-{generated_at.strftime('%Y%m%d_%H%M%S')}.{extension}"


def format_rupiah(value: float) -> str:
    """Format an amount as ``Rp 1.234.567`` (no decimals, dot thousands separator)."""
    return "Rp " + f"{round(value or 0):,.0f}".replace(",", ".")


def format_count(value: int) -> str:
    return f"{value:,}".replace(",", ".")


def _fmt_dt(value: Optional[datetime], pattern: str = "%Y-%m-%d %H:%M") -> str:
    return value.strftime(pattern) if value else ""


def _code(row: DonationRead) -> str:
    return row.donation_code or f"#{row.id}"


def excel_row(row: DonationRead) -> list:
    return [
        _code(row),
        row.donor_name or "Anonymous",
        row.donor_email or "",
        row.donor_phone or "",
        row.program_title or "No program",
        row.payment_source or "-",
        row.payment_method or "-",
        row.payment_channel or "-",
        row.status or "-",
        float(row.amount),
        _fmt_dt(row.paid_at),
        _fmt_dt(row.created_at),
    ]


def build_xlsx(rows: Sequence[DonationRead]) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Donations"
    ws.append(EXCEL_HEADINGS)
    for cell in ws[1]:
        cell.font = Font(bold=True)
    for row in rows:
        ws.append(excel_row(row))

    for column in ws.columns:
        letter = get_column_letter(column[0].column)
        width = max(len(str(cell.value)) if cell.value is not None else 0 for cell in column)
        ws.column_dimensions[letter].width = min(width + 2, 60)

    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def build_pdf(
    rows: Sequence[DonationRead],
    summary: DonationReportSummary,
    filters: ReportFilters,
    generated_at: datetime,
) -> bytes:
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=landscape(A4),
        leftMargin=0.4 * inch,
        rightMargin=0.4 * inch,
        topMargin=0.4 * inch,
        bottomMargin=0.4 * inch,
        title="Donation Report",
    )
    styles = getSampleStyleSheet()
    story: List = [
        Paragraph("Donation Report", styles["Title"]),
        Paragraph(f"Generated: {generated_at.strftime('%d %b %Y %H:%M')}", styles["Normal"]),
        Spacer(1, 0.15 * inch),
    ]

    key_value_style = TableStyle(
        [
            ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#e5e7eb")),
            ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 9),
        ]
    )
    filter_table = Table(
        [
            ["Period", filters.period_label],
            ["Source", filters.source_label],
            ["Status", filters.status_label],
            ["Keyword", filters.q or "-"],
        ],
        colWidths=[1.8 * inch, 5 * inch],
        hAlign="LEFT",
    )
    filter_table.setStyle(key_value_style)
    summary_table = Table(
        [
            ["Total donations", f"{format_count(summary.total_count)} transactions"],
            ["Total amount", format_rupiah(summary.total_amount)],
            [
                "Manual",
                f"{format_count(summary.manual_count)} transactions - {format_rupiah(summary.manual_amount)}",
            ],
            [
                "Midtrans",
                f"{format_count(summary.midtrans_count)} transactions - {format_rupiah(summary.midtrans_amount)}",
            ],
        ],
        colWidths=[1.8 * inch, 5 * inch],
        hAlign="LEFT",
    )
    summary_table.setStyle(key_value_style)
    story += [filter_table, Spacer(1, 0.1 * inch), summary_table, Spacer(1, 0.2 * inch)]

    data = [["No", "Code", "Donor", "Program", "Source", "Status", "Amount", "Time"]]
    for index, row in enumerate(rows, start=1):
        data.append(
            [
                str(index),
                _code(row),
                row.donor_name or "Anonymous",
                row.program_title or "No program",
                row.payment_source or "-",
                row.status or "-",
                format_rupiah(row.amount),
                _fmt_dt(row.paid_at or row.created_at, "%d %b %Y %H:%M") or "-",
            ]
        )
    if not rows:
        data.append(["No donation data.", "", "", "", "", "", "", ""])

    table = Table(data, repeatRows=1, hAlign="LEFT")
    style = [
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#f9fafb")),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.HexColor("#6b7280")),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#e5e7eb")),
        ("ALIGN", (6, 1), (6, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
    ]
    if not rows:
        style.append(("SPAN", (0, 1), (-1, 1)))
    table.setStyle(TableStyle(style))
    story.append(table)

    doc.build(story)
    return buffer.getvalue()


def build_export(
    fmt: str,
    rows: Sequence[DonationRead],
    summary: DonationReportSummary,
    filters: ReportFilters,
    generated_at: datetime,
) -> ExportFile:
    """Render ``rows`` in the resolved format (``pdf`` or ``xlsx``)."""
    if fmt == "xlsx":
        return ExportFile(build_xlsx(rows), export_filename(generated_at, "xlsx"), XLSX_MEDIA_TYPE)
    return ExportFile(build_pdf(rows, summary, filters, generated_at), export_filename(generated_at, "pdf"), PDF_MEDIA_TYPE)

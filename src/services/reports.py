"""
Report utilities: German date formatting and the monthly Excel workbook.
"""

from datetime import date
from io import BytesIO
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from core.config import EXPORT_HEADERS, MONTH_NAMES_DE, SEPARATOR_WORD, WEEKDAY_ABBR_DE
from models.jobs import JobView, MonthView

# Excel sheet name limit
MAX_SHEET_NAME_LENGTH = 31
EMPTY_SHEET_TITLE = "Keine Einträge"


def format_month_title(d: date) -> str:
    """Format date as 'Januar 2024' (platform-safe, no locale needed)."""
    return f"{MONTH_NAMES_DE[d.month - 1]} {d.year}"


def format_job_date(d: date) -> str:
    """Format date as 'Fr., 05.01.2024'."""
    return f"{WEEKDAY_ABBR_DE[d.weekday()]}, {d.day:02d}.{d.month:02d}.{d.year}"


def format_interval_list(job: JobView) -> str:
    """'08:00 bis 12:00, 13:00 bis 17:30'"""
    return ", ".join(f"{i.start} {SEPARATOR_WORD} {i.end}" for i in job.intervals)


# =============================================================================
# EXCEL REPORT GENERATION
# =============================================================================


def write_excel_month_sheet(ws, month: MonthView):
    """
    Write one month to an Excel worksheet.

    Row 1: headers, then one row per job, then the month total.
    """
    for col_idx, header in enumerate(EXPORT_HEADERS, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = Font(bold=True)

    for row_idx, job in enumerate(month.jobs, start=2):
        row_data = [
            job.date_label,
            job.house_number or "",
            format_interval_list(job),
            job.total_label or "",
            job.overtime_label or "",
            job.travel_label or "",
            job.extras or "",
        ]
        for col_idx, value in enumerate(row_data, start=1):
            ws.cell(row=row_idx, column=col_idx, value=value)

    total_row = len(month.jobs) + 2
    ws.cell(row=total_row, column=1, value="Monatssumme").font = Font(bold=True)
    ws.cell(row=total_row, column=4, value=month.total_label or "").font = Font(bold=True)

    for col_idx, width in enumerate([18, 10, 40, 16, 16, 16, 40], start=1):
        ws.column_dimensions[get_column_letter(col_idx)].width = width


def build_overview_workbook(months: list[MonthView]) -> Workbook:
    """One sheet per month, in order."""
    wb = Workbook()
    ws = wb.active

    if not months:
        ws.title = EMPTY_SHEET_TITLE
        for col_idx, header in enumerate(EXPORT_HEADERS, start=1):
            ws.cell(row=1, column=col_idx, value=header).font = Font(bold=True)
        return wb

    for idx, month in enumerate(months):
        if idx > 0:
            ws = wb.create_sheet()
        ws.title = month.title[:MAX_SHEET_NAME_LENGTH]
        write_excel_month_sheet(ws, month)

    return wb


def overview_to_bytes(months: list[MonthView]) -> bytes:
    """Serialize the overview workbook for download."""
    buffer = BytesIO()
    build_overview_workbook(months).save(buffer)
    return buffer.getvalue()


def create_monthly_excel_report(months: list[MonthView], output_path: Path):
    """Write the overview workbook to disk."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    build_overview_workbook(months).save(str(output_path))
    print(f"Saved Excel report to: {output_path}")

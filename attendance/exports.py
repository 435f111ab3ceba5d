# ===========================================================
# attendance/exports.py
# ===========================================================
# Monthly attendance report as an Excel workbook (openpyxl) or a
# printable PDF (ReportLab). Both return a ready HttpResponse.
# ===========================================================

import io
import logging

from django.http import HttpResponse
from django.utils import timezone
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .services import summarize

logger = logging.getLogger("attendance")

HEADERS = ["Employee", "Department", "Date", "Check In", "Check Out", "Hours", "Status", "Notes"]
HEADER_COLOR = "1976D2"


def _fmt_time(value):
    return timezone.localtime(value).strftime("%H:%M") if value else "-"


def report_rows(records):
    for record in records:
        employee = record.employee
        yield [
            employee.full_name,
            employee.department.name if employee.department_id else "-",
            record.date.isoformat(),
            _fmt_time(record.check_in_time),
            _fmt_time(record.check_out_time),
            float(record.hours_worked) if record.hours_worked is not None else "",
            record.get_status_display(),
            record.notes or "",
        ]


def report_filename(month, department, extension):
    scope = department.name.replace(" ", "_") if department else "All"
    return f"Attendance_{scope}_{month:%Y_%m}.{extension}"


# ===========================================================
# Excel Export
# ===========================================================
def generate_excel_report(records, month, department=None):
    wb = Workbook()
    ws = wb.active
    ws.title = f"Attendance {month:%Y-%m}"
    ws.append(HEADERS)

    header_fill = PatternFill(start_color=HEADER_COLOR, end_color=HEADER_COLOR, fill_type="solid")
    for col in range(1, len(HEADERS) + 1):
        cell = ws.cell(row=1, column=col)
        cell.font = Font(bold=True, color="FFFFFF")
        cell.alignment = Alignment(horizontal="center", vertical="center")
        cell.fill = header_fill

    records = list(records)
    for row in report_rows(records):
        ws.append(row)

    totals = summarize(records)
    ws.append([])
    ws.append(["Total hours", "", "", "", "", float(totals["hours_worked"])])
    ws.cell(row=ws.max_row, column=1).font = Font(bold=True)

    # Auto-adjust column widths
    for column in ws.columns:
        longest = max((len(str(cell.value)) for cell in column if cell.value is not None), default=0)
        ws.column_dimensions[column[0].column_letter].width = min(max(longest + 2, 10), 50)

    response = HttpResponse(
        content_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    response["Content-Disposition"] = f'attachment; filename="{report_filename(month, department, "xlsx")}"'
    wb.save(response)

    logger.info(f"Excel attendance export generated: {len(records)} records for {month:%Y-%m}")
    return response


# ===========================================================
# PDF Export
# ===========================================================
def generate_pdf_report(records, month, department=None):
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=landscape(A4),
        title=f"Attendance Report {month:%Y-%m}",
        leftMargin=36,
        rightMargin=36,
        topMargin=36,
        bottomMargin=36,
    )

    styles = getSampleStyleSheet()
    story = [
        Paragraph("<b>Monthly Attendance Report</b>", styles["Title"]),
        Spacer(1, 12),
        Paragraph(f"<b>Month:</b> {month:%B %Y}", styles["Normal"]),
        Paragraph(f"<b>Department:</b> {department.name if department else 'All departments'}", styles["Normal"]),
        Paragraph(f"<b>Generated on:</b> {timezone.localtime():%d %b %Y, %H:%M}", styles["Normal"]),
        Spacer(1, 12),
    ]

    records = list(records)
    if not records:
        story.append(Paragraph("<i>No attendance records for this period.</i>", styles["Normal"]))
    else:
        totals = summarize(records)
        story.append(Paragraph(
            " | ".join(f"<b>{status}:</b> {count}" for status, count in totals.items() if status != "hours_worked")
            + f" | <b>Hours:</b> {totals['hours_worked']}",
            styles["Normal"],
        ))
        story.append(Spacer(1, 12))

        data = [HEADERS]
        for row in report_rows(records):
            row[-1] = row[-1][:40] + ("..." if len(row[-1]) > 40 else "")
            data.append([str(value) for value in row])

        table = Table(data, repeatRows=1, colWidths=[120, 100, 70, 60, 60, 50, 60, 200])
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor(f"#{HEADER_COLOR}")),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 9),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#F5F5F5")]),
            ("TOPPADDING", (0, 0), (-1, -1), 6),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
        ]))
        story.append(table)

    doc.build(story)
    buffer.seek(0)

    response = HttpResponse(buffer, content_type="application/pdf")
    response["Content-Disposition"] = f'attachment; filename="{report_filename(month, department, "pdf")}"'
    logger.info(f"PDF attendance export generated: {len(records)} records for {month:%Y-%m}")
    return response

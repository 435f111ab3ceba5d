# ===========================================================
# attendance/views_pages.py
# Server-rendered attendance pages
# ===========================================================

import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.paginator import Paginator
from django.shortcuts import redirect, render
from django.utils import timezone
from django.views.decorators.http import require_POST

from employee.models import Department
from ems_backend.exceptions import DomainError
from users.decorators import manager_required
from .exports import generate_excel_report, generate_pdf_report
from .forms import AttendanceFilterForm, CheckInForm, MarkAttendanceForm, ReportFilterForm
from . import services

logger = logging.getLogger("attendance")


@login_required
def attendance_index(request):
    user = request.user
    form = AttendanceFilterForm(request.GET or None)
    filters = {}
    if form.is_valid():
        data = form.cleaned_data
        filters = {
            "start_date": data.get("start_date"),
            "end_date": data.get("end_date"),
            "employee_id": data["employee_id"].id if data.get("employee_id") and user.is_manager_or_admin() else None,
        }

    records = services.records_for(user, **filters)
    page = Paginator(records, 31).get_page(request.GET.get("page"))
    return render(request, "attendance/index.html", {
        "page_obj": page,
        "filter_form": form,
        "heatmap": services.heatmap(user),
        "today_record": services.today_record(user.employee),
        "is_manager": user.is_manager_or_admin(),
        "is_admin": user.is_admin(),
    })


@login_required
def attendance_check_in(request):
    if request.user.is_admin():
        messages.error(request, "Administrators are not required to check in.")
        return redirect("attendance:index")

    form = CheckInForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        try:
            attendance = services.check_in(request.user, form.cleaned_data.get("notes", ""))
        except DomainError as e:
            messages.error(request, e.message)
        else:
            messages.success(request, f"Checked in at {timezone.localtime(attendance.check_in_time):%H:%M} ({attendance.status}).")
        return redirect("attendance:index")

    return render(request, "attendance/check_in.html", {
        "form": form,
        "today_record": services.today_record(request.user.employee),
    })


@login_required
@require_POST
def attendance_check_out(request, pk):
    try:
        attendance = services.check_out(request.user, pk)
    except DomainError as e:
        messages.error(request, e.message)
    else:
        messages.success(request, f"Checked out. Hours worked: {attendance.hours_worked}.")
    return redirect("attendance:index")


@manager_required
def attendance_mark(request):
    form = MarkAttendanceForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        data = form.cleaned_data
        try:
            services.mark(request.user, data["employee"], data["date"], data["status"], data.get("notes", ""))
        except DomainError as e:
            form.add_error(None, e.message)
        else:
            messages.success(request, f"{data['employee'].full_name} marked {data['status']} on {data['date']}.")
            return redirect("attendance:index")
    return render(request, "attendance/mark.html", {"form": form})


@manager_required
def attendance_reports(request):
    form = ReportFilterForm(request.GET or None)
    month_value, department = None, None
    if form.is_valid():
        month_value = form.cleaned_data.get("month") or None
        department = form.cleaned_data.get("department_id")

    try:
        month, records = services.monthly_report(month_value, department.id if department else None)
    except DomainError as e:
        messages.error(request, e.message)
        return redirect("attendance:reports")

    export = request.GET.get("export", "").lower()
    if export == "xlsx":
        return generate_excel_report(records, month, department)
    if export == "pdf":
        return generate_pdf_report(records, month, department)

    records = list(records)
    return render(request, "attendance/reports.html", {
        "form": form,
        "records": records,
        "totals": services.summarize(records),
        "month": month,
        "department": department,
        "departments": Department.objects.order_by("name"),
    })

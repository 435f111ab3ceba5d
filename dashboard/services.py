# ===========================================================
# dashboard/services.py
# ===========================================================
# Aggregates shown on the landing page and the dashboard API.
# ===========================================================

from datetime import timedelta

from django.db.models import Count, Q
from django.utils import timezone

from attendance.models import Attendance, AttendanceStatus
from employee.models import Department, Employee
from ems_backend.conf import ems_setting
from leave.models import LeaveRequest, LeaveStatus
from leave.services import visible_requests
from notifications.service import NotificationService


def page_stats(user, today=None):
    """Cards on the dashboard page; the pending count follows leave visibility."""
    today = today or timezone.localdate()
    return {
        "total_employees": Employee.objects.active().count(),
        "total_departments": Department.objects.count(),
        "pending_leaves": NotificationService.pending_leave_count(user),
        "today_attendance": Attendance.objects.worked().filter(date=today).count(),
    }


def api_stats(today=None):
    today = today or timezone.localdate()
    return {
        "total_employees": Employee.objects.active().count(),
        "total_departments": Department.objects.count(),
        "pending_leaves": LeaveRequest.objects.filter(status=LeaveStatus.PENDING).count(),
        "checked_in_today": Attendance.objects.filter(
            date=today, check_in_time__isnull=False, check_out_time__isnull=True
        ).count(),
        "present_today": Attendance.objects.filter(date=today, status=AttendanceStatus.PRESENT).count(),
        "late_today": Attendance.objects.filter(date=today, status=AttendanceStatus.LATE).count(),
    }


def recent_leave_requests(user, limit=5):
    return visible_requests(user).order_by("-created_at")[:limit]


def department_distribution():
    rows = Department.objects.annotate(
        active_employees=Count("employees", filter=Q(employees__is_active=True))
    ).order_by("name")
    return [
        {"department_id": d.id, "department": d.name, "count": d.active_employees}
        for d in rows
    ]


def recent_attendance(employee, limit=7):
    if employee is None:
        return Attendance.objects.none()
    return Attendance.objects.filter(employee=employee).order_by("-date")[:limit]


def attendance_trend(today=None, days=None):
    """Per-day Present/Late counts over the last ``days`` days, zero-filled."""
    today = today or timezone.localdate()
    days = days or ems_setting("TREND_DAYS")
    since = today - timedelta(days=days - 1)

    rows = (
        Attendance.objects.filter(date__gte=since, date__lte=today)
        .values("date")
        .annotate(
            present=Count("id", filter=Q(status=AttendanceStatus.PRESENT)),
            late=Count("id", filter=Q(status=AttendanceStatus.LATE)),
            absent=Count("id", filter=Q(status=AttendanceStatus.ABSENT)),
        )
    )
    by_day = {row["date"]: row for row in rows}

    trend = []
    for offset in range(days):
        day = since + timedelta(days=offset)
        row = by_day.get(day, {})
        trend.append({
            "date": day.isoformat(),
            "present": row.get("present", 0),
            "late": row.get("late", 0),
            "absent": row.get("absent", 0),
        })
    return trend

# ===========================================================
# attendance/services.py
# ===========================================================
"""
Daily attendance state tracking.

A record moves through: (none) -> checked in (Present/Late) -> checked
out (hours worked). Managers may also mark a day directly as Absent,
OnLeave or Holiday, or correct a status.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
import logging

from django.db import IntegrityError, transaction
from django.db.models import Count
from django.utils import timezone

from employee.models import Employee
from ems_backend.conf import ems_setting
from ems_backend.exceptions import AccessDenied, NotFoundError, RuleViolation
from notifications.signals import attendance_recorded
from .models import Attendance, AttendanceStatus

logger = logging.getLogger("attendance")

TWO_PLACES = Decimal("0.01")


# ===========================================================
# HELPERS
# ===========================================================
def workday_start():
    return datetime.strptime(ems_setting("WORKDAY_START"), "%H:%M").time()


def status_for_check_in(moment):
    """Late when the local check-in time is strictly after the workday start."""
    local = timezone.localtime(moment)
    return AttendanceStatus.LATE if local.time() > workday_start() else AttendanceStatus.PRESENT


def compute_hours(check_in, check_out):
    seconds = max((check_out - check_in).total_seconds(), 0)
    return (Decimal(seconds) / Decimal(3600)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def parse_status(value):
    text = str(value or "").strip().lower().replace(" ", "")
    for status in AttendanceStatus:
        if status.value.lower() == text:
            return status
    raise RuleViolation("Invalid attendance status.")


def parse_month(value):
    """'2025-03' (or a date) -> first day of that month."""
    if not value:
        return timezone.localdate().replace(day=1)
    if isinstance(value, date):
        return value.replace(day=1)
    try:
        return datetime.strptime(str(value)[:7], "%Y-%m").date()
    except ValueError:
        raise RuleViolation("Invalid month. Use the YYYY-MM format.")


def _require_employee(user):
    if user.is_admin():
        raise AccessDenied("Administrators are not required to check in.")
    employee = user.employee
    if employee is None:
        raise NotFoundError("Employee record not found.")
    return employee


def today_record(employee, today=None):
    if employee is None:
        return None
    return Attendance.objects.filter(employee=employee, date=today or timezone.localdate()).first()


# ===========================================================
# CHECK-IN / CHECK-OUT
# ===========================================================
@transaction.atomic
def check_in(user, notes="", now=None):
    employee = _require_employee(user)
    now = now or timezone.now()
    today = timezone.localtime(now).date()

    Employee.objects.select_for_update().filter(pk=employee.pk).first()
    if Attendance.objects.filter(employee=employee, date=today).exists():
        raise RuleViolation("Already checked in today")

    try:
        with transaction.atomic():
            attendance = Attendance.objects.create(
                employee=employee,
                date=today,
                check_in_time=now,
                status=status_for_check_in(now),
                notes=(notes or "")[:500],
            )
    except IntegrityError:
        raise RuleViolation("Already checked in today")

    logger.info(f"🕘 {employee.full_name} checked in at {timezone.localtime(now):%H:%M} ({attendance.status})")
    attendance_recorded.send(sender=Attendance, attendance=attendance, action="check_in")
    return attendance


@transaction.atomic
def check_out(user, attendance_id, now=None):
    employee = _require_employee(user)
    now = now or timezone.now()

    attendance = Attendance.objects.select_for_update().filter(pk=attendance_id).first()
    if attendance is None:
        raise NotFoundError("Attendance record not found")
    if attendance.employee_id != employee.id:
        raise AccessDenied("You can only check out of your own attendance record.")
    if attendance.check_out_time is not None:
        raise RuleViolation("Already checked out")
    if attendance.check_in_time is None:
        raise RuleViolation("There is no check-in on this record.")

    attendance.check_out_time = now
    attendance.hours_worked = compute_hours(attendance.check_in_time, now)
    attendance.save(update_fields=["check_out_time", "hours_worked", "updated_at"])

    logger.info(f"🕔 {employee.full_name} checked out ({attendance.hours_worked} h)")
    attendance_recorded.send(sender=Attendance, attendance=attendance, action="check_out")
    return attendance


# ===========================================================
# MANAGER MARKS
# ===========================================================
@transaction.atomic
def mark(actor, employee, day, status, notes=""):
    """Record or correct a day's status for an employee (Manager / Admin)."""
    if not actor.is_manager_or_admin():
        raise AccessDenied("Only managers or administrators can mark attendance.")
    status = parse_status(status)
    if day > timezone.localdate() and status not in (AttendanceStatus.ON_LEAVE, AttendanceStatus.HOLIDAY):
        raise RuleViolation("Only leave or holidays can be recorded for future dates.")

    attendance = Attendance.objects.select_for_update().filter(employee=employee, date=day).first()
    if attendance is None:
        attendance = Attendance(employee=employee, date=day)

    if status in (AttendanceStatus.PRESENT, AttendanceStatus.LATE) and attendance.check_in_time is None:
        raise RuleViolation("Present or Late requires a check-in; mark the day Absent, OnLeave or Holiday instead.")

    attendance.status = status
    if notes:
        attendance.notes = notes[:500]
    attendance.save()

    logger.info(f"📌 {actor.email} marked {employee.full_name} {status} on {day}")
    attendance_recorded.send(sender=Attendance, attendance=attendance, action="mark")
    return attendance


# ===========================================================
# QUERIES
# ===========================================================
def records_for(user, start_date=None, end_date=None, employee_id=None):
    qs = Attendance.objects.select_related("employee", "employee__department")
    if user.is_manager_or_admin():
        if employee_id:
            qs = qs.filter(employee_id=employee_id)
    else:
        employee = user.employee
        if employee is None:
            return qs.none()
        qs = qs.filter(employee=employee)

    if start_date:
        qs = qs.filter(date__gte=start_date)
    if end_date:
        qs = qs.filter(date__lte=end_date)
    return qs.order_by("-date", "-check_in_time")


def heatmap(user, today=None):
    """Per-day count of Present/Late records over the configured window."""
    today = today or timezone.localdate()
    since = today - timedelta(days=ems_setting("HEATMAP_DAYS"))

    qs = Attendance.objects.worked().filter(date__gte=since, date__lte=today)
    if not user.is_manager_or_admin():
        employee = user.employee
        if employee is None:
            return []
        qs = qs.filter(employee=employee)

    rows = qs.values("date").annotate(count=Count("id")).order_by("date")
    return [{"date": row["date"].isoformat(), "count": row["count"]} for row in rows]


def monthly_report(month=None, department_id=None):
    """Records in the month, ordered by employee last name then date."""
    first = parse_month(month)
    next_month = (first.replace(day=28) + timedelta(days=4)).replace(day=1)

    qs = Attendance.objects.select_related("employee", "employee__department").filter(
        date__gte=first, date__lt=next_month
    )
    if department_id:
        qs = qs.filter(employee__department_id=department_id)
    return first, qs.order_by("employee__last_name", "employee__first_name", "date")


def summarize(records):
    """Totals per status plus hours for a report footer."""
    totals = {status.value: 0 for status in AttendanceStatus}
    hours = Decimal("0.00")
    for record in records:
        totals[record.status] = totals.get(record.status, 0) + 1
        hours += record.hours_worked or Decimal("0.00")
    totals["hours_worked"] = hours
    return totals

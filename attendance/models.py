# ===========================================================
# attendance/models.py
# ===========================================================
from django.core.validators import MaxLengthValidator
from django.db import models


class AttendanceStatus(models.TextChoices):
    PRESENT = "Present", "Present"
    LATE = "Late", "Late"
    ABSENT = "Absent", "Absent"
    ON_LEAVE = "OnLeave", "On Leave"
    HOLIDAY = "Holiday", "Holiday"


WORKED_STATUSES = (AttendanceStatus.PRESENT, AttendanceStatus.LATE)


class AttendanceQuerySet(models.QuerySet):
    def worked(self):
        return self.filter(status__in=WORKED_STATUSES)

    def open(self):
        """Checked in but not yet checked out."""
        return self.filter(check_in_time__isnull=False, check_out_time__isnull=True)


class Attendance(models.Model):
    """One row per employee per calendar day."""

    employee = models.ForeignKey(
        "employee.Employee",
        on_delete=models.CASCADE,
        related_name="attendances",
    )
    date = models.DateField(db_index=True)
    check_in_time = models.DateTimeField(null=True, blank=True)
    check_out_time = models.DateTimeField(null=True, blank=True)
    hours_worked = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    status = models.CharField(max_length=10, choices=AttendanceStatus.choices, default=AttendanceStatus.PRESENT)
    notes = models.TextField(blank=True, default="", validators=[MaxLengthValidator(500)])
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = AttendanceQuerySet.as_manager()

    class Meta:
        ordering = ["-date", "-check_in_time"]
        verbose_name = "Attendance"
        verbose_name_plural = "Attendance"
        constraints = [
            models.UniqueConstraint(fields=["employee", "date"], name="unique_attendance_per_day"),
        ]

    def __str__(self):
        return f"{self.employee} - {self.date} ({self.status})"

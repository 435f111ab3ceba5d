# ===========================================================
# leave/models.py
# ===========================================================
from django.core.validators import MaxLengthValidator
from django.db import models


class LeaveType(models.TextChoices):
    ANNUAL = "Annual", "Annual"
    SICK = "Sick", "Sick"
    PERSONAL = "Personal", "Personal"
    UNPAID = "Unpaid", "Unpaid"
    MATERNITY = "Maternity", "Maternity"
    PATERNITY = "Paternity", "Paternity"


class LeaveStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    APPROVED = "Approved", "Approved"
    REJECTED = "Rejected", "Rejected"
    CANCELLED = "Cancelled", "Cancelled"


class LeaveRequestQuerySet(models.QuerySet):
    def pending(self):
        return self.filter(status=LeaveStatus.PENDING)

    def for_employee(self, employee):
        return self.filter(employee=employee)


class LeaveRequest(models.Model):
    """An employee's application for time off over an inclusive date range."""

    employee = models.ForeignKey(
        "employee.Employee",
        on_delete=models.CASCADE,
        related_name="leave_requests",
    )
    leave_type = models.CharField(max_length=20, choices=LeaveType.choices)
    start_date = models.DateField()
    end_date = models.DateField()
    reason = models.TextField(validators=[MaxLengthValidator(500)])
    status = models.CharField(
        max_length=20, choices=LeaveStatus.choices, default=LeaveStatus.PENDING, db_index=True
    )
    approved_by = models.ForeignKey(
        "employee.Employee",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="decided_leave_requests",
    )
    approver_comments = models.TextField(blank=True, default="", validators=[MaxLengthValidator(500)])
    approved_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = LeaveRequestQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Leave Request"
        verbose_name_plural = "Leave Requests"
        indexes = [
            models.Index(fields=["employee", "status"], name="leave_employee_status_idx"),
        ]

    def __str__(self):
        return f"{self.employee} - {self.leave_type} {self.start_date} to {self.end_date} ({self.status})"

    @property
    def total_days(self):
        """Inclusive calendar-day count."""
        return (self.end_date - self.start_date).days + 1

    @property
    def is_pending(self):
        return self.status == LeaveStatus.PENDING

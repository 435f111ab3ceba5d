# ===========================================================
# employee/models.py
# ===========================================================
from decimal import Decimal
import logging

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models, transaction
from django.db.models.functions import Lower
from django.utils import timezone

logger = logging.getLogger("employee")
User = settings.AUTH_USER_MODEL


# ===========================================================
# Department Model
# ===========================================================
class Department(models.Model):
    """Organizational department with an optional managing employee."""

    name = models.CharField(max_length=100)
    description = models.TextField(blank=True, default="")
    manager = models.ForeignKey(
        "employee.Employee",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="managed_departments",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]
        verbose_name = "Department"
        verbose_name_plural = "Departments"
        constraints = [
            models.UniqueConstraint(Lower("name"), name="unique_department_name_ci"),
        ]

    def __str__(self):
        return self.name

    def clean(self):
        super().clean()
        if self.name:
            clash = Department.objects.filter(name__iexact=self.name.strip()).exclude(pk=self.pk)
            if clash.exists():
                raise ValidationError({"name": "A department with this name already exists."})
        if self.manager_id and self.pk and self.manager.department_id != self.pk:
            raise ValidationError({"manager": "The manager must belong to this department."})

    @property
    def employee_count(self):
        return self.employees.filter(is_active=True).count()


# ===========================================================
# Job Role Model
# ===========================================================
class JobRole(models.Model):
    """Position title an employee holds, optionally scoped to a department."""

    title = models.CharField(max_length=100)
    description = models.TextField(blank=True, default="")
    department = models.ForeignKey(
        Department,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="job_roles",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["title"]
        verbose_name = "Job Role"
        verbose_name_plural = "Job Roles"

    def __str__(self):
        return self.title


# ===========================================================
# Employee Model
# ===========================================================
class EmployeeQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)

    def search(self, term):
        if not term:
            return self
        return self.filter(
            models.Q(first_name__icontains=term)
            | models.Q(last_name__icontains=term)
            | models.Q(email__icontains=term)
        )


class Employee(models.Model):
    """HR record: personal data, placement and leave balances."""

    GENDER_CHOICES = [
        ("Male", "Male"),
        ("Female", "Female"),
        ("Other", "Other"),
    ]

    user = models.OneToOneField(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="employee_profile",
    )

    # ---------- PERSONAL ----------
    first_name = models.CharField(max_length=50)
    last_name = models.CharField(max_length=50)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=20, blank=True, default="")
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES, blank=True, default="")
    address = models.CharField(max_length=255, blank=True, default="")

    # ---------- EMPLOYMENT ----------
    hire_date = models.DateField(default=timezone.localdate)
    termination_date = models.DateField(null=True, blank=True)
    department = models.ForeignKey(Department, on_delete=models.PROTECT, related_name="employees")
    job_role = models.ForeignKey(JobRole, on_delete=models.PROTECT, related_name="employees")
    salary = models.DecimalField(
        max_digits=18,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    is_active = models.BooleanField(default=True)

    # ---------- LEAVE BALANCES (days) ----------
    annual_leave_balance = models.IntegerField(default=20)
    sick_leave_balance = models.IntegerField(default=10)
    personal_leave_balance = models.IntegerField(default=5)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = EmployeeQuerySet.as_manager()

    class Meta:
        ordering = ["last_name", "first_name"]
        verbose_name = "Employee"
        verbose_name_plural = "Employees"
        indexes = [
            models.Index(fields=["last_name", "first_name"], name="employee_name_idx"),
            models.Index(fields=["department", "is_active"], name="employee_dept_active_idx"),
        ]

    def __str__(self):
        return self.full_name

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_manager(self):
        """True when the linked account holds the Manager or Admin role."""
        return bool(self.user_id and self.user.is_manager_or_admin())

    def clean(self):
        super().clean()
        if self.termination_date and self.hire_date and self.termination_date < self.hire_date:
            raise ValidationError({"termination_date": "Termination date cannot be before hire date."})

    @transaction.atomic
    def deactivate(self):
        """
        Soft delete: keep the row (leave and attendance history point at it)
        but mark it inactive with today's termination date.
        """
        Employee.objects.select_for_update().filter(pk=self.pk).first()
        self.is_active = False
        self.termination_date = timezone.localdate()
        self.save(update_fields=["is_active", "termination_date", "updated_at"])
        logger.info(f"🗑️ Employee {self.full_name} ({self.email}) deactivated")


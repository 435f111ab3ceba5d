# ===========================================================
# users/services.py
# ===========================================================

import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from ems_backend.conf import ems_setting
from ems_backend.exceptions import RuleViolation

logger = logging.getLogger("users")


def split_full_name(full_name):
    """'Jane van Dyke' -> ('Jane', 'van Dyke'); single words get an empty last name."""
    parts = (full_name or "").split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


@transaction.atomic
def register_account(*, email, password, full_name, role, gender="", created_by=None):
    """
    Create a login account. Employee and Manager accounts also receive an
    Employee record in the first department / job role with default
    leave balances, linked back to the user.
    """
    from employee.models import Department, Employee, JobRole

    User = get_user_model()

    if User.objects.filter(email__iexact=email).exists():
        raise RuleViolation("A user with this email already exists.")
    if role not in dict(User.ROLE_CHOICES):
        raise RuleViolation(f"Unknown role '{role}'.")

    user = User.objects.create_user(
        email=email,
        password=password,
        full_name=full_name,
        role=role,
        gender=gender or "",
    )

    if role in (User.ROLE_EMPLOYEE, User.ROLE_MANAGER):
        department = Department.objects.order_by("id").first()
        job_role = JobRole.objects.order_by("id").first()
        if department is None or job_role is None:
            raise RuleViolation("Create at least one department and job role before registering employees.")

        if Employee.objects.filter(email__iexact=email).exists():
            raise RuleViolation("An employee with this email already exists.")

        first_name, last_name = split_full_name(full_name)
        Employee.objects.create(
            user=user,
            first_name=first_name,
            last_name=last_name,
            email=user.email,
            gender=gender or "",
            hire_date=timezone.localdate(),
            department=department,
            job_role=job_role,
            annual_leave_balance=ems_setting("DEFAULT_ANNUAL_LEAVE"),
            sick_leave_balance=ems_setting("DEFAULT_SICK_LEAVE"),
            personal_leave_balance=ems_setting("DEFAULT_PERSONAL_LEAVE"),
        )

    actor = created_by.email if created_by else "system"
    logger.info(f"👤 Account {user.email} ({role}) registered by {actor}")
    return user

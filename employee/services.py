# ===========================================================
# employee/services.py
# ===========================================================
"""
Department / job role / employee mutations shared by the JSON API
and the server-rendered pages.
"""

import logging

from django.db import IntegrityError, transaction

from ems_backend.exceptions import AccessDenied, Conflict, RuleViolation
from notifications.service import NotificationService
from .models import Department, Employee, JobRole

logger = logging.getLogger("employee")

UNSET = object()


def _clean_role_names(role_names):
    """Strip blanks and case-insensitive duplicates, keeping first spelling."""
    seen, names = set(), []
    for name in role_names or []:
        name = (name or "").strip()
        if name and name.lower() not in seen:
            seen.add(name.lower())
            names.append(name)
    return names


def _check_department_name(name, instance=None):
    name = (name or "").strip()
    if not name:
        raise RuleViolation("Department name is required.")
    clash = Department.objects.filter(name__iexact=name)
    if instance is not None:
        clash = clash.exclude(pk=instance.pk)
    if clash.exists():
        raise RuleViolation(f"A department named '{name}' already exists.")
    return name


def _add_job_roles(department, role_names):
    existing = {title.lower() for title in department.job_roles.values_list("title", flat=True)}
    added = []
    for title in _clean_role_names(role_names):
        if title.lower() in existing:
            continue
        added.append(JobRole.objects.create(title=title, department=department))
        existing.add(title.lower())
    return added


# ===========================================================
# DEPARTMENTS
# ===========================================================
@transaction.atomic
def create_department(actor, *, name, description="", manager=None, role_names=None):
    name = _check_department_name(name)
    if manager is not None:
        # A brand-new department has no staff yet, so nobody can qualify.
        raise RuleViolation("Assign a manager after employees have been added to the department.")

    try:
        with transaction.atomic():
            department = Department.objects.create(name=name, description=description or "")
    except IntegrityError:
        raise Conflict(f"A department named '{name}' already exists.")
    added = _add_job_roles(department, role_names)

    logger.info(f"🏢 Department '{department.name}' created by {actor.email} with {len(added)} job role(s)")
    NotificationService.send_to_admins_and_managers(
        f"New department '{department.name}' has been created.", category="department"
    )
    return department


@transaction.atomic
def update_department(actor, department, *, name=None, description=None, manager=UNSET, role_names=None):
    if name is not None:
        department.name = _check_department_name(name, instance=department)
    if description is not None:
        department.description = description

    if manager is not UNSET and manager != department.manager:
        if not actor.is_admin():
            raise AccessDenied("Only administrators can assign a department manager.")
        if manager is not None and manager.department_id != department.id:
            raise RuleViolation("The manager must be an employee of this department.")
        department.manager = manager

    try:
        with transaction.atomic():
            department.save()
    except IntegrityError:
        raise Conflict(f"A department named '{department.name}' already exists.")
    added = _add_job_roles(department, role_names)

    logger.info(f"🏢 Department '{department.name}' updated by {actor.email} (+{len(added)} job role(s))")
    NotificationService.send_to_admins_and_managers(
        f"Department '{department.name}' has been updated.", category="department"
    )
    return department


@transaction.atomic
def delete_department(actor, department):
    if department.employees.exists():
        raise RuleViolation(
            f"Cannot delete department '{department.name}' because it still has employees assigned."
        )
    name = department.name
    department.delete()
    logger.info(f"🗑️ Department '{name}' deleted by {actor.email}")


# ===========================================================
# JOB ROLES
# ===========================================================
def delete_job_role(actor, job_role):
    if job_role.employees.exists():
        raise RuleViolation(
            f"Cannot delete role '{job_role.title}' because it is assigned to one or more employees."
        )
    title = job_role.title
    job_role.delete()
    logger.info(f"🗑️ Job role '{title}' deleted by {actor.email}")


# ===========================================================
# EMPLOYEES
# ===========================================================
def ensure_unique_email(email, instance=None):
    clash = Employee.objects.filter(email__iexact=email)
    if instance is not None:
        clash = clash.exclude(pk=instance.pk)
    if clash.exists():
        raise RuleViolation("An employee with this email already exists.")


def announce_employee(employee, verb, actor):
    logger.info(f"👤 Employee {employee.full_name} {verb} by {actor.email}")
    NotificationService.broadcast(
        f"Employee {employee.full_name} has been {verb}.",
        category="employee",
        link=f"/employees/{employee.id}/",
    )


@transaction.atomic
def deactivate_employee(actor, employee):
    if not employee.is_active:
        raise RuleViolation("This employee is already inactive.")
    employee.deactivate()
    release_managed_departments(employee)
    NotificationService.send_to_admins_and_managers(
        f"Employee {employee.full_name} has been deactivated.", category="employee"
    )
    logger.info(f"Employee {employee.full_name} deactivated by {actor.email}")


def release_managed_departments(employee):
    """Clear manager posts the employee no longer qualifies for."""
    stale = employee.managed_departments.all()
    if employee.is_active:
        stale = stale.exclude(pk=employee.department_id)
    released = []
    for department in stale:
        department.manager = None
        department.save(update_fields=["manager"])
        released.append(department)
        logger.info(f"🏢 {employee.full_name} is no longer manager of '{department.name}'")
    return released


@transaction.atomic
def update_employee(actor, writer):
    """Save an employee through a bound form or serializer."""
    employee = writer.save()
    release_managed_departments(employee)
    announce_employee(employee, "updated", actor)
    return employee

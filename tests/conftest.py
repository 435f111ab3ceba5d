# tests/conftest.py
"""Shared fixtures: a small organisation with one user per role."""
from datetime import date

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from employee.models import Department, Employee, JobRole
from users.models import User


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _isolated_environment(settings):
    """Plain static storage (no manifest) and a clean cache per test."""
    settings.STORAGES = {
        "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
        "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
    }
    settings.TIME_ZONE = "UTC"
    settings.EMS = {**settings.EMS, "WORKDAY_START": "09:00", "AUTO_SEED": False}
    cache.clear()
    yield
    cache.clear()


# ---------------------------------------------------------------------------
# Organisation
# ---------------------------------------------------------------------------

@pytest.fixture
def engineering(db):
    return Department.objects.create(name="Engineering", description="Software Development")


@pytest.fixture
def hr(db):
    return Department.objects.create(name="Human Resources", description="HR Department")


@pytest.fixture
def engineer_role(engineering):
    return JobRole.objects.create(title="Software Engineer", department=engineering)


@pytest.fixture
def manager_role(engineering):
    return JobRole.objects.create(title="Engineering Manager", department=engineering)


def make_employee(user, department, job_role, first_name, last_name, gender="", **extra):
    return Employee.objects.create(
        user=user,
        first_name=first_name,
        last_name=last_name,
        email=user.email if user else f"{first_name.lower()}.{last_name.lower()}@ems.com",
        gender=gender,
        hire_date=date(2023, 1, 2),
        department=department,
        job_role=job_role,
        **extra,
    )


# ---------------------------------------------------------------------------
# Accounts (one per role, linked to employee records where relevant)
# ---------------------------------------------------------------------------

@pytest.fixture
def admin_user(db):
    return User.objects.create_superuser(
        email="admin@ems.com", password="Admin@123", full_name="System Administrator"
    )


@pytest.fixture
def manager_user(engineering, manager_role):
    user = User.objects.create_user(
        email="manager@ems.com", password="Manager@123", full_name="Department Manager", role="Manager"
    )
    make_employee(user, engineering, manager_role, "Department", "Manager", gender="Male")
    return user


@pytest.fixture
def other_manager_user(hr, manager_role):
    user = User.objects.create_user(
        email="hr.manager@ems.com", password="Manager@123", full_name="Helen Ross", role="Manager"
    )
    make_employee(user, hr, manager_role, "Helen", "Ross", gender="Female")
    return user


@pytest.fixture
def employee_user(engineering, engineer_role):
    user = User.objects.create_user(
        email="employee@ems.com", password="Employee@123", full_name="Regular Employee", role="Employee"
    )
    make_employee(user, engineering, engineer_role, "Regular", "Employee", gender="Female")
    return user


@pytest.fixture
def second_employee_user(engineering, engineer_role):
    user = User.objects.create_user(
        email="john.doe@ems.com", password="Employee@123", full_name="John Doe", role="Employee"
    )
    make_employee(user, engineering, engineer_role, "John", "Doe", gender="Male")
    return user


# ---------------------------------------------------------------------------
# Clients
# ---------------------------------------------------------------------------

@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def as_user(api_client):
    """as_user(user) -> APIClient authenticated as ``user``."""
    def _authenticate(user):
        api_client.force_authenticate(user=user)
        return api_client
    return _authenticate

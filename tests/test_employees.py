# tests/test_employees.py
"""Employee API: listing filters, create/update permissions, soft delete."""
from datetime import date

import pytest
from django.utils import timezone

from employee.models import Employee
from notifications.models import Notification

URL = "/api/employees/"


@pytest.fixture
def new_employee_payload(engineering, engineer_role):
    return {
        "first_name": "Grace",
        "last_name": "Hopper",
        "email": "grace.hopper@ems.com",
        "phone": "5550001111",
        "gender": "Female",
        "hire_date": "2024-05-01",
        "department_id": engineering.id,
        "job_role_id": engineer_role.id,
        "salary": "72000.00",
    }


@pytest.mark.django_db
class TestEmployeeList:
    def test_list_is_paginated_and_ordered_by_last_name(self, as_user, employee_user, second_employee_user, manager_user):
        response = as_user(employee_user).get(URL)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["count"] == 3
        assert body["current_page"] == 1
        assert [row["last_name"] for row in body["results"]] == ["Doe", "Employee", "Manager"]

    def test_search_matches_name_and_email(self, as_user, employee_user, second_employee_user):
        client = as_user(employee_user)
        assert [r["email"] for r in client.get(URL, {"search": "john"}).json()["results"]] == ["john.doe@ems.com"]
        assert client.get(URL, {"search": "EMPLOYEE@"}).json()["count"] == 1

    def test_filter_by_department_and_active(self, as_user, employee_user, other_manager_user, hr):
        client = as_user(employee_user)
        rows = client.get(URL, {"department_id": hr.id}).json()["results"]
        assert [r["email"] for r in rows] == ["hr.manager@ems.com"]

        other_manager_user.employee.deactivate()
        assert client.get(URL, {"is_active": "false"}).json()["count"] == 1

    def test_anonymous_is_refused(self, api_client, db):
        assert api_client.get(URL).status_code == 401


@pytest.mark.django_db
class TestEmployeeWrite:
    def test_manager_creates_employee(self, as_user, manager_user, new_employee_payload):
        response = as_user(manager_user).post(URL, new_employee_payload, format="json")

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["full_name"] == "Grace Hopper"
        assert data["annual_leave_balance"] == 20
        assert Notification.objects.filter(category="employee", message__contains="Grace Hopper").exists()

    def test_employee_cannot_create(self, as_user, employee_user, new_employee_payload):
        response = as_user(employee_user).post(URL, new_employee_payload, format="json")
        assert response.status_code == 403

    def test_duplicate_email_is_a_validation_error(self, as_user, manager_user, new_employee_payload):
        new_employee_payload["email"] = "EMPLOYEE@ems.com"
        Employee.objects.create(
            first_name="Existing", last_name="Person", email="employee@ems.com",
            department_id=new_employee_payload["department_id"], job_role_id=new_employee_payload["job_role_id"],
        )

        response = as_user(manager_user).post(URL, new_employee_payload, format="json")

        assert response.status_code == 400
        assert "email: An employee with this email already exists." in response.json()["errors"]

    def test_termination_before_hire_is_rejected(self, as_user, manager_user, new_employee_payload):
        new_employee_payload["termination_date"] = "2024-01-01"
        response = as_user(manager_user).post(URL, new_employee_payload, format="json")
        assert response.status_code == 400

    def test_partial_update(self, as_user, manager_user, employee_user):
        employee = employee_user.employee
        response = as_user(manager_user).patch(f"{URL}{employee.id}/", {"phone": "5550009999"}, format="json")

        assert response.status_code == 200
        employee.refresh_from_db()
        assert employee.phone == "5550009999"

    def test_moving_a_manager_clears_their_old_department(self, as_user, admin_user, manager_user, engineering, hr):
        employee = manager_user.employee
        engineering.manager = employee
        engineering.save()

        response = as_user(admin_user).patch(f"{URL}{employee.id}/", {"department_id": hr.id}, format="json")

        assert response.status_code == 200
        engineering.refresh_from_db()
        assert engineering.manager is None

    def test_update_within_department_keeps_manager(self, as_user, admin_user, manager_user, engineering):
        employee = manager_user.employee
        engineering.manager = employee
        engineering.save()

        as_user(admin_user).patch(f"{URL}{employee.id}/", {"phone": "5550001111"}, format="json")

        engineering.refresh_from_db()
        assert engineering.manager == employee

    def test_retrieve(self, as_user, employee_user):
        employee = employee_user.employee
        data = as_user(employee_user).get(f"{URL}{employee.id}/").json()["data"]
        assert data["department_name"] == "Engineering"
        assert data["job_role_title"] == "Software Engineer"
        assert data["user_id"] == employee_user.id


@pytest.mark.django_db
class TestEmployeeDelete:
    def test_admin_soft_deletes(self, as_user, admin_user, employee_user):
        employee = employee_user.employee
        response = as_user(admin_user).delete(f"{URL}{employee.id}/")

        assert response.status_code == 200
        employee.refresh_from_db()
        assert employee.is_active is False
        assert employee.termination_date == timezone.localdate()
        assert Employee.objects.filter(pk=employee.pk).exists()

    def test_deactivated_manager_leaves_department(self, as_user, admin_user, manager_user, engineering):
        engineering.manager = manager_user.employee
        engineering.save()

        as_user(admin_user).delete(f"{URL}{manager_user.employee.id}/")

        engineering.refresh_from_db()
        assert engineering.manager is None

    def test_manager_cannot_delete(self, as_user, manager_user, employee_user):
        response = as_user(manager_user).delete(f"{URL}{employee_user.employee.id}/")
        assert response.status_code == 403

    def test_deleting_twice_is_refused(self, as_user, admin_user, employee_user):
        client = as_user(admin_user)
        url = f"{URL}{employee_user.employee.id}/"
        client.delete(url)
        assert client.delete(url).status_code == 400


@pytest.mark.django_db
def test_employee_update_publishes_system_update_on_commit(django_capture_on_commit_callbacks, employee_user):
    from notifications.service import NotificationService

    employee = employee_user.employee
    with django_capture_on_commit_callbacks(execute=True):
        employee.hire_date = date(2022, 6, 1)
        employee.save()

    versions = NotificationService.update_versions(["Employees", f"Employee:{employee.id}"])
    assert versions == {"Employees": 1, f"Employee:{employee.id}": 1}

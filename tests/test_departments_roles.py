# tests/test_departments_roles.py
"""Department and job role API rules."""
import pytest

from employee import services
from employee.models import Department, JobRole

DEPARTMENTS = "/api/departments/"
ROLES = "/api/roles/"


@pytest.mark.django_db
class TestDepartmentCreate:
    def test_manager_creates_department_with_initial_roles(self, as_user, manager_user):
        payload = {"name": "Finance", "description": "Money", "role_names": ["Accountant", "accountant", " ", "Auditor"]}
        response = as_user(manager_user).post(DEPARTMENTS, payload, format="json")

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["name"] == "Finance"
        assert sorted(role["title"] for role in data["roles"]) == ["Accountant", "Auditor"]
        assert data["manager_id"] is None

    def test_name_is_unique_ignoring_case(self, as_user, manager_user):
        response = as_user(manager_user).post(DEPARTMENTS, {"name": "ENGINEERING"}, format="json")

        assert response.status_code == 400
        assert response.json()["message"] == "A department named 'ENGINEERING' already exists."

    def test_concurrent_duplicate_name_is_a_conflict(self, monkeypatch, as_user, manager_user):
        # Another request created the name between the check and the insert.
        monkeypatch.setattr(services, "_check_department_name", lambda name, instance=None: name.strip())

        response = as_user(manager_user).post(DEPARTMENTS, {"name": "engineering"}, format="json")

        assert response.status_code == 409
        assert response.json()["message"] == "A department named 'engineering' already exists."
        assert Department.objects.count() == 1

    def test_manager_cannot_be_set_on_create(self, as_user, admin_user, employee_user):
        payload = {"name": "Research", "manager_id": employee_user.employee.id}
        response = as_user(admin_user).post(DEPARTMENTS, payload, format="json")
        assert response.status_code == 400
        assert not Department.objects.filter(name="Research").exists()

    def test_employee_cannot_create(self, as_user, employee_user):
        assert as_user(employee_user).post(DEPARTMENTS, {"name": "Legal"}, format="json").status_code == 403


@pytest.mark.django_db
class TestDepartmentUpdate:
    def test_admin_assigns_manager_from_department(self, as_user, admin_user, manager_user, engineering):
        employee = manager_user.employee
        response = as_user(admin_user).put(f"{DEPARTMENTS}{engineering.id}/", {"manager_id": employee.id}, format="json")

        assert response.status_code == 200
        assert response.json()["data"]["manager_name"] == "Department Manager"
        engineering.refresh_from_db()
        assert engineering.manager == employee

    def test_manager_must_belong_to_department(self, as_user, admin_user, other_manager_user, engineering):
        response = as_user(admin_user).put(
            f"{DEPARTMENTS}{engineering.id}/", {"manager_id": other_manager_user.employee.id}, format="json"
        )
        assert response.status_code == 400
        assert response.json()["message"] == "The manager must be an employee of this department."

    def test_only_admin_changes_manager(self, as_user, manager_user, engineering):
        response = as_user(manager_user).patch(
            f"{DEPARTMENTS}{engineering.id}/", {"manager_id": manager_user.employee.id}, format="json"
        )
        assert response.status_code == 403

    def test_manager_adds_roles_skipping_duplicates(self, as_user, manager_user, engineering, engineer_role):
        response = as_user(manager_user).patch(
            f"{DEPARTMENTS}{engineering.id}/",
            {"role_names": ["software engineer", "QA Engineer"]},
            format="json",
        )

        assert response.status_code == 200
        titles = sorted(engineering.job_roles.values_list("title", flat=True))
        assert titles == ["Engineering Manager", "QA Engineer", "Software Engineer"]

    def test_rename_keeps_description(self, as_user, manager_user, engineering):
        as_user(manager_user).patch(f"{DEPARTMENTS}{engineering.id}/", {"name": "R&D"}, format="json")
        engineering.refresh_from_db()
        assert (engineering.name, engineering.description) == ("R&D", "Software Development")


@pytest.mark.django_db
class TestDepartmentDelete:
    def test_refused_while_employees_assigned(self, as_user, admin_user, employee_user, engineering):
        response = as_user(admin_user).delete(f"{DEPARTMENTS}{engineering.id}/")
        assert response.status_code == 400
        assert Department.objects.filter(pk=engineering.pk).exists()

    def test_admin_deletes_empty_department(self, as_user, admin_user, hr):
        response = as_user(admin_user).delete(f"{DEPARTMENTS}{hr.id}/")
        assert response.status_code == 200
        assert not Department.objects.filter(pk=hr.pk).exists()

    def test_manager_cannot_delete(self, as_user, manager_user, hr):
        assert as_user(manager_user).delete(f"{DEPARTMENTS}{hr.id}/").status_code == 403

    def test_list_includes_roles_and_counts(self, as_user, employee_user, engineering, hr):
        data = as_user(employee_user).get(DEPARTMENTS).json()["data"]
        by_name = {row["name"]: row for row in data}
        assert by_name["Engineering"]["employee_count"] == 1
        assert by_name["Human Resources"]["employee_count"] == 0
        assert [r["title"] for r in by_name["Engineering"]["roles"]] == ["Software Engineer"]


@pytest.mark.django_db
class TestJobRoles:
    def test_create_and_list(self, as_user, manager_user, hr):
        client = as_user(manager_user)
        response = client.post(ROLES, {"title": "Recruiter", "department_id": hr.id}, format="json")
        assert response.status_code == 201

        titles = [row["title"] for row in client.get(ROLES).json()["data"]]
        assert "Recruiter" in titles

    def test_delete_assigned_role_is_refused(self, as_user, manager_user, engineer_role, employee_user):
        response = as_user(manager_user).delete(f"{ROLES}{engineer_role.id}/")

        assert response.status_code == 400
        assert response.json()["message"] == (
            "Cannot delete role 'Software Engineer' because it is assigned to one or more employees."
        )

    def test_delete_unassigned_role(self, as_user, manager_user, hr):
        role = JobRole.objects.create(title="Payroll Clerk", department=hr)
        assert as_user(manager_user).delete(f"{ROLES}{role.id}/").status_code == 200
        assert not JobRole.objects.filter(pk=role.pk).exists()

    def test_employee_cannot_mutate(self, as_user, employee_user):
        assert as_user(employee_user).post(ROLES, {"title": "Boss"}, format="json").status_code == 403

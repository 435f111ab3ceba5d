# tests/test_pages.py
"""Server-rendered pages: session login, role guards and the main screens."""
import pytest
from django.urls import reverse

from employee.models import Department, Employee
from leave.models import LeaveRequest


@pytest.mark.django_db
class TestAccountPages:
    def test_login_page_renders(self, client):
        response = client.get(reverse("users:login"))
        assert response.status_code == 200
        assert b"Log in" in response.content

    def test_login_redirects_to_dashboard(self, client, employee_user):
        response = client.post(reverse("users:login"), {"email": "employee@ems.com", "password": "Employee@123"})
        assert response.status_code == 302
        assert response["Location"] == reverse("dashboard:index")

    def test_login_honours_local_next_only(self, client, employee_user):
        credentials = {"email": "employee@ems.com", "password": "Employee@123"}
        response = client.post(reverse("users:login"), {**credentials, "next": "/leave-requests/"})
        assert response["Location"] == "/leave-requests/"

        client.logout()
        response = client.post(reverse("users:login"), {**credentials, "next": "https://evil.example.com/"})
        assert response["Location"] == reverse("dashboard:index")

    def test_failed_login_shows_error(self, client, employee_user):
        response = client.post(reverse("users:login"), {"email": "employee@ems.com", "password": "wrong"})
        assert response.status_code == 200
        assert b"Invalid email or password" in response.content

    def test_logout_requires_post(self, client, employee_user):
        client.force_login(employee_user)
        assert client.get(reverse("users:logout")).status_code == 405
        assert client.post(reverse("users:logout"))["Location"] == reverse("users:login")

    def test_anonymous_is_sent_to_login(self, client, db):
        response = client.get(reverse("dashboard:index"))
        assert response.status_code == 302
        assert response["Location"].startswith(reverse("users:login"))

    def test_profile_shows_balances(self, client, employee_user):
        client.force_login(employee_user)
        response = client.get(reverse("users:profile"))
        assert response.status_code == 200
        assert response.context["employee"].annual_leave_balance == 20

    def test_register_is_admin_only(self, client, manager_user):
        client.force_login(manager_user)
        response = client.get(reverse("users:register"))
        assert response["Location"] == reverse("users:access_denied")
        assert client.get(response["Location"]).status_code == 403

    def test_admin_registers_manager(self, client, admin_user, engineer_role):
        client.force_login(admin_user)
        response = client.post(reverse("users:register"), {
            "full_name": "Nora Lee", "email": "nora@ems.com", "password": "Str0ng!Passw0rd",
            "confirm_password": "Str0ng!Passw0rd", "role": "Manager", "gender": "Female",
        })
        assert response.status_code == 302
        assert Employee.objects.filter(email="nora@ems.com", user__role="Manager").exists()


@pytest.mark.django_db
class TestMainPages:
    @pytest.mark.parametrize("name", [
        "dashboard:index",
        "employee:index",
        "employee:department_index",
        "leave:index",
        "attendance:index",
    ])
    def test_employee_can_open(self, client, employee_user, name):
        client.force_login(employee_user)
        assert client.get(reverse(name)).status_code == 200

    @pytest.mark.parametrize("name", [
        "employee:create",
        "employee:department_create",
        "attendance:mark",
        "attendance:reports",
    ])
    def test_manager_only_pages(self, client, employee_user, manager_user, name):
        client.force_login(employee_user)
        assert client.get(reverse(name))["Location"] == reverse("users:access_denied")

        client.force_login(manager_user)
        assert client.get(reverse(name)).status_code == 200

    def test_dashboard_context_for_manager(self, client, manager_user, employee_user):
        LeaveRequest.objects.create(
            employee=employee_user.employee, leave_type="Sick",
            start_date="2030-01-01", end_date="2030-01-01", reason="Flu",
        )
        client.force_login(manager_user)
        response = client.get(reverse("dashboard:index"))

        assert response.context["stats"]["pending_leaves"] == 1
        assert response.context["is_manager"] is True
        assert len(response.context["recent_leaves"]) == 1

    def test_leave_request_through_pages(self, client, employee_user, manager_user):
        client.force_login(employee_user)
        response = client.post(reverse("leave:create"), {
            "leave_type": "Annual", "start_date": "2030-02-02", "end_date": "2030-02-03", "reason": "Wedding",
        })
        assert response["Location"] == reverse("leave:index")
        leave_request = LeaveRequest.objects.get(employee=employee_user.employee)

        client.force_login(manager_user)
        response = client.post(reverse("leave:approve", args=[leave_request.pk]), {"comments": ""})
        assert response["Location"] == reverse("leave:index")
        leave_request.refresh_from_db()
        assert leave_request.status == "Approved"

    def test_reject_without_reason_stays_on_detail(self, client, employee_user, manager_user):
        leave_request = LeaveRequest.objects.create(
            employee=employee_user.employee, leave_type="Annual",
            start_date="2030-01-01", end_date="2030-01-01", reason="Rest",
        )
        client.force_login(manager_user)
        response = client.post(reverse("leave:reject", args=[leave_request.pk]), {"comments": ""})
        assert response["Location"] == reverse("leave:detail", args=[leave_request.pk])

    def test_check_in_page(self, client, employee_user):
        client.force_login(employee_user)
        response = client.post(reverse("attendance:check_in"), {"notes": ""})
        assert response["Location"] == reverse("attendance:index")
        assert employee_user.employee.attendances.count() == 1

    def test_edit_page_moving_manager_clears_old_department(self, client, admin_user, manager_user, engineering, hr, manager_role):
        employee = manager_user.employee
        engineering.manager = employee
        engineering.save()

        client.force_login(admin_user)
        response = client.post(reverse("employee:edit", args=[employee.pk]), {
            "first_name": "Department", "last_name": "Manager", "email": "manager@ems.com",
            "phone": "", "gender": "Male", "address": "", "hire_date": "2023-01-02", "termination_date": "",
            "department": hr.pk, "job_role": manager_role.pk, "salary": "0.00", "is_active": "on",
            "annual_leave_balance": 20, "sick_leave_balance": 10, "personal_leave_balance": 5,
        })

        assert response["Location"] == reverse("employee:detail", args=[employee.pk])
        engineering.refresh_from_db()
        assert engineering.manager is None

    def test_department_delete_refused_with_staff(self, client, admin_user, employee_user, engineering):
        client.force_login(admin_user)
        response = client.post(reverse("employee:department_delete", args=[engineering.pk]))
        assert response["Location"] == reverse("employee:department_detail", args=[engineering.pk])
        assert Department.objects.filter(pk=engineering.pk).exists()

    def test_monthly_report_export_from_page(self, client, manager_user):
        client.force_login(manager_user)
        response = client.get(reverse("attendance:reports"), {"month": "2025-03", "export": "xlsx"})
        assert response.status_code == 200
        assert response["Content-Disposition"].startswith("attachment;")

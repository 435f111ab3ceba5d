# tests/test_auth.py
"""JWT login, lockout, refresh, current user and admin registration."""
from datetime import timedelta

import pytest
from django.utils import timezone

from employee.models import Employee
from users.auth import INVALID_MESSAGE, LOCKED_MESSAGE, verify_credentials
from users.models import User
from users.services import split_full_name
from ems_backend.exceptions import AuthenticationError

LOGIN_URL = "/api/auth/login/"


def login(client, email, password):
    return client.post(LOGIN_URL, {"email": email, "password": password}, format="json")


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------

@pytest.mark.django_db
class TestLogin:
    def test_login_returns_tokens_and_user_block(self, api_client, employee_user):
        response = login(api_client, "employee@ems.com", "Employee@123")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        data = body["data"]
        assert data["token"] and data["refresh_token"]
        assert data["expires_in"] == 3600
        assert data["user"]["email"] == "employee@ems.com"
        assert data["user"]["roles"] == ["Employee"]
        assert data["user"]["employee_id"] == employee_user.employee.id

    def test_email_is_case_insensitive(self, api_client, employee_user):
        assert login(api_client, "EMPLOYEE@ems.com", "Employee@123").status_code == 200

    def test_wrong_password_is_rejected(self, api_client, employee_user):
        response = login(api_client, "employee@ems.com", "nope")

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": INVALID_MESSAGE, "errors": [INVALID_MESSAGE]}
        employee_user.refresh_from_db()
        assert employee_user.failed_login_attempts == 1

    def test_unknown_email_is_rejected(self, api_client, db):
        response = login(api_client, "ghost@ems.com", "whatever")
        assert response.status_code == 401
        assert response.json()["message"] == INVALID_MESSAGE

    def test_inactive_account_cannot_log_in(self, api_client, employee_user):
        employee_user.is_active = False
        employee_user.save()
        assert login(api_client, "employee@ems.com", "Employee@123").status_code == 401

    def test_admin_has_no_employee_id(self, api_client, admin_user):
        data = login(api_client, "admin@ems.com", "Admin@123").json()["data"]
        assert data["user"]["roles"] == ["Admin"]
        assert data["user"]["employee_id"] is None


# ---------------------------------------------------------------------------
# Lockout
# ---------------------------------------------------------------------------

@pytest.mark.django_db
class TestLockout:
    def test_fifth_failure_locks_the_account(self, api_client, employee_user):
        for _ in range(4):
            assert login(api_client, "employee@ems.com", "bad").json()["message"] == INVALID_MESSAGE

        response = login(api_client, "employee@ems.com", "bad")
        assert response.status_code == 401
        assert response.json()["message"] == LOCKED_MESSAGE

        employee_user.refresh_from_db()
        assert employee_user.account_locked is True
        assert employee_user.is_active is True

    def test_locked_account_refuses_correct_password(self, api_client, employee_user):
        employee_user.lock_account()
        response = login(api_client, "employee@ems.com", "Employee@123")
        assert response.status_code == 401
        assert response.json()["message"] == LOCKED_MESSAGE

    def test_lock_expires_after_window(self, employee_user):
        employee_user.failed_login_attempts = 5
        employee_user.lock_account()
        User.objects.filter(pk=employee_user.pk).update(locked_at=timezone.now() - timedelta(minutes=16))

        user = verify_credentials("employee@ems.com", "Employee@123")

        assert user.pk == employee_user.pk
        user.refresh_from_db()
        assert user.account_locked is False
        assert user.failed_login_attempts == 0

    def test_successful_login_resets_counter(self, employee_user):
        with pytest.raises(AuthenticationError):
            verify_credentials("employee@ems.com", "bad")
        verify_credentials("employee@ems.com", "Employee@123")

        employee_user.refresh_from_db()
        assert employee_user.failed_login_attempts == 0

    def test_threshold_is_configurable(self, settings, employee_user):
        settings.EMS = {**settings.EMS, "LOGIN_LOCK_THRESHOLD": 2}
        with pytest.raises(AuthenticationError):
            verify_credentials("employee@ems.com", "bad")
        with pytest.raises(AuthenticationError) as excinfo:
            verify_credentials("employee@ems.com", "bad")
        assert excinfo.value.message == LOCKED_MESSAGE


# ---------------------------------------------------------------------------
# Refresh / me
# ---------------------------------------------------------------------------

@pytest.mark.django_db
class TestTokens:
    def test_refresh_rotates_tokens(self, api_client, employee_user):
        refresh = login(api_client, "employee@ems.com", "Employee@123").json()["data"]["refresh_token"]

        response = api_client.post("/api/auth/refresh/", {"refresh": refresh}, format="json")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["token"]
        assert data["refresh_token"] and data["refresh_token"] != refresh

    def test_refresh_accepts_the_key_login_returned(self, api_client, employee_user):
        refresh = login(api_client, "employee@ems.com", "Employee@123").json()["data"]["refresh_token"]

        response = api_client.post("/api/auth/refresh/", {"refresh_token": refresh}, format="json")

        assert response.status_code == 200
        assert response.json()["data"]["refresh_token"] != refresh

    def test_refresh_without_token_is_invalid_token(self, api_client, db):
        response = api_client.post("/api/auth/refresh/", {}, format="json")
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"

    def test_refresh_with_garbage_is_invalid_token(self, api_client, db):
        response = api_client.post("/api/auth/refresh/", {"refresh": "not-a-token"}, format="json")
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"

    def test_blacklisted_refresh_token_is_refused(self, api_client, employee_user):
        refresh = login(api_client, "employee@ems.com", "Employee@123").json()["data"]["refresh_token"]
        api_client.post("/api/auth/refresh/", {"refresh": refresh}, format="json")

        response = api_client.post("/api/auth/refresh/", {"refresh": refresh}, format="json")
        assert response.status_code == 401

    def test_me_with_bearer_token(self, api_client, manager_user):
        token = login(api_client, "manager@ems.com", "Manager@123").json()["data"]["token"]
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

        response = api_client.get("/api/auth/me/")

        assert response.status_code == 200
        assert response.json()["data"]["roles"] == ["Manager"]

    def test_me_requires_authentication(self, api_client, db):
        response = api_client.get("/api/auth/me/")
        assert response.status_code == 401
        assert response.json()["success"] is False


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------

@pytest.mark.django_db
class TestRegister:
    payload = {
        "full_name": "Ada Lovelace King",
        "email": "Ada@ems.com",
        "password": "Str0ng!Passw0rd",
        "role": "Employee",
        "gender": "Female",
    }

    def test_admin_registers_employee_with_linked_record(self, as_user, admin_user, engineer_role):
        response = as_user(admin_user).post("/api/auth/register/", self.payload, format="json")

        assert response.status_code == 201
        user = User.objects.get(email="ada@ems.com")
        employee = Employee.objects.get(user=user)
        assert (employee.first_name, employee.last_name) == ("Ada", "Lovelace King")
        assert employee.department == engineer_role.department
        assert employee.job_role == engineer_role
        assert employee.annual_leave_balance == 20
        assert employee.sick_leave_balance == 10
        assert employee.personal_leave_balance == 5
        assert response.json()["data"]["employee_id"] == employee.id

    def test_admin_accounts_get_no_employee_record(self, as_user, admin_user, engineer_role):
        payload = {**self.payload, "role": "Admin", "email": "boss@ems.com"}
        response = as_user(admin_user).post("/api/auth/register/", payload, format="json")

        assert response.status_code == 201
        assert not Employee.objects.filter(email="boss@ems.com").exists()

    def test_duplicate_email_is_rejected(self, as_user, admin_user, employee_user):
        payload = {**self.payload, "email": "employee@ems.com"}
        response = as_user(admin_user).post("/api/auth/register/", payload, format="json")
        assert response.status_code == 400

    def test_requires_a_department_and_job_role(self, as_user, admin_user):
        response = as_user(admin_user).post("/api/auth/register/", self.payload, format="json")

        assert response.status_code == 400
        assert not User.objects.filter(email="ada@ems.com").exists()

    def test_only_admins_may_register(self, as_user, manager_user):
        response = as_user(manager_user).post("/api/auth/register/", self.payload, format="json")
        assert response.status_code == 403


@pytest.mark.parametrize("full_name, expected", [
    ("Jane Smith", ("Jane", "Smith")),
    ("Jane van Dyke", ("Jane", "van Dyke")),
    ("Cher", ("Cher", "")),
    ("  ", ("", "")),
])
def test_split_full_name(full_name, expected):
    assert split_full_name(full_name) == expected

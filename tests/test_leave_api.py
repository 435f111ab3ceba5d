# tests/test_leave_api.py
"""Leave request workflow through the API: submit, visibility, decide, cancel, delete."""
from datetime import date

import pytest

from leave.models import LeaveRequest, LeaveStatus
from notifications.models import Notification

URL = "/api/leave-requests/"


def submit(client, leave_type="Annual", start="2030-01-07", end="2030-01-09", reason="Family trip"):
    return client.post(
        URL,
        {"leave_type": leave_type, "start_date": start, "end_date": end, "reason": reason},
        format="json",
    )


def pending_request(user, leave_type="Annual", start=date(2030, 1, 7), end=date(2030, 1, 9)):
    return LeaveRequest.objects.create(
        employee=user.employee, leave_type=leave_type, start_date=start, end_date=end, reason="Rest"
    )


# ---------------------------------------------------------------------------
# Submission
# ---------------------------------------------------------------------------

@pytest.mark.django_db
class TestSubmit:
    def test_employee_submits_request(self, as_user, employee_user, manager_user, admin_user):
        response = submit(as_user(employee_user))

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["status"] == "Pending"
        assert data["total_days"] == 3
        assert data["employee_name"] == "Regular Employee"

        recipients = set(Notification.objects.filter(category="leave").values_list("recipient__email", flat=True))
        assert recipients == {"manager@ems.com", "admin@ems.com"}
        assert Notification.objects.filter(message="New Leave Request from Regular Employee").count() == 2

    def test_only_one_pending_request(self, as_user, employee_user):
        client = as_user(employee_user)
        submit(client)
        response = submit(client, start="2030-02-03", end="2030-02-03")

        assert response.status_code == 400
        assert response.json()["message"] == "You already have a pending leave request."

    def test_balance_is_checked_on_submit(self, as_user, employee_user):
        response = submit(as_user(employee_user), leave_type="Sick", start="2030-01-01", end="2030-01-11")
        assert response.status_code == 400
        assert response.json()["message"].startswith("Insufficient Sick Leave Balance.")

    def test_invalid_leave_type(self, as_user, employee_user):
        response = submit(as_user(employee_user), leave_type="Sabbatical")
        assert response.json()["message"] == "Invalid Leave Type."

    def test_blank_reason_is_rejected(self, as_user, employee_user):
        assert submit(as_user(employee_user), reason="").status_code == 400

    def test_admin_without_employee_record_cannot_submit(self, as_user, admin_user):
        response = submit(as_user(admin_user))
        assert response.status_code == 400
        assert response.json()["message"] == "Employee record not found for current user."

    def test_summary_reports_balances(self, as_user, employee_user):
        client = as_user(employee_user)
        submit(client)
        data = client.get(f"{URL}summary/").json()["data"]
        assert data["has_pending_request"] is True
        assert data["annual_leave_balance"] == 20


# ---------------------------------------------------------------------------
# Visibility
# ---------------------------------------------------------------------------

@pytest.mark.django_db
class TestVisibility:
    @pytest.fixture
    def requests(self, employee_user, second_employee_user, manager_user, other_manager_user):
        return {
            "employee": pending_request(employee_user),
            "second": pending_request(second_employee_user),
            "manager": pending_request(manager_user),
            "other_manager": pending_request(other_manager_user),
        }

    def ids(self, client, **params):
        return {row["id"] for row in client.get(URL, params).json()["results"]}

    def test_admin_sees_everything(self, as_user, admin_user, requests):
        assert self.ids(as_user(admin_user)) == {r.id for r in requests.values()}

    def test_manager_sees_employees_and_self(self, as_user, manager_user, requests):
        assert self.ids(as_user(manager_user)) == {
            requests["employee"].id, requests["second"].id, requests["manager"].id,
        }

    def test_employee_sees_only_own(self, as_user, employee_user, requests):
        assert self.ids(as_user(employee_user)) == {requests["employee"].id}

    def test_manager_cannot_open_other_managers_request(self, as_user, manager_user, requests):
        response = as_user(manager_user).get(f"{URL}{requests['other_manager'].id}/")
        assert response.status_code == 403

    def test_employee_cannot_open_colleagues_request(self, as_user, employee_user, requests):
        assert as_user(employee_user).get(f"{URL}{requests['second'].id}/").status_code == 403

    def test_missing_request_is_404(self, as_user, admin_user, db):
        response = as_user(admin_user).get(f"{URL}9999/")
        assert response.status_code == 404
        assert response.json()["message"] == "Leave request not found"

    def test_status_filter(self, as_user, admin_user, requests):
        requests["second"].status = LeaveStatus.REJECTED
        requests["second"].save()
        client = as_user(admin_user)
        assert self.ids(client, status="rejected") == {requests["second"].id}
        assert client.get(URL, {"status": "Bogus"}).status_code == 400

    def test_pending_counts_follow_visibility(self, as_user, manager_user, employee_user, requests):
        counts = as_user(manager_user).get("/api/notifications/counts/").json()["data"]
        assert counts["pending_leave_requests"] == 3

        counts = as_user(employee_user).get("/api/notifications/counts/").json()["data"]
        assert counts["pending_leave_requests"] == 0


# ---------------------------------------------------------------------------
# Decisions
# ---------------------------------------------------------------------------

@pytest.mark.django_db
class TestDecide:
    def status_url(self, leave_request):
        return f"{URL}{leave_request.id}/status/"

    def test_manager_approves_and_balance_is_deducted(self, as_user, manager_user, employee_user):
        leave_request = pending_request(employee_user)

        response = as_user(manager_user).put(
            self.status_url(leave_request), {"status": "Approved", "comments": "Enjoy"}, format="json"
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "Approved"
        assert data["approved_by_name"] == "Department Manager"
        assert data["approved_at"] is not None

        employee = employee_user.employee
        employee.refresh_from_db()
        assert employee.annual_leave_balance == 17

        note = Notification.objects.get(recipient=employee_user)
        assert note.message == "Your Annual leave request (2030-01-07 to 2030-01-09) was approved: Enjoy"

    def test_reject_requires_comments(self, as_user, manager_user, employee_user):
        leave_request = pending_request(employee_user)
        client = as_user(manager_user)

        response = client.put(self.status_url(leave_request), {"status": "Rejected"}, format="json")
        assert response.status_code == 400
        assert response.json()["message"] == "Please provide a reason for rejecting this leave request."

        response = client.put(
            self.status_url(leave_request), {"status": "Rejected", "comments": "Release week"}, format="json"
        )
        assert response.status_code == 200
        employee_user.employee.refresh_from_db()
        assert employee_user.employee.annual_leave_balance == 20

    def test_cannot_revert_to_pending(self, as_user, admin_user, employee_user):
        leave_request = pending_request(employee_user)
        response = as_user(admin_user).put(self.status_url(leave_request), {"status": "Pending"}, format="json")
        assert response.json()["message"] == "Cannot revert to Pending."

    def test_cannot_decide_twice(self, as_user, admin_user, employee_user):
        leave_request = pending_request(employee_user)
        client = as_user(admin_user)
        client.put(self.status_url(leave_request), {"status": "Approved"}, format="json")

        response = client.put(self.status_url(leave_request), {"status": "Approved"}, format="json")
        assert response.status_code == 400
        employee_user.employee.refresh_from_db()
        assert employee_user.employee.annual_leave_balance == 17

    def test_manager_cannot_decide_own_request(self, as_user, manager_user):
        leave_request = pending_request(manager_user)
        response = as_user(manager_user).put(self.status_url(leave_request), {"status": "Approved"}, format="json")
        assert response.status_code == 403

    def test_manager_cannot_decide_other_managers_request(self, as_user, manager_user, other_manager_user):
        leave_request = pending_request(other_manager_user)
        response = as_user(manager_user).put(self.status_url(leave_request), {"status": "Approved"}, format="json")
        assert response.status_code == 403

    def test_admin_decides_managers_request(self, as_user, admin_user, manager_user):
        leave_request = pending_request(manager_user)
        response = as_user(admin_user).patch(self.status_url(leave_request), {"status": "Approved"}, format="json")

        assert response.status_code == 200
        assert response.json()["data"]["approved_by_id"] is None

    def test_employee_cannot_decide(self, as_user, employee_user, second_employee_user):
        leave_request = pending_request(second_employee_user)
        response = as_user(employee_user).put(self.status_url(leave_request), {"status": "Approved"}, format="json")
        assert response.status_code == 403

    def test_approval_rechecks_balance(self, as_user, admin_user, employee_user):
        leave_request = pending_request(employee_user)
        employee = employee_user.employee
        employee.annual_leave_balance = 1
        employee.save()

        response = as_user(admin_user).put(self.status_url(leave_request), {"status": "Approved"}, format="json")

        assert response.status_code == 400
        leave_request.refresh_from_db()
        assert leave_request.status == LeaveStatus.PENDING

    def test_unpaid_approval_leaves_balances_alone(self, as_user, admin_user, employee_user):
        leave_request = pending_request(employee_user, leave_type="Unpaid")
        as_user(admin_user).put(self.status_url(leave_request), {"status": "Approved"}, format="json")

        employee = employee_user.employee
        employee.refresh_from_db()
        assert (employee.annual_leave_balance, employee.sick_leave_balance) == (20, 10)


# ---------------------------------------------------------------------------
# Cancel / delete
# ---------------------------------------------------------------------------

@pytest.mark.django_db
class TestCancelDelete:
    def test_owner_cancels_pending_request(self, as_user, employee_user):
        leave_request = pending_request(employee_user)
        response = as_user(employee_user).post(f"{URL}{leave_request.id}/cancel/")

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "Cancelled"

    def test_cannot_cancel_decided_request(self, as_user, employee_user):
        leave_request = pending_request(employee_user)
        leave_request.status = LeaveStatus.APPROVED
        leave_request.save()
        assert as_user(employee_user).post(f"{URL}{leave_request.id}/cancel/").status_code == 400

    def test_manager_cannot_cancel_for_employee(self, as_user, manager_user, employee_user):
        leave_request = pending_request(employee_user)
        assert as_user(manager_user).post(f"{URL}{leave_request.id}/cancel/").status_code == 403

    def test_cancel_frees_the_pending_slot(self, as_user, employee_user):
        client = as_user(employee_user)
        leave_id = submit(client).json()["data"]["id"]
        client.post(f"{URL}{leave_id}/cancel/")
        assert submit(client, start="2030-03-01", end="2030-03-01").status_code == 201

    def test_admin_deletes(self, as_user, admin_user, employee_user):
        leave_request = pending_request(employee_user)
        assert as_user(admin_user).delete(f"{URL}{leave_request.id}/").status_code == 200
        assert not LeaveRequest.objects.filter(pk=leave_request.pk).exists()

    def test_manager_cannot_delete(self, as_user, manager_user, employee_user):
        leave_request = pending_request(employee_user)
        assert as_user(manager_user).delete(f"{URL}{leave_request.id}/").status_code == 403

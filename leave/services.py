# ===========================================================
# leave/services.py
# ===========================================================
"""
Leave request workflow: submission, approval / rejection with balance
deduction, cancellation and role-aware visibility.

Visibility and decision rights:

* Admin: every request; may decide any request except their own.
* Manager: requests from plain employees plus their own; may decide the
  former. Requests from other managers (and admins) are reserved for
  administrators.
* Employee: own requests only; never decides.
"""

import logging

from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from employee.models import Employee
from ems_backend.exceptions import AccessDenied, NotFoundError, RuleViolation
from notifications.service import NotificationService
from notifications.signals import leave_cancelled, leave_decided, leave_submitted
from .models import LeaveRequest, LeaveStatus
from .policy import POLICIES, check_balance, check_eligibility, deduct_balance

logger = logging.getLogger("leave")

PRIVILEGED_ROLES = ["Manager", "Admin"]


# ===========================================================
# VISIBILITY
# ===========================================================
def _privileged_requester():
    """Requests whose employee holds a Manager/Admin account."""
    return Q(employee__user__role__in=PRIVILEGED_ROLES) | Q(employee__user__is_superuser=True)


def visible_requests(user):
    qs = LeaveRequest.objects.select_related(
        "employee", "employee__user", "employee__department", "approved_by"
    )
    if user.is_admin():
        return qs

    employee = user.employee
    if user.is_manager():
        scope = ~_privileged_requester()
        if employee is not None:
            scope |= Q(employee=employee)
        return qs.filter(scope)

    if employee is None:
        return qs.none()
    return qs.filter(employee=employee)


def _is_own(user, leave_request):
    employee = user.employee
    return employee is not None and leave_request.employee_id == employee.id


def can_view(user, leave_request):
    if user.is_admin() or _is_own(user, leave_request):
        return True
    return user.is_manager() and not leave_request.employee.is_manager


def decision_error(user, leave_request):
    """Why ``user`` may not decide ``leave_request``; None when allowed."""
    if not user.is_manager_or_admin():
        return "Only managers or administrators can approve or reject leave requests."
    if _is_own(user, leave_request):
        return "You cannot approve or reject your own leave request."
    if user.is_manager() and leave_request.employee.is_manager:
        return "Only administrators can approve or reject leave requests from managers."
    return None


def can_decide(user, leave_request):
    return decision_error(user, leave_request) is None


def get_visible(user, pk):
    leave_request = LeaveRequest.objects.select_related(
        "employee", "employee__user", "approved_by"
    ).filter(pk=pk).first()
    if leave_request is None:
        raise NotFoundError("Leave request not found")
    if not can_view(user, leave_request):
        raise AccessDenied("You are not allowed to view this leave request.")
    return leave_request


def has_pending(employee):
    return employee is not None and LeaveRequest.objects.for_employee(employee).pending().exists()


# ===========================================================
# SUBMIT
# ===========================================================
def _require_employee(user):
    employee = user.employee
    if employee is None:
        raise RuleViolation("Employee record not found for current user.")
    return employee


def parse_status(value):
    text = str(value or "").strip().lower()
    for status in LeaveStatus:
        if status.value.lower() == text:
            return status
    raise RuleViolation("Invalid Status.")


@transaction.atomic
def submit(user, *, leave_type, start_date, end_date, reason):
    # Row lock serializes concurrent submissions by the same employee.
    employee = Employee.objects.select_for_update().get(pk=_require_employee(user).pk)

    leave_type, days = check_eligibility(employee, leave_type, start_date, end_date)

    if has_pending(employee):
        raise RuleViolation("You already have a pending leave request.")

    reason = (reason or "").strip()
    if not reason:
        raise RuleViolation("Reason is required.")
    if len(reason) > 500:
        raise RuleViolation("Reason cannot exceed 500 characters.")

    leave_request = LeaveRequest.objects.create(
        employee=employee,
        leave_type=leave_type,
        start_date=start_date,
        end_date=end_date,
        reason=reason,
    )
    logger.info(
        f"📝 Leave request #{leave_request.id} ({leave_type}, {days} day(s)) submitted by {employee.full_name}"
    )
    leave_submitted.send(sender=LeaveRequest, leave_request=leave_request)
    return leave_request


# ===========================================================
# DECIDE
# ===========================================================
@transaction.atomic
def decide(user, leave_request, status, comments=""):
    """Approve or reject a pending request. Approval deducts the balance."""
    if not user.is_manager_or_admin():
        raise AccessDenied("Only managers or administrators can approve or reject leave requests.")

    status = parse_status(status)
    if status == LeaveStatus.PENDING:
        raise RuleViolation("Cannot revert to Pending.")
    if status not in (LeaveStatus.APPROVED, LeaveStatus.REJECTED):
        raise RuleViolation("Leave requests can only be approved or rejected.")

    leave_request = (
        LeaveRequest.objects.select_for_update()
        .select_related("employee", "employee__user")
        .get(pk=leave_request.pk)
    )

    error = decision_error(user, leave_request)
    if error:
        raise AccessDenied(error)
    if not leave_request.is_pending:
        raise RuleViolation(f"This leave request has already been {leave_request.status.lower()}.")

    comments = (comments or "").strip()
    if status == LeaveStatus.REJECTED and not comments:
        raise RuleViolation("Please provide a reason for rejecting this leave request.")

    if status == LeaveStatus.APPROVED:
        employee = Employee.objects.select_for_update().get(pk=leave_request.employee_id)
        days = leave_request.total_days
        check_balance(employee, POLICIES[leave_request.leave_type], days)
        field = deduct_balance(employee, leave_request.leave_type, days)
        if field:
            employee.save(update_fields=[field, "updated_at"])
        leave_request.employee = employee

    leave_request.status = status
    leave_request.approver_comments = comments
    leave_request.approved_by = user.employee
    leave_request.approved_at = timezone.now()
    leave_request.save(update_fields=["status", "approver_comments", "approved_by", "approved_at"])

    logger.info(f"✅ Leave request #{leave_request.id} {status.lower()} by {user.email}")
    leave_decided.send(sender=LeaveRequest, leave_request=leave_request, decided_by=user)
    return leave_request


# ===========================================================
# CANCEL / DELETE
# ===========================================================
@transaction.atomic
def cancel(user, leave_request):
    leave_request = LeaveRequest.objects.select_for_update().get(pk=leave_request.pk)
    if not _is_own(user, leave_request):
        raise AccessDenied("You can only cancel your own leave requests.")
    if not leave_request.is_pending:
        raise RuleViolation("Only pending leave requests can be cancelled.")

    leave_request.status = LeaveStatus.CANCELLED
    leave_request.save(update_fields=["status"])
    logger.info(f"Leave request #{leave_request.id} cancelled by {user.email}")
    leave_cancelled.send(sender=LeaveRequest, leave_request=leave_request)
    return leave_request


def delete(user, leave_request):
    if not user.is_admin():
        raise AccessDenied("Only administrators can delete leave requests.")
    request_id = leave_request.id
    leave_request.delete()
    logger.info(f"🗑️ Leave request #{request_id} deleted by {user.email}")
    NotificationService.send_system_update("LeaveRequests")

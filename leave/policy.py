# ===========================================================
# leave/policy.py
# ===========================================================
"""
Leave eligibility rules.

Each leave type is described by one ``LeavePolicy`` row: an optional
per-request day cap, an optional balance field on Employee and an
optional gender restriction. ``check_eligibility`` evaluates the row for
a requested range and raises RuleViolation with a user-facing message
on the first rule that fails.
"""

from dataclasses import dataclass
from typing import Optional

from ems_backend.exceptions import RuleViolation
from .models import LeaveType


@dataclass(frozen=True)
class LeavePolicy:
    leave_type: str
    max_days: Optional[int] = None
    max_days_message: str = ""
    balance_field: Optional[str] = None
    gender: Optional[str] = None
    gender_message: str = ""


POLICIES = {
    LeaveType.ANNUAL: LeavePolicy(LeaveType.ANNUAL, balance_field="annual_leave_balance"),
    LeaveType.SICK: LeavePolicy(LeaveType.SICK, balance_field="sick_leave_balance"),
    LeaveType.PERSONAL: LeavePolicy(
        LeaveType.PERSONAL,
        max_days=3,
        max_days_message="Personal leave cannot exceed 3 consecutive days per request.",
        balance_field="personal_leave_balance",
    ),
    LeaveType.UNPAID: LeavePolicy(
        LeaveType.UNPAID,
        max_days=30,
        max_days_message="Unpaid leave cannot exceed 30 days per request.",
    ),
    LeaveType.MATERNITY: LeavePolicy(
        LeaveType.MATERNITY,
        max_days=180,
        max_days_message="Maternity leave cannot exceed 180 days.",
        gender="Female",
        gender_message="Maternity leave is only applicable for female employees.",
    ),
    LeaveType.PATERNITY: LeavePolicy(
        LeaveType.PATERNITY,
        max_days=15,
        max_days_message="Paternity leave cannot exceed 15 days.",
        gender="Male",
        gender_message="Paternity leave is only applicable for male employees.",
    ),
}


def parse_leave_type(value):
    """Case-insensitive lookup of a LeaveType; RuleViolation when unknown."""
    text = str(value or "").strip().lower()
    for leave_type in LeaveType:
        if leave_type.value.lower() == text:
            return leave_type
    raise RuleViolation("Invalid Leave Type.")


def requested_days(start_date, end_date):
    return (end_date - start_date).days + 1


def employee_gender(employee):
    if employee.gender:
        return employee.gender
    user = employee.user
    return user.gender if user is not None else ""


def check_balance(employee, policy, days):
    if policy.balance_field is None:
        return
    remaining = getattr(employee, policy.balance_field)
    if days > remaining:
        raise RuleViolation(
            f"Insufficient {policy.leave_type.label} Leave Balance. "
            f"You requested {days} days, but only have {remaining} days remaining."
        )


def check_eligibility(employee, leave_type, start_date, end_date):
    """
    Validate a prospective request. Returns ``(LeaveType, days)``.

    Rules run in order: type, date order, per-type cap and gender,
    balance. The one-pending-request rule lives in the service since it
    needs the database.
    """
    leave_type = parse_leave_type(leave_type)

    if end_date < start_date:
        raise RuleViolation("End Date cannot be before Start Date.")

    days = requested_days(start_date, end_date)
    policy = POLICIES[leave_type]

    if policy.gender and employee_gender(employee) != policy.gender:
        raise RuleViolation(policy.gender_message)

    if policy.max_days is not None and days > policy.max_days:
        raise RuleViolation(policy.max_days_message)

    check_balance(employee, policy, days)
    return leave_type, days


def deduct_balance(employee, leave_type, days):
    """Subtract approved days from the matching balance. Returns the field touched, if any."""
    policy = POLICIES[parse_leave_type(leave_type)]
    if policy.balance_field is None:
        return None
    setattr(employee, policy.balance_field, getattr(employee, policy.balance_field) - days)
    return policy.balance_field

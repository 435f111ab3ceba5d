# ===========================================================
# users/auth.py
# ===========================================================
"""
Credential checking shared by the JWT login endpoint and the
session (cookie) login page, so both honour the same lockout rules.
"""

import logging

from django.contrib.auth import get_user_model

from ems_backend.exceptions import AuthenticationError

logger = logging.getLogger("users")

LOCKED_MESSAGE = "Account locked out. Please try again later."
INVALID_MESSAGE = "Invalid email or password"


def verify_credentials(email, password):
    """
    Return the active user for ``email``/``password``.

    Raises AuthenticationError for unknown emails, wrong passwords,
    inactive accounts and accounts inside their lockout window. Every
    wrong password counts toward the lockout threshold.
    """
    User = get_user_model()

    if not email or not password:
        raise AuthenticationError(INVALID_MESSAGE)

    user = User.objects.filter(email__iexact=email.strip()).first()
    if user is None or not user.is_active:
        logger.warning(f"Login failed for unknown or inactive account: {email}")
        raise AuthenticationError(INVALID_MESSAGE)

    if user.account_locked:
        if not user.lock_expired():
            logger.warning(f"Login refused, account locked: {user.email}")
            raise AuthenticationError(LOCKED_MESSAGE)
        user.unlock_account()

    if not user.check_password(password):
        user.increment_failed_attempts()
        if user.account_locked:
            raise AuthenticationError(LOCKED_MESSAGE)
        logger.warning(f"Login failed for {user.email} ({user.failed_login_attempts} attempt(s))")
        raise AuthenticationError(INVALID_MESSAGE)

    user.reset_login_attempts()
    logger.info(f"✅ Login successful: {user.email}")
    return user


def user_payload(user):
    """User block returned by the login and me endpoints."""
    employee = user.employee
    return {
        "id": user.id,
        "email": user.email,
        "full_name": user.full_name,
        "roles": user.roles,
        "employee_id": employee.id if employee else None,
    }

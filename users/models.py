# ===========================================================
# users/models.py
# ===========================================================

from datetime import timedelta
import logging

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin, BaseUserManager
from django.db import models, transaction
from django.utils import timezone

from ems_backend.conf import ems_setting

logger = logging.getLogger("users")


# ===========================================================
# USER MANAGER
# ===========================================================
class UserManager(BaseUserManager):
    """Email-based user manager."""

    use_in_migrations = True

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("Users must have an email address.")

        email = self.normalize_email(email)
        extra_fields.setdefault("is_active", True)
        extra_fields.setdefault("role", User.ROLE_EMPLOYEE)

        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)

        logger.info(f"User created: {email} ({user.role})")
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """Create and save a superuser."""
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", User.ROLE_ADMIN)

        if not password:
            raise ValueError("Superuser must have a password.")

        return self.create_user(email=email, password=password, **extra_fields)


# ===========================================================
# USER MODEL
# ===========================================================
class User(AbstractBaseUser, PermissionsMixin):
    """
    Login identity for the EMS. Authorization is driven by ``role``;
    the HR record (department, balances, attendance) lives on the
    linked ``employee.Employee``.
    """

    ROLE_ADMIN = "Admin"
    ROLE_MANAGER = "Manager"
    ROLE_EMPLOYEE = "Employee"

    ROLE_CHOICES = [
        (ROLE_ADMIN, "Admin"),
        (ROLE_MANAGER, "Manager"),
        (ROLE_EMPLOYEE, "Employee"),
    ]

    GENDER_CHOICES = [
        ("Male", "Male"),
        ("Female", "Female"),
        ("Other", "Other"),
    ]

    # ---------- CORE ----------
    email = models.EmailField(unique=True, db_index=True)
    full_name = models.CharField(max_length=150, blank=True)
    role = models.CharField(
        max_length=20,
        choices=ROLE_CHOICES,
        default=ROLE_EMPLOYEE,
        db_index=True,
    )
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES, blank=True)

    # ---------- SECURITY ----------
    failed_login_attempts = models.PositiveIntegerField(default=0)
    account_locked = models.BooleanField(default=False)
    locked_at = models.DateTimeField(null=True, blank=True)

    # ---------- DJANGO FLAGS ----------
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # ---------- AUDIT ----------
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["full_name"]

    class Meta:
        verbose_name = "User"
        verbose_name_plural = "Users"
        ordering = ["email"]
        indexes = [
            models.Index(fields=["role", "is_active"], name="user_role_active_idx"),
        ]

    def __str__(self):
        return f"{self.full_name} <{self.email}>" if self.full_name else self.email

    def get_full_name(self):
        return self.full_name or self.email

    def get_short_name(self):
        return (self.full_name or self.email).split(" ")[0]

    # ======================================================
    # ROLE HELPERS
    # ======================================================
    def is_admin(self):
        return self.role == self.ROLE_ADMIN or self.is_superuser

    def is_manager(self):
        return self.role == self.ROLE_MANAGER and not self.is_superuser

    def is_employee(self):
        return self.role == self.ROLE_EMPLOYEE and not self.is_superuser

    def is_manager_or_admin(self):
        return self.is_admin() or self.is_manager()

    @property
    def roles(self):
        return [self.ROLE_ADMIN] if self.is_admin() else [self.role]

    @property
    def employee(self):
        """Linked Employee record, or None for accounts without one."""
        try:
            return self.employee_profile
        except models.ObjectDoesNotExist:
            return None

    # ======================================================
    # ACCOUNT LOCKOUT & LOGIN ATTEMPTS
    # ======================================================
    def lock_expired(self, now=None):
        if not self.account_locked or not self.locked_at:
            return True
        now = now or timezone.now()
        return now - self.locked_at >= timedelta(minutes=ems_setting("LOGIN_LOCK_MINUTES"))

    @transaction.atomic
    def lock_account(self):
        """Lock user account due to failed login attempts."""
        self.account_locked = True
        self.locked_at = timezone.now()
        self.save(update_fields=["account_locked", "locked_at", "updated_at"])
        logger.warning(f"🔒 Account locked: {self.email}")

    @transaction.atomic
    def unlock_account(self):
        """Unlock user account and reset failed attempts."""
        self.account_locked = False
        self.locked_at = None
        self.failed_login_attempts = 0
        self.save(update_fields=["account_locked", "locked_at", "failed_login_attempts", "updated_at"])
        logger.info(f"🔓 Account unlocked: {self.email}")

    @transaction.atomic
    def increment_failed_attempts(self):
        """Count a failed login and lock once the threshold is reached."""
        self.failed_login_attempts += 1
        self.save(update_fields=["failed_login_attempts", "updated_at"])
        if self.failed_login_attempts >= ems_setting("LOGIN_LOCK_THRESHOLD"):
            self.lock_account()

    def reset_login_attempts(self):
        if self.failed_login_attempts or self.account_locked:
            self.failed_login_attempts = 0
            self.account_locked = False
            self.locked_at = None
            self.save(update_fields=["failed_login_attempts", "account_locked", "locked_at", "updated_at"])

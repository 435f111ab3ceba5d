# ===========================================================
# users/apps.py
# ===========================================================

from django.apps import AppConfig
import logging

logger = logging.getLogger(__name__)


class UsersConfig(AppConfig):
    """
    Accounts, roles and authentication (JWT + session).
    Signals are imported in ready() to avoid circular imports.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "users"
    verbose_name = "User Management"

    def ready(self):
        import users.signals  # noqa: F401
        logger.debug("[UsersConfig] users.signals loaded.")

# ===============================================
# employee/apps.py
# ===============================================

from django.apps import AppConfig
from django.db.models.signals import post_migrate


class EmployeeConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "employee"
    verbose_name = "Employee Management"

    def ready(self):
        import employee.signals  # noqa: F401
        from .seed import seed_after_migrate

        post_migrate.connect(seed_after_migrate, sender=self)

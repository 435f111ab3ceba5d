# ===========================================================
# employee/signals.py
# ===========================================================
"""
Publishes system updates whenever employees, departments or job roles
change so pages listening on those topics can refresh.

Runs after commit: a rolled-back save never reaches clients.
"""
# ===========================================================

from django.db import transaction
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver
import logging

from notifications.service import NotificationService
from .models import Department, Employee, JobRole

logger = logging.getLogger("employee")


@receiver(post_save, sender=Employee)
@receiver(post_delete, sender=Employee)
def publish_employee_change(sender, instance, **kwargs):
    employee_id = instance.id
    transaction.on_commit(lambda: NotificationService.send_employee_update(employee_id))


@receiver(post_save, sender=Department)
@receiver(post_delete, sender=Department)
def publish_department_change(sender, instance, **kwargs):
    transaction.on_commit(lambda: NotificationService.send_system_update("Departments"))


@receiver(post_save, sender=JobRole)
@receiver(post_delete, sender=JobRole)
def publish_job_role_change(sender, instance, **kwargs):
    transaction.on_commit(lambda: NotificationService.send_system_update("Roles"))

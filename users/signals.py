# ===========================================================
# users/signals.py
# ===========================================================
# Publishes a "User:<id>" system update whenever an account changes
# so open sessions can refresh their profile / role information.
# ===========================================================

from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver
import logging

from notifications.service import NotificationService

logger = logging.getLogger("users")


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def publish_user_update(sender, instance, created, **kwargs):
    NotificationService.send_user_update(instance.id)
    if created:
        NotificationService.send_system_update("Users")
        logger.debug(f"[User Signal] New account published: {instance.email}")

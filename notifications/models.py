# ===========================================================
# notifications/models.py
# ===========================================================
from django.conf import settings
from django.core.cache import cache
from django.db import models
from django.utils import timezone
import logging

logger = logging.getLogger(__name__)


class NotificationQuerySet(models.QuerySet):
    """Custom QuerySet for common notification queries."""

    def unread(self):
        return self.filter(is_read=False)

    def read(self):
        return self.filter(is_read=True)

    def for_user(self, user):
        return self.filter(recipient=user)

    def by_category(self, category):
        return self.filter(category=category)


class NotificationManager(models.Manager):
    """Custom manager with helper methods for notifications."""

    def get_queryset(self):
        return NotificationQuerySet(self.model, using=self._db)

    def unread(self):
        return self.get_queryset().unread()

    def for_user(self, user):
        return self.get_queryset().for_user(user)

    def create_for_users(self, users, message, **kwargs):
        """
        Create one notification per recipient in a single query.

        Returns:
            List of created Notification instances
        """
        notifications = [self.model(recipient=user, message=message, **kwargs) for user in users]
        created = self.bulk_create(notifications)
        logger.info(f"Created {len(created)} notification(s): {message[:60]}")
        return created

    def bulk_mark_read(self, user):
        """
        Mark all unread notifications as read for a user.

        Returns:
            Number of notifications marked as read
        """
        count = self.filter(recipient=user, is_read=False).update(is_read=True, read_at=timezone.now())
        cache.delete(f"unread_count_{user.id}")
        logger.info(f"Marked {count} notifications as read for {user}")
        return count


class Notification(models.Model):
    """A persisted message delivered to one user's inbox."""

    CATEGORY_CHOICES = [
        ("system", "System"),
        ("leave", "Leave"),
        ("attendance", "Attendance"),
        ("employee", "Employee"),
        ("department", "Department"),
    ]

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
    )
    message = models.CharField(max_length=500)
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES, default="system", db_index=True)
    link = models.CharField(max_length=255, blank=True, default="")
    is_read = models.BooleanField(default=False, db_index=True)
    read_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    objects = NotificationManager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["recipient", "is_read"], name="notif_recipient_read_idx"),
        ]

    def __str__(self):
        return f"{self.recipient} - {self.message[:40]}"

    def mark_as_read(self):
        if not self.is_read:
            self.is_read = True
            self.read_at = timezone.now()
            self.save(update_fields=["is_read", "read_at"])

# ===============================================
# notifications/signals.py
# ===============================================
"""
Signal handlers for the notifications app.

Handles:
- Leave request notifications (submitted / decided / cancelled)
- Attendance system updates
- Cache invalidation
"""

from django.core.cache import cache
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver, Signal
import logging

from .models import Notification
from .service import NotificationService

logger = logging.getLogger(__name__)


# ===========================================================
# Custom Signals
# ===========================================================

# Leave-related signals
leave_submitted = Signal()  # Args: leave_request
leave_decided = Signal()  # Args: leave_request, decided_by
leave_cancelled = Signal()  # Args: leave_request

# Attendance-related signals
attendance_recorded = Signal()  # Args: attendance, action


# ===========================================================
# Leave fan-out
# ===========================================================
@receiver(leave_submitted)
def notify_leave_submitted(sender, leave_request, **kwargs):
    employee = leave_request.employee
    NotificationService.send_to_admins_and_managers(
        f"New Leave Request from {employee.full_name}",
        category="leave",
        link=f"/leave-requests/{leave_request.id}/",
        exclude=employee.user,
    )
    NotificationService.send_system_update("LeaveRequests")


@receiver(leave_decided)
def notify_leave_decided(sender, leave_request, decided_by, **kwargs):
    verb = leave_request.status.lower()
    message = (
        f"Your {leave_request.leave_type} leave request "
        f"({leave_request.start_date:%Y-%m-%d} to {leave_request.end_date:%Y-%m-%d}) was {verb}"
    )
    if leave_request.approver_comments:
        message += f": {leave_request.approver_comments}"
    NotificationService.send_to_user(
        leave_request.employee.user,
        message[:500],
        category="leave",
        link=f"/leave-requests/{leave_request.id}/",
    )
    NotificationService.send_system_update("LeaveRequests")
    NotificationService.send_employee_update(leave_request.employee_id)
    logger.info(f"Leave request #{leave_request.id} {verb} by {decided_by.email}")


@receiver(leave_cancelled)
def notify_leave_cancelled(sender, leave_request, **kwargs):
    NotificationService.send_system_update("LeaveRequests")


# ===========================================================
# Attendance updates
# ===========================================================
@receiver(attendance_recorded)
def publish_attendance_update(sender, attendance, action, **kwargs):
    NotificationService.send_system_update("Attendance")
    logger.debug(f"Attendance {action} published for employee {attendance.employee_id}")


# ===========================================================
# Cache Invalidation Signals
# ===========================================================
@receiver(post_save, sender=Notification)
def invalidate_notification_cache_on_save(sender, instance, created, **kwargs):
    cache.delete(f"unread_count_{instance.recipient_id}")


@receiver(post_delete, sender=Notification)
def invalidate_notification_cache_on_delete(sender, instance, **kwargs):
    cache.delete(f"unread_count_{instance.recipient_id}")

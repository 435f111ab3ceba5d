# ===========================================================
# notifications/service.py
# ===========================================================
"""
Notification fan-out.

Two channels:

* inbox messages: one ``Notification`` row per recipient, addressed to a
  single user, to every user holding one of a set of roles, or to all
  active users;
* system updates: a per-topic version counter kept in the cache
  ("LeaveRequests", "Attendance", "Employee:<id>", ...). Clients poll
  the counters and reload the affected view whenever a version moves.
"""

import logging

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.db.models import Q
from django.utils import timezone

from .models import Notification

logger = logging.getLogger("notifications")

UPDATE_KEY = "ems:system_update:{topic}"
GLOBAL_TOPICS = ("LeaveRequests", "Attendance", "Employees", "Departments", "Roles", "Users")


class NotificationService:

    # ======================================================
    # INBOX MESSAGES
    # ======================================================
    @staticmethod
    def send_to_user(user, message, category="system", link=""):
        if user is None or not user.is_active:
            return None
        notification = Notification.objects.create(
            recipient=user, message=message, category=category, link=link
        )
        cache.delete(f"unread_count_{user.id}")
        logger.info(f"📨 Notification to {user.email}: {message[:60]}")
        return notification

    @classmethod
    def send_to_roles(cls, roles, message, category="system", link="", exclude=None):
        User = get_user_model()
        query = Q(role__in=roles)
        if "Admin" in roles:
            query |= Q(is_superuser=True)
        recipients = User.objects.filter(query, is_active=True)
        if exclude is not None:
            recipients = recipients.exclude(pk=exclude.pk)
        return cls._deliver(list(recipients), message, category, link)

    @classmethod
    def send_to_admins_and_managers(cls, message, category="system", link="", exclude=None):
        return cls.send_to_roles(["Admin", "Manager"], message, category, link, exclude)

    @classmethod
    def send_to_admins_only(cls, message, category="system", link="", exclude=None):
        return cls.send_to_roles(["Admin"], message, category, link, exclude)

    @classmethod
    def broadcast(cls, message, category="system", link=""):
        User = get_user_model()
        return cls._deliver(list(User.objects.filter(is_active=True)), message, category, link)

    @staticmethod
    def _deliver(recipients, message, category, link):
        created = Notification.objects.create_for_users(
            recipients, message, category=category, link=link
        )
        cache.delete_many([f"unread_count_{user.id}" for user in recipients])
        return created

    # ======================================================
    # SYSTEM UPDATES
    # ======================================================
    @staticmethod
    def send_system_update(topic):
        key = UPDATE_KEY.format(topic=topic)
        cache.add(key, 0, timeout=None)
        try:
            version = cache.incr(key)
        except ValueError:
            # Key evicted between add() and incr()
            cache.set(key, 1, timeout=None)
            version = 1
        logger.debug(f"System update '{topic}' -> v{version}")
        return version

    @classmethod
    def send_employee_update(cls, employee_id):
        cls.send_system_update("Employees")
        return cls.send_system_update(f"Employee:{employee_id}")

    @classmethod
    def send_user_update(cls, user_id):
        return cls.send_system_update(f"User:{user_id}")

    @staticmethod
    def update_versions(topics):
        keys = {UPDATE_KEY.format(topic=topic): topic for topic in topics}
        found = cache.get_many(list(keys))
        return {topic: found.get(key, 0) for key, topic in keys.items()}

    @classmethod
    def versions_for(cls, user):
        """Versions of every topic the given user listens to."""
        topics = list(GLOBAL_TOPICS) + [f"User:{user.id}"]
        employee = user.employee
        if employee is not None:
            topics.append(f"Employee:{employee.id}")
        return cls.update_versions(topics)

    # ======================================================
    # COUNTERS
    # ======================================================
    @staticmethod
    def pending_leave_count(user):
        """Pending leave requests the user is allowed to act on or see."""
        from leave.services import visible_requests

        if not user.is_manager_or_admin():
            return 0
        return visible_requests(user).filter(status="Pending").count()

    @staticmethod
    def pending_attendance_count(user):
        """Today's attendance records still waiting for a check-out."""
        from attendance.models import Attendance

        if not user.is_manager_or_admin():
            return 0
        return Attendance.objects.filter(
            date=timezone.localdate(), check_out_time__isnull=True, check_in_time__isnull=False
        ).count()

    @staticmethod
    def unread_count(user):
        key = f"unread_count_{user.id}"
        count = cache.get(key)
        if count is None:
            count = Notification.objects.for_user(user).unread().count()
            cache.set(key, count, 300)
        return count

from .service import NotificationService


def notification_counts(request):
    """Navbar badges for server-rendered pages."""
    user = getattr(request, "user", None)
    if user is None or not user.is_authenticated:
        return {}
    return {
        "nav_pending_leave": NotificationService.pending_leave_count(user),
        "nav_pending_attendance": NotificationService.pending_attendance_count(user),
        "nav_unread": NotificationService.unread_count(user),
    }

# ===============================================
# notifications/views.py
# ===============================================

from django.shortcuts import get_object_or_404
from rest_framework import generics
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView
import logging

from ems_backend.responses import ok
from .models import Notification
from .serializers import NotificationSerializer
from .service import NotificationService

logger = logging.getLogger(__name__)


# ===============================================================
# Notification List View (All Roles)
# ===============================================================
class NotificationListView(generics.ListAPIView):
    """
    GET /api/notifications/?status=unread|read|all&category=leave
    Inbox of the logged-in user, newest first.
    """
    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        qs = Notification.objects.for_user(self.request.user)

        status_filter = self.request.query_params.get("status", "all").lower()
        if status_filter == "unread":
            qs = qs.unread()
        elif status_filter == "read":
            qs = qs.read()

        category = self.request.query_params.get("category")
        if category and category in dict(Notification.CATEGORY_CHOICES):
            qs = qs.by_category(category)

        return qs


# ===============================================================
# Counters (badges)
# ===============================================================
class NotificationCountsView(APIView):
    """
    GET /api/notifications/counts/
    Pending leave / open attendance counters (role-aware) and unread inbox count.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        user = request.user
        return ok({
            "pending_leave_requests": NotificationService.pending_leave_count(user),
            "pending_attendance": NotificationService.pending_attendance_count(user),
            "unread": NotificationService.unread_count(user),
        })


class MarkNotificationReadView(APIView):
    """PATCH /api/notifications/<id>/read/"""
    permission_classes = [IsAuthenticated]

    def patch(self, request, pk):
        notification = get_object_or_404(Notification, pk=pk, recipient=request.user)
        notification.mark_as_read()
        return ok(NotificationSerializer(notification).data, "Notification marked as read")


class MarkAllReadView(APIView):
    """POST /api/notifications/read-all/"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        count = Notification.objects.bulk_mark_read(request.user)
        return ok({"marked_read": count}, f"{count} notification(s) marked as read")


# ===============================================================
# System update versions (polling)
# ===============================================================
class SystemUpdatesView(APIView):
    """
    GET /api/notifications/updates/
    Current version of every topic the user listens to. A client keeps the
    last map it saw and refreshes the matching screen when a version moves.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return ok(NotificationService.versions_for(request.user))

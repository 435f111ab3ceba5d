# ===============================================
# notifications/urls.py
# ===============================================

from django.urls import path

from .views import (
    NotificationListView,
    NotificationCountsView,
    MarkNotificationReadView,
    MarkAllReadView,
    SystemUpdatesView,
)

urlpatterns = [
    path("", NotificationListView.as_view(), name="notification-list"),
    path("counts/", NotificationCountsView.as_view(), name="notification-counts"),
    path("<int:pk>/read/", MarkNotificationReadView.as_view(), name="notification-read"),
    path("read-all/", MarkAllReadView.as_view(), name="notification-read-all"),
    path("updates/", SystemUpdatesView.as_view(), name="notification-updates"),
]

from django.urls import path

from .views import (
    LeaveRequestCancelView,
    LeaveRequestDetailView,
    LeaveRequestListCreateView,
    LeaveRequestStatusView,
    LeaveSummaryView,
)

urlpatterns = [
    path("", LeaveRequestListCreateView.as_view(), name="leave-list"),
    path("summary/", LeaveSummaryView.as_view(), name="leave-summary"),
    path("<int:pk>/", LeaveRequestDetailView.as_view(), name="leave-detail"),
    path("<int:pk>/status/", LeaveRequestStatusView.as_view(), name="leave-status"),
    path("<int:pk>/cancel/", LeaveRequestCancelView.as_view(), name="leave-cancel"),
]

from django.urls import path

from .views import (
    AttendanceListView,
    CheckInView,
    CheckOutView,
    HeatmapView,
    MarkAttendanceView,
    MonthlyReportView,
    TodayAttendanceView,
)

urlpatterns = [
    path("", AttendanceListView.as_view(), name="attendance-list"),
    path("checkin/", CheckInView.as_view(), name="attendance-checkin"),
    path("checkout/<int:pk>/", CheckOutView.as_view(), name="attendance-checkout"),
    path("today/", TodayAttendanceView.as_view(), name="attendance-today"),
    path("mark/", MarkAttendanceView.as_view(), name="attendance-mark"),
    path("heatmap/", HeatmapView.as_view(), name="attendance-heatmap"),
    path("report/", MonthlyReportView.as_view(), name="attendance-report"),
]

from django.urls import path

from .views import AttendanceTrendView, DashboardStatsView, DepartmentDistributionView

urlpatterns = [
    path("stats/", DashboardStatsView.as_view(), name="dashboard-stats"),
    path("department-distribution/", DepartmentDistributionView.as_view(), name="dashboard-distribution"),
    path("attendance-trend/", AttendanceTrendView.as_view(), name="dashboard-trend"),
]

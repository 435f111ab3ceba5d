# ===========================================================
# dashboard/views.py
# Dashboard JSON API (Manager / Admin)
# ===========================================================

from rest_framework.views import APIView

from ems_backend.responses import ok
from users.permissions import IsManagerOrAdmin
from . import services


class DashboardStatsView(APIView):
    """GET /api/dashboard/stats/"""
    permission_classes = [IsManagerOrAdmin]

    def get(self, request):
        return ok(services.api_stats())


class DepartmentDistributionView(APIView):
    """GET /api/dashboard/department-distribution/ active head count per department."""
    permission_classes = [IsManagerOrAdmin]

    def get(self, request):
        return ok(services.department_distribution())


class AttendanceTrendView(APIView):
    permission_classes = [IsManagerOrAdmin]

    def get(self, request):
        return ok(services.attendance_trend())

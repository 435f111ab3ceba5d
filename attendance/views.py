# ===========================================================
# attendance/views.py
# Attendance JSON API
# ===========================================================

import logging

from rest_framework import generics, permissions
from rest_framework.views import APIView

from employee.models import Department
from ems_backend.responses import ok, created
from users.permissions import IsEmployeeUser, IsManagerOrAdmin
from .exports import generate_excel_report, generate_pdf_report
from .serializers import (
    AttendanceFilterSerializer,
    AttendanceSerializer,
    CheckInSerializer,
    MarkAttendanceSerializer,
    MonthlyReportSerializer,
)
from . import services

logger = logging.getLogger("attendance")


class AttendanceListView(generics.ListAPIView):
    """
    GET /api/attendance/?start_date=&end_date=&employee_id=
    Managers and admins see everyone (employee_id narrows it); others see their own records.
    """
    serializer_class = AttendanceSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        params = AttendanceFilterSerializer(data=self.request.query_params)
        params.is_valid(raise_exception=True)
        return services.records_for(self.request.user, **params.validated_data)


class CheckInView(APIView):
    """POST /api/attendance/checkin/"""
    permission_classes = [IsEmployeeUser]

    def post(self, request):
        serializer = CheckInSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        attendance = services.check_in(request.user, serializer.validated_data.get("notes", ""))
        return created(AttendanceSerializer(attendance).data, "Checked in successfully")


class CheckOutView(APIView):
    """POST /api/attendance/checkout/<id>/"""
    permission_classes = [IsEmployeeUser]

    def post(self, request, pk):
        attendance = services.check_out(request.user, pk)
        return ok(AttendanceSerializer(attendance).data, "Checked out successfully")


class TodayAttendanceView(APIView):
    """GET /api/attendance/today/ the caller's record for today, if any."""
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        record = services.today_record(request.user.employee)
        return ok(AttendanceSerializer(record).data if record else None)


class MarkAttendanceView(APIView):
    """
    POST /api/attendance/mark/
    Body: {"employee_id": 1, "date": "2025-03-14", "status": "Absent", "notes": ""}
    """
    permission_classes = [IsManagerOrAdmin]

    def post(self, request):
        serializer = MarkAttendanceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        attendance = services.mark(
            request.user, data["employee_id"], data["date"], data["status"], data.get("notes", "")
        )
        return ok(AttendanceSerializer(attendance).data, "Attendance recorded")


class HeatmapView(APIView):
    """GET /api/attendance/heatmap/ -> [{"date": "2025-03-14", "count": 4}, ...]"""
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        return ok(services.heatmap(request.user))


class MonthlyReportView(APIView):
    """
    GET /api/attendance/report/?month=YYYY-MM&department_id=&export=xlsx|pdf
    Without ``export`` returns JSON rows plus status totals.
    """
    permission_classes = [IsManagerOrAdmin]

    def get(self, request):
        params = MonthlyReportSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        department_id = params.validated_data.get("department_id")
        month, records = services.monthly_report(params.validated_data.get("month"), department_id)
        department = Department.objects.filter(pk=department_id).first() if department_id else None

        export = request.query_params.get("export", "").lower()
        if export == "xlsx":
            return generate_excel_report(records, month, department)
        if export == "pdf":
            return generate_pdf_report(records, month, department)

        totals = services.summarize(records)
        totals["hours_worked"] = str(totals["hours_worked"])
        return ok({
            "month": month.strftime("%Y-%m"),
            "department_id": department_id,
            "records": AttendanceSerializer(records, many=True).data,
            "totals": totals,
        })

# ===========================================================
# leave/views.py
# Leave request JSON API
# ===========================================================

import logging

from rest_framework import generics, permissions
from rest_framework.views import APIView

from ems_backend.responses import ok, created
from users.permissions import IsAdmin, IsManagerOrAdmin
from .serializers import LeaveRequestCreateSerializer, LeaveRequestSerializer, LeaveStatusSerializer
from . import services

logger = logging.getLogger("leave")


class LeaveRequestListCreateView(generics.ListCreateAPIView):
    """
    GET  /api/leave-requests/?status=Pending  role-aware list
    POST /api/leave-requests/                 submit a request
    """
    serializer_class = LeaveRequestSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        qs = services.visible_requests(self.request.user).order_by("-created_at")
        status_filter = self.request.query_params.get("status")
        if status_filter:
            qs = qs.filter(status=services.parse_status(status_filter))
        return qs

    def create(self, request, *args, **kwargs):
        serializer = LeaveRequestCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        leave_request = services.submit(request.user, **serializer.validated_data)
        return created(LeaveRequestSerializer(leave_request).data, "Leave request created successfully")


class LeaveRequestDetailView(APIView):
    """
    GET    /api/leave-requests/<id>/
    DELETE /api/leave-requests/<id>/  (Admin)
    """

    def get_permissions(self):
        if self.request.method == "DELETE":
            return [IsAdmin()]
        return [permissions.IsAuthenticated()]

    def get(self, request, pk):
        leave_request = services.get_visible(request.user, pk)
        return ok(LeaveRequestSerializer(leave_request).data, "Leave request retrieved successfully")

    def delete(self, request, pk):
        leave_request = services.get_visible(request.user, pk)
        services.delete(request.user, leave_request)
        return ok(None, "Leave request deleted successfully")


class LeaveRequestStatusView(APIView):
    """
    PUT /api/leave-requests/<id>/status/
    Body: {"status": "Approved" | "Rejected", "comments": "..."}
    """
    permission_classes = [IsManagerOrAdmin]

    def put(self, request, pk):
        serializer = LeaveStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        leave_request = services.get_visible(request.user, pk)
        leave_request = services.decide(
            request.user,
            leave_request,
            serializer.validated_data["status"],
            serializer.validated_data.get("comments", ""),
        )
        return ok(
            LeaveRequestSerializer(leave_request).data,
            f"Leave request {leave_request.status.lower()} successfully",
        )

    patch = put


class LeaveRequestCancelView(APIView):
    """POST /api/leave-requests/<id>/cancel/ (owner, pending only)"""
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, pk):
        leave_request = services.get_visible(request.user, pk)
        leave_request = services.cancel(request.user, leave_request)
        return ok(LeaveRequestSerializer(leave_request).data, "Leave request cancelled successfully")


class LeaveSummaryView(APIView):
    """GET /api/leave-requests/summary/ balances and pending flag for the caller."""
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        employee = request.user.employee
        if employee is None:
            return ok({"has_employee_record": False})
        return ok({
            "has_employee_record": True,
            "has_pending_request": services.has_pending(employee),
            "annual_leave_balance": employee.annual_leave_balance,
            "sick_leave_balance": employee.sick_leave_balance,
            "personal_leave_balance": employee.personal_leave_balance,
        })

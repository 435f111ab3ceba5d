# ===========================================================
# leave/serializers.py
# ===========================================================

from rest_framework import serializers

from .models import LeaveRequest


class LeaveRequestSerializer(serializers.ModelSerializer):
    employee_id = serializers.IntegerField(read_only=True)
    employee_name = serializers.CharField(source="employee.full_name", read_only=True)
    total_days = serializers.IntegerField(read_only=True)
    approved_by_id = serializers.IntegerField(read_only=True)
    approved_by_name = serializers.CharField(source="approved_by.full_name", read_only=True, default=None)

    class Meta:
        model = LeaveRequest
        fields = [
            "id", "employee_id", "employee_name", "leave_type", "start_date", "end_date",
            "total_days", "reason", "status", "approved_by_id", "approved_by_name",
            "approver_comments", "approved_at", "created_at",
        ]
        read_only_fields = fields


class LeaveRequestCreateSerializer(serializers.Serializer):
    # Leave type stays a free string so the policy can report "Invalid Leave Type."
    leave_type = serializers.CharField(max_length=20)
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    reason = serializers.CharField(max_length=500)


class LeaveStatusSerializer(serializers.Serializer):
    status = serializers.CharField(max_length=20)
    comments = serializers.CharField(max_length=500, required=False, allow_blank=True, default="")

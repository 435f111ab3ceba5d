# ===========================================================
# attendance/serializers.py
# ===========================================================

from rest_framework import serializers

from employee.models import Employee
from .models import Attendance


class AttendanceSerializer(serializers.ModelSerializer):
    employee_id = serializers.IntegerField(read_only=True)
    employee_name = serializers.CharField(source="employee.full_name", read_only=True)
    department_name = serializers.CharField(source="employee.department.name", read_only=True)

    class Meta:
        model = Attendance
        fields = [
            "id", "employee_id", "employee_name", "department_name", "date",
            "check_in_time", "check_out_time", "hours_worked", "status", "notes",
            "created_at", "updated_at",
        ]
        read_only_fields = fields


class CheckInSerializer(serializers.Serializer):
    notes = serializers.CharField(max_length=500, required=False, allow_blank=True, default="")


class AttendanceFilterSerializer(serializers.Serializer):
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    employee_id = serializers.IntegerField(required=False, min_value=1)

    def validate(self, attrs):
        start, end = attrs.get("start_date"), attrs.get("end_date")
        if start and end and end < start:
            raise serializers.ValidationError("end_date cannot be before start_date.")
        return attrs


class MarkAttendanceSerializer(serializers.Serializer):
    employee_id = serializers.PrimaryKeyRelatedField(queryset=Employee.objects.filter(is_active=True))
    date = serializers.DateField()
    status = serializers.CharField(max_length=10)
    notes = serializers.CharField(max_length=500, required=False, allow_blank=True, default="")


class MonthlyReportSerializer(serializers.Serializer):
    month = serializers.RegexField(r"^\d{4}-\d{2}$", required=False)
    department_id = serializers.IntegerField(required=False, min_value=1)

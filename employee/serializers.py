# ===========================================================
# employee/serializers.py
# ===========================================================

from rest_framework import serializers

from ems_backend.exceptions import RuleViolation
from .models import Department, Employee, JobRole
from .services import ensure_unique_email


# ===========================================================
# JOB ROLES
# ===========================================================
class JobRoleSerializer(serializers.ModelSerializer):
    department_id = serializers.PrimaryKeyRelatedField(
        source="department", queryset=Department.objects.all(), allow_null=True, required=False
    )
    department_name = serializers.CharField(source="department.name", read_only=True, default=None)
    employee_count = serializers.SerializerMethodField()

    class Meta:
        model = JobRole
        fields = ["id", "title", "description", "department_id", "department_name", "employee_count", "created_at"]
        read_only_fields = ["id", "created_at"]

    def get_employee_count(self, obj):
        return obj.employees.count()

    def validate_title(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Title is required.")
        return value


# ===========================================================
# DEPARTMENTS
# ===========================================================
class DepartmentSerializer(serializers.ModelSerializer):
    manager_id = serializers.IntegerField(read_only=True)
    manager_name = serializers.SerializerMethodField()
    roles = serializers.SerializerMethodField()
    employee_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Department
        fields = ["id", "name", "description", "manager_id", "manager_name", "roles", "employee_count", "created_at"]
        read_only_fields = fields

    def get_manager_name(self, obj):
        return obj.manager.full_name if obj.manager else None

    def get_roles(self, obj):
        return [{"id": role.id, "title": role.title} for role in obj.job_roles.all()]


class DepartmentWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100, required=False)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    manager_id = serializers.PrimaryKeyRelatedField(
        queryset=Employee.objects.filter(is_active=True), allow_null=True, required=False
    )
    role_names = serializers.ListField(
        child=serializers.CharField(max_length=100, allow_blank=True), required=False, default=list
    )


# ===========================================================
# EMPLOYEES
# ===========================================================
class EmployeeSerializer(serializers.ModelSerializer):
    full_name = serializers.CharField(read_only=True)
    department_id = serializers.IntegerField(read_only=True)
    department_name = serializers.CharField(source="department.name", read_only=True)
    job_role_id = serializers.IntegerField(read_only=True)
    job_role_title = serializers.CharField(source="job_role.title", read_only=True)
    user_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Employee
        fields = [
            "id", "first_name", "last_name", "full_name", "email", "phone", "gender", "address",
            "hire_date", "termination_date", "department_id", "department_name",
            "job_role_id", "job_role_title", "salary", "is_active",
            "annual_leave_balance", "sick_leave_balance", "personal_leave_balance",
            "user_id", "created_at", "updated_at",
        ]
        read_only_fields = fields


class EmployeeWriteSerializer(serializers.ModelSerializer):
    email = serializers.EmailField()
    department_id = serializers.PrimaryKeyRelatedField(source="department", queryset=Department.objects.all())
    job_role_id = serializers.PrimaryKeyRelatedField(source="job_role", queryset=JobRole.objects.all())

    class Meta:
        model = Employee
        fields = [
            "first_name", "last_name", "email", "phone", "gender", "address",
            "hire_date", "termination_date", "department_id", "job_role_id", "salary", "is_active",
            "annual_leave_balance", "sick_leave_balance", "personal_leave_balance",
        ]

    def validate_email(self, value):
        value = value.lower()
        try:
            ensure_unique_email(value, self.instance)
        except RuleViolation as e:
            raise serializers.ValidationError(e.message)
        return value

    def validate(self, attrs):
        hire = attrs.get("hire_date", getattr(self.instance, "hire_date", None))
        end = attrs.get("termination_date", getattr(self.instance, "termination_date", None))
        if hire and end and end < hire:
            raise serializers.ValidationError({"termination_date": "Termination date cannot be before hire date."})
        for field in ("annual_leave_balance", "sick_leave_balance", "personal_leave_balance"):
            if attrs.get(field, 0) < 0:
                raise serializers.ValidationError({field: "Leave balance cannot be negative."})
        return attrs

# ===========================================================
# employee/views.py
# Employees / Departments / Job roles JSON API
# ===========================================================

from django.db import connection, transaction
from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets, permissions
from rest_framework.views import APIView
import logging

from ems_backend.responses import ok, created
from users.permissions import IsAdmin, IsManagerOrAdmin
from .filters import EmployeeFilter
from .models import Department, Employee, JobRole
from .serializers import (
    DepartmentSerializer,
    DepartmentWriteSerializer,
    EmployeeSerializer,
    EmployeeWriteSerializer,
    JobRoleSerializer,
)
from . import services

logger = logging.getLogger("employee")


# ===========================================================
# EMPLOYEE VIEWSET
# ===========================================================
class EmployeeViewSet(viewsets.ModelViewSet):
    """
    Employee CRUD.

    Permissions:
    - List/Retrieve: all authenticated users
    - Create/Update: Manager or Admin
    - Delete (soft): Admin only
    """

    queryset = Employee.objects.select_related("department", "job_role", "user").order_by("last_name", "first_name")
    filter_backends = [DjangoFilterBackend]
    filterset_class = EmployeeFilter
    http_method_names = ["get", "post", "put", "patch", "delete", "head", "options"]

    def get_serializer_class(self):
        if self.action in ["create", "update", "partial_update"]:
            return EmployeeWriteSerializer
        return EmployeeSerializer

    def get_permissions(self):
        if self.action == "destroy":
            return [IsAdmin()]
        if self.action in ["create", "update", "partial_update"]:
            return [IsManagerOrAdmin()]
        return [permissions.IsAuthenticated()]

    def retrieve(self, request, *args, **kwargs):
        return ok(EmployeeSerializer(self.get_object()).data)

    @transaction.atomic
    def create(self, request, *args, **kwargs):
        serializer = EmployeeWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        employee = serializer.save()
        services.announce_employee(employee, "created", request.user)
        return created(EmployeeSerializer(employee).data, "Employee created successfully")

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        serializer = EmployeeWriteSerializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        employee = services.update_employee(request.user, serializer)
        return ok(EmployeeSerializer(employee).data, "Employee updated successfully")

    def destroy(self, request, *args, **kwargs):
        employee = self.get_object()
        services.deactivate_employee(request.user, employee)
        return ok(None, "Employee deactivated successfully")


# ===========================================================
# DEPARTMENT VIEWSET
# ===========================================================
class DepartmentViewSet(viewsets.ViewSet):
    """
    Department CRUD.

    Permissions:
    - List/Retrieve: all authenticated users
    - Create/Update: Manager or Admin (manager assignment: Admin)
    - Delete: Admin only
    """

    def get_permissions(self):
        if self.action == "destroy":
            return [IsAdmin()]
        if self.action in ["create", "update", "partial_update"]:
            return [IsManagerOrAdmin()]
        return [permissions.IsAuthenticated()]

    def _get(self, pk):
        return get_object_or_404(
            Department.objects.select_related("manager").prefetch_related("job_roles"), pk=pk
        )

    def list(self, request):
        departments = Department.objects.select_related("manager").prefetch_related("job_roles").order_by("name")
        return ok(DepartmentSerializer(departments, many=True).data)

    def retrieve(self, request, pk=None):
        return ok(DepartmentSerializer(self._get(pk)).data)

    def create(self, request):
        serializer = DepartmentWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        department = services.create_department(
            request.user,
            name=data.get("name"),
            description=data.get("description", ""),
            manager=data.get("manager_id"),
            role_names=data.get("role_names"),
        )
        return created(DepartmentSerializer(self._get(department.pk)).data, "Department created successfully")

    def update(self, request, pk=None):
        department = self._get(pk)
        serializer = DepartmentWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        department = services.update_department(
            request.user,
            department,
            name=data.get("name"),
            description=data.get("description") if "description" in request.data else None,
            manager=data["manager_id"] if "manager_id" in data else services.UNSET,
            role_names=data.get("role_names"),
        )
        return ok(DepartmentSerializer(self._get(department.pk)).data, "Department updated successfully")

    def partial_update(self, request, pk=None):
        return self.update(request, pk)

    def destroy(self, request, pk=None):
        services.delete_department(request.user, self._get(pk))
        return ok(None, "Department deleted successfully")


# ===========================================================
# JOB ROLE VIEWSET
# ===========================================================
class JobRoleViewSet(viewsets.ModelViewSet):
    """Job roles; every mutation is Manager or Admin."""

    queryset = JobRole.objects.select_related("department").order_by("title")
    serializer_class = JobRoleSerializer
    pagination_class = None
    filterset_fields = ["department"]

    def get_permissions(self):
        if self.action in ["list", "retrieve"]:
            return [permissions.IsAuthenticated()]
        return [IsManagerOrAdmin()]

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        return ok(self.get_serializer(queryset, many=True).data)

    def retrieve(self, request, *args, **kwargs):
        return ok(self.get_serializer(self.get_object()).data)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        job_role = serializer.save()
        logger.info(f"Job role '{job_role.title}' created by {request.user.email}")
        return created(self.get_serializer(job_role).data, "Role created successfully")

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        serializer = self.get_serializer(self.get_object(), data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        job_role = serializer.save()
        logger.info(f"Job role '{job_role.title}' updated by {request.user.email}")
        return ok(self.get_serializer(job_role).data, "Role updated successfully")

    def destroy(self, request, *args, **kwargs):
        services.delete_job_role(request.user, self.get_object())
        return ok(None, "Role deleted successfully")


# ===========================================================
# HEALTH CHECK
# ===========================================================
class HealthCheckView(APIView):
    """GET /api/health/ liveness probe."""

    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def get(self, request):
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        return ok({"status": "healthy", "employees": Employee.objects.active().count()})

# ===========================================================
# employee/views_pages.py
# Server-rendered employee / department / job role pages
# ===========================================================

import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.paginator import Paginator
from django.db import transaction
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from ems_backend.exceptions import DomainError
from users.decorators import admin_required, manager_required
from .forms import DepartmentForm, EmployeeForm, JobRoleForm
from .models import Department, Employee, JobRole
from . import services

logger = logging.getLogger("employee")


# ===========================================================
# EMPLOYEES
# ===========================================================
@login_required
def employee_index(request):
    search = request.GET.get("search", "").strip()
    department_id = request.GET.get("department_id") or ""
    is_active = request.GET.get("is_active", "")

    employees = Employee.objects.select_related("department", "job_role").search(search)
    if department_id.isdigit():
        employees = employees.filter(department_id=int(department_id))
    if is_active in ("true", "false"):
        employees = employees.filter(is_active=is_active == "true")

    page = Paginator(employees.order_by("last_name", "first_name"), 20).get_page(request.GET.get("page"))
    return render(request, "employee/index.html", {
        "page_obj": page,
        "departments": Department.objects.order_by("name"),
        "search": search,
        "department_id": department_id,
        "is_active": is_active,
    })


@login_required
def employee_detail(request, pk):
    employee = get_object_or_404(Employee.objects.select_related("department", "job_role", "user"), pk=pk)
    return render(request, "employee/detail.html", {"employee": employee})


@manager_required
def employee_create(request):
    form = EmployeeForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        with transaction.atomic():
            employee = form.save()
            services.announce_employee(employee, "created", request.user)
        messages.success(request, f"Employee {employee.full_name} created successfully.")
        return redirect("employee:detail", pk=employee.pk)
    return render(request, "employee/form.html", {"form": form, "title": "Create Employee"})


@manager_required
def employee_edit(request, pk):
    employee = get_object_or_404(Employee, pk=pk)
    form = EmployeeForm(request.POST or None, instance=employee)
    if request.method == "POST" and form.is_valid():
        employee = services.update_employee(request.user, form)
        messages.success(request, f"Employee {employee.full_name} updated successfully.")
        return redirect("employee:detail", pk=employee.pk)
    return render(request, "employee/form.html", {"form": form, "title": "Edit Employee", "employee": employee})


@admin_required
def employee_delete(request, pk):
    employee = get_object_or_404(Employee, pk=pk)
    if request.method == "POST":
        try:
            services.deactivate_employee(request.user, employee)
        except DomainError as e:
            messages.error(request, e.message)
        else:
            messages.success(request, f"Employee {employee.full_name} deactivated.")
        return redirect("employee:index")
    return render(request, "employee/confirm_delete.html", {"employee": employee})


# ===========================================================
# DEPARTMENTS
# ===========================================================
@login_required
def department_index(request):
    departments = Department.objects.select_related("manager").prefetch_related("job_roles").order_by("name")
    return render(request, "employee/department_index.html", {"departments": departments})


@login_required
def department_detail(request, pk):
    department = get_object_or_404(Department.objects.select_related("manager"), pk=pk)
    return render(request, "employee/department_detail.html", {
        "department": department,
        "employees": department.employees.filter(is_active=True).select_related("job_role"),
        "job_roles": department.job_roles.all(),
    })


@manager_required
def department_create(request):
    form = DepartmentForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        data = form.cleaned_data
        try:
            department = services.create_department(
                request.user,
                name=data["name"],
                description=data.get("description", ""),
                role_names=data.get("role_names"),
            )
        except DomainError as e:
            form.add_error(None, e.message)
        else:
            messages.success(request, f"Department '{department.name}' created successfully.")
            return redirect("employee:department_detail", pk=department.pk)
    return render(request, "employee/department_form.html", {"form": form, "title": "Create Department"})


@manager_required
def department_edit(request, pk):
    department = get_object_or_404(Department, pk=pk)
    can_assign = request.user.is_admin()
    form = DepartmentForm(
        request.POST or None,
        department=department,
        can_assign_manager=can_assign,
        initial={"name": department.name, "description": department.description, "manager": department.manager},
    )
    if request.method == "POST" and form.is_valid():
        data = form.cleaned_data
        try:
            services.update_department(
                request.user,
                department,
                name=data["name"],
                description=data.get("description", ""),
                manager=data.get("manager") if can_assign else services.UNSET,
                role_names=data.get("role_names"),
            )
        except DomainError as e:
            form.add_error(None, e.message)
        else:
            messages.success(request, f"Department '{department.name}' updated successfully.")
            return redirect("employee:department_detail", pk=department.pk)
    return render(request, "employee/department_form.html", {
        "form": form, "title": "Edit Department", "department": department,
    })


@admin_required
def department_delete(request, pk):
    department = get_object_or_404(Department, pk=pk)
    if request.method == "POST":
        try:
            services.delete_department(request.user, department)
        except DomainError as e:
            messages.error(request, e.message)
            return redirect("employee:department_detail", pk=pk)
        messages.success(request, "Department deleted successfully.")
        return redirect("employee:department_index")
    return render(request, "employee/department_confirm_delete.html", {"department": department})


# ===========================================================
# JOB ROLES
# ===========================================================
@manager_required
def job_role_create(request):
    form = JobRoleForm(request.POST or None, initial={"department": request.GET.get("department")})
    if request.method == "POST" and form.is_valid():
        job_role = form.save()
        logger.info(f"Job role '{job_role.title}' created by {request.user.email}")
        messages.success(request, f"Role '{job_role.title}' created.")
        if job_role.department_id:
            return redirect("employee:department_detail", pk=job_role.department_id)
        return redirect("employee:department_index")
    return render(request, "employee/job_role_form.html", {"form": form})


@manager_required
@require_POST
def job_role_delete(request, pk):
    job_role = get_object_or_404(JobRole, pk=pk)
    department_id = job_role.department_id
    try:
        services.delete_job_role(request.user, job_role)
    except DomainError as e:
        messages.error(request, e.message)
    else:
        messages.success(request, "Role deleted successfully.")
    if department_id:
        return redirect("employee:department_detail", pk=department_id)
    return redirect("employee:department_index")

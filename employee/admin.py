# ===============================================
# employee/admin.py
# ===============================================

from django.contrib import admin

from .models import Department, Employee, JobRole


class JobRoleInline(admin.TabularInline):
    model = JobRole
    extra = 0
    fields = ("title", "description")


@admin.register(Department)
class DepartmentAdmin(admin.ModelAdmin):
    list_display = ("name", "manager", "employee_count", "created_at")
    search_fields = ("name",)
    inlines = [JobRoleInline]
    raw_id_fields = ("manager",)


@admin.register(JobRole)
class JobRoleAdmin(admin.ModelAdmin):
    list_display = ("title", "department", "created_at")
    list_filter = ("department",)
    search_fields = ("title",)


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ("full_name", "email", "department", "job_role", "is_active", "hire_date")
    list_filter = ("is_active", "department", "gender")
    search_fields = ("first_name", "last_name", "email")
    raw_id_fields = ("user",)
    list_select_related = ("department", "job_role")
    readonly_fields = ("created_at", "updated_at")

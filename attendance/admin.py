from django.contrib import admin

from .models import Attendance


@admin.register(Attendance)
class AttendanceAdmin(admin.ModelAdmin):
    list_display = ("employee", "date", "check_in_time", "check_out_time", "hours_worked", "status")
    list_filter = ("status", "date")
    search_fields = ("employee__first_name", "employee__last_name", "employee__email")
    raw_id_fields = ("employee",)
    date_hierarchy = "date"
    readonly_fields = ("created_at", "updated_at")

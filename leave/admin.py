from django.contrib import admin

from .models import LeaveRequest


@admin.register(LeaveRequest)
class LeaveRequestAdmin(admin.ModelAdmin):
    list_display = ("employee", "leave_type", "start_date", "end_date", "total_days", "status", "approved_by")
    list_filter = ("status", "leave_type")
    search_fields = ("employee__first_name", "employee__last_name", "employee__email")
    raw_id_fields = ("employee", "approved_by")
    readonly_fields = ("created_at", "approved_at")
    date_hierarchy = "start_date"

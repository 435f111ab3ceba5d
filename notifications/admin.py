from django.contrib import admin

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("recipient", "category", "short_message", "is_read", "created_at")
    list_filter = ("category", "is_read")
    search_fields = ("message", "recipient__email")
    readonly_fields = ("created_at", "read_at")

    @admin.display(description="Message")
    def short_message(self, obj):
        return obj.message[:60]

# ===============================================
# users/admin.py
# ===============================================

from django.contrib import admin, messages
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.forms import BaseUserCreationForm, UserChangeForm

from .models import User


class EmailUserCreationForm(BaseUserCreationForm):
    class Meta:
        model = User
        fields = ("email", "full_name", "role")


class EmailUserChangeForm(UserChangeForm):
    class Meta:
        model = User
        fields = "__all__"


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Email-based user admin with lockout controls."""

    form = EmailUserChangeForm
    add_form = EmailUserCreationForm
    ordering = ("email",)
    list_display = ("email", "full_name", "role", "is_active", "account_locked", "failed_login_attempts")
    list_filter = ("role", "is_active", "account_locked")
    search_fields = ("email", "full_name")
    readonly_fields = ("created_at", "updated_at", "last_login", "locked_at")
    actions = ["unlock_accounts"]

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Profile", {"fields": ("full_name", "gender", "role")}),
        ("Security", {"fields": ("failed_login_attempts", "account_locked", "locked_at")}),
        ("Permissions", {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")}),
        ("Audit", {"fields": ("last_login", "created_at", "updated_at")}),
    )
    add_fieldsets = (
        (None, {
            "classes": ("wide",),
            "fields": ("email", "full_name", "role", "password1", "password2"),
        }),
    )

    @admin.action(description="Unlock selected accounts")
    def unlock_accounts(self, request, queryset):
        count = 0
        for user in queryset.filter(account_locked=True):
            user.unlock_account()
            count += 1
        self.message_user(request, f"{count} account(s) unlocked.", messages.SUCCESS)

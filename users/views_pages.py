# ===========================================================
# users/views_pages.py
# Session (cookie) authenticated account pages
# ===========================================================

import logging

from django.conf import settings
from django.contrib import messages
from django.contrib.auth import login, logout
from django.contrib.auth.decorators import login_required
from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST

from ems_backend.exceptions import DomainError
from .auth import verify_credentials
from .decorators import admin_required
from .forms import LoginForm, RegisterForm
from .services import register_account

logger = logging.getLogger("users")


def _safe_next(request):
    target = request.POST.get("next") or request.GET.get("next")
    if target and url_has_allowed_host_and_scheme(
        target, allowed_hosts={request.get_host()}, require_https=request.is_secure()
    ):
        return target
    return None


def login_page(request):
    if request.user.is_authenticated:
        return redirect(settings.LOGIN_REDIRECT_URL)

    form = LoginForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        try:
            user = verify_credentials(form.cleaned_data["email"], form.cleaned_data["password"])
        except DomainError as e:
            form.add_error(None, e.message)
        else:
            login(request, user, backend="django.contrib.auth.backends.ModelBackend")
            if not form.cleaned_data.get("remember_me"):
                request.session.set_expiry(0)
            return redirect(_safe_next(request) or settings.LOGIN_REDIRECT_URL)

    return render(request, "users/login.html", {"form": form, "next": _safe_next(request) or ""})


@require_POST
def logout_page(request):
    if request.user.is_authenticated:
        logger.info(f"User logged out: {request.user.email}")
    logout(request)
    return redirect(settings.LOGOUT_REDIRECT_URL)


@admin_required
def register_page(request):
    form = RegisterForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        data = form.cleaned_data
        try:
            user = register_account(
                email=data["email"],
                password=data["password"],
                full_name=data["full_name"],
                role=data["role"],
                gender=data.get("gender") or "",
                created_by=request.user,
            )
        except DomainError as e:
            form.add_error(None, e.message)
        else:
            messages.success(request, f"User {user.email} registered successfully.")
            return redirect("employee:index")

    return render(request, "users/register.html", {"form": form})


@login_required
def profile_page(request):
    user = request.user
    return render(request, "users/profile.html", {"profile_user": user, "employee": user.employee})


def access_denied(request):
    return render(request, "users/access_denied.html", status=403)

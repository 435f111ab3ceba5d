# ===========================================================
# leave/views_pages.py
# Server-rendered leave request pages
# ===========================================================

import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.paginator import Paginator
from django.shortcuts import redirect, render
from django.views.decorators.http import require_POST

from ems_backend.exceptions import AccessDenied, DomainError
from users.decorators import manager_required
from .forms import LeaveDecisionForm, LeaveFilterForm, LeaveRequestForm
from .models import LeaveStatus
from . import services

logger = logging.getLogger("leave")


def _load(request, pk):
    """Visible request or None; flashes the reason when refused."""
    try:
        return services.get_visible(request.user, pk)
    except DomainError as e:
        messages.error(request, e.message)
        return None


@login_required
def leave_index(request):
    filter_form = LeaveFilterForm(request.GET or None)
    requests_qs = services.visible_requests(request.user).order_by("-created_at")
    if filter_form.is_valid() and filter_form.cleaned_data.get("status"):
        requests_qs = requests_qs.filter(status=filter_form.cleaned_data["status"])

    employee = request.user.employee
    page = Paginator(requests_qs, 20).get_page(request.GET.get("page"))
    return render(request, "leave/index.html", {
        "page_obj": page,
        "filter_form": filter_form,
        "has_pending": services.has_pending(employee),
        "employee": employee,
        "is_manager": request.user.is_manager_or_admin(),
    })


@login_required
def leave_detail(request, pk):
    leave_request = _load(request, pk)
    if leave_request is None:
        return redirect("leave:index")
    return render(request, "leave/detail.html", {
        "leave_request": leave_request,
        "can_decide": leave_request.is_pending and services.can_decide(request.user, leave_request),
        "can_cancel": leave_request.is_pending and leave_request.employee.user_id == request.user.id,
        "decision_form": LeaveDecisionForm(),
    })


@login_required
def leave_create(request):
    employee = request.user.employee
    if employee is None:
        messages.error(request, "Employee record not found. Please contact administrator.")
        return redirect("leave:index")
    if services.has_pending(employee):
        messages.error(
            request,
            "You already have a pending leave request. Please wait for it to be approved "
            "or rejected before submitting a new request.",
        )
        return redirect("leave:index")

    form = LeaveRequestForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        try:
            services.submit(request.user, **form.cleaned_data)
        except DomainError as e:
            form.add_error(None, e.message)
        else:
            messages.success(request, "Leave request submitted successfully.")
            return redirect("leave:index")

    return render(request, "leave/form.html", {"form": form, "employee": employee})


def _decide(request, pk, status):
    leave_request = _load(request, pk)
    if leave_request is None:
        return redirect("leave:index")
    comments = request.POST.get("comments", "")
    try:
        services.decide(request.user, leave_request, status, comments)
    except AccessDenied as e:
        messages.error(request, e.message)
    except DomainError as e:
        messages.error(request, e.message)
        return redirect("leave:detail", pk=pk)
    else:
        verb = "approved" if status == LeaveStatus.APPROVED else "rejected"
        messages.success(request, f"Leave request {verb} successfully.")
    return redirect("leave:index")


@manager_required
@require_POST
def leave_approve(request, pk):
    return _decide(request, pk, LeaveStatus.APPROVED)


@manager_required
@require_POST
def leave_reject(request, pk):
    return _decide(request, pk, LeaveStatus.REJECTED)


@login_required
@require_POST
def leave_cancel(request, pk):
    leave_request = _load(request, pk)
    if leave_request is not None:
        try:
            services.cancel(request.user, leave_request)
        except DomainError as e:
            messages.error(request, e.message)
        else:
            messages.success(request, "Leave request cancelled.")
    return redirect("leave:index")

# ===========================================================
# dashboard/views_pages.py
# ===========================================================

from django.contrib.auth.decorators import login_required
from django.shortcuts import render

from . import services


@login_required
def index(request):
    user = request.user
    employee = user.employee
    is_manager = user.is_manager_or_admin()
    return render(request, "dashboard/index.html", {
        "stats": services.page_stats(user),
        "recent_leaves": services.recent_leave_requests(user),
        "distribution": services.department_distribution(),
        "recent_attendance": services.recent_attendance(employee) if not is_manager else [],
        "employee": employee,
        "is_manager": is_manager,
    })

from functools import wraps

from django.contrib.auth.views import redirect_to_login
from django.shortcuts import redirect


def role_required(*roles):
    """
    Page-view guard. Anonymous users go to the login page; authenticated
    users without one of ``roles`` land on the access-denied page.
    Superusers always pass as Admin.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(request, *args, **kwargs):
            user = request.user
            if not user.is_authenticated:
                return redirect_to_login(request.get_full_path())
            if roles and not (user.role in roles or ("Admin" in roles and user.is_admin())):
                return redirect("users:access_denied")
            return view(request, *args, **kwargs)

        return wrapper

    return decorator


manager_required = role_required("Admin", "Manager")
admin_required = role_required("Admin")

from rest_framework import permissions


class IsAdmin(permissions.BasePermission):
    """
    Allows access only to users with Admin role or superuser status.
    """
    message = "Only administrators can perform this action."

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.is_admin())


class IsManagerOrAdmin(permissions.BasePermission):
    """
    Allows access to users with Manager or Admin roles.
    """
    message = "Only managers or administrators can perform this action."

    def has_permission(self, request, view):
        return bool(
            request.user
            and request.user.is_authenticated
            and request.user.is_manager_or_admin()
        )


class IsEmployeeUser(permissions.BasePermission):
    """
    Authenticated users who are not administrators (they carry an HR record).
    """
    message = "Administrators are not required to check in."

    def has_permission(self, request, view):
        return bool(
            request.user
            and request.user.is_authenticated
            and not request.user.is_admin()
        )

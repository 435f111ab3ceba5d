from rest_framework import status
from rest_framework.response import Response


def ok(data=None, message="", status_code=status.HTTP_200_OK):
    """Successful API envelope."""
    return Response({"success": True, "message": message, "data": data}, status=status_code)


def created(data=None, message=""):
    return ok(data, message, status.HTTP_201_CREATED)

# ===========================================================
# users/views.py
# JWT authentication API (login / refresh / me / register)
# ===========================================================

import logging

from django.contrib.auth import get_user_model
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from ems_backend.exceptions import AuthenticationError
from ems_backend.responses import ok, created
from .auth import user_payload
from .permissions import IsAdmin
from .serializers import LoginSerializer, RegisterSerializer, UserSerializer
from .services import register_account

logger = logging.getLogger("users")
User = get_user_model()


# ===========================================================
# 1. LOGIN
# ===========================================================
class LoginView(TokenObtainPairView):
    """
    POST /api/auth/login/
    Body: {"email": "...", "password": "..."}
    Returns access token, refresh token, lifetime and the user block.
    """
    serializer_class = LoginSerializer
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return ok(serializer.validated_data, "Login successful")


# ===========================================================
# 2. REFRESH TOKEN
# ===========================================================
class RefreshView(TokenRefreshView):
    """
    POST /api/auth/refresh/
    Body: {"refresh_token": "..."} (SimpleJWT's "refresh" key also works);
    rotates the refresh token.
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request, *args, **kwargs):
        token = request.data.get("refresh_token") or request.data.get("refresh")
        if not token:
            raise AuthenticationError("Invalid token")

        serializer = self.get_serializer(data={"refresh": token})
        try:
            serializer.is_valid(raise_exception=True)
        except (TokenError, InvalidToken) as e:
            logger.warning(f"Token refresh refused: {e}")
            raise AuthenticationError("Invalid token")

        data = serializer.validated_data
        return ok(
            {"token": data["access"], "refresh_token": data.get("refresh")},
            "Token refreshed",
        )


# ===========================================================
# 3. CURRENT USER
# ===========================================================
class MeView(APIView):
    """GET /api/auth/me/"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return ok(user_payload(request.user))


# ===========================================================
# 4. REGISTER (Admin)
# ===========================================================
class RegisterView(APIView):
    """
    POST /api/auth/register/
    Admin creates a login account; Employee / Manager accounts also
    get an Employee record.
    """
    permission_classes = [IsAdmin]

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = register_account(created_by=request.user, **serializer.validated_data)
        return created(UserSerializer(user).data, "User registered successfully")

# ===========================================================
# users/serializers.py
# ===========================================================

import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from .auth import verify_credentials, user_payload

User = get_user_model()
logger = logging.getLogger("users")


# ===========================================================
# LOGIN SERIALIZER (email + password)
# ===========================================================
class LoginSerializer(TokenObtainPairSerializer):
    """
    Issues the JWT pair after running the shared credential / lockout
    checks instead of django.contrib.auth.authenticate().
    """

    def validate(self, attrs):
        user = verify_credentials(attrs.get("email"), attrs.get("password"))

        refresh = self.get_token(user)
        lifetime = settings.SIMPLE_JWT["ACCESS_TOKEN_LIFETIME"]
        return {
            "token": str(refresh.access_token),
            "refresh_token": str(refresh),
            "expires_in": int(lifetime.total_seconds()),
            "user": user_payload(user),
        }

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token["email"] = user.email
        token["role"] = user.role
        token["roles"] = user.roles
        return token


# ===========================================================
# REGISTER SERIALIZER
# ===========================================================
class RegisterSerializer(serializers.Serializer):
    full_name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})
    role = serializers.ChoiceField(choices=User.ROLE_CHOICES, default=User.ROLE_EMPLOYEE)
    gender = serializers.ChoiceField(choices=User.GENDER_CHOICES, required=False, allow_blank=True)

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("A user with this email already exists.")
        return value.lower()

    def validate_password(self, value):
        validate_password(value)
        return value


class UserSerializer(serializers.ModelSerializer):
    roles = serializers.ListField(child=serializers.CharField(), read_only=True)
    employee_id = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id", "email", "full_name", "role", "roles", "gender", "employee_id", "is_active"]
        read_only_fields = fields

    def get_employee_id(self, obj):
        employee = obj.employee
        return employee.id if employee else None

"""
Serializers for identity requests and responses.

This module provides DRF serializers for:
- Registration and sign-in requests
- The signed-in identity (read operations)

Related files:
    - services.py: IdentityService applies the password rules
    - views.py: Views that use these serializers

Security:
    - Password fields are write-only
    - The provider ID token never leaves the session
"""

from drf_spectacular.utils import OpenApiExample, extend_schema_serializer
from rest_framework import serializers


class LoginSerializer(serializers.Serializer):
    """
    Sign-in request.

    Blank values pass through so IdentityService can report them with
    its own message.
    """

    email = serializers.CharField(allow_blank=True, required=False, default="")
    password = serializers.CharField(
        allow_blank=True,
        required=False,
        default="",
        trim_whitespace=False,
        write_only=True,
        style={"input_type": "password"},
    )


class RegisterSerializer(LoginSerializer):
    """Registration request: sign-in fields plus a password confirmation."""

    confirm_password = serializers.CharField(
        allow_blank=True,
        required=False,
        default="",
        trim_whitespace=False,
        write_only=True,
        style={"input_type": "password"},
    )


@extend_schema_serializer(
    examples=[
        OpenApiExample(
            "Signed-in identity",
            value={
                "uid": "kXb1qP0vYtT8m2",
                "email": "jane@example.com",
                "display_name": "User",
            },
            response_only=True,
        ),
    ]
)
class IdentitySerializer(serializers.Serializer):
    """Signed-in identity with the display name fallback applied."""

    uid = serializers.CharField(read_only=True)
    email = serializers.CharField(read_only=True)
    display_name = serializers.CharField(source="name", read_only=True)

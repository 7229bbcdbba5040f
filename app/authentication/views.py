"""
Authentication views.

This module provides API views for:
- Registration: /api/v1/auth/register/
- Sign-in: /api/v1/auth/login/
- Sign-out: /api/v1/auth/logout/
- Current identity: /api/v1/auth/me/

Related files:
    - serializers.py: Request/response serialization
    - services.py: Business logic (IdentityService)
    - urls.py: URL routing
"""

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.serializers import (
    IdentitySerializer,
    LoginSerializer,
    RegisterSerializer,
)
from authentication.services import IdentityService

# Failed ServiceResult error codes mapped to HTTP status; anything else is 502
RESULT_STATUS = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "PASSWORD_MISMATCH": status.HTTP_400_BAD_REQUEST,
    "PASSWORD_TOO_SHORT": status.HTTP_400_BAD_REQUEST,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "NOT_AUTHENTICATED": status.HTTP_401_UNAUTHORIZED,
    "EMAIL_EXISTS": status.HTTP_409_CONFLICT,
}


def failure_response(result) -> Response:
    return Response(
        result.to_response(),
        status=RESULT_STATUS.get(result.error_code, status.HTTP_502_BAD_GATEWAY),
    )


class RegisterView(APIView):
    """
    Create an account and sign it in.

    POST /api/v1/auth/register/
        {"email": "...", "password": "...", "confirm_password": "..."}
    """

    authentication_classes = []
    permission_classes = [AllowAny]
    parser_classes = [JSONParser, FormParser]

    @extend_schema(
        operation_id="register",
        summary="Register",
        description=(
            "Create an email/password account with the identity provider and store "
            "the signed-in identity in the session. Both fields are required, the "
            "confirmation must match, and the password needs at least 6 characters."
        ),
        request=RegisterSerializer,
        responses={
            201: IdentitySerializer,
            400: OpenApiResponse(description="Missing fields or password rules not met"),
            409: OpenApiResponse(description="Email already registered"),
            502: OpenApiResponse(description="Identity provider error"),
        },
        tags=["Auth"],
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = IdentityService(request.session).register(
            data["email"], data["password"], data["confirm_password"]
        )
        if not result:
            return failure_response(result)

        return Response(IdentitySerializer(result.data).data, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """
    Sign in with email and password.

    POST /api/v1/auth/login/
        {"email": "...", "password": "..."}
    """

    authentication_classes = []
    permission_classes = [AllowAny]
    parser_classes = [JSONParser, FormParser]

    @extend_schema(
        operation_id="login",
        summary="Sign in",
        request=LoginSerializer,
        responses={
            200: IdentitySerializer,
            400: OpenApiResponse(description="Missing email or password"),
            401: OpenApiResponse(description="Invalid email or password"),
            502: OpenApiResponse(description="Identity provider error"),
        },
        tags=["Auth"],
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = IdentityService(request.session).login(data["email"], data["password"])
        if not result:
            return failure_response(result)

        return Response(IdentitySerializer(result.data).data)


class LogoutView(APIView):
    """
    Sign out and clear the session.

    POST /api/v1/auth/logout/
    """

    permission_classes = [AllowAny]

    @extend_schema(
        operation_id="logout",
        summary="Sign out",
        request=None,
        responses={204: OpenApiResponse(description="Signed out")},
        tags=["Auth"],
    )
    def post(self, request):
        IdentityService(request.session).logout()
        return Response(status=status.HTTP_204_NO_CONTENT)


class CurrentIdentityView(APIView):
    """GET /api/v1/auth/me/"""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="current_identity",
        summary="Get the signed-in identity",
        responses={
            200: IdentitySerializer,
            401: OpenApiResponse(description="Not signed in"),
        },
        tags=["Auth"],
    )
    def get(self, request):
        return Response(IdentitySerializer(request.user).data)

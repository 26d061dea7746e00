"""
Accounts app views.

All views follow the **Thin View** pattern: validate input via
serializers, delegate to the service layer, and return the result
wrapped in a DRF ``Response``.  **No business logic** resides here.

View Map
--------
- ``RegisterView``        — POST /register/
- ``LoginView``           — POST /login/
- ``TokenValidateView``   — POST /validate/
- ``LogoutView``          — POST /logout/
- ``MeView``              — GET  /me/
- ``CheckUsernameView``   — GET  /check-username/?username=
- ``CheckEmailView``      — GET  /check-email/?email=
- ``AuthHealthView``      — GET  /health/
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import generics, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import (
    CustomTokenObtainPairSerializer,
    LogoutSerializer,
    RegisterRequestSerializer,
    TokenResponseSerializer,
    TokenValidateSerializer,
    UserDetailSerializer,
)
from .services import (
    AuthenticationService,
    AvailabilityService,
    TokenService,
    UserRegistrationService,
)


# ═══════════════════════════════════════════════════════════════════
#  Authentication Views
# ═══════════════════════════════════════════════════════════════════


class RegisterView(generics.CreateAPIView):
    """
    POST /api/auth/register/

    Public endpoint.  Creates a new citizen account and logs it in.

    Request body  → ``RegisterRequestSerializer``
    Response body → ``{"access", "refresh", "user"}`` (201 Created)
    """

    permission_classes = [AllowAny]
    authentication_classes = []
    serializer_class = RegisterRequestSerializer

    @extend_schema(
        summary="Register a citizen",
        responses={
            201: TokenResponseSerializer,
            409: OpenApiResponse(description="Username or email already taken."),
        },
        tags=["Auth"],
    )
    def post(self, request: Request, *args, **kwargs) -> Response:
        return super().post(request, *args, **kwargs)

    def create(self, request: Request, *args, **kwargs) -> Response:
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = UserRegistrationService.register_user(dict(serializer.validated_data))
        payload = AuthenticationService.generate_tokens(user)
        payload["user"] = UserDetailSerializer(user).data
        return Response(payload, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """
    POST /api/auth/login/

    Public endpoint.  Authenticates a user by username or email plus
    password.  Invalid credentials and deactivated accounts both yield
    401 Unauthorized.

    Request body  → ``{"identifier", "password"}``
    Response body → ``{"access", "refresh", "user"}`` (200 OK)
    """

    permission_classes = [AllowAny]

    @extend_schema(
        summary="Log in",
        request=CustomTokenObtainPairSerializer,
        responses={
            200: TokenResponseSerializer,
            401: OpenApiResponse(description="Invalid credentials."),
        },
        tags=["Auth"],
    )
    def post(self, request: Request) -> Response:
        serializer = CustomTokenObtainPairSerializer(
            data=request.data,
            context={"request": request},
        )
        serializer.is_valid(raise_exception=True)

        payload = dict(serializer.validated_data)  # contains 'access' and 'refresh'
        payload["user"] = UserDetailSerializer(serializer.user).data

        return Response(payload, status=status.HTTP_200_OK)


class TokenValidateView(APIView):
    """
    POST /api/auth/validate/

    Report whether an access token is valid.  Invalid tokens yield 401
    with ``{"valid": false}`` so gateways can forward the status as-is.
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="Validate an access token",
        request=TokenValidateSerializer,
        responses={200: OpenApiResponse(description="Token is valid."),
                   401: OpenApiResponse(description="Token is invalid or expired.")},
        tags=["Auth"],
    )
    def post(self, request: Request) -> Response:
        serializer = TokenValidateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        if TokenService.is_valid_access_token(serializer.validated_data["token"]):
            return Response({"valid": True, "message": "Token is valid."})
        return Response(
            {"valid": False, "message": "Token is invalid or expired."},
            status=status.HTTP_401_UNAUTHORIZED,
        )


class LogoutView(APIView):
    """
    POST /api/auth/logout/

    Revoke the supplied refresh token.  Access tokens already issued
    remain valid until they expire.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Log out",
        request=LogoutSerializer,
        responses={200: OpenApiResponse(description="Logged out.")},
        tags=["Auth"],
    )
    def post(self, request: Request) -> Response:
        serializer = LogoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        TokenService.logout(serializer.validated_data["refresh"])
        return Response({"message": "Logged out successfully."})


# ═══════════════════════════════════════════════════════════════════
#  Current User ("Me") View
# ═══════════════════════════════════════════════════════════════════


class MeView(APIView):
    """
    GET /api/auth/me/

    Requires authentication.  Returns the caller's profile, including
    the ``citizen_id`` the frontend uses for observation and reward
    requests.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Current user", responses={200: UserDetailSerializer}, tags=["Auth"])
    def get(self, request: Request) -> Response:
        return Response(UserDetailSerializer(request.user).data)


# ═══════════════════════════════════════════════════════════════════
#  Availability & Health
# ═══════════════════════════════════════════════════════════════════


class CheckUsernameView(APIView):
    """GET /api/auth/check-username/?username=<name>"""

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="Check username availability",
        parameters=[OpenApiParameter(name="username", type=str, required=True)],
        responses={200: OpenApiResponse(description="Username and whether it is free.")},
        tags=["Auth"],
    )
    def get(self, request: Request) -> Response:
        username = request.query_params.get("username", "").strip()
        if not username:
            return Response(
                {"detail": "The 'username' query parameter is required."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return Response({
            "username": username,
            "available": AvailabilityService.username_available(username),
        })


class CheckEmailView(APIView):
    """GET /api/auth/check-email/?email=<address>"""

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="Check email availability",
        parameters=[OpenApiParameter(name="email", type=str, required=True)],
        responses={200: OpenApiResponse(description="Email and whether it is free.")},
        tags=["Auth"],
    )
    def get(self, request: Request) -> Response:
        email = request.query_params.get("email", "").strip()
        if not email:
            return Response(
                {"detail": "The 'email' query parameter is required."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return Response({
            "email": email,
            "available": AvailabilityService.email_available(email),
        })


class AuthHealthView(APIView):
    """GET /api/auth/health/"""

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(summary="Auth service health", tags=["Health"])
    def get(self, request: Request) -> Response:
        return Response({"status": "UP", "service": "auth"})

"""Authentication API views (JWT)."""

import logging

from django.core.exceptions import ImproperlyConfigured
from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from api.v1.serializers import CustomTokenObtainPairSerializer, UserSerializer

logger = logging.getLogger("salesdesk")


class SafeScopedRateThrottle(ScopedRateThrottle):
    """Scoped throttle that falls back to a strict default if scope config is missing."""

    def get_rate(self):
        try:
            return super().get_rate()
        except ImproperlyConfigured:
            logger.warning("Throttle scope '%s' not configured, applying strict default 5/min.", self.scope)
            return "5/min"


class LoginView(TokenObtainPairView):
    """Issue an access/refresh pair and return the user's profile with it."""

    serializer_class = CustomTokenObtainPairSerializer
    throttle_classes = [SafeScopedRateThrottle]
    throttle_scope = "auth_burst"
    permission_classes = [permissions.AllowAny]


class RefreshView(TokenRefreshView):
    throttle_classes = [SafeScopedRateThrottle]
    throttle_scope = "auth_sustained"
    permission_classes = [permissions.AllowAny]


class MeView(APIView):
    """Profile of the authenticated user."""

    def get(self, request):
        return Response(UserSerializer(request.user).data)

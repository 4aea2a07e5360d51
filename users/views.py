"""
Authentication views for the users app.

Logging in through the JWT token endpoint never goes through
``django.contrib.auth.login``, so ``user_logged_in`` is not sent; the
sign-in activity is recorded here instead.
"""
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.views import TokenObtainPairView

from activity.models import ActivityKind
from activity.services import activity_recorder


class SignInTokenObtainPairView(TokenObtainPairView):
    """
    Obtain JWT tokens using username + password and record the sign-in.
    """
    permission_classes = [permissions.AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        try:
            serializer.is_valid(raise_exception=True)
        except TokenError as e:
            raise InvalidToken(e.args[0])

        activity_recorder.track(serializer.user, ActivityKind.SIGN_IN, "Signed in", request=request)
        return Response(serializer.validated_data, status=status.HTTP_200_OK)

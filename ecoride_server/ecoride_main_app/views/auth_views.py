from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.authentication import JWTAuthentication

from ..exceptions import RideshareError
from ..serializers import SignUpSerializer, SignInSerializer, ChangePasswordSerializer
from ..services import AuthService
from .base import error_response, invalid_input_response, actor_for


class AuthViewSet(viewsets.ViewSet):
    """Sign-up and the three sign-in doors (users, employees, admins)"""
    permission_classes = [AllowAny]
    authentication_classes = []

    @action(detail=False, methods=['post'], url_path='register')
    def register(self, request):
        serializer = SignUpSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input_response(serializer.errors)

        data = dict(serializer.validated_data)
        email = data.pop('email')
        password = data.pop('password')
        try:
            session = AuthService().sign_up(email, password, metadata=data)
        except RideshareError as e:
            return error_response(e)
        return Response(session, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['post'], url_path='login')
    def login(self, request):
        return self._sign_in(request, AuthService().sign_in)

    @action(detail=False, methods=['post'], url_path='employee-login')
    def employee_login(self, request):
        return self._sign_in(request, AuthService().employee_sign_in)

    @action(detail=False, methods=['post'], url_path='admin-login')
    def admin_login(self, request):
        return self._sign_in(request, AuthService().admin_sign_in)

    @action(
        detail=False,
        methods=['post'],
        url_path='change-password',
        authentication_classes=[JWTAuthentication],
        permission_classes=[IsAuthenticated],
    )
    def change_password(self, request):
        serializer = ChangePasswordSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input_response(serializer.errors)
        try:
            AuthService().change_password(
                actor_for(request),
                serializer.validated_data['current_password'],
                serializer.validated_data['new_password'],
            )
        except RideshareError as e:
            return error_response(e)
        return Response({'message': 'Password updated'}, status=status.HTTP_200_OK)

    def _sign_in(self, request, sign_in):
        serializer = SignInSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input_response(serializer.errors)
        try:
            session = sign_in(serializer.validated_data['email'], serializer.validated_data['password'])
        except RideshareError as e:
            return error_response(e)
        return Response(session, status=status.HTTP_200_OK)


__all__ = ['AuthViewSet']

"""Profile views for the signed-in user"""
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.generics import get_object_or_404
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.authentication import JWTAuthentication

from ..exceptions import RideshareError
from ..models import Profile
from ..serializers import ProfileSerializer, RoleSerializer
from ..services import AuthService
from .base import error_response, invalid_input_response, actor_for


class ProfileView(viewsets.GenericViewSet):
    serializer_class = ProfileSerializer
    permission_classes = [IsAuthenticated]
    authentication_classes = [JWTAuthentication]

    def list(self, request, *args, **kwargs):
        profile = get_object_or_404(Profile, user=request.user)
        serializer = self.get_serializer(profile)
        return Response(serializer.data, status=status.HTTP_200_OK)

    @action(detail=False, methods=['get', 'patch'], url_path='me')
    def me(self, request):
        """GET returns the session; PATCH edits personal details"""
        if request.method == 'GET':
            return Response(AuthService().get_session(request.user), status=status.HTTP_200_OK)

        profile = get_object_or_404(Profile, user=request.user)
        serializer = self.get_serializer(profile, data=request.data, partial=True)
        if not serializer.is_valid():
            return invalid_input_response(serializer.errors)
        serializer.save()
        return Response(serializer.data, status=status.HTTP_200_OK)

    @action(detail=False, methods=['post'], url_path='role')
    def role(self, request):
        serializer = RoleSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input_response(serializer.errors)
        try:
            profile = AuthService().set_role(actor_for(request), serializer.validated_data['role'])
        except RideshareError as e:
            return error_response(e)
        return Response(self.get_serializer(profile).data, status=status.HTTP_200_OK)


__all__ = ['ProfileView']

"""Platform administration: users, employees and activity stats"""
from datetime import timedelta

from django.utils import timezone
from django.utils.dateparse import parse_date

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.authentication import JWTAuthentication

from ..exceptions import RideshareError, ValidationFailed
from ..models import AuthorizedEmployee
from ..permissions import IsPlatformAdmin
from ..serializers import (
    AdminUserSerializer,
    SuspendedUserSerializer,
    SuspendUserSerializer,
    EmployeeSerializer,
    ProfileSerializer,
)
from ..services import AuthService, StatsService
from .base import error_response, invalid_input_response, actor_for

DEFAULT_STATS_WINDOW_DAYS = 30


class AdminViewSet(viewsets.GenericViewSet):
    authentication_classes = [JWTAuthentication]
    permission_classes = [IsAuthenticated, IsPlatformAdmin]


class AdminUserViewSet(AdminViewSet):
    serializer_class = AdminUserSerializer
    lookup_value_regex = r'\d+'

    def list(self, request):
        try:
            profiles = AuthService().list_users(actor_for(request))
        except RideshareError as e:
            return error_response(e)
        return Response(self.get_serializer(profiles, many=True).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=['post'], url_path='suspend')
    def suspend(self, request, pk=None):
        serializer = SuspendUserSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input_response(serializer.errors)
        try:
            suspension = AuthService().suspend_user(actor_for(request), int(pk), serializer.validated_data['reason'])
        except RideshareError as e:
            return error_response(e)
        return Response(SuspendedUserSerializer(suspension).data, status=status.HTTP_201_CREATED)


class AdminEmployeeViewSet(AdminViewSet):
    serializer_class = EmployeeSerializer
    lookup_value_regex = r'\d+'

    def list(self, request):
        employees = AuthorizedEmployee.objects.order_by('email').values('id', 'email', 'created_at')
        return Response(list(employees), status=status.HTTP_200_OK)

    def create(self, request):
        serializer = self.get_serializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input_response(serializer.errors)
        data = serializer.validated_data
        try:
            profile = AuthService().add_employee(
                actor_for(request), data['email'], data.get('password'), data.get('name')
            )
        except RideshareError as e:
            return error_response(e)
        return Response(ProfileSerializer(profile).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, pk=None):
        employee = AuthorizedEmployee.objects.filter(pk=pk).first()
        if not employee:
            return Response({'error': 'Employee not found', 'code': 'not_found'}, status=status.HTTP_404_NOT_FOUND)
        try:
            AuthService().remove_employee(actor_for(request), employee.email)
        except RideshareError as e:
            return error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)


class AdminStatsViewSet(AdminViewSet):

    def list(self, request):
        """Daily rides and platform fees over ?start=YYYY-MM-DD&end=YYYY-MM-DD (last 30 days by default)"""
        today = timezone.localdate()
        try:
            start = self._parse_day(request.query_params.get('start'), today - timedelta(days=DEFAULT_STATS_WINDOW_DAYS))
            end = self._parse_day(request.query_params.get('end'), today)
            actor = actor_for(request)
            service = StatsService()
            data = {
                'start': start,
                'end': end,
                'rides_per_day': service.rides_per_day(actor, start, end),
                'credits_per_day': service.credits_per_day(actor, start, end),
                'total_platform_credits': service.total_platform_credits(actor),
            }
        except RideshareError as e:
            return error_response(e)
        return Response(data, status=status.HTTP_200_OK)

    def _parse_day(self, value, default):
        if not value:
            return default
        try:
            day = parse_date(value)
        except ValueError:
            day = None
        if day is None:
            raise ValidationFailed(f'Invalid date: {value}')
        return day


__all__ = ['AdminUserViewSet', 'AdminEmployeeViewSet', 'AdminStatsViewSet']

"""Vehicle, brand and driver preference views"""
import logging

from rest_framework import viewsets, status
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.authentication import JWTAuthentication

from ..models import Brand, Vehicle, DriverPreferences
from ..permissions import IsDriver
from ..serializers import BrandSerializer, VehicleSerializer, DriverPreferencesSerializer
from .base import invalid_input_response

logger = logging.getLogger(__name__)


class BrandViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Brand.objects.all().order_by('name')
    serializer_class = BrandSerializer
    permission_classes = [AllowAny]


class VehicleViewSet(viewsets.ModelViewSet):
    authentication_classes = [JWTAuthentication]
    permission_classes = [IsAuthenticated, IsDriver]
    serializer_class = VehicleSerializer

    def get_queryset(self):
        return Vehicle.objects.filter(user=self.request.user).select_related('brand_ref').order_by('-created_at')

    def perform_create(self, serializer):
        vehicle = serializer.save(user=self.request.user)
        logger.info(f'[FLEET] User {self.request.user.id} registered vehicle {vehicle.id}')


class DriverPreferencesViewSet(viewsets.GenericViewSet):
    """A driver's single preference record: GET to read, POST to replace"""
    authentication_classes = [JWTAuthentication]
    permission_classes = [IsAuthenticated, IsDriver]
    serializer_class = DriverPreferencesSerializer

    def list(self, request):
        preferences, _ = DriverPreferences.objects.get_or_create(user=request.user)
        return Response(self.get_serializer(preferences).data, status=status.HTTP_200_OK)

    def create(self, request):
        preferences, _ = DriverPreferences.objects.get_or_create(user=request.user)
        serializer = self.get_serializer(preferences, data=request.data, partial=True)
        if not serializer.is_valid():
            return invalid_input_response(serializer.errors)
        serializer.save()
        return Response(serializer.data, status=status.HTTP_200_OK)


__all__ = ['BrandViewSet', 'VehicleViewSet', 'DriverPreferencesViewSet']

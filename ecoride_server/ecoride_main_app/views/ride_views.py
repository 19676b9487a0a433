"""Ride views using RideService and BookingService"""
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.authentication import JWTAuthentication

from ..exceptions import RideshareError, RideNotFound, NotAuthorized
from ..models import Ride
from ..serializers import (
    RideSerializer,
    RideWriteSerializer,
    RideSearchSerializer,
    BookRideSerializer,
    RideBookingSerializer,
    RidePassengerSerializer,
)
from ..services import RideService, BookingService
from .base import error_response, invalid_input_response, actor_for

PUBLIC_ACTIONS = ['list', 'retrieve', 'search']


class RideViewSet(viewsets.GenericViewSet):
    authentication_classes = [JWTAuthentication]
    serializer_class = RideSerializer
    queryset = Ride.objects.select_related('driver__profile', 'vehicle')
    lookup_value_regex = r'\d+'

    def get_permissions(self):
        if self.action in PUBLIC_ACTIONS:
            return [AllowAny()]
        return [IsAuthenticated()]

    def list(self, request):
        """Upcoming bookable rides"""
        rides = RideService().upcoming_rides()
        return Response(self.get_serializer(rides, many=True).data, status=status.HTTP_200_OK)

    def retrieve(self, request, pk=None):
        ride = self.get_queryset().filter(pk=pk).first()
        if not ride:
            return error_response(RideNotFound())
        return Response(self.get_serializer(ride).data, status=status.HTTP_200_OK)

    def create(self, request):
        serializer = RideWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input_response(serializer.errors)
        try:
            ride = RideService().create_ride(actor_for(request), **serializer.validated_data)
        except RideshareError as e:
            return error_response(e)
        return Response(self.get_serializer(ride).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        serializer = RideWriteSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return invalid_input_response(serializer.errors)
        try:
            ride = RideService().update_ride(actor_for(request), pk, **serializer.validated_data)
        except RideshareError as e:
            return error_response(e)
        return Response(self.get_serializer(ride).data, status=status.HTTP_200_OK)

    @action(detail=False, methods=['get'], url_path='search')
    def search(self, request):
        """
        Search rides for a route on a given day.

        When nothing matches, the earliest later date with a bookable ride
        is returned so the client can suggest it.
        """
        serializer = RideSearchSerializer(data=request.query_params)
        if not serializer.is_valid():
            return invalid_input_response(serializer.errors)

        data = serializer.validated_data
        service = RideService()
        rides = []
        if data.get('date'):
            rides = list(service.search_rides(data['departure_city'], data['arrival_city'], data['date']))

        next_date = None
        if not rides:
            next_date = service.next_available_date(data['departure_city'], data['arrival_city'])

        return Response({
            'rides': self.get_serializer(rides, many=True).data,
            'next_available_date': next_date,
        }, status=status.HTTP_200_OK)

    @action(detail=False, methods=['get'], url_path='mine')
    def mine(self, request):
        """Rides published by the current driver"""
        rides = self.get_queryset().filter(driver=request.user).order_by('-departure_date')
        return Response(self.get_serializer(rides, many=True).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=['post'], url_path='start')
    def start(self, request, pk=None):
        try:
            ride = RideService().start_ride(actor_for(request), pk)
        except RideshareError as e:
            return error_response(e)
        return Response(self.get_serializer(ride).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=['post'], url_path='complete')
    def complete(self, request, pk=None):
        try:
            ride = RideService().complete_ride(actor_for(request), pk)
        except RideshareError as e:
            return error_response(e)
        return Response(self.get_serializer(ride).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=['post'], url_path='cancel')
    def cancel(self, request, pk=None):
        try:
            ride, refunded = RideService().cancel_ride(actor_for(request), pk)
        except RideshareError as e:
            return error_response(e)
        return Response({
            'message': 'Ride cancelled',
            'refunded_passengers': refunded,
            'ride': self.get_serializer(ride).data,
        }, status=status.HTTP_200_OK)

    @action(detail=True, methods=['post'], url_path='book')
    def book(self, request, pk=None):
        serializer = BookRideSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input_response(serializer.errors)
        try:
            result = BookingService().book_ride(
                actor_for(request), pk, serializer.validated_data['payment_method']
            )
        except RideshareError as e:
            return error_response(e)

        if result['requires_redirect']:
            return Response({
                'requires_redirect': True,
                'redirect_url': result['redirect_url'],
                'session_id': result['session_id'],
            }, status=status.HTTP_200_OK)

        return Response({
            'requires_redirect': False,
            'booking': RideBookingSerializer(result['booking']).data,
        }, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'], url_path='cancel-booking')
    def cancel_booking(self, request, pk=None):
        try:
            ride = BookingService().cancel_participation(actor_for(request), pk)
        except RideshareError as e:
            return error_response(e)
        return Response({
            'message': 'Booking cancelled and credits refunded',
            'ride': self.get_serializer(ride).data,
        }, status=status.HTTP_200_OK)

    @action(detail=True, methods=['get'], url_path='bookings')
    def bookings(self, request, pk=None):
        """Passengers of a ride, visible to its driver"""
        ride = self.get_queryset().filter(pk=pk).first()
        if not ride:
            return error_response(RideNotFound())
        if ride.driver_id != request.user.id:
            return error_response(NotAuthorized('Only the driver of this ride can see its passengers'))

        bookings = ride.bookings.select_related('passenger__profile').order_by('created_at')
        return Response(RidePassengerSerializer(bookings, many=True).data, status=status.HTTP_200_OK)


__all__ = ['RideViewSet']

"""Ride and booking serializers"""
from rest_framework import serializers

from ..models import Ride, RideBooking
from ..utils.constants import PaymentMethod
from .user_serializers import PublicProfileSerializer


class RideSerializer(serializers.ModelSerializer):
    driver = PublicProfileSerializer(source='driver.profile', read_only=True)

    class Meta:
        model = Ride
        fields = ['id', 'driver', 'departure_city', 'arrival_city', 'departure_date', 'arrival_time',
                  'description', 'price', 'seats_total', 'seats_available', 'status', 'vehicle',
                  'vehicle_brand', 'vehicle_model', 'is_electric_car', 'driver_preferences',
                  'created_at', 'started_at', 'completed_at', 'cancelled_at']
        read_only_fields = fields


class RideWriteSerializer(serializers.Serializer):
    """Input for publishing a ride; used with partial=True for edits"""
    departure_city = serializers.CharField(max_length=100)
    arrival_city = serializers.CharField(max_length=100)
    departure_date = serializers.DateTimeField()
    arrival_time = serializers.DateTimeField(required=False, allow_null=True)
    price = serializers.IntegerField(min_value=1)
    seats = serializers.IntegerField(min_value=1)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    vehicle_id = serializers.IntegerField(required=False, allow_null=True)


class RideSearchSerializer(serializers.Serializer):
    departure_city = serializers.CharField(max_length=100)
    arrival_city = serializers.CharField(max_length=100)
    date = serializers.DateField(required=False)


class BookRideSerializer(serializers.Serializer):
    payment_method = serializers.ChoiceField(choices=PaymentMethod.CHOICES, default=PaymentMethod.CREDITS)


class RideBookingSerializer(serializers.ModelSerializer):
    ride = RideSerializer(read_only=True)

    class Meta:
        model = RideBooking
        fields = ['id', 'ride', 'created_at']


class RidePassengerSerializer(serializers.ModelSerializer):
    """A booking seen by the ride's driver"""
    passenger = PublicProfileSerializer(source='passenger.profile', read_only=True)

    class Meta:
        model = RideBooking
        fields = ['id', 'passenger', 'created_at']

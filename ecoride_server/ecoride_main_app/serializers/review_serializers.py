"""Review-related serializers"""
from rest_framework import serializers

from ..models import DriverReview
from ..utils.constants import ReviewStatus, BusinessRules
from .user_serializers import PublicProfileSerializer


class DriverReviewSerializer(serializers.ModelSerializer):
    reviewer = PublicProfileSerializer(source='reviewer.profile', read_only=True)
    driver = PublicProfileSerializer(source='driver.profile', read_only=True)

    class Meta:
        model = DriverReview
        fields = ['id', 'reviewer', 'driver', 'ride', 'rating', 'comment', 'is_positive',
                  'status', 'reviewed_at', 'created_at', 'updated_at']
        read_only_fields = fields


class ReviewSubmitSerializer(serializers.Serializer):
    driver_id = serializers.IntegerField()
    rating = serializers.IntegerField(min_value=BusinessRules.MIN_RATING, max_value=BusinessRules.MAX_RATING)
    comment = serializers.CharField(required=False, allow_blank=True, default='')
    is_positive = serializers.BooleanField(required=False, allow_null=True, default=None)
    ride_id = serializers.IntegerField(required=False, allow_null=True, default=None)


class ModerationSerializer(serializers.Serializer):
    decision = serializers.ChoiceField(choices=ReviewStatus.DECISIONS)


class ProblematicRideSerializer(serializers.ModelSerializer):
    """A negative review with the ride, driver and passenger it concerns"""
    review_id = serializers.IntegerField(source='id', read_only=True)
    review_comment = serializers.CharField(source='comment', read_only=True)
    ride_id = serializers.IntegerField(source='ride.id', read_only=True, default=None)
    departure_city = serializers.CharField(source='ride.departure_city', read_only=True, default=None)
    arrival_city = serializers.CharField(source='ride.arrival_city', read_only=True, default=None)
    departure_date = serializers.DateTimeField(source='ride.departure_date', read_only=True, default=None)
    driver_id = serializers.IntegerField(source='driver.id', read_only=True)
    driver_name = serializers.CharField(source='driver.profile.display_name', read_only=True, default=None)
    driver_email = serializers.EmailField(source='driver.email', read_only=True)
    passenger_id = serializers.IntegerField(source='reviewer.id', read_only=True)
    passenger_name = serializers.CharField(source='reviewer.profile.display_name', read_only=True, default=None)
    passenger_email = serializers.EmailField(source='reviewer.email', read_only=True)

    class Meta:
        model = DriverReview
        fields = ['review_id', 'review_comment', 'rating', 'status', 'ride_id', 'departure_city',
                  'arrival_city', 'departure_date', 'driver_id', 'driver_name', 'driver_email',
                  'passenger_id', 'passenger_name', 'passenger_email', 'created_at']

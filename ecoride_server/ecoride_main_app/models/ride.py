"""Ride-related models"""
from django.db import models
from django.contrib.auth.models import User

from ..utils.constants import RideStatus


class Ride(models.Model):
    STATUS_CHOICES = RideStatus.CHOICES

    driver = models.ForeignKey(User, on_delete=models.CASCADE, related_name='rides')
    vehicle = models.ForeignKey('Vehicle', on_delete=models.SET_NULL, null=True, blank=True, related_name='rides')
    departure_city = models.CharField(max_length=100)
    arrival_city = models.CharField(max_length=100)
    departure_date = models.DateTimeField(db_index=True)
    arrival_time = models.DateTimeField(null=True, blank=True)
    description = models.TextField(blank=True, null=True)
    price = models.PositiveIntegerField()
    seats_total = models.PositiveSmallIntegerField()
    seats_available = models.PositiveSmallIntegerField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=RideStatus.PENDING, db_index=True)
    vehicle_brand = models.CharField(max_length=50, null=True, blank=True)
    vehicle_model = models.CharField(max_length=50, null=True, blank=True)
    is_electric_car = models.BooleanField(default=False)
    driver_preferences = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    started_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        indexes = [
            models.Index(fields=['departure_city', 'arrival_city', 'departure_date'], name='ride_route_date_idx'),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(price__gt=0), name='ride_price_positive'),
            models.CheckConstraint(condition=models.Q(seats_available__gte=0), name='ride_seats_non_negative'),
            models.CheckConstraint(
                condition=models.Q(seats_available__lte=models.F('seats_total')),
                name='ride_seats_within_capacity',
            ),
        ]

    def __str__(self):
        return f"{self.departure_city} → {self.arrival_city} ({self.departure_date:%Y-%m-%d %H:%M})"

    @property
    def is_bookable(self):
        return self.status == RideStatus.PENDING and self.seats_available > 0

    def passenger_ids(self):
        return list(self.bookings.order_by('created_at', 'id').values_list('passenger_id', flat=True))

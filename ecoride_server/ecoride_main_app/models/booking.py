"""Booking-related models"""
from django.db import models
from django.contrib.auth.models import User

from ..utils.constants import CheckoutStatus


class RideBooking(models.Model):
    ride = models.ForeignKey('Ride', on_delete=models.CASCADE, related_name='bookings')
    passenger = models.ForeignKey(User, on_delete=models.CASCADE, related_name='ride_bookings')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['ride', 'passenger'], name='unique_booking_per_passenger'),
        ]
        indexes = [
            models.Index(fields=['passenger', '-created_at'], name='booking_passenger_recent_idx'),
        ]

    def __str__(self):
        return f"Booking by {self.passenger.username} - {self.ride}"


class CheckoutSession(models.Model):
    """Hosted checkout started for a ride; no seat or credit is held meanwhile."""

    STATUS_CHOICES = CheckoutStatus.CHOICES

    session_id = models.CharField(max_length=255, unique=True)
    ride = models.ForeignKey('Ride', on_delete=models.CASCADE, related_name='checkout_sessions')
    passenger = models.ForeignKey(User, on_delete=models.CASCADE, related_name='checkout_sessions')
    amount = models.PositiveIntegerField()
    status = models.CharField(max_length=30, choices=STATUS_CHOICES, default=CheckoutStatus.PENDING, db_index=True)
    redirect_url = models.URLField(max_length=1000, blank=True)
    payment_reference = models.CharField(max_length=255, blank=True, null=True)
    booking = models.ForeignKey(RideBooking, on_delete=models.SET_NULL, null=True, blank=True, related_name='checkout_sessions')
    failure_reason = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"Checkout {self.session_id} ({self.status})"

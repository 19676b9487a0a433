"""Vehicle and driver preference models"""
from django.db import models
from django.contrib.auth.models import User

from ..utils.constants import EnergyType


class Brand(models.Model):
    name = models.CharField(max_length=50, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.name


class Vehicle(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='vehicles')
    brand_ref = models.ForeignKey(Brand, on_delete=models.SET_NULL, null=True, blank=True, related_name='vehicles')
    brand = models.CharField(max_length=50)
    model = models.CharField(max_length=50)
    color = models.CharField(max_length=30)
    license_plate = models.CharField(max_length=20)
    first_registration_date = models.DateField()
    energy_type = models.CharField(max_length=20, choices=EnergyType.CHOICES, null=True, blank=True)
    seats = models.PositiveSmallIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.CheckConstraint(condition=models.Q(seats__gt=0), name='vehicle_seats_positive'),
        ]

    def __str__(self):
        return f"{self.brand} {self.model} ({self.license_plate})"

    @property
    def is_electric(self):
        return self.energy_type == EnergyType.ELECTRIC


class DriverPreferences(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='driver_preferences')
    smoking_allowed = models.BooleanField(default=False)
    pets_allowed = models.BooleanField(default=False)
    custom_preferences = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"Preferences of {self.user.username}"

    def as_list(self):
        prefs = ['smoking_allowed' if self.smoking_allowed else 'no_smoking',
                 'pets_allowed' if self.pets_allowed else 'no_pets']
        return prefs + list(self.custom_preferences or [])

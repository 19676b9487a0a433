"""User-related models"""
from django.db import models
from django.contrib.auth.models import User

from ..utils.constants import UserRole, BusinessRules


class Profile(models.Model):
    ROLE_CHOICES = UserRole.CHOICES

    user = models.OneToOneField(User, on_delete=models.CASCADE, primary_key=True)
    username = models.CharField(max_length=50, null=True, blank=True)
    name = models.CharField(max_length=100, null=True, blank=True)
    first_name = models.CharField(max_length=100, null=True, blank=True)
    last_name = models.CharField(max_length=100, null=True, blank=True)
    phone = models.CharField(max_length=20, null=True, blank=True)
    address = models.CharField(max_length=150, null=True, blank=True)
    birth_date = models.DateField(null=True, blank=True)
    photo = models.URLField(max_length=300, null=True, blank=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=UserRole.PASSENGER)
    credits = models.PositiveIntegerField(default=BusinessRules.SIGNUP_CREDITS)
    driver_rating = models.DecimalField(max_digits=3, decimal_places=2, default=0.00)
    total_reviews = models.IntegerField(default=0)
    is_temporary_password = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.CheckConstraint(condition=models.Q(credits__gte=0), name='profile_credits_non_negative'),
        ]

    def __str__(self):
        return self.name or self.user.username

    @property
    def display_name(self):
        return self.name or self.user.get_full_name() or self.user.username

    @property
    def can_drive(self):
        return self.role in UserRole.DRIVING_ROLES

    @property
    def is_staff_member(self):
        return self.role in UserRole.STAFF_ROLES


class SuspendedUser(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, primary_key=True, related_name='suspension')
    reason = models.TextField(blank=True, null=True)
    suspended_at = models.DateTimeField(auto_now_add=True)
    suspended_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='suspensions_issued')

    def __str__(self):
        return f"{self.user.username} suspended at {self.suspended_at}"


class AuthorizedEmployee(models.Model):
    email = models.EmailField(unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.email


class AuthorizedAdmin(models.Model):
    email = models.EmailField(unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.email

"""Shared fixtures for service and API tests"""
from datetime import timedelta

from django.contrib.auth.models import User
from django.utils import timezone

from ..models import Profile, Ride, RideBooking
from ..services import Actor
from ..utils.constants import UserRole, RideStatus


def make_user(username, role=UserRole.PASSENGER, credits=50, email=None):
    user = User.objects.create_user(
        username=username,
        email=f'{username}@example.com' if email is None else email,
        password='Str0ng-pass!',
    )
    Profile.objects.create(user=user, username=username, name=username.title(), role=role, credits=credits)
    return user


def actor(user):
    return Actor.from_user(user)


def make_ride(driver, price=20, seats=3, seats_available=None, status=RideStatus.PENDING,
              departure_city='Paris', arrival_city='Lyon', departure_date=None):
    return Ride.objects.create(
        driver=driver,
        departure_city=departure_city,
        arrival_city=arrival_city,
        departure_date=departure_date or timezone.now() + timedelta(days=2),
        price=price,
        seats_total=seats,
        seats_available=seats if seats_available is None else seats_available,
        status=status,
    )


def add_booking(ride, passenger):
    """Record an existing booking the way a committed booking leaves it"""
    Ride.objects.filter(pk=ride.pk).update(seats_available=ride.seats_available - 1)
    ride.refresh_from_db()
    return RideBooking.objects.create(ride=ride, passenger=passenger)


def credits_of(user):
    return Profile.objects.get(pk=user.pk).credits

"""Ride service - publication, status transitions and driver cancellation"""

import logging
from datetime import datetime, time, timedelta

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from wallet.services import debit_credits, refund_credits
from ..models import Ride, Vehicle, DriverPreferences, CheckoutSession
from ..utils.constants import RideStatus, CheckoutStatus, TransactionTitle, BusinessRules
from ..exceptions import (
    ValidationFailed,
    NotAuthorized,
    RideNotFound,
    InvalidTransition,
    Conflict,
)
from .notification_service import NotificationService

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ['departure_city', 'arrival_city', 'departure_date', 'arrival_time', 'price', 'seats', 'description']


class RideService:
    """Service for the ride state machine: pending → in_progress → completed, or cancelled"""

    def __init__(self, notifier=None):
        self.notifier = notifier or NotificationService()

    # ===================== Publication =====================

    @transaction.atomic
    def create_ride(self, actor, departure_city, arrival_city, departure_date, price, seats,
                    arrival_time=None, description=None, vehicle_id=None):
        """
        Publish a ride and charge the platform posting fee as one unit.

        Args:
            actor: Actor publishing the ride (driver or both)
            departure_city: Departure city name
            arrival_city: Arrival city name
            departure_date: Aware datetime of departure, in the future
            price: Seat price in credits (> 0)
            seats: Offered seats (> 0)
            arrival_time: Optional aware datetime, after departure
            description: Optional free text
            vehicle_id: Optional id of one of the driver's vehicles

        Returns:
            Ride object

        Raises:
            RoleNotPermitted: If the actor cannot drive
            ValidationFailed: If route, schedule, price or seats are malformed
            InsufficientCredits: If the posting fee is not covered
        """
        actor.require_driver()
        departure_city, arrival_city = self._validate_route(departure_city, arrival_city)
        departure_date, arrival_time = self._validate_schedule(departure_date, arrival_time)
        self._validate_price(price)
        self._validate_seats(seats)

        vehicle = None
        if vehicle_id is not None:
            vehicle = Vehicle.objects.filter(id=vehicle_id, user_id=actor.id).first()
            if not vehicle:
                raise ValidationFailed('Vehicle not found among your vehicles')
            if seats > vehicle.seats:
                raise ValidationFailed(f'This vehicle only has {vehicle.seats} seats')

        preferences = DriverPreferences.objects.filter(user_id=actor.id).first()

        ride = Ride.objects.create(
            driver_id=actor.id,
            vehicle=vehicle,
            departure_city=departure_city,
            arrival_city=arrival_city,
            departure_date=departure_date,
            arrival_time=arrival_time,
            description=description,
            price=price,
            seats_total=seats,
            seats_available=seats,
            status=RideStatus.PENDING,
            vehicle_brand=vehicle.brand if vehicle else None,
            vehicle_model=vehicle.model if vehicle else None,
            is_electric_car=vehicle.is_electric if vehicle else False,
            driver_preferences=preferences.as_list() if preferences else [],
        )

        fee = settings.RIDE_POSTING_FEE
        if fee > 0:
            # Raises InsufficientCredits and rolls the insert back with it
            debit_credits(actor.id, fee, title=TransactionTitle.RIDE_FEE,
                          reference_id=f'ride:{ride.id}', description='Ride publication fee')

        logger.info(f'[RIDE] Ride {ride.id} published by user {actor.id} ({ride})')
        return ride

    @transaction.atomic
    def update_ride(self, actor, ride_id, **changes):
        """Edit a pending ride; capacity and price changes respect current bookings"""
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationFailed(f'Cannot edit fields: {", ".join(sorted(unknown))}')

        ride = self._get_driver_ride_for_update(actor, ride_id)
        if ride.status != RideStatus.PENDING:
            raise InvalidTransition('Only pending rides can be edited')

        booked = ride.seats_total - ride.seats_available

        if 'departure_city' in changes or 'arrival_city' in changes:
            ride.departure_city, ride.arrival_city = self._validate_route(
                changes.get('departure_city', ride.departure_city),
                changes.get('arrival_city', ride.arrival_city),
            )
        if 'departure_date' in changes or 'arrival_time' in changes:
            ride.departure_date, ride.arrival_time = self._validate_schedule(
                changes.get('departure_date', ride.departure_date),
                changes.get('arrival_time', ride.arrival_time),
            )
        if 'price' in changes and changes['price'] != ride.price:
            self._validate_price(changes['price'])
            if booked:
                raise Conflict('The price cannot change once passengers have booked')
            ride.price = changes['price']
        if 'seats' in changes:
            seats = changes['seats']
            self._validate_seats(seats)
            if seats < booked:
                raise ValidationFailed(f'{booked} seats are already booked')
            if ride.vehicle and seats > ride.vehicle.seats:
                raise ValidationFailed(f'This vehicle only has {ride.vehicle.seats} seats')
            ride.seats_total = seats
            ride.seats_available = seats - booked
        if 'description' in changes:
            ride.description = changes['description']

        ride.save()
        logger.info(f'[RIDE] Ride {ride.id} updated by user {actor.id}: {sorted(changes)}')
        return ride

    # ===================== Status transitions =====================

    @transaction.atomic
    def start_ride(self, actor, ride_id):
        """pending → in_progress"""
        ride = self._get_driver_ride_for_update(actor, ride_id)
        if ride.status != RideStatus.PENDING:
            raise InvalidTransition(f'Cannot start a ride with status "{ride.status}"')

        ride.status = RideStatus.IN_PROGRESS
        ride.started_at = timezone.now()
        ride.save(update_fields=['status', 'started_at'])

        logger.info(f'[RIDE] Ride {ride.id} started')
        return ride

    @transaction.atomic
    def complete_ride(self, actor, ride_id):
        """in_progress → completed, then ask passengers for a review"""
        ride = self._get_driver_ride_for_update(actor, ride_id)
        if ride.status != RideStatus.IN_PROGRESS:
            raise InvalidTransition(f'Cannot complete a ride with status "{ride.status}"')

        ride.status = RideStatus.COMPLETED
        ride.completed_at = timezone.now()
        ride.save(update_fields=['status', 'completed_at'])

        passenger_ids = ride.passenger_ids()
        notifier = self.notifier
        transaction.on_commit(lambda: notifier.notify_completion(ride.id, passenger_ids), robust=True)

        logger.info(f'[RIDE] Ride {ride.id} completed with {len(passenger_ids)} passengers')
        return ride

    @transaction.atomic
    def cancel_ride(self, actor, ride_id):
        """
        Cancel a ride by its driver.

        Refunds every passenger from the booking and price data, deletes the
        bookings and retires the ride, all in one transaction. The cancellation
        email goes out once after commit; its failure never undoes the cancellation.

        Returns:
            Tuple of (ride, refunded_count)

        Raises:
            RideNotFound: If the ride does not exist or is already cancelled
            NotAuthorized: If the actor is not the ride's driver
            InvalidTransition: If the ride is completed
        """
        ride = self._get_driver_ride_for_update(actor, ride_id)
        if ride.status == RideStatus.CANCELLED:
            raise RideNotFound('Ride not found or already cancelled')
        if ride.status == RideStatus.COMPLETED:
            raise InvalidTransition('A completed ride cannot be cancelled')

        bookings = list(ride.bookings.select_for_update().order_by('created_at', 'id'))
        for booking in bookings:
            refund_credits(
                booking.passenger_id,
                ride.price,
                title=TransactionTitle.REFUND,
                reference_id=f'ride:{ride.id}',
                description='Ride cancelled by driver',
            )
        passenger_ids = [booking.passenger_id for booking in bookings]
        ride.bookings.all().delete()

        CheckoutSession.objects.filter(
            ride=ride, status=CheckoutStatus.PENDING
        ).update(status=CheckoutStatus.EXPIRED, failure_reason='Ride cancelled by driver')

        ride.status = RideStatus.CANCELLED
        ride.seats_available = ride.seats_total
        ride.cancelled_at = timezone.now()
        ride.save(update_fields=['status', 'seats_available', 'cancelled_at'])

        notifier = self.notifier
        transaction.on_commit(lambda: notifier.notify_cancellation(ride.id, passenger_ids), robust=True)

        logger.info(f'[RIDE] Ride {ride.id} cancelled by driver, {len(passenger_ids)} passengers refunded')
        return ride, len(passenger_ids)

    # ===================== Search =====================

    def search_rides(self, departure_city, arrival_city, date):
        """Pending rides with free seats on the given calendar day"""
        start = timezone.make_aware(datetime.combine(date, time.min))
        end = start + timedelta(days=1)
        return self._bookable_rides().filter(
            departure_city__iexact=departure_city.strip(),
            arrival_city__iexact=arrival_city.strip(),
            departure_date__gte=start,
            departure_date__lt=end,
        ).order_by('departure_date')

    def next_available_date(self, departure_city, arrival_city):
        """Earliest future date with a bookable ride on this route, or None"""
        departure = self._bookable_rides().filter(
            departure_city__iexact=departure_city.strip(),
            arrival_city__iexact=arrival_city.strip(),
            departure_date__gt=timezone.now(),
        ).order_by('departure_date').values_list('departure_date', flat=True).first()
        return timezone.localtime(departure).date() if departure else None

    def upcoming_rides(self, limit=BusinessRules.UPCOMING_RIDES_LIMIT):
        return self._bookable_rides().filter(
            departure_date__gt=timezone.now()
        ).order_by('departure_date')[:limit]

    def _bookable_rides(self):
        return Ride.objects.filter(
            status=RideStatus.PENDING,
            seats_available__gt=0,
        ).select_related('driver__profile', 'vehicle')

    # ===================== Helpers =====================

    def _get_driver_ride_for_update(self, actor, ride_id):
        actor.require_active()
        ride = Ride.objects.select_for_update().filter(id=ride_id).first()
        if not ride:
            raise RideNotFound()
        if ride.driver_id != actor.id:
            raise NotAuthorized('Only the driver of this ride can do this')
        return ride

    def _validate_route(self, departure_city, arrival_city):
        departure_city = (departure_city or '').strip()
        arrival_city = (arrival_city or '').strip()
        if len(departure_city) < BusinessRules.MIN_CITY_LENGTH:
            raise ValidationFailed('Departure city is required')
        if len(arrival_city) < BusinessRules.MIN_CITY_LENGTH:
            raise ValidationFailed('Arrival city is required')
        if departure_city.lower() == arrival_city.lower():
            raise ValidationFailed('Departure and arrival cities must differ')
        return departure_city, arrival_city

    def _validate_schedule(self, departure_date, arrival_time):
        if not isinstance(departure_date, datetime):
            raise ValidationFailed('Departure date is required')
        if timezone.is_naive(departure_date):
            departure_date = timezone.make_aware(departure_date)
        if departure_date <= timezone.now():
            raise ValidationFailed('Departure date must be in the future')
        if arrival_time is not None:
            if not isinstance(arrival_time, datetime):
                raise ValidationFailed('Arrival time must be a date and time')
            if timezone.is_naive(arrival_time):
                arrival_time = timezone.make_aware(arrival_time)
            if arrival_time <= departure_date:
                raise ValidationFailed('Arrival time must be after departure')
        return departure_date, arrival_time

    def _validate_price(self, price):
        if not isinstance(price, int) or isinstance(price, bool) or price <= 0:
            raise ValidationFailed('Price must be a positive whole number of credits')

    def _validate_seats(self, seats):
        if not isinstance(seats, int) or isinstance(seats, bool) or seats <= 0:
            raise ValidationFailed('Seats must be a positive whole number')

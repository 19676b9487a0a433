"""Booking service - seat reservation, checkout callbacks and passenger cancellation"""

import logging

from django.db import transaction, IntegrityError
from django.db.models import F
from django.utils import timezone

from wallet.services import debit_credits, refund_credits, get_balance
from ..models import Ride, RideBooking, CheckoutSession
from ..utils.constants import RideStatus, CheckoutStatus, PaymentMethod, TransactionTitle
from ..exceptions import (
    RideshareError,
    ValidationFailed,
    NotFound,
    Conflict,
    InsufficientCredits,
    SelfBookingNotAllowed,
    RideNotBookable,
    AlreadyBooked,
    InvalidTransition,
    RideNotFound,
    BookingNotFound,
)
from .payment_service import PaymentService

logger = logging.getLogger(__name__)


class BookingService:
    """Service for booking operations"""

    def __init__(self, payment_service=None):
        self.payment_service = payment_service or PaymentService()

    def book_ride(self, actor, ride_id, payment_method=PaymentMethod.CREDITS):
        """
        Book one seat on a ride.

        Credits bookings commit immediately. Stripe bookings only open a
        checkout session; the seat is taken when the provider confirms payment.

        Returns:
            dict with 'requires_redirect' and either 'booking' or
            'redirect_url' and 'session_id'

        Raises:
            RideNotFound, RideNotBookable, AlreadyBooked, SelfBookingNotAllowed,
            InsufficientCredits, PaymentFailed
        """
        actor.require_active()
        if payment_method not in PaymentMethod.ALL:
            raise ValidationFailed(f'Unsupported payment method: {payment_method}')

        ride = Ride.objects.filter(id=ride_id).first()
        if not ride:
            raise RideNotFound()
        self._check_bookable(ride, actor.id)

        if payment_method == PaymentMethod.CREDITS:
            with transaction.atomic():
                booking = self._commit_booking(ride.id, actor.id)
            logger.info(f'[BOOKING] User {actor.id} booked ride {ride.id} with credits')
            return {'requires_redirect': False, 'booking': booking}

        checkout = self.payment_service.create_checkout(ride, actor.id, payment_method)
        session = CheckoutSession.objects.create(
            session_id=checkout['session_id'],
            ride=ride,
            passenger_id=actor.id,
            amount=ride.price,
            status=CheckoutStatus.PENDING,
            redirect_url=checkout['redirect_url'],
        )
        logger.info(f'[BOOKING] Checkout {session.session_id} opened for user {actor.id} on ride {ride.id}')
        return {
            'requires_redirect': True,
            'redirect_url': session.redirect_url,
            'session_id': session.session_id,
        }

    def confirm_checkout(self, session_id, payment_reference=None):
        """
        Commit the booking behind a paid checkout session.

        Safe to call more than once: a completed session returns its booking.
        When the commit is rejected after payment (seat gone, ride cancelled),
        the session is flagged for reconciliation and committed, then the
        payment is refunded through the provider outside the transaction.
        A successful refund moves the session to refunded. The original error
        is re-raised either way.
        """
        with transaction.atomic():
            checkout = CheckoutSession.objects.select_for_update().filter(session_id=session_id).first()
            if not checkout:
                raise NotFound('Checkout session not found')

            if checkout.status == CheckoutStatus.COMPLETED:
                logger.info(f'[CHECKOUT] Session {session_id} already completed')
                return checkout.booking
            if checkout.status in CheckoutStatus.SETTLED:
                raise Conflict(f'Checkout session already settled ({checkout.status})')

            if payment_reference:
                checkout.payment_reference = payment_reference

            try:
                with transaction.atomic():
                    booking = self._commit_booking(
                        checkout.ride_id,
                        checkout.passenger_id,
                        reference_id=f'checkout:{checkout.session_id}',
                    )
            except RideshareError as e:
                failure = e
            else:
                checkout.status = CheckoutStatus.COMPLETED
                checkout.booking = booking
                checkout.failure_reason = ''
                checkout.save(update_fields=['status', 'booking', 'payment_reference', 'failure_reason', 'updated_at'])
                logger.info(f'[CHECKOUT] Session {session_id} completed, booking {booking.id}')
                return booking

            # Stays flagged until the provider accepts the refund
            checkout.status = CheckoutStatus.NEEDS_RECONCILIATION
            checkout.failure_reason = failure.message
            checkout.save(update_fields=['status', 'payment_reference', 'failure_reason', 'updated_at'])

        if self.payment_service.refund(checkout.payment_reference):
            CheckoutSession.objects.filter(
                pk=checkout.pk, status=CheckoutStatus.NEEDS_RECONCILIATION
            ).update(status=CheckoutStatus.REFUNDED, updated_at=timezone.now())
            checkout.status = CheckoutStatus.REFUNDED

        logger.warning(
            f'[CHECKOUT] Session {session_id} paid but not bookable ({failure.message}), marked {checkout.status}'
        )
        raise failure

    def expire_checkout(self, session_id):
        """Mark an abandoned checkout as expired; nothing was reserved for it"""
        updated = CheckoutSession.objects.filter(
            session_id=session_id, status=CheckoutStatus.PENDING
        ).update(status=CheckoutStatus.EXPIRED)
        if updated:
            logger.info(f'[CHECKOUT] Session {session_id} expired')
        return bool(updated)

    @transaction.atomic
    def cancel_participation(self, actor, ride_id):
        """
        Cancel the actor's booking: delete it, free the seat and refund the price.

        Raises:
            RideNotFound: If the ride does not exist
            InvalidTransition: If the ride is completed or cancelled
            BookingNotFound: If the actor holds no booking on the ride
        """
        ride = Ride.objects.select_for_update().filter(id=ride_id).first()
        if not ride:
            raise RideNotFound()
        if ride.status in RideStatus.TERMINAL:
            raise InvalidTransition(f'Cannot leave a ride with status "{ride.status}"')

        deleted, _ = RideBooking.objects.filter(ride=ride, passenger_id=actor.id).delete()
        if not deleted:
            raise BookingNotFound('You have no booking on this ride')

        updated = Ride.objects.filter(
            id=ride.id, seats_available__lt=F('seats_total')
        ).update(seats_available=F('seats_available') + 1)
        if not updated:
            raise Conflict('Seat count is inconsistent for this ride')

        refund_credits(
            actor.id,
            ride.price,
            title=TransactionTitle.REFUND,
            reference_id=f'ride:{ride.id}',
            description='Booking cancelled by passenger',
        )

        ride.refresh_from_db()
        logger.info(f'[BOOKING] User {actor.id} left ride {ride.id}, {ride.seats_available} seats now free')
        return ride

    def get_passenger_bookings(self, passenger_id):
        return RideBooking.objects.filter(
            passenger_id=passenger_id
        ).select_related('ride', 'ride__driver__profile').order_by('-created_at')

    # ===================== Helpers =====================

    def _check_bookable(self, ride, passenger_id):
        """Early rejection before any money moves; re-checked at commit"""
        if ride.driver_id == passenger_id:
            raise SelfBookingNotAllowed()
        if not ride.is_bookable:
            raise RideNotBookable()
        if RideBooking.objects.filter(ride=ride, passenger_id=passenger_id).exists():
            raise AlreadyBooked()
        if get_balance(passenger_id) < ride.price:
            raise InsufficientCredits(f'Not enough credits: {ride.price} required')

    def _commit_booking(self, ride_id, passenger_id, reference_id=None):
        """
        Insert the booking, take the seat and debit the price.

        Must run inside transaction.atomic(); any raised error rolls back
        every effect of the unit.
        """
        ride = Ride.objects.select_for_update().filter(id=ride_id).first()
        if not ride:
            raise RideNotFound()
        if ride.driver_id == passenger_id:
            raise SelfBookingNotAllowed()
        if RideBooking.objects.filter(ride=ride, passenger_id=passenger_id).exists():
            raise AlreadyBooked()

        updated = Ride.objects.filter(
            id=ride.id, status=RideStatus.PENDING, seats_available__gt=0
        ).update(seats_available=F('seats_available') - 1)
        if not updated:
            raise RideNotBookable('No seats left on this ride')
        ride.refresh_from_db(fields=['seats_available'])

        debit_credits(
            passenger_id,
            ride.price,
            title=TransactionTitle.BOOKING,
            reference_id=reference_id or f'ride:{ride.id}',
            description=f'Ride {ride.departure_city} → {ride.arrival_city}',
        )

        try:
            with transaction.atomic():
                booking = RideBooking.objects.create(ride=ride, passenger_id=passenger_id)
        except IntegrityError:
            raise AlreadyBooked()

        return booking

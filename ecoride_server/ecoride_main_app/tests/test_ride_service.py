"""Tests for ride service"""
from datetime import timedelta
from unittest.mock import MagicMock

from django.test import TestCase, override_settings
from django.utils import timezone

from wallet.models import CreditTransaction
from ..exceptions import (
    ValidationFailed,
    NotAuthorized,
    RoleNotPermitted,
    InsufficientCredits,
    InvalidTransition,
    RideNotFound,
    Conflict,
)
from ..models import Ride, RideBooking, CheckoutSession, Vehicle, DriverPreferences
from ..services import RideService
from ..utils.constants import UserRole, RideStatus, CheckoutStatus, TransactionTitle, EnergyType
from .helpers import make_user, make_ride, add_booking, actor, credits_of


@override_settings(RIDE_POSTING_FEE=2)
class CreateRideTest(TestCase):
    def setUp(self):
        self.driver = make_user('driver', role=UserRole.DRIVER, credits=20)
        self.notifier = MagicMock()
        self.service = RideService(notifier=self.notifier)
        self.departure = timezone.now() + timedelta(days=3)

    def test_create_ride_charges_posting_fee(self):
        ride = self.service.create_ride(
            actor(self.driver), 'Paris', 'Lyon', self.departure, price=15, seats=3
        )

        self.assertEqual(ride.status, RideStatus.PENDING)
        self.assertEqual(ride.seats_total, 3)
        self.assertEqual(ride.seats_available, 3)
        self.assertEqual(credits_of(self.driver), 18)
        fee = CreditTransaction.objects.get(user=self.driver)
        self.assertEqual(fee.title, TransactionTitle.RIDE_FEE)
        self.assertEqual(fee.amount, 2)
        self.assertEqual(fee.reference_id, f'ride:{ride.id}')

    def test_create_ride_without_fee_credits_keeps_nothing(self):
        self.driver.profile.credits = 1
        self.driver.profile.save()

        with self.assertRaises(InsufficientCredits):
            self.service.create_ride(actor(self.driver), 'Paris', 'Lyon', self.departure, price=15, seats=3)

        self.assertEqual(Ride.objects.count(), 0)
        self.assertEqual(credits_of(self.driver), 1)
        self.assertFalse(CreditTransaction.objects.exists())

    def test_passenger_cannot_publish(self):
        passenger = make_user('passenger')
        with self.assertRaises(RoleNotPermitted):
            self.service.create_ride(actor(passenger), 'Paris', 'Lyon', self.departure, price=15, seats=3)

    def test_departure_must_be_in_future(self):
        with self.assertRaises(ValidationFailed):
            self.service.create_ride(
                actor(self.driver), 'Paris', 'Lyon', timezone.now() - timedelta(hours=1), price=15, seats=3
            )
        self.assertEqual(credits_of(self.driver), 20)

    def test_arrival_must_follow_departure(self):
        with self.assertRaises(ValidationFailed):
            self.service.create_ride(
                actor(self.driver), 'Paris', 'Lyon', self.departure, price=15, seats=3,
                arrival_time=self.departure - timedelta(minutes=5),
            )

    def test_rejects_same_city_and_bad_price(self):
        with self.assertRaises(ValidationFailed):
            self.service.create_ride(actor(self.driver), 'Paris', 'paris', self.departure, price=15, seats=3)
        with self.assertRaises(ValidationFailed):
            self.service.create_ride(actor(self.driver), 'Paris', 'Lyon', self.departure, price=0, seats=3)
        with self.assertRaises(ValidationFailed):
            self.service.create_ride(actor(self.driver), 'Paris', 'Lyon', self.departure, price=15, seats=0)

    def test_vehicle_snapshot_and_capacity(self):
        vehicle = Vehicle.objects.create(
            user=self.driver, brand='Renault', model='Zoe', color='blue', license_plate='AB-123-CD',
            first_registration_date='2021-05-01', energy_type=EnergyType.ELECTRIC, seats=4,
        )
        DriverPreferences.objects.create(user=self.driver, pets_allowed=True, custom_preferences=['music'])

        ride = self.service.create_ride(
            actor(self.driver), 'Paris', 'Lyon', self.departure, price=15, seats=4, vehicle_id=vehicle.id
        )
        self.assertTrue(ride.is_electric_car)
        self.assertEqual(ride.vehicle_brand, 'Renault')
        self.assertEqual(ride.driver_preferences, ['no_smoking', 'pets_allowed', 'music'])

        with self.assertRaises(ValidationFailed):
            self.service.create_ride(
                actor(self.driver), 'Paris', 'Lyon', self.departure, price=15, seats=5, vehicle_id=vehicle.id
            )

    def test_vehicle_of_another_driver_rejected(self):
        other = make_user('other', role=UserRole.DRIVER)
        vehicle = Vehicle.objects.create(
            user=other, brand='Peugeot', model='208', color='red', license_plate='XY-999-ZZ',
            first_registration_date='2019-01-01', energy_type=EnergyType.PETROL, seats=4,
        )
        with self.assertRaises(ValidationFailed):
            self.service.create_ride(
                actor(self.driver), 'Paris', 'Lyon', self.departure, price=15, seats=3, vehicle_id=vehicle.id
            )


class UpdateRideTest(TestCase):
    def setUp(self):
        self.driver = make_user('driver', role=UserRole.DRIVER)
        self.passenger = make_user('passenger')
        self.ride = make_ride(self.driver, price=10, seats=3)
        self.service = RideService(notifier=MagicMock())

    def test_capacity_change_keeps_booked_seats(self):
        add_booking(self.ride, self.passenger)

        ride = self.service.update_ride(actor(self.driver), self.ride.id, seats=5)

        self.assertEqual(ride.seats_total, 5)
        self.assertEqual(ride.seats_available, 4)

    def test_capacity_cannot_drop_below_bookings(self):
        add_booking(self.ride, self.passenger)
        add_booking(self.ride, make_user('second'))

        with self.assertRaises(ValidationFailed):
            self.service.update_ride(actor(self.driver), self.ride.id, seats=1)

    def test_price_locked_once_booked(self):
        add_booking(self.ride, self.passenger)
        with self.assertRaises(Conflict):
            self.service.update_ride(actor(self.driver), self.ride.id, price=25)

    def test_only_driver_edits_pending_ride(self):
        with self.assertRaises(NotAuthorized):
            self.service.update_ride(actor(self.passenger), self.ride.id, description='hello')

        self.ride.status = RideStatus.IN_PROGRESS
        self.ride.save()
        with self.assertRaises(InvalidTransition):
            self.service.update_ride(actor(self.driver), self.ride.id, description='hello')

    def test_unknown_field_rejected(self):
        with self.assertRaises(ValidationFailed):
            self.service.update_ride(actor(self.driver), self.ride.id, seats_available=10)


class RideTransitionsTest(TestCase):
    def setUp(self):
        self.driver = make_user('driver', role=UserRole.DRIVER)
        self.notifier = MagicMock()
        self.service = RideService(notifier=self.notifier)
        self.ride = make_ride(self.driver)

    def test_start_then_complete(self):
        passenger = make_user('passenger')
        add_booking(self.ride, passenger)

        ride = self.service.start_ride(actor(self.driver), self.ride.id)
        self.assertEqual(ride.status, RideStatus.IN_PROGRESS)
        self.assertIsNotNone(ride.started_at)

        with self.captureOnCommitCallbacks(execute=True):
            ride = self.service.complete_ride(actor(self.driver), self.ride.id)

        self.assertEqual(ride.status, RideStatus.COMPLETED)
        self.notifier.notify_completion.assert_called_once_with(self.ride.id, [passenger.id])

    def test_complete_requires_in_progress(self):
        with self.assertRaises(InvalidTransition):
            self.service.complete_ride(actor(self.driver), self.ride.id)
        self.notifier.notify_completion.assert_not_called()

    def test_start_twice_rejected(self):
        self.service.start_ride(actor(self.driver), self.ride.id)
        with self.assertRaises(InvalidTransition):
            self.service.start_ride(actor(self.driver), self.ride.id)

    def test_only_driver_transitions(self):
        stranger = make_user('stranger', role=UserRole.DRIVER)
        with self.assertRaises(NotAuthorized):
            self.service.start_ride(actor(stranger), self.ride.id)

    def test_unknown_ride(self):
        with self.assertRaises(RideNotFound):
            self.service.start_ride(actor(self.driver), 999999)


class CancelRideTest(TestCase):
    def setUp(self):
        self.driver = make_user('driver', role=UserRole.DRIVER)
        self.notifier = MagicMock()
        self.service = RideService(notifier=self.notifier)
        self.ride = make_ride(self.driver, price=15, seats=3)
        self.passenger_a = make_user('alice', credits=10)
        self.passenger_b = make_user('bob', credits=40)
        add_booking(self.ride, self.passenger_a)
        add_booking(self.ride, self.passenger_b)

    def test_cancel_refunds_every_passenger_and_notifies_once(self):
        with self.captureOnCommitCallbacks(execute=True):
            ride, refunded = self.service.cancel_ride(actor(self.driver), self.ride.id)

        self.assertEqual(refunded, 2)
        self.assertEqual(credits_of(self.passenger_a), 25)
        self.assertEqual(credits_of(self.passenger_b), 55)
        self.assertEqual(RideBooking.objects.filter(ride=self.ride).count(), 0)
        self.assertEqual(ride.status, RideStatus.CANCELLED)
        self.assertEqual(ride.seats_available, ride.seats_total)
        self.notifier.notify_cancellation.assert_called_once_with(
            self.ride.id, [self.passenger_a.id, self.passenger_b.id]
        )
        refunds = CreditTransaction.objects.filter(title=TransactionTitle.REFUND)
        self.assertEqual(refunds.count(), 2)

    def test_second_cancel_does_not_refund_again(self):
        self.service.cancel_ride(actor(self.driver), self.ride.id)

        with self.assertRaises(RideNotFound):
            self.service.cancel_ride(actor(self.driver), self.ride.id)

        self.assertEqual(credits_of(self.passenger_a), 25)
        self.assertEqual(credits_of(self.passenger_b), 55)

    def test_notification_failure_keeps_cancellation(self):
        self.notifier.notify_cancellation.side_effect = RuntimeError('mail down')

        with self.captureOnCommitCallbacks(execute=True):
            self.service.cancel_ride(actor(self.driver), self.ride.id)

        self.ride.refresh_from_db()
        self.assertEqual(self.ride.status, RideStatus.CANCELLED)
        self.assertEqual(credits_of(self.passenger_a), 25)

    def test_only_driver_cancels(self):
        with self.assertRaises(NotAuthorized):
            self.service.cancel_ride(actor(self.passenger_a), self.ride.id)
        self.assertEqual(RideBooking.objects.filter(ride=self.ride).count(), 2)
        self.assertEqual(credits_of(self.passenger_a), 10)

    def test_completed_ride_cannot_be_cancelled(self):
        Ride.objects.filter(pk=self.ride.pk).update(status=RideStatus.COMPLETED)
        with self.assertRaises(InvalidTransition):
            self.service.cancel_ride(actor(self.driver), self.ride.id)

    def test_pending_checkouts_expired(self):
        CheckoutSession.objects.create(
            session_id='cs_test_pending', ride=self.ride, passenger=make_user('carol'),
            amount=15, redirect_url='https://checkout.stripe.com/c/cs_test_pending',
        )

        self.service.cancel_ride(actor(self.driver), self.ride.id)

        session = CheckoutSession.objects.get(session_id='cs_test_pending')
        self.assertEqual(session.status, CheckoutStatus.EXPIRED)


class RideSearchTest(TestCase):
    def setUp(self):
        self.driver = make_user('driver', role=UserRole.DRIVER)
        self.service = RideService(notifier=MagicMock())
        self.day = timezone.localtime(timezone.now() + timedelta(days=5)).replace(hour=9, minute=0)
        self.match = make_ride(self.driver, departure_date=self.day)
        self.later = make_ride(self.driver, departure_date=self.day + timedelta(days=2))
        self.full = make_ride(self.driver, seats=2, seats_available=0, departure_date=self.day)
        self.other_route = make_ride(self.driver, arrival_city='Lille', departure_date=self.day)

    def test_search_same_day_with_free_seats(self):
        rides = list(self.service.search_rides('paris', 'LYON', self.day.date()))
        self.assertEqual(rides, [self.match])

    def test_next_available_date(self):
        Ride.objects.filter(pk=self.match.pk).update(status=RideStatus.CANCELLED)
        self.assertEqual(
            self.service.next_available_date('Paris', 'Lyon'),
            timezone.localtime(self.later.departure_date).date(),
        )
        self.assertIsNone(self.service.next_available_date('Paris', 'Nice'))

    def test_upcoming_rides_ordered_and_limited(self):
        rides = list(self.service.upcoming_rides())
        self.assertNotIn(self.full, rides)
        self.assertEqual(rides[-1], self.later)
        self.assertEqual(len(list(self.service.upcoming_rides(limit=1))), 1)

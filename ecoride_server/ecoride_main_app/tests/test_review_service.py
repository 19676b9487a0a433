"""Tests for review service and the rating signal"""
from decimal import Decimal

from django.test import TestCase

from ..exceptions import ValidationFailed, NotAuthorized, NotFound, Conflict, RoleNotPermitted, ReviewNotFound
from ..models import DriverReview, Profile, Ride
from ..services import ReviewService
from ..utils.constants import UserRole, RideStatus, ReviewStatus
from .helpers import make_user, make_ride, add_booking, actor


class SubmitReviewTest(TestCase):
    def setUp(self):
        self.driver = make_user('driver', role=UserRole.DRIVER)
        self.passenger = make_user('passenger')
        self.ride = make_ride(self.driver)
        add_booking(self.ride, self.passenger)
        Ride.objects.filter(pk=self.ride.pk).update(status=RideStatus.COMPLETED)
        self.service = ReviewService()

    def test_resubmission_updates_in_place_and_resets_status(self):
        review, created = self.service.submit_review(actor(self.passenger), self.driver.id, 3, 'ok')
        self.assertTrue(created)
        DriverReview.objects.filter(pk=review.pk).update(status=ReviewStatus.APPROVED)

        review, created = self.service.submit_review(actor(self.passenger), self.driver.id, 5, 'great after all')

        self.assertFalse(created)
        reviews = DriverReview.objects.filter(reviewer=self.passenger, driver=self.driver)
        self.assertEqual(reviews.count(), 1)
        stored = reviews.get()
        self.assertEqual(stored.rating, 5)
        self.assertEqual(stored.comment, 'great after all')
        self.assertEqual(stored.status, ReviewStatus.PENDING)
        self.assertEqual(stored.ride, self.ride)

    def test_requires_completed_ride_with_driver(self):
        stranger = make_user('stranger')
        with self.assertRaises(NotAuthorized):
            self.service.submit_review(actor(stranger), self.driver.id, 4)

        Ride.objects.filter(pk=self.ride.pk).update(status=RideStatus.IN_PROGRESS)
        with self.assertRaises(NotAuthorized):
            self.service.submit_review(actor(self.passenger), self.driver.id, 4)

    def test_rating_range_and_self_review(self):
        with self.assertRaises(ValidationFailed):
            self.service.submit_review(actor(self.passenger), self.driver.id, 6)
        with self.assertRaises(ValidationFailed):
            self.service.submit_review(actor(self.passenger), self.driver.id, 0)
        with self.assertRaises(ValidationFailed):
            self.service.submit_review(actor(self.driver), self.driver.id, 5)

    def test_unknown_driver(self):
        with self.assertRaises(NotFound):
            self.service.submit_review(actor(self.passenger), 999999, 4)


class ModerateReviewTest(TestCase):
    def setUp(self):
        self.driver = make_user('driver', role=UserRole.DRIVER)
        self.employee = make_user('employee', role=UserRole.EMPLOYEE)
        self.passenger = make_user('passenger')
        self.second = make_user('second')
        self.ride = make_ride(self.driver)
        add_booking(self.ride, self.passenger)
        add_booking(self.ride, self.second)
        Ride.objects.filter(pk=self.ride.pk).update(status=RideStatus.COMPLETED)
        self.service = ReviewService()
        self.review, _ = self.service.submit_review(actor(self.passenger), self.driver.id, 4, 'fine', True)

    def test_approval_updates_driver_rating(self):
        second_review, _ = self.service.submit_review(actor(self.second), self.driver.id, 1, 'late', False)

        self.service.moderate_review(actor(self.employee), self.review.id, ReviewStatus.APPROVED)
        profile = Profile.objects.get(pk=self.driver.pk)
        self.assertEqual(profile.driver_rating, Decimal('4.00'))
        self.assertEqual(profile.total_reviews, 1)

        self.service.moderate_review(actor(self.employee), second_review.id, ReviewStatus.APPROVED)
        profile.refresh_from_db()
        self.assertEqual(profile.driver_rating, Decimal('2.50'))
        self.assertEqual(profile.total_reviews, 2)

    def test_rejected_review_not_counted(self):
        review = self.service.moderate_review(actor(self.employee), self.review.id, ReviewStatus.REJECTED)

        self.assertEqual(review.status, ReviewStatus.REJECTED)
        self.assertEqual(review.reviewed_by, self.employee)
        self.assertEqual(Profile.objects.get(pk=self.driver.pk).total_reviews, 0)

    def test_terminal_review_cannot_be_moderated_again(self):
        self.service.moderate_review(actor(self.employee), self.review.id, ReviewStatus.APPROVED)
        with self.assertRaises(Conflict):
            self.service.moderate_review(actor(self.employee), self.review.id, ReviewStatus.REJECTED)

    def test_only_staff_moderates(self):
        with self.assertRaises(RoleNotPermitted):
            self.service.moderate_review(actor(self.passenger), self.review.id, ReviewStatus.APPROVED)
        with self.assertRaises(RoleNotPermitted):
            self.service.moderate_review(actor(self.driver), self.review.id, ReviewStatus.APPROVED)

    def test_invalid_decision_and_missing_review(self):
        with self.assertRaises(ValidationFailed):
            self.service.moderate_review(actor(self.employee), self.review.id, ReviewStatus.PENDING)
        with self.assertRaises(ReviewNotFound):
            self.service.moderate_review(actor(self.employee), 999999, ReviewStatus.APPROVED)

    def test_staff_lists(self):
        self.service.submit_review(actor(self.second), self.driver.id, 2, 'rude driver', False)

        pending = list(self.service.pending_reviews(actor(self.employee)))
        self.assertEqual(len(pending), 2)

        problematic = list(self.service.problematic_rides(actor(self.employee)))
        self.assertEqual([review.reviewer for review in problematic], [self.second])

        with self.assertRaises(RoleNotPermitted):
            self.service.problematic_rides(actor(self.passenger))

    def test_public_reviews_only_approved(self):
        self.assertEqual(list(self.service.driver_reviews(self.driver.id)), [])
        self.service.moderate_review(actor(self.employee), self.review.id, ReviewStatus.APPROVED)
        self.assertEqual(len(self.service.driver_reviews(self.driver.id)), 1)

"""Review service - driver reviews and staff moderation"""

import logging

from django.contrib.auth.models import User
from django.db import transaction
from django.utils import timezone

from ..models import DriverReview, RideBooking
from ..utils.constants import RideStatus, ReviewStatus, BusinessRules
from ..exceptions import (
    ValidationFailed,
    NotAuthorized,
    NotFound,
    Conflict,
    ReviewNotFound,
)

logger = logging.getLogger(__name__)


class ReviewService:
    """Service for the review approval workflow: pending → approved | rejected"""

    @transaction.atomic
    def submit_review(self, actor, driver_id, rating, comment='', is_positive=None, ride_id=None):
        """
        Create or update the actor's review of a driver.

        A reviewer keeps a single review per driver; resubmitting overwrites
        it and sends it back to moderation.

        Returns:
            Tuple of (review, created)

        Raises:
            ValidationFailed: If the rating is out of range or the actor reviews themselves
            NotFound: If the driver does not exist
            NotAuthorized: If the actor never completed a ride with this driver
        """
        actor.require_active()
        if driver_id == actor.id:
            raise ValidationFailed('You cannot review yourself')
        if not isinstance(rating, int) or isinstance(rating, bool) or not (
            BusinessRules.MIN_RATING <= rating <= BusinessRules.MAX_RATING
        ):
            raise ValidationFailed(
                f'Rating must be between {BusinessRules.MIN_RATING} and {BusinessRules.MAX_RATING}'
            )
        if not User.objects.filter(id=driver_id).exists():
            raise NotFound('Driver not found')

        completed = RideBooking.objects.filter(
            passenger_id=actor.id,
            ride__driver_id=driver_id,
            ride__status=RideStatus.COMPLETED,
        )
        if ride_id is not None:
            completed = completed.filter(ride_id=ride_id)
        booking = completed.order_by('-ride__departure_date').first()
        if not booking:
            raise NotAuthorized('You can only review drivers of rides you completed')

        review, created = DriverReview.objects.update_or_create(
            reviewer_id=actor.id,
            driver_id=driver_id,
            defaults={
                'ride_id': booking.ride_id,
                'rating': rating,
                'comment': comment or '',
                'is_positive': is_positive,
                'status': ReviewStatus.PENDING,
                'reviewed_by': None,
                'reviewed_at': None,
            },
        )

        action = 'submitted' if created else 'resubmitted'
        logger.info(f'[REVIEW] Review {review.id} {action} by user {actor.id} for driver {driver_id}')
        return review, created

    @transaction.atomic
    def moderate_review(self, actor, review_id, decision):
        """Approve or reject a pending review (employee or admin)"""
        actor.require_staff()
        if decision not in ReviewStatus.DECISIONS:
            raise ValidationFailed(f'Decision must be one of: {", ".join(ReviewStatus.DECISIONS)}')

        review = DriverReview.objects.select_for_update().filter(id=review_id).first()
        if not review:
            raise ReviewNotFound()
        if review.status != ReviewStatus.PENDING:
            raise Conflict(f'Review was already {review.status}')

        review.status = decision
        review.reviewed_by_id = actor.id
        review.reviewed_at = timezone.now()
        review.save(update_fields=['status', 'reviewed_by', 'reviewed_at', 'updated_at'])

        logger.info(f'[REVIEW] Review {review.id} {decision} by staff {actor.id}')
        return review

    def pending_reviews(self, actor):
        actor.require_staff()
        return DriverReview.objects.filter(
            status=ReviewStatus.PENDING
        ).select_related('reviewer__profile', 'driver__profile', 'ride').order_by('created_at')

    def problematic_rides(self, actor):
        """Reviews where the passenger reported that the trip went badly"""
        actor.require_staff()
        return DriverReview.objects.filter(
            is_positive=False
        ).select_related('reviewer__profile', 'driver__profile', 'ride').order_by('-created_at')

    def driver_reviews(self, driver_id):
        return DriverReview.objects.filter(
            driver_id=driver_id, status=ReviewStatus.APPROVED
        ).select_related('reviewer__profile').order_by('-created_at')

from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver
from django.db.models import Avg
import logging

from .models import DriverReview, Profile
from .utils.constants import ReviewStatus

logger = logging.getLogger(__name__)


@receiver(post_save, sender=DriverReview)
@receiver(post_delete, sender=DriverReview)
def update_driver_rating(sender, instance, **kwargs):
    """Recompute the driver's cached rating from approved reviews only"""
    approved = DriverReview.objects.filter(driver_id=instance.driver_id, status=ReviewStatus.APPROVED)
    avg = approved.aggregate(Avg('rating'))['rating__avg']
    updated = Profile.objects.filter(pk=instance.driver_id).update(
        driver_rating=round(avg, 2) if avg else 0.00,
        total_reviews=approved.count(),
    )
    if updated:
        logger.info(f'[SIGNAL] Driver {instance.driver_id} rating refreshed: {avg or 0} over {approved.count()} reviews')

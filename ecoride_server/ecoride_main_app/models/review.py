"""Review-related models"""
from django.db import models
from django.contrib.auth.models import User

from ..utils.constants import ReviewStatus, BusinessRules


class DriverReview(models.Model):
    STATUS_CHOICES = ReviewStatus.CHOICES

    reviewer = models.ForeignKey(User, on_delete=models.CASCADE, related_name='reviews_written')
    driver = models.ForeignKey(User, on_delete=models.CASCADE, related_name='reviews_received')
    ride = models.ForeignKey('Ride', on_delete=models.SET_NULL, null=True, blank=True, related_name='reviews')
    rating = models.PositiveSmallIntegerField()
    comment = models.TextField(blank=True, null=True)
    is_positive = models.BooleanField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=ReviewStatus.PENDING, db_index=True)
    reviewed_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='reviews_moderated')
    reviewed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['reviewer', 'driver'], name='unique_review_per_driver'),
            models.CheckConstraint(
                condition=models.Q(rating__gte=BusinessRules.MIN_RATING, rating__lte=BusinessRules.MAX_RATING),
                name='review_rating_range',
            ),
        ]
        indexes = [models.Index(fields=['driver', 'status'], name='review_driver_status_idx')]

    def __str__(self):
        return f"Review {self.id} for driver {self.driver_id} ({self.status})"

from django.db import models
from django.contrib.auth.models import User

from ecoride_main_app.utils.constants import TransactionType, TransactionTitle


class CreditTransaction(models.Model):
    TRANSACTION_TYPE = TransactionType.CHOICES
    TITLE_CHOICES = TransactionTitle.CHOICES

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="credit_transactions")
    transaction_type = models.CharField(max_length=10, choices=TRANSACTION_TYPE)
    amount = models.PositiveIntegerField()
    title = models.CharField(max_length=16, choices=TITLE_CHOICES, default=TransactionTitle.ADJUSTMENT)
    description = models.TextField(blank=True, max_length=150)
    reference_id = models.CharField(max_length=64, default='unknown')
    timestamp = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ['-timestamp']
        indexes = [models.Index(fields=['title', 'timestamp'], name='credit_title_timestamp_idx')]

    def __str__(self):
        return f"{self.user.username} {self.transaction_type} of {self.amount} on {self.timestamp}"

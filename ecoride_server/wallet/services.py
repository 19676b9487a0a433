"""Credit balance operations backed by conditional updates on Profile.credits"""

import logging

from django.db import transaction
from django.db.models import F

from ecoride_main_app.exceptions import InsufficientCredits, NotFound, ValidationFailed
from ecoride_main_app.models import Profile
from ecoride_main_app.utils.constants import TransactionType, TransactionTitle
from .models import CreditTransaction

logger = logging.getLogger(__name__)


def _validate_amount(amount):
    if not isinstance(amount, int) or isinstance(amount, bool) or amount <= 0:
        raise ValidationFailed('Amount must be a positive whole number of credits')


@transaction.atomic
def debit_credits(user_id, amount, title=TransactionTitle.ADJUSTMENT, reference_id='unknown', description=''):
    """
    Debit credits only if the balance covers the amount.

    The check and the decrement are a single UPDATE, so concurrent debits
    can never drive the balance below zero.

    Raises:
        InsufficientCredits: If the balance is lower than amount
        NotFound: If the user has no profile
    """
    _validate_amount(amount)

    updated = Profile.objects.filter(pk=user_id, credits__gte=amount).update(credits=F('credits') - amount)
    if not updated:
        if not Profile.objects.filter(pk=user_id).exists():
            raise NotFound('Profile not found')
        logger.info(f'[CREDITS] Debit of {amount} refused for user {user_id}: insufficient balance')
        raise InsufficientCredits(f'Not enough credits: {amount} required')

    entry = CreditTransaction.objects.create(
        user_id=user_id,
        transaction_type=TransactionType.DEBIT,
        amount=amount,
        title=title,
        reference_id=str(reference_id),
        description=description,
    )
    logger.info(f'[CREDITS] Debited {amount} from user {user_id} ({title} {reference_id})')
    return entry


@transaction.atomic
def refund_credits(user_id, amount, title=TransactionTitle.REFUND, reference_id='unknown', description=''):
    """Credit the balance back; raises NotFound if the user has no profile."""
    _validate_amount(amount)

    updated = Profile.objects.filter(pk=user_id).update(credits=F('credits') + amount)
    if not updated:
        raise NotFound('Profile not found')

    entry = CreditTransaction.objects.create(
        user_id=user_id,
        transaction_type=TransactionType.CREDIT,
        amount=amount,
        title=title,
        reference_id=str(reference_id),
        description=description,
    )
    logger.info(f'[CREDITS] Credited {amount} to user {user_id} ({title} {reference_id})')
    return entry


def get_balance(user_id):
    return Profile.objects.filter(pk=user_id).values_list('credits', flat=True).first() or 0

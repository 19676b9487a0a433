import logging
import time

import stripe
from django.conf import settings

from ..exceptions import PaymentFailed, ValidationFailed
from .payment_gateway import PaymentGateway

logger = logging.getLogger(__name__)


class StripePaymentGateway(PaymentGateway):

    def __init__(self):
        stripe.api_key = settings.STRIPE_SECRET_KEY

    def create_checkout(self, amount, success_url, cancel_url, metadata):
        """
        Create a hosted checkout session.

        Returns:
            dict with session_id and redirect_url

        Raises:
            PaymentFailed: If Stripe rejects the request
        """
        departure_city = metadata.get('departure_city', '')
        arrival_city = metadata.get('arrival_city', '')
        try:
            session = stripe.checkout.Session.create(
                payment_method_types=['card'],
                line_items=[
                    {
                        'price_data': {
                            'currency': settings.STRIPE_CURRENCY,
                            'unit_amount': int(amount * 100),
                            'product_data': {
                                'name': f'Ride {departure_city} → {arrival_city}',
                                'description': f'Seat booking from {departure_city} to {arrival_city}',
                            },
                        },
                        'quantity': 1,
                    }
                ],
                mode='payment',
                expires_at=int(time.time()) + settings.CHECKOUT_SESSION_EXPIRY_MINUTES * 60,
                metadata={key: str(value) for key, value in metadata.items()},
                success_url=success_url,
                cancel_url=cancel_url,
            )
        except stripe.StripeError as e:
            logger.error(f'[CHECKOUT] Stripe session creation failed: {e}')
            raise PaymentFailed('Could not start the payment, please try again')

        logger.info(f'[CHECKOUT] Stripe session {session.id} created for ride {metadata.get("ride_id")}')
        return {'session_id': session.id, 'redirect_url': session.url}

    def refund(self, payment_reference):
        """Refund a captured payment; returns True when Stripe accepted it."""
        if not payment_reference:
            logger.error('[CHECKOUT] Cannot refund without a payment reference')
            return False
        try:
            stripe.Refund.create(payment_intent=payment_reference)
        except stripe.StripeError as e:
            logger.error(f'[CHECKOUT] Refund of {payment_reference} failed: {e}')
            return False
        logger.info(f'[CHECKOUT] Refund issued for {payment_reference}')
        return True

    def parse_webhook(self, payload, signature):
        """Verify the webhook signature and return the event."""
        try:
            return stripe.Webhook.construct_event(payload, signature, settings.STRIPE_WEBHOOK_SECRET)
        except ValueError as e:
            raise ValidationFailed(f'Invalid payload: {e}')
        except stripe.SignatureVerificationError as e:
            raise ValidationFailed(f'Invalid signature: {e}')

"""Payment service - orchestrates payment gateways"""

from django.conf import settings

from ..payment_gateways.stripe_payment_gateway import StripePaymentGateway
from ..utils.constants import PaymentMethod
from ..exceptions import ValidationFailed


class PaymentService:
    """Service for payment operations"""

    def __init__(self, gateway=None):
        self._gateway = gateway

    def get_gateway(self, payment_method=PaymentMethod.STRIPE):
        if payment_method != PaymentMethod.STRIPE:
            raise ValidationFailed(f'Unsupported payment method: {payment_method}')
        if self._gateway is None:
            self._gateway = StripePaymentGateway()
        return self._gateway

    def ride_return_urls(self, ride_id):
        base_url = settings.FRONTEND_URL.rstrip('/')
        return (
            f'{base_url}/rides/{ride_id}?success=true',
            f'{base_url}/rides/{ride_id}?canceled=true',
        )

    def create_checkout(self, ride, passenger_id, payment_method=PaymentMethod.STRIPE):
        """Start a hosted checkout for one seat on ride"""
        success_url, cancel_url = self.ride_return_urls(ride.id)
        return self.get_gateway(payment_method).create_checkout(
            amount=ride.price,
            success_url=success_url,
            cancel_url=cancel_url,
            metadata={
                'ride_id': ride.id,
                'passenger_id': passenger_id,
                'departure_city': ride.departure_city,
                'arrival_city': ride.arrival_city,
            },
        )

    def refund(self, payment_reference, payment_method=PaymentMethod.STRIPE):
        return self.get_gateway(payment_method).refund(payment_reference)

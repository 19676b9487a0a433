"""Tests for the Stripe payment gateway"""
from unittest.mock import patch, MagicMock

import stripe
from django.test import SimpleTestCase, override_settings

from ..exceptions import PaymentFailed, ValidationFailed
from ..payment_gateways.stripe_payment_gateway import StripePaymentGateway


@override_settings(STRIPE_SECRET_KEY='sk_test_123', STRIPE_CURRENCY='eur', STRIPE_WEBHOOK_SECRET='whsec_test')
class StripePaymentGatewayTest(SimpleTestCase):
    def setUp(self):
        self.gateway = StripePaymentGateway()
        self.metadata = {'ride_id': 7, 'passenger_id': 3, 'departure_city': 'Paris', 'arrival_city': 'Lyon'}

    @patch('stripe.checkout.Session.create')
    def test_create_checkout(self, mock_create):
        mock_create.return_value = MagicMock(id='cs_test_1', url='https://checkout.stripe.com/c/cs_test_1')

        result = self.gateway.create_checkout(20, 'https://app/rides/7?success=true', 'https://app/rides/7?canceled=true', self.metadata)

        self.assertEqual(result, {'session_id': 'cs_test_1', 'redirect_url': 'https://checkout.stripe.com/c/cs_test_1'})
        kwargs = mock_create.call_args.kwargs
        price_data = kwargs['line_items'][0]['price_data']
        self.assertEqual(price_data['currency'], 'eur')
        self.assertEqual(price_data['unit_amount'], 2000)
        self.assertEqual(kwargs['mode'], 'payment')
        self.assertEqual(kwargs['metadata']['ride_id'], '7')
        self.assertEqual(kwargs['success_url'], 'https://app/rides/7?success=true')

    @patch('stripe.checkout.Session.create')
    def test_stripe_error_becomes_payment_failed(self, mock_create):
        mock_create.side_effect = stripe.StripeError('card network down')
        with self.assertRaises(PaymentFailed):
            self.gateway.create_checkout(20, 'https://a', 'https://b', self.metadata)

    @patch('stripe.Refund.create')
    def test_refund(self, mock_refund):
        self.assertTrue(self.gateway.refund('pi_123'))
        mock_refund.assert_called_once_with(payment_intent='pi_123')

        mock_refund.side_effect = stripe.StripeError('already refunded')
        self.assertFalse(self.gateway.refund('pi_123'))
        self.assertFalse(self.gateway.refund(None))

    @patch('stripe.Webhook.construct_event')
    def test_parse_webhook(self, mock_construct):
        mock_construct.return_value = {'type': 'checkout.session.completed'}
        self.assertEqual(self.gateway.parse_webhook(b'{}', 'sig')['type'], 'checkout.session.completed')
        mock_construct.assert_called_once_with(b'{}', 'sig', 'whsec_test')

        mock_construct.side_effect = ValueError('bad json')
        with self.assertRaises(ValidationFailed):
            self.gateway.parse_webhook(b'{', 'sig')

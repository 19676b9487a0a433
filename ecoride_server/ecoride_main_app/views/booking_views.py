"""Booking views and the Stripe webhook"""
import logging

from django.views.decorators.csrf import csrf_exempt
from django.http import JsonResponse

from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework_simplejwt.authentication import JWTAuthentication

from ..exceptions import RideshareError, ValidationFailed, NotFound
from ..serializers import RideBookingSerializer
from ..services import BookingService, PaymentService

logger = logging.getLogger(__name__)

# Delayed payment methods report the outcome in a later async_payment event
PAID_EVENTS = ['checkout.session.completed', 'checkout.session.async_payment_succeeded']
UNPAID_EVENTS = ['checkout.session.expired', 'checkout.session.async_payment_failed']


class BookingViewSet(viewsets.ReadOnlyModelViewSet):
    """The current user's bookings, most recent first"""
    authentication_classes = [JWTAuthentication]
    permission_classes = [IsAuthenticated]
    serializer_class = RideBookingSerializer

    def get_queryset(self):
        return BookingService().get_passenger_bookings(self.request.user.id)


@csrf_exempt
def stripe_webhook(request):
    payload = request.body
    sig_header = request.META.get('HTTP_STRIPE_SIGNATURE', '')

    try:
        event = PaymentService().get_gateway().parse_webhook(payload, sig_header)
    except ValidationFailed as e:
        return JsonResponse({'error': e.message}, status=400)

    session = event['data']['object']
    if event['type'] in PAID_EVENTS:
        handle_successful_payment(session)
    elif event['type'] in UNPAID_EVENTS:
        BookingService().expire_checkout(session['id'])

    return JsonResponse({'status': 'success'}, status=200)


def handle_successful_payment(session):
    """
    Commit the booking for a paid session.

    Rejections are acknowledged to Stripe: the payment has already been
    refunded or flagged, so a retry would change nothing.
    """
    if session.get('payment_status') != 'paid':
        logger.info(f'[CHECKOUT] Session {session["id"]} completed without payment, waiting for the async result')
        return None
    try:
        return BookingService().confirm_checkout(session['id'], session.get('payment_intent'))
    except NotFound:
        logger.warning(f'[CHECKOUT] Webhook for unknown session {session["id"]}')
    except RideshareError as e:
        logger.warning(f'[CHECKOUT] Session {session["id"]} not booked: {e.message}')
    return None


__all__ = [
    'BookingViewSet',
    'stripe_webhook',
    'handle_successful_payment',
]

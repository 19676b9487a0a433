"""Notification service - ride emails sent through the Resend API"""

import logging

import requests
from django.conf import settings
from django.contrib.auth.models import User

from ..models import Ride
from ..utils.constants import BusinessRules

logger = logging.getLogger(__name__)

RESEND_ENDPOINT = 'https://api.resend.com/emails'


class NotificationService:
    """Best-effort emails; failures are logged and never raised."""

    def notify_cancellation(self, ride_id, passenger_ids):
        """Tell former passengers that the driver cancelled the ride"""
        ride = Ride.objects.filter(id=ride_id).first()
        if not ride:
            logger.error(f'[NOTIFY] Cancellation skipped: ride {ride_id} not found')
            return 0

        subject = 'Your carpool has been cancelled'
        departure = ride.departure_date.strftime('%d/%m/%Y')

        def render(name):
            return (
                '<h2>Your carpool has been cancelled</h2>'
                f'<p>Hello {name},</p>'
                f'<p>Your carpool from {ride.departure_city} to {ride.arrival_city} '
                f'planned for {departure} has been cancelled.</p>'
                '<p>Your credits have been refunded automatically.</p>'
                '<p>The EcoRide team</p>'
            )

        return self._send_to_passengers(ride, passenger_ids, subject, render)

    def notify_completion(self, ride_id, passenger_ids):
        """Ask passengers to confirm the trip went well and leave a review"""
        ride = Ride.objects.filter(id=ride_id).first()
        if not ride:
            logger.error(f'[NOTIFY] Completion skipped: ride {ride_id} not found')
            return 0

        subject = 'Your ride is over - leave a review'

        def render(name):
            return (
                '<h2>Your ride is over</h2>'
                f'<p>Hello {name},</p>'
                f'<p>Your ride from {ride.departure_city} to {ride.arrival_city} is now completed.</p>'
                '<p>Please sign in to confirm everything went well and to review your driver.</p>'
                '<p>The EcoRide team</p>'
            )

        return self._send_to_passengers(ride, passenger_ids, subject, render)

    def _send_to_passengers(self, ride, passenger_ids, subject, render):
        users = User.objects.filter(id__in=passenger_ids).select_related('profile')
        sent = 0
        for user in users:
            if not user.email:
                logger.warning(f'[NOTIFY] No email for user {user.id}, skipping')
                continue
            name = user.profile.display_name if hasattr(user, 'profile') else user.username
            if self.send_email(user.email, subject, render(name)):
                sent += 1
        logger.info(f'[NOTIFY] Ride {ride.id}: {sent}/{len(passenger_ids)} emails sent ({subject})')
        return sent

    def send_email(self, to_email, subject, html):
        api_key = settings.RESEND_API_KEY
        if not api_key:
            logger.warning('[NOTIFY] RESEND_API_KEY not set, skipping')
            return False

        payload = {
            'from': settings.NOTIFICATION_FROM_EMAIL,
            'to': [to_email],
            'subject': subject,
            'html': html,
        }
        try:
            response = requests.post(
                RESEND_ENDPOINT,
                json=payload,
                headers={'Authorization': f'Bearer {api_key}'},
                timeout=BusinessRules.NOTIFICATION_TIMEOUT_SECONDS,
            )
        except requests.RequestException as e:
            logger.error(f'[NOTIFY] ✗ Exception sending to {to_email}: {e}')
            return False

        if not response.ok:
            logger.error(f'[NOTIFY] ✗ Failed: {response.status_code} - {response.text}')
            return False
        return True

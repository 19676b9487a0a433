"""Management command to expire checkout sessions that were never paid"""
from datetime import timedelta

from django.conf import settings
from django.core.management.base import BaseCommand
from django.utils import timezone

from ecoride_main_app.models import CheckoutSession
from ecoride_main_app.utils.constants import CheckoutStatus


class Command(BaseCommand):
    help = 'Mark stale pending checkout sessions as expired'

    def add_arguments(self, parser):
        parser.add_argument(
            '--minutes',
            type=int,
            default=settings.CHECKOUT_SESSION_EXPIRY_MINUTES,
            help=f'Expire sessions older than X minutes (default: {settings.CHECKOUT_SESSION_EXPIRY_MINUTES})',
        )

    def handle(self, *args, **options):
        cutoff = timezone.now() - timedelta(minutes=options['minutes'])

        # Pending sessions hold no seats or credits
        expired = CheckoutSession.objects.filter(
            status=CheckoutStatus.PENDING,
            created_at__lt=cutoff,
        ).update(status=CheckoutStatus.EXPIRED, failure_reason='Checkout abandoned')

        if expired == 0:
            self.stdout.write('No stale checkout sessions')
            return

        self.stdout.write(self.style.SUCCESS(f'Expired {expired} checkout sessions'))

"""Stats service - platform activity for the admin dashboard"""

from datetime import date, timedelta

from django.db.models import Count, Sum
from django.db.models.functions import TruncDate

from wallet.models import CreditTransaction
from ..models import Ride
from ..utils.constants import RideStatus, TransactionType, TransactionTitle
from ..exceptions import ValidationFailed


class StatsService:
    """Daily series are returned for every day of [start, end], zero-filled."""

    def rides_per_day(self, actor, start, end):
        actor.require_admin()
        self._validate_range(start, end)
        rows = Ride.objects.filter(
            departure_date__date__gte=start,
            departure_date__date__lte=end,
        ).exclude(
            status=RideStatus.CANCELLED
        ).annotate(
            day=TruncDate('departure_date')
        ).values('day').annotate(count=Count('id')).order_by('day')

        counts = {row['day']: row['count'] for row in rows}
        return [{'date': day, 'count': counts.get(day, 0)} for day in self._days(start, end)]

    def credits_per_day(self, actor, start, end):
        """Platform fees collected per day"""
        actor.require_admin()
        self._validate_range(start, end)
        rows = self._platform_fees().filter(
            timestamp__date__gte=start,
            timestamp__date__lte=end,
        ).annotate(
            day=TruncDate('timestamp')
        ).values('day').annotate(credits=Sum('amount')).order_by('day')

        totals = {row['day']: row['credits'] for row in rows}
        return [{'date': day, 'credits': totals.get(day, 0)} for day in self._days(start, end)]

    def total_platform_credits(self, actor):
        actor.require_admin()
        return self._platform_fees().aggregate(total=Sum('amount'))['total'] or 0

    def _platform_fees(self):
        return CreditTransaction.objects.filter(
            transaction_type=TransactionType.DEBIT,
            title=TransactionTitle.RIDE_FEE,
        )

    def _validate_range(self, start, end):
        if not isinstance(start, date) or not isinstance(end, date):
            raise ValidationFailed('Start and end dates are required')
        if start > end:
            raise ValidationFailed('Start date must be before end date')

    def _days(self, start, end):
        return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]

"""Services package - business logic layer"""

from .actor import Actor
from .ride_service import RideService
from .booking_service import BookingService
from .review_service import ReviewService
from .auth_service import AuthService
from .payment_service import PaymentService
from .notification_service import NotificationService
from .stats_service import StatsService

__all__ = [
    'Actor',
    'RideService',
    'BookingService',
    'ReviewService',
    'AuthService',
    'PaymentService',
    'NotificationService',
    'StatsService',
]

"""Views package - HTTP request handlers"""

# Import from domain-specific view files
from .auth_views import AuthViewSet
from .user_views import ProfileView
from .ride_views import RideViewSet
from .booking_views import BookingViewSet, stripe_webhook, handle_successful_payment
from .review_views import DriverReviewViewSet
from .fleet_views import BrandViewSet, VehicleViewSet, DriverPreferencesViewSet
from .admin_views import AdminUserViewSet, AdminEmployeeViewSet, AdminStatsViewSet

__all__ = [
    'AuthViewSet', 'ProfileView', 'RideViewSet',
    'BookingViewSet', 'stripe_webhook', 'handle_successful_payment',
    'DriverReviewViewSet', 'BrandViewSet', 'VehicleViewSet', 'DriverPreferencesViewSet',
    'AdminUserViewSet', 'AdminEmployeeViewSet', 'AdminStatsViewSet',
]

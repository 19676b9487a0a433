"""Models package - domain-based organization"""

# User models
from .user import Profile, SuspendedUser, AuthorizedEmployee, AuthorizedAdmin

# Vehicle models
from .fleet import Brand, Vehicle, DriverPreferences

# Ride models
from .ride import Ride

# Booking models
from .booking import RideBooking, CheckoutSession

# Review models
from .review import DriverReview

__all__ = [
    'Profile', 'SuspendedUser', 'AuthorizedEmployee', 'AuthorizedAdmin',
    'Brand', 'Vehicle', 'DriverPreferences', 'Ride', 'RideBooking', 'CheckoutSession', 'DriverReview',
]

"""Serializers package - imports from domain-specific modules"""

# User serializers
from .user_serializers import (
    UserSerializer,
    ProfileSerializer,
    PublicProfileSerializer,
    AdminUserSerializer,
    SuspendedUserSerializer,
    SignUpSerializer,
    SignInSerializer,
    RoleSerializer,
    SuspendUserSerializer,
    EmployeeSerializer,
    ChangePasswordSerializer,
)

# Fleet serializers
from .fleet_serializers import (
    BrandSerializer,
    VehicleSerializer,
    DriverPreferencesSerializer,
)

# Ride and booking serializers
from .ride_serializers import (
    RideSerializer,
    RideWriteSerializer,
    RideSearchSerializer,
    BookRideSerializer,
    RideBookingSerializer,
    RidePassengerSerializer,
)

# Review serializers
from .review_serializers import (
    DriverReviewSerializer,
    ReviewSubmitSerializer,
    ModerationSerializer,
    ProblematicRideSerializer,
)

__all__ = [
    'UserSerializer',
    'ProfileSerializer',
    'PublicProfileSerializer',
    'AdminUserSerializer',
    'SuspendedUserSerializer',
    'SignUpSerializer',
    'SignInSerializer',
    'RoleSerializer',
    'SuspendUserSerializer',
    'EmployeeSerializer',
    'ChangePasswordSerializer',
    'BrandSerializer',
    'VehicleSerializer',
    'DriverPreferencesSerializer',
    'RideSerializer',
    'RideWriteSerializer',
    'RideSearchSerializer',
    'BookRideSerializer',
    'RideBookingSerializer',
    'RidePassengerSerializer',
    'DriverReviewSerializer',
    'ReviewSubmitSerializer',
    'ModerationSerializer',
    'ProblematicRideSerializer',
]

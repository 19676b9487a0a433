from django.urls import path, include
from rest_framework import routers

from .views import (
    AuthViewSet, ProfileView, RideViewSet, BookingViewSet, stripe_webhook,
    DriverReviewViewSet, BrandViewSet, VehicleViewSet, DriverPreferencesViewSet,
    AdminUserViewSet, AdminEmployeeViewSet, AdminStatsViewSet,
)

router = routers.DefaultRouter()
router.register(r"auth", AuthViewSet, basename="auth")
router.register(r"profile", ProfileView, basename="profile")
router.register(r"rides", RideViewSet, basename="rides")
router.register(r"bookings", BookingViewSet, basename="bookings")
router.register(r"reviews", DriverReviewViewSet, basename="reviews")
router.register(r"brands", BrandViewSet, basename="brands")
router.register(r"vehicles", VehicleViewSet, basename="vehicles")
router.register(r"preferences", DriverPreferencesViewSet, basename="preferences")

# Admin endpoints
router.register(r"admin/users", AdminUserViewSet, basename="admin-users")
router.register(r"admin/employees", AdminEmployeeViewSet, basename="admin-employees")
router.register(r"admin/stats", AdminStatsViewSet, basename="admin-stats")

urlpatterns = [
    path('', include(router.urls)),
    path('webhook/stripe/', stripe_webhook, name='stripe-webhook'),
]

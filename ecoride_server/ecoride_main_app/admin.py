from django.contrib import admin

from .models import (
    Profile, SuspendedUser, AuthorizedEmployee, AuthorizedAdmin,
    Brand, Vehicle, DriverPreferences, Ride, RideBooking, CheckoutSession, DriverReview
)

# Customize admin site
admin.site.site_header = "EcoRide Administration"
admin.site.site_title = "EcoRide Admin"
admin.site.index_title = "Welcome to EcoRide Admin Panel"


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ['user', 'get_email', 'name', 'role', 'credits', 'driver_rating', 'total_reviews', 'created_at']
    list_filter = ['role', 'created_at']
    search_fields = ['user__username', 'user__email', 'name', 'phone']
    ordering = ['-created_at']
    list_per_page = 50
    readonly_fields = ['credits', 'driver_rating', 'total_reviews', 'created_at', 'updated_at']

    def get_email(self, obj):
        return obj.user.email
    get_email.short_description = 'Email'
    get_email.admin_order_field = 'user__email'


@admin.register(SuspendedUser)
class SuspendedUserAdmin(admin.ModelAdmin):
    list_display = ['user', 'reason', 'suspended_by', 'suspended_at']
    search_fields = ['user__username', 'user__email', 'reason']
    ordering = ['-suspended_at']


@admin.register(AuthorizedEmployee)
class AuthorizedEmployeeAdmin(admin.ModelAdmin):
    list_display = ['email', 'created_at']
    search_fields = ['email']


@admin.register(AuthorizedAdmin)
class AuthorizedAdminAdmin(admin.ModelAdmin):
    list_display = ['email', 'created_at']
    search_fields = ['email']


@admin.register(Brand)
class BrandAdmin(admin.ModelAdmin):
    list_display = ['id', 'name']
    search_fields = ['name']
    ordering = ['name']


@admin.register(Vehicle)
class VehicleAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'brand', 'model', 'license_plate', 'energy_type', 'seats']
    list_filter = ['energy_type', 'brand']
    search_fields = ['license_plate', 'brand', 'model', 'user__username']
    list_per_page = 50


@admin.register(DriverPreferences)
class DriverPreferencesAdmin(admin.ModelAdmin):
    list_display = ['user', 'smoking_allowed', 'pets_allowed']
    search_fields = ['user__username']


class RideBookingInline(admin.TabularInline):
    model = RideBooking
    extra = 0
    readonly_fields = ['passenger', 'created_at']
    can_delete = False


@admin.register(Ride)
class RideAdmin(admin.ModelAdmin):
    list_display = ['id', 'departure_city', 'arrival_city', 'departure_date', 'driver', 'price',
                    'seats_available', 'seats_total', 'status', 'is_electric_car']
    list_filter = ['status', 'is_electric_car', 'departure_date']
    search_fields = ['departure_city', 'arrival_city', 'driver__username']
    ordering = ['-departure_date']
    date_hierarchy = 'departure_date'
    list_per_page = 50
    # Seat counts and status move only through the booking and ride services
    readonly_fields = ['seats_available', 'status', 'created_at', 'started_at', 'completed_at', 'cancelled_at']
    inlines = [RideBookingInline]


@admin.register(RideBooking)
class RideBookingAdmin(admin.ModelAdmin):
    list_display = ['id', 'ride', 'passenger', 'created_at']
    search_fields = ['passenger__username', 'ride__departure_city', 'ride__arrival_city']
    ordering = ['-created_at']

    def has_add_permission(self, request):
        return False


@admin.register(CheckoutSession)
class CheckoutSessionAdmin(admin.ModelAdmin):
    list_display = ['session_id', 'ride', 'passenger', 'amount', 'status', 'payment_reference', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['session_id', 'payment_reference', 'passenger__username']
    ordering = ['-created_at']
    readonly_fields = ['session_id', 'ride', 'passenger', 'amount', 'redirect_url', 'booking', 'created_at', 'updated_at']


@admin.register(DriverReview)
class DriverReviewAdmin(admin.ModelAdmin):
    list_display = ['id', 'reviewer', 'driver', 'rating', 'is_positive', 'status', 'reviewed_by', 'created_at']
    list_filter = ['status', 'is_positive', 'rating']
    search_fields = ['reviewer__username', 'driver__username', 'comment']
    ordering = ['-created_at']
    list_per_page = 50

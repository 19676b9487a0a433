"""Centralized constants and business rules"""

class UserRole:
    PASSENGER = 'passenger'
    DRIVER = 'driver'
    BOTH = 'both'
    EMPLOYEE = 'employee'
    ADMIN = 'admin'

    CHOICES = [
        (PASSENGER, 'Passenger'),
        (DRIVER, 'Driver'),
        (BOTH, 'Driver & Passenger'),
        (EMPLOYEE, 'Employee'),
        (ADMIN, 'Admin'),
    ]

    DRIVING_ROLES = [DRIVER, BOTH]
    STAFF_ROLES = [EMPLOYEE, ADMIN]
    SELF_SERVICE_ROLES = [PASSENGER, DRIVER, BOTH]

class RideStatus:
    PENDING = 'pending'
    IN_PROGRESS = 'in_progress'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'

    CHOICES = [
        (PENDING, 'Pending'),
        (IN_PROGRESS, 'In Progress'),
        (COMPLETED, 'Completed'),
        (CANCELLED, 'Cancelled'),
    ]

    ACTIVE = [PENDING, IN_PROGRESS]
    TERMINAL = [COMPLETED, CANCELLED]

class ReviewStatus:
    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'

    CHOICES = [
        (PENDING, 'Pending Review'),
        (APPROVED, 'Approved'),
        (REJECTED, 'Rejected'),
    ]

    DECISIONS = [APPROVED, REJECTED]

class CheckoutStatus:
    PENDING = 'pending'
    COMPLETED = 'completed'
    EXPIRED = 'expired'
    REFUNDED = 'refunded'
    NEEDS_RECONCILIATION = 'needs_reconciliation'

    CHOICES = [
        (PENDING, 'Pending'),
        (COMPLETED, 'Completed'),
        (EXPIRED, 'Expired'),
        (REFUNDED, 'Refunded'),
        (NEEDS_RECONCILIATION, 'Needs Reconciliation'),
    ]

    SETTLED = [REFUNDED, NEEDS_RECONCILIATION]

class PaymentMethod:
    CREDITS = 'credits'
    STRIPE = 'stripe'

    CHOICES = [
        (CREDITS, 'Credits'),
        (STRIPE, 'Stripe'),
    ]

    ALL = [CREDITS, STRIPE]

class TransactionType:
    CREDIT = 'credit'
    DEBIT = 'debit'

    CHOICES = [
        (CREDIT, 'credit'),
        (DEBIT, 'debit'),
    ]

class TransactionTitle:
    SIGNUP = 'signup'
    BOOKING = 'booking'
    REFUND = 'refund'
    RIDE_FEE = 'ride_fee'
    ADJUSTMENT = 'adjustment'

    CHOICES = [
        (SIGNUP, 'Signup bonus'),
        (BOOKING, 'Ride booking'),
        (REFUND, 'Refund'),
        (RIDE_FEE, 'Platform ride fee'),
        (ADJUSTMENT, 'Manual adjustment'),
    ]

class EnergyType:
    ELECTRIC = 'electric'
    HYBRID = 'hybrid'
    PETROL = 'petrol'
    DIESEL = 'diesel'

    CHOICES = [
        (ELECTRIC, 'Electric'),
        (HYBRID, 'Hybrid'),
        (PETROL, 'Petrol'),
        (DIESEL, 'Diesel'),
    ]

class BusinessRules:
    """Business rules and limits"""
    SIGNUP_CREDITS = 20
    RIDE_POSTING_FEE = 2
    MIN_CITY_LENGTH = 2
    MIN_RATING = 1
    MAX_RATING = 5
    UPCOMING_RIDES_LIMIT = 50
    CHECKOUT_SESSION_EXPIRY_MINUTES = 60
    NOTIFICATION_TIMEOUT_SECONDS = 10

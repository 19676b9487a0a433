"""Service-layer exceptions for ride, booking and review operations."""


class RideshareError(Exception):
    """Base error carrying a human-readable message and an HTTP status."""
    status_code = 400
    default_message = "Request could not be completed"
    code = 'error'

    def __init__(self, message=None, code=None):
        self.message = message or self.default_message
        if code:
            self.code = code
        super().__init__(self.message)


class ValidationFailed(RideshareError):
    """Raised when input is malformed."""
    default_message = "Invalid input"
    code = 'validation_failed'


class NotAuthorized(RideshareError):
    """Raised when a role or ownership check fails."""
    status_code = 403
    default_message = "You are not allowed to perform this action"
    code = 'not_authorized'


class NotFound(RideshareError):
    """Raised when an entity cannot be found."""
    status_code = 404
    default_message = "Not found"
    code = 'not_found'


class Conflict(RideshareError):
    """Raised when a precondition no longer holds at commit time."""
    status_code = 409
    default_message = "The request conflicts with the current state"
    code = 'conflict'


class UpstreamFailure(RideshareError):
    """Raised when an external collaborator fails."""
    status_code = 502
    default_message = "An external service failed"
    code = 'upstream_failure'


class InsufficientBalance(RideshareError):
    """Raised when a debit would drive a balance negative."""
    status_code = 402
    default_message = "Insufficient balance"
    code = 'insufficient_balance'


class InsufficientCredits(InsufficientBalance):
    default_message = "Not enough credits"
    code = 'insufficient_credits'


class RoleNotPermitted(NotAuthorized):
    default_message = "Your role does not allow this action"
    code = 'role_not_permitted'


class SelfBookingNotAllowed(ValidationFailed):
    default_message = "Drivers cannot book their own ride"
    code = 'self_booking_not_allowed'


class RideNotBookable(Conflict):
    default_message = "This ride can no longer be booked"
    code = 'ride_not_bookable'


class AlreadyBooked(Conflict):
    default_message = "You already booked this ride"
    code = 'already_booked'


class InvalidTransition(Conflict):
    default_message = "This status change is not allowed"
    code = 'invalid_transition'


class PaymentFailed(UpstreamFailure):
    default_message = "Payment could not be processed"
    code = 'payment_failed'


class RideNotFound(NotFound):
    default_message = "Ride not found"
    code = 'ride_not_found'


class BookingNotFound(NotFound):
    default_message = "Booking not found"
    code = 'booking_not_found'


class ReviewNotFound(NotFound):
    default_message = "Review not found"
    code = 'review_not_found'

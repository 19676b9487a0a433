"""Caller context passed explicitly into every service operation."""

from dataclasses import dataclass

from ..models import Profile, SuspendedUser
from ..utils.constants import UserRole
from ..exceptions import NotAuthorized, RoleNotPermitted


@dataclass(frozen=True)
class Actor:
    id: int
    role: str
    is_suspended: bool = False

    @classmethod
    def from_user(cls, user):
        """Build the actor from the database at request time."""
        profile = Profile.objects.filter(user=user).only('role').first()
        role = profile.role if profile else UserRole.PASSENGER
        is_suspended = SuspendedUser.objects.filter(user=user).exists()
        return cls(id=user.id, role=role, is_suspended=is_suspended)

    @property
    def can_drive(self):
        return self.role in UserRole.DRIVING_ROLES

    @property
    def is_staff_member(self):
        return self.role in UserRole.STAFF_ROLES

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN

    def require_active(self):
        if self.is_suspended:
            raise NotAuthorized("Your account is suspended")

    def require_driver(self):
        self.require_active()
        if not self.can_drive:
            raise RoleNotPermitted("Only drivers can perform this action")

    def require_staff(self):
        self.require_active()
        if not self.is_staff_member:
            raise RoleNotPermitted("Only employees or admins can perform this action")

    def require_admin(self):
        self.require_active()
        if not self.is_admin:
            raise RoleNotPermitted("Only admins can perform this action")

from rest_framework.permissions import BasePermission

from .utils.constants import UserRole


class IsDriver(BasePermission):
    def has_permission(self, request, view):
        return hasattr(request.user, 'profile') and request.user.profile.role in UserRole.DRIVING_ROLES


class IsStaffMember(BasePermission):
    """Employees and admins"""
    def has_permission(self, request, view):
        return hasattr(request.user, 'profile') and request.user.profile.role in UserRole.STAFF_ROLES


class IsPlatformAdmin(BasePermission):
    def has_permission(self, request, view):
        return hasattr(request.user, 'profile') and request.user.profile.role == UserRole.ADMIN

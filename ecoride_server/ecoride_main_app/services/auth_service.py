"""Auth service - accounts, JWT sessions, roles and staff administration"""

import logging

from django.conf import settings
from django.contrib.auth import authenticate
from django.contrib.auth.models import User
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.db import transaction
from django.db.models import Exists, OuterRef, Q
from rest_framework_simplejwt.tokens import RefreshToken

from wallet.services import refund_credits
from ..models import Profile, SuspendedUser, AuthorizedEmployee, AuthorizedAdmin
from ..utils.constants import UserRole, TransactionTitle
from ..exceptions import ValidationFailed, NotAuthorized, NotFound, Conflict

logger = logging.getLogger(__name__)

PROFILE_METADATA_FIELDS = ['username', 'name', 'first_name', 'last_name', 'phone', 'address', 'birth_date', 'photo']


class AuthService:
    """Service for identity operations"""

    @transaction.atomic
    def sign_up(self, email, password, metadata=None):
        """
        Create an account and its profile, credited with the signup bonus.

        Elevated roles cannot be requested here; they are granted by an admin.

        Returns:
            dict with access, refresh, user_id and role
        """
        metadata = metadata or {}
        email = self._normalize_email(email)
        try:
            validate_password(password)
        except ValidationError as e:
            raise ValidationFailed(' '.join(e.messages))

        role = metadata.get('role') or UserRole.PASSENGER
        if role not in UserRole.SELF_SERVICE_ROLES:
            raise NotAuthorized(f'Role "{role}" cannot be chosen at sign-up')
        if User.objects.filter(username=email).exists():
            raise Conflict('An account already exists for this email')

        user = User.objects.create_user(
            username=email,
            email=email,
            password=password,
            first_name=metadata.get('first_name') or '',
            last_name=metadata.get('last_name') or '',
        )
        profile = self._create_profile(user, role, metadata)

        signup_credits = settings.SIGNUP_CREDITS
        if signup_credits > 0:
            refund_credits(user.id, signup_credits, title=TransactionTitle.SIGNUP,
                           reference_id=f'user:{user.id}', description='Welcome credits')

        logger.info(f'[AUTH] User {user.id} signed up as {profile.role}')
        return self._issue_tokens(user, profile.role)

    def sign_in(self, email, password):
        """
        Returns:
            dict with access, refresh, user_id and role

        Raises:
            NotAuthorized: On bad credentials or a suspended account
        """
        user = authenticate(username=(email or '').strip().lower(), password=password)
        if user is None:
            raise NotAuthorized('Invalid email or password')
        if SuspendedUser.objects.filter(user=user).exists():
            logger.warning(f'[AUTH] Suspended user {user.id} tried to sign in')
            raise NotAuthorized('Your account is suspended')

        profile, _ = Profile.objects.get_or_create(user=user, defaults={'credits': 0})
        return self._issue_tokens(user, profile.role)

    def employee_sign_in(self, email, password):
        """
        Sign in through the employee door.

        The session carries is_temporary_password; while it is set the
        employee must call change_password before anything else.
        """
        session = self.sign_in(email, password)
        authorized = AuthorizedEmployee.objects.filter(email__iexact=email.strip()).exists()
        if not authorized or session['role'] != UserRole.EMPLOYEE:
            raise NotAuthorized('This account is not an authorized employee')
        session['is_temporary_password'] = Profile.objects.filter(
            pk=session['user_id'], is_temporary_password=True
        ).exists()
        return session

    def admin_sign_in(self, email, password):
        session = self.sign_in(email, password)
        if not AuthorizedAdmin.objects.filter(email__iexact=email.strip()).exists():
            raise NotAuthorized('This account is not an authorized admin')

        if session['role'] != UserRole.ADMIN:
            Profile.objects.filter(pk=session['user_id']).update(role=UserRole.ADMIN)
            logger.info(f'[AUTH] User {session["user_id"]} promoted to admin on first sign-in')
            user = User.objects.get(id=session['user_id'])
            session = self._issue_tokens(user, UserRole.ADMIN)
        return session

    def get_session(self, user):
        profile = Profile.objects.filter(user=user).first()
        metadata = {'email': user.email}
        if profile:
            metadata.update({
                'username': profile.username,
                'name': profile.display_name,
                'role': profile.role,
                'credits': profile.credits,
                'photo': profile.photo,
                'is_temporary_password': profile.is_temporary_password,
            })
        return {'user_id': user.id, 'metadata': metadata}

    def set_role(self, actor, role):
        """Switch between passenger, driver and both"""
        actor.require_active()
        if role not in UserRole.SELF_SERVICE_ROLES:
            raise ValidationFailed(f'Role must be one of: {", ".join(UserRole.SELF_SERVICE_ROLES)}')
        if actor.is_staff_member:
            raise NotAuthorized('Staff roles are managed by an admin')

        updated = Profile.objects.filter(pk=actor.id).update(role=role)
        if not updated:
            raise NotFound('Profile not found')
        logger.info(f'[AUTH] User {actor.id} switched role to {role}')
        return Profile.objects.get(pk=actor.id)

    @transaction.atomic
    def change_password(self, actor, current_password, new_password):
        """
        Replace the actor's password and clear the temporary-password flag.

        Raises:
            NotAuthorized: If current_password is wrong
            ValidationFailed: If the new password equals the current one or is too weak
        """
        actor.require_active()
        user = User.objects.filter(id=actor.id).first()
        if user is None or not user.check_password(current_password):
            raise NotAuthorized('Current password is incorrect')
        if new_password == current_password:
            raise ValidationFailed('The new password must differ from the current one')
        try:
            validate_password(new_password, user)
        except ValidationError as e:
            raise ValidationFailed(' '.join(e.messages))

        user.set_password(new_password)
        user.save(update_fields=['password'])
        Profile.objects.filter(pk=user.id).update(is_temporary_password=False)
        logger.info(f'[AUTH] User {user.id} changed password')

    # ===================== Admin operations =====================

    @transaction.atomic
    def add_employee(self, actor, email, password, name=None):
        """
        Authorize an email as employee and create (or promote) its account.

        A new account gets password as a temporary password. Admin accounts
        are never turned into employees.
        """
        actor.require_admin()
        email = self._normalize_email(email)

        user = User.objects.filter(Q(username=email) | Q(email__iexact=email)).order_by('id').first()
        if user is not None and Profile.objects.filter(user=user, role=UserRole.ADMIN).exists():
            raise Conflict('This account is an admin and cannot be made an employee')

        AuthorizedEmployee.objects.get_or_create(email=email)

        if user is None:
            try:
                validate_password(password)
            except ValidationError as e:
                raise ValidationFailed(' '.join(e.messages))
            user = User.objects.create_user(username=email, email=email, password=password)
            profile = self._create_profile(user, UserRole.EMPLOYEE, {'name': name}, credits=0)
            profile.is_temporary_password = True
            profile.save(update_fields=['is_temporary_password'])
        else:
            profile, _ = Profile.objects.get_or_create(user=user, defaults={'credits': 0})
            profile.role = UserRole.EMPLOYEE
            if name:
                profile.name = name
            profile.save()

        logger.info(f'[AUTH] Admin {actor.id} added employee {user.id}')
        return profile

    @transaction.atomic
    def remove_employee(self, actor, email):
        actor.require_admin()
        email = (email or '').strip().lower()
        deleted, _ = AuthorizedEmployee.objects.filter(email__iexact=email).delete()
        if not deleted:
            raise NotFound('Employee not found')

        Profile.objects.filter(
            Q(user__username=email) | Q(user__email__iexact=email), role=UserRole.EMPLOYEE
        ).update(role=UserRole.PASSENGER)
        logger.info(f'[AUTH] Admin {actor.id} removed employee {email}')

    @transaction.atomic
    def suspend_user(self, actor, user_id, reason=''):
        actor.require_admin()
        if user_id == actor.id:
            raise ValidationFailed('You cannot suspend yourself')
        user = User.objects.filter(id=user_id).first()
        if not user:
            raise NotFound('User not found')

        suspension, created = SuspendedUser.objects.get_or_create(
            user=user,
            defaults={'reason': reason or '', 'suspended_by_id': actor.id},
        )
        if not created:
            raise Conflict('User is already suspended')

        logger.info(f'[AUTH] Admin {actor.id} suspended user {user_id}')
        return suspension

    def list_users(self, actor):
        actor.require_admin()
        return Profile.objects.select_related('user').annotate(
            is_suspended=Exists(SuspendedUser.objects.filter(user=OuterRef('user')))
        ).order_by('-created_at')

    # ===================== Helpers =====================

    def _normalize_email(self, email):
        email = (email or '').strip().lower()
        try:
            validate_email(email)
        except ValidationError:
            raise ValidationFailed('A valid email is required')
        return email

    def _create_profile(self, user, role, metadata, credits=0):
        fields = {key: metadata[key] for key in PROFILE_METADATA_FIELDS if metadata.get(key)}
        fields.setdefault('username', user.username.split('@')[0][:50])
        return Profile.objects.create(user=user, role=role, credits=credits, **fields)

    def _issue_tokens(self, user, role):
        refresh = RefreshToken.for_user(user)
        refresh['role'] = role
        return {
            'refresh': str(refresh),
            'access': str(refresh.access_token),
            'user_id': user.id,
            'role': role,
        }

"""Tests for auth service"""
from django.contrib.auth.models import User
from django.test import TestCase, override_settings
from rest_framework_simplejwt.tokens import AccessToken

from wallet.models import CreditTransaction
from ..exceptions import ValidationFailed, NotAuthorized, NotFound, Conflict, RoleNotPermitted
from ..models import Profile, SuspendedUser, AuthorizedEmployee, AuthorizedAdmin
from ..services import AuthService
from ..utils.constants import UserRole, TransactionTitle
from .helpers import make_user, actor

PASSWORD = 'Str0ng-pass!'


@override_settings(SIGNUP_CREDITS=20)
class SignUpTest(TestCase):
    def setUp(self):
        self.service = AuthService()

    def test_sign_up_creates_profile_with_welcome_credits(self):
        session = self.service.sign_up('Jane@Example.com', PASSWORD, {'name': 'Jane', 'role': UserRole.BOTH})

        user = User.objects.get(id=session['user_id'])
        self.assertEqual(user.email, 'jane@example.com')
        profile = Profile.objects.get(user=user)
        self.assertEqual(profile.role, UserRole.BOTH)
        self.assertEqual(profile.credits, 20)
        self.assertEqual(profile.name, 'Jane')
        entry = CreditTransaction.objects.get(user=user)
        self.assertEqual(entry.title, TransactionTitle.SIGNUP)
        self.assertEqual(AccessToken(session['access'])['role'], UserRole.BOTH)

    def test_elevated_role_cannot_be_chosen(self):
        with self.assertRaises(NotAuthorized):
            self.service.sign_up('eve@example.com', PASSWORD, {'role': UserRole.ADMIN})
        self.assertFalse(User.objects.filter(username='eve@example.com').exists())

    def test_duplicate_email(self):
        self.service.sign_up('jane@example.com', PASSWORD)
        with self.assertRaises(Conflict):
            self.service.sign_up('JANE@example.com', PASSWORD)

    def test_weak_password_and_bad_email(self):
        with self.assertRaises(ValidationFailed):
            self.service.sign_up('jane@example.com', '123')
        with self.assertRaises(ValidationFailed):
            self.service.sign_up('not-an-email', PASSWORD)


class SignInTest(TestCase):
    def setUp(self):
        self.service = AuthService()
        self.service.sign_up('jane@example.com', PASSWORD, {'role': UserRole.DRIVER})
        self.user = User.objects.get(username='jane@example.com')

    def test_sign_in_returns_tokens_with_role(self):
        session = self.service.sign_in('jane@example.com', PASSWORD)

        self.assertEqual(session['user_id'], self.user.id)
        self.assertEqual(session['role'], UserRole.DRIVER)
        self.assertTrue(session['refresh'])
        self.assertEqual(AccessToken(session['access'])['role'], UserRole.DRIVER)

    def test_wrong_password(self):
        with self.assertRaises(NotAuthorized):
            self.service.sign_in('jane@example.com', 'wrong-password')

    def test_suspended_user_rejected(self):
        SuspendedUser.objects.create(user=self.user, reason='spam')
        with self.assertRaises(NotAuthorized):
            self.service.sign_in('jane@example.com', PASSWORD)

    def test_employee_sign_in_needs_allow_list_and_role(self):
        with self.assertRaises(NotAuthorized):
            self.service.employee_sign_in('jane@example.com', PASSWORD)

        AuthorizedEmployee.objects.create(email='jane@example.com')
        with self.assertRaises(NotAuthorized):
            self.service.employee_sign_in('jane@example.com', PASSWORD)

        Profile.objects.filter(user=self.user).update(role=UserRole.EMPLOYEE)
        session = self.service.employee_sign_in('jane@example.com', PASSWORD)
        self.assertEqual(session['role'], UserRole.EMPLOYEE)

    def test_admin_sign_in_promotes_on_first_use(self):
        with self.assertRaises(NotAuthorized):
            self.service.admin_sign_in('jane@example.com', PASSWORD)

        AuthorizedAdmin.objects.create(email='jane@example.com')
        session = self.service.admin_sign_in('jane@example.com', PASSWORD)

        self.assertEqual(session['role'], UserRole.ADMIN)
        self.assertEqual(Profile.objects.get(user=self.user).role, UserRole.ADMIN)
        self.assertEqual(AccessToken(session['access'])['role'], UserRole.ADMIN)

    def test_get_session(self):
        session = self.service.get_session(self.user)
        self.assertEqual(session['user_id'], self.user.id)
        self.assertEqual(session['metadata']['role'], UserRole.DRIVER)
        self.assertEqual(session['metadata']['email'], 'jane@example.com')


class RoleAndAdminTest(TestCase):
    def setUp(self):
        self.service = AuthService()
        self.admin = make_user('admin', role=UserRole.ADMIN)
        self.passenger = make_user('passenger')

    def test_set_role(self):
        profile = self.service.set_role(actor(self.passenger), UserRole.BOTH)
        self.assertEqual(profile.role, UserRole.BOTH)

        with self.assertRaises(ValidationFailed):
            self.service.set_role(actor(self.passenger), UserRole.ADMIN)

    def test_staff_cannot_self_demote(self):
        with self.assertRaises(NotAuthorized):
            self.service.set_role(actor(self.admin), UserRole.PASSENGER)

    def test_add_and_remove_employee(self):
        profile = self.service.add_employee(actor(self.admin), 'staff@example.com', PASSWORD, 'Sam')

        self.assertEqual(profile.role, UserRole.EMPLOYEE)
        self.assertTrue(AuthorizedEmployee.objects.filter(email='staff@example.com').exists())
        session = self.service.employee_sign_in('staff@example.com', PASSWORD)
        self.assertEqual(session['role'], UserRole.EMPLOYEE)

        self.service.remove_employee(actor(self.admin), 'staff@example.com')
        self.assertFalse(AuthorizedEmployee.objects.exists())
        self.assertEqual(Profile.objects.get(user__username='staff@example.com').role, UserRole.PASSENGER)

        with self.assertRaises(NotFound):
            self.service.remove_employee(actor(self.admin), 'staff@example.com')

    def test_only_admin_manages_staff(self):
        with self.assertRaises(RoleNotPermitted):
            self.service.add_employee(actor(self.passenger), 'staff@example.com', PASSWORD)
        with self.assertRaises(RoleNotPermitted):
            self.service.suspend_user(actor(self.passenger), self.admin.id, 'no')
        with self.assertRaises(RoleNotPermitted):
            self.service.list_users(actor(self.passenger))

    def test_suspend_user(self):
        suspension = self.service.suspend_user(actor(self.admin), self.passenger.id, 'fraud')

        self.assertEqual(suspension.suspended_by, self.admin)
        self.assertTrue(actor(self.passenger).is_suspended)
        with self.assertRaises(Conflict):
            self.service.suspend_user(actor(self.admin), self.passenger.id, 'again')
        with self.assertRaises(ValidationFailed):
            self.service.suspend_user(actor(self.admin), self.admin.id)

        users = {profile.user_id: profile.is_suspended for profile in self.service.list_users(actor(self.admin))}
        self.assertTrue(users[self.passenger.id])
        self.assertFalse(users[self.admin.id])

    def test_admin_cannot_be_added_as_employee(self):
        other_admin = make_user('other-admin', role=UserRole.ADMIN)

        with self.assertRaises(Conflict):
            self.service.add_employee(actor(self.admin), other_admin.email, None)
        with self.assertRaises(Conflict):
            self.service.add_employee(actor(self.admin), self.admin.email, None)

        self.assertEqual(Profile.objects.get(pk=other_admin.pk).role, UserRole.ADMIN)
        self.assertEqual(Profile.objects.get(pk=self.admin.pk).role, UserRole.ADMIN)
        self.assertFalse(AuthorizedEmployee.objects.exists())


class TemporaryPasswordTest(TestCase):
    def setUp(self):
        self.service = AuthService()
        self.admin = make_user('admin', role=UserRole.ADMIN)
        self.service.add_employee(actor(self.admin), 'staff@example.com', PASSWORD, 'Sam')
        self.employee = User.objects.get(username='staff@example.com')

    def test_new_employee_must_change_password(self):
        session = self.service.employee_sign_in('staff@example.com', PASSWORD)
        self.assertTrue(session['is_temporary_password'])

        self.service.change_password(actor(self.employee), PASSWORD, 'N3w-private-pass')

        session = self.service.employee_sign_in('staff@example.com', 'N3w-private-pass')
        self.assertFalse(session['is_temporary_password'])
        self.assertFalse(Profile.objects.get(pk=self.employee.pk).is_temporary_password)
        with self.assertRaises(NotAuthorized):
            self.service.sign_in('staff@example.com', PASSWORD)

    def test_promoted_account_keeps_its_own_password(self):
        user = make_user('driver', role=UserRole.DRIVER)
        profile = self.service.add_employee(actor(self.admin), user.email, None)
        self.assertFalse(profile.is_temporary_password)

    def test_new_password_rules(self):
        with self.assertRaises(NotAuthorized):
            self.service.change_password(actor(self.employee), 'wrong-password', 'N3w-private-pass')
        with self.assertRaises(ValidationFailed):
            self.service.change_password(actor(self.employee), PASSWORD, PASSWORD)
        with self.assertRaises(ValidationFailed):
            self.service.change_password(actor(self.employee), PASSWORD, '123')

        self.assertTrue(Profile.objects.get(pk=self.employee.pk).is_temporary_password)
        self.employee.refresh_from_db()
        self.assertTrue(self.employee.check_password(PASSWORD))

    def test_suspended_user_cannot_change_password(self):
        SuspendedUser.objects.create(user=self.employee, reason='left')
        with self.assertRaises(NotAuthorized):
            self.service.change_password(actor(self.employee), PASSWORD, 'N3w-private-pass')

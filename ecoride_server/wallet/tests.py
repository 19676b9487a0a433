from django.test import TestCase
from rest_framework.test import APIClient

from ecoride_main_app.exceptions import InsufficientCredits, NotFound, ValidationFailed
from ecoride_main_app.tests.helpers import make_user, credits_of
from ecoride_main_app.utils.constants import TransactionType, TransactionTitle
from .models import CreditTransaction
from .services import debit_credits, refund_credits, get_balance


class CreditServicesTest(TestCase):
    def setUp(self):
        self.user = make_user('jane', credits=10)

    def test_debit_writes_ledger_entry(self):
        entry = debit_credits(self.user.id, 4, title=TransactionTitle.BOOKING, reference_id='ride:1')

        self.assertEqual(credits_of(self.user), 6)
        self.assertEqual(entry.transaction_type, TransactionType.DEBIT)
        self.assertEqual(entry.reference_id, 'ride:1')

    def test_debit_never_goes_negative(self):
        with self.assertRaises(InsufficientCredits):
            debit_credits(self.user.id, 11)

        self.assertEqual(credits_of(self.user), 10)
        self.assertFalse(CreditTransaction.objects.exists())

    def test_debit_whole_balance(self):
        debit_credits(self.user.id, 10)
        self.assertEqual(get_balance(self.user.id), 0)

    def test_refund(self):
        entry = refund_credits(self.user.id, 15, reference_id='ride:2')

        self.assertEqual(credits_of(self.user), 25)
        self.assertEqual(entry.transaction_type, TransactionType.CREDIT)
        self.assertEqual(entry.title, TransactionTitle.REFUND)

    def test_amount_must_be_positive_int(self):
        for amount in (0, -3, 2.5, True):
            with self.assertRaises(ValidationFailed):
                debit_credits(self.user.id, amount)
            with self.assertRaises(ValidationFailed):
                refund_credits(self.user.id, amount)
        self.assertEqual(credits_of(self.user), 10)

    def test_unknown_user(self):
        with self.assertRaises(NotFound):
            debit_credits(999999, 1)
        with self.assertRaises(NotFound):
            refund_credits(999999, 1)
        self.assertEqual(get_balance(999999), 0)


class WalletApiTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = make_user('jane', credits=10)
        self.other = make_user('john', credits=10)
        debit_credits(self.user.id, 3, title=TransactionTitle.BOOKING, reference_id='ride:7')
        refund_credits(self.other.id, 5)

    def test_balance(self):
        self.client.force_authenticate(self.user)
        response = self.client.get('/api/wallet/balance/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['balance'], 7)

    def test_transactions_are_private(self):
        self.client.force_authenticate(self.user)
        response = self.client.get('/api/wallet/transactions/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['reference_id'], 'ride:7')

    def test_requires_authentication(self):
        self.assertEqual(self.client.get('/api/wallet/balance/').status_code, 401)

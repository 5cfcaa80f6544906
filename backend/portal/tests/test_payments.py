from unittest.mock import MagicMock, patch

import pytest
import requests
from django.test import TestCase, override_settings

from portal.models import Purchase
from portal.payments import PaymentProviderError, get_payment_status
from portal.purchases import (
    PRICING_FAILED_PATH,
    PRICING_PATH,
    PRICING_SUCCESS_PATH,
    FulfillmentResult,
    fulfill_purchase_by_payment_id,
)
from portal.tests.fixtures import EmployerFactory, PlanFactory, PurchaseFactory


def _status(purchase_ref, invoice_status='Paid', **extra):
    data = {'InvoiceId': 555, 'InvoiceStatus': invoice_status, 'CustomerReference': purchase_ref}
    data.update(extra)
    return {'IsSuccess': True, 'Message': '', 'Data': data}


@override_settings(SERVER_URL='https://rtw.example')
class PaymentCallbackTests(TestCase):
    url = '/api/payment/callback'

    @patch('portal.views.fulfill_purchase_by_payment_id')
    def test_missing_payment_id(self, mock_fulfill):
        response = self.client.get(self.url)
        self.assertRedirects(
            response, 'https://rtw.example/en/pricing?payment=error&reason=missing_id',
            fetch_redirect_response=False,
        )
        mock_fulfill.assert_not_called()

    @patch('portal.views.fulfill_purchase_by_payment_id')
    def test_redirects_to_fulfillment_result(self, mock_fulfill):
        mock_fulfill.return_value = FulfillmentResult(True, PRICING_SUCCESS_PATH)
        response = self.client.get(self.url, {'paymentId': '07070', 'success': '1'})
        self.assertRedirects(
            response, 'https://rtw.example/en/pricing?payment=success', fetch_redirect_response=False
        )
        mock_fulfill.assert_called_once_with('07070')

    @patch('portal.views.fulfill_purchase_by_payment_id')
    def test_accepts_capitalised_param(self, mock_fulfill):
        mock_fulfill.return_value = FulfillmentResult(False, PRICING_FAILED_PATH)
        response = self.client.get(self.url, {'PaymentId': '42'})
        self.assertRedirects(
            response, 'https://rtw.example/en/pricing?payment=failed', fetch_redirect_response=False
        )

    @patch('portal.views.fulfill_purchase_by_payment_id')
    def test_provider_errors_redirect_to_error(self, mock_fulfill):
        mock_fulfill.side_effect = PaymentProviderError('boom')
        response = self.client.get(self.url, {'paymentId': '1'})
        self.assertRedirects(
            response, 'https://rtw.example/en/pricing?payment=error', fetch_redirect_response=False
        )


@patch('portal.purchases.get_payment_status')
class FulfillmentTests(TestCase):

    def setUp(self):
        self.plan = PlanFactory(interview_credits_granted=5, contact_unlock_credits_granted=2, basic_filters=True)
        self.employer = EmployerFactory(interview_credits=1, contact_unlock_credits=0)
        self.purchase = PurchaseFactory(employer=self.employer, plan=self.plan)

    def test_paid_purchase_grants_credits_once(self, mock_status):
        mock_status.return_value = _status(str(self.purchase.pk))

        result = fulfill_purchase_by_payment_id('pay-1')
        self.assertEqual(result, FulfillmentResult(True, PRICING_SUCCESS_PATH))
        self.purchase.refresh_from_db()
        self.assertEqual(self.purchase.status, Purchase.STATUS_ACTIVE)
        self.assertEqual(self.purchase.payment_id, 'pay-1')
        self.assertEqual(self.purchase.invoice_id, '555')
        self.employer.refresh_from_db()
        self.assertEqual(self.employer.interview_credits, 6)
        self.assertEqual(self.employer.contact_unlock_credits, 2)
        self.assertEqual(self.employer.active_plan, self.plan)
        self.assertTrue(self.employer.basic_filters)

        # Replayed callback
        again = fulfill_purchase_by_payment_id('pay-1')
        self.assertTrue(again.fulfilled)
        self.employer.refresh_from_db()
        self.assertEqual(self.employer.interview_credits, 6)

    def test_snapshot_overrides_plan_entitlements(self, mock_status):
        purchase = PurchaseFactory(employer=self.employer, plan=self.plan, interview_credits_granted=10)
        mock_status.return_value = _status(None, UserDefinedField=str(purchase.pk))
        fulfill_purchase_by_payment_id('pay-2')
        self.employer.refresh_from_db()
        self.assertEqual(self.employer.interview_credits, 11)

    def test_unpaid_marks_pending_purchase_failed(self, mock_status):
        mock_status.return_value = _status(str(self.purchase.pk), invoice_status='Failed')
        result = fulfill_purchase_by_payment_id('pay-3')
        self.assertEqual(result, FulfillmentResult(False, PRICING_FAILED_PATH))
        self.purchase.refresh_from_db()
        self.assertEqual(self.purchase.status, Purchase.STATUS_FAILED)
        self.employer.refresh_from_db()
        self.assertEqual(self.employer.interview_credits, 1)

    def test_unpaid_leaves_active_purchase_alone(self, mock_status):
        self.purchase.status = Purchase.STATUS_ACTIVE
        self.purchase.save()
        mock_status.return_value = _status(str(self.purchase.pk), invoice_status='Pending')
        fulfill_purchase_by_payment_id('pay-4')
        self.purchase.refresh_from_db()
        self.assertEqual(self.purchase.status, Purchase.STATUS_ACTIVE)

    def test_unverified_payment(self, mock_status):
        mock_status.return_value = {'IsSuccess': False, 'Message': 'Invalid key', 'Data': None}
        result = fulfill_purchase_by_payment_id('pay-5')
        self.assertEqual(result, FulfillmentResult(False, PRICING_PATH, 'Invalid key'))

    def test_missing_reference(self, mock_status):
        mock_status.return_value = _status(None)
        result = fulfill_purchase_by_payment_id('pay-6')
        self.assertFalse(result.fulfilled)
        self.assertEqual(result.error, 'No purchase reference in payment.')

    def test_unknown_purchase_is_reported_as_success(self, mock_status):
        mock_status.return_value = _status('999999')
        result = fulfill_purchase_by_payment_id('pay-7')
        self.assertEqual(result, FulfillmentResult(True, PRICING_SUCCESS_PATH))


@override_settings(MYFATOORAH_API_URL='https://apitest.myfatoorah.com/', MYFATOORAH_TOKEN='secret', MYFATOORAH_TIMEOUT=5)
class PaymentStatusClientTests(TestCase):

    @patch('portal.payments.requests.post')
    def test_posts_payment_id(self, mock_post):
        mock_post.return_value = MagicMock(ok=True, status_code=200)
        mock_post.return_value.json.return_value = _status('3')

        data = get_payment_status('07070')

        self.assertTrue(data['IsSuccess'])
        mock_post.assert_called_once_with(
            'https://apitest.myfatoorah.com/v2/GetPaymentStatus',
            json={'KeyType': 'PaymentId', 'Key': '07070'},
            headers={'Authorization': 'Bearer secret', 'Accept': 'application/json'},
            timeout=5,
        )

    @patch('portal.payments.requests.post')
    def test_error_response_raises(self, mock_post):
        mock_post.return_value = MagicMock(ok=False, status_code=400)
        mock_post.return_value.json.return_value = {
            'IsSuccess': False,
            'Message': 'Invalid data',
            'ValidationErrors': [{'Name': 'Key', 'Error': 'Not found'}],
        }
        with pytest.raises(PaymentProviderError, match='Key: Not found'):
            get_payment_status('1')

    @patch('portal.payments.requests.post')
    def test_network_error_raises(self, mock_post):
        mock_post.side_effect = requests.ConnectionError('down')
        with pytest.raises(PaymentProviderError):
            get_payment_status('1')

    @override_settings(MYFATOORAH_TOKEN='')
    @patch('portal.payments.requests.post')
    def test_missing_token(self, mock_post):
        with pytest.raises(PaymentProviderError):
            get_payment_status('1')
        mock_post.assert_not_called()

"""
MyFatoorah v2 payment status client.

Test API: https://apitest.myfatoorah.com, live: https://api.myfatoorah.com.
"""
import logging

import requests
from django.conf import settings

logger = logging.getLogger(__name__)

KEY_TYPE_PAYMENT_ID = 'PaymentId'

INVOICE_STATUS_PAID = 'Paid'


class PaymentProviderError(Exception):
    """The provider could not be reached or answered with an error."""


def _validation_message(data):
    errors = (data or {}).get('ValidationErrors') or []
    return '; '.join(f"{e.get('Name')}: {e.get('Error')}" for e in errors if isinstance(e, dict))


def get_payment_status(key, key_type=KEY_TYPE_PAYMENT_ID):
    """POST ``/v2/GetPaymentStatus`` and return the decoded JSON body.

    The body keeps the provider's shape: ``IsSuccess``, ``Message`` and
    ``Data`` with ``InvoiceStatus``, ``CustomerReference`` and
    ``UserDefinedField``.
    """
    token = (settings.MYFATOORAH_TOKEN or '').strip()
    if not token:
        raise PaymentProviderError('MYFATOORAH_TOKEN is not set')

    url = f"{settings.MYFATOORAH_API_URL.rstrip('/')}/v2/GetPaymentStatus"
    try:
        resp = requests.post(
            url,
            json={'KeyType': key_type, 'Key': str(key)},
            headers={
                'Authorization': f'Bearer {token}',
                'Accept': 'application/json',
            },
            timeout=settings.MYFATOORAH_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.error(f"MyFatoorah GetPaymentStatus request failed: {e}")
        raise PaymentProviderError(f'MyFatoorah GetPaymentStatus failed: {e}') from e

    try:
        data = resp.json()
    except ValueError:
        logger.error("MyFatoorah GetPaymentStatus non-JSON response status=%s body=%s", resp.status_code, resp.text[:500])
        raise PaymentProviderError(f'MyFatoorah returned invalid response: {resp.status_code}')

    if not resp.ok:
        message = ' '.join(filter(None, [data.get('Message'), _validation_message(data)]))
        raise PaymentProviderError(message or f'MyFatoorah GetPaymentStatus failed: {resp.status_code}')
    return data

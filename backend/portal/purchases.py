"""
Purchase fulfillment after the payment provider redirects back.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from django.db import transaction
from django.db.models import F

from portal.models import Employer, Purchase
from portal.payments import INVOICE_STATUS_PAID, get_payment_status
from portal.revalidation import TAG_CANDIDATES, TAG_PLANS, employer_tag, revalidate_tags

logger = logging.getLogger(__name__)

PRICING_PATH = '/en/pricing'
PRICING_SUCCESS_PATH = '/en/pricing?payment=success'
PRICING_FAILED_PATH = '/en/pricing?payment=failed'


@dataclass(frozen=True)
class FulfillmentResult:
    fulfilled: bool
    redirect_path: str
    error: Optional[str] = None


def _purchase_reference(data):
    ref = data.get('CustomerReference') or data.get('UserDefinedField')
    ref = str(ref).strip() if ref is not None else ''
    return ref or None


def fulfill_purchase_by_payment_id(payment_id) -> FulfillmentResult:
    """Verify a payment with the provider and grant the purchased credits.

    Safe to call repeatedly for the same payment: once the purchase has left
    ``pending`` it is reported as fulfilled without touching the wallet.
    Provider errors propagate to the caller.
    """
    status_res = get_payment_status(payment_id)
    data = status_res.get('Data')
    if not status_res.get('IsSuccess') or not data:
        return FulfillmentResult(False, PRICING_PATH, status_res.get('Message') or 'Could not verify payment.')

    purchase_ref = _purchase_reference(data)
    if not purchase_ref:
        return FulfillmentResult(False, PRICING_PATH, 'No purchase reference in payment.')

    purchase_qs = Purchase.objects.filter(pk=purchase_ref) if purchase_ref.isdigit() else Purchase.objects.none()

    if data.get('InvoiceStatus') != INVOICE_STATUS_PAID:
        purchase_qs.filter(status=Purchase.STATUS_PENDING).update(status=Purchase.STATUS_FAILED, payment_id=str(payment_id))
        logger.info("Payment %s not paid (status=%s) for purchase %s", payment_id, data.get('InvoiceStatus'), purchase_ref)
        return FulfillmentResult(False, PRICING_FAILED_PATH)

    with transaction.atomic():
        purchase = purchase_qs.select_for_update().select_related('plan').first()
        if purchase is None or purchase.status != Purchase.STATUS_PENDING:
            return FulfillmentResult(True, PRICING_SUCCESS_PATH)

        plan = purchase.plan
        interview_granted = purchase.interview_credits_granted
        if interview_granted is None:
            interview_granted = plan.interview_credits_granted
        contact_granted = purchase.contact_unlock_credits_granted
        if contact_granted is None:
            contact_granted = plan.contact_unlock_credits_granted

        purchase.status = Purchase.STATUS_ACTIVE
        purchase.payment_id = str(payment_id)
        if data.get('InvoiceId'):
            purchase.invoice_id = str(data['InvoiceId'])
        purchase.save(update_fields=['status', 'payment_id', 'invoice_id', 'updated_at'])

        Employer.objects.filter(pk=purchase.employer_id).update(
            interview_credits=F('interview_credits') + interview_granted,
            contact_unlock_credits=F('contact_unlock_credits') + contact_granted,
            active_plan=plan,
            basic_filters=plan.basic_filters,
            nationality_restriction=plan.nationality_restriction,
        )

    logger.info(
        "Purchase %s fulfilled employer_id=%s plan=%s interview_credits=+%s contact_credits=+%s",
        purchase.pk, purchase.employer_id, plan.slug, interview_granted, contact_granted
    )
    revalidate_tags(TAG_PLANS, TAG_CANDIDATES, employer_tag(purchase.employer_id))
    return FulfillmentResult(True, PRICING_SUCCESS_PATH)

"""QR redemption - one-time conversion of a printed code into points.

A QRCode moves from unscanned to scanned exactly once. The transition and
the balance credit happen in a single database transaction, in a fixed
order:

    1. claim   UPDATE qr_code SET is_scanned = TRUE
               WHERE id = ? AND is_scanned = FALSE AND batch.is_active
    2. credit  UPDATE customer SET points = points + n WHERE id = ?
    3. ledger  INSERT point_transaction

The claim is the commit point: the conditional update is what decides the
winner between concurrent scans of the same code, so the earlier read of
is_scanned is only a fast path. Any failure after the claim rolls the
whole transaction back, so a credit without a consumed code is never
observable.
"""

import logging
from dataclasses import dataclass

from django.db import DatabaseError, transaction
from django.db.models import F
from django.utils import timezone

from pointman.exceptions import PointmanError
from pointman.models import Customer, PointTransaction, QRBatch, QRCode, TransactionType
from pointman.payload import ScanPayload, parse_scan_payload
from pointman.signals import qr_redeemed

logger = logging.getLogger(__name__)


@dataclass
class RedemptionResult:
    """Outcome of a single redemption attempt."""

    success: bool
    message: str
    error_code: str | None = None
    points_earned: int | None = None
    total_points: int | None = None
    qr_id: str | None = None
    batch_id: str | None = None
    customer: dict | None = None

    @classmethod
    def rejected(cls, error: PointmanError) -> "RedemptionResult":
        return cls(success=False, message=error.message, error_code=error.code)


def load_code(batch_id: str, qr_id: str) -> QRCode:
    """
    Resolve (batch_id, qr_id) to a code of an active batch.

    Raises:
        PointmanError: BATCH_NOT_FOUND (missing or inactive batch) or
            CODE_NOT_FOUND.
    """
    try:
        batch = QRBatch.objects.get(batch_id=batch_id, is_active=True)
    except QRBatch.DoesNotExist:
        raise PointmanError("BATCH_NOT_FOUND", batch_id=batch_id)

    try:
        return batch.codes.select_related("batch").get(qr_id=qr_id)
    except QRCode.DoesNotExist:
        raise PointmanError("CODE_NOT_FOUND", batch_id=batch_id, qr_id=qr_id)


def claim(customer_id, qr_data: str) -> tuple[Customer, QRCode, ScanPayload]:
    """
    Redeem a scan payload for a customer.

    Returns:
        (customer with the new balance, consumed code, parsed payload)

    Raises:
        PointmanError: MALFORMED_PAYLOAD, BATCH_NOT_FOUND, CODE_NOT_FOUND,
            ALREADY_REDEEMED or CUSTOMER_NOT_FOUND. No state is changed.
        DatabaseError: Persistence failed; the transaction was rolled back.
    """
    payload = parse_scan_payload(qr_data)
    code = load_code(payload.batch_id, payload.qr_id)

    if code.is_scanned:
        raise PointmanError(
            "ALREADY_REDEEMED", batch_id=payload.batch_id, qr_id=payload.qr_id
        )

    with transaction.atomic():
        scanned_at = _mark_scanned(code)
        customer = _credit(customer_id, payload.points)
        QRCode.objects.filter(pk=code.pk).update(scanned_by=customer)

        PointTransaction.objects.create(
            customer=customer,
            transaction_type=TransactionType.SCAN,
            points=payload.points,
            balance_after=customer.points,
            description=f"QR scan {payload.batch_id}/{payload.qr_id}",
            reference=f"qr:{payload.batch_id}/{payload.qr_id}",
        )

    # Mirror what was written; nothing may fail between commit and the result
    code.is_scanned = True
    code.scanned_at = scanned_at
    code.scanned_by = customer

    logger.info(
        "QR %s/%s redeemed by customer %s: +%s (total %s)",
        payload.batch_id,
        payload.qr_id,
        customer.pk,
        payload.points,
        customer.points,
    )

    for receiver, response in qr_redeemed.send_robust(
        sender=QRCode, customer=customer, code=code, points=payload.points
    ):
        if isinstance(response, Exception):
            logger.error("qr_redeemed receiver %r failed: %s", receiver, response)

    return customer, code, payload


def redeem(customer_id, qr_data: str) -> RedemptionResult:
    """
    Redeem a scan payload, reporting every outcome as a RedemptionResult.

    Never raises: validation rejections carry their error code, and
    database failures are logged and reported as PERSISTENCE_FAILURE.
    """
    try:
        customer, code, payload = claim(customer_id, qr_data)
    except PointmanError as exc:
        logger.info("Redemption rejected for customer %s: %s", customer_id, exc)
        return RedemptionResult.rejected(exc)
    except DatabaseError:
        logger.exception("Redemption failed to persist for customer %s", customer_id)
        return RedemptionResult.rejected(
            PointmanError("PERSISTENCE_FAILURE", persistence=True)
        )

    return RedemptionResult(
        success=True,
        message=f"Successfully earned {payload.points} points!",
        points_earned=payload.points,
        total_points=customer.points,
        qr_id=code.qr_id,
        batch_id=payload.batch_id,
        customer=customer.summary(),
    )


def _mark_scanned(code: QRCode):
    """
    Consume the code and return the scan time.

    Raises if another request got there first.
    """
    now = timezone.now()
    marked = QRCode.objects.filter(
        pk=code.pk,
        is_scanned=False,
        batch__is_active=True,
    ).update(is_scanned=True, scanned_at=now)

    if marked:
        return now

    current = QRCode.objects.select_related("batch").get(pk=code.pk)
    if current.is_scanned:
        raise PointmanError(
            "ALREADY_REDEEMED", batch_id=current.batch.batch_id, qr_id=current.qr_id
        )
    # Batch was deactivated after the code was loaded
    raise PointmanError("BATCH_NOT_FOUND", batch_id=current.batch.batch_id)


def _credit(customer_id, points: int) -> Customer:
    """Atomically add points to the balance and return the fresh customer."""
    try:
        updated = Customer.objects.filter(pk=customer_id).update(
            points=F("points") + points
        )
    except (TypeError, ValueError):
        # customer_id is not a valid primary key
        updated = 0

    if not updated:
        raise PointmanError("CUSTOMER_NOT_FOUND", customer_id=customer_id)

    return Customer.objects.get(pk=customer_id)

"""Administrative points adjustment.

Overwrites a customer's balance directly. This is not a redemption: there
is no code involved and nothing is single-use. The new balance never
drops below zero.
"""

import logging
from dataclasses import dataclass

from django.db import transaction

from pointman.exceptions import PointmanError
from pointman.models import Customer, PointTransaction, TransactionType
from pointman.signals import points_adjusted

logger = logging.getLogger(__name__)

OPERATIONS = ("set", "add", "subtract")

_PAST_TENSE = {"set": "updated", "add": "added", "subtract": "subtracted"}


@dataclass
class AdjustmentResult:
    """Balance before and after an adjustment."""

    username: str
    name: str
    previous_points: int
    current_points: int
    operation: str

    @property
    def message(self) -> str:
        return f"Customer points {_PAST_TENSE[self.operation]} successfully"


def compute_balance(current: int, points: int, operation: str = "set") -> int:
    """
    New balance for an adjustment, floored at zero.

    Raises:
        PointmanError: INVALID_OPERATION for an unknown operation.
    """
    if operation == "set":
        return max(0, points)
    if operation == "add":
        return max(0, current + points)
    if operation == "subtract":
        return max(0, current - points)
    raise PointmanError("INVALID_OPERATION", operation=operation)


def get_balance(username: str) -> int | None:
    """Current balance, or None if the customer does not exist."""
    return (
        Customer.objects.filter(username=username.lower().strip())
        .values_list("points", flat=True)
        .first()
    )


def adjust(
    username: str,
    points: int,
    operation: str = "set",
    created_by: str = "",
) -> AdjustmentResult:
    """
    Set, add or subtract points on a customer's balance.

    Args:
        username: Customer username
        points: Amount (integer)
        operation: "set", "add" or "subtract"
        created_by: Who performed the adjustment

    Returns:
        AdjustmentResult with previous and current balance

    Raises:
        PointmanError: INVALID_POINTS, INVALID_OPERATION or CUSTOMER_NOT_FOUND
    """
    # bool is an int subclass
    if isinstance(points, bool) or not isinstance(points, int):
        raise PointmanError("INVALID_POINTS", points=points)
    if operation not in OPERATIONS:
        raise PointmanError("INVALID_OPERATION", operation=operation)

    with transaction.atomic():
        try:
            customer = Customer.objects.select_for_update().get(
                username=username.lower().strip()
            )
        except Customer.DoesNotExist:
            raise PointmanError("CUSTOMER_NOT_FOUND", username=username)

        previous = customer.points
        customer.points = compute_balance(previous, points, operation)
        customer.save(update_fields=["points", "updated_at"])

        PointTransaction.objects.create(
            customer=customer,
            transaction_type=TransactionType.ADJUST,
            points=customer.points - previous,
            balance_after=customer.points,
            description=f"Adjustment: {operation} {points}",
            created_by=created_by,
        )

    logger.info(
        "Points of %s adjusted (%s %s): %s -> %s",
        customer.username,
        operation,
        points,
        previous,
        customer.points,
    )
    points_adjusted.send(
        sender=Customer,
        customer=customer,
        previous=previous,
        current=customer.points,
        operation=operation,
    )

    return AdjustmentResult(
        username=customer.username,
        name=customer.name,
        previous_points=previous,
        current_points=customer.points,
        operation=operation,
    )

"""
Pointman public API.

REDEMPTION:
    ScanService.redeem(customer_id, qr_data) - Redeem a scan (never raises)
    ScanService.claim(customer_id, qr_data)  - Redeem a scan (raises PointmanError)
    ScanService.parse(qr_data)               - Parse a scan payload

ADJUSTMENT:
    PointsService.adjust(username, points, operation) - Set/add/subtract
    PointsService.get_balance(username)               - Current balance
"""

from pointman.models import Customer, QRCode
from pointman.payload import ScanPayload, parse_scan_payload
from pointman.services import points as points_service
from pointman.services import redemption
from pointman.services.points import AdjustmentResult
from pointman.services.redemption import RedemptionResult


class ScanService:
    """
    QR redemption API.

    Uses @classmethod for extensibility, consistent with PointsService.
    """

    @classmethod
    def parse(cls, qr_data: str) -> ScanPayload:
        """Parse scan text into (qr_id, batch_id, points)."""
        return parse_scan_payload(qr_data)

    @classmethod
    def claim(cls, customer_id, qr_data: str) -> tuple[Customer, QRCode, ScanPayload]:
        """
        Redeem a scan payload.

        Raises:
            PointmanError: On any rejection (no state change)
            DatabaseError: On persistence failure (rolled back)
        """
        return redemption.claim(customer_id, qr_data)

    @classmethod
    def redeem(cls, customer_id, qr_data: str) -> RedemptionResult:
        """
        Redeem a scan payload for a customer.

        Args:
            customer_id: Customer primary key
            qr_data: Raw multi-line scan text

        Returns:
            RedemptionResult (success or structured rejection)
        """
        return redemption.redeem(customer_id, qr_data)


class PointsService:
    """Administrative balance API."""

    @classmethod
    def adjust(
        cls,
        username: str,
        points: int,
        operation: str = "set",
        created_by: str = "",
    ) -> AdjustmentResult:
        """
        Adjust a customer's balance (floored at zero).

        Raises:
            PointmanError: INVALID_POINTS, INVALID_OPERATION, CUSTOMER_NOT_FOUND
        """
        return points_service.adjust(username, points, operation, created_by)

    @classmethod
    def get_balance(cls, username: str) -> int | None:
        """Current balance, or None for an unknown customer."""
        return points_service.get_balance(username)

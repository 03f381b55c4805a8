"""
Pointman JSON endpoints.

The host project authenticates the caller and sets ``request.customer_id``
(token issuance is not handled here). Administrative endpoints require a
staff ``request.user``.

Endpoints:
    POST  scan/                         - Redeem a QR scan
    GET   customers/<username>/points/  - Read a balance
    PATCH customers/<username>/points/  - Adjust a balance (staff)
    GET   schemes/                      - List schemes (paginated)
"""

from __future__ import annotations

import json
import logging

from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from pointman.exceptions import PointmanError
from pointman.services import catalog, points, redemption
from pointman.services import customer as customer_service

logger = logging.getLogger("pointman.views")

ERROR_STATUS = {
    "MALFORMED_PAYLOAD": 400,
    "ALREADY_REDEEMED": 400,
    "INVALID_POINTS": 400,
    "INVALID_OPERATION": 400,
    "BATCH_NOT_FOUND": 404,
    "CODE_NOT_FOUND": 404,
    "CUSTOMER_NOT_FOUND": 404,
    "PERSISTENCE_FAILURE": 500,
}


def _error(message: str, status: int) -> JsonResponse:
    return JsonResponse({"success": False, "message": message}, status=status)


def _parse_json(request) -> dict | None:
    try:
        data = json.loads(request.body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return data if isinstance(data, dict) else None


def _int_param(value, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@method_decorator(csrf_exempt, name="dispatch")
class ScanView(View):
    """
    POST endpoint redeeming a scanned QR code.

    Expects:
        - request.customer_id set by the authentication layer
        - JSON body {"qrData": "QR ID: ...\\nBatch ID: ...\\nPoints: ..."}
    """

    def get_customer_id(self, request):
        return getattr(request, "customer_id", None)

    def post(self, request):
        customer_id = self.get_customer_id(request)
        if customer_id is None:
            return _error("Access token required", 401)

        data = _parse_json(request)
        if data is None:
            return _error("Invalid JSON", 400)

        qr_data = data.get("qrData")
        if not qr_data:
            return _error("QR data is required", 400)

        try:
            result = redemption.redeem(customer_id, qr_data)
        except Exception:
            logger.exception("Scan failed for customer %s", customer_id)
            return _error("Internal server error", 500)

        if not result.success:
            return _error(result.message, ERROR_STATUS.get(result.error_code, 500))

        return JsonResponse(
            {
                "success": True,
                "message": result.message,
                "data": {
                    "pointsEarned": result.points_earned,
                    "totalPoints": result.total_points,
                    "qrId": result.qr_id,
                    "batchId": result.batch_id,
                    "customer": result.customer,
                },
            }
        )


@method_decorator(csrf_exempt, name="dispatch")
class CustomerPointsView(View):
    """Read (GET) or adjust (PATCH, staff only) a customer's balance."""

    def get(self, request, username):
        cust = customer_service.get_by_username(username)
        if not cust:
            return _error("Customer not found", 404)

        return JsonResponse(
            {
                "success": True,
                "data": {
                    "username": cust.username,
                    "name": cust.name,
                    "points": cust.points,
                },
            }
        )

    def patch(self, request, username):
        user = getattr(request, "user", None)
        if not (user and user.is_authenticated and user.is_staff):
            return _error("Staff access required", 403)

        data = _parse_json(request)
        if data is None:
            return _error("Invalid JSON", 400)

        try:
            result = points.adjust(
                username,
                data.get("points"),
                operation=data.get("operation") or "set",
                created_by=user.get_username(),
            )
        except PointmanError as exc:
            return _error(exc.message, ERROR_STATUS.get(exc.code, 400))
        except Exception:
            logger.exception("Points adjustment failed for %s", username)
            return _error("Internal server error", 500)

        return JsonResponse(
            {
                "success": True,
                "message": result.message,
                "data": {
                    "username": result.username,
                    "name": result.name,
                    "previousPoints": result.previous_points,
                    "currentPoints": result.current_points,
                    "operation": result.operation,
                },
            }
        )


class SchemeListView(View):
    """GET endpoint listing schemes, newest first."""

    def get(self, request):
        page = catalog.list_schemes(
            page=_int_param(request.GET.get("page"), 1),
            limit=_int_param(request.GET.get("limit"), 0) or None,
        )

        return JsonResponse(
            {
                "success": True,
                "data": [
                    {
                        "id": scheme.pk,
                        "title": scheme.title,
                        "description": scheme.description,
                        "image": scheme.image or None,
                        "pointsRequired": scheme.points_required,
                        "createdAt": scheme.created_at.isoformat(),
                    }
                    for scheme in page.items
                ],
                "pagination": {
                    "currentPage": page.current_page,
                    "totalPages": page.total_pages,
                    "totalSchemes": page.total_schemes,
                    "hasNextPage": page.has_next_page,
                    "hasPrevPage": page.has_prev_page,
                },
            }
        )

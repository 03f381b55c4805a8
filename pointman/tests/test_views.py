"""
Tests for the JSON endpoints.

- ScanView: success shape, status mapping, identity and body checks
- CustomerPointsView: read and staff-only adjustment
- SchemeListView: pagination
"""

import json
from unittest.mock import patch

import pytest
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.db import DatabaseError
from django.test import RequestFactory

from pointman.models import PointTransaction
from pointman.views import CustomerPointsView, ScanView, SchemeListView

pytestmark = pytest.mark.django_db


@pytest.fixture
def factory():
    return RequestFactory()


@pytest.fixture
def staff_user(db):
    return get_user_model().objects.create_user(
        username="admin", password="x", is_staff=True
    )


def _scan(factory, customer_id, body):
    raw = body if isinstance(body, bytes) else json.dumps(body).encode()
    request = factory.post("/api/scan/", data=raw, content_type="application/json")
    if customer_id is not None:
        request.customer_id = customer_id
    return ScanView.as_view()(request)


def _patch_points(factory, username, body, user):
    request = factory.patch(
        f"/api/customers/{username}/points/",
        data=json.dumps(body).encode(),
        content_type="application/json",
    )
    request.user = user
    return CustomerPointsView.as_view()(request, username=username)


class TestScanView:
    """POST scan/."""

    def test_success(self, factory, customer, batch, payload):
        response = _scan(factory, customer.pk, {"qrData": payload})

        assert response.status_code == 200
        data = json.loads(response.content)
        assert data["success"] is True
        assert data["message"] == "Successfully earned 50 points!"
        assert data["data"]["pointsEarned"] == 50
        assert data["data"]["totalPoints"] == 50
        assert data["data"]["qrId"] == "A1"
        assert data["data"]["batchId"] == "B1"
        assert data["data"]["customer"] == {
            "id": customer.pk,
            "name": "Maria Santos",
            "username": "maria",
            "points": 50,
        }

    def test_replay_returns_400(self, factory, customer, batch, payload):
        _scan(factory, customer.pk, {"qrData": payload})
        response = _scan(factory, customer.pk, {"qrData": payload})

        assert response.status_code == 400
        data = json.loads(response.content)
        assert data == {
            "success": False,
            "message": "This QR code has already been scanned and redeemed",
        }

    def test_malformed_returns_400(self, factory, customer, batch):
        response = _scan(factory, customer.pk, {"qrData": "QR ID: A1\nPoints: 50"})
        assert response.status_code == 400

    @pytest.mark.parametrize(
        "qr_data",
        [
            "QR ID: A1\nBatch ID: NOPE\nPoints: 50",
            "QR ID: A9\nBatch ID: B1\nPoints: 50",
        ],
    )
    def test_not_found_returns_404(self, factory, customer, batch, qr_data):
        response = _scan(factory, customer.pk, {"qrData": qr_data})
        assert response.status_code == 404

    def test_unknown_customer_returns_404(self, factory, batch, payload):
        response = _scan(factory, 999999, {"qrData": payload})

        assert response.status_code == 404
        assert json.loads(response.content)["message"] == "Customer not found"

    def test_missing_identity_returns_401(self, factory, batch, payload):
        response = _scan(factory, None, {"qrData": payload})
        assert response.status_code == 401
        assert json.loads(response.content) == {
            "success": False,
            "message": "Access token required",
        }

    def test_missing_qr_data_returns_400(self, factory, customer):
        response = _scan(factory, customer.pk, {})

        assert response.status_code == 400
        assert json.loads(response.content)["message"] == "QR data is required"

    def test_invalid_json_returns_400(self, factory, customer):
        response = _scan(factory, customer.pk, b"{not json")
        assert response.status_code == 400

    def test_persistence_failure_returns_500(self, factory, customer, batch, payload):
        with patch.object(
            PointTransaction.objects, "create", side_effect=DatabaseError("down")
        ):
            response = _scan(factory, customer.pk, {"qrData": payload})

        assert response.status_code == 500
        assert json.loads(response.content)["success"] is False


class TestCustomerPointsView:
    """GET/PATCH customers/<username>/points/."""

    def test_get(self, factory, customer):
        request = factory.get("/api/customers/maria/points/")
        response = CustomerPointsView.as_view()(request, username="maria")

        assert response.status_code == 200
        assert json.loads(response.content)["data"] == {
            "username": "maria",
            "name": "Maria Santos",
            "points": 0,
        }

    def test_get_unknown(self, factory, db):
        request = factory.get("/api/customers/nobody/points/")
        response = CustomerPointsView.as_view()(request, username="nobody")
        assert response.status_code == 404

    def test_patch_subtract(self, factory, customer, staff_user):
        _patch_points(factory, "maria", {"points": 30, "operation": "set"}, staff_user)
        response = _patch_points(
            factory, "maria", {"points": 100, "operation": "subtract"}, staff_user
        )

        assert response.status_code == 200
        data = json.loads(response.content)
        assert data["message"] == "Customer points subtracted successfully"
        assert data["data"] == {
            "username": "maria",
            "name": "Maria Santos",
            "previousPoints": 30,
            "currentPoints": 0,
            "operation": "subtract",
        }

    def test_patch_defaults_to_set(self, factory, customer, staff_user):
        response = _patch_points(factory, "maria", {"points": 12}, staff_user)

        assert json.loads(response.content)["data"]["operation"] == "set"
        assert json.loads(response.content)["data"]["currentPoints"] == 12

    def test_patch_requires_staff(self, factory, customer):
        response = _patch_points(factory, "maria", {"points": 12}, AnonymousUser())
        assert response.status_code == 403

    def test_patch_points_not_a_number(self, factory, customer, staff_user):
        response = _patch_points(factory, "maria", {"points": "12"}, staff_user)

        assert response.status_code == 400
        assert json.loads(response.content)["message"] == "Points must be a number"

    def test_patch_unknown_customer(self, factory, staff_user):
        response = _patch_points(factory, "nobody", {"points": 1}, staff_user)
        assert response.status_code == 404


class TestSchemeListView:
    """GET schemes/."""

    def _get(self, factory, query=""):
        request = factory.get(f"/api/schemes/{query}")
        return json.loads(SchemeListView.as_view()(request).content)

    def test_first_page(self, factory, schemes):
        data = self._get(factory)

        assert data["success"] is True
        assert len(data["data"]) == 10
        assert data["pagination"] == {
            "currentPage": 1,
            "totalPages": 2,
            "totalSchemes": 12,
            "hasNextPage": True,
            "hasPrevPage": False,
        }

    def test_newest_first(self, factory, schemes):
        data = self._get(factory)
        assert data["data"][0]["title"] == "Scheme 12"

    def test_custom_limit(self, factory, schemes):
        data = self._get(factory, "?page=3&limit=5")

        assert len(data["data"]) == 2
        assert data["pagination"]["hasNextPage"] is False
        assert data["pagination"]["hasPrevPage"] is True

    def test_invalid_params_fall_back(self, factory, schemes):
        data = self._get(factory, "?page=abc&limit=xyz")
        assert data["pagination"]["currentPage"] == 1
        assert len(data["data"]) == 10

    def test_image_returned_as_stored(self, factory, schemes):
        data = self._get(factory, "?limit=1")
        assert data["data"][0]["image"] == "/uploads/scheme-12.png"

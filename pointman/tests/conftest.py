"""Pytest fixtures for Pointman tests."""

import pytest

from pointman.models import Customer, QRBatch, QRCode, Scheme


@pytest.fixture
def customer(db):
    """Create a test customer with an empty balance."""
    cust = Customer(
        name="Maria Santos",
        city="Pune",
        username="maria",
        phone="9876543210",
        email="maria@example.com",
    )
    cust.set_password("secret123")
    cust.save()
    return cust


@pytest.fixture
def customer_b(db):
    """Create a second customer."""
    cust = Customer(
        name="Joao Silva",
        city="Mumbai",
        username="joao",
        phone="9123456780",
    )
    cust.set_password("secret456")
    cust.save()
    return cust


@pytest.fixture
def batch(db):
    """Active batch worth 50 points with three codes."""
    batch = QRBatch.objects.create(
        batch_id="B1",
        points=50,
        url="https://example.com/rewards",
    )
    for position, qr_id in enumerate(["A1", "A2", "A3"], start=1):
        QRCode.objects.create(
            batch=batch,
            qr_id=qr_id,
            position=position,
            qr_code_url=f"qr/B1/{qr_id}.png",
        )
    return batch


@pytest.fixture
def inactive_batch(db):
    """Inactive batch with one unscanned code."""
    batch = QRBatch.objects.create(batch_id="OFF", points=20, is_active=False)
    QRCode.objects.create(batch=batch, qr_id="Z1", qr_code_url="qr/OFF/Z1.png")
    return batch


@pytest.fixture
def payload():
    """Scan text for code A1 of batch B1."""
    return "QR ID: A1\nBatch ID: B1\nPoints: 50\nURL: https://example.com/rewards"


@pytest.fixture
def schemes(db):
    """Create 12 schemes."""
    return [
        Scheme.objects.create(
            title=f"Scheme {i}",
            description=f"Reward number {i}",
            image=f"/uploads/scheme-{i}.png",
            points_required=100 * i,
        )
        for i in range(1, 13)
    ]

"""
Pointman signals - public event API.

Emitted signals:
- customer_created: Emitted by services.customer.create()
- customer_updated: Emitted by services.customer.update()
- qr_redeemed: Emitted by services.redemption.claim() after commit
- points_adjusted: Emitted by services.points.adjust() after commit
"""

from django.dispatch import Signal

# Customer signals (emitted by services)
customer_created = Signal()  # sender=Customer
customer_updated = Signal()  # sender=Customer, changes=dict

# Points signals
qr_redeemed = Signal()  # sender=QRCode, customer, code, points
points_adjusted = Signal()  # sender=Customer, customer, previous, current, operation

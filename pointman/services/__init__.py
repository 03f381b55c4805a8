"""Pointman services.

- customer: registration, lookup, profile updates
- redemption: one-time QR code redemption
- points: administrative balance adjustment
- catalog: scheme listing
"""

from pointman.services import customer
from pointman.services import redemption
from pointman.services import points
from pointman.services import catalog

__all__ = ["customer", "redemption", "points", "catalog"]

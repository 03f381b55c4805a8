"""
Pointman configuration.

Usage in settings.py:
    POINTMAN = {
        "POINTS_LABEL": "Points",
        "SCHEMES_PAGE_SIZE": 20,
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class PointmanSettings:
    """Pointman configuration settings."""

    # Scan payload labels (matched case-insensitively)
    QR_ID_LABEL: str = "QR ID"
    BATCH_ID_LABEL: str = "Batch ID"
    POINTS_LABEL: str = "Points"

    # Prefix for generated QR ids (pointman_create_batch)
    QR_ID_PREFIX: str = "QR"

    # Scheme listing
    SCHEMES_PAGE_SIZE: int = 10
    SCHEMES_MAX_PAGE_SIZE: int = 100


def get_pointman_settings() -> PointmanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "POINTMAN", {})
    return PointmanSettings(**user_settings)


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_pointman_settings(), name)


pointman_settings = _LazySettings()

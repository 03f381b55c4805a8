"""
Scan payload parser.

A printed QR code carries a few ``Label: value`` lines:

    QR ID: QR-000123
    Batch ID: SUMMER-24
    Points: 50
    URL: https://example.com

Labels are matched case-insensitively on the text before the first colon
and may appear in any order. The first occurrence of a label wins and
unknown labels are ignored.
"""

import re
from typing import NamedTuple

from pointman.conf import pointman_settings
from pointman.exceptions import PointmanError

_INTEGER_RE = re.compile(r"^[+-]?[0-9]+$")

# Largest value a PositiveIntegerField column holds
MAX_POINTS = 2147483647


class ScanPayload(NamedTuple):
    qr_id: str
    batch_id: str
    points: int


def _normalize_label(label: str) -> str:
    return " ".join(label.split()).casefold()


def _collect_fields(text: str) -> dict[str, str]:
    fields: dict[str, str] = {}
    for line in text.splitlines():
        label, sep, value = line.partition(":")
        if not sep:
            continue
        # first match wins
        fields.setdefault(_normalize_label(label), value.strip())
    return fields


def parse_scan_payload(
    text,
    qr_id_label: str | None = None,
    batch_id_label: str | None = None,
    points_label: str | None = None,
) -> ScanPayload:
    """
    Extract (qr_id, batch_id, points) from raw scan text.

    Labels default to the POINTMAN settings.

    Raises:
        PointmanError: MALFORMED_PAYLOAD when a required line is missing or
            empty, or when points is not a positive base-10 integer.
    """
    if not isinstance(text, str) or not text.strip():
        raise PointmanError("MALFORMED_PAYLOAD", reason="empty payload")

    labels = {
        "qr_id": qr_id_label or pointman_settings.QR_ID_LABEL,
        "batch_id": batch_id_label or pointman_settings.BATCH_ID_LABEL,
        "points": points_label or pointman_settings.POINTS_LABEL,
    }

    fields = _collect_fields(text)
    values = {}
    for key, label in labels.items():
        value = fields.get(_normalize_label(label))
        if not value:
            raise PointmanError("MALFORMED_PAYLOAD", reason=f"missing {label}")
        values[key] = value

    if not _INTEGER_RE.match(values["points"]):
        raise PointmanError("MALFORMED_PAYLOAD", reason="points is not an integer")

    points = int(values["points"])
    if points <= 0:
        raise PointmanError("MALFORMED_PAYLOAD", reason="points must be positive")
    if points > MAX_POINTS:
        raise PointmanError("MALFORMED_PAYLOAD", reason="points out of range")

    return ScanPayload(values["qr_id"], values["batch_id"], points)

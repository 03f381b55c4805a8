"""QR batch and the codes it owns.

A QRCode has no life of its own: it is created with its batch, deleted with
it and is only ever looked up through (batch_id, qr_id). The one mutation
allowed on a code is the is_scanned False -> True transition performed by
pointman.services.redemption.
"""

import re

from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

_SIZE_RE = re.compile(r"^(\d+)x(\d+)$")


def validate_square_size(value: str) -> None:
    """WIDTHxHEIGHT, square, between 10 and 1000000 pixels."""
    match = _SIZE_RE.match(value or "")
    if not match:
        raise ValidationError(_("Size must be in format WIDTHxHEIGHT and be square"))
    width, height = int(match.group(1)), int(match.group(2))
    if width != height or not 10 <= width <= 1000000:
        raise ValidationError(_("Size must be in format WIDTHxHEIGHT and be square"))


class QRFormat(models.TextChoices):
    PNG = "png", "PNG"
    JPG = "jpg", "JPG"
    JPEG = "jpeg", "JPEG"
    SVG = "svg", "SVG"


class QRBatch(models.Model):
    """Group of single-use codes sharing a point value and rendering options."""

    batch_id = models.CharField(_("batch id"), max_length=100, unique=True)
    points = models.PositiveIntegerField(
        _("points"),
        help_text=_("Point value printed on every code of the batch"),
    )
    url = models.CharField(_("url"), max_length=500, blank=True)
    format = models.CharField(
        _("format"),
        max_length=4,
        choices=QRFormat.choices,
        default=QRFormat.PNG,
    )
    size = models.CharField(
        _("size"),
        max_length=20,
        default="200x200",
        validators=[validate_square_size],
    )
    is_active = models.BooleanField(
        _("active"),
        default=True,
        db_index=True,
        help_text=_("Codes of inactive batches cannot be redeemed"),
    )

    created_at = models.DateTimeField(_("created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        db_table = "pointman_qr_batch"
        verbose_name = _("QR batch")
        verbose_name_plural = _("QR batches")
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.batch_id} ({self.points}pts)"

    @property
    def total_count(self) -> int:
        return self.codes.count()

    @property
    def scanned_count(self) -> int:
        return self.codes.filter(is_scanned=True).count()

    def render_payload(self, code: "QRCode") -> str:
        """Scan text printed on a code of this batch."""
        from pointman.conf import pointman_settings

        lines = [
            f"{pointman_settings.QR_ID_LABEL}: {code.qr_id}",
            f"{pointman_settings.BATCH_ID_LABEL}: {self.batch_id}",
            f"{pointman_settings.POINTS_LABEL}: {self.points}",
        ]
        if self.url:
            lines.append(f"URL: {self.url}")
        return "\n".join(lines)


class QRCode(models.Model):
    """Single-use code inside a batch."""

    batch = models.ForeignKey(
        QRBatch,
        on_delete=models.CASCADE,
        related_name="codes",
        verbose_name=_("batch"),
    )
    qr_id = models.CharField(_("QR id"), max_length=100)
    position = models.PositiveIntegerField(_("position"), default=0)
    qr_code_url = models.CharField(
        _("QR image"),
        max_length=500,
        help_text=_("Reference to the rendered QR asset"),
    )

    is_scanned = models.BooleanField(_("scanned"), default=False)
    scanned_at = models.DateTimeField(_("scanned at"), null=True, blank=True)
    scanned_by = models.ForeignKey(
        "pointman.Customer",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="scanned_codes",
        verbose_name=_("scanned by"),
    )

    class Meta:
        db_table = "pointman_qr_code"
        verbose_name = _("QR code")
        verbose_name_plural = _("QR codes")
        ordering = ["batch", "position"]
        constraints = [
            models.UniqueConstraint(
                fields=["batch", "qr_id"],
                name="pointman_unique_qr_id_per_batch",
            ),
        ]

    def __str__(self):
        state = "scanned" if self.is_scanned else "unscanned"
        return f"{self.batch.batch_id}/{self.qr_id} ({state})"

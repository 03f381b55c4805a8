"""PointTransaction - append-only ledger of balance changes."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class TransactionType(models.TextChoices):
    SCAN = "scan", _("QR scan")
    ADJUST = "adjust", _("Adjustment")


class PointTransaction(models.Model):
    """
    Immutable record of a points balance change.

    Written in the same database transaction as the balance update.
    Rows are never modified or deleted.
    """

    customer = models.ForeignKey(
        "pointman.Customer",
        on_delete=models.CASCADE,
        related_name="point_transactions",
        verbose_name=_("customer"),
    )
    transaction_type = models.CharField(
        _("type"),
        max_length=20,
        choices=TransactionType.choices,
    )
    points = models.IntegerField(
        _("points"),
        help_text=_("Signed change applied to the balance"),
    )
    balance_after = models.PositiveIntegerField(_("balance after"))

    description = models.CharField(_("description"), max_length=210)
    reference = models.CharField(
        _("reference"),
        max_length=210,
        blank=True,
        help_text=_("External reference (e.g. qr:BATCH/QRID)"),
    )

    created_at = models.DateTimeField(_("created at"), auto_now_add=True, db_index=True)
    created_by = models.CharField(_("created by"), max_length=150, blank=True)

    class Meta:
        db_table = "pointman_point_transaction"
        verbose_name = _("point transaction")
        verbose_name_plural = _("point transactions")
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(
                fields=["customer", "-created_at"],
                name="pointman_tx_cust_created_idx",
            ),
        ]

    def __str__(self):
        sign = "+" if self.points > 0 else ""
        return f"{sign}{self.points}pts - {self.description}"

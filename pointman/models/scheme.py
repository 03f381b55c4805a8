"""Scheme model (reward catalog, read-only for redemption)."""

from django.core.validators import RegexValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

image_validator = RegexValidator(
    r"(?i)^(https?://|/|\./|\.\./).*\.(jpg|jpeg|png|gif|webp)$",
    _("Invalid image URL or path format"),
)


class Scheme(models.Model):
    """Catalog item customers can claim with accumulated points."""

    title = models.CharField(_("title"), max_length=200)
    description = models.TextField(_("description"), max_length=1000)
    image = models.CharField(
        _("image"),
        max_length=500,
        blank=True,
        validators=[image_validator],
    )
    points_required = models.PositiveIntegerField(_("points required"))

    created_at = models.DateTimeField(_("created at"), auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        verbose_name = _("scheme")
        verbose_name_plural = _("schemes")
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.title} ({self.points_required}pts)"

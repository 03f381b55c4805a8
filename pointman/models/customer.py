"""Customer model.

Customer.points is the redeemable balance. It is only mutated by:
    - QR redemption (pointman.services.redemption)
    - administrative adjustment (pointman.services.points)
Both write a PointTransaction ledger row in the same transaction.
"""

from django.contrib.auth.hashers import check_password, make_password
from django.core.validators import RegexValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

phone_validator = RegexValidator(
    r"^[0-9]{10}$",
    _("Please enter a valid 10-digit phone number"),
)


class Customer(models.Model):
    """Registered customer holding a points balance."""

    name = models.CharField(_("name"), max_length=200)
    city = models.CharField(_("city"), max_length=100)
    username = models.CharField(_("username"), max_length=150, unique=True)
    phone = models.CharField(
        _("phone"),
        max_length=10,
        unique=True,
        validators=[phone_validator],
    )
    # NULL (not "") when absent so the unique constraint ignores it
    email = models.EmailField(_("email"), unique=True, null=True, blank=True)
    password = models.CharField(_("password"), max_length=128)

    points = models.PositiveIntegerField(
        _("points"),
        default=0,
        help_text=_("Redeemable points balance"),
    )

    created_at = models.DateTimeField(_("created at"), auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        verbose_name = _("customer")
        verbose_name_plural = _("customers")
        ordering = ["username"]

    def __str__(self):
        return f"{self.name} (@{self.username})"

    def set_password(self, raw_password: str) -> None:
        self.password = make_password(raw_password)

    def check_password(self, raw_password: str) -> bool:
        return check_password(raw_password, self.password)

    def summary(self) -> dict:
        """Lightweight public view of the customer."""
        return {
            "id": self.pk,
            "name": self.name,
            "username": self.username,
            "points": self.points,
        }

    def save(self, *args, **kwargs):
        self.name = self.name.strip()
        self.city = self.city.strip()
        self.username = self.username.lower().strip()
        self.phone = self.phone.strip()

        if self.email:
            self.email = self.email.lower().strip()
        else:
            self.email = None

        super().save(*args, **kwargs)

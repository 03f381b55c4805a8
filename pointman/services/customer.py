"""Customer service - registration, lookup and profile updates.

Field normalization (trim, lower-case username/email) happens in
Customer.save(); this module validates input and enforces uniqueness with
readable error codes.
"""

import logging
import re

from django.db import IntegrityError, transaction

from pointman.exceptions import PointmanError
from pointman.models import Customer
from pointman.signals import customer_created, customer_updated

logger = logging.getLogger(__name__)

PHONE_RE = re.compile(r"^[0-9]{10}$")
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def get(customer_id) -> Customer | None:
    """Get customer by primary key."""
    try:
        return Customer.objects.get(pk=customer_id)
    except (Customer.DoesNotExist, TypeError, ValueError):
        return None


def get_by_username(username: str) -> Customer | None:
    """Get customer by username (case-insensitive)."""
    try:
        return Customer.objects.get(username=username.lower().strip())
    except Customer.DoesNotExist:
        return None


def find_by_identifier(identifier: str) -> Customer | None:
    """
    Find a customer by email, phone or username.

    Identifiers containing "@" are emails, 10 digits are phones,
    anything else is a username.
    """
    value = identifier.strip()
    if "@" in value:
        query = {"email": value.lower()}
    elif PHONE_RE.match(value):
        query = {"phone": value}
    else:
        query = {"username": value.lower()}
    return Customer.objects.filter(**query).first()


def _validate_phone(phone: str) -> str:
    phone = phone.strip()
    if not PHONE_RE.match(phone):
        raise PointmanError("INVALID_PHONE", phone=phone)
    return phone


def _validate_email(email: str) -> str:
    email = email.strip()
    if not EMAIL_RE.match(email):
        raise PointmanError("INVALID_EMAIL", email=email)
    return email.lower()


def _ensure_unique(field: str, value: str, exclude_pk=None) -> None:
    qs = Customer.objects.filter(**{field: value})
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    if qs.exists():
        raise PointmanError(
            "DUPLICATE_CUSTOMER",
            message=f"{field.capitalize()} already exists",
            field=field,
        )


def create(
    name: str,
    city: str,
    username: str,
    phone: str,
    password: str,
    email: str | None = None,
) -> Customer:
    """
    Register a new customer with a zero balance.

    Raises:
        PointmanError: MISSING_FIELDS, INVALID_PHONE, INVALID_EMAIL or
            DUPLICATE_CUSTOMER
    """
    if not all(v and v.strip() for v in (name, city, username, phone, password)):
        raise PointmanError("MISSING_FIELDS")

    phone = _validate_phone(phone)
    username = username.lower().strip()
    if email:
        email = _validate_email(email)
        _ensure_unique("email", email)
    _ensure_unique("phone", phone)
    _ensure_unique("username", username)

    cust = Customer(
        name=name,
        city=city,
        username=username,
        phone=phone,
        email=email or None,
        points=0,
    )
    cust.set_password(password.strip())

    try:
        with transaction.atomic():
            cust.save()
    except IntegrityError:
        # Lost a race against a concurrent registration
        raise PointmanError("DUPLICATE_CUSTOMER", username=username)

    logger.info("Customer %s registered", cust.username)
    customer_created.send(sender=Customer, customer=cust)
    return cust


UPDATABLE_FIELDS = {"name", "city", "email", "phone"}


def update(customer_id, **fields) -> Customer | None:
    """
    Update profile fields (only whitelisted fields are accepted).

    An empty email removes it. Returns None if the customer does not exist.
    """
    cust = get(customer_id)
    if not cust:
        return None

    changes = {}
    for key, value in fields.items():
        if key not in UPDATABLE_FIELDS or value is None:
            continue

        if key in ("name", "city"):
            if not value.strip():
                raise PointmanError(
                    "MISSING_FIELDS", message=f"{key.capitalize()} cannot be empty"
                )
            value = value.strip()
        elif key == "email":
            if value.strip():
                value = _validate_email(value)
                _ensure_unique("email", value, exclude_pk=cust.pk)
            else:
                value = None
        elif key == "phone":
            value = _validate_phone(value)
            _ensure_unique("phone", value, exclude_pk=cust.pk)

        old_value = getattr(cust, key)
        if old_value != value:
            changes[key] = {"old": old_value, "new": value}
        setattr(cust, key, value)

    cust.save()
    if changes:
        customer_updated.send(sender=Customer, customer=cust, changes=changes)
    return cust

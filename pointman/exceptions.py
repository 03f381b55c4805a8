"""Pointman exceptions."""


class PointmanError(Exception):
    """
    Structured exception for points operations.

    Usage:
        try:
            PointsService.adjust("maria", 10, operation="add")
        except PointmanError as e:
            if e.code == "CUSTOMER_NOT_FOUND":
                handle_not_found()
    """

    _default_messages = {
        "MALFORMED_PAYLOAD": (
            "Invalid QR code format. Expected format: QR ID, Batch ID, Points, URL"
        ),
        "BATCH_NOT_FOUND": "QR batch not found or inactive",
        "CODE_NOT_FOUND": "QR code not found in batch",
        "ALREADY_REDEEMED": "This QR code has already been scanned and redeemed",
        "CUSTOMER_NOT_FOUND": "Customer not found",
        "PERSISTENCE_FAILURE": "Internal server error",
        "INVALID_POINTS": "Points must be a number",
        "INVALID_OPERATION": "Operation must be one of: set, add, subtract",
        "MISSING_FIELDS": "Name, city, username, phone, and password are required",
        "INVALID_PHONE": "Please enter a valid 10-digit phone number",
        "INVALID_EMAIL": "Please enter a valid email address",
        "DUPLICATE_CUSTOMER": "Duplicate entry found",
    }

    def __init__(self, code: str, message: str | None = None, **data):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(f"[{code}] {self.message}")

    def as_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "data": self.data}

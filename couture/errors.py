class BillingError(Exception):
    """Base class for errors raised by the billing core."""


class ValidationError(BillingError, ValueError):
    """A single input field is malformed or out of range.

    ``field`` is a dotted path such as ``items[0].quantity`` or
    ``breakdown.fabric`` so callers can report the failure next to the input
    that caused it.
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class EncodingError(BillingError):
    """The QR image could not be rendered. The payment URI is still usable."""

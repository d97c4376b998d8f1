"""Custom exceptions for the tax engine."""

from decimal import Decimal


class TaxComputationError(Exception):
    """Base exception for tax computation errors."""


class ArithmeticOverflowError(TaxComputationError):
    """Raised when a dollar amount exceeds the representable cent range."""

    def __init__(self, amount: Decimal | int, limit: int):
        self.amount = amount
        self.limit = limit
        super().__init__(
            f"Amount out of range: {amount} (limit is +/-{limit} cents)"
        )


class InvalidAmountError(TaxComputationError):
    """Raised when a dollar amount is not a finite number."""

    def __init__(self, amount: object):
        self.amount = amount
        super().__init__(f"Not a finite dollar amount: {amount!r}")


class DataValidationError(TaxComputationError):
    """Raised when input data fails validation."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Validation error on '{field}': {message}")

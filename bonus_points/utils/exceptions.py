"""
Custom exceptions for bonus points business logic.

These exceptions carry a message and a machine-readable code so the
Flask error handlers can turn them into consistent API responses.
"""
from typing import Dict, List, Optional


class BonusPointsError(Exception):
    """Base exception for all bonus points business logic errors."""

    def __init__(self, message: str, code: str = "BONUS_POINTS_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class NotFoundError(BonusPointsError):
    """Resource not found."""

    def __init__(self, resource: str, identifier=None):
        message = f"{resource} not found"
        if identifier:
            message = f"{resource} with ID {identifier} not found"
        super().__init__(message, f"{resource.upper()}_NOT_FOUND")


class BonusNotFoundError(NotFoundError):
    """Bonus not found, or soft-deleted."""

    def __init__(self, identifier=None):
        super().__init__("Bonus", identifier)


class OrderNotFoundError(NotFoundError):
    """Order not found."""

    def __init__(self, identifier=None):
        super().__init__("Order", identifier)


class ProductNotFoundError(NotFoundError):
    """Product not found."""

    def __init__(self, identifier=None):
        super().__init__("Product", identifier)


class UserNotFoundError(NotFoundError):
    """User not found."""

    def __init__(self, identifier=None):
        super().__init__("User", identifier)


class ValidationError(BonusPointsError):
    """
    Invalid record data.

    Holds every violated field so callers can report all of them at once:
    ``{'name': ["can't be blank"], 'slug': ['has already been taken']}``
    """

    def __init__(self, errors: Dict[str, List[str]], resource: Optional[str] = None):
        self.errors = errors
        self.resource = resource
        fields = ', '.join(sorted(errors))
        message = f"{resource or 'Record'} is invalid: {fields}"
        super().__init__(message, "VALIDATION_ERROR")

    @property
    def fields(self) -> List[str]:
        return sorted(self.errors)


class AccrualError(BonusPointsError):
    """Crediting bonus points to a user's balance could not be persisted."""

    def __init__(self, message: str, order_id: int = None, user_id: int = None):
        self.order_id = order_id
        self.user_id = user_id
        super().__init__(message, "ACCRUAL_FAILED")

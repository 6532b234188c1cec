"""
Domain exceptions for the shoe inventory.

They carry a human readable message plus optional details and know nothing
about HTTP; ``shoeshop.main`` maps each family to a status code.
"""

from typing import Dict, Optional


class ShoeShopError(Exception):
    """Base exception for all inventory errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationFailed(ShoeShopError):
    """Raised when one or more input fields are malformed or out of range."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = errors
        super().__init__(message="Invalid input", details={"errors": errors})


class NotFoundError(ShoeShopError):
    """Raised when a referenced record does not exist."""


class ShoeNotFoundError(NotFoundError):
    def __init__(self, shoe_id: int):
        super().__init__(message=f"Shoe {shoe_id} not found", details={"shoe_id": shoe_id})


class VariationNotFoundError(NotFoundError):
    def __init__(self, variation_id: int):
        super().__init__(
            message=f"Color variation {variation_id} not found",
            details={"variation_id": variation_id},
        )


class BusinessRuleError(ShoeShopError):
    """Raised when a request is well formed but breaks an inventory rule."""


class DuplicateShoeError(BusinessRuleError):
    def __init__(self, name: str, brand: str):
        super().__init__(
            message=f"A shoe named '{name}' already exists for brand '{brand}'",
            details={"name": name, "brand": brand},
        )


class DuplicateVariationError(BusinessRuleError):
    def __init__(self, shoe_id: int, color_name: str):
        super().__init__(
            message=f"Color '{color_name}' already exists for shoe {shoe_id}",
            details={"shoe_id": shoe_id, "color_name": color_name},
        )


class ColorUnavailableError(BusinessRuleError):
    def __init__(self, shoe_id: int, color_name: str):
        super().__init__(
            message=f"Color '{color_name}' is not available for shoe {shoe_id}",
            details={"shoe_id": shoe_id, "color_name": color_name},
        )


class CurrentColorLockedError(BusinessRuleError):
    """Raised when a change would leave the shoe's current color without an active variation."""

    def __init__(self, shoe_id: int, color_name: str):
        super().__init__(
            message=f"Color '{color_name}' is the current color of shoe {shoe_id} and cannot be removed or deactivated",
            details={"shoe_id": shoe_id, "color_name": color_name},
        )

"""Domain error codes for the pricing module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    INVALID_COUPON_ID = "INVALID_COUPON_ID"
    COUPON_NOT_FOUND = "COUPON_NOT_FOUND"
    DUPLICATE_COUPON_CODE = "DUPLICATE_COUPON_CODE"
    COUPON_UNAVAILABLE = "COUPON_UNAVAILABLE"
    INVALID_COUPON = "INVALID_COUPON"


class CouponErrorCode(Enum):
    """Reasons a coupon is rejected at checkout.

    These are returned inside a validation result, never raised.
    """

    NOT_FOUND = "NotFound"
    INACTIVE = "Inactive"
    OUT_OF_WINDOW = "OutOfWindow"
    EXHAUSTED = "Exhausted"
    BELOW_MINIMUM = "BelowMinimum"
    NOT_APPLICABLE = "NotApplicable"
    INVALID_SELECTION = "InvalidSelection"
    INVALID_PROMOTION_CONFIG = "InvalidPromotionConfig"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidEventIdError(DomainError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class InvalidCouponIdError(DomainError):
    """Raised when a coupon ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_COUPON_ID,
            message="Invalid coupon ID format",
        )


class CouponNotFoundError(DomainError):
    """Raised when an administrative operation targets a missing coupon."""

    def __init__(self, coupon_id: str) -> None:
        super().__init__(
            code=ErrorCode.COUPON_NOT_FOUND,
            message="Coupon not found",
        )
        object.__setattr__(self, "coupon_id", coupon_id)


class DuplicateCouponCodeError(DomainError):
    """Raised when a coupon code already exists for the event."""

    def __init__(self, code: str) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_COUPON_CODE,
            message="Coupon code already exists for this event",
        )
        object.__setattr__(self, "coupon_code", code)


class CouponUnavailableError(DomainError):
    """Raised when the usage cap refuses a redemption."""

    def __init__(self, coupon_id: str) -> None:
        super().__init__(
            code=ErrorCode.COUPON_UNAVAILABLE,
            message="Coupon is no longer available",
        )
        object.__setattr__(self, "coupon_id", coupon_id)


class InvalidCouponError(DomainError):
    """Raised when a coupon change would break its usage cap or validity window."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_COUPON,
            message=reason,
        )

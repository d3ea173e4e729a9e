"""Domain models for fees, coupons and computed money breakdowns.

These are pure domain objects with no API input rules.
Django ORM models are in pricing/models.py (persistence layer).
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Self

from pricing.domain.errors import CouponErrorCode
from pricing.domain.value_objects import CouponId, EventId, Money, Rate, TicketTypeId


class PaymentMethod(Enum):
    PIX = "PIX"
    CARD = "CARD"
    OFFLINE = "OFFLINE"


class DiscountType(Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"
    CUSTOM = "custom"


class PromotionType(Enum):
    STANDARD = "standard"
    BUY_X_GET_Y = "buyXgetY"
    MIN_QUANTITY = "minQuantity"
    BUNDLE = "bundle"
    FIXED_BUNDLE = "fixedBundle"


def _decimal(value: Any) -> Decimal | None:
    if value is None:
        return None
    # JSON floats go through str() so 0.08 stays 0.08
    return Decimal(str(value))


def _rate(value: Any) -> Rate | None:
    number = _decimal(value)
    return None if number is None else Rate(number)


def _pick(data: Mapping[str, Any], snake: str, camel: str) -> Any:
    if snake in data:
        return data[snake]
    return data.get(camel)


@dataclass(frozen=True)
class FeeSettings:
    """Per-event fee configuration chosen by the producer."""

    use_custom_fees: bool = False
    pix_fee_percentage: Rate | None = None
    card_fee_percentage: Rate | None = None
    offline_fee: Rate | None = None
    absorb_fees: bool | None = None

    def custom_rate_for(self, method: PaymentMethod) -> Rate | None:
        return {
            PaymentMethod.PIX: self.pix_fee_percentage,
            PaymentMethod.CARD: self.card_fee_percentage,
            PaymentMethod.OFFLINE: self.offline_fee,
        }[method]


@dataclass(frozen=True)
class FeeSnapshot:
    """Fee decision frozen on a transaction at sale time."""

    absorb_fees: bool | None = None


@dataclass(frozen=True)
class TransactionMetadata:
    """Legacy per-transaction overrides recorded with a past sale."""

    fee_snapshot: FeeSnapshot | None = None
    absorb_fees: bool | None = None
    offline_fee: Rate | None = None
    fee_rate: Rate | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Self | None:
        """Parse stored metadata; accepts camelCase and snake_case keys."""
        if not data:
            return None
        snapshot = _pick(data, "fee_snapshot", "feeSnapshot")
        return cls(
            fee_snapshot=(
                FeeSnapshot(absorb_fees=_pick(snapshot, "absorb_fees", "absorbFees"))
                if snapshot is not None
                else None
            ),
            absorb_fees=_pick(data, "absorb_fees", "absorbFees"),
            offline_fee=_rate(_pick(data, "offline_fee", "offlineFee")),
            fee_rate=_rate(_pick(data, "fee_rate", "feeRate")),
        )


@dataclass(frozen=True)
class PromotionRules:
    """Parameters of a custom promotion; which fields matter depends on the type."""

    min_quantity: int | None = None
    target_quantity: int | None = None
    same_ticket_type: bool = False
    discounted_items: int | None = None
    discount_percentage: Decimal | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Self | None:
        if data is None:
            return None
        return cls(
            min_quantity=_pick(data, "min_quantity", "minQuantity"),
            target_quantity=_pick(data, "target_quantity", "targetQuantity"),
            same_ticket_type=bool(_pick(data, "same_ticket_type", "sameTicketType")),
            discounted_items=_pick(data, "discounted_items", "discountedItems"),
            discount_percentage=_decimal(
                _pick(data, "discount_percentage", "discountPercentage")
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "min_quantity": self.min_quantity,
            "target_quantity": self.target_quantity,
            "same_ticket_type": self.same_ticket_type,
            "discounted_items": self.discounted_items,
            "discount_percentage": (
                None if self.discount_percentage is None else str(self.discount_percentage)
            ),
        }


@dataclass(frozen=True)
class Coupon:
    """Domain representation of a Coupon."""

    id: CouponId
    event_id: EventId
    code: str
    discount_type: DiscountType
    discount_value: Decimal
    valid_from: datetime
    valid_until: datetime
    name: str = ""
    current_uses: int = 0
    max_uses: int | None = None
    is_active: bool = True
    min_purchase_amount: Money | None = None
    applicable_ticket_types: frozenset[TicketTypeId] = frozenset()
    promotion_type: PromotionType | None = None
    promotion_rules: PromotionRules | None = None
    created_by: str = ""

    def __post_init__(self) -> None:
        if self.valid_from > self.valid_until:
            raise ValueError("Coupon validity window is inverted")
        if self.current_uses < 0:
            raise ValueError("Coupon uses cannot be negative")
        if self.max_uses is not None and self.current_uses > self.max_uses:
            raise ValueError("Coupon uses exceed its cap")

    @property
    def is_exhausted(self) -> bool:
        return self.max_uses is not None and self.current_uses >= self.max_uses


@dataclass(frozen=True)
class TicketSelection:
    """Quantity of one ticket type in a purchase."""

    ticket_type_id: TicketTypeId
    quantity: int

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValueError("Selection quantity must be positive")


@dataclass(frozen=True)
class CouponValidation:
    """Outcome of checking a coupon against a purchase."""

    valid: bool
    error: CouponErrorCode | None = None
    message: str | None = None
    coupon: Coupon | None = None
    discount_amount: Money | None = None
    final_amount: Money | None = None
    clamped: bool = False

    @classmethod
    def rejected(cls, error: CouponErrorCode, message: str, coupon: Coupon | None = None) -> Self:
        return cls(valid=False, error=error, message=message, coupon=coupon)

    @property
    def error_code(self) -> str | None:
        return None if self.error is None else self.error.value


@dataclass(frozen=True)
class MoneyBreakdown:
    """Split of a sale between buyer, producer and platform.

    Amounts are Decimals quantized to cents. total_paid == producer_amount
    + platform_fee holds exactly. platform_fee may be negative when the
    producer absorbs fees and grants a discount larger than the fee.
    """

    subtotal: Decimal
    discount_amount: Decimal
    fee: Decimal
    total_paid: Decimal
    producer_amount: Decimal
    platform_fee: Decimal
    original_amount: Decimal
    rate: Rate
    absorbs_fees: bool


@dataclass(frozen=True)
class Quote:
    """Checkout price: the breakdown plus how the coupon fared, if one was given."""

    breakdown: MoneyBreakdown
    coupon_validation: CouponValidation | None = None

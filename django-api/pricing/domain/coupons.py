"""Coupon eligibility checks and discount computation.

``CouponEngine.validate`` never raises for business conditions; every
rejection comes back as a ``CouponValidation`` with an error code and a
message that can be shown to the buyer.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from pricing.domain.errors import CouponErrorCode
from pricing.domain.models import (
    Coupon,
    CouponValidation,
    DiscountType,
    PromotionRules,
    PromotionType,
    TicketSelection,
)
from pricing.domain.value_objects import Money

HUNDRED = Decimal(100)


class PromotionRejected(Exception):
    """Internal signal from a promotion handler; turned into a result."""

    def __init__(self, error: CouponErrorCode, message: str) -> None:
        super().__init__(message)
        self.error = error
        self.message = message


def _invalid_config() -> PromotionRejected:
    return PromotionRejected(
        CouponErrorCode.INVALID_PROMOTION_CONFIG, "Invalid promotion configuration"
    )


def _total_quantity(selections: Sequence[TicketSelection]) -> int:
    return sum(selection.quantity for selection in selections)


def _has_exact_quantity(selections: Sequence[TicketSelection], quantity: int) -> bool:
    return any(selection.quantity == quantity for selection in selections)


def buy_x_get_y(
    rules: PromotionRules, amount: Decimal, selections: Sequence[TicketSelection]
) -> Decimal:
    """Buy ``min_quantity``, get ``target_quantity``: the difference is free."""
    if not rules.min_quantity or not rules.target_quantity:
        raise _invalid_config()
    target = rules.target_quantity
    if rules.same_ticket_type:
        if not _has_exact_quantity(selections, target):
            raise PromotionRejected(
                CouponErrorCode.INVALID_SELECTION,
                f"Select exactly {target} tickets of the same type for this promotion",
            )
    elif _total_quantity(selections) < target:
        raise PromotionRejected(
            CouponErrorCode.INVALID_SELECTION,
            f"Select at least {target} tickets for this promotion",
        )
    return amount * (target - rules.min_quantity) / target


def min_quantity(
    rules: PromotionRules, amount: Decimal, selections: Sequence[TicketSelection]
) -> Decimal:
    """Percentage off once the purchase reaches ``min_quantity`` tickets."""
    if not rules.min_quantity or not rules.discount_percentage:
        raise _invalid_config()
    if _total_quantity(selections) < rules.min_quantity:
        raise PromotionRejected(
            CouponErrorCode.INVALID_SELECTION,
            f"Select at least {rules.min_quantity} tickets for this promotion",
        )
    return amount * rules.discount_percentage / HUNDRED


def fixed_bundle(
    rules: PromotionRules, amount: Decimal, selections: Sequence[TicketSelection]
) -> Decimal:
    """Percentage off when one ticket type is bought in exactly ``target_quantity``."""
    if not rules.target_quantity or not rules.discount_percentage:
        raise _invalid_config()
    if not _has_exact_quantity(selections, rules.target_quantity):
        raise PromotionRejected(
            CouponErrorCode.INVALID_SELECTION,
            f"Select exactly {rules.target_quantity} tickets of the same type "
            "for this promotion",
        )
    return amount * rules.discount_percentage / HUNDRED


PromotionHandler = Callable[[PromotionRules, Decimal, Sequence[TicketSelection]], Decimal]

PROMOTION_HANDLERS: dict[PromotionType, PromotionHandler] = {
    PromotionType.BUY_X_GET_Y: buy_x_get_y,
    PromotionType.MIN_QUANTITY: min_quantity,
    PromotionType.FIXED_BUNDLE: fixed_bundle,
}


@dataclass(frozen=True)
class LegacyPromotion:
    promotion_type: PromotionType
    rules: PromotionRules


# Codes issued before promotions were data-driven.
LEGACY_PROMOTIONS: dict[str, LegacyPromotion] = {
    "LEVE4": LegacyPromotion(
        promotion_type=PromotionType.FIXED_BUNDLE,
        rules=PromotionRules(target_quantity=4, discount_percentage=Decimal(25)),
    ),
}


class CouponEngine:
    """Validate coupons and compute their discounts."""

    def __init__(
        self,
        handlers: dict[PromotionType, PromotionHandler] | None = None,
        legacy_promotions: dict[str, LegacyPromotion] | None = None,
    ) -> None:
        self._handlers = PROMOTION_HANDLERS if handlers is None else handlers
        self._legacy = LEGACY_PROMOTIONS if legacy_promotions is None else legacy_promotions

    def validate(
        self,
        coupon: Coupon | None,
        purchase_amount: Money,
        selections: Sequence[TicketSelection],
        now: datetime,
    ) -> CouponValidation:
        if coupon is None:
            return CouponValidation.rejected(CouponErrorCode.NOT_FOUND, "Coupon not found")

        if not coupon.is_active:
            return CouponValidation.rejected(
                CouponErrorCode.INACTIVE, "Coupon is inactive", coupon
            )

        if now < coupon.valid_from or now > coupon.valid_until:
            return CouponValidation.rejected(
                CouponErrorCode.OUT_OF_WINDOW, "Coupon is outside its validity period", coupon
            )

        if coupon.is_exhausted:
            return CouponValidation.rejected(
                CouponErrorCode.EXHAUSTED, "Coupon has no uses left", coupon
            )

        minimum = coupon.min_purchase_amount
        if minimum is not None and purchase_amount.amount < minimum.amount:
            return CouponValidation.rejected(
                CouponErrorCode.BELOW_MINIMUM, f"Minimum purchase amount: {minimum}", coupon
            )

        if coupon.applicable_ticket_types and not any(
            selection.ticket_type_id in coupon.applicable_ticket_types
            for selection in selections
        ):
            return CouponValidation.rejected(
                CouponErrorCode.NOT_APPLICABLE,
                "Coupon does not apply to the selected tickets",
                coupon,
            )

        try:
            raw = self._discount(coupon, purchase_amount.amount, selections)
        except PromotionRejected as exc:
            return CouponValidation.rejected(exc.error, exc.message, coupon)

        discount = min(max(raw, Decimal(0)), purchase_amount.amount)
        discount_amount = Money.of(discount)
        return CouponValidation(
            valid=True,
            coupon=coupon,
            discount_amount=discount_amount,
            final_amount=Money.of(purchase_amount.amount - discount_amount.amount),
            clamped=discount != raw,
        )

    def _discount(
        self, coupon: Coupon, amount: Decimal, selections: Sequence[TicketSelection]
    ) -> Decimal:
        if (
            coupon.discount_type is DiscountType.CUSTOM
            and coupon.promotion_type is not None
            and coupon.promotion_rules is not None
        ):
            handler = self._handlers.get(coupon.promotion_type)
            if handler is not None:
                return handler(coupon.promotion_rules, amount, selections)

        legacy = self._legacy.get(coupon.code)
        if legacy is not None:
            return self._handlers[legacy.promotion_type](legacy.rules, amount, selections)

        if coupon.discount_type is DiscountType.PERCENTAGE:
            return amount * coupon.discount_value / HUNDRED
        return coupon.discount_value

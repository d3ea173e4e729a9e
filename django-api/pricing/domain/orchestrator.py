"""Composition of coupon discounts with fee math.

This is the entry point the service layer calls; it holds no state beyond
the injected engines and can be shared across threads.
"""

from collections.abc import Sequence
from datetime import datetime

from pricing.domain.coupons import CouponEngine
from pricing.domain.fees import FeeResolver, ResolvedFee
from pricing.domain.models import (
    Coupon,
    CouponValidation,
    FeeSettings,
    MoneyBreakdown,
    PaymentMethod,
    Quote,
    TicketSelection,
    TransactionMetadata,
)
from pricing.domain.money import MoneyEngine
from pricing.domain.value_objects import Money


class PricingOrchestrator:
    def __init__(self, fee_resolver: FeeResolver, coupon_engine: CouponEngine | None = None) -> None:
        self._fees = fee_resolver
        self._coupons = coupon_engine or CouponEngine()

    def resolve_rate(
        self,
        method: PaymentMethod,
        settings: FeeSettings | None = None,
        metadata: TransactionMetadata | None = None,
    ) -> ResolvedFee:
        return self._fees.resolve_rate(method, settings, metadata)

    def price_sale(
        self,
        subtotal: Money,
        method: PaymentMethod,
        settings: FeeSettings | None = None,
        metadata: TransactionMetadata | None = None,
        discount_amount: Money | None = None,
    ) -> MoneyBreakdown:
        fee = self.resolve_rate(method, settings, metadata)
        return MoneyEngine(fee, discount_amount).breakdown(subtotal)

    def validate_coupon(
        self,
        coupon: Coupon | None,
        purchase_amount: Money,
        selections: Sequence[TicketSelection],
        now: datetime,
    ) -> CouponValidation:
        return self._coupons.validate(coupon, purchase_amount, selections, now)

    def quote(
        self,
        subtotal: Money,
        method: PaymentMethod,
        selections: Sequence[TicketSelection],
        now: datetime,
        settings: FeeSettings | None = None,
        metadata: TransactionMetadata | None = None,
        coupon: Coupon | None = None,
        coupon_requested: bool = False,
    ) -> Quote:
        """Price a checkout, applying the coupon only when it validates.

        ``coupon_requested`` marks that the buyer entered a code, so a
        missing coupon is reported as not found instead of ignored.
        """
        validation = None
        discount = None
        if coupon is not None or coupon_requested:
            validation = self.validate_coupon(coupon, subtotal, selections, now)
            if validation.valid:
                discount = validation.discount_amount
        breakdown = self.price_sale(subtotal, method, settings, metadata, discount)
        return Quote(breakdown=breakdown, coupon_validation=validation)

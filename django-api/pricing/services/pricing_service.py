"""Pricing service - checkout pricing and coupon redemption.

Services:
- Depend only on interfaces (stores)
- Parse identifiers and map them to domain errors
- Delegate all arithmetic to the domain orchestrator
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from datetime import datetime
from typing import Any

from django.utils import timezone

from pricing.domain import (
    CouponId,
    CouponValidation,
    EventId,
    Money,
    MoneyBreakdown,
    PaymentMethod,
    PricingOrchestrator,
    Quote,
    TicketSelection,
    TransactionMetadata,
)
from pricing.domain.errors import (
    CouponUnavailableError,
    InvalidCouponIdError,
    InvalidEventIdError,
)
from pricing.stores.interfaces import CouponStore, FeeSettingsStore

logger = logging.getLogger(__name__)


def parse_event_id(event_id: str) -> EventId:
    try:
        return EventId.from_string(event_id)
    except ValueError as exc:
        raise InvalidEventIdError() from exc


def parse_coupon_id(coupon_id: str) -> CouponId:
    try:
        return CouponId.from_string(coupon_id)
    except ValueError as exc:
        raise InvalidCouponIdError() from exc


class PricingService:
    """Service for checkout pricing operations."""

    def __init__(
        self,
        coupons: CouponStore,
        fee_settings: FeeSettingsStore,
        orchestrator: PricingOrchestrator,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._coupons = coupons
        self._fee_settings = fee_settings
        self._orchestrator = orchestrator
        self._clock = clock

    def validate_coupon(
        self,
        event_id: str,
        code: str,
        purchase_amount: Money,
        selections: Sequence[TicketSelection],
    ) -> CouponValidation:
        """Check a coupon code against a purchase.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
        """
        event = parse_event_id(event_id)
        coupon = self._coupons.get_by_code(event, code)
        result = self._orchestrator.validate_coupon(
            coupon, purchase_amount, selections, self._clock()
        )
        self._log_validation(code, result)
        return result

    def quote(
        self,
        event_id: str,
        subtotal: Money,
        method: PaymentMethod,
        selections: Sequence[TicketSelection],
        code: str | None = None,
    ) -> Quote:
        """Price a checkout for an event, with an optional coupon code.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
        """
        event = parse_event_id(event_id)
        coupon = self._coupons.get_by_code(event, code) if code else None
        quote = self._orchestrator.quote(
            subtotal,
            method,
            selections,
            self._clock(),
            settings=self._fee_settings.get_for_event(event),
            coupon=coupon,
            coupon_requested=bool(code),
        )
        if quote.coupon_validation is not None:
            self._log_validation(code, quote.coupon_validation)
        return quote

    def price_transaction(
        self,
        event_id: str,
        subtotal: Money,
        method: PaymentMethod,
        discount_amount: Money | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> MoneyBreakdown:
        """Recompute the split of a recorded sale, honouring its stored fee metadata.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
        """
        event = parse_event_id(event_id)
        return self._orchestrator.price_sale(
            subtotal,
            method,
            settings=self._fee_settings.get_for_event(event),
            metadata=TransactionMetadata.from_dict(metadata),
            discount_amount=discount_amount,
        )

    def redeem_coupon(self, coupon_id: str) -> None:
        """Consume one use of a coupon after a successful checkout.

        Raises:
            InvalidCouponIdError: If the coupon_id is not a valid UUID.
            CouponUnavailableError: If the coupon is missing or at its cap.
        """
        if not self._coupons.increment_uses(parse_coupon_id(coupon_id)):
            logger.warning("Coupon %s redemption refused", coupon_id)
            raise CouponUnavailableError(coupon_id)
        logger.info("Coupon %s redeemed", coupon_id)

    @staticmethod
    def _log_validation(code: str | None, result: CouponValidation) -> None:
        if not result.valid:
            logger.info("Coupon %r rejected: %s", code, result.error_code)
        elif result.clamped:
            logger.warning("Coupon %r discount clamped to the purchase amount", code)

"""Coupon administration service."""

import logging
import uuid
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime
from decimal import Decimal

from pricing.domain import (
    Coupon,
    CouponId,
    DiscountType,
    Money,
    PromotionRules,
    PromotionType,
    TicketTypeId,
)
from pricing.domain.errors import (
    CouponNotFoundError,
    DuplicateCouponCodeError,
    InvalidCouponError,
)
from pricing.services.pricing_service import parse_coupon_id, parse_event_id
from pricing.stores.interfaces import CouponStore

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset(
    {
        "name",
        "discount_type",
        "discount_value",
        "valid_until",
        "max_uses",
        "is_active",
        "min_purchase_amount",
        "applicable_ticket_types",
        "promotion_type",
        "promotion_rules",
    }
)


class CouponService:
    """Service for creating and managing event coupons."""

    def __init__(self, store: CouponStore) -> None:
        self._store = store

    def create_coupon(
        self,
        event_id: str,
        code: str,
        discount_type: DiscountType,
        discount_value: Decimal,
        valid_from: datetime,
        valid_until: datetime,
        name: str = "",
        max_uses: int | None = None,
        min_purchase_amount: Money | None = None,
        applicable_ticket_types: Iterable[TicketTypeId] = (),
        promotion_type: PromotionType | None = None,
        promotion_rules: PromotionRules | None = None,
        created_by: str = "",
    ) -> Coupon:
        """Create an active coupon with no uses.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            DuplicateCouponCodeError: If the event already has this code.
            ValueError: If the validity window is inverted or the cap is negative.
        """
        event = parse_event_id(event_id)
        if self._store.code_exists(event, code):
            raise DuplicateCouponCodeError(code)
        coupon = Coupon(
            id=CouponId(uuid.uuid4()),
            event_id=event,
            code=code,
            name=name,
            discount_type=discount_type,
            discount_value=discount_value,
            valid_from=valid_from,
            valid_until=valid_until,
            max_uses=max_uses,
            min_purchase_amount=min_purchase_amount,
            applicable_ticket_types=frozenset(applicable_ticket_types),
            promotion_type=promotion_type,
            promotion_rules=promotion_rules,
            created_by=created_by,
        )
        created = self._store.add(coupon)
        logger.info("Created coupon %s for event %s", code, event.value)
        return created

    def list_event_coupons(self, event_id: str) -> list[Coupon]:
        """Return all coupons of an event.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
        """
        return self._store.list_for_event(parse_event_id(event_id))

    def set_active(self, coupon_id: str, active: bool) -> None:
        """Raises CouponNotFoundError if the coupon does not exist."""
        if not self._store.set_active(parse_coupon_id(coupon_id), active):
            raise CouponNotFoundError(coupon_id)
        logger.info("Coupon %s %s", coupon_id, "activated" if active else "deactivated")

    def update_coupon(self, coupon_id: str, **changes) -> Coupon:
        """Apply changes to a coupon's editable fields.

        The code, event and start of the window are fixed once created.
        Ticket types are given as an iterable of TicketTypeId.

        Raises:
            InvalidCouponIdError: If the coupon_id is not a valid UUID.
            CouponNotFoundError: If the coupon does not exist.
            InvalidCouponError: If the change would put the usage count over
                max_uses or end the window before it starts.
            TypeError: If a field is unknown or not editable.
        """
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise TypeError(f"Cannot update coupon fields: {', '.join(sorted(unknown))}")
        if "applicable_ticket_types" in changes:
            changes["applicable_ticket_types"] = frozenset(changes["applicable_ticket_types"])

        coupon_key = parse_coupon_id(coupon_id)
        coupon = self._store.get(coupon_key)
        if coupon is None:
            raise CouponNotFoundError(coupon_id)
        try:
            updated = self._store.update(replace(coupon, **changes))
        except ValueError as exc:
            raise InvalidCouponError(str(exc)) from exc
        if updated is None:
            raise CouponNotFoundError(coupon_id)
        logger.info("Updated coupon %s: %s", coupon_id, ", ".join(sorted(changes)))
        return updated

    def delete_coupon(self, coupon_id: str) -> None:
        """Raises CouponNotFoundError if the coupon does not exist."""
        if not self._store.delete(parse_coupon_id(coupon_id)):
            raise CouponNotFoundError(coupon_id)
        logger.info("Deleted coupon %s", coupon_id)

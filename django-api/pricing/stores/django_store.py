"""Django ORM implementation of the pricing stores."""

from dataclasses import replace
from decimal import Decimal

from django.db import transaction
from django.db.models import F, Q

from pricing import models
from pricing.domain import (
    Coupon,
    CouponId,
    DiscountType,
    EventId,
    FeeSettings,
    Money,
    PromotionRules,
    PromotionType,
    Rate,
    SaleRecord,
    TicketTypeId,
)
from pricing.stores.interfaces import CouponStore, FeeSettingsStore, SalesStore

COUNTED_SALE_STATUSES = (models.Sale.Status.VALID, models.Sale.Status.USED)


def _rate(value: Decimal | None) -> Rate | None:
    return None if value is None else Rate(value)


def _coupon_to_domain(row: models.Coupon) -> Coupon:
    # Rows written before the check constraints existed can break the cap or
    # window; they read back as exhausted or expired rather than failing.
    current_uses = row.current_uses if row.max_uses is None else min(row.current_uses, row.max_uses)
    return Coupon(
        id=CouponId(row.id),
        event_id=EventId(row.event_id),
        code=row.code,
        name=row.name,
        discount_type=DiscountType(row.discount_type),
        discount_value=row.discount_value,
        valid_from=row.valid_from,
        valid_until=max(row.valid_from, row.valid_until),
        current_uses=current_uses,
        max_uses=row.max_uses,
        is_active=row.is_active,
        min_purchase_amount=(
            None if row.min_purchase_amount is None else Money(row.min_purchase_amount)
        ),
        applicable_ticket_types=frozenset(
            TicketTypeId.from_string(value) for value in row.applicable_ticket_types or ()
        ),
        promotion_type=PromotionType(row.promotion_type) if row.promotion_type else None,
        promotion_rules=PromotionRules.from_dict(row.promotion_rules),
        created_by=row.created_by,
    )


def _editable_fields(coupon: Coupon) -> dict:
    return {
        "name": coupon.name,
        "discount_type": coupon.discount_type.value,
        "discount_value": coupon.discount_value,
        "max_uses": coupon.max_uses,
        "valid_from": coupon.valid_from,
        "valid_until": coupon.valid_until,
        "is_active": coupon.is_active,
        "min_purchase_amount": (
            None if coupon.min_purchase_amount is None else coupon.min_purchase_amount.amount
        ),
        "applicable_ticket_types": sorted(
            str(ticket_type.value) for ticket_type in coupon.applicable_ticket_types
        ),
        "promotion_type": None if coupon.promotion_type is None else coupon.promotion_type.value,
        "promotion_rules": (
            None if coupon.promotion_rules is None else coupon.promotion_rules.to_dict()
        ),
    }


class DjangoCouponStore(CouponStore):
    """Database-backed coupon store using Django ORM."""

    def get(self, coupon_id: CouponId) -> Coupon | None:
        row = models.Coupon.objects.filter(pk=coupon_id.value).first()
        return None if row is None else _coupon_to_domain(row)

    def get_by_code(self, event_id: EventId, code: str) -> Coupon | None:
        row = models.Coupon.objects.filter(event_id=event_id.value, code=code).first()
        return None if row is None else _coupon_to_domain(row)

    def list_for_event(self, event_id: EventId) -> list[Coupon]:
        rows = models.Coupon.objects.filter(event_id=event_id.value)
        return [_coupon_to_domain(row) for row in rows]

    def code_exists(self, event_id: EventId, code: str) -> bool:
        return models.Coupon.objects.filter(event_id=event_id.value, code=code).exists()

    def add(self, coupon: Coupon) -> Coupon:
        row = models.Coupon.objects.create(
            id=coupon.id.value,
            event_id=coupon.event_id.value,
            code=coupon.code,
            current_uses=coupon.current_uses,
            created_by=coupon.created_by,
            **_editable_fields(coupon),
        )
        return _coupon_to_domain(row)

    def update(self, coupon: Coupon) -> Coupon | None:
        with transaction.atomic():
            row = models.Coupon.objects.select_for_update().filter(pk=coupon.id.value).first()
            if row is None:
                return None
            # Redemptions may have landed since the caller read the coupon.
            replace(coupon, current_uses=row.current_uses)
            fields = _editable_fields(coupon)
            for name, value in fields.items():
                setattr(row, name, value)
            row.save(update_fields=list(fields))
        return _coupon_to_domain(row)

    def delete(self, coupon_id: CouponId) -> bool:
        deleted, _ = models.Coupon.objects.filter(pk=coupon_id.value).delete()
        return deleted == 1

    def set_active(self, coupon_id: CouponId, active: bool) -> bool:
        updated = models.Coupon.objects.filter(pk=coupon_id.value).update(is_active=active)
        return updated == 1

    def increment_uses(self, coupon_id: CouponId) -> bool:
        # Single conditional UPDATE: the cap check and the increment happen
        # in one statement, so the database serializes concurrent redemptions.
        updated = (
            models.Coupon.objects.filter(pk=coupon_id.value)
            .filter(Q(max_uses__isnull=True) | Q(current_uses__lt=F("max_uses")))
            .update(current_uses=F("current_uses") + 1)
        )
        return updated == 1


class DjangoFeeSettingsStore(FeeSettingsStore):
    """Database-backed fee settings store using Django ORM."""

    def get_for_event(self, event_id: EventId) -> FeeSettings | None:
        row = models.EventFeeSettings.objects.filter(event_id=event_id.value).first()
        if row is None:
            return None
        return FeeSettings(
            use_custom_fees=row.use_custom_fees,
            pix_fee_percentage=_rate(row.pix_fee_percentage),
            card_fee_percentage=_rate(row.card_fee_percentage),
            offline_fee=_rate(row.offline_fee),
            absorb_fees=row.absorb_fees,
        )


class DjangoSalesStore(SalesStore):
    """Database-backed sales store using Django ORM."""

    def list_sales(self, event_id: EventId, promoter_code: str | None = None) -> list[SaleRecord]:
        rows = models.Sale.objects.filter(event_id=event_id.value, status__in=COUNTED_SALE_STATUSES)
        if promoter_code:
            rows = rows.filter(promoter_code=promoter_code)
        return [
            SaleRecord(
                promoter_code=row.promoter_code or None,
                quantity=row.quantity,
                total_amount=row.total_amount,
            )
            for row in rows
        ]

"""Pytest configuration and shared fixtures."""

import uuid
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from pricing.domain import (
    Coupon,
    CouponId,
    DiscountType,
    EventId,
    FeeSettings,
    SaleRecord,
    TicketTypeId,
)
from pricing.stores.interfaces import CouponStore, FeeSettingsStore, SalesStore

NOW = datetime(2025, 3, 15, 20, 0, tzinfo=timezone.utc)


class InMemoryCouponStore(CouponStore):
    """Dict-backed coupon store for service tests."""

    def __init__(self, coupons: list[Coupon] | None = None) -> None:
        self.coupons: dict[CouponId, Coupon] = {c.id: c for c in coupons or []}

    def get(self, coupon_id):
        return self.coupons.get(coupon_id)

    def get_by_code(self, event_id, code):
        return next(
            (c for c in self.coupons.values() if c.event_id == event_id and c.code == code),
            None,
        )

    def list_for_event(self, event_id):
        return [c for c in self.coupons.values() if c.event_id == event_id]

    def code_exists(self, event_id, code):
        return self.get_by_code(event_id, code) is not None

    def add(self, coupon):
        self.coupons[coupon.id] = coupon
        return coupon

    def update(self, coupon):
        stored = self.coupons.get(coupon.id)
        if stored is None:
            return None
        self.coupons[coupon.id] = replace(coupon, current_uses=stored.current_uses)
        return self.coupons[coupon.id]

    def delete(self, coupon_id):
        return self.coupons.pop(coupon_id, None) is not None

    def set_active(self, coupon_id, active):
        if coupon_id not in self.coupons:
            return False
        self.coupons[coupon_id] = replace(self.coupons[coupon_id], is_active=active)
        return True

    def increment_uses(self, coupon_id):
        coupon = self.coupons.get(coupon_id)
        if coupon is None or coupon.is_exhausted:
            return False
        self.coupons[coupon_id] = replace(coupon, current_uses=coupon.current_uses + 1)
        return True


class InMemoryFeeSettingsStore(FeeSettingsStore):
    def __init__(self, settings: dict[EventId, FeeSettings] | None = None) -> None:
        self.settings = settings or {}

    def get_for_event(self, event_id):
        return self.settings.get(event_id)


class InMemorySalesStore(SalesStore):
    def __init__(self) -> None:
        self.sales: dict[EventId, list[SaleRecord]] = {}

    def list_sales(self, event_id, promoter_code=None):
        records = self.sales.get(event_id, [])
        if promoter_code:
            records = [r for r in records if r.promoter_code == promoter_code]
        return list(records)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def event_id() -> EventId:
    return EventId(uuid.uuid4())


@pytest.fixture
def ticket_type() -> TicketTypeId:
    return TicketTypeId(uuid.uuid4())


@pytest.fixture
def make_coupon(event_id):
    """Build a coupon valid around NOW; override any field by keyword."""

    def _make(**overrides) -> Coupon:
        fields = dict(
            id=CouponId(uuid.uuid4()),
            event_id=event_id,
            code="SAVE10",
            discount_type=DiscountType.PERCENTAGE,
            discount_value=Decimal("10"),
            valid_from=NOW - timedelta(days=1),
            valid_until=NOW + timedelta(days=1),
        )
        fields.update(overrides)
        return Coupon(**fields)

    return _make


@pytest.fixture
def coupon_store() -> InMemoryCouponStore:
    return InMemoryCouponStore()


@pytest.fixture
def fee_settings_store() -> InMemoryFeeSettingsStore:
    return InMemoryFeeSettingsStore()


@pytest.fixture
def sales_store() -> InMemorySalesStore:
    return InMemorySalesStore()

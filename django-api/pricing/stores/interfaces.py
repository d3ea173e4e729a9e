"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from pricing.domain import Coupon, CouponId, EventId, FeeSettings, SaleRecord


class CouponStore(ABC):
    """Interface for coupon persistence operations."""

    @abstractmethod
    def get(self, coupon_id: CouponId) -> Coupon | None:
        """Return a coupon by ID, or None if not found."""
        ...

    @abstractmethod
    def get_by_code(self, event_id: EventId, code: str) -> Coupon | None:
        """Return the coupon with this code for the event, or None."""
        ...

    @abstractmethod
    def list_for_event(self, event_id: EventId) -> list[Coupon]:
        """Return all coupons of an event, newest first."""
        ...

    @abstractmethod
    def code_exists(self, event_id: EventId, code: str) -> bool:
        ...

    @abstractmethod
    def add(self, coupon: Coupon) -> Coupon:
        """Persist a new coupon and return it as stored."""
        ...

    @abstractmethod
    def update(self, coupon: Coupon) -> Coupon | None:
        """Overwrite a coupon's editable fields; None if it does not exist.

        The usage counter is left to increment_uses. Raises ValueError if
        the stored usage count already exceeds the new max_uses.
        """
        ...

    @abstractmethod
    def delete(self, coupon_id: CouponId) -> bool:
        """Remove a coupon; False if it does not exist."""
        ...

    @abstractmethod
    def set_active(self, coupon_id: CouponId, active: bool) -> bool:
        """Toggle a coupon; False if it does not exist."""
        ...

    @abstractmethod
    def increment_uses(self, coupon_id: CouponId) -> bool:
        """Atomically add one use unless that would exceed max_uses.

        Returns False when the coupon is missing or already at its cap.
        Two concurrent callers must never both succeed on the last use.
        """
        ...


class FeeSettingsStore(ABC):
    """Interface for per-event fee settings."""

    @abstractmethod
    def get_for_event(self, event_id: EventId) -> FeeSettings | None:
        """Return the event's fee settings, or None if it uses defaults."""
        ...


class SalesStore(ABC):
    """Interface for recorded ticket sales."""

    @abstractmethod
    def list_sales(self, event_id: EventId, promoter_code: str | None = None) -> list[SaleRecord]:
        """Return the event's counted sales, optionally for one promoter code."""
        ...

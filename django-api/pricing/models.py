"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
"""

import uuid

from django.db import models
from django.db.models import F, Q


class EventFeeSettings(models.Model):
    """Persistence model for per-event fee configuration."""

    event_id = models.UUIDField(unique=True)
    use_custom_fees = models.BooleanField(default=False)
    pix_fee_percentage = models.DecimalField(
        max_digits=5, decimal_places=4, blank=True, null=True
    )
    card_fee_percentage = models.DecimalField(
        max_digits=5, decimal_places=4, blank=True, null=True
    )
    offline_fee = models.DecimalField(max_digits=5, decimal_places=4, blank=True, null=True)
    absorb_fees = models.BooleanField(blank=True, null=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "event fee settings"

    def __str__(self) -> str:
        return f"Fees for {self.event_id}"


class Coupon(models.Model):
    """Persistence model for coupons."""

    class DiscountType(models.TextChoices):
        PERCENTAGE = "percentage"
        FIXED = "fixed"
        CUSTOM = "custom"

    class PromotionType(models.TextChoices):
        STANDARD = "standard"
        BUY_X_GET_Y = "buyXgetY"
        MIN_QUANTITY = "minQuantity"
        BUNDLE = "bundle"
        FIXED_BUNDLE = "fixedBundle"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event_id = models.UUIDField()
    code = models.CharField(max_length=64)
    name = models.CharField(max_length=255, blank=True)
    discount_type = models.CharField(max_length=16, choices=DiscountType.choices)
    discount_value = models.DecimalField(max_digits=10, decimal_places=2)
    max_uses = models.PositiveIntegerField(blank=True, null=True)
    current_uses = models.PositiveIntegerField(default=0)
    valid_from = models.DateTimeField()
    valid_until = models.DateTimeField()
    is_active = models.BooleanField(default=True)
    min_purchase_amount = models.DecimalField(
        max_digits=10, decimal_places=2, blank=True, null=True
    )
    applicable_ticket_types = models.JSONField(default=list, blank=True)
    promotion_type = models.CharField(
        max_length=16, choices=PromotionType.choices, blank=True, null=True
    )
    promotion_rules = models.JSONField(blank=True, null=True)
    created_by = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["event_id", "code"], name="unique_coupon_code_per_event"),
            models.CheckConstraint(
                condition=Q(max_uses__isnull=True) | Q(current_uses__lte=F("max_uses")),
                name="coupon_uses_within_cap",
                violation_error_message="Coupon uses cannot exceed max uses.",
            ),
            models.CheckConstraint(
                condition=Q(valid_from__lte=F("valid_until")),
                name="coupon_window_ordered",
                violation_error_message="Coupon must not expire before it starts.",
            ),
        ]

    def __str__(self) -> str:
        return self.code


class Sale(models.Model):
    """A ticket purchase as recorded for sales reporting."""

    class Status(models.TextChoices):
        VALID = "valid"
        USED = "used"
        REFUNDED = "refunded"
        CANCELLED = "cancelled"

    event_id = models.UUIDField(db_index=True)
    promoter_code = models.CharField(max_length=64, blank=True)
    quantity = models.PositiveIntegerField()
    total_amount = models.DecimalField(max_digits=10, decimal_places=2)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.VALID)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]

    def __str__(self) -> str:
        return f"{self.quantity} x {self.event_id}"

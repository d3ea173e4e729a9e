"""Serializers for request parsing and domain model responses."""

from rest_framework import serializers

from pricing.domain import Money, PaymentMethod, PromoterCode, TicketSelection, TicketTypeId


def _money(value: Money | None) -> str | None:
    return None if value is None else str(value)


class TicketSelectionSerializer(serializers.Serializer):
    ticket_type_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)


class _SelectionsMixin(serializers.Serializer):
    ticket_selections = TicketSelectionSerializer(many=True, required=False, default=list)

    def selections(self) -> list[TicketSelection]:
        return [
            TicketSelection(
                ticket_type_id=TicketTypeId(item["ticket_type_id"]),
                quantity=item["quantity"],
            )
            for item in self.validated_data["ticket_selections"]
        ]


class CouponValidationRequestSerializer(_SelectionsMixin):
    """Input for validating a coupon code at checkout."""

    code = serializers.CharField(max_length=64)
    purchase_amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)


class QuoteRequestSerializer(_SelectionsMixin):
    """Input for pricing a checkout."""

    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    payment_method = serializers.ChoiceField(choices=[method.value for method in PaymentMethod])
    code = serializers.CharField(max_length=64, required=False, allow_blank=True)


class CouponValidationSerializer(serializers.Serializer):
    """Serializer for CouponValidation domain model."""

    valid = serializers.BooleanField()
    error_code = serializers.CharField(allow_null=True)
    message = serializers.CharField(allow_null=True)
    discount_amount = serializers.SerializerMethodField()
    final_amount = serializers.SerializerMethodField()
    clamped = serializers.BooleanField()

    def get_discount_amount(self, obj) -> str | None:
        return _money(obj.discount_amount)

    def get_final_amount(self, obj) -> str | None:
        return _money(obj.final_amount)


class MoneyBreakdownSerializer(serializers.Serializer):
    """Serializer for MoneyBreakdown domain model."""

    subtotal = serializers.DecimalField(max_digits=14, decimal_places=2)
    discount_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    fee = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_paid = serializers.DecimalField(max_digits=14, decimal_places=2)
    producer_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    platform_fee = serializers.DecimalField(max_digits=14, decimal_places=2)
    original_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    fee_percentage = serializers.SerializerMethodField()
    absorbs_fees = serializers.BooleanField()

    def get_fee_percentage(self, obj) -> str:
        return f"{obj.rate.percentage:.2f}"


class QuoteSerializer(serializers.Serializer):
    """Serializer for Quote domain model."""

    breakdown = MoneyBreakdownSerializer()
    coupon = CouponValidationSerializer(source="coupon_validation", allow_null=True)


class ChannelSalesSerializer(serializers.Serializer):
    """Serializer for ChannelSales domain model."""

    channel = serializers.SerializerMethodField()
    promoter_code = serializers.SerializerMethodField()
    tickets_sold = serializers.IntegerField()
    total_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    sale_count = serializers.IntegerField()

    def get_channel(self, obj) -> str:
        return "promoter" if isinstance(obj.channel, PromoterCode) else "direct"

    def get_promoter_code(self, obj) -> str | None:
        return obj.channel.code if isinstance(obj.channel, PromoterCode) else None

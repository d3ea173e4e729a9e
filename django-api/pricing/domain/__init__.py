from pricing.domain.coupons import CouponEngine
from pricing.domain.fees import FeeResolver, PlatformFeeRates, ResolvedFee
from pricing.domain.models import (
    Coupon,
    CouponValidation,
    DiscountType,
    FeeSettings,
    FeeSnapshot,
    MoneyBreakdown,
    PaymentMethod,
    PromotionRules,
    PromotionType,
    Quote,
    TicketSelection,
    TransactionMetadata,
)
from pricing.domain.money import MoneyEngine
from pricing.domain.orchestrator import PricingOrchestrator
from pricing.domain.reports import (
    ChannelSales,
    Direct,
    PromoterCode,
    SaleRecord,
    SalesChannel,
    summarize_sales_by_channel,
)
from pricing.domain.value_objects import CouponId, EventId, Money, Rate, TicketTypeId

__all__ = [
    "Coupon",
    "CouponValidation",
    "DiscountType",
    "FeeSettings",
    "FeeSnapshot",
    "MoneyBreakdown",
    "PaymentMethod",
    "PromotionRules",
    "PromotionType",
    "Quote",
    "TicketSelection",
    "TransactionMetadata",
    "CouponEngine",
    "FeeResolver",
    "PlatformFeeRates",
    "ResolvedFee",
    "MoneyEngine",
    "PricingOrchestrator",
    "ChannelSales",
    "Direct",
    "PromoterCode",
    "SaleRecord",
    "SalesChannel",
    "summarize_sales_by_channel",
    "CouponId",
    "EventId",
    "TicketTypeId",
    "Money",
    "Rate",
]

from pricing.conf import platform_fee_rates
from pricing.domain import CouponEngine, FeeResolver, PricingOrchestrator
from pricing.services.coupon_service import CouponService
from pricing.services.pricing_service import PricingService
from pricing.services.report_service import ReportService
from pricing.stores import DjangoCouponStore, DjangoFeeSettingsStore, DjangoSalesStore


def build_pricing_service() -> PricingService:
    """Wire the pricing service against the database stores and configured rates."""
    orchestrator = PricingOrchestrator(FeeResolver(platform_fee_rates()), CouponEngine())
    return PricingService(DjangoCouponStore(), DjangoFeeSettingsStore(), orchestrator)


def build_coupon_service() -> CouponService:
    return CouponService(DjangoCouponStore())


def build_report_service() -> ReportService:
    return ReportService(DjangoSalesStore())


__all__ = [
    "CouponService",
    "PricingService",
    "ReportService",
    "build_coupon_service",
    "build_pricing_service",
    "build_report_service",
]

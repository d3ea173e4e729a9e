from pricing.handlers.views import (
    CouponRedeemView,
    CouponValidationView,
    PromoterSalesReportView,
    QuoteView,
)

__all__ = ["CouponRedeemView", "CouponValidationView", "PromoterSalesReportView", "QuoteView"]

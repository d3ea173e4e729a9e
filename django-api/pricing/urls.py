from django.urls import path

from pricing.handlers import (
    CouponRedeemView,
    CouponValidationView,
    PromoterSalesReportView,
    QuoteView,
)

urlpatterns = [
    path(
        "events/<str:event_id>/coupons/validate",
        CouponValidationView.as_view(),
        name="coupon-validate",
    ),
    path("events/<str:event_id>/pricing/quote", QuoteView.as_view(), name="pricing-quote"),
    path(
        "events/<str:event_id>/reports/promoter-sales",
        PromoterSalesReportView.as_view(),
        name="promoter-sales-report",
    ),
    path("coupons/<str:coupon_id>/redeem", CouponRedeemView.as_view(), name="coupon-redeem"),
]

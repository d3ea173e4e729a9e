"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from pricing.domain import Money, PaymentMethod
from pricing.domain.errors import DomainError, ErrorCode
from pricing.handlers.serializers import (
    ChannelSalesSerializer,
    CouponValidationRequestSerializer,
    CouponValidationSerializer,
    QuoteRequestSerializer,
    QuoteSerializer,
)
from pricing.services import build_pricing_service, build_report_service

ERROR_STATUS = {
    ErrorCode.INVALID_EVENT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_COUPON_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.COUPON_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.DUPLICATE_COUPON_CODE: status.HTTP_409_CONFLICT,
    ErrorCode.COUPON_UNAVAILABLE: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_COUPON: status.HTTP_400_BAD_REQUEST,
}


def error_response(error: DomainError) -> Response:
    return Response(
        {"code": error.code.value, "message": error.message},
        status=ERROR_STATUS.get(error.code, status.HTTP_400_BAD_REQUEST),
    )


class PricingView(APIView):
    service_factory = staticmethod(build_pricing_service)


class CouponValidationView(PricingView):
    """Handler for POST /api/events/{event_id}/coupons/validate"""

    def post(self, request: Request, event_id: str) -> Response:
        serializer = CouponValidationRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            result = self.service_factory().validate_coupon(
                event_id,
                serializer.validated_data["code"],
                Money.of(serializer.validated_data["purchase_amount"]),
                serializer.selections(),
            )
        except DomainError as exc:
            return error_response(exc)
        return Response(CouponValidationSerializer(result).data)


class QuoteView(PricingView):
    """Handler for POST /api/events/{event_id}/pricing/quote"""

    def post(self, request: Request, event_id: str) -> Response:
        serializer = QuoteRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            quote = self.service_factory().quote(
                event_id,
                Money.of(data["subtotal"]),
                PaymentMethod(data["payment_method"]),
                serializer.selections(),
                code=data.get("code") or None,
            )
        except DomainError as exc:
            return error_response(exc)
        return Response(QuoteSerializer(quote).data)


class CouponRedeemView(PricingView):
    """Handler for POST /api/coupons/{coupon_id}/redeem"""

    def post(self, request: Request, coupon_id: str) -> Response:
        try:
            self.service_factory().redeem_coupon(coupon_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)


class PromoterSalesReportView(APIView):
    """Handler for GET /api/events/{event_id}/reports/promoter-sales"""

    service_factory = staticmethod(build_report_service)

    def get(self, request: Request, event_id: str) -> Response:
        try:
            report = self.service_factory().promoter_sales_report(
                event_id, request.query_params.get("promoter_code") or None
            )
        except DomainError as exc:
            return error_response(exc)
        return Response(ChannelSalesSerializer(list(report.values()), many=True).data)

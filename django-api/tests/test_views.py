"""Integration tests for the pricing HTTP endpoints.

Run with: pytest tests/test_views.py -v
"""

import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from pricing import models


@pytest.fixture
def event() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def ticket_type_id() -> uuid.UUID:
    return uuid.uuid4()


def create_coupon(event: uuid.UUID, **fields) -> models.Coupon:
    values = dict(
        event_id=event,
        code="SAVE10",
        discount_type="percentage",
        discount_value=Decimal("10"),
        valid_from=timezone.now() - timedelta(days=1),
        valid_until=timezone.now() + timedelta(days=1),
    )
    values.update(fields)
    return models.Coupon.objects.create(**values)


@pytest.mark.django_db
class TestCouponValidate:
    """Tests for POST /api/events/{id}/coupons/validate"""

    def url(self, event) -> str:
        return f"/api/events/{event}/coupons/validate"

    def test_valid_coupon(self, api_client: APIClient, event, ticket_type_id):
        create_coupon(event)
        response = api_client.post(
            self.url(event),
            {
                "code": "SAVE10",
                "purchase_amount": "200.00",
                "ticket_selections": [{"ticket_type_id": str(ticket_type_id), "quantity": 2}],
            },
            format="json",
        )
        assert response.status_code == 200
        assert response.data["valid"] is True
        assert response.data["discount_amount"] == "20.00"
        assert response.data["final_amount"] == "180.00"

    def test_rejected_coupon_is_a_normal_response(self, api_client: APIClient, event):
        create_coupon(event, max_uses=1, current_uses=1)
        response = api_client.post(
            self.url(event), {"code": "SAVE10", "purchase_amount": "50"}, format="json"
        )
        assert response.status_code == 200
        assert response.data["valid"] is False
        assert response.data["error_code"] == "Exhausted"
        assert response.data["discount_amount"] is None

    def test_invalid_event_id_format(self, api_client: APIClient):
        response = api_client.post(
            self.url("not-a-uuid"), {"code": "SAVE10", "purchase_amount": "50"}, format="json"
        )
        assert response.status_code == 400
        assert response.data["code"] == "INVALID_EVENT_ID"

    def test_malformed_body(self, api_client: APIClient, event):
        response = api_client.post(self.url(event), {"purchase_amount": "-1"}, format="json")
        assert response.status_code == 400


@pytest.mark.django_db
class TestQuote:
    """Tests for POST /api/events/{id}/pricing/quote"""

    def url(self, event) -> str:
        return f"/api/events/{event}/pricing/quote"

    def test_default_pix_quote(self, api_client: APIClient, event):
        response = api_client.post(
            self.url(event), {"subtotal": "1000", "payment_method": "PIX"}, format="json"
        )
        assert response.status_code == 200
        breakdown = response.data["breakdown"]
        assert breakdown["fee"] == "100.00"
        assert breakdown["total_paid"] == "1100.00"
        assert breakdown["producer_amount"] == "1000.00"
        assert breakdown["platform_fee"] == "100.00"
        assert breakdown["fee_percentage"] == "10.00"
        assert response.data["coupon"] is None

    def test_custom_card_fee_with_coupon(self, api_client: APIClient, event, ticket_type_id):
        models.EventFeeSettings.objects.create(
            event_id=event, use_custom_fees=True, card_fee_percentage=Decimal("0.08")
        )
        create_coupon(event, code="MINUS50", discount_type="fixed", discount_value=Decimal("50"))
        response = api_client.post(
            self.url(event),
            {
                "subtotal": "1000",
                "payment_method": "CARD",
                "code": "MINUS50",
                "ticket_selections": [{"ticket_type_id": str(ticket_type_id), "quantity": 1}],
            },
            format="json",
        )
        assert response.status_code == 200
        assert response.data["coupon"]["valid"] is True
        breakdown = response.data["breakdown"]
        assert breakdown["total_paid"] == "1030.00"
        assert breakdown["producer_amount"] == "950.00"
        assert breakdown["platform_fee"] == "80.00"

    def test_unknown_payment_method(self, api_client: APIClient, event):
        response = api_client.post(
            self.url(event), {"subtotal": "10", "payment_method": "BOLETO"}, format="json"
        )
        assert response.status_code == 400


@pytest.mark.django_db
class TestCouponRedeem:
    """Tests for POST /api/coupons/{id}/redeem"""

    def test_redeem_until_exhausted(self, api_client: APIClient, event):
        coupon = create_coupon(event, max_uses=1)
        url = f"/api/coupons/{coupon.id}/redeem"
        assert api_client.post(url).status_code == 204
        response = api_client.post(url)
        assert response.status_code == 409
        assert response.data["code"] == "COUPON_UNAVAILABLE"
        coupon.refresh_from_db()
        assert coupon.current_uses == 1

    def test_invalid_coupon_id(self, api_client: APIClient):
        assert api_client.post("/api/coupons/xyz/redeem").status_code == 400


@pytest.mark.django_db
class TestPromoterSalesReport:
    """Tests for GET /api/events/{id}/reports/promoter-sales"""

    def url(self, event) -> str:
        return f"/api/events/{event}/reports/promoter-sales"

    def test_sales_grouped_by_channel(self, api_client: APIClient, event):
        models.Sale.objects.create(
            event_id=event, promoter_code="ANA", quantity=2, total_amount=Decimal("200")
        )
        models.Sale.objects.create(event_id=event, quantity=1, total_amount=Decimal("110"))
        models.Sale.objects.create(
            event_id=event,
            promoter_code="ANA",
            quantity=5,
            total_amount=Decimal("500"),
            status=models.Sale.Status.REFUNDED,
        )
        response = api_client.get(self.url(event))
        assert response.status_code == 200
        assert response.data == [
            {
                "channel": "promoter",
                "promoter_code": "ANA",
                "tickets_sold": 2,
                "total_amount": "200.00",
                "sale_count": 1,
            },
            {
                "channel": "direct",
                "promoter_code": None,
                "tickets_sold": 1,
                "total_amount": "110.00",
                "sale_count": 1,
            },
        ]

    def test_filter_by_promoter_code(self, api_client: APIClient, event):
        models.Sale.objects.create(
            event_id=event, promoter_code="ANA", quantity=1, total_amount=Decimal("100")
        )
        models.Sale.objects.create(event_id=event, quantity=1, total_amount=Decimal("100"))
        response = api_client.get(self.url(event), {"promoter_code": "ANA"})
        assert [row["promoter_code"] for row in response.data] == ["ANA"]

    def test_invalid_event_id_format(self, api_client: APIClient):
        response = api_client.get(self.url("not-a-uuid"))
        assert response.status_code == 400
        assert response.data["code"] == "INVALID_EVENT_ID"

"""Unit tests for sales grouped by channel."""

from decimal import Decimal

from pricing.domain import Direct, PromoterCode, SaleRecord, summarize_sales_by_channel


class TestSummarizeSalesByChannel:
    def test_groups_by_promoter_and_direct(self):
        summary = summarize_sales_by_channel(
            [
                SaleRecord("ANA", 2, Decimal("220.00")),
                SaleRecord(None, 1, Decimal("110.00")),
                SaleRecord("ANA", 1, Decimal("99.00")),
                SaleRecord("", 3, Decimal("330.00")),
            ]
        )
        assert list(summary) == [PromoterCode("ANA"), Direct()]
        ana = summary[PromoterCode("ANA")]
        assert (ana.tickets_sold, ana.total_amount, ana.sale_count) == (3, Decimal("319.00"), 2)
        direct = summary[Direct()]
        assert (direct.tickets_sold, direct.total_amount, direct.sale_count) == (4, Decimal("440.00"), 2)

    def test_promoter_named_direct_is_not_direct(self):
        summary = summarize_sales_by_channel([SaleRecord("direct", 1, Decimal("10"))])
        assert PromoterCode("direct") in summary
        assert Direct() not in summary

    def test_empty(self):
        assert summarize_sales_by_channel([]) == {}

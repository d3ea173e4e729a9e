"""Unit tests for sale arithmetic.

Run with: pytest tests/test_money.py -v
"""

from decimal import Decimal

import pytest

from pricing.domain import Money, MoneyEngine, Rate, ResolvedFee


def fee_of(rate: str, absorbs: bool = False) -> ResolvedFee:
    return ResolvedFee(rate=Rate.of(rate), absorbs_fees=absorbs, source="default")


class TestScenarios:
    """Worked examples from the finance team."""

    def test_pix_without_discount(self):
        result = MoneyEngine(fee_of("0.10")).breakdown(Money.of(1000))
        assert result.fee == Decimal("100.00")
        assert result.total_paid == Decimal("1100.00")
        assert result.producer_amount == Decimal("1000.00")
        assert result.platform_fee == Decimal("100.00")
        assert result.original_amount == Decimal("1000.00")

    def test_pix_with_absorbed_fees(self):
        result = MoneyEngine(fee_of("0.10", absorbs=True)).breakdown(Money.of(1000))
        assert result.fee == Decimal("0")
        assert result.total_paid == Decimal("1000.00")
        assert result.producer_amount == Decimal("900.00")
        assert result.platform_fee == Decimal("100.00")

    def test_card_custom_rate_with_discount(self):
        result = MoneyEngine(fee_of("0.08"), Money.of(50)).breakdown(Money.of(1000))
        assert result.fee == Decimal("80.00")
        assert result.total_paid == Decimal("1030.00")
        assert result.producer_amount == Decimal("950.00")
        assert result.platform_fee == Decimal("80.00")


class TestInverseOperations:
    """Tests for deriving amounts from a recorded total."""

    def test_producer_bears_the_discount(self):
        engine = MoneyEngine(fee_of("0.10"), Money.of(100))
        assert engine.producer_amount(Decimal("1000.00")) == Decimal("900.00")

    def test_platform_fee_is_residual(self):
        engine = MoneyEngine(fee_of("0.10"), Money.of(100))
        total = Decimal("1000.00")
        assert engine.platform_fee(total) == total - engine.producer_amount(total)

    def test_original_amount_recovers_subtotal(self):
        engine = MoneyEngine(fee_of("0.10"))
        assert engine.original_amount(Decimal("36.66")) == Decimal("33.33")

    def test_absorbed_fee_with_large_discount_leaves_negative_platform_fee(self):
        engine = MoneyEngine(fee_of("0.10", absorbs=True), Money.of(500))
        result = engine.breakdown(Money.of(1000))
        assert result.total_paid == Decimal("500.00")
        assert result.producer_amount == Decimal("900.00")
        assert result.platform_fee == Decimal("-400.00")


class TestProgrammerErrors:
    def test_negative_subtotal_cannot_be_built(self):
        with pytest.raises(ValueError):
            Money(Decimal("-1"))

    @pytest.mark.parametrize("absorbs", [False, True])
    def test_negative_total_paid_is_rejected(self, absorbs):
        engine = MoneyEngine(fee_of("0.10", absorbs), Money.of(5))
        with pytest.raises(ValueError):
            engine.producer_amount(Decimal("-0.01"))
        with pytest.raises(ValueError):
            engine.platform_fee(Decimal("-10"))
        with pytest.raises(ValueError):
            engine.original_amount(Decimal("-10"))

    def test_zero_total_paid_is_accepted(self):
        engine = MoneyEngine(fee_of("0.10"))
        assert engine.producer_amount(Decimal("0")) == Decimal("0.00")
        assert engine.original_amount(Decimal("0")) == Decimal("0.00")

    def test_discount_above_subtotal_is_rejected(self):
        with pytest.raises(ValueError):
            MoneyEngine(fee_of("0.10"), Money.of(11)).total(Money.of(10))


SUBTOTALS = ["0", "0.01", "1", "9.99", "33.33", "77.77", "123.45", "1000", "2999.99"]
RATES = ["0", "0.05", "0.08", "0.10", "0.125", "0.3333", "1"]


class TestInvariants:
    """Reconciliation must hold for every rate, discount and absorb mode."""

    @pytest.mark.parametrize("absorbs", [False, True])
    @pytest.mark.parametrize("rate", RATES)
    @pytest.mark.parametrize("subtotal", SUBTOTALS)
    def test_total_splits_exactly(self, subtotal, rate, absorbs):
        amount = Money.of(subtotal)
        for discount in (Money.zero(), Money.of(amount.amount / 3), amount):
            result = MoneyEngine(fee_of(rate, absorbs), discount).breakdown(amount)
            assert result.total_paid == result.producer_amount + result.platform_fee

    @pytest.mark.parametrize("rate", RATES)
    @pytest.mark.parametrize("subtotal", SUBTOTALS)
    def test_original_amount_round_trip(self, subtotal, rate):
        engine = MoneyEngine(fee_of(rate))
        amount = Money.of(subtotal)
        assert engine.original_amount(engine.total(amount)) == amount.amount

    @pytest.mark.parametrize("rate", RATES)
    @pytest.mark.parametrize("subtotal", SUBTOTALS)
    def test_platform_fee_non_negative_without_absorb(self, subtotal, rate):
        amount = Money.of(subtotal)
        engine = MoneyEngine(fee_of(rate), Money.of(amount.amount / 2))
        assert engine.breakdown(amount).platform_fee >= 0


class TestReconcile:
    """Tests for the consistency report."""

    def test_standard_sale_is_balanced(self):
        report = MoneyEngine(fee_of("0.10"), Money.of(25)).reconcile(Money.of(250))
        assert report.balanced

    def test_absorbed_sale_reports_fee_mismatch(self):
        report = MoneyEngine(fee_of("0.10", absorbs=True)).reconcile(Money.of(100))
        assert report.total_equals_split
        assert report.total_matches_forward
        assert not report.platform_fee_equals_fee
        assert not report.balanced

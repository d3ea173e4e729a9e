"""Fee arithmetic for a single sale.

Forward: subtotal -> fee -> total paid by the buyer.
Inverse: total paid -> producer amount, platform fee and original subtotal.

All results are quantized to cents. The platform fee is always the residual
``total_paid - producer_amount`` so the two halves add back to the total.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from pricing.domain.fees import ResolvedFee
from pricing.domain.models import MoneyBreakdown
from pricing.domain.value_objects import CENT, Money

TOLERANCE = CENT


def _cents(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def _check_paid(total_paid: Decimal) -> None:
    if total_paid < 0:
        raise ValueError("Total paid cannot be negative")


@dataclass(frozen=True)
class Reconciliation:
    """Consistency checks over a computed breakdown."""

    breakdown: MoneyBreakdown
    total_matches_forward: bool
    total_equals_split: bool
    original_equals_subtotal: bool
    platform_fee_equals_fee: bool

    @property
    def balanced(self) -> bool:
        return all(
            (
                self.total_matches_forward,
                self.total_equals_split,
                self.original_equals_subtotal,
                self.platform_fee_equals_fee,
            )
        )


class MoneyEngine:
    """Apply a resolved fee and a discount to sale amounts."""

    def __init__(self, fee: ResolvedFee, discount_amount: Money | None = None) -> None:
        self._fee = fee
        self._discount = (discount_amount or Money.zero()).amount

    @property
    def _rate(self) -> Decimal:
        return self._fee.rate.value

    def fee(self, subtotal: Money) -> Decimal:
        """Buyer-facing fee; zero when the producer absorbs it."""
        if self._fee.absorbs_fees:
            return Decimal("0.00")
        return _cents(subtotal.amount * self._rate)

    def total(self, subtotal: Money) -> Decimal:
        """Amount charged to the buyer."""
        if self._discount > subtotal.amount:
            raise ValueError("Discount cannot exceed the subtotal")
        return _cents(subtotal.amount + self.fee(subtotal) - self._discount)

    def producer_amount(self, total_paid: Decimal) -> Decimal:
        _check_paid(total_paid)
        original = total_paid + self._discount
        if self._fee.absorbs_fees:
            return _cents(original - original * self._rate)
        # The producer bears the whole discount.
        return _cents(original / (1 + self._rate) - self._discount)

    def platform_fee(self, total_paid: Decimal) -> Decimal:
        return _cents(total_paid) - self.producer_amount(total_paid)

    def original_amount(self, total_paid: Decimal) -> Decimal:
        """Pre-fee subtotal recovered from a recorded total."""
        _check_paid(total_paid)
        return _cents((total_paid + self._discount) / (1 + self._rate))

    def breakdown(self, subtotal: Money) -> MoneyBreakdown:
        total_paid = self.total(subtotal)
        return MoneyBreakdown(
            subtotal=subtotal.amount,
            discount_amount=_cents(self._discount),
            fee=self.fee(subtotal),
            total_paid=total_paid,
            producer_amount=self.producer_amount(total_paid),
            platform_fee=self.platform_fee(total_paid),
            original_amount=self.original_amount(total_paid),
            rate=self._fee.rate,
            absorbs_fees=self._fee.absorbs_fees,
        )

    def reconcile(self, subtotal: Money) -> Reconciliation:
        """Check a breakdown against the forward formulas within one cent."""
        result = self.breakdown(subtotal)

        def close(left: Decimal, right: Decimal) -> bool:
            return abs(left - right) < TOLERANCE

        return Reconciliation(
            breakdown=result,
            total_matches_forward=close(
                result.total_paid, result.subtotal + result.fee - result.discount_amount
            ),
            total_equals_split=close(
                result.total_paid, result.producer_amount + result.platform_fee
            ),
            original_equals_subtotal=close(result.original_amount, result.subtotal),
            platform_fee_equals_fee=close(result.platform_fee, result.fee),
        )

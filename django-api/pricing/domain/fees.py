"""Selection of the effective fee rate for a sale.

Precedence, highest first:

1. Absorb flag: the first of ``metadata.fee_snapshot.absorb_fees``,
   ``metadata.absorb_fees`` and ``settings.absorb_fees`` that carries a value.
   This is null-coalescing, not first-truthy: an explicit False stops the search.
2. OFFLINE sales with a legacy ``offline_fee`` / ``fee_rate`` on the
   transaction metadata use that literal rate.
3. Event custom fees, falling back to the platform default per method.
4. Platform default for the method.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal
from typing import Self

from pricing.domain.models import FeeSettings, PaymentMethod, TransactionMetadata
from pricing.domain.value_objects import Rate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlatformFeeRates:
    """Default platform rate per payment method."""

    pix: Rate
    card: Rate
    offline: Rate

    @classmethod
    def standard(cls) -> Self:
        return cls(pix=Rate.of("0.10"), card=Rate.of("0.10"), offline=Rate.of("0.05"))

    @classmethod
    def from_mapping(cls, rates: dict[str, str | Decimal]) -> Self:
        """Build from a ``{"PIX": ..., "CARD": ..., "OFFLINE": ...}`` mapping."""
        return cls(
            pix=Rate.of(rates["PIX"]),
            card=Rate.of(rates["CARD"]),
            offline=Rate.of(rates["OFFLINE"]),
        )

    def for_method(self, method: PaymentMethod) -> Rate:
        return {
            PaymentMethod.PIX: self.pix,
            PaymentMethod.CARD: self.card,
            PaymentMethod.OFFLINE: self.offline,
        }[method]


@dataclass(frozen=True)
class ResolvedFee:
    """Rate to apply and whether the producer absorbs it.

    ``source`` names the precedence level the rate came from.
    """

    rate: Rate
    absorbs_fees: bool
    source: str

    @property
    def percentage(self) -> Decimal:
        return self.rate.percentage


AbsorbSource = Callable[[FeeSettings | None, TransactionMetadata | None], bool | None]

# Ordered highest precedence first.
ABSORB_SOURCES: tuple[tuple[str, AbsorbSource], ...] = (
    (
        "metadata.fee_snapshot",
        lambda settings, metadata: (
            metadata.fee_snapshot.absorb_fees
            if metadata is not None and metadata.fee_snapshot is not None
            else None
        ),
    ),
    (
        "metadata",
        lambda settings, metadata: metadata.absorb_fees if metadata is not None else None,
    ),
    (
        "settings",
        lambda settings, metadata: settings.absorb_fees if settings is not None else None,
    ),
)


def resolve_absorb(
    settings: FeeSettings | None, metadata: TransactionMetadata | None
) -> bool:
    """Return the absorb flag from the first source that sets one."""
    for _, source in ABSORB_SOURCES:
        value = source(settings, metadata)
        if value is not None:
            return bool(value)
    return False


class FeeResolver:
    """Resolve the rate for a payment method against the configured defaults."""

    def __init__(self, defaults: PlatformFeeRates) -> None:
        self._defaults = defaults

    @property
    def defaults(self) -> PlatformFeeRates:
        return self._defaults

    def resolve_rate(
        self,
        method: PaymentMethod,
        settings: FeeSettings | None = None,
        metadata: TransactionMetadata | None = None,
    ) -> ResolvedFee:
        absorbs = resolve_absorb(settings, metadata)
        rate, source = self._select_rate(method, settings, metadata)
        logger.debug(
            "Resolved %s fee %s from %s (absorb=%s)", method.value, rate.value, source, absorbs
        )
        return ResolvedFee(rate=rate, absorbs_fees=absorbs, source=source)

    def _select_rate(
        self,
        method: PaymentMethod,
        settings: FeeSettings | None,
        metadata: TransactionMetadata | None,
    ) -> tuple[Rate, str]:
        if method is PaymentMethod.OFFLINE and metadata is not None:
            legacy = metadata.offline_fee or metadata.fee_rate
            if legacy is not None:
                return legacy, "metadata"

        if settings is not None and settings.use_custom_fees:
            custom = settings.custom_rate_for(method)
            if custom is not None:
                return custom, "settings"

        return self._defaults.for_method(method), "default"

"""Pricing configuration read from Django settings.

Settings:
    PRICING = {
        "DEFAULT_FEE_RATES": {"PIX": "0.10", "CARD": "0.10", "OFFLINE": "0.05"},
    }
"""

from django.conf import settings

from pricing.domain import PlatformFeeRates


def platform_fee_rates() -> PlatformFeeRates:
    """Return the configured default rates, or the standard table if unset."""
    rates = getattr(settings, "PRICING", {}).get("DEFAULT_FEE_RATES")
    if rates is None:
        return PlatformFeeRates.standard()
    return PlatformFeeRates.from_mapping(rates)

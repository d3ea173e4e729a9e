from pricing.stores.django_store import DjangoCouponStore, DjangoFeeSettingsStore, DjangoSalesStore
from pricing.stores.interfaces import CouponStore, FeeSettingsStore, SalesStore

__all__ = [
    "CouponStore",
    "FeeSettingsStore",
    "SalesStore",
    "DjangoCouponStore",
    "DjangoFeeSettingsStore",
    "DjangoSalesStore",
]

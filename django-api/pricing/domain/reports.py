"""Sales totals grouped by the channel that brought the buyer."""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class PromoterCode:
    code: str


@dataclass(frozen=True)
class Direct:
    """Sale made without a promoter code."""


SalesChannel = PromoterCode | Direct


@dataclass(frozen=True)
class SaleRecord:
    promoter_code: str | None
    quantity: int
    total_amount: Decimal

    @property
    def channel(self) -> SalesChannel:
        return PromoterCode(self.promoter_code) if self.promoter_code else Direct()


@dataclass(frozen=True)
class ChannelSales:
    channel: SalesChannel
    tickets_sold: int = 0
    total_amount: Decimal = Decimal("0.00")
    sale_count: int = 0

    def add(self, record: SaleRecord) -> "ChannelSales":
        return ChannelSales(
            channel=self.channel,
            tickets_sold=self.tickets_sold + record.quantity,
            total_amount=self.total_amount + record.total_amount,
            sale_count=self.sale_count + 1,
        )


def summarize_sales_by_channel(
    records: Iterable[SaleRecord],
) -> dict[SalesChannel, ChannelSales]:
    """Sum quantity and amount paid per channel, in first-seen order."""
    summary: dict[SalesChannel, ChannelSales] = {}
    for record in records:
        channel = record.channel
        current = summary.get(channel, ChannelSales(channel=channel))
        summary[channel] = current.add(record)
    return summary

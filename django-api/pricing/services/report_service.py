"""Sales reporting by promoter channel."""

import logging

from pricing.domain import ChannelSales, SalesChannel, summarize_sales_by_channel
from pricing.services.pricing_service import parse_event_id
from pricing.stores.interfaces import SalesStore

logger = logging.getLogger(__name__)


class ReportService:
    """Service for event sales reports."""

    def __init__(self, sales: SalesStore) -> None:
        self._sales = sales

    def promoter_sales_report(
        self, event_id: str, promoter_code: str | None = None
    ) -> dict[SalesChannel, ChannelSales]:
        """Group an event's counted sales by promoter code, or Direct.

        Passing a promoter_code restricts the report to that promoter.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
        """
        event = parse_event_id(event_id)
        records = self._sales.list_sales(event, promoter_code)
        logger.debug("Summarizing %d sales for event %s", len(records), event.value)
        return summarize_sales_by_channel(records)

"""Business logic services."""

from servitor.services.order_service import (
    list_orders,
    retrieve_order,
    submit_order,
)
from servitor.services.stats_service import get_stats, render_metrics

__all__ = ["submit_order", "retrieve_order", "list_orders", "get_stats", "render_metrics"]

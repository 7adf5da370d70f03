"""Order statistics for the metrics endpoint."""

from dataclasses import dataclass

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from servitor.models.job import Job
from servitor.models.order import Order
from servitor.services.order_service import OrderStoreError


@dataclass(frozen=True)
class OrderStats:
    orders_received: int
    orders_ready: int
    orders_retrieved: int
    job_queue_length: int


# (name, type, help) in exposition order
METRICS = [
    ("orders_received", "counter", "The numbers of orders received by the system"),
    ("orders_ready", "counter", "The numbers of orders the system has finished"),
    ("orders_retrieved", "counter", "The numbers of orders retrieved from the system"),
    ("job_queue_length", "gauge", "The number of jobs currently in the queue"),
]


def get_stats(db: Session) -> OrderStats:
    """
    Count orders and outstanding jobs.

    Orders count as ready once every cup is brewed, whether or not they have
    been picked up since, so the counter never goes down.

    Args:
        db: Database session

    Returns:
        OrderStats snapshot
    """
    try:
        orders_received = db.query(func.count(Order.id)).scalar()
        orders_ready = db.query(func.count(Order.id)).filter(
            Order.order_brewed == Order.order_size
        ).scalar()
        orders_retrieved = db.query(func.count(Order.id)).filter(
            Order.order_retrieved.isnot(None)
        ).scalar()
        job_queue_length = db.query(func.count(Job.id)).filter(
            Job.job_retrieved.is_(None)
        ).scalar()
    except SQLAlchemyError as e:
        db.rollback()
        raise OrderStoreError(f"Failed to compute stats: {e}") from e

    return OrderStats(
        orders_received=orders_received or 0,
        orders_ready=orders_ready or 0,
        orders_retrieved=orders_retrieved or 0,
        job_queue_length=job_queue_length or 0,
    )


def render_metrics(stats: OrderStats) -> str:
    """Render stats in the Prometheus text exposition format."""
    lines = []
    for name, metric_type, help_text in METRICS:
        lines.append(f"# HELP {name} {help_text}")
        lines.append(f"# TYPE {name} {metric_type}")
        lines.append(f"{name} {getattr(stats, name)}")
    return "\n".join(lines) + "\n"

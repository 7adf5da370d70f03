"""SQLAlchemy models."""

from servitor.database import Base
from servitor.models.order import Order
from servitor.models.job import Job

__all__ = [
    "Base",
    "Order",
    "Job",
]

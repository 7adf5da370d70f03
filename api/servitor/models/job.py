"""Job model."""

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from servitor.database import Base


class Job(Base):
    """One cup of an order, brewed by the preparation workforce."""

    __tablename__ = "jobs"

    id = Column(String(50), primary_key=True)
    order_id = Column(String(50), ForeignKey("orders.id"), nullable=False, index=True)
    product = Column(String(255), nullable=False)
    order_received = Column(DateTime, nullable=False)
    # Written by the preparation workforce only
    machine = Column(String(255), nullable=True)
    job_started = Column(DateTime, nullable=True)
    job_ready = Column(DateTime, nullable=True)
    job_retrieved = Column(DateTime, nullable=True, index=True)

    order = relationship("Order", back_populates="jobs")

    def __repr__(self):
        return f"<Job(id={self.id}, product={self.product}, order_id={self.order_id})>"

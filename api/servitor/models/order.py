"""Order model."""

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from servitor.database import Base


class Order(Base):
    """A customer's coffee order, tracked from receipt to pickup."""

    __tablename__ = "orders"
    __table_args__ = (
        CheckConstraint("order_size >= 0", name="ck_orders_size_non_negative"),
        CheckConstraint(
            "order_brewed >= 0 AND order_brewed <= order_size",
            name="ck_orders_brewed_within_size",
        ),
    )

    id = Column(String(50), primary_key=True)
    order_received = Column(DateTime, nullable=False, index=True)
    order_ready = Column(DateTime, nullable=True)  # Set by the preparation workforce
    order_retrieved = Column(DateTime, nullable=True)
    order_size = Column(Integer, nullable=False, default=0)
    order_brewed = Column(Integer, nullable=False, default=0)

    # Lookup only; jobs are never loaded or cascaded through the order
    jobs = relationship("Job", back_populates="order", lazy="raise")

    @property
    def is_retrieved(self) -> bool:
        return self.order_retrieved is not None

    @property
    def is_ready(self) -> bool:
        """All cups brewed. An empty order is ready from the start."""
        return self.order_brewed == self.order_size

    def __repr__(self):
        return (
            f"<Order(id={self.id}, size={self.order_size}, "
            f"brewed={self.order_brewed}, retrieved={self.order_retrieved})>"
        )

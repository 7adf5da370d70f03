"""Order business logic service."""

import enum
import logging
import uuid
from dataclasses import dataclass
from typing import List, Optional, Sequence

from opentelemetry import trace
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from servitor.database import utcnow
from servitor.models.job import Job
from servitor.models.order import Order
from servitor.schemas.order import OrderEntry, OrderState

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class OrderServiceError(Exception):
    """Base exception for order service errors."""
    pass


class OrderStoreError(OrderServiceError):
    """The database rejected a read or write."""
    pass


class DuplicateOrderError(OrderStoreError):
    """An order with the requested ID already exists."""
    pass


class RetrievalOutcome(enum.Enum):
    """Result of a pickup attempt."""

    RETRIEVED = "retrieved"
    NOT_FOUND = "not_found"
    ALREADY_RETRIEVED = "already_retrieved"
    NOT_READY = "not_ready"


@dataclass
class RetrievalResult:
    outcome: RetrievalOutcome
    order: Optional[Order] = None

    @property
    def ok(self) -> bool:
        return self.outcome is RetrievalOutcome.RETRIEVED


def new_id() -> str:
    return str(uuid.uuid4())


def order_state(order: Order) -> str:
    """Derive the lifecycle state of an order from its persisted fields."""
    if order.is_retrieved:
        return OrderState.RETRIEVED
    if order.is_ready:
        return OrderState.READY
    return OrderState.RECEIVED


@tracer.start_as_current_span("submit_order")
def submit_order(
    db: Session,
    items: Sequence[OrderEntry],
    order_id: Optional[str] = None,
) -> str:
    """
    Create an order and one job per requested cup.

    The order and all of its jobs are committed in a single transaction,
    so either everything is stored or nothing is.

    Args:
        db: Database session
        items: Ordered products with cup counts
        order_id: Optional client-chosen ID (a UUID4 is generated otherwise)

    Returns:
        ID of the stored order

    Raises:
        DuplicateOrderError: If order_id is already taken
        OrderStoreError: If the database rejects the write
    """
    new_order_id = order_id or new_id()
    span = trace.get_current_span()
    span.set_attribute("order.id", new_order_id)
    order = Order(
        id=new_order_id,
        order_received=utcnow(),
        order_size=sum(item.count for item in items),
        order_brewed=0,
    )

    jobs = [
        Job(
            id=new_id(),
            order_id=new_order_id,
            product=item.product,
            order_received=order.order_received,
        )
        for item in items
        for _ in range(item.count)
    ]

    span.add_event("Creating order in database", {"order.size": order.order_size})
    try:
        db.add(order)
        db.add_all(jobs)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if order_id and db.query(Order.id).filter(Order.id == order_id).first():
            raise DuplicateOrderError(f"Order {order_id} already exists") from e
        raise OrderStoreError(f"Failed to store order: {e}") from e
    except SQLAlchemyError as e:
        db.rollback()
        raise OrderStoreError(f"Failed to store order: {e}") from e

    logger.debug(f"Stored order {new_order_id} with {len(jobs)} jobs")
    return new_order_id


@tracer.start_as_current_span("retrieve_order")
def retrieve_order(db: Session, order_id: str) -> RetrievalResult:
    """
    Hand an order over to the customer.

    The final write is a conditional UPDATE on the not-yet-retrieved and
    fully-brewed predicate, so concurrent callers cannot both succeed.

    Args:
        db: Database session
        order_id: Order ID

    Returns:
        RetrievalResult; only RETRIEVED carries the order

    Raises:
        OrderStoreError: If the database rejects the read or write
    """
    trace.get_current_span().set_attribute("order.id", order_id)
    try:
        order = db.query(Order).filter(Order.id == order_id).first()
    except SQLAlchemyError as e:
        db.rollback()
        raise OrderStoreError(f"Failed to load order {order_id}: {e}") from e

    if order is None:
        return RetrievalResult(RetrievalOutcome.NOT_FOUND)

    state = order_state(order)
    if state == OrderState.RETRIEVED:
        return RetrievalResult(RetrievalOutcome.ALREADY_RETRIEVED)
    if state == OrderState.RECEIVED:
        return RetrievalResult(RetrievalOutcome.NOT_READY)

    try:
        updated = (
            db.query(Order)
            .filter(
                Order.id == order_id,
                Order.order_retrieved.is_(None),
                Order.order_brewed == Order.order_size,
            )
            .update({Order.order_retrieved: utcnow()}, synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise OrderStoreError(f"Failed to retrieve order {order_id}: {e}") from e

    if updated != 1:
        # Another request got there first
        trace.get_current_span().add_event("Lost retrieval race")
        return RetrievalResult(RetrievalOutcome.ALREADY_RETRIEVED)

    db.refresh(order)
    return RetrievalResult(RetrievalOutcome.RETRIEVED, order)


@tracer.start_as_current_span("list_orders")
def list_orders(db: Session) -> List[Order]:
    """Return every order, oldest first."""
    try:
        return db.query(Order).order_by(Order.order_received, Order.id).all()
    except SQLAlchemyError as e:
        db.rollback()
        raise OrderStoreError(f"Failed to list orders: {e}") from e

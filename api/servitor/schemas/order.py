"""Order schemas."""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

MAX_CUPS_PER_ENTRY = 100


class OrderState:
    """Order lifecycle states."""

    RECEIVED = "received"  # Cups still brewing
    READY = "ready"  # All cups brewed, waiting for pickup
    RETRIEVED = "retrieved"  # Terminal


# Submission Schemas
class OrderEntry(BaseModel):
    """A single line of an order."""

    product: str = Field(..., description="Beverage name", min_length=1, max_length=255)
    count: int = Field(..., description="Number of cups", gt=0, le=MAX_CUPS_PER_ENTRY)


class OrderSubmission(BaseModel):
    """Incoming order submission."""

    model_config = ConfigDict(populate_by_name=True)

    order_id: Optional[str] = Field(
        None,
        alias="orderId",
        description="Optional client-chosen order ID",
        min_length=1,
        max_length=50,
        pattern=r"^[^/]+$",  # Must fit in a single path segment of /retrieve-order
    )
    coffee_order: List[OrderEntry] = Field(
        default_factory=list,
        alias="coffeeOrder",
        description="Ordered list of products and cup counts",
    )


# Order Schemas
class OrderResponse(BaseModel):
    """Order snapshot."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str = Field(..., alias="orderId")
    order_received: datetime = Field(..., alias="orderReceived")
    order_ready: Optional[datetime] = Field(None, alias="orderReady")
    order_retrieved: Optional[datetime] = Field(None, alias="orderRetrieved")
    order_size: int = Field(..., alias="orderSize")
    order_brewed: int = Field(..., alias="orderBrewed")

    @field_serializer("order_received", "order_ready", "order_retrieved")
    def serialize_utc(self, value: Optional[datetime]) -> Optional[datetime]:
        """Stored timestamps are naive UTC; mark them as such on output."""
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class OrderListResponse(BaseModel):
    """All orders."""

    data: List[OrderResponse]


class MessageResponse(BaseModel):
    """Plain message body."""

    message: str

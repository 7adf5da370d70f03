"""Order endpoints."""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from servitor.api.deps import get_db
from servitor.middleware.request_id import get_request_id
from servitor.schemas.order import (
    MessageResponse,
    OrderListResponse,
    OrderResponse,
    OrderSubmission,
)
from servitor.services.order_service import (
    DuplicateOrderError,
    OrderServiceError,
    RetrievalOutcome,
    list_orders,
    retrieve_order,
    submit_order,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Outcome -> (HTTP status, message, log level)
RETRIEVAL_FAILURES = {
    RetrievalOutcome.NOT_FOUND: (status.HTTP_404_NOT_FOUND, "Order not found!", logging.WARNING),
    RetrievalOutcome.ALREADY_RETRIEVED: (status.HTTP_410_GONE, "Order already delivered", logging.WARNING),
    RetrievalOutcome.NOT_READY: (status.HTTP_503_SERVICE_UNAVAILABLE, "Order not ready", logging.INFO),
}


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


@router.post(
    "/submit-order",
    response_model=str,
    responses={409: {"model": MessageResponse}, 500: {"model": MessageResponse}},
)
def submit(
    submission: OrderSubmission,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Submit a new order.

    - **orderId**: Optional order ID (generated when omitted)
    - **coffeeOrder**: List of `{product, count}` entries

    Returns the order ID.
    """
    request_id = get_request_id(request)
    try:
        order_id = submit_order(db, submission.coffee_order, submission.order_id)
    except DuplicateOrderError as e:
        logger.warning(f"Error accepting order: {e} (request_id={request_id})")
        return _message(status.HTTP_409_CONFLICT, str(e))
    except OrderServiceError as e:
        logger.error(f"Error accepting order: {e} (request_id={request_id})", exc_info=True)
        return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))

    logger.info(f"Order {order_id} accepted (request_id={request_id})")
    return order_id


@router.get(
    "/retrieve-order/{order_id}",
    response_model=OrderResponse,
    responses={
        404: {"model": MessageResponse},
        410: {"model": MessageResponse},
        503: {"model": MessageResponse},
    },
)
def retrieve(
    order_id: str,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Pick up an order once all of its cups are brewed.

    - **order_id**: Order ID

    Returns 503 while brewing is in progress, 410 if already picked up.
    """
    request_id = get_request_id(request)
    try:
        result = retrieve_order(db, order_id)
    except OrderServiceError as e:
        logger.error(f"Error retrieving order {order_id}: {e} (request_id={request_id})", exc_info=True)
        return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))

    if not result.ok:
        status_code, message, level = RETRIEVAL_FAILURES[result.outcome]
        logger.log(level, f"Order {order_id} not retrieved: {message} (request_id={request_id})")
        return _message(status_code, message)

    logger.info(f"Order {order_id} retrieved (request_id={request_id})")
    return result.order


@router.get("/order-list", response_model=OrderListResponse)
def order_list(request: Request, db: Session = Depends(get_db)):
    """List all orders."""
    try:
        orders = list_orders(db)
    except OrderServiceError as e:
        logger.error(f"Error listing orders: {e} (request_id={get_request_id(request)})", exc_info=True)
        return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))

    return OrderListResponse(data=[OrderResponse.model_validate(order) for order in orders])

"""Metrics endpoint."""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.orm import Session

from servitor.api.deps import get_db
from servitor.services.order_service import OrderServiceError
from servitor.services.stats_service import get_stats, render_metrics

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/metrics", response_class=PlainTextResponse)
def metrics(db: Session = Depends(get_db)):
    """Order and job queue counters in Prometheus text format."""
    try:
        stats = get_stats(db)
    except OrderServiceError as e:
        logger.error(f"Error collecting metrics: {e}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": str(e)},
        )

    return PlainTextResponse(render_metrics(stats))

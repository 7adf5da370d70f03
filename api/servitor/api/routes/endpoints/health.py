"""Health check endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from servitor.api.deps import get_db
from servitor.schemas.order import MessageResponse

router = APIRouter()


@router.get("/healthcheck", response_model=MessageResponse)
def healthcheck():
    """Liveness check: the process is up and serving requests."""
    return MessageResponse(message="Ok")


@router.get("/health")
def health(db: Session = Depends(get_db)):
    """Readiness check including database reachability."""
    db_status = "disconnected"
    try:
        db.execute(text("SELECT 1"))
        db_status = "connected"
    except SQLAlchemyError as e:
        db_status = f"error: {str(e)}"

    return {
        "status": "ok" if db_status == "connected" else "degraded",
        "db": db_status,
    }

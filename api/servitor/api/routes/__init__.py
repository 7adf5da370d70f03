"""API router."""

from fastapi import APIRouter

from servitor.api.routes.endpoints import health, metrics, orders

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(orders.router, tags=["orders"])
api_router.include_router(metrics.router, tags=["metrics"])

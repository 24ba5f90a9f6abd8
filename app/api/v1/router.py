"""Main API router that includes all endpoint routers."""

from fastapi import APIRouter

from app.api.v1 import reservations

api_router = APIRouter()

# Reservations
api_router.include_router(reservations.router, prefix="/reservations", tags=["Reservations"])

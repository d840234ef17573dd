# api/v1/router.py
from fastapi import APIRouter
from .endpoints import health, weather, advisory

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(weather.router, prefix="/weather", tags=["weather"])
api_router.include_router(advisory.router, prefix="/advisory", tags=["advisory"])

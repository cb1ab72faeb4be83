"""
Top-level API router.

Aggregates the domain routers under ``/api``.  When new domains are
introduced, include their routers here.
"""

from fastapi import APIRouter

from .endpoints import franchises

router = APIRouter()

router.include_router(franchises.router, prefix="/franchises", tags=["franchises"])

"""
Top‑level API router.

This router aggregates domain‑specific routers under a unified
prefix.  When new domains are introduced, include their routers here.
"""

from fastapi import APIRouter

from .endpoints import quotes

router = APIRouter()

router.include_router(quotes.router, prefix="/quotes", tags=["quotes"])

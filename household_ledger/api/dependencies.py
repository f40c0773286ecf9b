"""Dependency injection for FastAPI endpoints"""

from typing import Tuple
from fastapi import Query, Request


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_target_month(
    year: int = Query(..., ge=1, le=9999, description="Target year"),
    month: int = Query(..., ge=1, le=12, description="Target month, 1-12"),
) -> Tuple[int, int]:
    """Target month passed explicitly by the caller; the service never infers it"""
    return year, month

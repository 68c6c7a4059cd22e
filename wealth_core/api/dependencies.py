"""Dependency injection for FastAPI endpoints"""

from datetime import date
from fastapi import Request
from wealth_core.infrastructure.clients.store import WealthStoreClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_store_client() -> WealthStoreClient:
    """Provide wealth tracker backend client instance"""
    return WealthStoreClient()


def get_today() -> date:
    """Valuation date for requests that do not pass one; overridden in tests"""
    return date.today()

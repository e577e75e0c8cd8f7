"""Upstream API clients."""
from app.api.deals_client import DealsAPIClient

__all__ = ["DealsAPIClient"]

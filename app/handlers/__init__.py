"""Handlers package."""
from app.handlers.deal_handler import DealHandler

__all__ = ["DealHandler"]

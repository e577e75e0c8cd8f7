"""Routers package."""
from app.routers.deal_router import router as deal_router, set_deal_handler
from app.routers.debug_router import router as debug_router, set_debug_dependencies

__all__ = ["deal_router", "set_deal_handler", "debug_router", "set_debug_dependencies"]

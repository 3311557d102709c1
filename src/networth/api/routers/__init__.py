"""API routers package."""

from networth.api.routers.net_worth import router as net_worth_router

__all__ = [
    "net_worth_router",
]

# Routers package
from . import updates_router

__all__ = [
    "updates_router"
]

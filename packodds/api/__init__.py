from packodds.api.health import router as health_router
from packodds.api.odds import router as odds_router
from packodds.api.wishlist import router as wishlist_router

__all__ = [
    "health_router",
    "odds_router",
    "wishlist_router",
]

from foodgarden.web.routers.auth import router as auth_router
from foodgarden.web.routers.foods import router as foods_router
from foodgarden.web.routers.health import router as health_router

__all__ = [
    "auth_router",
    "foods_router",
    "health_router",
]

from boutique.web.routers.auth import router as auth_router
from boutique.web.routers.products import router as products_router
from boutique.web.routers.users import router as users_router

__all__ = [
    "auth_router",
    "products_router",
    "users_router",
]

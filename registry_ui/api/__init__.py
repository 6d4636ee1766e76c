from .images import router as images_router
from .registry import router as registry_router
from .views import router as views_router

__all__ = [
    "images_router",
    "registry_router",
    "views_router",
]

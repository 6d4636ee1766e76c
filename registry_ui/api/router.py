from fastapi import APIRouter

from registry_ui.api import images, registry, views

router = APIRouter()

# API routes
router.include_router(registry.router)
router.include_router(images.router)

# HTML view routes
router.include_router(views.router, tags=["views"])

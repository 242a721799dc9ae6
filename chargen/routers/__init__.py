from .character import router as character_router

ROUTERS = (character_router,)

__all__ = [
    "ROUTERS",
    "character_router",
]

from .translation import router as translation_router

__all__ = ["translation_router"]

"""
Routers Package
===============

Routers are like the reception desk - they direct incoming requests
to the right place.
"""

from .forms import router as forms_router
from .sync import router as sync_router
from .upload import router as upload_router

__all__ = [
    "forms_router",
    "sync_router",
    "upload_router",
]

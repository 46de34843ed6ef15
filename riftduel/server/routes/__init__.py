"""
API Routes
"""

from .match import router as match_router
from .cards import router as cards_router

__all__ = ['match_router', 'cards_router']

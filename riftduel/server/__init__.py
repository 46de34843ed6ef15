"""
Riftduel Server Module

FastAPI-based API server for matches against the scripted opponent.
"""

from .main import app
from .session import GameSession, SessionManager

__all__ = ['app', 'GameSession', 'SessionManager']

"""
Riftduel AI

Scripted opponent for the non-human side.
"""

from .opponent import OpponentPolicy

__all__ = ['OpponentPolicy']

"""
Riftduel Card Sets

Core set catalog and tokens. Importing this package registers the core set's
scripted behaviour with the engine.
"""

from riftduel.cards.core_set import CORE_SET, TOKENS, CARDS_BY_ID, MISTWOLF
from riftduel.cards import scripts  # noqa: F401  registers dispatch handlers

__all__ = ['CORE_SET', 'TOKENS', 'CARDS_BY_ID', 'MISTWOLF']

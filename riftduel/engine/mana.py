"""
Riftduel Mana System

Crystal-based mana:
- Each side gains 1 crystal per turn (max 10)
- Crystals refill at turn start
- Effective card cost is the printed cost adjusted by artifact auras
"""

import logging

from .types import CardInstance, GameState, Side
from . import dispatch

logger = logging.getLogger(__name__)


class ManaSystem:
    """
    Mana crystals for both sides, plus the cost-reduction aura query.
    """

    def __init__(self, state: GameState, max_mana: int):
        self.state = state
        self.max_mana = max_mana

    def on_turn_start(self, side: Side) -> None:
        """Gain 1 crystal (up to the cap) and refill."""
        mana = self.state.side(side).mana
        if mana.max < self.max_mana:
            mana.max += 1
        mana.current = mana.max
        logger.debug("%s mana %d/%d", side.value, mana.current, mana.max)

    def effective_cost(self, card: CardInstance, owner: Side) -> int:
        """
        Printed cost, reduced by an active cost aura on the owner's artifact.
        Reductions never take a cost below 1.
        """
        base = card.definition.cost
        reduction = dispatch.cost_reduction(self.state.side(owner).artifact_slot)
        if reduction:
            return max(1, base - reduction)
        return base

    def can_pay_cost(self, side: Side, cost: int) -> bool:
        return self.state.side(side).mana.current >= cost

    def pay_cost(self, side: Side, cost: int) -> bool:
        if not self.can_pay_cost(side, cost):
            return False
        self.state.side(side).mana.current -= cost
        return True

    def set_pool(self, side: Side, amount: int) -> None:
        """Set both current and max crystals (game start)."""
        mana = self.state.side(side).mana
        mana.max = min(amount, self.max_mana)
        mana.current = mana.max

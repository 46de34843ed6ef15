"""
Scripted Opponent

Plays the opponent side's turn:
1. Play creatures greedily (first affordable card with board room)
2. Attack with every ready minion (hero first, else a random legal target)
3. End turn

Pauses between steps are cosmetic. Pass an instant `sleep` (or zero delays in
GameConfig) to run a whole turn without waiting.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, TYPE_CHECKING

from riftduel.engine.queries import attack_targets, can_minion_attack
from riftduel.engine.types import CardInstance, CardType, Side, Target, TargetKind

if TYPE_CHECKING:
    from riftduel.engine.game import Game

logger = logging.getLogger(__name__)


class OpponentPolicy:
    """
    Greedy creature-curve opponent.

    Spells and artifacts stay in hand; targeted battlecries are played
    without a target.
    """

    def __init__(self, sleep: Optional[Callable[[float], Awaitable[None]]] = None):
        self.sleep = sleep or asyncio.sleep

    async def take_turn(self, game: 'Game') -> None:
        """
        Execute a full opponent turn, then hand control back.

        Game over is checked before starting and after the attack phase only.
        """
        state = game.state
        try:
            if state.game_over:
                logger.info("Game over, opponent does nothing")
                return
            if state.active_side is not Side.OPPONENT:
                logger.warning("Opponent asked to act on the player's turn")
                return

            await self.sleep(game.config.opponent_think_delay)
            await self._play_phase(game)
            await self.sleep(game.config.opponent_action_delay)
            await self._attack_phase(game)

            if state.game_over:
                logger.info("Game ended during opponent attacks")
                return
            await self.sleep(game.config.opponent_action_delay)
        finally:
            state.opponent_thinking = False

        if not state.game_over and state.active_side is Side.OPPONENT:
            game.end_opponent_turn()

    # =========================================================================
    # Play phase
    # =========================================================================

    async def _play_phase(self, game: 'Game') -> None:
        while True:
            card = self._choose_card_to_play(game)
            if card is None:
                logger.debug("Opponent has nothing more to play")
                return
            success, message = game.play_card(Side.OPPONENT, card.instance_id)
            if not success:
                logger.warning("Opponent play of %s rejected: %s", card.name, message)
                return
            await self.sleep(game.config.opponent_action_delay)

    def _choose_card_to_play(self, game: 'Game') -> Optional[CardInstance]:
        """First creature in hand that is affordable and fits on the board."""
        opponent = game.state.opponent
        if len(opponent.board) >= game.config.max_board_size:
            return None
        for card in opponent.hand:
            if card.type != CardType.CREATURE:
                continue
            if game.mana_system.effective_cost(card, Side.OPPONENT) <= opponent.mana.current:
                return card
        return None

    # =========================================================================
    # Attack phase
    # =========================================================================

    async def _attack_phase(self, game: 'Game') -> None:
        opponent = game.state.opponent
        attackers = [m for m in opponent.board if can_minion_attack(m)]

        for attacker in attackers:
            if opponent.find_on_board(attacker.instance_id) is None:
                logger.debug("%s died before it could attack", attacker.name)
                continue
            if not can_minion_attack(attacker):
                continue
            target = self._choose_attack_target(game)
            if target is None:
                continue
            game.opponent_attack(attacker.instance_id, target)
            await self.sleep(game.config.opponent_action_delay)

    def _choose_attack_target(self, game: 'Game') -> Optional[Target]:
        """Face if allowed, otherwise any legal target at random."""
        pool = attack_targets(game.state, Side.PLAYER)
        if not pool:
            return None
        for target in pool:
            if target.kind == TargetKind.HERO:
                return target
        return game.rng.choice(pool)

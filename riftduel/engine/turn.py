"""
Riftduel Turn Manager

Turn structure:
1. End of turn for the side that passes (ready its minions, clear its plays)
2. Control flips; the turn counter advances when the human side is up again
3. Start of turn for the new side:
   artifact duration -> artifact effect -> unfreeze -> mana -> draw

There is no separate combat phase: attacks happen whenever the active side
has control.
"""

from typing import Optional, TYPE_CHECKING
import logging

from .types import EventType, GameState, Side
from . import dispatch

if TYPE_CHECKING:
    from .config import GameConfig
    from .game import Game
    from .mana import ManaSystem
    from .pipeline import DamagePipeline

logger = logging.getLogger(__name__)


class TurnManager:
    """
    Drives end-of-turn / start-of-turn sequencing and card draw.
    """

    def __init__(self, state: GameState, config: 'GameConfig', mana_system: 'ManaSystem'):
        self.state = state
        self.config = config
        self.mana_system = mana_system

        # Other systems (set by Game class)
        self.game: Optional['Game'] = None
        self.pipeline: Optional['DamagePipeline'] = None

    def end_turn(self) -> Side:
        """
        Pass control to the other side and run its start-of-turn sequence.
        Returns the side that is now active.
        """
        ending_side = self.state.active_side
        ending = self.state.side(ending_side)
        logger.info("Ending %s turn %d", ending_side.value, self.state.turn)

        for minion in ending.board:
            minion.can_attack = True
        finished_plays = set(ending.played_types_this_turn)
        ending.played_types_this_turn = set()
        if ending_side is Side.PLAYER:
            self.state.clear_selection()
        self.state.log(EventType.TURN_END, side=ending_side.value)

        next_side = ending_side.other
        self.state.active_side = next_side
        if next_side is Side.PLAYER:
            self.state.turn += 1

        # Combo: what was played on the turn that just finished
        self.state.side(next_side).played_types_last_turn = finished_plays

        self.start_of_turn(next_side)
        return next_side

    def start_of_turn(self, side: Side) -> None:
        player = self.state.side(side)
        logger.info("Starting %s turn %d", side.value, self.state.turn)
        self.state.log(EventType.TURN_START, side=side.value)

        # Artifact duration ticks down before anything else reads it
        artifact = player.artifact_slot
        if artifact is not None and artifact.remaining_duration is not None:
            artifact.remaining_duration -= 1
            logger.debug("%s duration now %d", artifact.name, artifact.remaining_duration)
            if artifact.remaining_duration <= 0:
                player.graveyard.append(artifact)
                player.artifact_slot = None
                logger.info("%s expired", artifact.name)
                self.state.log(EventType.ARTIFACT_EXPIRED, artifact=artifact.instance_id,
                               owner=side.value)

        dispatch.run_artifact_turn_start(self.game, side)

        for minion in player.board:
            minion.is_frozen = False

        self.mana_system.on_turn_start(side)
        self.draw_card(side)

    def draw_card(self, side: Side) -> None:
        """
        Draw from the front of the deck. A full hand burns the card; an empty
        deck deals escalating fatigue damage instead.
        """
        player = self.state.side(side)
        if player.deck:
            card = player.deck.pop(0)
            if len(player.hand) >= self.config.max_hand_size:
                player.graveyard.append(card)
                logger.info("%s hand full, burned %s", side.value, card.name)
                self.state.log(EventType.CARD_BURNED, card=card.instance_id, owner=side.value)
            else:
                player.hand.append(card)
                logger.debug("%s draws %s", side.value, card.name)
                self.state.log(EventType.DRAW, card=card.instance_id, owner=side.value)
            return

        damage = player.fatigue
        player.fatigue += 1
        logger.info("%s takes %d fatigue damage", side.value, damage)
        self.state.log(EventType.FATIGUE_DAMAGE, owner=side.value, amount=damage)
        # Fatigue bypasses armor
        player.hero.hp -= damage
        if not self.pipeline.sweep_deferred:
            self.pipeline.death_sweep()

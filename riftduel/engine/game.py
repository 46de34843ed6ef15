"""
Riftduel Game Manager

High-level match operations. Integrates the damage pipeline, mana, turn,
combat and targeting systems, and hands the scripted side's turns to the
opponent policy.

Every public operation returns (success, message). Soft rejections leave the
state untouched; only ResolutionDepthExceeded escapes, and it ends the match.
"""

from typing import Callable, Optional, Sequence, TYPE_CHECKING
import asyncio
import logging
import random

from .types import (
    CardDefinition, CardInstance, CardType, EventType, GameState, Hero,
    InvalidAction, InvariantViolation, Mechanic, PlayerState,
    ResolutionDepthExceeded, Side, Target, TargetingMode
)
from .config import GameConfig
from .pipeline import DamagePipeline
from .queries import can_minion_attack, target_matches
from .mana import ManaSystem
from .turn import TurnManager
from .combat import CombatManager
from .targeting import TargetingSystem, check_attack_target
from . import dispatch

if TYPE_CHECKING:
    from riftduel.ai.opponent import OpponentPolicy

logger = logging.getLogger(__name__)


class Game:
    """
    Main match controller.

    Integrates all subsystems:
    - Damage Pipeline
    - Mana System
    - Turn Manager
    - Combat Manager
    - Targeting System
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        catalog: Optional[Sequence[CardDefinition]] = None,
        opponent_policy: Optional['OpponentPolicy'] = None
    ):
        # Importing the card package registers its scripts
        from riftduel.cards import CORE_SET, TOKENS

        self.config = config or GameConfig()
        self.catalog: list[CardDefinition] = list(catalog if catalog is not None else CORE_SET)
        self._definitions = {d.id: d for d in list(TOKENS) + self.catalog}
        self.rng = random.Random(self.config.seed)

        self.state = GameState()
        self.pipeline = DamagePipeline(self.state, self.config)
        self.mana_system = ManaSystem(self.state, self.config.max_mana)
        self.turn_manager = TurnManager(self.state, self.config, self.mana_system)
        self.combat_manager = CombatManager(self.state)
        self.targeting_system = TargetingSystem(self.state)

        self._connect_subsystems()

        if opponent_policy is None:
            from riftduel.ai.opponent import OpponentPolicy
            opponent_policy = OpponentPolicy()
        self.opponent_policy = opponent_policy
        self._opponent_task: Optional[asyncio.Task] = None

    def _connect_subsystems(self):
        """Wire up dependencies between subsystems."""
        self.pipeline.game = self

        self.turn_manager.game = self
        self.turn_manager.pipeline = self.pipeline

        self.combat_manager.game = self
        self.combat_manager.pipeline = self.pipeline

        self.targeting_system.game = self

    # =========================================================================
    # Catalog
    # =========================================================================

    def card_definition(self, card_id: int) -> CardDefinition:
        try:
            return self._definitions[card_id]
        except KeyError:
            raise InvariantViolation(f"unknown card id {card_id}") from None

    # =========================================================================
    # Setup
    # =========================================================================

    def start_game(self) -> tuple[bool, str]:
        """
        Reset to a fresh match: one shuffled copy of the catalog per side,
        opening hands drawn, human side to act on turn 1.
        """
        if self._opponent_task is not None and not self._opponent_task.done():
            self._opponent_task.cancel()
        self._opponent_task = None

        state = self.state
        state.player = self._fresh_player(Side.PLAYER)
        state.opponent = self._fresh_player(Side.OPPONENT)
        state.turn = 1
        state.active_side = Side.PLAYER
        state.clear_selection()
        state.opponent_thinking = False
        state.game_over = False
        state.winner = None
        state.event_log = []

        self.mana_system.set_pool(Side.PLAYER, self.config.player_starting_mana)
        self.mana_system.set_pool(Side.OPPONENT, self.config.opponent_starting_mana)

        for _ in range(self.config.player_opening_draw):
            self.turn_manager.draw_card(Side.PLAYER)
        for _ in range(self.config.opponent_opening_draw):
            self.turn_manager.draw_card(Side.OPPONENT)

        logger.info("Match started (seed=%s, %d cards per deck)", self.config.seed, len(self.catalog))
        state.log(EventType.GAME_START, seed=self.config.seed)
        return True, "game started"

    def _fresh_player(self, side: Side) -> PlayerState:
        hp = self.config.starting_hp
        deck = [CardInstance.from_definition(d) for d in self.catalog]
        self.rng.shuffle(deck)
        return PlayerState(side=side, deck=deck, hero=Hero(hp=hp, max_hp=hp))

    # =========================================================================
    # Operation boundary
    # =========================================================================

    def _attempt(self, operation: Callable, *args) -> tuple[bool, str]:
        try:
            message = operation(*args)
        except InvalidAction as exc:
            logger.warning("Rejected %s: %s", operation.__name__, exc)
            return False, str(exc)
        except InvariantViolation as exc:
            logger.error("Aborted %s: %s", operation.__name__, exc)
            return False, str(exc)
        except ResolutionDepthExceeded:
            logger.exception("Match halted during %s", operation.__name__)
            self.state.game_over = True
            raise
        return True, message or "ok"

    # =========================================================================
    # Human actions
    # =========================================================================

    def select_card(self, instance_id: str) -> tuple[bool, str]:
        return self._attempt(self.targeting_system.select_card, instance_id)

    def select_card_target(self, target: Target) -> tuple[bool, str]:
        return self._attempt(self.targeting_system.select_card_target, target)

    def play_selected_card(self, target: Optional[Target] = None) -> tuple[bool, str]:
        return self._attempt(self.targeting_system.play_selected_card, target)

    def select_attacker(self, instance_id: str) -> tuple[bool, str]:
        return self._attempt(self.targeting_system.select_attacker, instance_id)

    def select_attack_target(self, target: Target) -> tuple[bool, str]:
        return self._attempt(self.targeting_system.select_attack_target, target)

    def cancel_selection(self) -> tuple[bool, str]:
        return self._attempt(self.targeting_system.cancel_selection)

    def end_turn(self) -> tuple[bool, str]:
        """End the human turn and hand control to the opponent policy."""
        return self._attempt(self._end_player_turn)

    def _end_player_turn(self) -> str:
        self.targeting_system.require_human_turn()
        self._advance_turn()
        return "turn ended"

    # =========================================================================
    # Shared actions
    # =========================================================================

    def play_card(self, side: Side, instance_id: str,
                  target: Optional[Target] = None) -> tuple[bool, str]:
        return self._attempt(self.play_card_now, side, instance_id, target)

    def play_card_now(self, side: Side, instance_id: str,
                      target: Optional[Target] = None) -> str:
        """
        Play a card from `side`'s hand. Every check runs before anything is
        paid, so a rejected play changes nothing.
        """
        state = self.state
        if state.game_over:
            raise InvalidAction("game is over")
        if state.active_side is not side:
            raise InvalidAction(f"not {side.value}'s turn")
        player = state.side(side)
        card = player.find_in_hand(instance_id)
        if card is None:
            raise InvalidAction(f"card {instance_id} is not in {side.value}'s hand")

        definition = card.definition
        cost = self.mana_system.effective_cost(card, side)
        if not self.mana_system.can_pay_cost(side, cost):
            raise InvalidAction(f"not enough mana for {card.name} ({cost} > {player.mana.current})")
        if definition.type == CardType.CREATURE and len(player.board) >= self.config.max_board_size:
            raise InvalidAction("board is full")
        # Spells need their target; a battlecry may go without one
        if definition.requires_target and (definition.type == CardType.SPELL or target is not None):
            if not target_matches(state, definition.target_type, side, target):
                described = target.describe() if target else "no target"
                raise InvalidAction(f"{described} is not a valid target for {card.name}")

        self.mana_system.pay_cost(side, cost)
        player.hand.remove(card)
        player.played_types_this_turn.add(definition.type)
        logger.info("%s plays %s for %d", side.value, card.name, cost)
        state.log(EventType.CARD_PLAYED, card=card.instance_id, card_id=card.card_id,
                  owner=side.value, cost=cost,
                  target=target.describe() if target else None)

        if definition.type == CardType.CREATURE:
            self._play_creature(card, side, target)
        elif definition.type == CardType.SPELL:
            dispatch.resolve_spell(self, card, side, target)
            dispatch.trigger_spellburst(self, side)
            player.graveyard.append(card)
        else:
            self._equip_artifact(card, side)
        return f"played {card.name}"

    def _play_creature(self, card: CardInstance, side: Side, target: Optional[Target]) -> None:
        player = self.state.side(side)
        if dispatch.resolve_play_override(self, card, side):
            player.graveyard.append(card)
            return
        card.can_attack = False
        player.board.append(card)
        if card.has_mechanic(Mechanic.BATTLECRY):
            dispatch.resolve_battlecry(self, card, side, target)

    def _equip_artifact(self, card: CardInstance, side: Side) -> None:
        player = self.state.side(side)
        old = player.artifact_slot
        if old is not None:
            player.graveyard.append(old)
            logger.info("%s replaces %s", card.name, old.name)
        card.remaining_duration = card.definition.durability
        player.artifact_slot = card
        self.state.log(EventType.ARTIFACT_EQUIPPED, artifact=card.instance_id,
                       card_id=card.card_id, owner=side.value)

    # =========================================================================
    # Opponent actions
    # =========================================================================

    def opponent_attack(self, attacker_id: str, target: Target) -> tuple[bool, str]:
        return self._attempt(self._opponent_attack, attacker_id, target)

    def _opponent_attack(self, attacker_id: str, target: Target) -> str:
        if self.state.game_over:
            raise InvalidAction("game is over")
        if self.state.active_side is not Side.OPPONENT:
            raise InvalidAction("not opponent's turn")
        attacker = self.state.opponent.find_on_board(attacker_id)
        if attacker is None:
            raise InvalidAction(f"{attacker_id} is not on the opponent's board")
        if not can_minion_attack(attacker):
            raise InvalidAction(f"{attacker.name} cannot attack")
        check_attack_target(self.state, Side.OPPONENT, target)
        self.combat_manager.execute_attack(attacker_id, target)
        return f"{attacker.name} attacked {target.describe()}"

    def end_opponent_turn(self) -> tuple[bool, str]:
        return self._attempt(self._end_opponent_turn)

    def _end_opponent_turn(self) -> str:
        if self.state.active_side is not Side.OPPONENT:
            raise InvalidAction("not opponent's turn")
        self._advance_turn()
        return "opponent turn ended"

    # =========================================================================
    # Turn flow
    # =========================================================================

    def _advance_turn(self) -> None:
        if self.state.game_over:
            raise InvalidAction("game is over")
        next_side = self.turn_manager.end_turn()
        if next_side is Side.OPPONENT:
            self._schedule_opponent_turn()

    def _schedule_opponent_turn(self) -> None:
        """
        Run the opponent policy. Inside an event loop it runs as a task;
        otherwise it runs to completion before this returns.
        """
        self.state.opponent_thinking = True
        turn = self.opponent_policy.take_turn(self)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(turn)
            return
        self._opponent_task = loop.create_task(turn)

    async def wait_for_opponent(self) -> None:
        """Wait for a scheduled opponent turn to finish."""
        task = self._opponent_task
        if task is not None:
            await task
            self._opponent_task = None

    # =========================================================================
    # Queries
    # =========================================================================

    def effective_cost(self, side: Side, instance_id: str) -> Optional[int]:
        card = self.state.side(side).find_in_hand(instance_id)
        if card is None:
            return None
        return self.mana_system.effective_cost(card, side)

    @property
    def turn(self) -> int:
        return self.state.turn

    @property
    def active_side(self) -> Side:
        return self.state.active_side

    @property
    def targeting_mode(self) -> TargetingMode:
        return self.state.targeting_mode

    @property
    def player(self) -> PlayerState:
        return self.state.player

    @property
    def opponent(self) -> PlayerState:
        return self.state.opponent

    def is_game_over(self) -> bool:
        return self.state.game_over

    def get_winner(self) -> Optional[Side]:
        return self.state.winner


# =============================================================================
# Card Builder Helpers
# =============================================================================

def make_creature(
    card_id: int,
    name: str,
    cost: int,
    attack: int,
    health: int,
    text: str = "",
    mechanics: set[str] = None,
    target_type=None
) -> CardDefinition:
    """Helper to create creature card definitions."""
    return CardDefinition(
        id=card_id,
        name=name,
        type=CardType.CREATURE,
        cost=cost,
        attack=attack,
        health=health,
        text=text,
        mechanics=frozenset(mechanics or ()),
        requires_target=target_type is not None,
        target_type=target_type
    )


def make_spell(
    card_id: int,
    name: str,
    cost: int,
    text: str = "",
    mechanics: set[str] = None,
    target_type=None
) -> CardDefinition:
    """Helper to create spell card definitions."""
    return CardDefinition(
        id=card_id,
        name=name,
        type=CardType.SPELL,
        cost=cost,
        text=text,
        mechanics=frozenset(mechanics or ()),
        requires_target=target_type is not None,
        target_type=target_type
    )


def make_artifact(
    card_id: int,
    name: str,
    cost: int,
    durability: Optional[int] = None,
    text: str = "",
    mechanics: set[str] = None
) -> CardDefinition:
    """Helper to create artifact card definitions. No durability means permanent."""
    return CardDefinition(
        id=card_id,
        name=name,
        type=CardType.ARTIFACT,
        cost=cost,
        durability=durability,
        text=text,
        mechanics=frozenset(mechanics or ())
    )

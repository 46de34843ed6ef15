"""
Riftduel Targeting System

The human side's selection state machine:

    none --select card (needs target)--> card --select target--> play
    none --select attacker-------------> attack --select target--> combat

At most one selection is active. Methods raise InvalidAction on a soft
rejection; Game turns that into a (False, message) result.
"""

from typing import Optional, TYPE_CHECKING
import logging

from .types import (
    CardType, GameState, InvalidAction, InvariantViolation, Side, Target,
    TargetKind, TargetingMode
)
from .queries import (
    can_minion_attack, living_taunts, resolve_target, target_matches, valid_targets
)

if TYPE_CHECKING:
    from .game import Game

logger = logging.getLogger(__name__)


class TargetingSystem:
    """
    Card and attack selection for the human side.
    """

    def __init__(self, state: GameState):
        self.state = state
        self.game: Optional['Game'] = None  # set by Game

    def require_human_turn(self) -> None:
        if self.state.game_over:
            raise InvalidAction("game is over")
        if self.state.active_side is not Side.PLAYER or self.state.opponent_thinking:
            raise InvalidAction("not your turn")

    # -------------------------------------------------------------------------
    # Cards
    # -------------------------------------------------------------------------

    def select_card(self, instance_id: str) -> str:
        self.require_human_turn()
        player = self.state.player
        card = player.find_in_hand(instance_id)
        if card is None:
            raise InvalidAction(f"card {instance_id} is not in your hand")

        cost = self.game.mana_system.effective_cost(card, Side.PLAYER)
        if cost > player.mana.current:
            self.state.clear_selection()
            raise InvalidAction(f"not enough mana for {card.name} ({cost} > {player.mana.current})")

        definition = card.definition
        needs_target = definition.requires_target
        if needs_target and definition.type == CardType.CREATURE:
            # A battlecry with nothing to aim at is played without a target
            needs_target = bool(valid_targets(self.state, definition.target_type, Side.PLAYER))

        self.state.selected_card_id = instance_id
        self.state.selected_attacker_id = None
        if needs_target:
            self.state.targeting_mode = TargetingMode.CARD
            logger.info("%s needs a %s target", card.name, definition.target_type.value)
            return f"choose a target for {card.name}"

        self.state.targeting_mode = TargetingMode.NONE
        return self.play_selected_card()

    def select_card_target(self, target: Target) -> str:
        if self.state.targeting_mode is not TargetingMode.CARD or not self.state.selected_card_id:
            raise InvalidAction("no card is waiting for a target")
        card = self.state.player.find_in_hand(self.state.selected_card_id)
        if card is None:
            self.state.clear_selection()
            raise InvariantViolation(f"selected card {self.state.selected_card_id} left the hand")
        if not target_matches(self.state, card.definition.target_type, Side.PLAYER, target):
            raise InvalidAction(f"{target.describe()} is not a valid target for {card.name}")
        return self.play_selected_card(target)

    def play_selected_card(self, target: Optional[Target] = None) -> str:
        if not self.state.selected_card_id:
            raise InvalidAction("no card selected")
        card = self.state.player.find_in_hand(self.state.selected_card_id)
        if card is None:
            self.state.clear_selection()
            raise InvariantViolation(f"selected card {self.state.selected_card_id} left the hand")
        try:
            self.require_human_turn()
        except InvalidAction:
            self.state.clear_selection()
            raise
        cost = self.game.mana_system.effective_cost(card, Side.PLAYER)
        if not self.game.mana_system.can_pay_cost(Side.PLAYER, cost):
            self.state.clear_selection()
            raise InvalidAction(f"not enough mana for {card.name}")

        # A full board keeps the selection so the player can trade first
        self.game.play_card_now(Side.PLAYER, card.instance_id, target)
        self.state.clear_selection()
        return f"played {card.name}"

    # -------------------------------------------------------------------------
    # Attacks
    # -------------------------------------------------------------------------

    def select_attacker(self, instance_id: str) -> str:
        self.require_human_turn()
        attacker = self.state.player.find_on_board(instance_id)
        if attacker is None:
            raise InvalidAction(f"{instance_id} is not on your board")
        if not attacker.can_attack:
            raise InvalidAction(f"{attacker.name} cannot attack")
        if attacker.is_frozen:
            raise InvalidAction(f"{attacker.name} is frozen")
        if (attacker.current_attack or 0) <= 0:
            raise InvalidAction(f"{attacker.name} has no attack")

        self.state.selected_card_id = None
        if self.state.selected_attacker_id == instance_id:
            self.state.selected_attacker_id = None
            self.state.targeting_mode = TargetingMode.NONE
            return f"deselected {attacker.name}"

        self.state.selected_attacker_id = instance_id
        self.state.targeting_mode = TargetingMode.ATTACK
        return f"selected {attacker.name}"

    def select_attack_target(self, target: Target) -> str:
        self.require_human_turn()
        attacker_id = self.state.selected_attacker_id
        if self.state.targeting_mode is not TargetingMode.ATTACK or not attacker_id:
            raise InvalidAction("no attacker selected")
        attacker = self.state.player.find_on_board(attacker_id)
        if attacker is None:
            self.state.clear_selection()
            raise InvariantViolation(f"selected attacker {attacker_id} is gone")
        if not can_minion_attack(attacker):
            self.state.clear_selection()
            raise InvalidAction(f"{attacker.name} can no longer attack")

        check_attack_target(self.state, Side.PLAYER, target)
        self.game.combat_manager.execute_attack(attacker_id, target)
        self.state.clear_selection()
        return f"{attacker.name} attacked {target.describe()}"

    def cancel_selection(self) -> str:
        self.state.clear_selection()
        return "selection cleared"


def check_attack_target(state: GameState, attacker_side: Side, target: Target) -> None:
    """Raise InvalidAction unless `target` may be attacked by `attacker_side`."""
    if target.owner == attacker_side:
        raise InvalidAction("cannot attack a friendly character")
    taunts = living_taunts(state.side(target.owner))
    if taunts:
        taunt_ids = {m.instance_id for m in taunts}
        if target.kind != TargetKind.MINION or target.instance_id not in taunt_ids:
            raise InvalidAction("must attack a Taunt minion")
    if resolve_target(state, target) is None:
        raise InvalidAction(f"{target.describe()} not found")

"""
Game Session Management

Manages active matches and converts engine state for clients.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Optional
from uuid import uuid4
import time
import logging

from riftduel.engine import (
    CardInstance, Event, Game, GameConfig, PlayerState, Side, Target, TargetKind
)

from .models import (
    ActionType, CardData, GameStateResponse, HeroData, PlayerActionRequest,
    PlayerData, TargetData
)

logger = logging.getLogger(__name__)


def generate_id() -> str:
    """Generate a short unique ID."""
    return str(uuid4())[:8]


@dataclass
class GameSession:
    """
    Manages a single match between a human and the scripted opponent.

    Wraps the engine Game class and provides:
    - State serialization for clients
    - Action dispatch with validation
    """
    id: str
    game: Game
    player_name: str = "Player"
    created_at: float = field(default_factory=time.time)

    def start_game(self) -> None:
        self.game.start_game()
        logger.info("Session %s started (seed=%s)", self.id, self.game.config.seed)

    async def handle_action(self, request: PlayerActionRequest) -> tuple[bool, str, list[Event]]:
        """
        Apply a human action.

        Returns (success, message, events logged by the action). Ending the
        turn waits for the opponent's whole turn before returning.
        """
        before = len(self.game.state.event_log)
        action = request.action_type

        if action == ActionType.SELECT_CARD:
            if not request.instance_id:
                return False, "instance_id required", []
            success, message = self.game.select_card(request.instance_id)
        elif action == ActionType.SELECT_CARD_TARGET:
            target = self._coerce_target(request.target)
            if target is None:
                return False, "valid target required", []
            success, message = self.game.select_card_target(target)
        elif action == ActionType.PLAY_SELECTED:
            success, message = self.game.play_selected_card(self._coerce_target(request.target))
        elif action == ActionType.SELECT_ATTACKER:
            if not request.instance_id:
                return False, "instance_id required", []
            success, message = self.game.select_attacker(request.instance_id)
        elif action == ActionType.SELECT_ATTACK_TARGET:
            target = self._coerce_target(request.target)
            if target is None:
                return False, "valid target required", []
            success, message = self.game.select_attack_target(target)
        elif action == ActionType.CANCEL:
            success, message = self.game.cancel_selection()
        else:
            success, message = self.game.end_turn()
            await self.game.wait_for_opponent()

        events = self.game.state.event_log[before:]
        return success, message, events

    def _coerce_target(self, data: Optional[TargetData]) -> Optional[Target]:
        """Convert a client target into an engine Target. None if malformed."""
        if data is None:
            return None
        try:
            kind = TargetKind(data.kind)
            owner = Side(data.owner)
        except ValueError:
            logger.warning("Malformed target from client: %s", data)
            return None
        if kind == TargetKind.MINION:
            if not data.instance_id:
                return None
            return Target.minion(owner, data.instance_id)
        return Target.hero(owner)

    # =========================================================================
    # Serialization
    # =========================================================================

    def get_client_state(self) -> GameStateResponse:
        state = self.game.state
        return GameStateResponse(
            match_id=self.id,
            turn=state.turn,
            active_side=state.active_side.value,
            targeting_mode=state.targeting_mode.value,
            selected_card_id=state.selected_card_id,
            selected_attacker_id=state.selected_attacker_id,
            opponent_thinking=state.opponent_thinking,
            player=self._serialize_player(state.player, self.player_name, show_hand=True),
            opponent=self._serialize_player(state.opponent, "Opponent", show_hand=False),
            is_game_over=state.game_over,
            winner=state.winner.value if state.winner else None
        )

    def _serialize_player(self, player: PlayerState, name: str, show_hand: bool) -> PlayerData:
        hand = []
        if show_hand:
            hand = [
                self._serialize_card(card, self.game.mana_system.effective_cost(card, player.side))
                for card in player.hand
            ]
        artifact = player.artifact_slot
        return PlayerData(
            side=player.side.value,
            name=name,
            hero=HeroData(hp=player.hero.hp, armor=player.hero.armor, max_hp=player.hero.max_hp),
            mana=player.mana.current,
            max_mana=player.mana.max,
            hand=hand,
            hand_size=len(player.hand),
            deck_size=len(player.deck),
            board=[self._serialize_card(m) for m in player.board],
            artifact=self._serialize_card(artifact) if artifact else None,
            graveyard=[self._serialize_card(c) for c in player.graveyard],
            fatigue=player.fatigue
        )

    def _serialize_card(self, card: CardInstance, effective_cost: Optional[int] = None) -> CardData:
        definition = card.definition
        return CardData(
            instance_id=card.instance_id,
            card_id=card.card_id,
            name=card.name,
            type=card.type.value,
            cost=definition.cost,
            effective_cost=effective_cost,
            attack=card.current_attack,
            health=card.current_health,
            text=definition.text,
            mechanics=sorted(definition.mechanics),
            can_attack=card.can_attack,
            is_frozen=card.is_frozen,
            has_divine_shield=card.has_divine_shield,
            is_silenced=card.is_silenced,
            remaining_duration=card.remaining_duration
        )


def serialize_event(event: Event) -> dict:
    return {
        'type': event.type.name,
        'turn': event.turn,
        'payload': dict(event.payload)
    }


class SessionManager:
    """
    Manages all active game sessions.
    """

    def __init__(self):
        self.sessions: dict[str, GameSession] = {}
        self._lock = asyncio.Lock()

    async def create_session(
        self,
        seed: Optional[int] = None,
        player_name: str = "Player",
        config: Optional[GameConfig] = None
    ) -> GameSession:
        """Create a new game session."""
        async with self._lock:
            session_id = generate_id()
            if config is None:
                config = GameConfig.from_env(seed=seed) if seed is not None else GameConfig.from_env()
            game = Game(config=config)

            session = GameSession(
                id=session_id,
                game=game,
                player_name=player_name
            )

            self.sessions[session_id] = session
            logger.info("Created session %s", session_id)
            return session

    def get_session(self, session_id: str) -> Optional[GameSession]:
        """Get a session by ID."""
        return self.sessions.get(session_id)

    async def remove_session(self, session_id: str) -> None:
        """Remove a session."""
        async with self._lock:
            if session_id in self.sessions:
                del self.sessions[session_id]
                logger.info("Removed session %s", session_id)


# Global session manager instance
session_manager = SessionManager()

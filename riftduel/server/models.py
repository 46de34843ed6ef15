"""
Pydantic Models for the Riftduel API

Data transfer objects for the REST API.
"""

from pydantic import BaseModel, Field
from typing import Optional, Any
from enum import Enum


# =============================================================================
# Enums
# =============================================================================

class ActionType(str, Enum):
    """Human action types."""
    SELECT_CARD = "SELECT_CARD"
    SELECT_CARD_TARGET = "SELECT_CARD_TARGET"
    PLAY_SELECTED = "PLAY_SELECTED"
    SELECT_ATTACKER = "SELECT_ATTACKER"
    SELECT_ATTACK_TARGET = "SELECT_ATTACK_TARGET"
    CANCEL = "CANCEL"
    END_TURN = "END_TURN"


# =============================================================================
# Request Models
# =============================================================================

class CreateMatchRequest(BaseModel):
    """Request to create a new match."""
    seed: Optional[int] = Field(default=None, description="Seed for shuffles and random picks")
    player_name: str = Field(default="Player", description="Human player name")


class TargetData(BaseModel):
    """A hero or a minion. `owner` is 'player' or 'opponent'."""
    kind: str = Field(description="'minion' or 'hero'")
    owner: str
    instance_id: Optional[str] = None


class PlayerActionRequest(BaseModel):
    """Request to perform a human action."""
    action_type: ActionType
    instance_id: Optional[str] = None
    target: Optional[TargetData] = None


# =============================================================================
# Response Models
# =============================================================================

class CreateMatchResponse(BaseModel):
    """Response after creating a match."""
    match_id: str
    seed: Optional[int] = None
    status: str = "created"


class CardData(BaseModel):
    """Card instance data for API responses."""
    instance_id: str
    card_id: int
    name: str
    type: str
    cost: int
    effective_cost: Optional[int] = None
    attack: Optional[int] = None
    health: Optional[int] = None
    text: str = ""
    mechanics: list[str] = Field(default_factory=list)
    can_attack: bool = False
    is_frozen: bool = False
    has_divine_shield: bool = False
    is_silenced: bool = False
    remaining_duration: Optional[int] = None


class HeroData(BaseModel):
    hp: int
    armor: int = 0
    max_hp: int


class PlayerData(BaseModel):
    """One side's public state; the opponent's hand is only counted."""
    side: str
    name: str
    hero: HeroData
    mana: int
    max_mana: int
    hand: list[CardData] = Field(default_factory=list)
    hand_size: int = 0
    deck_size: int = 0
    board: list[CardData] = Field(default_factory=list)
    artifact: Optional[CardData] = None
    graveyard: list[CardData] = Field(default_factory=list)
    fatigue: int = 1


class GameStateResponse(BaseModel):
    """Complete match state from the human side's perspective."""
    match_id: str
    turn: int
    active_side: str
    targeting_mode: str
    selected_card_id: Optional[str] = None
    selected_attacker_id: Optional[str] = None
    opponent_thinking: bool = False
    player: PlayerData
    opponent: PlayerData
    is_game_over: bool = False
    winner: Optional[str] = None


class ActionResultResponse(BaseModel):
    """Response after processing an action."""
    success: bool
    message: str = ""
    new_state: Optional[GameStateResponse] = None
    events: list[dict[str, Any]] = Field(default_factory=list)


class CardDefinitionData(BaseModel):
    """Card definition for the card database."""
    id: int
    name: str
    type: str
    cost: int
    attack: Optional[int] = None
    health: Optional[int] = None
    durability: Optional[int] = None
    text: str = ""
    mechanics: list[str] = Field(default_factory=list)
    requires_target: bool = False
    target_type: Optional[str] = None


class CardListResponse(BaseModel):
    """Response with list of available cards."""
    cards: list[CardDefinitionData]
    total: int

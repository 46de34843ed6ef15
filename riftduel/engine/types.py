"""
Riftduel Core Types

Cards, instances, heroes and players. One GameState per match.
"""

import itertools
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Optional


# =============================================================================
# Limits
# =============================================================================

MAX_HAND_SIZE = 10
MAX_BOARD_SIZE = 7
MAX_MANA = 10
STARTING_HP = 30


# =============================================================================
# IDs
# =============================================================================

# Process-wide and monotonic: an instance id is never handed out twice.
_instance_counter = itertools.count()


def new_instance_id() -> str:
    return f"inst-{next(_instance_counter)}"


# =============================================================================
# Enums
# =============================================================================

class Side(str, Enum):
    PLAYER = "player"        # human-driven
    OPPONENT = "opponent"    # scripted

    @property
    def other(self) -> 'Side':
        return Side.OPPONENT if self is Side.PLAYER else Side.PLAYER


class CardType(str, Enum):
    CREATURE = "Creature"
    SPELL = "Spell"
    ARTIFACT = "Artifact"


class TargetType(str, Enum):
    """Which targets a card accepts."""
    FRIENDLY_MINION = "friendly_minion"
    ENEMY_CHARACTER = "enemy_character"
    ENEMY_MINION = "enemy_minion"


class TargetKind(str, Enum):
    MINION = "minion"
    HERO = "hero"


class TargetingMode(str, Enum):
    NONE = "none"
    CARD = "card"
    ATTACK = "attack"


class EffectTrigger(str, Enum):
    ON_ATTACKED = "onAttacked"


class EffectAction(str, Enum):
    DEAL_DAMAGE = "dealDamage"


class EffectTarget(str, Enum):
    ATTACKER = "attacker"


class Mechanic:
    """Generic tags the engine reads directly. Everything else is per-id."""
    TAUNT = "Taunt"
    DIVINE_SHIELD = "Divine Shield"
    DEATHRATTLE = "Deathrattle"
    BATTLECRY = "Battlecry"
    REGENERATE_ON_DAMAGE = "RegenerateOnDamage"
    SPELLBURST_ATTACK = "SpellburstAttack"


class EventType(Enum):
    GAME_START = auto()
    TURN_START = auto()
    TURN_END = auto()
    DRAW = auto()
    CARD_BURNED = auto()
    FATIGUE_DAMAGE = auto()
    CARD_PLAYED = auto()
    ATTACK = auto()
    DAMAGE = auto()
    SHIELD_BROKEN = auto()
    REINCARNATED = auto()
    MINION_DIED = auto()
    DEATHRATTLE = auto()
    SUMMON = auto()
    ARTIFACT_EQUIPPED = auto()
    ARTIFACT_EXPIRED = auto()
    GAME_OVER = auto()


# =============================================================================
# Errors
# =============================================================================

class EngineError(Exception):
    """Base class for engine errors."""


class InvalidAction(EngineError):
    """Soft rejection: the action is not legal right now. State is untouched."""


class InvariantViolation(EngineError):
    """An instance that must exist could not be found. Aborts one operation."""


class ResolutionDepthExceeded(EngineError):
    """Death resolution recursed too deep. Fatal for the match."""


# =============================================================================
# Cards
# =============================================================================

@dataclass(frozen=True)
class CardDefinition:
    """Immutable catalog entry."""
    id: int
    name: str
    type: CardType
    cost: int
    attack: Optional[int] = None
    health: Optional[int] = None
    durability: Optional[int] = None
    text: str = ""
    mechanics: frozenset[str] = frozenset()
    requires_target: bool = False
    target_type: Optional[TargetType] = None


@dataclass
class Effect:
    """Declarative modifier attached to an instance, checked at trigger sites."""
    kind: str
    source_card_id: int
    trigger: EffectTrigger
    action: EffectAction
    value: int
    target: EffectTarget


@dataclass
class CardInstance:
    """One copy of a card in play (or in a deck, hand, slot or graveyard)."""
    definition: CardDefinition
    instance_id: str = field(default_factory=new_instance_id)
    current_health: Optional[int] = None
    current_attack: Optional[int] = None
    is_frozen: bool = False
    can_attack: bool = False
    has_divine_shield: bool = False
    is_silenced: bool = False
    has_reincarnated: bool = False
    remaining_duration: Optional[int] = None
    effects: list[Effect] = field(default_factory=list)

    @classmethod
    def from_definition(cls, definition: CardDefinition) -> 'CardInstance':
        return cls(
            definition=definition,
            current_health=definition.health,
            current_attack=definition.attack,
            has_divine_shield=(
                definition.type == CardType.CREATURE
                and Mechanic.DIVINE_SHIELD in definition.mechanics
            ),
        )

    @property
    def card_id(self) -> int:
        return self.definition.id

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def type(self) -> CardType:
        return self.definition.type

    def has_mechanic(self, tag: str) -> bool:
        if self.is_silenced:
            return False
        return tag in self.definition.mechanics

    def silence(self) -> None:
        self.is_silenced = True
        self.has_divine_shield = False
        self.effects.clear()

    def mark_reincarnated(self) -> None:
        if self.has_reincarnated:
            raise InvariantViolation(f"{self.instance_id} has already reincarnated")
        self.has_reincarnated = True


# =============================================================================
# Players
# =============================================================================

@dataclass
class Hero:
    hp: int = STARTING_HP
    armor: int = 0
    max_hp: int = STARTING_HP


@dataclass
class ManaPool:
    current: int = 0
    max: int = 0


@dataclass
class PlayerState:
    side: Side
    deck: list[CardInstance] = field(default_factory=list)
    hand: list[CardInstance] = field(default_factory=list)
    board: list[CardInstance] = field(default_factory=list)
    artifact_slot: Optional[CardInstance] = None
    graveyard: list[CardInstance] = field(default_factory=list)
    hero: Hero = field(default_factory=Hero)
    mana: ManaPool = field(default_factory=ManaPool)
    fatigue: int = 1

    # Combo tracking: card types played this turn / on the preceding turn
    played_types_this_turn: set[CardType] = field(default_factory=set)
    played_types_last_turn: set[CardType] = field(default_factory=set)

    @property
    def played_card_this_turn(self) -> bool:
        return bool(self.played_types_this_turn)

    @property
    def played_card_last_turn(self) -> bool:
        return bool(self.played_types_last_turn)

    def find_on_board(self, instance_id: str) -> Optional[CardInstance]:
        for minion in self.board:
            if minion.instance_id == instance_id:
                return minion
        return None

    def find_in_hand(self, instance_id: str) -> Optional[CardInstance]:
        for card in self.hand:
            if card.instance_id == instance_id:
                return card
        return None


# =============================================================================
# Targets
# =============================================================================

@dataclass(frozen=True)
class Target:
    """Names a minion or a hero. `owner` is absolute, not relative to the caster."""
    kind: TargetKind
    owner: Side
    instance_id: Optional[str] = None

    @classmethod
    def hero(cls, owner: Side) -> 'Target':
        return cls(TargetKind.HERO, owner)

    @classmethod
    def minion(cls, owner: Side, instance_id: str) -> 'Target':
        return cls(TargetKind.MINION, owner, instance_id)

    def describe(self) -> str:
        if self.kind == TargetKind.HERO:
            return f"{self.owner.value} hero"
        return f"{self.owner.value} minion {self.instance_id}"


# =============================================================================
# Events
# =============================================================================

@dataclass
class Event:
    type: EventType
    payload: dict[str, Any] = field(default_factory=dict)
    turn: int = 0


# =============================================================================
# Game State
# =============================================================================

@dataclass
class GameState:
    """Complete match state: both sides, turn, and the human's selections."""
    player: PlayerState = field(default_factory=lambda: PlayerState(Side.PLAYER))
    opponent: PlayerState = field(default_factory=lambda: PlayerState(Side.OPPONENT))

    turn: int = 1
    active_side: Side = Side.PLAYER

    # Human selections
    targeting_mode: TargetingMode = TargetingMode.NONE
    selected_card_id: Optional[str] = None
    selected_attacker_id: Optional[str] = None

    opponent_thinking: bool = False

    # Terminal state; winner stays None on a draw
    game_over: bool = False
    winner: Optional[Side] = None

    event_log: list[Event] = field(default_factory=list)

    def side(self, side: Side) -> PlayerState:
        return self.player if side is Side.PLAYER else self.opponent

    def sides(self) -> tuple[PlayerState, PlayerState]:
        return self.player, self.opponent

    def log(self, event_type: EventType, **payload: Any) -> Event:
        event = Event(type=event_type, payload=payload, turn=self.turn)
        self.event_log.append(event)
        return event

    def clear_selection(self) -> None:
        self.targeting_mode = TargetingMode.NONE
        self.selected_card_id = None
        self.selected_attacker_id = None

"""
Riftduel Engine

Two sides, one deck each, alternating turns. Damage settles through a single
pipeline; per-card behaviour is looked up by catalog id.

Core systems:
- Damage Pipeline: Damage, Divine Shield, armor, death sweeps, deathrattles
- Turn Manager: End/start of turn, draw, fatigue
- Mana System: Crystals and cost auras
- Combat Manager: Simultaneous attack exchange
- Targeting System: Human card and attack selection
"""

from .types import (
    # IDs
    new_instance_id,

    # Limits
    MAX_HAND_SIZE, MAX_BOARD_SIZE, MAX_MANA, STARTING_HP,

    # Enums
    Side, CardType, TargetType, TargetKind, TargetingMode, Mechanic, EventType,
    EffectTrigger, EffectAction, EffectTarget,

    # Errors
    EngineError, InvalidAction, InvariantViolation, ResolutionDepthExceeded,

    # Entities
    CardDefinition, CardInstance, Effect, Hero, ManaPool, PlayerState,
    Target, Event, GameState,
)

from .config import GameConfig

from .pipeline import DamagePipeline

from .queries import (
    find_minion, resolve_target, target_matches, valid_targets,
    living_taunts, attack_targets, all_characters, enemy_characters,
    can_minion_attack
)

from .game import (
    Game,
    make_creature, make_spell, make_artifact
)

__all__ = [
    'new_instance_id',
    'MAX_HAND_SIZE', 'MAX_BOARD_SIZE', 'MAX_MANA', 'STARTING_HP',
    'Side', 'CardType', 'TargetType', 'TargetKind', 'TargetingMode', 'Mechanic', 'EventType',
    'EffectTrigger', 'EffectAction', 'EffectTarget',
    'EngineError', 'InvalidAction', 'InvariantViolation', 'ResolutionDepthExceeded',
    'CardDefinition', 'CardInstance', 'Effect', 'Hero', 'ManaPool', 'PlayerState',
    'Target', 'Event', 'GameState',
    'GameConfig',
    'DamagePipeline',
    'find_minion', 'resolve_target', 'target_matches', 'valid_targets',
    'living_taunts', 'attack_targets', 'all_characters', 'enemy_characters',
    'can_minion_attack',
    'Game', 'make_creature', 'make_spell', 'make_artifact',
]

"""
Riftduel Query System

Read-only lookups over GameState. Nothing here mutates.
"""

from typing import Optional, Union

from .types import (
    GameState, CardInstance, CardType, Hero, Mechanic, PlayerState, Side,
    Target, TargetKind, TargetType
)


def find_minion(state: GameState, instance_id: str) -> Optional[tuple[CardInstance, Side]]:
    """Locate a minion on either board. Returns (minion, owning side)."""
    for player in state.sides():
        minion = player.find_on_board(instance_id)
        if minion:
            return minion, player.side
    return None


def resolve_target(state: GameState, target: Target) -> Optional[Union[Hero, CardInstance]]:
    """Resolve a target descriptor to the live hero or minion it names."""
    owner = state.side(target.owner)
    if target.kind == TargetKind.HERO:
        return owner.hero
    if target.instance_id is None:
        return None
    return owner.find_on_board(target.instance_id)


def target_matches(state: GameState, target_type: Optional[TargetType], caster: Side,
                   target: Optional[Target]) -> bool:
    """Does `target` exist and satisfy `target_type` from the caster's point of view?"""
    if target is None or target_type is None:
        return False
    if resolve_target(state, target) is None:
        return False
    if target_type == TargetType.FRIENDLY_MINION:
        return target.kind == TargetKind.MINION and target.owner == caster
    if target_type == TargetType.ENEMY_MINION:
        return target.kind == TargetKind.MINION and target.owner != caster
    if target_type == TargetType.ENEMY_CHARACTER:
        return target.owner != caster
    return False


def valid_targets(state: GameState, target_type: Optional[TargetType], caster: Side) -> list[Target]:
    candidates = []
    for player in state.sides():
        candidates.extend(target_for(m, player.side) for m in player.board)
        candidates.append(Target.hero(player.side))
    return [t for t in candidates if target_matches(state, target_type, caster, t)]


def target_for(minion: CardInstance, owner: Side) -> Target:
    return Target.minion(owner, minion.instance_id)


def living_taunts(player: PlayerState) -> list[CardInstance]:
    return [
        m for m in player.board
        if m.has_mechanic(Mechanic.TAUNT) and (m.current_health or 0) > 0
    ]


def attack_targets(state: GameState, defender: Side) -> list[Target]:
    """Legal attack targets on the defending side: its Taunts, else everything."""
    player = state.side(defender)
    taunts = living_taunts(player)
    if taunts:
        return [target_for(m, defender) for m in taunts]
    targets = [Target.hero(defender)]
    targets.extend(target_for(m, defender) for m in player.board)
    return targets


def all_characters(state: GameState) -> list[Target]:
    """Every minion on both boards, then both heroes."""
    targets = []
    for player in state.sides():
        targets.extend(target_for(m, player.side) for m in player.board)
    targets.append(Target.hero(Side.PLAYER))
    targets.append(Target.hero(Side.OPPONENT))
    return targets


def enemy_characters(state: GameState, side: Side) -> list[Target]:
    """Enemy minions, then the enemy hero."""
    enemy = state.side(side.other)
    targets = [target_for(m, enemy.side) for m in enemy.board]
    targets.append(Target.hero(enemy.side))
    return targets


def graveyard_creatures(player: PlayerState) -> list[CardInstance]:
    return [c for c in player.graveyard if c.type == CardType.CREATURE]


def can_minion_attack(minion: CardInstance) -> bool:
    return minion.can_attack and not minion.is_frozen and (minion.current_attack or 0) > 0

"""
Core Set Scripts

Battlecries, spells, deathrattles and artifact effects for the core set,
registered into the engine's dispatch tables at import time.
"""

from typing import Optional, TYPE_CHECKING
import logging

from riftduel.engine.dispatch import (
    artifact_turn_start, battlecry, deathrattle, play_override, spell,
    register_cost_aura, register_reincarnation_aura, resurrect_random, summon
)
from riftduel.engine.queries import (
    all_characters, enemy_characters, resolve_target, target_matches
)
from riftduel.engine.types import (
    CardInstance, CardType, Effect, EffectAction, EffectTarget, EffectTrigger,
    Side, Target, TargetKind, TargetType
)
from riftduel.cards.core_set import (
    REDFLAME_DRAGONSPAWN, LASTWORD_SPRITE, TIME_RIFTWALKER, MISTWOLF_PACK,
    SOUL_MANIPULATOR, FROST_BLAST, RITE_OF_REVIVAL, FLAME_WARD, SHADOW_BIND,
    ORB_OF_CALAMITY, MITHRIL_CHARM, ANCIENT_CHRONOMETER, MISTWOLF
)

if TYPE_CHECKING:
    from riftduel.engine.game import Game

logger = logging.getLogger(__name__)


FLAME_WARD_DAMAGE = 3


# =============================================================================
# Battlecries
# =============================================================================

@battlecry(REDFLAME_DRAGONSPAWN.id)
def redflame_dragonspawn_battlecry(game: 'Game', minion: CardInstance, owner: Side,
                                   target: Optional[Target]) -> None:
    """Deal 2 damage to every enemy minion and the enemy hero at once."""
    with game.pipeline.deferred_sweep():
        for enemy in enemy_characters(game.state, owner):
            game.pipeline.apply_damage(enemy, 2, source=minion.name)


@battlecry(TIME_RIFTWALKER.id)
def time_riftwalker_battlecry(game: 'Game', minion: CardInstance, owner: Side,
                              target: Optional[Target]) -> None:
    """A friendly minion may attack again this turn."""
    if not target_matches(game.state, TargetType.FRIENDLY_MINION, owner, target):
        logger.warning("%s battlecry has no friendly minion target; no effect", minion.name)
        return
    ally = resolve_target(game.state, target)
    ally.can_attack = True
    logger.info("%s readies %s", minion.name, ally.name)


# =============================================================================
# Summons
# =============================================================================

@play_override(MISTWOLF_PACK.id)
def mistwolf_pack_summon(game: 'Game', card: CardInstance, owner: Side) -> None:
    """Two wolves; a third if a spell was cast on the previous turn."""
    count = 2
    if CardType.SPELL in game.state.side(owner).played_types_last_turn:
        logger.info("%s combo: summoning a third wolf", card.name)
        count = 3
    for _ in range(count):
        summon(game, MISTWOLF, owner)


# =============================================================================
# Deathrattles
# =============================================================================

@deathrattle(LASTWORD_SPRITE.id)
def lastword_sprite_deathrattle(game: 'Game', minion: CardInstance, owner: Side) -> None:
    game.turn_manager.draw_card(owner)


@deathrattle(SOUL_MANIPULATOR.id)
def soul_manipulator_deathrattle(game: 'Game', minion: CardInstance, owner: Side) -> None:
    resurrect_random(game, graveyard_of=owner.other, owner=owner)


# =============================================================================
# Spells
# =============================================================================

@spell(FROST_BLAST.id)
def frost_blast_effect(game: 'Game', card: CardInstance, caster: Side,
                       target: Optional[Target]) -> None:
    """Deal 3 damage and freeze. Freezing a hero does nothing."""
    game.pipeline.apply_damage(target, 3, source=card.name)
    if target.kind == TargetKind.HERO:
        logger.info("%s: hero freeze has no effect", card.name)
        return
    victim = resolve_target(game.state, target)
    if victim is None:
        logger.debug("%s: target died before it could be frozen", card.name)
        return
    victim.is_frozen = True


@spell(RITE_OF_REVIVAL.id)
def rite_of_revival_effect(game: 'Game', card: CardInstance, caster: Side,
                           target: Optional[Target]) -> None:
    resurrect_random(game, graveyard_of=caster, owner=caster)


@spell(FLAME_WARD.id)
def flame_ward_effect(game: 'Game', card: CardInstance, caster: Side,
                      target: Optional[Target]) -> None:
    ally = resolve_target(game.state, target)
    ally.effects.append(Effect(
        kind="flame_ward",
        source_card_id=card.card_id,
        trigger=EffectTrigger.ON_ATTACKED,
        action=EffectAction.DEAL_DAMAGE,
        value=FLAME_WARD_DAMAGE,
        target=EffectTarget.ATTACKER
    ))
    logger.info("%s warded by %s", ally.name, card.name)


@spell(SHADOW_BIND.id)
def shadow_bind_effect(game: 'Game', card: CardInstance, caster: Side,
                       target: Optional[Target]) -> None:
    # can_attack is only restored at the end of its owner's turn
    victim = resolve_target(game.state, target)
    victim.silence()
    victim.can_attack = False
    logger.info("%s silenced and bound", victim.name)


# =============================================================================
# Artifacts
# =============================================================================

@artifact_turn_start(ORB_OF_CALAMITY.id)
def orb_of_calamity_tick(game: 'Game', artifact: CardInstance, owner: Side) -> None:
    """1 damage to every character, all at once."""
    with game.pipeline.deferred_sweep():
        for character in all_characters(game.state):
            game.pipeline.apply_damage(character, 1, source=artifact.name)


register_reincarnation_aura(MITHRIL_CHARM.id)
register_cost_aura(ANCIENT_CHRONOMETER.id, 1)

"""
Riftduel Effect Dispatch

Per-card scripted behaviour lives in registries keyed by catalog id. Card
modules register small functions with the decorators below; the engine looks
them up when a battlecry, spell, deathrattle or artifact fires.

Generic tags (Taunt, Divine Shield, Deathrattle, Battlecry, RegenerateOnDamage,
SpellburstAttack) are read directly by the engine and need no registration.
"""

from typing import Callable, Optional, TYPE_CHECKING
import logging

from .types import (
    CardDefinition, CardInstance, EffectAction, EffectTarget, EffectTrigger,
    EventType, Mechanic, Side, Target
)
from .queries import graveyard_creatures, target_matches

if TYPE_CHECKING:
    from .game import Game

logger = logging.getLogger(__name__)


TargetedHandler = Callable[['Game', CardInstance, Side, Optional[Target]], None]
CardHandler = Callable[['Game', CardInstance, Side], None]


# =============================================================================
# Registries
# =============================================================================

BATTLECRIES: dict[int, TargetedHandler] = {}
SPELLS: dict[int, TargetedHandler] = {}
DEATHRATTLES: dict[int, CardHandler] = {}
PLAY_OVERRIDES: dict[int, CardHandler] = {}
ARTIFACT_TURN_START: dict[int, CardHandler] = {}

# Artifact auras: card id -> cost reduction, and ids granting reincarnation
COST_AURAS: dict[int, int] = {}
REINCARNATION_AURAS: set[int] = set()


def _registrar(table: dict, card_id: int):
    def decorator(fn):
        if card_id in table:
            raise ValueError(f"Card {card_id} already registered in {fn.__module__}")
        table[card_id] = fn
        return fn
    return decorator


def battlecry(card_id: int):
    return _registrar(BATTLECRIES, card_id)


def spell(card_id: int):
    return _registrar(SPELLS, card_id)


def deathrattle(card_id: int):
    return _registrar(DEATHRATTLES, card_id)


def play_override(card_id: int):
    """Replaces normal board placement for a creature (e.g. token summoners)."""
    return _registrar(PLAY_OVERRIDES, card_id)


def artifact_turn_start(card_id: int):
    return _registrar(ARTIFACT_TURN_START, card_id)


def register_cost_aura(card_id: int, amount: int) -> None:
    COST_AURAS[card_id] = amount


def register_reincarnation_aura(card_id: int) -> None:
    REINCARNATION_AURAS.add(card_id)


# =============================================================================
# Resolution
# =============================================================================

def resolve_battlecry(game: 'Game', minion: CardInstance, owner: Side,
                      target: Optional[Target]) -> None:
    handler = BATTLECRIES.get(minion.card_id)
    if handler is None:
        logger.info("No battlecry defined for %s (%d)", minion.name, minion.card_id)
    else:
        logger.info("Battlecry: %s (%s)", minion.name, owner.value)
        handler(game, minion, owner, target)
    game.pipeline.death_sweep()


def resolve_spell(game: 'Game', card: CardInstance, caster: Side,
                  target: Optional[Target]) -> bool:
    """
    Resolve a spell's effect. Returns False, changing nothing, when the spell
    needs a target and `target` does not satisfy its target type.
    """
    definition = card.definition
    if definition.requires_target and not target_matches(
            game.state, definition.target_type, caster, target):
        logger.warning("Rejected target %s for %s",
                       target.describe() if target else None, card.name)
        return False

    handler = SPELLS.get(card.card_id)
    if handler is None:
        logger.info("No spell effect defined for %s (%d)", card.name, card.card_id)
    else:
        logger.info("Spell: %s (%s)", card.name, caster.value)
        handler(game, card, caster, target)
    game.pipeline.death_sweep()
    return True


def resolve_deathrattle(game: 'Game', minion: CardInstance, owner: Side) -> None:
    handler = DEATHRATTLES.get(minion.card_id)
    if handler is None:
        logger.info("No deathrattle defined for %s (%d)", minion.name, minion.card_id)
        return
    logger.info("Deathrattle: %s (%s)", minion.name, owner.value)
    game.state.log(EventType.DEATHRATTLE, minion=minion.instance_id, owner=owner.value)
    handler(game, minion, owner)


def resolve_play_override(game: 'Game', card: CardInstance, owner: Side) -> bool:
    handler = PLAY_OVERRIDES.get(card.card_id)
    if handler is None:
        return False
    handler(game, card, owner)
    return True


def run_artifact_turn_start(game: 'Game', owner: Side) -> None:
    artifact = game.state.side(owner).artifact_slot
    if artifact is None:
        return
    handler = ARTIFACT_TURN_START.get(artifact.card_id)
    if handler:
        logger.info("%s triggers at start of %s turn", artifact.name, owner.value)
        handler(game, artifact, owner)


# =============================================================================
# Auras
# =============================================================================

def artifact_reincarnates(artifact: Optional[CardInstance]) -> bool:
    return artifact is not None and artifact.card_id in REINCARNATION_AURAS


def cost_reduction(artifact: Optional[CardInstance]) -> int:
    if artifact is None or artifact.card_id not in COST_AURAS:
        return 0
    if artifact.remaining_duration is not None and artifact.remaining_duration <= 0:
        return 0
    return COST_AURAS[artifact.card_id]


# =============================================================================
# Triggers
# =============================================================================

def trigger_spellburst(game: 'Game', caster: Side) -> None:
    """Each living SpellburstAttack minion of the caster gains +1 Attack for good."""
    for minion in game.state.side(caster).board:
        if minion.has_mechanic(Mechanic.SPELLBURST_ATTACK) and (minion.current_health or 0) > 0:
            minion.current_attack += 1
            logger.info("Spellburst: %s attack is now %d", minion.name, minion.current_attack)


def trigger_on_attacked(game: 'Game', minion: CardInstance, attacker: Target) -> None:
    """Fire the attacked minion's onAttacked effects back at its attacker."""
    for effect in list(minion.effects):
        if (effect.trigger == EffectTrigger.ON_ATTACKED
                and effect.action == EffectAction.DEAL_DAMAGE
                and effect.target == EffectTarget.ATTACKER):
            logger.info("%s's %s hits %s for %d", minion.name, effect.kind,
                        attacker.describe(), effect.value)
            game.pipeline.apply_damage(attacker, effect.value, source=f"{minion.name}:{effect.kind}")


# =============================================================================
# Summoning
# =============================================================================

def summon(game: 'Game', definition: CardDefinition, owner: Side) -> Optional[CardInstance]:
    """Create a fresh instance on the owner's board. No-op if the board is full."""
    board = game.state.side(owner).board
    if len(board) >= game.config.max_board_size:
        logger.info("%s board full, %s not summoned", owner.value, definition.name)
        return None
    minion = CardInstance.from_definition(definition)
    minion.can_attack = False
    board.append(minion)
    logger.info("%s summons %s (%s)", owner.value, minion.name, minion.instance_id)
    game.state.log(EventType.SUMMON, minion=minion.instance_id, card_id=minion.card_id,
                   owner=owner.value)
    return minion


def resurrect_random(game: 'Game', graveyard_of: Side, owner: Side) -> Optional[CardInstance]:
    """
    Take a random creature out of `graveyard_of`'s graveyard and summon a new
    instance of the same card for `owner`. Needs board room; otherwise nothing
    leaves the graveyard.
    """
    graveyard = game.state.side(graveyard_of).graveyard
    candidates = graveyard_creatures(game.state.side(graveyard_of))
    if not candidates or len(game.state.side(owner).board) >= game.config.max_board_size:
        logger.info("Nothing to resurrect for %s", owner.value)
        return None
    chosen = game.rng.choice(candidates)
    graveyard.remove(chosen)
    return summon(game, game.card_definition(chosen.card_id), owner)

"""
Riftduel Combat Manager

Resolves one attack:
- Attacker damage to the target
- The target's onAttacked effects, if it survived the hit
- Target's damage back to the attacker (minion targets only)

All three land as one simultaneous exchange, then a single death sweep runs,
so two minions that trade both die in the same sweep.
"""

from typing import Optional, TYPE_CHECKING
import logging

from .types import EventType, GameState, InvariantViolation, Target, TargetKind
from .queries import find_minion, resolve_target
from . import dispatch

if TYPE_CHECKING:
    from .game import Game
    from .pipeline import DamagePipeline

logger = logging.getLogger(__name__)


class CombatManager:
    """
    Attack resolution shared by the human and scripted sides.
    """

    def __init__(self, state: GameState):
        self.state = state

        # Other systems (set by Game class)
        self.game: Optional['Game'] = None
        self.pipeline: Optional['DamagePipeline'] = None

    def execute_attack(self, attacker_id: str, target: Target) -> None:
        """
        Resolve an attack. Legality (side to move, Taunt, readiness) is the
        caller's job; this only requires both participants to exist.
        """
        found = find_minion(self.state, attacker_id)
        if found is None:
            raise InvariantViolation(f"attacker {attacker_id} not on any board")
        attacker, attacker_side = found
        defender = resolve_target(self.state, target)
        if defender is None:
            raise InvariantViolation(f"attack target {target.describe()} not found")

        attacker_target = Target.minion(attacker_side, attacker_id)
        damage = attacker.current_attack or 0
        counter_damage = 0
        if target.kind == TargetKind.MINION:
            counter_damage = defender.current_attack or 0

        logger.info("%s (%d/%d) attacks %s", attacker.name, damage,
                    attacker.current_health, target.describe())
        self.state.log(EventType.ATTACK, attacker=attacker_id, target=target.describe())

        with self.pipeline.deferred_sweep():
            if damage > 0:
                self.pipeline.apply_damage(target, damage, source=attacker.name)
                if (target.kind == TargetKind.MINION
                        and self.pipeline.survives(defender, target.owner)):
                    dispatch.trigger_on_attacked(self.game, defender, attacker_target)
            if counter_damage > 0:
                self.pipeline.apply_damage(attacker_target, counter_damage, source=defender.name)

        survivor = find_minion(self.state, attacker_id)
        if survivor:
            survivor[0].can_attack = False
        else:
            logger.info("%s died attacking", attacker.name)

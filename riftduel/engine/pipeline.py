"""
Riftduel Damage Pipeline

Damage application and death resolution:

    damage -> shield -> armor -> health -> death sweep -> deathrattles -> re-sweep

Every damage event runs a death sweep unless a deferred batch is open, in which
case the batch sweeps once at the end so simultaneous damage kills together.
"""

from contextlib import contextmanager
from typing import Optional, TYPE_CHECKING
import logging

from .types import (
    GameState, CardInstance, EventType, Mechanic, Side, Target, TargetKind,
    ResolutionDepthExceeded
)
from .queries import resolve_target
from . import dispatch

if TYPE_CHECKING:
    from .config import GameConfig
    from .game import Game

logger = logging.getLogger(__name__)


class DamagePipeline:
    """
    Applies damage to heroes and minions and settles the consequences.
    """

    def __init__(self, state: GameState, config: 'GameConfig'):
        self.state = state
        self.config = config
        self.game: Optional['Game'] = None  # set by Game

        # When True, apply_damage leaves the sweep to the enclosing batch
        self.sweep_deferred = False
        self._sweep_depth = 0

    @contextmanager
    def deferred_sweep(self):
        """
        Treat all damage inside the block as simultaneous, then sweep once.

        Nested blocks fold into the outermost one.
        """
        if self.sweep_deferred:
            yield
            return
        self.sweep_deferred = True
        try:
            yield
        finally:
            self.sweep_deferred = False
        self.death_sweep()

    def apply_damage(self, target: Target, amount: int, source: Optional[str] = None) -> None:
        """
        Deal `amount` damage to `target`.

        A missing target is a logged no-op. A shielded minion loses its shield
        whatever the amount, and nothing else happens: no damage, no sweep.
        """
        entity = resolve_target(self.state, target)
        if entity is None:
            logger.warning("Damage from %s: target %s not found", source or "unknown", target.describe())
            return

        if target.kind == TargetKind.MINION and entity.has_divine_shield:
            entity.has_divine_shield = False
            logger.info("%s loses Divine Shield", entity.name)
            self.state.log(EventType.SHIELD_BROKEN, target=entity.instance_id, source=source)
            return
        if amount <= 0:
            return

        if target.kind == TargetKind.MINION:
            minion: CardInstance = entity
            minion.current_health -= amount
            # Heal-on-hit never revives a lethal hit
            if minion.current_health > 0 and minion.has_mechanic(Mechanic.REGENERATE_ON_DAMAGE):
                minion.current_health += 1
                logger.debug("%s regenerates to %d", minion.name, minion.current_health)
            logger.info("%s takes %d damage from %s (health %d)",
                        minion.name, amount, source or "unknown", minion.current_health)
        else:
            hero = entity
            absorbed = min(amount, hero.armor)
            hero.armor -= absorbed
            hero.hp -= amount - absorbed
            logger.info("%s hero takes %d damage from %s (armor %d, hp %d)",
                        target.owner.value, amount, source or "unknown", hero.armor, hero.hp)

        self.state.log(EventType.DAMAGE, target=target.describe(), amount=amount, source=source)

        if not self.sweep_deferred:
            self.death_sweep()

    def survives(self, minion: CardInstance, owner: Side) -> bool:
        """Alive now, or due to reincarnate at the next sweep."""
        if (minion.current_health or 0) > 0:
            return True
        return (not minion.has_reincarnated
                and dispatch.artifact_reincarnates(self.state.side(owner).artifact_slot))

    def death_sweep(self) -> None:
        """
        Remove dead minions from both boards and resolve their deathrattles.

        Deathrattles run after both boards are partitioned, in queue order. If
        any ran, the whole sweep repeats and that inner sweep does the hero
        check. Reaching the hero check means the board has settled.
        """
        self._sweep_depth += 1
        try:
            if self._sweep_depth > self.config.max_resolution_depth:
                raise ResolutionDepthExceeded(
                    f"death resolution exceeded depth {self.config.max_resolution_depth}"
                )

            queue: list[tuple[CardInstance, Side]] = []
            for player in self.state.sides():
                survivors = []
                for minion in player.board:
                    if (minion.current_health or 0) > 0:
                        survivors.append(minion)
                        continue

                    if (not minion.has_reincarnated
                            and dispatch.artifact_reincarnates(player.artifact_slot)):
                        minion.current_health = 1
                        minion.mark_reincarnated()
                        survivors.append(minion)
                        logger.info("%s %s reincarnates", player.side.value, minion.name)
                        self.state.log(EventType.REINCARNATED, minion=minion.instance_id)
                        continue

                    player.graveyard.append(minion)
                    logger.info("%s %s died", player.side.value, minion.name)
                    self.state.log(EventType.MINION_DIED, minion=minion.instance_id,
                                   card_id=minion.card_id, owner=player.side.value)
                    if minion.has_mechanic(Mechanic.DEATHRATTLE):
                        queue.append((minion, player.side))
                player.board[:] = survivors

            if queue:
                logger.debug("Resolving %d deathrattle(s)", len(queue))
                for minion, owner in queue:
                    dispatch.resolve_deathrattle(self.game, minion, owner)
                self.death_sweep()
                return

            self._check_heroes()
        finally:
            self._sweep_depth -= 1

    def _check_heroes(self) -> None:
        if self.state.game_over:
            return
        dead = [p.side for p in self.state.sides() if p.hero.hp <= 0]
        if not dead:
            return
        self.state.game_over = True
        self.state.winner = dead[0].other if len(dead) == 1 else None
        if self.state.winner is None:
            logger.info("Both heroes died: the game is a draw")
        else:
            logger.info("Game over: %s wins", self.state.winner.value)
        self.state.log(EventType.GAME_OVER,
                       winner=self.state.winner.value if self.state.winner else None)

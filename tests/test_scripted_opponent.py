"""
Scripted Opponent Tests

The greedy play phase, the attack phase, hand-back of control and the
asynchronous scheduling behind the human END_TURN.
"""

import asyncio

from riftduel.ai import OpponentPolicy
from riftduel.engine import CardInstance, Game, GameConfig, Side
from riftduel.cards.core_set import (
    BLACKIRON_TROLL, DEEPWOOD_GUARDIAN, FROST_BLAST, LASTWORD_SPRITE,
    ORB_OF_CALAMITY, TIME_RIFTWALKER
)


# ============================================================================
# Test Harness
# ============================================================================

class RecordingSleep:
    """Instant stand-in for asyncio.sleep that remembers each delay."""

    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


def opponent_to_act(mana=0, config=None):
    """A bare match paused at the start of the opponent's turn."""
    sleep = RecordingSleep()
    game = Game(config=config or GameConfig.instant(seed=4),
                opponent_policy=OpponentPolicy(sleep=sleep))
    game.state.active_side = Side.OPPONENT
    game.mana_system.set_pool(Side.OPPONENT, mana)
    game.state.player.deck.extend(
        CardInstance.from_definition(BLACKIRON_TROLL) for _ in range(3)
    )
    return game, sleep


def give(game, definition):
    card = CardInstance.from_definition(definition)
    game.state.opponent.hand.append(card)
    return card


def on_board(game, side, definition, can_attack=True):
    minion = CardInstance.from_definition(definition)
    minion.can_attack = can_attack
    game.state.side(side).board.append(minion)
    return minion


def run_turn(game):
    asyncio.run(game.opponent_policy.take_turn(game))


# ============================================================================
# Play phase
# ============================================================================

def test_plays_affordable_creatures_in_hand_order():
    game, _ = opponent_to_act(mana=5)
    troll = give(game, BLACKIRON_TROLL)
    sprite = give(game, LASTWORD_SPRITE)
    guardian = give(game, DEEPWOOD_GUARDIAN)

    run_turn(game)

    opponent = game.state.opponent
    assert opponent.board == [sprite, guardian]
    assert opponent.hand == [troll]
    assert opponent.mana.current == 0


def test_leaves_spells_and_artifacts_in_hand():
    game, _ = opponent_to_act(mana=10)
    blast = give(game, FROST_BLAST)
    orb = give(game, ORB_OF_CALAMITY)

    run_turn(game)

    assert game.state.opponent.hand == [blast, orb]
    assert game.state.player.hero.hp == 30


def test_plays_nothing_onto_full_board():
    game, _ = opponent_to_act(mana=10)
    for _ in range(7):
        on_board(game, Side.OPPONENT, LASTWORD_SPRITE, can_attack=False)
    sprite = give(game, LASTWORD_SPRITE)

    run_turn(game)

    assert sprite in game.state.opponent.hand
    assert len(game.state.opponent.board) == 7


def test_targeted_battlecry_played_without_target():
    game, _ = opponent_to_act(mana=5)
    resting = on_board(game, Side.OPPONENT, LASTWORD_SPRITE, can_attack=False)
    walker = give(game, TIME_RIFTWALKER)

    run_turn(game)

    assert walker in game.state.opponent.board
    # Readied by the end of the opponent's turn, not by the battlecry
    assert game.state.active_side is Side.PLAYER
    assert resting.can_attack


# ============================================================================
# Attack phase
# ============================================================================

def test_attacks_face_when_unblocked():
    game, _ = opponent_to_act()
    on_board(game, Side.OPPONENT, BLACKIRON_TROLL)
    on_board(game, Side.PLAYER, LASTWORD_SPRITE)

    run_turn(game)

    assert game.state.player.hero.hp == 23


def test_attacks_taunt_first():
    game, _ = opponent_to_act()
    troll = on_board(game, Side.OPPONENT, BLACKIRON_TROLL)
    guardian = on_board(game, Side.PLAYER, DEEPWOOD_GUARDIAN)

    run_turn(game)

    assert guardian in game.state.player.graveyard
    assert troll.current_health == 5
    assert game.state.player.hero.hp == 30


def test_fresh_minions_do_not_attack():
    game, _ = opponent_to_act(mana=7)
    give(game, BLACKIRON_TROLL)

    run_turn(game)

    assert game.state.player.hero.hp == 30


def test_frozen_minion_sits_out():
    game, _ = opponent_to_act()
    troll = on_board(game, Side.OPPONENT, BLACKIRON_TROLL)
    troll.is_frozen = True

    run_turn(game)

    assert game.state.player.hero.hp == 30


# ============================================================================
# Control
# ============================================================================

def test_hands_control_back_to_player():
    game, _ = opponent_to_act()
    game.state.opponent_thinking = True

    run_turn(game)

    assert game.state.active_side is Side.PLAYER
    assert game.state.turn == 2
    assert not game.state.opponent_thinking
    assert game.state.player.mana.max == 1


def test_lethal_attack_stops_the_turn():
    game, _ = opponent_to_act()
    game.state.player.hero.hp = 7
    game.state.opponent_thinking = True
    on_board(game, Side.OPPONENT, BLACKIRON_TROLL)
    on_board(game, Side.OPPONENT, BLACKIRON_TROLL)

    run_turn(game)

    assert game.state.game_over
    assert game.state.winner is Side.OPPONENT
    assert game.state.player.hero.hp == 0
    assert game.state.active_side is Side.OPPONENT
    assert not game.state.opponent_thinking


def test_does_nothing_once_game_is_over():
    game, sleep = opponent_to_act(mana=5)
    sprite = give(game, LASTWORD_SPRITE)
    game.state.game_over = True

    run_turn(game)

    assert sprite in game.state.opponent.hand
    assert sleep.delays == []


def test_pacing_delays_come_from_config():
    config = GameConfig(seed=4, opponent_think_delay=1.0, opponent_action_delay=0.5)
    game, sleep = opponent_to_act(mana=2, config=config)
    give(game, LASTWORD_SPRITE)
    on_board(game, Side.OPPONENT, BLACKIRON_TROLL)

    run_turn(game)

    # think, play, phase gap, attack, wrap-up
    assert sleep.delays == [1.0, 0.5, 0.5, 0.5, 0.5]


# ============================================================================
# Scheduling from the human END_TURN
# ============================================================================

def test_end_turn_without_loop_runs_opponent_to_completion():
    game = Game(config=GameConfig.instant(seed=8))
    game.start_game()

    ok, _ = game.end_turn()

    assert ok
    assert game.state.active_side is Side.PLAYER
    assert game.state.turn == 2
    assert not game.state.opponent_thinking
    assert game.state.opponent.mana.max == 1


def test_end_turn_inside_loop_blocks_player_until_opponent_finishes():
    async def _run():
        game = Game(config=GameConfig.instant(seed=8))
        game.start_game()
        card = game.state.player.hand[0]

        ok, _ = game.end_turn()
        assert ok
        assert game.state.opponent_thinking

        ok, message = game.select_card(card.instance_id)
        assert not ok
        assert "turn" in message

        await game.wait_for_opponent()
        return game

    game = asyncio.run(_run())

    assert game.state.active_side is Side.PLAYER
    assert game.state.turn == 2
    assert not game.state.opponent_thinking

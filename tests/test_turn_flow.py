"""
Turn Flow Tests

End of turn, start of turn, mana growth, card draw, burning and fatigue.
TurnManager is driven directly so the scripted opponent never runs.
"""

from riftduel.engine import CardInstance, CardType, EventType, Game, GameConfig, Side, Target
from riftduel.cards.core_set import (
    ANCIENT_CHRONOMETER, BLACKIRON_TROLL, FROST_BLAST, LASTWORD_SPRITE, ORB_OF_CALAMITY
)


# ============================================================================
# Test Harness
# ============================================================================

def started_game(seed=5, **overrides):
    game = Game(config=GameConfig.instant(seed=seed, **overrides))
    game.start_game()
    return game


def bare_game(seed=5):
    return Game(config=GameConfig.instant(seed=seed))


def put_on_board(game, side, definition, can_attack=False):
    minion = CardInstance.from_definition(definition)
    minion.can_attack = can_attack
    game.state.side(side).board.append(minion)
    return minion


def fill(zone, definition, count):
    zone.extend(CardInstance.from_definition(definition) for _ in range(count))


# ============================================================================
# Control and counters
# ============================================================================

def test_turn_counter_advances_when_player_is_up_again():
    game = started_game()
    tm = game.turn_manager

    assert tm.end_turn() is Side.OPPONENT
    assert game.state.active_side is Side.OPPONENT
    assert game.state.turn == 1

    assert tm.end_turn() is Side.PLAYER
    assert game.state.turn == 2


def test_start_of_turn_grows_mana_and_draws():
    """Each side gains a crystal, refills and draws one at its turn start."""
    game = started_game()
    tm = game.turn_manager

    tm.end_turn()
    opponent = game.state.opponent
    assert (opponent.mana.current, opponent.mana.max) == (1, 1)
    assert len(opponent.hand) == 5
    assert len(opponent.deck) == 15

    game.state.player.mana.current = 0
    tm.end_turn()
    player = game.state.player
    assert (player.mana.current, player.mana.max) == (2, 2)
    assert len(player.hand) == 4
    assert len(player.deck) == 16


def test_mana_caps_at_ten():
    game = bare_game()
    game.mana_system.set_pool(Side.PLAYER, 10)
    game.state.player.mana.current = 3

    game.mana_system.on_turn_start(Side.PLAYER)

    assert game.state.player.mana.max == 10
    assert game.state.player.mana.current == 10


def test_end_turn_readies_only_the_ending_side():
    game = started_game()
    mine = put_on_board(game, Side.PLAYER, BLACKIRON_TROLL)
    theirs = put_on_board(game, Side.OPPONENT, BLACKIRON_TROLL)

    game.turn_manager.end_turn()

    assert mine.can_attack
    assert not theirs.can_attack


def test_freeze_clears_at_owner_turn_start():
    game = started_game()
    theirs = put_on_board(game, Side.OPPONENT, BLACKIRON_TROLL)
    mine = put_on_board(game, Side.PLAYER, BLACKIRON_TROLL)
    theirs.is_frozen = True
    mine.is_frozen = True

    game.turn_manager.end_turn()

    assert not theirs.is_frozen
    assert mine.is_frozen


def test_ending_player_turn_clears_selection():
    game = started_game()
    game.state.selected_card_id = game.state.player.hand[0].instance_id

    game.turn_manager.end_turn()

    assert game.state.selected_card_id is None


def test_combo_flag_carries_previous_turn_plays():
    """Whatever was played on the turn that just ended is the next side's combo flag."""
    game = started_game()
    game.state.player.played_types_this_turn.add(CardType.SPELL)

    game.turn_manager.end_turn()

    assert game.state.player.played_types_this_turn == set()
    assert CardType.SPELL in game.state.opponent.played_types_last_turn

    game.turn_manager.end_turn()
    assert game.state.player.played_types_last_turn == set()


def test_spell_play_sets_combo_tracking():
    game = started_game()
    player = game.state.player
    blast = CardInstance.from_definition(FROST_BLAST)
    player.hand.append(blast)
    game.mana_system.set_pool(Side.PLAYER, 2)

    ok, _ = game.play_card(Side.PLAYER, blast.instance_id, Target.hero(Side.OPPONENT))

    assert ok
    assert player.played_card_this_turn
    assert player.played_types_this_turn == {CardType.SPELL}


# ============================================================================
# Draw, burn and fatigue
# ============================================================================

def test_draw_takes_from_front_of_deck():
    game = bare_game()
    first = CardInstance.from_definition(LASTWORD_SPRITE)
    second = CardInstance.from_definition(BLACKIRON_TROLL)
    game.state.player.deck.extend([first, second])

    game.turn_manager.draw_card(Side.PLAYER)

    assert game.state.player.hand == [first]
    assert game.state.player.deck == [second]


def test_full_hand_burns_drawn_card():
    """Hand size never passes 10; the drawn card goes to the graveyard."""
    game = bare_game()
    player = game.state.player
    fill(player.hand, BLACKIRON_TROLL, 10)
    fill(player.deck, LASTWORD_SPRITE, 1)
    burned = player.deck[0]

    game.turn_manager.draw_card(Side.PLAYER)

    assert len(player.hand) == 10
    assert player.deck == []
    assert burned in player.graveyard
    assert game.state.event_log[-1].type == EventType.CARD_BURNED


def test_fatigue_escalates():
    """Each empty-deck draw deals the counter's value, then bumps it by one."""
    game = bare_game()
    player = game.state.player

    game.turn_manager.draw_card(Side.PLAYER)
    assert player.hero.hp == 29
    assert player.fatigue == 2

    game.turn_manager.draw_card(Side.PLAYER)
    assert player.hero.hp == 27
    assert player.fatigue == 3


def test_fatigue_ignores_armor():
    """Fatigue comes straight off hp; armor is left alone."""
    game = bare_game()
    player = game.state.player
    player.hero.armor = 5

    game.turn_manager.draw_card(Side.PLAYER)

    assert player.hero.armor == 5
    assert player.hero.hp == 29
    assert player.fatigue == 2


def test_fatigue_can_end_the_game():
    game = bare_game()
    game.state.opponent.hero.hp = 1

    game.turn_manager.draw_card(Side.OPPONENT)

    assert game.state.game_over
    assert game.state.winner is Side.PLAYER


# ============================================================================
# Artifacts at turn start
# ============================================================================

def test_limited_artifact_expires_after_three_turn_starts():
    """Durability 3: gone after three owner turn starts, discount gone with it."""
    game = started_game()
    player = game.state.player
    chronometer = CardInstance.from_definition(ANCIENT_CHRONOMETER)
    troll = CardInstance.from_definition(BLACKIRON_TROLL)
    player.hand.extend([chronometer, troll])
    game.mana_system.set_pool(Side.PLAYER, 4)

    ok, _ = game.play_card(Side.PLAYER, chronometer.instance_id)
    assert ok
    assert chronometer.remaining_duration == 3
    assert game.mana_system.effective_cost(troll, Side.PLAYER) == 6

    for remaining in (2, 1):
        game.turn_manager.start_of_turn(Side.PLAYER)
        assert player.artifact_slot is chronometer
        assert chronometer.remaining_duration == remaining
        assert game.mana_system.effective_cost(troll, Side.PLAYER) == 6

    game.turn_manager.start_of_turn(Side.PLAYER)
    assert player.artifact_slot is None
    assert chronometer in player.graveyard
    assert game.mana_system.effective_cost(troll, Side.PLAYER) == 7


def test_permanent_artifact_never_expires():
    game = bare_game()
    orb = CardInstance.from_definition(ORB_OF_CALAMITY)
    game.state.opponent.artifact_slot = orb

    for _ in range(5):
        game.turn_manager.start_of_turn(Side.OPPONENT)

    assert game.state.opponent.artifact_slot is orb
    assert orb.remaining_duration is None

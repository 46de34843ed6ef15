"""
Human Action Tests

Card selection, targeting, attacker selection and the rejections that leave
the match untouched.
"""

from riftduel.engine import (
    CardInstance, CardType, Game, GameConfig, Side, Target, TargetingMode
)
from riftduel.cards.core_set import (
    BLACKIRON_TROLL, DEEPWOOD_GUARDIAN, FLAME_WARD, FROST_BLAST, LASTWORD_SPRITE,
    MISTWOLF, REDFLAME_DRAGONSPAWN, SHATTERED_SWORDSMAN, TIME_RIFTWALKER
)


# ============================================================================
# Test Harness
# ============================================================================

def new_game(mana=10):
    """A match with empty decks, the player to act and `mana` crystals."""
    game = Game(config=GameConfig.instant(seed=9))
    game.mana_system.set_pool(Side.PLAYER, mana)
    return game


def in_hand(game, definition, side=Side.PLAYER):
    card = CardInstance.from_definition(definition)
    game.state.side(side).hand.append(card)
    return card


def on_board(game, side, definition, can_attack=True):
    minion = CardInstance.from_definition(definition)
    minion.can_attack = can_attack
    game.state.side(side).board.append(minion)
    return minion


def snapshot(game):
    """Hashable summary of the parts of state a rejection must not touch."""
    state = game.state
    sides = []
    for player in state.sides():
        sides.append((
            tuple(c.instance_id for c in player.hand),
            tuple((m.instance_id, m.current_health, m.current_attack, m.can_attack)
                  for m in player.board),
            tuple(c.instance_id for c in player.graveyard),
            player.mana.current,
            player.hero.hp,
        ))
    return tuple(sides), state.turn, state.active_side


# ============================================================================
# Card selection
# ============================================================================

def test_untargeted_creature_plays_immediately():
    game = new_game(mana=7)
    troll = in_hand(game, BLACKIRON_TROLL)

    ok, _ = game.select_card(troll.instance_id)

    assert ok
    assert troll in game.state.player.board
    assert not troll.can_attack
    assert game.state.player.mana.current == 0
    assert game.state.targeting_mode is TargetingMode.NONE
    assert game.state.selected_card_id is None


def test_unaffordable_card_rejected_and_selection_cleared():
    game = new_game(mana=2)
    blast = in_hand(game, FROST_BLAST)
    troll = in_hand(game, BLACKIRON_TROLL)
    game.select_card(blast.instance_id)
    assert game.state.targeting_mode is TargetingMode.CARD

    ok, message = game.select_card(troll.instance_id)

    assert not ok
    assert "mana" in message
    assert game.state.selected_card_id is None
    assert game.state.targeting_mode is TargetingMode.NONE
    assert troll in game.state.player.hand


def test_targeted_spell_waits_for_target():
    game = new_game(mana=2)
    blast = in_hand(game, FROST_BLAST)

    ok, _ = game.select_card(blast.instance_id)

    assert ok
    assert game.state.targeting_mode is TargetingMode.CARD
    assert game.state.selected_card_id == blast.instance_id
    assert blast in game.state.player.hand
    assert game.state.player.mana.current == 2


def test_invalid_spell_target_changes_nothing():
    """A friendly target for an enemy-only spell is rejected; retrying is safe."""
    game = new_game(mana=2)
    blast = in_hand(game, FROST_BLAST)
    game.select_card(blast.instance_id)
    before = snapshot(game)

    for _ in range(2):
        ok, _ = game.select_card_target(Target.hero(Side.PLAYER))
        assert not ok
        assert snapshot(game) == before
        assert game.state.targeting_mode is TargetingMode.CARD


def test_spell_resolves_on_valid_target():
    game = new_game(mana=2)
    blast = in_hand(game, FROST_BLAST)
    enemy = on_board(game, Side.OPPONENT, BLACKIRON_TROLL)
    game.select_card(blast.instance_id)

    ok, _ = game.select_card_target(Target.minion(Side.OPPONENT, enemy.instance_id))

    assert ok
    assert enemy.current_health == 4
    assert enemy.is_frozen
    assert blast in game.state.player.graveyard
    assert game.state.player.mana.current == 0
    assert game.state.targeting_mode is TargetingMode.NONE
    assert CardType.SPELL in game.state.player.played_types_this_turn


def test_spell_triggers_spellburst():
    game = new_game(mana=2)
    swordsman = on_board(game, Side.PLAYER, SHATTERED_SWORDSMAN)
    blast = in_hand(game, FROST_BLAST)
    game.select_card(blast.instance_id)

    game.select_card_target(Target.hero(Side.OPPONENT))

    assert swordsman.current_attack == 5
    assert game.state.opponent.hero.hp == 27


def test_full_board_rejects_but_keeps_selection():
    game = new_game(mana=10)
    for _ in range(7):
        on_board(game, Side.PLAYER, MISTWOLF)
    spawn = in_hand(game, REDFLAME_DRAGONSPAWN)
    game.state.selected_card_id = spawn.instance_id

    ok, message = game.play_selected_card()

    assert not ok
    assert "full" in message
    assert game.state.selected_card_id == spawn.instance_id
    assert spawn in game.state.player.hand
    assert game.state.player.mana.current == 10


def test_targeted_battlecry_without_targets_plays_at_once():
    """With no friendly minion to ready, the Riftwalker goes straight to the board."""
    game = new_game(mana=5)
    walker = in_hand(game, TIME_RIFTWALKER)

    ok, _ = game.select_card(walker.instance_id)

    assert ok
    assert walker in game.state.player.board
    assert game.state.targeting_mode is TargetingMode.NONE


def test_targeted_battlecry_readies_friendly_minion():
    game = new_game(mana=5)
    veteran = on_board(game, Side.PLAYER, BLACKIRON_TROLL, can_attack=False)
    walker = in_hand(game, TIME_RIFTWALKER)

    game.select_card(walker.instance_id)
    assert game.state.targeting_mode is TargetingMode.CARD
    ok, _ = game.select_card_target(Target.minion(Side.PLAYER, veteran.instance_id))

    assert ok
    assert veteran.can_attack
    assert not walker.can_attack


def test_flame_ward_needs_friendly_minion():
    game = new_game(mana=3)
    guardian = on_board(game, Side.PLAYER, DEEPWOOD_GUARDIAN)
    enemy = on_board(game, Side.OPPONENT, BLACKIRON_TROLL)
    ward = in_hand(game, FLAME_WARD)
    game.select_card(ward.instance_id)

    ok, _ = game.select_card_target(Target.minion(Side.OPPONENT, enemy.instance_id))
    assert not ok

    ok, _ = game.select_card_target(Target.minion(Side.PLAYER, guardian.instance_id))
    assert ok
    assert len(guardian.effects) == 1
    assert guardian.effects[0].value == 3


def test_cancel_clears_everything():
    game = new_game(mana=2)
    blast = in_hand(game, FROST_BLAST)
    game.select_card(blast.instance_id)

    ok, _ = game.cancel_selection()

    assert ok
    assert game.state.targeting_mode is TargetingMode.NONE
    assert game.state.selected_card_id is None
    assert game.state.selected_attacker_id is None


# ============================================================================
# Attacks
# ============================================================================

def test_select_attacker_toggles():
    game = new_game()
    troll = on_board(game, Side.PLAYER, BLACKIRON_TROLL)

    game.select_attacker(troll.instance_id)
    assert game.state.targeting_mode is TargetingMode.ATTACK
    assert game.state.selected_attacker_id == troll.instance_id

    game.select_attacker(troll.instance_id)
    assert game.state.targeting_mode is TargetingMode.NONE
    assert game.state.selected_attacker_id is None


def test_select_attacker_replaces_card_selection():
    game = new_game(mana=2)
    blast = in_hand(game, FROST_BLAST)
    troll = on_board(game, Side.PLAYER, BLACKIRON_TROLL)
    game.select_card(blast.instance_id)

    game.select_attacker(troll.instance_id)

    assert game.state.selected_card_id is None
    assert game.state.selected_attacker_id == troll.instance_id


def test_unready_frozen_or_harmless_attackers_rejected():
    game = new_game()
    sick = on_board(game, Side.PLAYER, BLACKIRON_TROLL, can_attack=False)
    frozen = on_board(game, Side.PLAYER, BLACKIRON_TROLL)
    frozen.is_frozen = True
    harmless = on_board(game, Side.PLAYER, BLACKIRON_TROLL)
    harmless.current_attack = 0

    for minion in (sick, frozen, harmless):
        ok, _ = game.select_attacker(minion.instance_id)
        assert not ok
    assert game.state.selected_attacker_id is None


def test_attack_resolves_and_clears_selection():
    game = new_game()
    troll = on_board(game, Side.PLAYER, BLACKIRON_TROLL)
    game.select_attacker(troll.instance_id)

    ok, _ = game.select_attack_target(Target.hero(Side.OPPONENT))

    assert ok
    assert game.state.opponent.hero.hp == 23
    assert not troll.can_attack
    assert game.state.targeting_mode is TargetingMode.NONE

    ok, _ = game.select_attacker(troll.instance_id)
    assert not ok


def test_taunt_must_be_attacked_first():
    game = new_game()
    troll = on_board(game, Side.PLAYER, BLACKIRON_TROLL)
    guardian = on_board(game, Side.OPPONENT, DEEPWOOD_GUARDIAN)
    sprite = on_board(game, Side.OPPONENT, LASTWORD_SPRITE)
    game.select_attacker(troll.instance_id)

    for blocked in (Target.hero(Side.OPPONENT), Target.minion(Side.OPPONENT, sprite.instance_id)):
        ok, message = game.select_attack_target(blocked)
        assert not ok
        assert "Taunt" in message
    assert game.state.opponent.hero.hp == 30

    ok, _ = game.select_attack_target(Target.minion(Side.OPPONENT, guardian.instance_id))
    assert ok
    assert guardian in game.state.opponent.graveyard


def test_friendly_attack_target_rejected():
    game = new_game()
    troll = on_board(game, Side.PLAYER, BLACKIRON_TROLL)
    buddy = on_board(game, Side.PLAYER, LASTWORD_SPRITE)
    game.select_attacker(troll.instance_id)

    ok, _ = game.select_attack_target(Target.minion(Side.PLAYER, buddy.instance_id))

    assert not ok
    assert buddy in game.state.player.board


# ============================================================================
# Turn and game-over gating
# ============================================================================

def test_actions_rejected_on_opponent_turn():
    game = new_game()
    troll = on_board(game, Side.PLAYER, BLACKIRON_TROLL)
    card = in_hand(game, LASTWORD_SPRITE)
    game.state.active_side = Side.OPPONENT
    before = snapshot(game)

    assert not game.select_card(card.instance_id)[0]
    assert not game.select_attacker(troll.instance_id)[0]
    assert not game.end_turn()[0]
    assert snapshot(game) == before


def test_actions_rejected_after_game_over():
    game = new_game()
    card = in_hand(game, LASTWORD_SPRITE)
    game.state.game_over = True
    game.state.winner = Side.OPPONENT

    ok, message = game.select_card(card.instance_id)

    assert not ok
    assert "over" in message
    assert game.get_winner() is Side.OPPONENT

"""
Riftduel Core Set

The 20-card catalog each side shuffles into its deck, plus uncollectible
tokens. Ids are stable: per-card scripts are keyed by them.
"""

from riftduel.engine.game import make_creature, make_spell, make_artifact
from riftduel.engine.types import Mechanic, TargetType


# =============================================================================
# Creatures
# =============================================================================

REDFLAME_DRAGONSPAWN = make_creature(
    card_id=1,
    name="Redflame Dragonspawn",
    cost=6,
    attack=5,
    health=6,
    text="Battlecry: Deal 2 damage to all enemies.",
    mechanics={Mechanic.BATTLECRY}
)

DEEPWOOD_GUARDIAN = make_creature(
    card_id=2,
    name="Deepwood Guardian",
    cost=3,
    attack=2,
    health=5,
    text="Taunt. Whenever this takes damage, restore 1 Health to it.",
    mechanics={Mechanic.TAUNT, Mechanic.REGENERATE_ON_DAMAGE}
)

LASTWORD_SPRITE = make_creature(
    card_id=3,
    name="Lastword Sprite",
    cost=2,
    attack=2,
    health=1,
    text="Deathrattle: Draw a card.",
    mechanics={Mechanic.DEATHRATTLE}
)

SHATTERED_SWORDSMAN = make_creature(
    card_id=4,
    name="Shattered Swordsman",
    cost=4,
    attack=4,
    health=3,
    text="Whenever you cast a spell, gain +1 Attack.",
    mechanics={Mechanic.SPELLBURST_ATTACK}
)

TIME_RIFTWALKER = make_creature(
    card_id=5,
    name="Time Riftwalker",
    cost=5,
    attack=3,
    health=4,
    text="Battlecry: A friendly minion may attack again.",
    mechanics={Mechanic.BATTLECRY, "WindfuryGrant"},
    target_type=TargetType.FRIENDLY_MINION
)

MISTWOLF_PACK = make_creature(
    card_id=6,
    name="Mistwolf Pack",
    cost=4,
    attack=2,
    health=2,
    text="Summon two 2/2 Wolves. Combo: If a spell was cast on the previous turn, summon a third.",
    mechanics={"Summon", "Combo"}
)

BLACKIRON_TROLL = make_creature(
    card_id=7,
    name="Blackiron Troll",
    cost=7,
    attack=7,
    health=7,
    text=""
)

SOUL_MANIPULATOR = make_creature(
    card_id=8,
    name="Soul Manipulator",
    cost=5,
    attack=3,
    health=6,
    text="Deathrattle: Summon a random minion from your opponent's graveyard.",
    mechanics={Mechanic.DEATHRATTLE, "ResurrectEnemyMinion"}
)

GLORIOUS_PALADIN = make_creature(
    card_id=9,
    name="Glorious Paladin",
    cost=6,
    attack=4,
    health=7,
    text="Divine Shield. Taunt.",
    mechanics={Mechanic.DIVINE_SHIELD, Mechanic.TAUNT}
)

ALCHEMY_ZEALOT = make_creature(
    card_id=10,
    name="Alchemy Zealot",
    cost=3,
    attack=4,
    health=2,
    text="Whenever you cast a consumable spell, gain +2 Attack this turn.",
    mechanics={"ConsumableSpellburstAttack"}
)


# =============================================================================
# Spells
# =============================================================================

FROST_BLAST = make_spell(
    card_id=11,
    name="Frost Blast",
    cost=2,
    text="Deal 3 damage to an enemy and Freeze it.",
    mechanics={"Damage", "Freeze"},
    target_type=TargetType.ENEMY_CHARACTER
)

MYSTIC_TRANSPOSITION = make_spell(
    card_id=12,
    name="Mystic Transposition",
    cost=4,
    text="Swap control of a friendly minion and an enemy minion.",
    mechanics={"SwapControl"}
)

RITE_OF_REVIVAL = make_spell(
    card_id=13,
    name="Rite of Revival",
    cost=6,
    text="Summon a random minion from your graveyard.",
    mechanics={"ResurrectFriendlyMinion"}
)

FLAME_WARD = make_spell(
    card_id=14,
    name="Flame Ward",
    cost=3,
    text="Give a friendly minion \"Whenever this is attacked, deal 3 damage to the attacker.\"",
    mechanics={"Enchantment", "DamageOnAttacked"},
    target_type=TargetType.FRIENDLY_MINION
)

ARCANE_PULSE = make_spell(
    card_id=15,
    name="Arcane Pulse",
    cost=1,
    text="Gain 2 extra mana next turn.",
    mechanics={"GainManaNextTurn"}
)

TIME_SEAL = make_spell(
    card_id=16,
    name="Time Seal",
    cost=5,
    text="Your opponent skips their next turn.",
    mechanics={"SkipEnemyTurn"}
)

SHADOW_BIND = make_spell(
    card_id=17,
    name="Shadow Bind",
    cost=2,
    text="Silence an enemy minion. It can't attack until your next turn.",
    mechanics={"Silence", "CannotAttackNextTurn"},
    target_type=TargetType.ENEMY_MINION
)


# =============================================================================
# Artifacts
# =============================================================================

ORB_OF_CALAMITY = make_artifact(
    card_id=18,
    name="Orb of Calamity",
    cost=5,
    text="At the start of your turn, deal 1 damage to all characters.",
    mechanics={"StartOfTurnDamage"}
)

MITHRIL_CHARM = make_artifact(
    card_id=19,
    name="Mithril Charm",
    cost=3,
    text="The first time each friendly minion dies, it returns with 1 Health.",
    mechanics={"Aura", "ReincarnateOnDeath"}
)

ANCIENT_CHRONOMETER = make_artifact(
    card_id=20,
    name="Ancient Chronometer",
    cost=4,
    durability=3,
    text="Your cards cost (1) less (minimum 1). Lasts 3 turns.",
    mechanics={"Aura", "CostReduction", "LimitedDuration"}
)


# =============================================================================
# Tokens
# =============================================================================

MISTWOLF = make_creature(
    card_id=101,
    name="Mistwolf",
    cost=0,
    attack=2,
    health=2,
    text=""
)


CORE_SET = [
    REDFLAME_DRAGONSPAWN, DEEPWOOD_GUARDIAN, LASTWORD_SPRITE, SHATTERED_SWORDSMAN,
    TIME_RIFTWALKER, MISTWOLF_PACK, BLACKIRON_TROLL, SOUL_MANIPULATOR,
    GLORIOUS_PALADIN, ALCHEMY_ZEALOT,
    FROST_BLAST, MYSTIC_TRANSPOSITION, RITE_OF_REVIVAL, FLAME_WARD, ARCANE_PULSE,
    TIME_SEAL, SHADOW_BIND,
    ORB_OF_CALAMITY, MITHRIL_CHARM, ANCIENT_CHRONOMETER,
]

TOKENS = [MISTWOLF]

CARDS_BY_ID = {card.id: card for card in CORE_SET + TOKENS}

"""
Hardcoded effect and collection type lists.

Effect types listed in IGNORED_EFFECT_TYPES are recognized by the engine but
never contribute yields: they change combat, movement, sight, experience or
other non-yield state. Any effect type that is neither handled nor listed here
is reported as missing, so that gaps in coverage stay visible.

Collection types listed in UNSUPPORTED_COLLECTION_TYPES are recognized and
always resolve to no subjects.
"""

IGNORED_EFFECT_TYPES = frozenset([
    # ==========================================================================
    # Combat
    # ==========================================================================
    'EFFECT_ADJUST_UNIT_STRENGTH_MODIFIER',
    'EFFECT_ADJUST_UNIT_COMBAT_STRENGTH',
    'EFFECT_ADJUST_UNIT_BYPASS_COMBAT_UNIT',
    'EFFECT_ADJUST_UNIT_DEFENSE_STRENGTH',
    'EFFECT_ADJUST_CITY_DEFENSE_STRENGTH',
    'EFFECT_ADJUST_PLAYER_COMBAT_STRENGTH',
    'EFFECT_ADJUST_UNIT_FLANKING_BONUS',
    'EFFECT_ADJUST_UNIT_SUPPORT_BONUS',
    'EFFECT_ADJUST_UNIT_IGNORE_ZOC',
    'EFFECT_ADJUST_DISTRICT_HEALTH',
    'EFFECT_ADJUST_WALL_HEALTH',

    # ==========================================================================
    # Movement, sight and healing
    # ==========================================================================
    'EFFECT_ADJUST_UNIT_MOVEMENT',
    'EFFECT_ADJUST_UNIT_IGNORE_TERRAIN_COST',
    'EFFECT_ADJUST_UNIT_EMBARK_MOVEMENT',
    'EFFECT_ADJUST_UNIT_SIGHT',
    'EFFECT_ADJUST_UNIT_HEAL_PER_TURN',
    'EFFECT_ADJUST_UNIT_HEAL_OUTSIDE_FRIENDLY_TERRITORY',

    # ==========================================================================
    # Experience and commanders
    # ==========================================================================
    'EFFECT_ADJUST_UNIT_EXPERIENCE_RATE',
    'EFFECT_ADJUST_COMMANDER_EXPERIENCE',
    'EFFECT_ADJUST_UNIT_COMMAND_RADIUS',

    # ==========================================================================
    # Production and purchase costs (not yields)
    # ==========================================================================
    'EFFECT_CITY_ADJUST_UNIT_PRODUCTION',
    'EFFECT_CITY_ADJUST_CONSTRUCTIBLE_PRODUCTION',
    'EFFECT_CITY_ADJUST_PROJECT_PRODUCTION',
    'EFFECT_CITY_ADJUST_UNIT_PURCHASE_COST',
    'EFFECT_CITY_ADJUST_CONSTRUCTIBLE_PURCHASE_COST',

    # ==========================================================================
    # One-shot grants and diplomacy actions
    # ==========================================================================
    'EFFECT_GRANT_UNIT',
    'EFFECT_CITY_GRANT_UNIT',
    'EFFECT_PLAYER_GRANT_YIELD',
    'EFFECT_ADJUST_PLAYER_DIPLOMACY_ACTION_SUCCESS_CHANCE',
    'EFFECT_ADJUST_PLAYER_INFLUENCE_COST',
    'EFFECT_ADJUST_PLAYER_SETTLEMENT_CAP',
    'EFFECT_CITY_ADJUST_GROWTH',
])

UNSUPPORTED_COLLECTION_TYPES = frozenset([
    # Technically easy to grab, but no interesting effects applied
    'COLLECTION_CITIES_FOLLOWING_OWNER_RELIGION',
    # Combat-time collections, no standing yields
    'COLLECTION_PLAYER_COMBAT',
    'COLLECTION_UNIT_COMBAT',
    'COLLECTION_ALL_UNITS',
])

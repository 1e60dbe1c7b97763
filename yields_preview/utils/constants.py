"""
Constants used throughout the yields preview engine.
"""

DEFAULT_YIELD_TYPES = [
    'YIELD_FOOD',
    'YIELD_PRODUCTION',
    'YIELD_GOLD',
    'YIELD_SCIENCE',
    'YIELD_CULTURE',
    'YIELD_HAPPINESS',
    'YIELD_DIPLOMACY',
]

REQUIREMENT_SET_ALL = 'REQUIREMENTSET_TEST_ALL'
REQUIREMENT_SET_ANY = 'REQUIREMENTSET_TEST_ANY'

# Nested requirement-set reference, resolved through its RequirementSetId argument
REQUIREMENTSET_IS_MET = 'REQUIREMENT_REQUIREMENTSET_IS_MET'

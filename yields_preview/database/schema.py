"""
Column schemas of the rule database tables.

Every table the engine reads is listed here. Tables missing from a source are
created empty with this schema, and missing columns are filled with nulls, so
lookups never have to check for column existence.
"""

import polars as pl

_ARGUMENT_COLUMNS = {
    'Name': pl.Utf8,
    'Value': pl.Utf8,
    'Extra': pl.Utf8,
    'SecondExtra': pl.Utf8,
    'Type': pl.Utf8,
}

TABLE_SCHEMAS = {
    'Traditions': {
        'TraditionType': pl.Utf8,
        'AgeType': pl.Utf8,
        'Name': pl.Utf8,
        'IsCrisis': pl.Boolean,
    },
    'TraditionModifiers': {
        'TraditionType': pl.Utf8,
        'ModifierId': pl.Utf8,
    },
    'Modifiers': {
        'ModifierId': pl.Utf8,
        'ModifierType': pl.Utf8,
        'OwnerRequirementSetId': pl.Utf8,
        'SubjectRequirementSetId': pl.Utf8,
        'Permanent': pl.Boolean,
        'RunOnce': pl.Boolean,
        'NewOnly': pl.Boolean,
    },
    'DynamicModifiers': {
        'ModifierType': pl.Utf8,
        'CollectionType': pl.Utf8,
        'EffectType': pl.Utf8,
    },
    'ModifierArguments': {'ModifierId': pl.Utf8, **_ARGUMENT_COLUMNS},
    'RequirementSets': {
        'RequirementSetId': pl.Utf8,
        'RequirementSetType': pl.Utf8,
    },
    'RequirementSetRequirements': {
        'RequirementSetId': pl.Utf8,
        'RequirementId': pl.Utf8,
    },
    'Requirements': {
        'RequirementId': pl.Utf8,
        'RequirementType': pl.Utf8,
        'Inverse': pl.Boolean,
    },
    'RequirementArguments': {'RequirementId': pl.Utf8, **_ARGUMENT_COLUMNS},
    'TypeTags': {
        'Type': pl.Utf8,
        'Tag': pl.Utf8,
    },
    'Terrains': {
        'TerrainType': pl.Utf8,
        'Hills': pl.Boolean,
        'Mountain': pl.Boolean,
        'Water': pl.Boolean,
    },
    'Districts': {
        'DistrictType': pl.Utf8,
        'DistrictClass': pl.Utf8,
    },
    'Constructibles': {
        'ConstructibleType': pl.Utf8,
        'ConstructibleClass': pl.Utf8,
        'Age': pl.Utf8,
    },
    'Constructible_Adjacencies': {
        'ConstructibleType': pl.Utf8,
        'YieldChangeId': pl.Utf8,
        'RequiresActivation': pl.Boolean,
    },
    'Adjacency_YieldChanges': {
        'ID': pl.Utf8,
        'YieldType': pl.Utf8,
        'YieldChange': pl.Float64,
        'TilesRequired': pl.Int64,
        'AdjacentTerrain': pl.Utf8,
        'AdjacentFeature': pl.Utf8,
        'AdjacentConstructible': pl.Utf8,
        'AdjacentConstructibleTag': pl.Utf8,
        'AdjacentDistrict': pl.Utf8,
        'AdjacentResource': pl.Boolean,
        'AdjacentRiver': pl.Boolean,
        'AdjacentNaturalWonder': pl.Boolean,
        'AdjacentQuarter': pl.Boolean,
        'ProjectMaxYield': pl.Boolean,
        'Age': pl.Utf8,
    },
    'Warehouse_YieldChanges': {
        'ID': pl.Utf8,
        'YieldType': pl.Utf8,
        'YieldChange': pl.Float64,
        'ConstructibleInCity': pl.Utf8,
        'MinorRiverInCity': pl.Boolean,
        'NaturalWonderInCity': pl.Boolean,
        'Age': pl.Utf8,
    },
    'Constructible_Maintenances': {
        'ConstructibleType': pl.Utf8,
        'YieldType': pl.Utf8,
        'Amount': pl.Float64,
    },
    'Units': {
        'UnitType': pl.Utf8,
        'Domain': pl.Utf8,
        'CoreClass': pl.Utf8,
    },
    'LeaderTraits': {
        'LeaderType': pl.Utf8,
        'TraitType': pl.Utf8,
    },
    'CivilizationTraits': {
        'CivilizationType': pl.Utf8,
        'TraitType': pl.Utf8,
    },
    'Yields': {
        'YieldType': pl.Utf8,
    },
}

TABLE_NAMES = list(TABLE_SCHEMAS.keys())

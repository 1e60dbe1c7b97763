"""
Rule Database - read-only accessor over the game's rule tables.

Tables are stored as Polars DataFrames. All accessors are keyed lookups or
full-table filters; nothing is ever written back.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

import polars as pl

from yields_preview.database.schema import TABLE_SCHEMAS
from yields_preview.utils.constants import DEFAULT_YIELD_TYPES

logger = logging.getLogger(__name__)


def _coerce(value: Any, dtype) -> Any:
    """Coerce a raw cell to the schema dtype. Booleans come as 0/1, "true"/"false" or bools."""
    if value is None:
        return None
    if dtype == pl.Boolean:
        if isinstance(value, str):
            return value.strip().lower() in ('true', '1')
        return bool(value)
    if dtype == pl.Utf8:
        if isinstance(value, bool):
            return 'true' if value else 'false'
        return str(value)
    if dtype == pl.Int64:
        return int(value)
    if dtype == pl.Float64:
        return float(value)
    return value


def normalize_rows(table_name: str, rows: Iterable[Dict[str, Any]]) -> pl.DataFrame:
    """Build a DataFrame for a known table from row dicts, enforcing its schema."""
    schema = TABLE_SCHEMAS[table_name]
    normalized = [
        {column: _coerce(row.get(column), dtype) for column, dtype in schema.items()}
        for row in rows
    ]
    return pl.DataFrame(normalized, schema=schema)


def normalize_frame(table_name: str, df: pl.DataFrame) -> pl.DataFrame:
    """Cast a DataFrame loaded from a database to the table schema."""
    schema = TABLE_SCHEMAS[table_name]
    columns = []
    for column, dtype in schema.items():
        if column not in df.columns:
            columns.append(pl.lit(None, dtype=dtype).alias(column))
        elif dtype == pl.Boolean and df.schema[column] == pl.Utf8:
            columns.append(pl.col(column).str.to_lowercase().is_in(['true', '1']).alias(column))
        else:
            columns.append(pl.col(column).cast(dtype, strict=False).alias(column))
    return df.select(columns)


def empty_table(table_name: str) -> pl.DataFrame:
    return pl.DataFrame(schema=TABLE_SCHEMAS[table_name])


class RuleDatabase:
    """Read-only rule tables (Modifiers, Requirements, TypeTags, ...)."""

    def __init__(self, tables: Optional[Dict[str, pl.DataFrame]] = None):
        """
        Initialize the RuleDatabase.

        Args:
            tables: {table_name: DataFrame}. Known tables are cast to their
                schema; missing known tables are created empty.
        """
        self._tables: Dict[str, pl.DataFrame] = {}
        self.failed_tables: List[str] = []
        tables = tables or {}

        for table_name in TABLE_SCHEMAS:
            if table_name in tables:
                self._tables[table_name] = normalize_frame(table_name, tables[table_name])
            else:
                self._tables[table_name] = empty_table(table_name)

        for table_name, df in tables.items():
            if table_name not in TABLE_SCHEMAS:
                self._tables[table_name] = df

    @classmethod
    def from_tables(cls, tables: Dict[str, List[Dict[str, Any]]]) -> 'RuleDatabase':
        """
        Build a database from {table_name: [row dicts]}.

        A table whose rows cannot be cast to its schema is logged, left empty
        and listed in `failed_tables`.
        """
        frames = {}
        failed_tables = []
        for table_name, rows in tables.items():
            try:
                if table_name in TABLE_SCHEMAS:
                    frames[table_name] = normalize_rows(table_name, rows)
                else:
                    frames[table_name] = pl.from_dicts(rows, infer_schema_length=None) if rows else pl.DataFrame()
            except (AttributeError, TypeError, ValueError, pl.exceptions.PolarsError) as e:
                failed_tables.append(table_name)
                logger.warning(f"Failed to load table {table_name}: {e}")

        database = cls(frames)
        database.failed_tables = failed_tables
        return database

    # ==================== GENERIC ====================

    def table(self, table_name: str) -> pl.DataFrame:
        if table_name not in self._tables:
            logger.warning(f"Unknown table requested: {table_name}")
            return pl.DataFrame()
        return self._tables[table_name]

    def table_names(self) -> List[str]:
        return list(self._tables.keys())

    def rows(self, table_name: str, **where: Any) -> List[Dict[str, Any]]:
        """All rows matching column == value for every keyword, in table order."""
        df = self.table(table_name)
        if df.is_empty():
            return []
        expr = pl.lit(True)
        for column, value in where.items():
            expr = expr & (pl.col(column) == value)
        return df.filter(expr).to_dicts()

    def row(self, table_name: str, **where: Any) -> Optional[Dict[str, Any]]:
        """First row matching the filter, or None."""
        rows = self.rows(table_name, **where)
        return rows[0] if rows else None

    # ==================== MODIFIERS ====================

    def modifier(self, modifier_id: str) -> Optional[Dict[str, Any]]:
        return self.row('Modifiers', ModifierId=modifier_id)

    def dynamic_modifier(self, modifier_type: str) -> Optional[Dict[str, Any]]:
        return self.row('DynamicModifiers', ModifierType=modifier_type)

    def modifier_arguments(self, modifier_id: str) -> List[Dict[str, Any]]:
        return self.rows('ModifierArguments', ModifierId=modifier_id)

    def tradition_modifier_ids(self, tradition_type: str) -> List[str]:
        return [r['ModifierId'] for r in self.rows('TraditionModifiers', TraditionType=tradition_type)]

    # ==================== REQUIREMENTS ====================

    def requirement_set(self, requirement_set_id: str) -> Optional[Dict[str, Any]]:
        return self.row('RequirementSets', RequirementSetId=requirement_set_id)

    def requirement_set_requirement_ids(self, requirement_set_id: str) -> List[str]:
        return [
            r['RequirementId']
            for r in self.rows('RequirementSetRequirements', RequirementSetId=requirement_set_id)
        ]

    def requirement(self, requirement_id: str) -> Optional[Dict[str, Any]]:
        return self.row('Requirements', RequirementId=requirement_id)

    def requirement_arguments(self, requirement_id: str) -> List[Dict[str, Any]]:
        return self.rows('RequirementArguments', RequirementId=requirement_id)

    # ==================== REFERENCE DATA ====================

    def tags_for_type(self, type_name: str) -> List[str]:
        return [r['Tag'] for r in self.rows('TypeTags', Type=type_name)]

    def types_with_tag(self, tag: str) -> List[str]:
        return [r['Type'] for r in self.rows('TypeTags', Tag=tag)]

    def terrain(self, terrain_type: str) -> Optional[Dict[str, Any]]:
        return self.row('Terrains', TerrainType=terrain_type)

    def district(self, district_type: str) -> Optional[Dict[str, Any]]:
        return self.row('Districts', DistrictType=district_type)

    def constructible(self, constructible_type: str) -> Optional[Dict[str, Any]]:
        return self.row('Constructibles', ConstructibleType=constructible_type)

    def constructible_types_for_adjacency(self, yield_change_id: str) -> List[str]:
        return [
            r['ConstructibleType']
            for r in self.rows('Constructible_Adjacencies', YieldChangeId=yield_change_id)
        ]

    def adjacency_yield_change(self, yield_change_id: str) -> Optional[Dict[str, Any]]:
        return self.row('Adjacency_YieldChanges', ID=yield_change_id)

    def warehouse_yield_change(self, yield_change_id: str) -> Optional[Dict[str, Any]]:
        return self.row('Warehouse_YieldChanges', ID=yield_change_id)

    def constructible_maintenances(self, constructible_type: str) -> List[Dict[str, Any]]:
        return self.rows('Constructible_Maintenances', ConstructibleType=constructible_type)

    def unit(self, unit_type: str) -> Optional[Dict[str, Any]]:
        return self.row('Units', UnitType=unit_type)

    def leader_trait_types(self, leader_type: str) -> List[str]:
        return [r['TraitType'] for r in self.rows('LeaderTraits', LeaderType=leader_type)]

    def civilization_trait_types(self, civilization_type: str) -> List[str]:
        return [r['TraitType'] for r in self.rows('CivilizationTraits', CivilizationType=civilization_type)]

    def yield_types(self) -> List[str]:
        """Known yield types, from the Yields table when loaded."""
        df = self.table('Yields')
        if df.is_empty():
            return list(DEFAULT_YIELD_TYPES)
        return df.get_column('YieldType').drop_nulls().to_list()

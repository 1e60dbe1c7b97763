"""
Rule database loaders - JSON dumps and SQL databases (via Polars/connectorx).
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

import polars as pl

from yields_preview.database.rule_database import RuleDatabase
from yields_preview.database.schema import TABLE_NAMES

logger = logging.getLogger(__name__)


class RuleDatabaseLoadError(Exception):
    """Raised when the rule database cannot be loaded."""
    pass


def load_rule_database_from_json(path: Union[str, Path]) -> RuleDatabase:
    """
    Load a rule database from a JSON dump.

    Args:
        path: File containing {table_name: [row, ...]}

    Returns:
        RuleDatabase

    Raises:
        RuleDatabaseLoadError: If the file is missing or not valid JSON, or
            if no table in it could be loaded
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise RuleDatabaseLoadError(f"Failed to load rule database from {path}: {e}")

    if not isinstance(data, dict):
        raise RuleDatabaseLoadError(f"Expected an object of tables in {path}, got {type(data).__name__}")

    database = RuleDatabase.from_tables(data)
    if data and len(database.failed_tables) == len(data):
        raise RuleDatabaseLoadError(f"No rule tables could be loaded from {path}")

    loaded = len(data) - len(database.failed_tables)
    logger.info(f"Loaded {loaded} rule tables from {path} ({len(database.failed_tables)} failed)")
    return database


def load_rule_database_from_uri(connection_uri: str,
                                table_names: Optional[List[str]] = None) -> RuleDatabase:
    """
    Load rule tables from a SQL database using Polars read_database_uri.

    Works with any connectorx URI, e.g. the game's SQLite gameplay database:
    "sqlite:///path/to/debug-gameplay.sqlite".

    Tables that fail to load are logged and left empty.

    Raises:
        RuleDatabaseLoadError: If no table could be loaded at all
    """
    table_names = table_names or TABLE_NAMES
    frames: Dict[str, pl.DataFrame] = {}
    failures = []

    for table_name in table_names:
        query = f'SELECT * FROM "{table_name}"'
        try:
            frames[table_name] = pl.read_database_uri(query=query, uri=connection_uri)
        except Exception as e:
            failures.append(table_name)
            logger.warning(f"Failed to load table {table_name}: {e}")

    if not frames:
        raise RuleDatabaseLoadError(f"No rule tables could be loaded from {connection_uri}")

    logger.info(f"Loaded {len(frames)} rule tables ({len(failures)} failed)")
    return RuleDatabase(frames)


def load_rule_database(database_uri: Optional[str] = None,
                       database_json: Optional[Union[str, Path]] = None) -> RuleDatabase:
    """Load from a URI when given, else from a JSON dump, else an empty database."""
    if database_uri:
        return load_rule_database_from_uri(database_uri)
    if database_json:
        return load_rule_database_from_json(database_json)
    logger.warning("No rule database source configured, starting with empty tables")
    return RuleDatabase()

"""Rule database, loaders and caches."""

from yields_preview.database.rule_database import RuleDatabase
from yields_preview.database.cache import RuleCache
from yields_preview.database.loader import (
    load_rule_database,
    load_rule_database_from_json,
    load_rule_database_from_uri,
    RuleDatabaseLoadError,
)

__all__ = [
    'RuleDatabase',
    'RuleCache',
    'load_rule_database',
    'load_rule_database_from_json',
    'load_rule_database_from_uri',
    'RuleDatabaseLoadError',
]

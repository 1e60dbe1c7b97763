"""
Rule cache - read-through memoization over the rule database.

Entries are keyed by stable string ids and live until invalidate() is called,
which must happen whenever the rule database is reloaded (new game, age
transition).
"""

import logging
from typing import Dict, FrozenSet, Optional

from yields_preview.database.rule_database import RuleDatabase

logger = logging.getLogger(__name__)


class RuleCache:
    """Memoized tag, trait and requirement-set lookups."""

    def __init__(self, database: RuleDatabase):
        self.database = database
        self._tags_by_type: Dict[str, FrozenSet[str]] = {}
        self._types_by_tag: Dict[str, FrozenSet[str]] = {}
        self._leader_traits: Dict[str, FrozenSet[str]] = {}
        self._civilization_traits: Dict[str, FrozenSet[str]] = {}
        # Resolved requirement sets, filled by ModifierResolver
        self.requirement_sets: Dict[str, object] = {}

    def invalidate(self, database: Optional[RuleDatabase] = None) -> None:
        """Drop every cached entry, optionally switching to a reloaded database."""
        if database is not None:
            self.database = database
        self._tags_by_type.clear()
        self._types_by_tag.clear()
        self._leader_traits.clear()
        self._civilization_traits.clear()
        self.requirement_sets.clear()
        logger.debug("Rule cache invalidated")

    def type_tags(self, type_name: str) -> FrozenSet[str]:
        if type_name not in self._tags_by_type:
            self._tags_by_type[type_name] = frozenset(self.database.tags_for_type(type_name))
        return self._tags_by_type[type_name]

    def has_type_tag(self, type_name: str, tag: str) -> bool:
        return tag in self.type_tags(type_name)

    def types_with_tag(self, tag: str) -> FrozenSet[str]:
        if tag not in self._types_by_tag:
            self._types_by_tag[tag] = frozenset(self.database.types_with_tag(tag))
        return self._types_by_tag[tag]

    def leader_traits(self, leader_type: Optional[str]) -> FrozenSet[str]:
        if not leader_type:
            return frozenset()
        if leader_type not in self._leader_traits:
            self._leader_traits[leader_type] = frozenset(self.database.leader_trait_types(leader_type))
        return self._leader_traits[leader_type]

    def civilization_traits(self, civilization_type: Optional[str]) -> FrozenSet[str]:
        if not civilization_type:
            return frozenset()
        if civilization_type not in self._civilization_traits:
            self._civilization_traits[civilization_type] = frozenset(
                self.database.civilization_trait_types(civilization_type)
            )
        return self._civilization_traits[civilization_type]

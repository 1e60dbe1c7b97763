"""
Modifier Resolver - joins raw rule rows into ResolvedModifier trees.
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from yields_preview.database.cache import RuleCache
from yields_preview.database.rule_database import RuleDatabase
from yields_preview.models.arguments import build_arguments
from yields_preview.models.modifier import ResolvedModifier
from yields_preview.models.requirement import (
    ResolvedRequirement, ResolvedRequirementSet, EMPTY_REQUIREMENT_SET
)
from yields_preview.utils.constants import REQUIREMENT_SET_ALL, REQUIREMENTSET_IS_MET

logger = logging.getLogger(__name__)


class RequirementSetCycleError(Exception):
    """A requirement set references itself through nested sets."""
    pass


class ModifierResolver:
    """Resolves modifiers and their requirement sets from the rule database."""

    def __init__(self, database: RuleDatabase, cache: RuleCache):
        self.database = database
        self.cache = cache

    def resolve(self, modifier_id: str) -> Optional[ResolvedModifier]:
        """
        Resolve a modifier by id.

        Returns:
            The resolved modifier, or None when the id is not in the database
        """
        row = self.database.modifier(modifier_id)
        if row is None:
            logger.info(f"Modifier {modifier_id} not found")
            return None
        return self.resolve_row(row)

    def resolve_row(self, row: Dict[str, Any]) -> ResolvedModifier:
        modifier_id = row['ModifierId']
        dynamic_modifier = self.database.dynamic_modifier(row['ModifierType'])
        if dynamic_modifier is None:
            logger.warning(f"Modifier {modifier_id}: no DynamicModifiers row for {row['ModifierType']}")
            dynamic_modifier = {}

        return ResolvedModifier(
            modifier_id=modifier_id,
            modifier_type=row['ModifierType'],
            effect_type=dynamic_modifier.get('EffectType'),
            collection_type=dynamic_modifier.get('CollectionType'),
            arguments=build_arguments(self.database.modifier_arguments(modifier_id)),
            subject_requirement_set=self.resolve_requirement_set(row.get('SubjectRequirementSetId')),
            owner_requirement_set=self.resolve_requirement_set(row.get('OwnerRequirementSetId')),
            permanent=bool(row.get('Permanent')),
            run_once=bool(row.get('RunOnce')),
            new_only=bool(row.get('NewOnly')),
        )

    def resolve_requirement_set(self,
                                requirement_set_id: Optional[str],
                                stack: Tuple[str, ...] = ()) -> ResolvedRequirementSet:
        """
        Resolve a requirement set into a tree, following nested sets eagerly.

        Args:
            requirement_set_id: Set id, None or empty for "no requirements"
            stack: Set ids currently being resolved, for cycle detection

        Raises:
            RequirementSetCycleError: if a nested set references an ancestor
        """
        if not requirement_set_id:
            return EMPTY_REQUIREMENT_SET
        if requirement_set_id in stack:
            chain = ' -> '.join(stack + (requirement_set_id,))
            raise RequirementSetCycleError(f"Requirement set cycle detected: {chain}")
        if requirement_set_id in self.cache.requirement_sets:
            return self.cache.requirement_sets[requirement_set_id]

        stack = stack + (requirement_set_id,)
        row = self.database.requirement_set(requirement_set_id)
        set_type = row['RequirementSetType'] if row and row.get('RequirementSetType') else REQUIREMENT_SET_ALL

        requirements = tuple(
            self._resolve_requirement(requirement_id, stack)
            for requirement_id in self.database.requirement_set_requirement_ids(requirement_set_id)
        )
        resolved = ResolvedRequirementSet(
            requirement_set_id=requirement_set_id,
            set_type=set_type,
            requirements=requirements,
        )
        self.cache.requirement_sets[requirement_set_id] = resolved
        return resolved

    def _resolve_requirement(self, requirement_id: str, stack: Tuple[str, ...]) -> ResolvedRequirement:
        row = self.database.requirement(requirement_id)
        if row is None:
            logger.warning(f"Requirement {requirement_id} not found")
            return ResolvedRequirement(requirement_id=requirement_id, requirement_type=None)

        arguments = build_arguments(self.database.requirement_arguments(requirement_id))
        nested_set = None
        if row['RequirementType'] == REQUIREMENTSET_IS_MET:
            nested_id = arguments['RequirementSetId'].value if 'RequirementSetId' in arguments else None
            if nested_id:
                nested_set = self.resolve_requirement_set(nested_id, stack)
            else:
                logger.warning(f"Requirement {requirement_id} has no RequirementSetId argument")

        return ResolvedRequirement(
            requirement_id=requirement_id,
            requirement_type=row['RequirementType'],
            inverse=bool(row.get('Inverse')),
            arguments=arguments,
            nested_set=nested_set,
        )

    def iter_modifiers(self, modifier_ids: Iterable[str]) -> Iterator[ResolvedModifier]:
        """Resolve modifiers in order, skipping unknown ids."""
        for modifier_id in modifier_ids:
            modifier = self.resolve(modifier_id)
            if modifier is not None:
                yield modifier

    def modifiers_for_tradition(self, tradition_type: str) -> List[ResolvedModifier]:
        return list(self.iter_modifiers(self.database.tradition_modifier_ids(tradition_type)))

"""
Resolved requirement dataclasses.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from yields_preview.models.arguments import Argument
from yields_preview.utils.constants import REQUIREMENT_SET_ALL


@dataclass(frozen=True)
class ResolvedRequirement:
    """A requirement row joined with its arguments.

    `nested_set` is only set for REQUIREMENT_REQUIREMENTSET_IS_MET children.
    `requirement_type` is None when the row is missing from the database.
    """
    requirement_id: str
    requirement_type: Optional[str]
    inverse: bool = False
    arguments: Dict[str, Argument] = field(default_factory=dict)
    nested_set: Optional['ResolvedRequirementSet'] = None

    def argument(self, name: str) -> Optional[Argument]:
        return self.arguments.get(name)


@dataclass(frozen=True)
class ResolvedRequirementSet:
    """A requirement set with its children resolved into a tree."""
    requirement_set_id: Optional[str]
    set_type: str = REQUIREMENT_SET_ALL
    requirements: Tuple[ResolvedRequirement, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.requirements


EMPTY_REQUIREMENT_SET = ResolvedRequirementSet(requirement_set_id=None)

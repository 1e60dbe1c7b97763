"""
Resolved modifier dataclass.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from yields_preview.models.arguments import Argument
from yields_preview.models.requirement import ResolvedRequirementSet, EMPTY_REQUIREMENT_SET


@dataclass(frozen=True)
class ResolvedModifier:
    """A modifier row joined with its dynamic modifier, arguments and requirement trees."""
    modifier_id: str
    modifier_type: str
    effect_type: Optional[str]
    collection_type: Optional[str]
    arguments: Dict[str, Argument] = field(default_factory=dict)
    subject_requirement_set: ResolvedRequirementSet = EMPTY_REQUIREMENT_SET
    owner_requirement_set: ResolvedRequirementSet = EMPTY_REQUIREMENT_SET
    permanent: bool = False
    run_once: bool = False
    new_only: bool = False

    def argument(self, name: str) -> Optional[Argument]:
        return self.arguments.get(name)

    def has_argument(self, name: str) -> bool:
        """True when the argument is present with a non-empty value."""
        argument = self.arguments.get(name)
        return argument is not None and argument.value not in (None, '')

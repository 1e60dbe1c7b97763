"""
Argument dataclass shared by modifiers and requirements.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Argument:
    """A single named argument of a modifier or requirement row."""
    name: str
    value: Optional[str]
    extra: Optional[str] = None
    second_extra: Optional[str] = None
    type: Optional[str] = None

    def as_number(self) -> float:
        """Parse the value as a number, raising ValueError on garbage."""
        return float(self.value)

    def as_bool(self) -> bool:
        return (self.value or '').strip().lower() in ('true', '1')

    def as_list(self) -> List[str]:
        """Split a comma-separated value, e.g. "YIELD_FOOD, YIELD_PRODUCTION"."""
        return [item.strip() for item in (self.value or '').split(',') if item.strip()]


def build_arguments(rows: List[Dict]) -> Dict[str, Argument]:
    """Key argument rows by their Name column. Later rows win on duplicates."""
    arguments = {}
    for row in rows:
        arguments[row['Name']] = Argument(
            name=row['Name'],
            value=row.get('Value'),
            extra=row.get('Extra'),
            second_extra=row.get('SecondExtra'),
            type=row.get('Type'),
        )
    return arguments

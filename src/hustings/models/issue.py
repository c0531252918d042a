"""Issue and stance data models.

Issues are immutable catalog entries, one per category. A stance is an
opinion on one issue:
- significance: how much the holder cares (1-9), fixed at creation.
- approach: the position taken (0-100), clamped on every write.

Stances are owned by exactly one candidate or cluster and are never
shared by reference; use copy() when seeding one owner from another.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from hustings.models.traits import clamp


SIGNIFICANCE_MIN = 1
SIGNIFICANCE_MAX = 9
APPROACH_MIN = 0
APPROACH_MAX = 100


class IssueCategory(str, enum.Enum):
    """The five fixed issue categories, in catalog order."""
    ECONOMIC = "economic"
    SOCIAL = "social"
    LOGISTICS = "logistics"
    ENVIRONMENTAL = "environmental"
    HEALTH = "health"


@dataclass(frozen=True)
class Issue:
    """A canonical campaign issue."""
    code: str
    statement: str
    category: IssueCategory


class Stance:
    """An opinion on one issue.

    approach is exposed as a property so that every write, including
    plain attribute assignment, goes through the clamp.
    """

    __slots__ = ("issue", "_significance", "_approach")

    def __init__(self, issue: Issue, significance: int, approach: int) -> None:
        if not SIGNIFICANCE_MIN <= significance <= SIGNIFICANCE_MAX:
            raise ValueError(
                f"Stance on {issue.code!r}: significance {significance} "
                f"outside [{SIGNIFICANCE_MIN}, {SIGNIFICANCE_MAX}]"
            )
        self.issue = issue
        self._significance = significance
        self._approach = clamp(approach, APPROACH_MIN, APPROACH_MAX)

    @property
    def significance(self) -> int:
        return self._significance

    @property
    def approach(self) -> int:
        return self._approach

    @approach.setter
    def approach(self, value: int) -> None:
        self._approach = clamp(value, APPROACH_MIN, APPROACH_MAX)

    def shift(self, delta: int) -> int:
        """Move the approach by delta (clamped). Returns the new approach."""
        self.approach = self._approach + delta
        return self._approach

    @property
    def category(self) -> IssueCategory:
        return self.issue.category

    def copy(self) -> Stance:
        return Stance(self.issue, self._significance, self._approach)

    def as_dict(self) -> dict[str, object]:
        return {
            "issue": self.issue.code,
            "significance": self._significance,
            "approach": self._approach,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Stance):
            return NotImplemented
        return (
            self.issue == other.issue
            and self._significance == other._significance
            and self._approach == other._approach
        )

    def __repr__(self) -> str:
        return (
            f"Stance(issue={self.issue.code!r}, "
            f"significance={self._significance}, approach={self._approach})"
        )

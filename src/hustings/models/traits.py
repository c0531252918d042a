"""Trait sets: the named characteristics carried by campaign actors.

A trait set is a value type composed into candidates, party leaders and
managerial teams. Every value lives in [0, 100]; updates that would push
a value outside that band are clamped, never rejected. Reading a trait
that the holder was never given is a structural defect and raises.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Protocol


TRAIT_MIN = 0
TRAIT_MAX = 100


class Characteristic(str, enum.Enum):
    """Named characteristics a trait set can hold."""
    POPULARITY = "popularity"
    CHARISMA = "charisma"
    DEBATING = "debating"
    EVENT_HANDLING = "event_handling"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


def clamp(value: int, low: int = TRAIT_MIN, high: int = TRAIT_MAX) -> int:
    """Clamp an integer into [low, high]."""
    return max(low, min(high, value))


@dataclass
class TraitSet:
    """Mapping of characteristic -> integer value in [0, 100].

    Invariants:
    - Every stored value is within [TRAIT_MIN, TRAIT_MAX].
    - The set of characteristics is fixed at creation; adjust() on a
      missing characteristic raises KeyError.
    """
    values: dict[Characteristic, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.values = {
            Characteristic(k): clamp(int(v)) for k, v in self.values.items()
        }

    def get(self, characteristic: Characteristic) -> int:
        try:
            return self.values[characteristic]
        except KeyError:
            raise KeyError(
                f"Trait set has no {characteristic.value!r} characteristic"
            ) from None

    def has(self, characteristic: Characteristic) -> bool:
        return characteristic in self.values

    def adjust(self, characteristic: Characteristic, delta: int) -> int:
        """Add delta to a characteristic, clamped. Returns the new value."""
        updated = clamp(self.get(characteristic) + delta)
        self.values[characteristic] = updated
        return updated

    def as_dict(self) -> dict[str, int]:
        return {k.value: v for k, v in self.values.items()}


class HasTraits(Protocol):
    """Anything that can take part in an event roll."""
    name: str
    traits: TraitSet

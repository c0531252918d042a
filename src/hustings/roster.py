"""Roster: the party, leader, candidate and electorate definitions.

The roster is raw input for generation: names, populations and each
party's stance-range template. It holds no randomised state. Loading
fails closed; a template missing rows or a party short of candidates is
a structural defect, not something to pad out.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from hustings.models.party import StanceRange


@dataclass(frozen=True)
class PartyEntry:
    """One party as declared in the roster, in registration order."""
    name: str
    leader: str
    stance_ranges: tuple[StanceRange, ...]
    candidates: tuple[str, ...]
    description: str = ""


@dataclass(frozen=True)
class ElectorateEntry:
    """One electorate as declared in the roster."""
    name: str
    population: int


@dataclass(frozen=True)
class Roster:
    parties: tuple[PartyEntry, ...] = field(default_factory=tuple)
    electorates: tuple[ElectorateEntry, ...] = field(default_factory=tuple)

    ROSTER_FILENAME = "roster.json"

    @classmethod
    def from_config_dir(cls, config_dir: Path, issue_count: int = 5) -> Roster:
        """Load the roster from the canonical config directory.

        Raises:
            FileNotFoundError: If roster.json does not exist.
            ValueError: If the roster is structurally invalid.
        """
        path = config_dir / cls.ROSTER_FILENAME
        if not path.exists():
            raise FileNotFoundError(f"Roster not found: {path}")
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data, issue_count=issue_count)

    @classmethod
    def from_dict(cls, data: dict[str, Any], issue_count: int = 5) -> Roster:
        errors = validate_roster_data(data, issue_count)
        if errors:
            raise ValueError("Invalid roster: " + "; ".join(errors))

        parties = tuple(
            PartyEntry(
                name=p["name"],
                leader=p["leader"],
                stance_ranges=tuple(StanceRange.from_row(r) for r in p["stance_ranges"]),
                candidates=tuple(p["candidates"]),
                description=p.get("description", ""),
            )
            for p in data["parties"]
        )
        electorates = tuple(
            ElectorateEntry(name=e["name"], population=int(e["population"]))
            for e in data["electorates"]
        )
        return cls(parties=parties, electorates=electorates)

    def first_electorates(self, count: int) -> tuple[ElectorateEntry, ...]:
        """The first `count` electorates, in roster order."""
        if count > len(self.electorates):
            raise ValueError(
                f"Requested {count} electorates, roster defines {len(self.electorates)}"
            )
        return self.electorates[:count]


def validate_roster_data(data: dict[str, Any], issue_count: int) -> list[str]:
    """Validate a raw roster document.

    Returns:
        Empty list if valid, list of error strings otherwise.
    """
    errors: list[str] = []
    parties = data.get("parties")
    electorates = data.get("electorates")

    if not isinstance(parties, list) or not parties:
        return ["roster must define a non-empty 'parties' list"]
    if not isinstance(electorates, list) or not electorates:
        return ["roster must define a non-empty 'electorates' list"]

    names = [e.get("name", "") for e in electorates]
    if len(set(names)) != len(names):
        errors.append("electorate names must be unique")
    for e in electorates:
        if not str(e.get("name", "")).strip():
            errors.append("electorate with blank name")
        pop = e.get("population")
        if not isinstance(pop, int) or pop <= 0:
            errors.append(f"{e.get('name')}: population must be a positive integer")

    party_names = [p.get("name", "") for p in parties]
    if len(set(party_names)) != len(party_names):
        errors.append("party names must be unique")

    for p in parties:
        label = p.get("name") or "<unnamed party>"
        if not str(p.get("leader", "")).strip():
            errors.append(f"{label}: missing leader")
        ranges = p.get("stance_ranges")
        if not isinstance(ranges, list) or len(ranges) != issue_count:
            got = len(ranges) if isinstance(ranges, list) else 0
            errors.append(
                f"{label}: stance_ranges must have {issue_count} rows, got {got}"
            )
        else:
            for idx, row in enumerate(ranges):
                try:
                    StanceRange.from_row(row)
                except (TypeError, ValueError) as exc:
                    errors.append(f"{label}: stance_ranges[{idx}]: {exc}")
        candidates = p.get("candidates")
        if not isinstance(candidates, list) or len(candidates) < len(electorates):
            errors.append(
                f"{label}: needs at least {len(electorates)} candidate names"
            )

    # Tally records and reports identify people by name.
    people: list[str] = []
    for p in parties:
        people.append(str(p.get("leader", "")))
        if isinstance(p.get("candidates"), list):
            people.extend(str(c) for c in p["candidates"])
    duplicates = sorted({n for n in people if n.strip() and people.count(n) > 1})
    if duplicates:
        errors.append(f"leader and candidate names must be unique, repeated: {duplicates}")

    return errors

"""Election aggregate: the in-memory state handed to the campaign engine.

The aggregate owns the catalog issues and event templates, the parties
in registration order and the electorates in load order. Structural
preconditions are checked up front by validate(); the engine refuses to
run on an invalid election rather than clamping or defaulting around a
defect.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from hustings.models.electorate import Electorate
from hustings.models.event import EventKind, EventTemplate
from hustings.models.issue import Issue
from hustings.models.party import Candidate, Party


class ElectionPreconditionError(ValueError):
    """Raised when election state is structurally unfit to simulate."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


@dataclass
class Election:
    """All state for one simulated election."""
    issues: tuple[Issue, ...]
    events: tuple[EventTemplate, ...]
    parties: list[Party] = field(default_factory=list)
    electorates: list[Electorate] = field(default_factory=list)
    days: int = 1

    def event(self, kind: EventKind) -> EventTemplate:
        for template in self.events:
            if template.kind == kind:
                return template
        raise KeyError(f"No event template for {kind.value!r}")

    def candidates_in(self, electorate: Electorate) -> list[Candidate]:
        """Candidates fielded in an electorate, in party registration order."""
        return [party.candidate_for(electorate.name) for party in self.parties]

    def leaders(self) -> list[Candidate]:
        return [party.leader for party in self.parties]

    def all_candidates(self) -> list[Candidate]:
        return [
            c for party in self.parties for c in party.candidates.values()
        ]

    def validate(self) -> list[str]:
        """Return structural errors. Empty list = fit to simulate."""
        errors: list[str] = []
        issue_order = [i.code for i in self.issues]

        if not self.issues:
            errors.append("election has no issues")
        if len(self.parties) < 2:
            errors.append(
                f"at least 2 parties are required, got {len(self.parties)}"
            )
        if not self.electorates:
            errors.append("election has no electorates")
        if self.days < 1:
            errors.append(f"campaign must run at least 1 day, got {self.days}")

        for electorate in self.electorates:
            if not electorate.clusters:
                errors.append(f"{electorate.name}: electorate has no clusters")
            for idx, cluster in enumerate(electorate.clusters):
                codes = [s.issue.code for s in cluster.stances]
                if codes != issue_order:
                    errors.append(
                        f"{electorate.name}: cluster[{idx}] stances {codes} "
                        f"do not match issue order {issue_order}"
                    )
            for party in self.parties:
                if electorate.name not in party.candidates:
                    errors.append(
                        f"{party.name}: no candidate fielded in {electorate.name}"
                    )

        for party in self.parties:
            if len(party.stance_ranges) != len(self.issues):
                errors.append(
                    f"{party.name}: stance-range template has "
                    f"{len(party.stance_ranges)} rows, expected {len(self.issues)}"
                )
            for person in [party.leader, *party.candidates.values()]:
                codes = [s.issue.code for s in person.stances]
                if codes != issue_order:
                    errors.append(
                        f"{party.name}: {person.name} stances {codes} "
                        f"do not match issue order {issue_order}"
                    )

        names = [p.name for p in [*self.leaders(), *self.all_candidates()]]
        repeated = sorted({n for n in names if names.count(n) > 1})
        if repeated:
            errors.append(f"people must have unique names, repeated: {repeated}")

        known = {t.kind for t in self.events}
        missing = [k.value for k in EventKind if k not in known]
        if missing:
            errors.append(f"missing event templates: {missing}")

        return errors

    def require_valid(self) -> None:
        errors = self.validate()
        if errors:
            raise ElectionPreconditionError(errors)

    def as_dict(self) -> dict[str, Any]:
        return {
            "days": self.days,
            "issues": [i.code for i in self.issues],
            "parties": [p.as_dict() for p in self.parties],
            "electorates": [e.as_dict() for e in self.electorates],
        }

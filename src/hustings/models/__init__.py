"""Core data models for Hustings."""

from hustings.models.electorate import Electorate, ElectorateCluster
from hustings.models.election import Election, ElectionPreconditionError
from hustings.models.event import (
    EventCategory,
    EventKind,
    EventOutcome,
    EventTemplate,
    OutcomeStatus,
    TraitChange,
)
from hustings.models.issue import Issue, IssueCategory, Stance
from hustings.models.party import Candidate, ManagerialTeam, Party, StanceRange
from hustings.models.traits import Characteristic, HasTraits, TraitSet

__all__ = [
    "Electorate",
    "ElectorateCluster",
    "Election",
    "ElectionPreconditionError",
    "EventCategory",
    "EventKind",
    "EventOutcome",
    "EventTemplate",
    "OutcomeStatus",
    "TraitChange",
    "Issue",
    "IssueCategory",
    "Stance",
    "Candidate",
    "ManagerialTeam",
    "Party",
    "StanceRange",
    "Characteristic",
    "HasTraits",
    "TraitSet",
]

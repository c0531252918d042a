"""Campaign engines: random source, scheduling, resolution and influence."""

from hustings.engine.campaign import CampaignReport, CampaignRunner
from hustings.engine.coattails import apply_leader_coattails
from hustings.engine.influence import OpinionInfluencer
from hustings.engine.random_source import RandomSource, round_half_away
from hustings.engine.resolver import EventContext, EventResolver
from hustings.engine.scheduler import DayLedger, EventScheduler

__all__ = [
    "CampaignReport",
    "CampaignRunner",
    "apply_leader_coattails",
    "OpinionInfluencer",
    "RandomSource",
    "round_half_away",
    "EventContext",
    "EventResolver",
    "DayLedger",
    "EventScheduler",
]

"""Vote tallying and result aggregation."""

from hustings.tally.aggregator import ElectionVerdict, ResultAggregator, leading_index
from hustings.tally.engine import ClusterTally, ElectorateTally, TieBreak, VoteTallyEngine

__all__ = [
    "ElectionVerdict",
    "ResultAggregator",
    "leading_index",
    "ClusterTally",
    "ElectorateTally",
    "TieBreak",
    "VoteTallyEngine",
]

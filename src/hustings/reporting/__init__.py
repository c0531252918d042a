"""Text rendering of election state, events, tallies and verdicts."""

from hustings.reporting.formatter import (
    OutcomeFormatter,
    format_campaign,
    format_overview,
    format_standings,
    format_tally,
    format_verdict,
)

__all__ = [
    "OutcomeFormatter",
    "format_campaign",
    "format_overview",
    "format_standings",
    "format_tally",
    "format_verdict",
]

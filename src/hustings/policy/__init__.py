"""Campaign policy: validated access to config/campaign_params.json."""

from hustings.policy.resolver import IntRange, PolicyResolver

__all__ = ["IntRange", "PolicyResolver"]

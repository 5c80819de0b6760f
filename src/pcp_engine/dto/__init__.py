from .policy import (
    CharsetRequirementPayload,
    CharsetsDiff,
    PolicyPayload,
    RulePayload,
    SubsetRequirementPayload,
)

__all__ = (
    "CharsetRequirementPayload",
    "CharsetsDiff",
    "PolicyPayload",
    "RulePayload",
    "SubsetRequirementPayload",
)

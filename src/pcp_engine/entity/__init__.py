from .policy import Policy
from .requirement import CharsetRequirement, SubsetRequirement
from .rule import Rule

__all__ = (
    "CharsetRequirement",
    "Policy",
    "Rule",
    "SubsetRequirement",
)

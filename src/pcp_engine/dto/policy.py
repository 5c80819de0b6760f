"""Shape of the serialized (JSON) policy document."""

from typing import NotRequired

from typing_extensions import TypedDict

__all__ = (
    "CharsetRequirementPayload",
    "SubsetRequirementPayload",
    "RulePayload",
    "PolicyPayload",
    "CharsetsDiff",
)


class CharsetRequirementPayload(TypedDict):
    min_required: NotRequired[int]
    max_allowed: NotRequired[int]
    max_consecutive: NotRequired[int]
    required_locations: NotRequired[list[int]]
    prohibited_locations: NotRequired[list[int]]


class SubsetRequirementPayload(TypedDict):
    count: int
    options: NotRequired[list[str]]


class RulePayload(TypedDict):
    min_length: NotRequired[int]
    max_length: NotRequired[int]
    max_consecutive: NotRequired[int]
    prohibited_substrings: NotRequired[list[str]]
    require: NotRequired[list[str]]
    require_subset: NotRequired[SubsetRequirementPayload]
    charset_requirements: NotRequired[dict[str, CharsetRequirementPayload]]


# ``None`` removes a preset charset, a string (re)defines a charset by its characters
CharsetsDiff = dict[str, str | None]


class PolicyPayload(TypedDict):
    charsets: NotRequired[CharsetsDiff]
    rules: list[RulePayload]

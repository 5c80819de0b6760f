from typing import Optional

import pydantic
from pydantic import StrictInt
from pydantic.dataclasses import dataclass

from .base import Names, Positions, base_model_config

__all__ = ("SubsetRequirement", "CharsetRequirement")


@dataclass(frozen=True, slots=True, kw_only=True, config=base_model_config)
class SubsetRequirement:
    """
    Requires characters from at least ``count`` distinct charsets of ``options``.

    Attributes:
        count: Number of distinct charsets that must appear in the password.
        options: Charsets to choose from. When unset, every charset of the policy is
            an option.
    """

    count: StrictInt
    options: Names = None

    @pydantic.field_serializer("options", when_used="unless-none")
    def _serialize_options(self, value: frozenset[str]) -> list[str]:
        return sorted(value)


@dataclass(frozen=True, slots=True, kw_only=True, config=base_model_config)
class CharsetRequirement:
    """
    Additional requirements for one charset within a rule.

    Locations are 0-based, negative values count from the end of the password (``-1``
    is the last character).

    Attributes:
        min_required: Minimum number of characters from the charset.
        max_allowed: Maximum number of characters from the charset.
        max_consecutive: Maximum length of a run of characters from the charset.
        required_locations: Positions that must hold a character from the charset.
        prohibited_locations: Positions that must not hold a character from the
            charset.
    """

    min_required: Optional[StrictInt] = None
    max_allowed: Optional[StrictInt] = None
    max_consecutive: Optional[StrictInt] = None
    required_locations: Positions = None
    prohibited_locations: Positions = None

    @pydantic.field_serializer(
        "required_locations", "prohibited_locations", when_used="unless-none"
    )
    def _serialize_locations(self, value: frozenset[int]) -> list[int]:
        return sorted(value)

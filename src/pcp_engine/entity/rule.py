from collections.abc import Mapping
from types import MappingProxyType
from typing import Annotated, Any, Optional

import pydantic
from pydantic import StrictInt, StrictStr
from pydantic.dataclasses import dataclass

from .base import Names, Substrings, base_model_config, empty_as_unset
from .requirement import CharsetRequirement, SubsetRequirement

__all__ = ("Rule",)


def _default_min_length(value: Any) -> Any:
    return 1 if value is None else value


@dataclass(frozen=True, slots=True, kw_only=True, config=base_model_config)
class Rule:
    """
    One complete set of constraints a password may satisfy.

    Attributes:
        min_length: Minimum number of characters in the password.
        max_length: Maximum number of characters in the password.
        max_consecutive: Maximum number of consecutive identical characters.
        prohibited_substrings: Substrings that may not appear in the password.
        require: Charsets that must each appear at least once.
        require_subset: Charsets of which some number must appear.
        charset_requirements: Additional requirements keyed by charset name.
    """

    min_length: Annotated[StrictInt, pydantic.BeforeValidator(_default_min_length)] = 1
    max_length: Optional[StrictInt] = None
    max_consecutive: Optional[StrictInt] = None
    prohibited_substrings: Substrings = None
    require: Names = None
    require_subset: Optional[SubsetRequirement] = None
    charset_requirements: Annotated[
        Optional[Mapping[StrictStr, CharsetRequirement]],
        pydantic.BeforeValidator(empty_as_unset),
    ] = None

    def __post_init__(self) -> None:
        if self.charset_requirements is not None:
            object.__setattr__(
                self,
                "charset_requirements",
                MappingProxyType(dict(self.charset_requirements)),
            )

    @pydantic.field_serializer(
        "prohibited_substrings", "require", when_used="unless-none"
    )
    def _serialize_names(self, value: frozenset[str]) -> list[str]:
        return sorted(value)

    @pydantic.field_serializer(
        "charset_requirements", mode="wrap", when_used="unless-none"
    )
    def _serialize_charset_requirements(
        self,
        value: Mapping[str, CharsetRequirement],
        handler: pydantic.SerializerFunctionWrapHandler,
    ) -> Any:
        return handler(dict(value))

from typing import Annotated, Any, Optional

import annotated_types
import pydantic
from pydantic import StrictInt, StrictStr

__all__ = (
    "base_model_config",
    "Char",
    "Names",
    "Positions",
    "Substrings",
    "empty_as_unset",
)

base_model_config = pydantic.ConfigDict(extra="forbid")


def empty_as_unset(value: Any) -> Any:
    """An empty collection means the same as an absent one."""
    if isinstance(value, (list, tuple, set, frozenset, dict)) and not value:
        return None
    return value


Char = Annotated[StrictStr, annotated_types.Len(1, 1)]

Names = Annotated[
    Optional[frozenset[StrictStr]], pydantic.BeforeValidator(empty_as_unset)
]
Substrings = Annotated[
    Optional[frozenset[StrictStr]],
    pydantic.BeforeValidator(empty_as_unset),
]
Positions = Annotated[
    Optional[frozenset[StrictInt]], pydantic.BeforeValidator(empty_as_unset)
]

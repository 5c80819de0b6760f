from collections.abc import Mapping
from types import MappingProxyType
from typing import Annotated, Any, Optional

import pydantic
from pydantic import StrictStr
from pydantic.dataclasses import dataclass

from ..charset import Charsets, select_preset
from .base import Char, base_model_config
from .rule import Rule

__all__ = ("Policy",)


def _charsets_from_strings(value: Any) -> Any:
    """Lets a charset be written as a plain string of its characters."""
    if isinstance(value, Mapping):
        return {
            name: frozenset(chars) if isinstance(chars, str) else chars
            for name, chars in value.items()
        }
    return value


@dataclass(frozen=True, slots=True, kw_only=True, config=base_model_config)
class Policy:
    """
    Password composition policy (PCP).

    A password is accepted as long as it satisfies at least one of the rules. The
    policy is immutable, construct a new one to change it.

    Attributes:
        rules: The rules making up the policy, evaluated in order.
        charsets: Named, pairwise disjoint character sets. When omitted, the
            ``alphabet`` preset is used if any rule references ``alphabet`` and the
            default preset (``lower``, ``upper``, ``digits``, ``symbols``) otherwise.

    Example::

        from pcp_engine import Policy, Rule

        policy = Policy(rules=[Rule(min_length=8, require={"upper", "digits"})])
        policy.check("Password1")  # True
    """

    rules: tuple[Rule, ...]
    charsets: Annotated[
        Optional[Mapping[StrictStr, frozenset[Char]]],
        pydantic.BeforeValidator(_charsets_from_strings),
    ] = None

    def __post_init__(self) -> None:
        charsets = (
            select_preset(self.rules) if self.charsets is None else self.charsets
        )
        object.__setattr__(self, "charsets", MappingProxyType(dict(charsets)))

    @property
    def charset_table(self) -> Charsets:
        assert self.charsets is not None
        return self.charsets

    @classmethod
    def parse(cls, text: str | bytes) -> "Policy":
        """
        Loads a policy from its JSON representation.

        The returned policy is not validated, call :meth:`validate` before trusting
        it.

        Raises:
            ParseError: If the text is not JSON or doesn't describe a policy.
        """
        from ..serializer import parse

        return parse(text)

    def stringify(self) -> str:
        from ..serializer import stringify

        return stringify(self)

    def validate(self) -> None:
        """
        Raises:
            ConsistencyError: Describing the first contradiction found in the policy.
        """
        from ..validator import validate

        validate(self)

    def check(self, password: str) -> bool:
        from ..checker import check

        return check(password, self)

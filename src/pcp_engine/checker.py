import logging
from collections.abc import Mapping, Sequence
from itertools import groupby

from .entity import CharsetRequirement, Policy, Rule
from .validator import validate

__all__ = ("check", "classify")

logger = logging.getLogger(__name__)


def classify(password: str, charsets: Mapping[str, frozenset[str]]) -> list[int] | None:
    """
    Maps every character of the password onto the index of the charset containing it.

    Returns None if some character isn't part of any charset.
    """
    lookup: dict[str, int] = {}
    for index, chars in enumerate(charsets.values()):
        for char in chars:
            lookup.setdefault(char, index)

    mapped = []
    for char in password:
        if (index := lookup.get(char)) is None:
            return None
        mapped.append(index)
    return mapped


def _longest_run(items: Sequence[object], value: object | None = None) -> int:
    """Length of the longest run of equal items, or of items equal to ``value``."""
    return max(
        (
            sum(1 for _ in group)
            for key, group in groupby(items)
            if value is None or key == value
        ),
        default=0,
    )


def _check_charset_requirement(
    req: CharsetRequirement, charset: int, mapped: Sequence[int]
) -> str | None:
    """Returns the name of the first violated constraint, if any."""
    count = mapped.count(charset)
    if req.min_required is not None and count < req.min_required:
        return "min_required"
    if req.max_allowed is not None and count > req.max_allowed:
        return "max_allowed"

    if req.max_consecutive is not None:
        if _longest_run(mapped, charset) > req.max_consecutive:
            return "max_consecutive"

    size = len(mapped)
    for location in req.required_locations or ():
        index = location if location >= 0 else size + location
        if not 0 <= index < size or mapped[index] != charset:
            return "required_locations"

    for location in req.prohibited_locations or ():
        index = location if location >= 0 else size + location
        if 0 <= index < size and mapped[index] == charset:
            return "prohibited_locations"

    return None


def _check_rule(
    password: str, rule: Rule, mapping: Mapping[str, int], mapped: Sequence[int]
) -> str | None:
    """Returns the name of the first violated constraint, if any."""
    if len(password) < rule.min_length:
        return "min_length"
    if rule.max_length is not None and len(password) > rule.max_length:
        return "max_length"

    if rule.max_consecutive is not None:
        if _longest_run(password) > rule.max_consecutive:
            return "max_consecutive"

    if rule.prohibited_substrings:
        if any(s in password for s in rule.prohibited_substrings):
            return "prohibited_substrings"

    present = set(mapped)

    if rule.require:
        if any(mapping[name] not in present for name in rule.require):
            return "require"

    if rule.require_subset is not None:
        options = (
            rule.require_subset.options
            if rule.require_subset.options is not None
            else mapping.keys()
        )
        found = sum(1 for name in options if mapping[name] in present)
        if found < rule.require_subset.count:
            return "require_subset"

    for name, req in (rule.charset_requirements or {}).items():
        if failed := _check_charset_requirement(req, mapping[name], mapped):
            return "charset_requirements[%s].%s" % (name, failed)

    return None


def check(password: str, policy: Policy) -> bool:
    """
    Checks whether the password satisfies at least one rule of the policy.

    The policy is validated first. The result doesn't tell which rule or constraint
    rejected the password.

    Raises:
        ConsistencyError: If the policy is not consistent.
    """
    validate(policy)

    charsets = policy.charset_table
    mapping = {name: index for index, name in enumerate(charsets)}

    mapped = classify(password, charsets)
    if mapped is None:
        logger.debug("password contains characters outside of the policy charsets")
        return False

    for i, rule in enumerate(policy.rules):
        failed = _check_rule(password, rule, mapping, mapped)
        if failed is None:
            logger.debug("password accepted by rules[%d]", i)
            return True
        logger.debug("password rejected by rules[%d].%s", i, failed)

    return False

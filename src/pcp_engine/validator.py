"""
Consistency checks for policies.

Validation walks the policy top-down and raises on the first contradiction found. A
policy is either fully valid or rejected, there is no partial result.
"""

import logging
from collections.abc import Iterable, Set

from .charset import Charsets
from .entity import CharsetRequirement, Policy, Rule, SubsetRequirement
from .exc import CharsetOverlapError, ConsistencyError

__all__ = (
    "validate",
    "validate_charsets",
    "validate_rule",
    "validate_subset_requirement",
    "validate_charset_requirement",
)

logger = logging.getLogger(__name__)


def _fail(path: str, message: str) -> ConsistencyError:
    return ConsistencyError(message, ConsistencyError.Context(path=path))


def _fmt(names: Iterable[str]) -> str:
    return ", ".join(sorted(names))


def _require_positive(path: str, value: int | None) -> None:
    if value is not None and value < 1:
        raise _fail(path, "if set, may not be less than 1")


def validate_charsets(charsets: Charsets) -> None:
    for name, chars in charsets.items():
        if not chars:
            raise _fail("charsets[%s]" % name, "must not be empty")

    names = list(charsets)
    for i, first in enumerate(names):
        for second in names[i + 1 :]:
            if shared := charsets[first] & charsets[second]:
                raise CharsetOverlapError(
                    "charsets[%s] and charsets[%s] may not have shared characters"
                    % (first, second),
                    CharsetOverlapError.Context(
                        path="charsets",
                        charsets=(first, second),
                        shared="".join(sorted(shared)),
                    ),
                )


def validate_subset_requirement(
    req: SubsetRequirement, path: str, charsets: Set[str]
) -> None:
    if req.count < 1:
        raise _fail(path + ".count", "may not be less than 1")

    if req.options is None:
        if req.count >= len(charsets):
            raise _fail(
                path + ".count",
                "may not be greater than or equal to the number of available charsets "
                "(%d)" % len(charsets),
            )
        return

    if len(req.options) < 2:
        raise _fail(path + ".options", "must include at least two charsets")
    if unknown := req.options - charsets:
        raise _fail(path + ".options", "includes invalid charsets (%s)" % _fmt(unknown))
    if req.count >= len(req.options):
        raise _fail(
            path + ".count",
            "may not be greater than or equal to the number of options (%d)"
            % len(req.options),
        )


def validate_charset_requirement(
    req: CharsetRequirement, path: str, min_length: int
) -> None:
    _require_positive(path + ".min_required", req.min_required)
    _require_positive(path + ".max_allowed", req.max_allowed)
    _require_positive(path + ".max_consecutive", req.max_consecutive)

    required = req.required_locations or frozenset()
    prohibited = req.prohibited_locations or frozenset()

    for location in sorted(required):
        # -1 needs one character, -2 two, ...
        needed = location + 1 if location >= 0 else -location
        if needed > min_length:
            raise _fail(
                path + ".required_locations",
                "contains a location (%d) that is not guaranteed to exist in the "
                "password given its min_length (%d)" % (location, min_length),
            )

    if overlap := required & prohibited:
        raise _fail(
            path,
            "required_locations and prohibited_locations may not overlap (%s)"
            % ", ".join(map(str, sorted(overlap))),
        )

    if req.max_allowed is not None:
        if req.min_required is not None and req.max_allowed < req.min_required:
            raise _fail(path + ".max_allowed", "cannot be less than min_required")
        if len(required) > req.max_allowed:
            raise _fail(
                path + ".max_allowed",
                "cannot be less than the number of required_locations (%d)"
                % len(required),
            )


def _required_by_subset(rule: Rule, charsets: Set[str]) -> frozenset[str]:
    if rule.require_subset is None:
        return frozenset()
    if rule.require_subset.options is None:
        return frozenset(charsets)
    return rule.require_subset.options


def validate_rule(rule: Rule, path: str, charsets: Set[str]) -> None:
    if rule.min_length < 1:
        raise _fail(path + ".min_length", "may not be less than 1")
    _require_positive(path + ".max_length", rule.max_length)
    if rule.max_length is not None and rule.max_length < rule.min_length:
        raise _fail(path + ".max_length", "cannot be less than min_length")
    _require_positive(path + ".max_consecutive", rule.max_consecutive)

    if rule.prohibited_substrings and "" in rule.prohibited_substrings:
        raise _fail(
            path + ".prohibited_substrings", "may not contain an empty substring"
        )

    if rule.require and (unknown := rule.require - charsets):
        raise _fail(path + ".require", "includes invalid charsets (%s)" % _fmt(unknown))

    if rule.require_subset is not None:
        validate_subset_requirement(
            rule.require_subset, path + ".require_subset", charsets
        )

    requirements = rule.charset_requirements or {}
    for name, req in requirements.items():
        req_path = "%s.charset_requirements[%s]" % (path, name)
        if name not in charsets:
            raise _fail(req_path, "is not a valid charset name")
        validate_charset_requirement(req, req_path, rule.min_length)

    # a charset may only be made mandatory by one of require, require_subset and
    # charset_requirements
    required = rule.require or frozenset()
    subset = _required_by_subset(rule, charsets)

    if overlap := required & subset:
        raise _fail(
            path,
            "require and require_subset cannot have overlapping charset requirements "
            "(%s)" % _fmt(overlap),
        )

    for name, req in requirements.items():
        if name in required or name in subset:
            if req.min_required is not None:
                raise _fail(
                    "%s.charset_requirements[%s]" % (path, name),
                    "min_required cannot be set for a charset already used in "
                    "require or require_subset",
                )


def validate(policy: Policy) -> None:
    """
    Raises:
        ConsistencyError: Describing the first contradiction found in the policy.
    """
    charsets = policy.charset_table
    validate_charsets(charsets)

    if not policy.rules:
        raise _fail("rules", "must contain at least one rule")

    names = frozenset(charsets)
    for i, rule in enumerate(policy.rules):
        validate_rule(rule, "rules[%d]" % i, names)

    logger.debug("policy with %d rule(s) is consistent", len(policy.rules))

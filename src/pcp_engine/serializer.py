"""
Conversion between :class:`Policy` objects and their compact JSON representation.

A policy whose charsets match the preset implied by its rules is written without a
``charsets`` field. A policy with a single such rule is written as the bare rule::

    {"min_length":8,"require":["digits","upper"]}

Otherwise charsets are written as a diff against the preset::

    {"charsets":{"hex":"0123456789abcdef","lower":null},"rules":[...]}
"""

import json
import logging
from collections.abc import Mapping
from typing import Any, cast

import pydantic

from . import dto
from .charset import apply_charsets_diff, diff_charsets, select_preset
from .entity import Policy, Rule
from .exc import ParseError
from .util.model import convert_errors, model_dump_json

__all__ = ("stringify", "parse", "dump_policy", "load_policy")

logger = logging.getLogger(__name__)

_rule_adapter = pydantic.TypeAdapter(Rule)
_rules_adapter = pydantic.TypeAdapter(tuple[Rule, ...])


def dump_rule(rule: Rule) -> dto.RulePayload:
    return cast(
        dto.RulePayload,
        _rule_adapter.dump_python(rule, mode="json", exclude_none=True),
    )


def dump_policy(policy: Policy) -> dto.RulePayload | dto.PolicyPayload:
    rules = [dump_rule(rule) for rule in policy.rules]
    baseline = select_preset(policy.rules)

    if dict(policy.charset_table) == dict(baseline):
        if len(rules) == 1:
            return rules[0]
        return dto.PolicyPayload(rules=rules)

    return dto.PolicyPayload(
        charsets=diff_charsets(policy.charset_table, baseline), rules=rules
    )


def stringify(policy: Policy) -> str:
    return model_dump_json(dump_policy(policy))


def _normalize(payload: Mapping[str, Any]) -> tuple[Any, Any, tuple[str, ...]]:
    """
    Brings both document shapes into ``(rules, charsets, loc)``, ``loc`` being the
    prefix under which rule errors are reported.
    """
    data = dict(payload)
    charsets = data.pop("charsets", None)

    if "rules" not in data:
        return [data], charsets, ()

    rules = data.pop("rules")
    if data:
        raise ParseError(
            "unexpected field(s) next to 'rules': %s" % ", ".join(sorted(data))
        )
    if not isinstance(rules, list):
        raise ParseError("'rules' must be an array of rules")

    return rules, charsets, ("rules",)


def _load_charsets_diff(charsets: Any) -> dto.CharsetsDiff:
    if charsets is None:
        return {}

    if not isinstance(charsets, Mapping):
        raise ParseError("'charsets' must be an object mapping names to strings")

    for name, chars in charsets.items():
        if not isinstance(name, str):
            raise ParseError("charset names must be strings, got %r" % (name,))
        if chars is not None and not isinstance(chars, str):
            raise ParseError(
                "charsets[%s] must be a string of characters or null" % name
            )

    return dict(charsets)


def load_policy(payload: Any) -> Policy:
    """
    Builds a policy from an already decoded document (a bare rule or an object with
    ``rules`` and optionally ``charsets``).

    Raises:
        ParseError: If the document doesn't have the shape of a policy.
    """
    if not isinstance(payload, Mapping):
        raise ParseError(
            "expected an object at the top level, got %s" % type(payload).__name__
        )

    raw_rules, raw_charsets, loc = _normalize(payload)

    try:
        if loc:
            rules = _rules_adapter.validate_python(raw_rules)
        else:
            rules = (_rule_adapter.validate_python(raw_rules[0]),)
    except pydantic.ValidationError as ex:
        raise ParseError(
            "invalid rule definition",
            ParseError.Context(errors=convert_errors(ex, loc_prefix=loc)),
        ) from ex

    diff = _load_charsets_diff(raw_charsets)
    charsets = apply_charsets_diff(select_preset(rules), diff)

    logger.debug(
        "loaded policy with %d rule(s), charsets %r", len(rules), list(charsets)
    )
    return Policy(rules=rules, charsets=charsets)


def parse(text: str | bytes) -> Policy:
    """
    Loads a policy from JSON text. The policy is returned unvalidated.

    Raises:
        ParseError: If the text is not valid JSON or doesn't describe a policy.
    """
    try:
        payload = json.loads(text)
    except (ValueError, RecursionError) as ex:
        raise ParseError("invalid JSON: %s" % ex) from ex

    return load_policy(payload)

"""Built-in charset tables and the helpers that pick or diff against them."""

import string
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .entity import Rule

__all__ = (
    "Charsets",
    "ALPHABET",
    "DEFAULT_CHARSETS",
    "ALPHABET_CHARSETS",
    "uses_alphabet_charset",
    "select_preset",
    "diff_charsets",
    "apply_charsets_diff",
)

Charsets = Mapping[str, frozenset[str]]

ALPHABET = "alphabet"

DEFAULT_CHARSETS: Charsets = MappingProxyType(
    {
        "lower": frozenset(string.ascii_lowercase),
        "upper": frozenset(string.ascii_uppercase),
        "digits": frozenset(string.digits),
        "symbols": frozenset(string.punctuation),
    }
)

ALPHABET_CHARSETS: Charsets = MappingProxyType(
    {
        ALPHABET: frozenset(string.ascii_letters),
        "digits": frozenset(string.digits),
        "symbols": frozenset(string.punctuation),
    }
)


def uses_alphabet_charset(rules: Iterable["Rule"]) -> bool:
    """
    Returns True if any rule references the ``alphabet`` charset through ``require``,
    ``require_subset.options`` or a ``charset_requirements`` key.
    """
    for rule in rules:
        if rule.require and ALPHABET in rule.require:
            return True
        if rule.require_subset and rule.require_subset.options:
            if ALPHABET in rule.require_subset.options:
                return True
        if rule.charset_requirements and ALPHABET in rule.charset_requirements:
            return True
    return False


def select_preset(rules: Iterable["Rule"]) -> Charsets:
    """Returns the preset a policy's charset table is seeded from and diffed against."""
    return ALPHABET_CHARSETS if uses_alphabet_charset(rules) else DEFAULT_CHARSETS


def diff_charsets(charsets: Charsets, baseline: Charsets) -> dict[str, str | None]:
    """
    Computes the compact representation of a charset table.

    Charsets equal to the baseline are left out, changed or new charsets are rendered
    as a string of their (sorted) characters and baseline charsets missing from the
    table are marked with ``None``.

    Example::

        diff_charsets(
            {"lower": frozenset("abc"), "digits": frozenset("0123456789")},
            DEFAULT_CHARSETS,
        )
        # {'lower': 'abc', 'upper': None, 'symbols': None}
    """
    diff: dict[str, str | None] = {}

    for name, chars in charsets.items():
        if baseline.get(name) != chars:
            diff[name] = "".join(sorted(chars))

    for name in baseline:
        if name not in charsets:
            diff[name] = None

    return diff


def apply_charsets_diff(
    baseline: Charsets, diff: Mapping[str, str | None]
) -> dict[str, frozenset[str]]:
    """Reverses :func:`diff_charsets`."""
    charsets = dict(baseline)

    for name, chars in diff.items():
        if chars is None:
            charsets.pop(name, None)
        else:
            charsets[name] = frozenset(chars)

    return charsets

"""Tests for policy consistency validation."""

import pytest

from pcp_engine import (
    CharsetRequirement,
    ConsistencyError,
    Policy,
    Rule,
    SubsetRequirement,
    validate,
)
from pcp_engine.exc import CharsetOverlapError


def assert_inconsistent(policy, path, match=None):
    with pytest.raises(ConsistencyError, match=match) as exc_info:
        validate(policy)
    assert exc_info.value.path == path
    return exc_info.value


def rule_policy(**kwargs):
    return Policy(rules=[Rule(**kwargs)])


class TestCharsets:
    def test_empty_charset(self):
        policy = Policy(rules=[Rule()], charsets={"lower": "abc", "digits": ""})
        assert_inconsistent(policy, "charsets[digits]", "must not be empty")

    def test_overlapping_charsets_named(self):
        policy = Policy(
            rules=[Rule()],
            charsets={"lower": "abc", "digits": "012", "hex": "0123abcdef"},
        )
        err = assert_inconsistent(policy, "charsets")
        assert isinstance(err, CharsetOverlapError)
        assert err.ctx["charsets"] == ("lower", "hex")
        assert err.ctx["shared"] == "abc"
        assert "charsets[lower]" in str(err)
        assert "charsets[hex]" in str(err)

    def test_empty_checked_before_overlap(self):
        policy = Policy(rules=[Rule()], charsets={"a": "xy", "b": "y", "c": ""})
        assert_inconsistent(policy, "charsets[c]")


class TestPolicy:
    def test_at_least_one_rule(self):
        assert_inconsistent(Policy(rules=[]), "rules", "at least one rule")

    def test_valid_default(self):
        validate(rule_policy(min_length=8, require={"upper", "digits"}))

    def test_first_failing_rule_reported(self):
        policy = Policy(rules=[Rule(), Rule(min_length=0), Rule(max_length=0)])
        assert_inconsistent(policy, "rules[1].min_length")


class TestRule:
    @pytest.mark.parametrize(
        "kwargs, path",
        [
            ({"min_length": 0}, "rules[0].min_length"),
            ({"min_length": -3}, "rules[0].min_length"),
            ({"max_length": 0}, "rules[0].max_length"),
            ({"min_length": 8, "max_length": 7}, "rules[0].max_length"),
            ({"max_consecutive": 0}, "rules[0].max_consecutive"),
            (
                {"prohibited_substrings": {"admin", ""}},
                "rules[0].prohibited_substrings",
            ),
            ({"require": {"upper", "emoji"}}, "rules[0].require"),
        ],
    )
    def test_invalid(self, kwargs, path):
        assert_inconsistent(rule_policy(**kwargs), path)

    def test_unknown_require_named(self):
        assert_inconsistent(
            rule_policy(require={"emoji", "kanji", "upper"}),
            "rules[0].require",
            r"invalid charsets \(emoji, kanji\)",
        )

    def test_equal_bounds(self):
        validate(rule_policy(min_length=8, max_length=8, max_consecutive=1))

    def test_unknown_charset_requirement(self):
        policy = rule_policy(charset_requirements={"emoji": CharsetRequirement()})
        assert_inconsistent(
            policy, "rules[0].charset_requirements[emoji]", "not a valid charset"
        )

    def test_require_overlaps_subset(self):
        policy = rule_policy(
            require={"upper"},
            require_subset=SubsetRequirement(count=1, options={"upper", "digits"}),
        )
        assert_inconsistent(policy, "rules[0]", r"overlapping charset .*\(upper\)")

    def test_require_overlaps_implicit_subset(self):
        policy = rule_policy(
            require={"upper"}, require_subset=SubsetRequirement(count=2)
        )
        assert_inconsistent(policy, "rules[0]")

    def test_require_and_disjoint_subset(self):
        validate(
            rule_policy(
                require={"upper"},
                require_subset=SubsetRequirement(count=1, options={"lower", "digits"}),
            )
        )

    def test_require_without_subset(self):
        validate(
            rule_policy(
                require={"upper"},
                charset_requirements={"digits": CharsetRequirement(min_required=2)},
            )
        )

    def test_min_required_on_required_charset(self):
        policy = rule_policy(
            require={"digits"},
            charset_requirements={"digits": CharsetRequirement(min_required=2)},
        )
        assert_inconsistent(
            policy, "rules[0].charset_requirements[digits]", "min_required"
        )

    def test_min_required_on_subset_option(self):
        policy = rule_policy(
            require_subset=SubsetRequirement(count=2),
            charset_requirements={"symbols": CharsetRequirement(min_required=1)},
        )
        assert_inconsistent(policy, "rules[0].charset_requirements[symbols]")

    def test_other_requirements_on_required_charset(self):
        validate(
            rule_policy(
                min_length=4,
                require={"digits"},
                charset_requirements={
                    "digits": CharsetRequirement(
                        max_allowed=2, max_consecutive=1, required_locations={-1}
                    )
                },
            )
        )


class TestSubsetRequirement:
    @pytest.mark.parametrize(
        "subset, path, match",
        [
            (SubsetRequirement(count=0), "require_subset.count", "less than 1"),
            (
                SubsetRequirement(count=1, options={"lower"}),
                "require_subset.options",
                "at least two",
            ),
            (
                SubsetRequirement(count=1, options={"lower", "emoji"}),
                "require_subset.options",
                r"invalid charsets \(emoji\)",
            ),
            (
                SubsetRequirement(count=2, options={"lower", "upper"}),
                "require_subset.count",
                "number of options",
            ),
            (
                SubsetRequirement(count=3, options={"lower", "upper"}),
                "require_subset.count",
                "number of options",
            ),
            (
                SubsetRequirement(count=4),
                "require_subset.count",
                "available charsets",
            ),
        ],
    )
    def test_invalid(self, subset, path, match):
        policy = rule_policy(require_subset=subset)
        assert_inconsistent(policy, "rules[0]." + path, match)

    def test_valid(self):
        validate(rule_policy(require_subset=SubsetRequirement(count=3)))
        validate(
            rule_policy(
                require_subset=SubsetRequirement(
                    count=2, options={"lower", "upper", "digits"}
                )
            )
        )

    def test_alphabet_preset_has_three_charsets(self):
        policy = rule_policy(
            require_subset=SubsetRequirement(count=3, options={"alphabet", "digits"})
        )
        assert_inconsistent(policy, "rules[0].require_subset.count")
        validate(
            rule_policy(
                require_subset=SubsetRequirement(
                    count=1, options={"alphabet", "digits"}
                )
            )
        )


class TestCharsetRequirement:
    PATH = "rules[0].charset_requirements[digits]"

    def policy(self, min_length=1, **kwargs):
        return rule_policy(
            min_length=min_length,
            charset_requirements={"digits": CharsetRequirement(**kwargs)},
        )

    @pytest.mark.parametrize(
        "kwargs, field",
        [
            ({"min_required": 0}, "min_required"),
            ({"max_allowed": 0}, "max_allowed"),
            ({"max_allowed": -1}, "max_allowed"),
            ({"max_consecutive": 0}, "max_consecutive"),
            ({"min_required": 3, "max_allowed": 2}, "max_allowed"),
        ],
    )
    def test_invalid_counts(self, kwargs, field):
        assert_inconsistent(self.policy(**kwargs), self.PATH + "." + field)

    def test_required_locations_beyond_max_allowed(self):
        policy = self.policy(min_length=5, max_allowed=2, required_locations={0, 1, 2})
        assert_inconsistent(policy, self.PATH + ".max_allowed", "required_locations")

    def test_overlapping_locations(self):
        policy = self.policy(
            min_length=3, required_locations={0, 1}, prohibited_locations={1, -1}
        )
        assert_inconsistent(policy, self.PATH, r"may not overlap \(1\)")

    @pytest.mark.parametrize(
        "min_length, location",
        [
            (1, 1),
            (3, 3),
            (3, 10),
            (1, -2),
            (3, -4),
        ],
    )
    def test_location_not_guaranteed(self, min_length, location):
        policy = self.policy(min_length=min_length, required_locations={location})
        assert_inconsistent(
            policy, self.PATH + ".required_locations", "not guaranteed to exist"
        )

    @pytest.mark.parametrize(
        "min_length, location",
        [
            (1, 0),
            (1, -1),
            (3, 2),
            (3, -3),
            (2, -2),
        ],
    )
    def test_location_guaranteed(self, min_length, location):
        validate(self.policy(min_length=min_length, required_locations={location}))

    def test_prohibited_locations_unrestricted(self):
        validate(self.policy(min_length=1, prohibited_locations={5, -9}))

    def test_valid(self):
        validate(
            self.policy(
                min_length=2,
                min_required=1,
                max_allowed=2,
                max_consecutive=1,
                required_locations={0, -1},
                prohibited_locations={1},
            )
        )

import pytest

from pcp_engine import Policy, Rule


@pytest.fixture
def make_policy():
    """Builds a policy from rule keyword arguments, one dict per rule."""

    def _make(*rules, charsets=None):
        return Policy(rules=[Rule(**r) for r in rules], charsets=charsets)

    return _make

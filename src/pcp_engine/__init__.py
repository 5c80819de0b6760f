__all__ = (
    "exc",
    "ALPHABET_CHARSETS",
    "DEFAULT_CHARSETS",
    "CharsetRequirement",
    "ConsistencyError",
    "ParseError",
    "Policy",
    "Rule",
    "SubsetRequirement",
    "check",
    "parse",
    "stringify",
    "validate",
)
__version__ = "0.1.0"

from . import exc
from .charset import ALPHABET_CHARSETS, DEFAULT_CHARSETS
from .checker import check
from .entity import CharsetRequirement, Policy, Rule, SubsetRequirement
from .exc import ConsistencyError, ParseError
from .serializer import parse, stringify
from .validator import validate

import logging
import pathlib
from typing import IO

import ruamel.yaml as yaml
from ruamel.yaml.error import YAMLError

from .entity import Policy
from .exc import Location, ParseError, PolicyFileError
from .serializer import load_policy, parse

__all__ = ("PolicyLoader", "YAML_SUFFIXES")

logger = logging.getLogger(__name__)

YAML_SUFFIXES = frozenset((".yaml", ".yml"))


class PolicyLoader:
    """
    Reads policy documents written either in the JSON wire format or in YAML.

    YAML documents have the same structure as the JSON ones, which makes them handier
    for hand-written policies::

        rules:
          - min_length: 12
            require: [digits]
          - min_length: 20

    Raises:
        PolicyFileError: If the document can't be decoded or doesn't describe a policy.
    """

    def __init__(self) -> None:
        self._yaml = yaml.YAML(typ="safe")

    def load(self, buf: IO[bytes], filename: pathlib.Path) -> Policy:
        data = buf.read()
        logger.debug("loading policy %r", str(filename))

        try:
            if filename.suffix.lower() in YAML_SUFFIXES:
                return load_policy(self._decode_yaml(data))
            return parse(data)
        except ParseError as ex:
            raise PolicyFileError(
                ex.format_message(),
                PolicyFileError.Context(loc=Location(filename=filename)),
            ) from ex

    def load_file(self, filename: pathlib.Path) -> Policy:
        with filename.open("rb") as buf:
            return self.load(buf, filename)

    def _decode_yaml(self, data: bytes) -> object:
        try:
            return self._yaml.load(data)
        except (YAMLError, RecursionError) as ex:
            raise ParseError("invalid YAML: %s" % ex) from ex

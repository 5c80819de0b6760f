import logging
import pathlib
from collections.abc import Callable
from typing import Any, TypeVar

import click

from .. import _conf
from ..entity import Policy
from ..exc import PolicyFileError
from ..loader import PolicyLoader
from .exc import CLIError

__all__ = ("policy_option", "open_policy")

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def policy_option(fn: F) -> F:
    return click.option(
        "-f",
        "--filename",
        type=click.Path(
            dir_okay=False,
            exists=True,
            readable=True,
            path_type=pathlib.Path,
        ),
        help=(
            "Path to the policy file. Files ending in .yaml or .yml are read as YAML, "
            "anything else as JSON. Defaults to the `default_policy` setting."
        ),
    )(fn)


def open_policy(ctx: click.Context, filename: pathlib.Path | None) -> Policy:
    settings: _conf.Settings = ctx.obj

    if filename is None:
        filename = settings.default_policy
    if filename is None:
        raise CLIError(
            "No policy file given. Use the -f option or set PCP_DEFAULT_POLICY."
        )

    try:
        policy = PolicyLoader().load_file(filename)
    except PolicyFileError as ex:
        raise CLIError("Invalid policy file: %s" % ex) from ex
    except OSError as ex:
        raise CLIError(
            "Unable to read policy file %r: %s" % (str(filename), ex)
        ) from ex

    logger.debug("loaded policy from %r", str(filename))
    return policy


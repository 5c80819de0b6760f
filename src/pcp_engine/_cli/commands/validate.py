import logging
import pathlib

import click

from ...exc import ConsistencyError
from ..exc import CLIError
from ..policy import open_policy, policy_option

__all__ = ["validate"]

logger = logging.getLogger(__name__)


@click.command()
@policy_option
@click.pass_context
def validate(ctx: click.Context, filename: pathlib.Path | None) -> None:
    """
    Check that a policy file is consistent.

    Examples:

    \b
      $ pcp validate -f policy.json
      OK
    """
    policy = open_policy(ctx, filename)

    try:
        policy.validate()
    except ConsistencyError as ex:
        raise CLIError("Inconsistent policy: %s" % ex) from ex

    click.secho("OK", fg="green")

import logging
import pathlib
from collections.abc import Iterator, Sequence

import click

from ... import _conf
from ...checker import check as check_password
from ...exc import ConsistencyError
from ..exc import CLIError
from ..policy import open_policy, policy_option

__all__ = ["check"]

logger = logging.getLogger(__name__)

EXIT_REJECTED = 2


@click.command()
@policy_option
@click.argument("passwords", nargs=-1)
@click.pass_context
def check(
    ctx: click.Context, filename: pathlib.Path | None, passwords: Sequence[str]
) -> None:
    """
    Check passwords against a policy.

    Passwords are read one per line from standard input when none are given as
    arguments. Prints one verdict per password, in order. Exits with status 2 if any
    password is rejected.

    Examples:

    \b
      $ pcp check -f policy.json 'Password1' 'password'
      1: accepted
      2: rejected
    """
    settings: _conf.Settings = ctx.obj
    policy = open_policy(ctx, filename)

    def stream_passwords() -> Iterator[str]:
        if passwords:
            yield from passwords
            return
        with click.open_file("-") as stdin:
            for line in stdin:
                yield line.rstrip("\r\n")

    rejected = 0
    for i, password in enumerate(stream_passwords(), start=1):
        if (
            settings.max_password_length is not None
            and len(password) > settings.max_password_length
        ):
            logger.debug("password #%d exceeds max_password_length", i)
            ok = False
        else:
            try:
                ok = check_password(password, policy)
            except ConsistencyError as ex:
                raise CLIError("Inconsistent policy: %s" % ex) from ex

        if not ok:
            rejected += 1
        click.echo("%d: %s" % (i, "accepted" if ok else "rejected"))

    if rejected:
        ctx.exit(EXIT_REJECTED)

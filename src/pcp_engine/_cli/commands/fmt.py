import pathlib

import click

from ..policy import open_policy, policy_option

__all__ = ["fmt"]


@click.command()
@policy_option
@click.pass_context
def fmt(ctx: click.Context, filename: pathlib.Path | None) -> None:
    """
    Print the compact JSON form of a policy file.

    Charsets matching a built-in preset are left out of the output, handy for turning
    a YAML policy into the string stored by an application.
    """
    click.echo(open_policy(ctx, filename).stringify())

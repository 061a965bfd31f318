"""Caller identity resolution for CLI commands.

There is no real authentication yet: every command runs as the user given
by ``--user`` / ``EXPENSETRACK_USER_ID``, or as a fixed placeholder
employee. Commands obtain the caller only through ``resolve_caller`` so a
real identity provider can be swapped in here.
"""

import click

from expensetrack.domain.user import PLACEHOLDER_USER_ID

USER_ID_ENV_VAR = "EXPENSETRACK_USER_ID"
DEFAULT_USER_ID = PLACEHOLDER_USER_ID


def resolve_caller(ctx: click.Context) -> str:
    """Return the user ID the current command acts on behalf of."""
    obj = ctx.find_object(dict) or {}
    return obj.get("user_id") or DEFAULT_USER_ID

"""Attachment commands."""

import mimetypes
from pathlib import Path

import click
from expensetrack.cli.commands.expense import build_expense_service
from expensetrack.cli.error_handling import handle_domain_error
from expensetrack.cli.identity import resolve_caller
from expensetrack.domain.attachment import AttachmentService
from expensetrack.domain.errors import DomainError


@click.group()
def attachment_group():
    """Manage expense attachments."""
    pass


@attachment_group.command("add")
@click.argument("expense_id")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--mime-type", help="MIME type (guessed from the file name if omitted)")
@click.pass_context
def add_attachment(ctx, expense_id: str, file: Path, mime_type: str | None) -> None:
    """Record a file as an attachment of an expense.

    Only the file's metadata is stored; the file is not copied.
    """
    db = ctx.obj["db"]
    service = AttachmentService(db, build_expense_service(db))

    if mime_type is None:
        mime_type = mimetypes.guess_type(file.name)[0] or "application/octet-stream"

    try:
        attachment = service.add_attachment(
            expense_id=expense_id,
            user_id=resolve_caller(ctx),
            file_name=file.name,
            file_path=str(file.resolve()),
            mime_type=mime_type,
            size=file.stat().st_size,
        )
        click.echo(f"Attached '{attachment.file_name}' (ID: {attachment.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@attachment_group.command("list")
@click.argument("expense_id")
@click.pass_context
def list_attachments(ctx, expense_id: str) -> None:
    """List the attachments of an expense."""
    db = ctx.obj["db"]
    service = AttachmentService(db, build_expense_service(db))

    try:
        attachments = service.list_attachments(expense_id, resolve_caller(ctx))
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not attachments:
        click.echo("No attachments found.")
        return

    for attachment in attachments:
        click.echo(
            f"{attachment.id} | {attachment.file_name} | {attachment.mime_type} | "
            f"{attachment.size} bytes | {attachment.file_path}"
        )


def register_commands(cli):
    """Register attachment commands with main CLI."""
    cli.add_command(attachment_group, name="attachment")

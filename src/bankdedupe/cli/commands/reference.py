"""Reference, reference type and contact commands."""

import click
from bankdedupe.cli.error_handling import handle_domain_error
from bankdedupe.domain.errors import DomainError
from bankdedupe.domain.ledger import LedgerService


@click.group()
def reference_group():
    """Manage bank account references."""
    pass


@reference_group.command("add")
@click.argument("reference", metavar="REFERENCE")
@click.option("--type", "reference_type", required=True, help="Reference type label or code")
@click.option("--account", "account_id", type=int, required=True, help="Bank account ID")
@click.option("--contact", "contact_id", type=int, help="Owning contact ID")
@click.pass_context
def add_reference(ctx, reference: str, reference_type: str, account_id: int, contact_id: int | None):
    """Attach a reference (IBAN, account number, ...) to a bank account.

    Examples:
        bankdedupe reference add DE89370400440532013000 --type IBAN --account 1 --contact 3
    """
    service = LedgerService(ctx.obj["db"])
    try:
        reference_id = service.add_reference(
            reference=reference,
            reference_type=reference_type,
            account_id=account_id,
            contact_id=contact_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added reference '{reference}' (ID: {reference_id})")


@reference_group.command("list")
@click.option("--reference", help="Only this reference value")
@click.option("--account", "account_id", type=int, help="Only references of this bank account")
@click.pass_context
def list_references(ctx, reference: str | None, account_id: int | None):
    """List references."""
    service = LedgerService(ctx.obj["db"])

    references = service.list_references(reference=reference, account_id=account_id)
    if not references:
        click.echo("No references found.")
        return

    types = service.reference_types()
    click.echo("\nReferences:")
    click.echo("-" * 60)
    for ref in references:
        type_label = types.get(ref.reference_type_id, str(ref.reference_type_id))
        contact = ref.contact_id if ref.contact_id is not None else "-"
        click.echo(
            f"ID: {ref.id:4d} | {ref.reference:34s} | {type_label:10s} | "
            f"Account: {ref.account_id} | Contact: {contact}"
        )


@reference_group.command("add-type")
@click.argument("code", type=int, metavar="CODE")
@click.argument("label", metavar="LABEL")
@click.pass_context
def add_reference_type(ctx, code: int, label: str):
    """Register a reference type, e.g. "1 IBAN"."""
    service = LedgerService(ctx.obj["db"])
    try:
        service.add_reference_type(code=code, label=label)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added reference type '{label}' ({code})")


@reference_group.command("types")
@click.pass_context
def list_reference_types(ctx):
    """List reference types."""
    service = LedgerService(ctx.obj["db"])
    types = service.reference_types()
    if not types:
        click.echo("No reference types found.")
        return
    for code, label in types.items():
        click.echo(f"{code:4d} | {label}")


@click.group()
def contact_group():
    """Manage contacts."""
    pass


@contact_group.command("create")
@click.argument("name", metavar="DISPLAY_NAME")
@click.option("--type", "contact_type", default="Individual", show_default=True, help="Contact type")
@click.pass_context
def create_contact(ctx, name: str, contact_type: str):
    """Create a contact."""
    service = LedgerService(ctx.obj["db"])
    contact_id = service.create_contact(display_name=name, contact_type=contact_type)
    click.echo(f"Created contact '{name}' (ID: {contact_id})")


def register_commands(cli):
    """Register reference and contact commands with main CLI."""
    cli.add_command(reference_group, name="reference")
    cli.add_command(contact_group, name="contact")

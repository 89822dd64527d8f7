"""Bank account commands."""

import click
from bankdedupe.cli.error_handling import handle_domain_error
from bankdedupe.domain.ledger import LedgerService
from bankdedupe.utils.date_parser import parse_datetime


def _parse_data(pairs: tuple[str, ...]) -> dict[str, str]:
    data = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"expected KEY=VALUE, got '{pair}'", param_hint="--data")
        data[key.strip()] = value.strip()
    return data


@click.group()
def account_group():
    """Manage bank accounts."""
    pass


@account_group.command("create")
@click.option("--description", help="Free text description")
@click.option("--raw", "data_raw", help="Raw import payload")
@click.option("--data", "data", multiple=True, metavar="KEY=VALUE", help="Parsed data field (repeatable)")
@click.option("--created", help="Creation date (e.g. 2019-06-01)")
@click.pass_context
def create_account(ctx, description: str | None, data_raw: str | None, data: tuple[str, ...], created: str | None):
    """Create a bank account.

    Examples:
        bankdedupe account create --data iban=DE89370400440532013000 --data bank=Commerzbank
        bankdedupe account create --description "Savings" --created 2019-06-01
    """
    service = LedgerService(ctx.obj["db"])

    data_parsed = _parse_data(data)
    try:
        created_date = parse_datetime(created) if created else None
        account_id = service.create_account(
            description=description,
            data_raw=data_raw,
            data_parsed=data_parsed,
            created_date=created_date,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created bank account (ID: {account_id})")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all bank accounts."""
    service = LedgerService(ctx.obj["db"])

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No bank accounts found.")
        return

    click.echo("\nBank accounts:")
    click.echo("-" * 60)
    for acc in accounts:
        created = acc.created_date.strftime("%Y-%m-%d") if acc.created_date else "-"
        click.echo(f"ID: {acc.id:3d} | Created: {created} | {acc.description or ''}")


@account_group.command("show")
@click.argument("account_id", type=int, metavar="ACCOUNT_ID")
@click.pass_context
def show_account(ctx, account_id: int):
    """Show a bank account with its references and transactions."""
    service = LedgerService(ctx.obj["db"])

    acc = service.get_account(account_id)
    if acc is None:
        click.echo(f"Error: Account {account_id} not found", err=True)
        ctx.exit(1)

    click.echo(f"Bank account {acc.id}")
    click.echo(f"  Description: {acc.description or ''}")
    click.echo(f"  Created:     {acc.created_date or '-'}")
    click.echo(f"  Modified:    {acc.modified_date or '-'}")
    if acc.data_raw:
        click.echo(f"  Raw data:    {acc.data_raw}")
    for key, value in sorted(acc.data_parsed.items()):
        click.echo(f"  {key}: {value}")

    references = service.list_references(account_id=account_id)
    types = service.reference_types()
    click.echo(f"\nReferences ({len(references)}):")
    for ref in references:
        click.echo(f"  {ref.id:5d} | {types.get(ref.reference_type_id, ref.reference_type_id)} | {ref.reference}")

    transactions = service.list_transactions(account_id=account_id)
    click.echo(f"\nTransactions ({len(transactions)}):")
    for txn in transactions:
        side = "party" if txn.party_account_id == account_id and txn.account_id != account_id else "own"
        click.echo(f"  {txn.id:5d} | {txn.value_date or '-'} | {txn.amount:>10} | {side} | {txn.bank_reference}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")

"""Transaction commands."""

from decimal import Decimal, InvalidOperation

import click
from bankdedupe.cli.error_handling import handle_domain_error
from bankdedupe.domain.errors import DomainError
from bankdedupe.domain.ledger import LedgerService
from bankdedupe.utils.date_parser import parse_date


@click.group()
def transaction_group():
    """Manage bank transactions."""
    pass


@transaction_group.command("add")
@click.argument("bank_reference", metavar="BANK_REFERENCE")
@click.argument("amount", metavar="AMOUNT")
@click.option("--account", "account_id", type=int, required=True, help="Bank account ID")
@click.option("--party", "party_account_id", type=int, help="Counter-party bank account ID")
@click.option("--date", "value_date", help="Value date (default: today)")
@click.option("--purpose", help="Purpose / memo")
@click.pass_context
def add_transaction(
    ctx,
    bank_reference: str,
    amount: str,
    account_id: int,
    party_account_id: int | None,
    value_date: str | None,
    purpose: str | None,
):
    """Record a transaction.

    Examples:
        bankdedupe transaction add TX-2024-001 -42.50 --account 1 --party 2 --date 2024-01-15
    """
    service = LedgerService(ctx.obj["db"])
    try:
        parsed_amount = Decimal(amount)
    except InvalidOperation:
        click.echo(f"Error: Invalid amount '{amount}'", err=True)
        ctx.exit(1)

    try:
        txn_id = service.add_transaction(
            bank_reference=bank_reference,
            amount=parsed_amount,
            account_id=account_id,
            party_account_id=party_account_id,
            value_date=parse_date(value_date or "today"),
            purpose=purpose,
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added transaction '{bank_reference}' (ID: {txn_id})")


@transaction_group.command("list")
@click.option("--account", "account_id", type=int, help="Only transactions linked to this bank account")
@click.pass_context
def list_transactions(ctx, account_id: int | None):
    """List transactions."""
    service = LedgerService(ctx.obj["db"])
    transactions = service.list_transactions(account_id=account_id)
    if not transactions:
        click.echo("No transactions found.")
        return

    for txn in transactions:
        party = txn.party_account_id if txn.party_account_id is not None else "-"
        click.echo(
            f"ID: {txn.id:4d} | {txn.value_date or '-'} | {txn.amount:>10} | "
            f"Account: {txn.account_id} | Party: {party} | {txn.bank_reference}"
        )


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")

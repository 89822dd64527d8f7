"""Duplicate scan and merge commands."""

import click
from bankdedupe.cli.error_handling import handle_store_error
from bankdedupe.domain.dedupe import DedupeService
from bankdedupe.domain.entities import DedupeReport, Finding, ScanResult
from bankdedupe.domain.errors import StoreUnavailableError
from bankdedupe.utils.target_parser import parse_targets


def _format_finding(finding: Finding) -> str:
    type_label = finding.reference_type or f"type {finding.reference_type_id}"
    if finding.contact is not None:
        owner = finding.contact.display_name
    elif finding.contacts:
        owner = ", ".join(contact.display_name for contact in finding.contacts)
    else:
        owner = "-"
    return (
        f"  {finding.reference_id:5d} | {finding.reference:34s} | {type_label:10s} | "
        f"{finding.dupe_count} refs, {finding.account_count} accounts | {owner}"
    )


def _echo_scan(scan: ScanResult) -> None:
    sections = [
        ("Duplicate references", scan.reference_duplicates),
        ("Duplicate accounts", scan.account_duplicates),
        ("Account conflicts", scan.account_conflicts),
    ]
    for title, bucket in sections:
        click.echo(f"\n{title} ({len(bucket)}):")
        if not bucket:
            click.echo("  none")
            continue
        click.echo("-" * 80)
        for finding in bucket.values():
            click.echo(_format_finding(finding))


def _echo_report(report: DedupeReport) -> None:
    for status in report.messages:
        click.echo(f"{status.title}: {status.message}", err=status.level == "warn")
    _echo_scan(report.scan)


def _run(ctx, merge: str | None = None, clean: str | None = None) -> None:
    db = ctx.obj["db"]
    service = DedupeService(db)
    try:
        report = service.run(merge=parse_targets(merge), cleanup=parse_targets(clean))
    except StoreUnavailableError as e:
        handle_store_error(ctx, e)
    _echo_report(report)


@click.command("scan")
@click.pass_context
def scan(ctx):
    """List duplicate references, duplicate accounts and conflicts."""
    _run(ctx)


@click.command("merge")
@click.argument("targets", metavar="TARGETS")
@click.pass_context
def merge(ctx, targets: str):
    """Merge duplicate bank accounts.

    TARGETS is "all" or a comma separated list of reference IDs or reference
    values. The accounts of each group are merged into the one with the
    lowest ID, then the now identical references are removed.

    Examples:
        bankdedupe merge all
        bankdedupe merge 12,17
        bankdedupe merge DE89370400440532013000
    """
    _run(ctx, merge=targets)


@click.command("clean")
@click.argument("targets", metavar="TARGETS")
@click.pass_context
def clean(ctx, targets: str):
    """Delete duplicate references pointing at the same account.

    TARGETS is "all" or a comma separated list of the reference IDs to keep.
    """
    _run(ctx, clean=targets)


@click.command("dedupe")
@click.option("--merge", "merge_targets", help='Account groups to merge ("all" or list)')
@click.option("--clean", "clean_targets", help='Reference groups to clean ("all" or list)')
@click.pass_context
def dedupe(ctx, merge_targets: str | None, clean_targets: str | None):
    """Merge accounts and clean references in one run.

    Examples:
        bankdedupe dedupe --merge all --clean all
    """
    _run(ctx, merge=merge_targets, clean=clean_targets)


def register_commands(cli):
    """Register dedupe commands with main CLI."""
    cli.add_command(scan)
    cli.add_command(merge)
    cli.add_command(clean)
    cli.add_command(dedupe)

"""Account total reports."""

import click

from churchbook.cli.error_handling import handle_domain_error
from churchbook.domain.account import AccountService
from churchbook.domain.errors import DomainError
from churchbook.domain.receipt import ReceiptService
from churchbook.domain.transfer import TransferService
from churchbook.utils.date_parser import parse_date_range


@click.group()
def report_group():
    """Reports over receipts and transfers."""
    pass


@report_group.command("totals")
@click.argument("account_id", metavar="ACCOUNT_ID")
@click.option("--start-date", help="Start date (inclusive, e.g. 2024-01-01 or 'this month')")
@click.option("--end-date", help="End date (inclusive)")
@click.pass_context
def totals(ctx, account_id: str, start_date: str | None, end_date: str | None):
    """Show receipt and transfer totals for an account.

    Give both --start-date and --end-date to restrict the window.

    Examples:
        churchbook report totals 1b4e28ba-2fa1-11d2-883f-0016d3cca427
        churchbook report totals ACCOUNT_ID --start-date 2024-01-01 --end-date 2024-03-31
    """
    db = ctx.obj["db"]
    receipts = ReceiptService(db)
    transfers = TransferService(db)

    try:
        account = AccountService(db).get_account(account_id)
        if start_date is None and end_date is None:
            receipt_total = receipts.get_total_receipts_by_account(account_id)
            transfer_total = transfers.get_total_transfers_by_credit_account(account_id)
            window = "all time"
        else:
            start, end = parse_date_range(start_date, end_date)
            receipt_total = receipts.get_total_receipts_by_date_range(account_id, start, end)
            transfer_total = transfers.get_total_transfers_by_date_range(account_id, start, end)
            window = f"{start.date()} to {end.date()}"
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\nTotals for '{account.account_name}' ({window}):")
    click.echo("-" * 40)
    click.echo(f"Receipts:  {receipt_total:>12}")
    click.echo(f"Transfers: {transfer_total:>12}")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")

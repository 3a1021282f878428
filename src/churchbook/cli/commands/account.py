"""Account management commands."""

import click

from churchbook.cli.error_handling import handle_domain_error
from churchbook.domain.account import AccountService
from churchbook.domain.entities import AccountType
from churchbook.domain.errors import DomainError


@click.group()
def account_group():
    """Manage ledger accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    required=True,
    type=click.Choice([t.value for t in AccountType]),
    help="Account type",
)
@click.option("--local-share", help="Local share fraction between 0 and 1")
@click.option("--notes", help="Optional notes")
@click.option("--created-by", default="system", show_default=True, help="Creating user ID")
@click.pass_context
def create_account(
    ctx,
    name: str,
    account_type: str,
    local_share: str | None,
    notes: str | None,
    created_by: str,
):
    """Create a new account.

    Examples:
        churchbook account create "Main Bank" --type Bank
        churchbook account create "Tithes" --type Income --local-share 0.3
    """
    service = AccountService(ctx.obj["db"])

    try:
        account = service.create_account(
            account_name=name,
            account_type=account_type,
            created_by=created_by,
            local_share=local_share,
            notes=notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created account '{account.account_name}' (ID: {account.id})")


@account_group.command("list")
@click.option("--active", "active_only", is_flag=True, help="Only show active accounts")
@click.pass_context
def list_accounts(ctx, active_only: bool):
    """List accounts."""
    service = AccountService(ctx.obj["db"])

    accounts = service.list_accounts(active_only=active_only)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 80)
    for acc in accounts:
        status = "active" if acc.is_active else "inactive"
        click.echo(f"{acc.id} | {acc.account_name:20s} | {acc.account_type:9s} | {status}")


@account_group.command("deactivate")
@click.argument("account_id", metavar="ACCOUNT_ID")
@click.pass_context
def deactivate_account(ctx, account_id: str) -> None:
    """Deactivate an account. Accounts are never deleted.

    Examples:
        churchbook account deactivate 1b4e28ba-2fa1-11d2-883f-0016d3cca427
    """
    service = AccountService(ctx.obj["db"])

    try:
        account = service.deactivate_account(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deactivated account '{account.account_name}'")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")

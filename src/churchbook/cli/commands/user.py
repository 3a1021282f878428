"""User management commands."""

import click

from churchbook.cli.error_handling import handle_domain_error
from churchbook.domain.entities import UserRole
from churchbook.domain.errors import DomainError
from churchbook.domain.user import UserService


def _user_service(ctx) -> UserService:
    return UserService(ctx.obj["db"], bcrypt_rounds=ctx.obj["settings"].bcrypt_rounds)


@click.group()
def user_group():
    """Manage login users."""
    pass


@user_group.command("create")
@click.argument("username")
@click.option("--email", required=True, help="Email address")
@click.option("--full-name", required=True, help="Full name")
@click.option(
    "--role",
    required=True,
    type=click.Choice([r.value for r in UserRole]),
    help="User role",
)
@click.option("--phone", default="", help="Phone number")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@click.pass_context
def create_user(ctx, username: str, email: str, full_name: str, role: str, phone: str, password: str):
    """Create a user. The password is prompted for when not given.

    Examples:
        churchbook user create treasurer --email t@church.org --full-name "Jane Doe" --role Treasurer
    """
    service = _user_service(ctx)

    try:
        user = service.create_user(
            username=username,
            email=email,
            password=password,
            full_name=full_name,
            role=role,
            phone_number=phone,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created user '{user.username}' (ID: {user.id})")


@user_group.command("list")
@click.option("--role", type=click.Choice([r.value for r in UserRole]), help="Filter by role")
@click.option("--active", "active_only", is_flag=True, help="Only show active users")
@click.pass_context
def list_users(ctx, role: str | None, active_only: bool):
    """List users, newest first."""
    service = _user_service(ctx)

    if role is not None:
        users = service.list_users_by_role(role)
        if active_only:
            users = [u for u in users if u.is_active]
    elif active_only:
        users = service.list_active_users()
    else:
        users = service.list_users()

    if not users:
        click.echo("No users found.")
        return

    click.echo("\nUsers:")
    click.echo("-" * 80)
    for u in users:
        status = "active" if u.is_active else "inactive"
        click.echo(f"{u.id} | {u.username:15s} | {u.role:9s} | {status}")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")

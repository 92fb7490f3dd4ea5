import click

from . import main as sso

STEP_SYMBOL = click.style("➜", fg="blue")
ROLE_SYMBOL = click.style("•", fg="green")


def step(message: str) -> None:
    click.echo(f"{STEP_SYMBOL} {message}")


def account_roles(account: sso.AccountInfo, roles: list[sso.RoleInfo]) -> None:
    click.echo(f"Account: {account}")
    click.echo("Roles:")
    for role in roles:
        click.echo(f"  {ROLE_SYMBOL} {role.name}")
    click.echo()


def profile_added(profile: sso.Profile) -> None:
    click.echo(f"Added profile '{profile.name}' to config")

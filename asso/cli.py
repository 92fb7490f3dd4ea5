import click

from .config import shared_config_file
from .constants import DEFAULT_REGION, DEFAULT_SSO_REGION, DEFAULT_SSO_SESSION
from .login import AwsCliLauncher
from .tools import Settings, update_config


@click.command(short_help="Build AWS config file from SSO login")
@click.argument("start_url", metavar="START_URL")
@click.option(
    "--region",
    "-r",
    default=DEFAULT_REGION,
    show_default=True,
    help="Default region to add to profiles.",
)
@click.option(
    "--force", "-f", is_flag=True, help="Overwrite config if it already exists."
)
@click.option(
    "--sso-region", default=DEFAULT_SSO_REGION, show_default=True, help="SSO region."
)
@click.option(
    "--sso-session",
    default=DEFAULT_SSO_SESSION,
    show_default=True,
    help="SSO session name.",
)
@click.version_option(package_name="asso")
def cli(start_url: str, region: str, force: bool, sso_region: str, sso_session: str) -> None:
    """
    Log in to AWS SSO at START_URL and write one profile per account role
    into the shared AWS config file.
    """
    settings = Settings(
        start_url=start_url,
        config_file=shared_config_file(),
        sso_session=sso_session,
        sso_region=sso_region,
        default_region=region,
        force=force,
    )
    update_config(settings, AwsCliLauncher())


if __name__ == "__main__":
    cli()

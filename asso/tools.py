from __future__ import annotations

import re
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from . import main as sso
from . import show
from .cache import load_token
from .config import ConfigWriter
from .constants import (
    DEFAULT_REGION,
    DEFAULT_SSO_REGION,
    DEFAULT_SSO_SESSION,
    SSO_DIR,
)
from .errors import CacheCleanupError, ConfigWriteError, TokenExpiredError
from .login import AuthenticationLauncher
from .start_url import normalize_start_url

NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9]+")


@dataclass(frozen=True)
class Settings:
    start_url: str
    config_file: Path
    sso_session: str = DEFAULT_SSO_SESSION
    sso_region: str = DEFAULT_SSO_REGION
    default_region: str = DEFAULT_REGION
    force: bool = False


def sanitize(name: str) -> str:
    """Collapse every run of non-alphanumeric characters into one underscore."""
    return NON_ALPHANUMERIC.sub("_", name)


def build_profiles(
    account: sso.AccountInfo,
    roles: list[sso.RoleInfo],
    session: sso.SSOSession,
    region: str,
) -> list[sso.Profile]:
    account_name = sanitize(account.name)
    return [
        sso.Profile(
            name=f"{account_name}/{role.name}",
            sso_account_id=account.id,
            sso_role_name=role.name,
            sso_session=session.name,
            region=region,
        )
        for role in roles
    ]


def remove_sso_cache(config_dir: Path) -> None:
    cache_dir = config_dir / SSO_DIR
    try:
        shutil.rmtree(cache_dir)
    except FileNotFoundError:
        pass
    except OSError as e:
        raise CacheCleanupError(f"failed to remove SSO cache {cache_dir}: {e}") from e


def update_config(
    settings: Settings,
    launcher: AuthenticationLauncher,
    catalog_factory: Callable[[str], sso.SSO] = sso.SSO.for_region,
) -> list[sso.Profile]:
    """
    Log in to SSO and rewrite the AWS config with one profile per account role.

    The session-only config is saved before logging in, since ``aws sso login``
    reads the session from it. A failure after that point leaves that file on
    disk.
    """
    config_file = Path(settings.config_file)
    config_dir = config_file.parent

    show.step("Initialize config")
    writer = ConfigWriter() if settings.force else ConfigWriter.initialize(config_file)
    start_url = normalize_start_url(settings.start_url)
    sso.validate_region(settings.sso_region)
    sso.validate_region(settings.default_region)
    session = sso.SSOSession(settings.sso_session, settings.sso_region, start_url)

    try:
        config_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigWriteError(f"failed to create {config_dir}: {e}") from e

    show.step("Remove SSO cache")
    remove_sso_cache(config_dir)

    show.step(f"Write config: {config_file}")
    writer.set_session(session.name, session.region, session.start_url)
    writer.save(config_file)

    show.step("Login")
    launcher.login(session.name)

    show.step("Fetch access token")
    token = load_token(config_dir, session.name)
    if token.expired:
        raise TokenExpiredError(
            f"cached SSO token for session '{session.name}' expired at {token.expires_at}"
        )

    show.step("Create SSO client")
    catalog = catalog_factory(session.region)

    show.step("Get AWS accounts & roles...")
    profiles: list[sso.Profile] = []
    for account in catalog.list_accounts(token.access_token):
        roles = catalog.list_roles(token.access_token, account.id)
        show.account_roles(account, roles)
        profiles.extend(
            build_profiles(account, roles, session, settings.default_region)
        )

    for profile in profiles:
        writer.add_profile(profile, settings.default_region)
        show.profile_added(profile)

    show.step(f"Saving config to: {config_file}")
    writer.save(config_file)
    return profiles

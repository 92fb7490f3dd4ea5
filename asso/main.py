from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple, TypeVar

import botocore.session
from boto3.session import Session
from botocore import UNSIGNED
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from botocore.utils import validate_region_name
from mypy_boto3_sso import SSOClient
from mypy_boto3_sso.type_defs import AccountInfoTypeDef, RoleInfoTypeDef

from .errors import CatalogError, InvalidRegionError

T = TypeVar("T")


@dataclass(frozen=True)
class SSOSession:
    name: str
    region: str
    start_url: str


@dataclass
class AccountInfo:
    id: str
    name: str

    @staticmethod
    def from_dict(d: AccountInfoTypeDef) -> "AccountInfo":
        return AccountInfo(
            id=d["accountId"],  # type: ignore
            name=d.get("accountName", ""),
        )

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"


@dataclass
class RoleInfo:
    name: str

    @staticmethod
    def from_dict(d: RoleInfoTypeDef) -> "RoleInfo":
        return RoleInfo(d["roleName"])  # type: ignore


@dataclass
class Profile:
    name: str
    sso_account_id: str
    sso_role_name: str
    sso_session: str
    region: str


def collect_pages(next_page: Callable[[Optional[str]], Tuple[list[T], Optional[str]]]) -> list[T]:
    """
    Drive a ``next_page(token) -> (items, next_token)`` function until the
    service stops handing out continuation tokens.
    """
    items: list[T] = []
    token: Optional[str] = None
    while True:
        page, token = next_page(token)
        items.extend(page)
        if not token:
            return items


def validate_region(region: str) -> None:
    if not region:
        raise InvalidRegionError(region)
    try:
        validate_region_name(region)
    except (BotoCoreError, ValueError) as e:
        raise InvalidRegionError(region) from e


def isolated_session() -> Session:
    core = botocore.session.get_session()
    # an override of None wins over the AWS_PROFILE environment variable
    core.get_component("config_store").set_config_variable("profile", None)
    return Session(botocore_session=core)


class SSO:
    """Account and role catalog of the SSO portal, read with an access token."""

    def __init__(self, client: SSOClient):
        self.client = client

    @staticmethod
    def for_region(region: str, session: Optional[Session] = None) -> "SSO":
        """
        Build the catalog client for the SSO region.

        The portal calls are authorized by the access token alone, so the
        client is unsigned and does not resolve $AWS_PROFILE, which may name
        a profile the rewritten config no longer has.
        """
        validate_region(region)
        try:
            session = session or isolated_session()
            client = session.client(
                "sso", region_name=region, config=Config(signature_version=UNSIGNED)
            )
        except (BotoCoreError, ValueError) as e:
            raise CatalogError(f"failed to create SSO client for {region}: {e}") from e
        return SSO(client)  # type: ignore

    def accounts_page(
        self, access_token: str, next_token: Optional[str] = None
    ) -> Tuple[list[AccountInfo], Optional[str]]:
        kwargs = {"accessToken": access_token}
        if next_token:
            kwargs["nextToken"] = next_token
        try:
            response = self.client.list_accounts(**kwargs)  # type: ignore
        except (ClientError, BotoCoreError) as e:
            raise CatalogError(f"failed to list accounts: {e}") from e
        accounts = [AccountInfo.from_dict(a) for a in response.get("accountList", [])]
        return accounts, response.get("nextToken")

    def roles_page(
        self, access_token: str, account_id: str, next_token: Optional[str] = None
    ) -> Tuple[list[RoleInfo], Optional[str]]:
        kwargs = {"accessToken": access_token, "accountId": account_id}
        if next_token:
            kwargs["nextToken"] = next_token
        try:
            response = self.client.list_account_roles(**kwargs)  # type: ignore
        except (ClientError, BotoCoreError) as e:
            raise CatalogError(
                f"failed to list roles for account {account_id}: {e}"
            ) from e
        roles = [RoleInfo.from_dict(r) for r in response.get("roleList", [])]
        return roles, response.get("nextToken")

    def list_accounts(self, access_token: str) -> list[AccountInfo]:
        return collect_pages(lambda token: self.accounts_page(access_token, token))

    def list_roles(self, access_token: str, account_id: str) -> list[RoleInfo]:
        return collect_pages(
            lambda token: self.roles_page(access_token, account_id, token)
        )

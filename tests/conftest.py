import datetime as dt
import json
from pathlib import Path

import boto3
import botocore.session
import pytest
from botocore.stub import Stubber

from asso.cache import cache_file
from asso.errors import LoginError
from asso.main import SSO


def write_cached_token(
    config_dir: Path,
    session_name: str,
    access_token: str = "token",
    expires_at: str = "",
) -> Path:
    if not expires_at:
        expires_at = (
            dt.datetime.now(dt.timezone.utc) + dt.timedelta(hours=8)
        ).strftime("%Y-%m-%dT%H:%M:%SZ")
    path = cache_file(config_dir, session_name)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(
            {
                "startUrl": "https://example.awsapps.com/start/",
                "region": "us-east-1",
                "accessToken": access_token,
                "expiresAt": expires_at,
            }
        )
    )
    return path


class FakeLauncher:
    """Stands in for `aws sso login`: records calls and fills the token cache."""

    def __init__(self, config_dir: Path, exit_code: int = 0, write_token: bool = True):
        self.config_dir = config_dir
        self.exit_code = exit_code
        self.write_token = write_token
        self.calls: list[str] = []
        self.config_at_login = ""

    def login(self, session_name: str) -> None:
        self.calls.append(session_name)
        config = self.config_dir / "config"
        if config.exists():
            self.config_at_login = config.read_text()
        if self.exit_code:
            raise LoginError(self.exit_code)
        if self.write_token:
            write_cached_token(self.config_dir, session_name)


@pytest.fixture()
def config_file(tmp_path) -> Path:
    return tmp_path / ".aws" / "config"


@pytest.fixture()
def launcher(config_file) -> FakeLauncher:
    return FakeLauncher(config_file.parent)


@pytest.fixture()
def sso_client():
    return boto3.client("sso", region_name="us-east-1")


@pytest.fixture()
def stubber(sso_client):
    with Stubber(sso_client) as stubber:
        yield stubber


@pytest.fixture()
def catalog(sso_client, stubber) -> SSO:
    return SSO(sso_client)


def account(account_id: str, name: str) -> dict:
    return {
        "accountId": account_id,
        "accountName": name,
        "emailAddress": f"{account_id}@example.com",
    }


def role(account_id: str, name: str) -> dict:
    return {"roleName": name, "accountId": account_id}


class CreatedClients(list):
    @staticmethod
    def configure(stubber: Stubber) -> None:
        pass


@pytest.fixture()
def created_clients(monkeypatch):
    """Attach an active Stubber to every client botocore builds during the test."""
    clients = CreatedClients()
    original = botocore.session.Session.create_client

    def create_client(self, *args, **kwargs):
        client = original(self, *args, **kwargs)
        stubber = Stubber(client)
        clients.configure(stubber)
        stubber.activate()
        clients.append((client, stubber))
        return client

    monkeypatch.setattr(botocore.session.Session, "create_client", create_client)
    return clients


@pytest.fixture()
def aws_env(monkeypatch, config_file):
    """Point the AWS config lookups at the test directory."""
    monkeypatch.setenv("AWS_CONFIG_FILE", str(config_file))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(config_file.parent / "credentials"))
    for name in ("AWS_PROFILE", "AWS_DEFAULT_PROFILE", "AWS_DEFAULT_REGION", "AWS_REGION"):
        monkeypatch.delenv(name, raising=False)

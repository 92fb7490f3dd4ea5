"""
Reader for the SSO token cache written by ``aws sso login``.

The AWS CLI stores the access token for a named sso-session in
``<config dir>/sso/cache/<sha1(session name)>.json``.
"""
from __future__ import annotations

import datetime as dt
import hashlib
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .constants import SSO_CACHE_DIR, SSO_DIR
from .errors import TokenNotFoundError, TokenParseError


@dataclass(frozen=True)
class CachedToken:
    start_url: str
    region: str
    access_token: str
    expires_at: Optional[dt.datetime] = None

    @staticmethod
    def from_dict(d: dict) -> "CachedToken":
        access_token = d.get("accessToken")
        if not isinstance(access_token, str) or not access_token:
            raise ValueError("missing accessToken")
        expires_at = d.get("expiresAt")
        if expires_at is not None and not isinstance(expires_at, str):
            raise ValueError("expiresAt is not a timestamp")
        return CachedToken(
            start_url=d.get("startUrl", ""),
            region=d.get("region", ""),
            access_token=access_token,
            expires_at=parse_expires_at(expires_at) if expires_at else None,
        )

    @property
    def expired(self) -> bool:
        if self.expires_at is None:
            return False
        return self.expires_at <= dt.datetime.now(dt.timezone.utc)


def parse_expires_at(value: str) -> dt.datetime:
    """
    Parse the cache timestamp into an aware UTC datetime.

    The CLI has written "2026-02-07T12:34:56UTC", "...Z" and "+00:00" forms.
    """
    s = value.strip()
    if s.endswith("UTC"):
        s = s[: -len("UTC")] + "+00:00"
    elif s.endswith("Z"):
        s = s[:-1] + "+00:00"
    d = dt.datetime.fromisoformat(s)
    if d.tzinfo is None:
        d = d.replace(tzinfo=dt.timezone.utc)
    return d.astimezone(dt.timezone.utc)


def cache_key(session_name: str) -> str:
    return hashlib.sha1(session_name.encode("utf-8")).hexdigest()


def cache_file(config_dir: str | Path, session_name: str) -> Path:
    return Path(config_dir) / SSO_DIR / SSO_CACHE_DIR / f"{cache_key(session_name)}.json"


def load_token(config_dir: str | Path, session_name: str) -> CachedToken:
    path = cache_file(config_dir, session_name)
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise TokenNotFoundError(
            f"no cached SSO token for session '{session_name}' at {path}"
        ) from e
    except OSError as e:
        raise TokenNotFoundError(f"failed to read SSO token cache {path}: {e}") from e

    try:
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("expected a JSON object")
        return CachedToken.from_dict(data)
    except ValueError as e:
        raise TokenParseError(f"invalid SSO token cache {path}: {e}") from e


def fetch_token(config_dir: str | Path, session_name: str) -> str:
    return load_token(config_dir, session_name).access_token

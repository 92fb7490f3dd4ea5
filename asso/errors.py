from typing import IO, Optional

import click


class AssoError(click.ClickException):
    """Base error; printed as a single red line on stderr, exit code 1."""

    def show(self, file: Optional[IO] = None) -> None:
        click.echo(click.style(self.format_message(), fg="red"), file=file, err=True)


class InvalidStartURLError(AssoError):
    def __init__(self, raw: str, reason: str = "not a valid URL"):
        super().__init__(f"invalid START_URL: {raw!r} ({reason})")
        self.raw = raw
        self.reason = reason


class InvalidRegionError(AssoError):
    def __init__(self, region: str):
        super().__init__(f"invalid region: {region!r}")
        self.region = region


class ConfigExistsError(AssoError):
    def __init__(self, path: str):
        super().__init__(f"config found at {path}, use --force to overwrite")
        self.path = path


class ConfigWriteError(AssoError):
    pass


class CacheCleanupError(AssoError):
    pass


class TokenCacheError(AssoError):
    pass


class TokenNotFoundError(TokenCacheError):
    pass


class TokenParseError(TokenCacheError):
    pass


class TokenExpiredError(TokenCacheError):
    pass


class LoginError(AssoError):
    def __init__(self, exit_code: int, message: Optional[str] = None):
        super().__init__(message or f"aws sso login failed with exit code {exit_code}")
        self.exit_code = exit_code


class CatalogError(AssoError):
    pass

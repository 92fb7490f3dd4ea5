from __future__ import annotations

import configparser
import os
import tempfile
from pathlib import Path

from .constants import CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE
from .errors import ConfigExistsError, ConfigWriteError
from .main import Profile

SESSION_PREFIX = "sso-session "
PROFILE_PREFIX = "profile "


def shared_config_file() -> Path:
    """Path of the shared AWS config file, honouring $AWS_CONFIG_FILE."""
    return Path(os.environ.get(CONFIG_FILE_ENV) or DEFAULT_CONFIG_FILE).expanduser()


class ConfigWriter:
    """
    In-memory AWS config document.

    The document is always built from scratch: a run never merges with the
    file that was on disk before it.
    """

    def __init__(self) -> None:
        self.document = configparser.RawConfigParser()
        # keep key case as written
        self.document.optionxform = str  # type: ignore

    @staticmethod
    def initialize(path: str | Path) -> "ConfigWriter":
        """Start a new document, refusing to replace an existing file."""
        if Path(path).exists():
            raise ConfigExistsError(str(path))
        return ConfigWriter()

    def set_session(self, name: str, region: str, start_url: str) -> None:
        section = f"{SESSION_PREFIX}{name}"
        if not self.document.has_section(section):
            self.document.add_section(section)
        self.document.set(section, "sso_region", region)
        self.document.set(section, "sso_start_url", start_url)

    def add_profile(self, profile: Profile, region: str) -> None:
        # a repeated name replaces the earlier values, section order is kept
        self.document[f"{PROFILE_PREFIX}{profile.name}"] = {
            "sso_session": profile.sso_session,
            "sso_account_id": profile.sso_account_id,
            "sso_role_name": profile.sso_role_name,
            "region": region,
        }

    def save(self, path: str | Path) -> None:
        """Write the whole document to ``path``, replacing the file atomically."""
        target = Path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    self.document.write(f)
                os.replace(tmp_name, target)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise ConfigWriteError(f"failed to write config {target}: {e}") from e

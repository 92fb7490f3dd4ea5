from __future__ import annotations

import shutil
import subprocess
from typing import Protocol

from .errors import LoginError

AWS_CLI = "aws"
# shell convention for "command not found"
COMMAND_NOT_FOUND = 127


class AuthenticationLauncher(Protocol):
    def login(self, session_name: str) -> None:
        """Block until the interactive SSO login for ``session_name`` is done."""
        ...


class AwsCliLauncher:
    """Runs ``aws sso login`` with the caller's stdio and an empty environment."""

    def __init__(self, executable: str = AWS_CLI):
        self.executable = executable

    def command(self, session_name: str) -> list[str]:
        # the child gets no PATH, so resolve the executable here
        path = shutil.which(self.executable)
        if path is None:
            raise LoginError(
                COMMAND_NOT_FOUND, f"'{self.executable}' not found on PATH"
            )
        return [path, "sso", "login", "--sso-session", session_name]

    def login(self, session_name: str) -> None:
        try:
            result = subprocess.run(self.command(session_name), env={}, check=False)
        except OSError as e:
            raise LoginError(COMMAND_NOT_FOUND, f"failed to run {self.executable}: {e}") from e
        if result.returncode != 0:
            raise LoginError(result.returncode)

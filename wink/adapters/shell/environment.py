"""
Environment adapter — Windows environment values for token substitution.

Command descriptors carry placeholder tokens instead of machine
specific paths:

    $pf64       %ProgramFiles%
    $pf86       %ProgramFiles(x86)%
    $userpath   %USERPROFILE%
    $syslive    \\\\live.sysinternals.com\\tools\\   (constant)

Under WSL the Linux environment does not hold these values, so they
are read by asking cmd.exe to echo them.
"""

from __future__ import annotations

import logging
import subprocess

from wink.adapters.base import EnvironmentProvider, LaunchError, PathTranslator

logger = logging.getLogger(__name__)

HOST_SHELL = "cmd.exe"

# UNC share that serves the Sysinternals tools
SYSLIVE = "\\\\live.sysinternals.com\\tools\\"

# Token → Windows environment variable, in substitution order
ENV_TOKENS: dict[str, str] = {
    "$pf64": "ProgramFiles",
    "$pf86": "ProgramFiles(x86)",
    "$userpath": "USERPROFILE",
}

CONSTANT_TOKENS: dict[str, str] = {
    "$syslive": SYSLIVE,
}


class ShellEnvironmentProvider(EnvironmentProvider):
    """Read host environment variables through ``cmd.exe /c echo``."""

    def __init__(self, shell: str = HOST_SHELL):
        self._shell = shell

    def get(self, name: str) -> str:
        cmd = [self._shell, "/c", "echo", f"%{name}%"]
        logger.debug("Probing: %s", cmd)

        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            raise LaunchError(f"Cannot run {self._shell} to read %{name}%: {e}") from e

        if result.returncode != 0:
            logger.debug("%s exited %d reading %s", self._shell, result.returncode, name)
            return ""

        return result.stdout.strip()


class EnvironmentResolver:
    """Resolve and substitute descriptor tokens.

    Values are probed on first use and cached for the lifetime of the
    resolver, so a descriptor without tokens never spawns a probe.
    """

    def __init__(self, provider: EnvironmentProvider, translator: PathTranslator):
        self._provider = provider
        self._translator = translator
        self._cache: dict[str, str] = {}

    def resolve_token(self, token: str) -> str:
        """Return the value for one token (e.g. ``"$pf64"``).

        Raises:
            KeyError: If the token is unknown.
            LaunchError: If the host shell cannot be spawned.
        """
        if token in CONSTANT_TOKENS:
            return CONSTANT_TOKENS[token]

        if token not in self._cache:
            variable = ENV_TOKENS[token]
            value = self._provider.get(variable)
            self._cache[token] = self._translator.to_unix(value) if value else ""

        return self._cache[token]

    def substitute(self, text: str) -> str:
        """Replace every known token in ``text`` with its value."""
        for token in (*ENV_TOKENS, *CONSTANT_TOKENS):
            if token in text:
                text = text.replace(token, self.resolve_token(token))
        return text

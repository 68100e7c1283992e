"""
Invocable model — one command code and how to launch it.

An Invocable maps a short code (``word``, ``control``, ``procexp``)
to something Windows or WSL can run: an executable, a ``shell:`` or
``ms-settings:`` URI handed to explorer.exe, a cmd.exe builtin, or a
bash command line.

The on-disk shape keeps the independent boolean flags so existing
wink.json files load unchanged.  Code that builds command lines works
from ``launch_mode`` instead, which collapses the flags into exactly
one launcher.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from pydantic import AliasChoices, BaseModel, Field, model_validator

logger = logging.getLogger(__name__)


class LaunchMode(str, Enum):
    """The program that actually gets executed for an invocable."""

    DIRECT = "direct"           # the command itself
    HOST_SHELL = "cmd"          # cmd.exe [/wait] /c [start [/b]] <command>
    WSL_SHELL = "bash"          # bash.exe -c <command> "<arguments>"
    EXPLORER = "explorer"       # explorer.exe <command>


class Invocable(BaseModel):
    """Metadata about something Windows or WSL can invoke.

    Launch precedence when several flags are set (first match wins):
    use_cmd / use_start / background, then use_bash, then use_explorer,
    then direct execution.  ``use_call`` modifies any of them.
    """

    code: str = Field(validation_alias=AliasChoices("code", "command_code"))
    description: str = ""
    command: str = ""               # program path, URI, or empty for launcher default

    use_cmd: bool = False           # cmd.exe /wait /c <command>
    use_start: bool = False         # cmd.exe /c start <command>
    background: bool = False        # cmd.exe /c start /b <command>
    use_call: bool = False          # ... call <command>
    use_explorer: bool = False      # explorer.exe <command>
    use_bash: bool = False          # bash.exe -c <command>

    arguments: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_launch_flags(self) -> Invocable:
        families = [
            self.use_cmd or self.use_start or self.background,
            self.use_bash,
            self.use_explorer,
        ]
        if sum(families) > 1:
            logger.warning(
                "Command code %s sets conflicting launch flags; using %s",
                self.code,
                self.launch_mode.value,
            )
        return self

    # ── Launch mode ──────────────────────────────────────────────

    @property
    def launch_mode(self) -> LaunchMode:
        if self.use_cmd or self.use_start or self.background:
            return LaunchMode.HOST_SHELL
        if self.use_bash:
            return LaunchMode.WSL_SHELL
        if self.use_explorer:
            return LaunchMode.EXPLORER
        return LaunchMode.DIRECT

    @property
    def wait(self) -> bool:
        """cmd.exe should wait for the command (host shell only)."""
        return self.launch_mode is LaunchMode.HOST_SHELL and not self.background

    @property
    def start(self) -> bool:
        """cmd.exe should use its ``start`` builtin."""
        return self.use_start or self.background

    @property
    def label(self) -> str:
        """Text for usage listings: the description, else the command."""
        return self.description or self.command

    # ── Sorting (by code only) ───────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Invocable):
            return NotImplemented
        return self.code == other.code

    def __lt__(self, other: Invocable) -> bool:
        return self.code < other.code

    def __hash__(self) -> int:
        return hash(self.code)

    # ── Constructors ─────────────────────────────────────────────

    @classmethod
    def bin(
        cls,
        code: str,
        command: str,
        description: str = "",
        arguments: list[str] | None = None,
    ) -> Invocable:
        """An executable run directly, without a launcher."""
        return cls(
            code=code,
            command=command,
            description=description,
            arguments=list(arguments or []),
        )

    @classmethod
    def exp(
        cls,
        code: str,
        command: str,
        description: str = "",
        arguments: list[str] | None = None,
    ) -> Invocable:
        """Something opened through explorer.exe (URIs, shell: folders)."""
        inv = cls.bin(code, command, description, arguments)
        inv.use_explorer = True
        return inv

    @classmethod
    def bkg(
        cls,
        code: str,
        command: str,
        description: str = "",
        arguments: list[str] | None = None,
    ) -> Invocable:
        """A program started in the background with ``start /b``."""
        inv = cls.bin(code, command, description, arguments)
        inv.background = True
        return inv

    @classmethod
    def cmd(
        cls,
        code: str,
        command: str,
        description: str = "",
        arguments: list[str] | None = None,
    ) -> Invocable:
        """A command run through ``cmd.exe /c``."""
        inv = cls.bin(code, command, description, arguments)
        inv.use_cmd = True
        return inv

    @classmethod
    def sh(
        cls,
        code: str,
        command: str,
        description: str = "",
        arguments: list[str] | None = None,
    ) -> Invocable:
        """A command line run through ``bash.exe -c``."""
        inv = cls.bin(code, command, description, arguments)
        inv.use_bash = True
        return inv


# Catalog data "kind" → constructor
KIND_FACTORIES: dict[str, Callable[..., Invocable]] = {
    "bin": Invocable.bin,
    "exp": Invocable.exp,
    "bkg": Invocable.bkg,
    "cmd": Invocable.cmd,
    "sh": Invocable.sh,
}

"""
Command builder — turn an invocable into a command line and run it.

Argument order, for every launch mode:

    <launcher> [/wait] [/c | -c] [start [/b]] [call] [<command>] <arguments> <args>

    cmd.exe      /wait unless background, then /c, then start [/b]
    bash.exe     -c, then the command, then ONE argument holding the
                 space-joined pre-configured and caller arguments
    explorer.exe the command
    direct       the command is the launcher itself

Every argument goes through the path translator on its way in: to
Unix for bash.exe, to Windows for everything else.  The human-readable
command line is built alongside argv so dry runs show exactly what
would have been executed.
"""

from __future__ import annotations

import logging
import subprocess
import sys
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TextIO

from wink.adapters.base import LaunchError, PathTranslator
from wink.adapters.shell.environment import EnvironmentResolver
from wink.core import context
from wink.core.models.invocable import Invocable, LaunchMode
from wink.core.models.invocation import InvocationResult

logger = logging.getLogger(__name__)

# ── Launchers and their flags ───────────────────────────────────

HOST_SHELL = "cmd.exe"
WSL_SHELL = "bash.exe"
EXPLORER = "explorer.exe"

WAIT_FLAG = "/wait"
RUN_FLAG = "/c"
START = "start"
BACKGROUND_FLAG = "/b"
CALL = "call"
BASH_RUN_FLAG = "-c"

_LAUNCHERS = {
    LaunchMode.HOST_SHELL: HOST_SHELL,
    LaunchMode.WSL_SHELL: WSL_SHELL,
    LaunchMode.EXPLORER: EXPLORER,
}


@dataclass
class CommandLine:
    """argv plus its rendered form, built in lockstep."""

    launcher: str
    argv: list[str] = field(default_factory=list)
    rendered: str = ""

    def __post_init__(self) -> None:
        self.argv = [self.launcher]
        self.rendered = f"{self.launcher} "

    def add(self, arg: str) -> None:
        self.argv.append(arg)
        self.rendered += f"{arg} "

    def add_final(self, arg: str) -> None:
        """Append the last argument without a trailing separator."""
        self.argv.append(arg)
        self.rendered += arg


class CommandBuilder:
    """Build and execute command lines for invocables.

    Args:
        translator: Converts paths between Windows and Unix form.
        resolver: Substitutes $pf64 / $pf86 / $userpath / $syslive.
        out: Stream for verbose output and child stdout (default: sys.stdout).
        err: Stream for child stderr (default: sys.stderr).
    """

    def __init__(
        self,
        translator: PathTranslator,
        resolver: EnvironmentResolver,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ):
        self._translator = translator
        self._resolver = resolver
        self._out = out
        self._err = err

    # ── Building ─────────────────────────────────────────────────

    def build(self, invocable: Invocable, args: Sequence[str] = ()) -> CommandLine:
        """Assemble the command line without running anything.

        Raises:
            LaunchError: If a direct invocable has no command, or a
                token probe cannot be spawned.
        """
        mode = invocable.launch_mode
        to_unix = mode is LaunchMode.WSL_SHELL

        if mode is LaunchMode.DIRECT:
            if not invocable.command:
                raise LaunchError(f"Command code {invocable.code} has no command to run")
            launcher = self._translator.translate(
                self._resolver.substitute(invocable.command),
                to_unix=not context.is_windows(),
            )
        else:
            launcher = _LAUNCHERS[mode]

        line = CommandLine(launcher)

        if mode is LaunchMode.HOST_SHELL:
            if invocable.wait:
                line.add(WAIT_FLAG)
            line.add(RUN_FLAG)
        elif mode is LaunchMode.WSL_SHELL:
            line.add(BASH_RUN_FLAG)

        if invocable.start:
            line.add(START)
            if invocable.background:
                line.add(BACKGROUND_FLAG)

        if invocable.use_call:
            line.add(CALL)

        if mode is not LaunchMode.DIRECT and invocable.command:
            line.add(self._translator.translate(
                self._resolver.substitute(invocable.command),
                to_unix=to_unix,
            ))

        params = [
            self._translator.translate(self._resolver.substitute(arg), to_unix=to_unix)
            for arg in invocable.arguments
        ]
        params += [self._translator.translate(arg, to_unix=to_unix) for arg in args]

        if mode is LaunchMode.WSL_SHELL:
            # bash -c takes the whole command line as one string
            combined = " ".join(params).strip()
            if combined:
                line.add_final(combined)
        else:
            for param in params:
                line.add(param)

        return line

    # ── Invoking ─────────────────────────────────────────────────

    def invoke(
        self,
        invocable: Invocable,
        dry_run: bool = False,
        verbose: bool = False,
        args: Sequence[str] = (),
    ) -> InvocationResult:
        """Build the command line, echo it if verbose, run it unless dry.

        Raises:
            LaunchError: If the launcher cannot be spawned.
        """
        line = self.build(invocable, args)
        out = self._out or sys.stdout

        if verbose:
            print(line.rendered, file=out)

        result = InvocationResult(
            code=invocable.code,
            launcher=line.launcher,
            argv=line.argv,
            command_line=line.rendered,
            dry_run=dry_run,
            background=invocable.background,
        )

        if dry_run:
            logger.debug("Dry run, not executing: %s", line.argv)
            return result

        if invocable.background:
            self._spawn_detached(line.argv)
        else:
            self._run(line.argv, result)

        result.executed = True
        return result

    def _spawn_detached(self, argv: list[str]) -> None:
        """Start without waiting; the outcome is never observed."""
        logger.debug("Starting in background: %s", argv)
        try:
            subprocess.Popen(argv)
        except OSError as e:
            raise LaunchError(f"Failed to execute {argv[0]}: {e}") from e

    def _run(self, argv: list[str], result: InvocationResult) -> None:
        """Run to completion and pass captured output through."""
        logger.debug("Executing: %s", argv)
        start = time.monotonic()

        try:
            completed = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            raise LaunchError(f"Failed to execute {argv[0]}: {e}") from e

        result.duration_ms = int((time.monotonic() - start) * 1000)
        result.return_code = completed.returncode
        result.stdout = completed.stdout or ""
        result.stderr = completed.stderr or ""

        if result.stderr:
            _write(self._err or sys.stderr, result.stderr)
        if result.stdout:
            _write(self._out or sys.stdout, result.stdout)


def _write(stream: TextIO, text: str) -> None:
    stream.write(text if text.endswith("\n") else text + "\n")

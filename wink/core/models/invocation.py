"""
Invocation result — what a single build/execute produced.

The command line is always filled in, even for dry runs, so callers
can echo what would have run.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class InvocationResult(BaseModel):
    """Outcome of building (and possibly running) one invocable."""

    code: str
    launcher: str
    argv: list[str] = Field(default_factory=list)
    command_line: str = ""          # human-readable, space separated

    dry_run: bool = False
    background: bool = False
    executed: bool = False          # a process was spawned

    return_code: int | None = None  # None when not waited on
    stdout: str = ""
    stderr: str = ""
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        """Dispatched without a non-zero exit status."""
        return self.return_code in (None, 0)

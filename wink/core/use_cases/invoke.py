"""
Invoke use case — from a command code to a launched process.

This is the top-level flow behind ``wink <code> [args]``: load the
catalog, look the code up, build the command line, run it.  Fatal
problems (bad wink.json, a launcher that cannot be spawned) come back
as ``error`` so the CLI can report them and exit before anything runs.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from wink.adapters.base import LaunchError
from wink.core.config.loader import ConfigError
from wink.core.engine.invoker import CommandBuilder
from wink.core.models.invocable import Invocable
from wink.core.models.invocation import InvocationResult
from wink.core.services.catalog import CatalogRegistry

logger = logging.getLogger(__name__)


@dataclass
class InvokeResult:
    """Result of invoking a command code."""

    code: str = ""
    found: bool = False
    invocable: Invocable | None = None
    invocation: InvocationResult | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        result: dict = {"code": self.code, "found": self.found}
        if self.error:
            result["error"] = self.error
        if self.invocable:
            result["invocable"] = self.invocable.model_dump(mode="json")
        if self.invocation:
            result["invocation"] = self.invocation.model_dump(mode="json")
        return result


def default_builder() -> CommandBuilder:
    """A builder wired to the real wslpath and cmd.exe adapters."""
    from wink.adapters.shell.environment import EnvironmentResolver, ShellEnvironmentProvider
    from wink.adapters.shell.wslpath import WslPathTranslator

    translator = WslPathTranslator()
    resolver = EnvironmentResolver(ShellEnvironmentProvider(), translator)
    return CommandBuilder(translator, resolver)


def load_registry(
    override_path: Path | None = None,
) -> tuple[CatalogRegistry | None, str | None]:
    """Load the catalog, returning ``(registry, error)``."""
    try:
        return CatalogRegistry.load(override_path=override_path), None
    except ConfigError as e:
        return None, str(e)


def invoke_code(
    code: str,
    args: Sequence[str] = (),
    dry_run: bool = False,
    verbose: bool = False,
    registry: CatalogRegistry | None = None,
    builder: CommandBuilder | None = None,
) -> InvokeResult:
    """Look up and run a command code.

    Args:
        code: Command code, matched exactly.
        args: Trailing arguments for the command.
        dry_run: Build (and optionally print) but don't execute.
        verbose: Print the command line.
        registry: Pre-loaded catalog. If None, it is loaded here.
        builder: Pre-configured builder. If None, the real adapters are used.

    Returns:
        InvokeResult; ``found`` is False for unknown codes.
    """
    result = InvokeResult(code=code)

    if registry is None:
        registry, error = load_registry()
        if error:
            result.error = error
            return result
    assert registry is not None

    invocable = registry.lookup(code)
    if invocable is None:
        logger.info("No command code %r in %d categories", code, len(registry))
        return result

    result.found = True
    result.invocable = invocable

    if builder is None:
        builder = default_builder()

    try:
        result.invocation = builder.invoke(
            invocable,
            dry_run=dry_run,
            verbose=verbose,
            args=args,
        )
    except LaunchError as e:
        result.error = str(e)

    return result

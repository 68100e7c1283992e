"""
wslpath adapter — convert paths across the Windows/WSL boundary.

Wraps the ``wslpath`` utility that ships with WSL:

    wslpath -u 'C:\\temp'   →  /mnt/c/temp
    wslpath -w /mnt/c/temp  →  C:\\temp

Anything that is not a path (``echo``, ``--inprivate``, ``$USER``)
is passed through too; wslpath either echoes it back or fails, and a
failure falls back to the original string.
"""

from __future__ import annotations

import logging
import os
import subprocess

from wink.adapters.base import PathTranslator
from wink.core import context

logger = logging.getLogger(__name__)

WSLPATH = "wslpath"


class WslPathTranslator(PathTranslator):
    """Path translator backed by the ``wslpath`` helper.

    Args:
        helper: Helper executable name or path.
        require_change: Treat output with the same length as the input
            as a failed conversion (a no-op is not a translation).
    """

    def __init__(self, helper: str = WSLPATH, require_change: bool = False):
        self._helper = helper
        self._require_change = require_change

    def translate(self, path: str, to_unix: bool) -> str:
        if self._already_native(path, to_unix):
            return path

        flag = "-u" if to_unix else "-w"
        cmd = [self._helper, flag, path]
        logger.debug("Translating: %s", cmd)

        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            logger.debug("Path helper %s unavailable: %s", self._helper, e)
            return path

        if result.returncode != 0:
            logger.debug("%s %s %r exited %d", self._helper, flag, path, result.returncode)
            return path

        output = result.stdout.strip()

        # Empty or multi-line output is an error message, not a path
        if not output or "\n" in output:
            return path

        if self._require_change and len(output) == len(path):
            return path

        return output

    @staticmethod
    def _already_native(path: str, to_unix: bool) -> bool:
        """True when ``path`` needs no helper call for this direction."""
        if not path:
            return True

        if to_unix and path.startswith("/"):
            return True

        if context.is_windows() and not to_unix:
            return True

        # An existing local path is already in the convention we run under
        return context.is_windows() != to_unix and os.path.exists(path)

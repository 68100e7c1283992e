"""
Runtime context — which side of the Windows/WSL boundary we run on.

Every module that cares about the host asks through this module:

    - Path translation:   which direction is already native
    - Config discovery:   %USERPROFILE%\\wink.json vs ~/.wink.json
    - CLI:                refuse to run anywhere else

Design notes:
    - Plain functions, no state.  Callers import the module
      (``from wink.core import context``) and call ``context.is_wsl()``
      so tests can monkeypatch a single place.
    - WSL is detected from the environment, not /proc, so users can
      force it by defining WSL_DISTRO_NAME.
"""

from __future__ import annotations

import os
import sys

# Set by WSL in every distribution shell
WSL_ENV_VAR = "WSL_DISTRO_NAME"


def is_windows() -> bool:
    """True when running natively on the Windows host."""
    return sys.platform == "win32"


def is_wsl() -> bool:
    """True when running inside Windows Subsystem for Linux."""
    return bool(os.environ.get(WSL_ENV_VAR))


def is_windows_or_wsl() -> bool:
    """True when Windows features are reachable from this process."""
    return is_windows() or is_wsl()

"""Writing the process identifier file."""

from __future__ import annotations

import os
from typing import Optional


class PIDFileError(Exception):
    """Raised when the PID file cannot be created."""


def create_pid_file(path: str, enabled: bool, override: bool) -> Optional[int]:
    """Write the current process id to path.

    Does nothing and returns None when disabled. Raises PIDFileError when the
    file already exists and override is off, or when it cannot be written.
    Returns the pid that was written.
    """
    if not enabled:
        return None

    if os.path.exists(path) and not override:
        raise PIDFileError(f"{path} already exists")

    pid = os.getpid()
    folder = os.path.dirname(path) or "."
    try:
        os.makedirs(folder, exist_ok=True)
    except OSError as exc:
        raise PIDFileError(f"can't create PID folder on {exc}") from exc

    try:
        handle = open(path, "w", encoding="ascii")
    except OSError as exc:
        raise PIDFileError(f"can't create PID file: {exc}") from exc

    with handle:
        try:
            handle.write(str(pid))
        except OSError as exc:
            raise PIDFileError(
                f"can't write PID information on {path}: {exc}"
            ) from exc
    return pid
from __future__ import annotations

import os
import sys
from typing import List

import psutil

from relauncher.errors import ExecutablePathUnavailable
from relauncher.utils.logging import get_logger

log = get_logger("process.executable")


def _process() -> psutil.Process:
    return psutil.Process()


def current_executable() -> str:
    """Absolute, canonical path of the image backing this process.

    Looked up on every call. Raises ExecutablePathUnavailable if the OS
    cannot report it or the image is gone from disk.
    """
    try:
        exe = _process().exe()
    except (psutil.Error, OSError) as e:
        raise ExecutablePathUnavailable(f"OS lookup failed: {e}") from e

    if not exe:
        raise ExecutablePathUnavailable("OS reported an empty executable path")

    path = os.path.realpath(exe)
    # imagen borrada o desvinculada
    if not os.path.isfile(path):
        raise ExecutablePathUnavailable(f"executable no longer exists: {path}")
    return path


def inherited_command_line() -> List[str]:
    """Command line of the running process, program name included.

    The program name is kept as invoked (e.g. ``/venv/bin/python``), not
    resolved: CPython locates its virtualenv from argv[0].
    """
    try:
        cmdline = _process().cmdline()
    except (psutil.Error, OSError) as e:
        log.debug("cmdline unavailable (%s), using sys.orig_argv", e)
        cmdline = list(sys.orig_argv)
    return [str(a) for a in cmdline]

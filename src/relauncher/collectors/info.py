from __future__ import annotations

import os
import platform
import time
from typing import Any, Dict, Optional

import psutil

from relauncher.config import load_config
from relauncher.errors import ExecutablePathUnavailable
from relauncher.process.executable import current_executable, inherited_command_line


def get_info(service: str = "relauncher", version: str = "0.1.0") -> Dict[str, Any]:
    """What a relaunch of this process would run, plus enough to tell instances apart."""
    cfg = load_config()
    started_at = _started_at()

    return {
        "service": service,
        "version": version,
        "pid": os.getpid(),
        "ppid": os.getppid(),
        "executable": _executable_or_none(),
        "command_line": inherited_command_line(),
        "relaunch": {"argv": cfg.relaunch.argv, "env": cfg.relaunch.env},
        "config_path": cfg.config_path,
        "python": platform.python_version(),
        "started_at": started_at,
        "uptime_seconds": max(0, int(time.time() - started_at)),
    }


def _executable_or_none() -> Optional[str]:
    try:
        return current_executable()
    except ExecutablePathUnavailable:
        return None


def _started_at() -> float:
    # hora de arranque real del proceso, no la de importación del módulo
    return psutil.Process().create_time()

from __future__ import annotations

import os
import subprocess
from typing import Any, Dict, Mapping, Optional, Sequence

from relauncher.errors import SpawnFailed


def _detach_kwargs() -> Dict[str, Any]:
    if os.name == "nt":
        return {
            "creationflags": subprocess.DETACHED_PROCESS | subprocess.CREATE_NEW_PROCESS_GROUP,
        }
    # sesión propia: el hijo no recibe las señales de la terminal del padre
    return {"start_new_session": True}


def spawn_detached(
    argv: Sequence[str],
    env: Optional[Mapping[str, str]] = None,
    executable: Optional[str] = None,
) -> int:
    """Start ``argv`` as an independent process and return its pid.

    ``executable`` is the image to run; ``argv[0]`` is only the name the
    child sees. Without it, ``argv[0]`` is executed.

    Fire-and-forget: the call returns as soon as the OS accepts the spawn
    and the Popen handle is dropped, so nothing ever waits on the child.
    """
    args = [str(a) for a in argv]
    if not args:
        raise SpawnFailed(executable or "<empty>", ValueError("empty command line"))
    target = executable or args[0]

    try:
        proc = subprocess.Popen(
            args,
            executable=executable,
            env=dict(env) if env is not None else None,
            close_fds=True,
            **_detach_kwargs(),
        )
    except (OSError, ValueError, subprocess.SubprocessError) as e:
        raise SpawnFailed(target, e) from e

    pid = proc.pid
    # sin join/wait: el handle se descarta a propósito
    del proc
    return pid

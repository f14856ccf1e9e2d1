"""Self-restart primitive.

``relaunch()`` starts a fresh instance of the running program from its own
executable image and returns without waiting for it. Only a failure to
resolve the executable path reaches the caller; a failed spawn is logged,
passed to the optional hook, and otherwise dropped.

There is no locking: concurrent calls each spawn their own child.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from relauncher.config import RelaunchOptions
from relauncher.errors import SpawnFailed
from relauncher.process.executable import current_executable, inherited_command_line
from relauncher.process.spawn import spawn_detached
from relauncher.utils.logging import get_logger

log = get_logger("actions.relaunch")

SpawnFailureHook = Callable[[SpawnFailed], None]


def build_command(executable: str, options: RelaunchOptions) -> List[str]:
    """Command line the child sees.

    argv[0] stays the name this process was invoked as (a venv's
    ``bin/python`` must not become the base interpreter); the image itself
    is passed separately to the spawner.
    """
    cmdline = inherited_command_line()
    argv0 = cmdline[0] if cmdline and cmdline[0] else executable
    if options.argv == "none":
        return [argv0]
    return [argv0] + cmdline[1:]


def build_env(options: RelaunchOptions) -> Optional[Dict[str, str]]:
    # None = Popen hereda el entorno del padre
    if options.env == "empty":
        return {}
    return None


def _notify(hook: SpawnFailureHook, error: SpawnFailed) -> None:
    try:
        hook(error)
    except Exception:
        log.exception("on_spawn_failure hook raised; ignoring")


def relaunch(
    options: Optional[RelaunchOptions] = None,
    on_spawn_failure: Optional[SpawnFailureHook] = None,
) -> None:
    """Launch a new instance of this process and return immediately.

    Args:
        options: Argument/environment policy for the child. Defaults to
            inheriting both from the current process.
        on_spawn_failure: Called with the SpawnFailed error when the OS
            refuses the spawn. The error is never raised.

    Raises:
        ExecutablePathUnavailable: The running image path cannot be resolved.
            No spawn is attempted.
    """
    options = options or RelaunchOptions()
    executable = current_executable()

    argv = build_command(executable, options)
    try:
        pid = spawn_detached(argv, env=build_env(options), executable=executable)
    except SpawnFailed as e:
        log.warning("Relaunch of %s failed, continuing without it: %s", executable, e.cause)
        if on_spawn_failure is not None:
            _notify(on_spawn_failure, e)
        return

    log.info("Relaunched %s as pid %d (argv=%s, env=%s)", executable, pid, options.argv, options.env)

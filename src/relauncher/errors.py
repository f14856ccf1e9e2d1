"""Exception hierarchy for the relauncher."""

from __future__ import annotations


class RelaunchError(Exception):
    """Base exception for all relaunch errors."""


class ExecutablePathUnavailable(RelaunchError):
    """The OS could not report the running process's own executable path."""


class SpawnFailed(RelaunchError):
    """The OS refused or failed to create the new process.

    Raised by the spawner only; ``relaunch()`` never lets it reach callers.
    """

    def __init__(self, executable: str, cause: BaseException) -> None:
        super().__init__(f"could not spawn {executable}: {cause}")
        self.executable = executable
        self.cause = cause

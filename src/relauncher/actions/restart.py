from __future__ import annotations

import os
import threading
import time

from relauncher.utils.logging import get_logger

log = get_logger("actions.restart")


def _exit_process_after_delay(delay_s: float) -> None:
    time.sleep(delay_s)
    log.info("Exiting pid %d, replacement already launched", os.getpid())
    os._exit(0)  # la nueva instancia ya fue lanzada por relaunch()


def schedule_exit(delay_s: float = 0.3) -> threading.Thread:
    """Exit the current process after ``delay_s`` on a daemon thread.

    The delay lets the HTTP response reach the client first.
    """
    t = threading.Thread(target=_exit_process_after_delay, args=(delay_s,), daemon=True)
    t.start()
    return t

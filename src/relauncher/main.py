from __future__ import annotations

from contextlib import asynccontextmanager
from typing import List

from fastapi import Depends, FastAPI, HTTPException, status

from relauncher.actions.relaunch import relaunch
from relauncher.actions.restart import schedule_exit
from relauncher.auth import require_token
from relauncher.collectors.info import get_info
from relauncher.config import load_config
from relauncher.errors import ExecutablePathUnavailable, SpawnFailed
from relauncher.utils.logging import get_logger, setup_logging

log = get_logger("main")


@asynccontextmanager
async def lifespan(_: FastAPI):
    try:
        cfg = load_config()
    except FileNotFoundError:
        setup_logging()
        log.warning("No config file found; /actions/restart will fail until one exists")
    else:
        setup_logging(level=cfg.log_level, log_file=cfg.log_file)
    yield


app = FastAPI(title="relauncher", lifespan=lifespan)


@app.get("/health")
def health():
    return {"status": "ok", "service": "relauncher"}


@app.get("/info")
def info():
    return get_info(service="relauncher")


@app.post("/actions/restart")
def restart(_: None = Depends(require_token)):
    cfg = load_config()
    failures: List[SpawnFailed] = []

    try:
        relaunch(cfg.relaunch, on_spawn_failure=failures.append)
    except ExecutablePathUnavailable as e:
        log.error("Restart aborted: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Executable path unavailable: {e}",
        )

    # sin reemplazo no salimos
    if failures:
        return {"status": "not-restarted", "error": str(failures[0])}

    if cfg.exit_after:
        schedule_exit(cfg.exit_delay_s)
        return {"status": "restarting"}
    return {"status": "relaunched"}

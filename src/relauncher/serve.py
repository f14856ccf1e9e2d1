"""Run the HTTP control surface with uvicorn.

Started as ``python -m relauncher`` or the ``relauncher`` script, the
command line a relaunch inherits re-enters here and the new instance binds
the same ``http.host``/``http.port``.
"""

from __future__ import annotations

import uvicorn

from relauncher.config import load_config
from relauncher.main import app
from relauncher.utils.logging import get_logger, setup_logging

log = get_logger("serve")


def run() -> None:
    cfg = load_config()
    setup_logging(level=cfg.log_level, log_file=cfg.log_file)
    log.info("Serving on %s:%d (config %s)", cfg.http_host, cfg.http_port, cfg.config_path)
    # log_config=None: uvicorn no pisa el logging ya configurado
    uvicorn.run(app, host=cfg.http_host, port=cfg.http_port, log_config=None)

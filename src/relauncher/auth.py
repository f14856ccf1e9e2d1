from __future__ import annotations

import hmac
import os

from fastapi import Header, HTTPException, status

from relauncher.config import load_config
from relauncher.utils.logging import get_logger

log = get_logger("auth")

TOKEN_ENV = "RELAUNCHER_TOKEN"


def expected_token() -> str:
    """Restart token: ``$RELAUNCHER_TOKEN`` wins over ``auth.token`` in the config."""
    env = os.environ.get(TOKEN_ENV)
    if env is not None and env.strip():
        return env.strip()
    return (load_config().auth_token or "").strip()


def tokens_match(provided: str, expected: str) -> bool:
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def require_token(
    x_relauncher_token: str | None = Header(default=None, alias="X-Relauncher-Token"),
) -> None:
    expected = expected_token()

    # Fail-closed: sin token configurado nadie puede reiniciar
    if not expected:
        log.error("Restart refused: no token configured (auth.token / %s)", TOKEN_ENV)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server misconfigured: auth.token is empty",
        )

    provided = (x_relauncher_token or "").strip()
    if not provided or not tokens_match(provided, expected):
        log.warning("Restart refused: bad or missing X-Relauncher-Token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

ARGV_POLICIES = ("inherit", "none")
ENV_POLICIES = ("inherit", "empty")


@dataclass(frozen=True)
class RelaunchOptions:
    argv: str = "inherit"
    env: str = "inherit"

    def __post_init__(self) -> None:
        if self.argv not in ARGV_POLICIES:
            raise ValueError(f"relaunch.argv must be one of {ARGV_POLICIES}, got {self.argv!r}")
        if self.env not in ENV_POLICIES:
            raise ValueError(f"relaunch.env must be one of {ENV_POLICIES}, got {self.env!r}")


@dataclass(frozen=True)
class RelauncherConfig:
    http_host: str
    http_port: int
    auth_token: str
    config_path: str
    relaunch: RelaunchOptions = field(default_factory=RelaunchOptions)
    exit_after: bool = True
    exit_delay_s: float = 0.3
    log_level: str = "INFO"
    log_file: Optional[str] = None


def _first_existing(paths: List[Path]) -> Optional[Path]:
    for p in paths:
        if p.exists() and p.is_file():
            return p
    return None


def get_config_path() -> Path:
    env = os.environ.get("RELAUNCHER_CONFIG")
    candidates: List[Path] = []
    if env:
        candidates.append(Path(env).expanduser())
    candidates.append(Path("/etc/relauncher/config.yaml"))
    candidates.append(Path.cwd() / "config" / "relauncher.yaml")

    chosen = _first_existing(candidates)
    if not chosen:
        raise FileNotFoundError(
            "No se encontró config. Crea ./config/relauncher.yaml o define RELAUNCHER_CONFIG "
            "o usa /etc/relauncher/config.yaml."
        )
    return chosen


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name, {}) or {}
    if not isinstance(section, dict):
        raise ValueError(f"config.{name} debe ser un mapping")
    return section


def load_config() -> RelauncherConfig:
    path = get_config_path()
    with path.open("r", encoding="utf-8") as f:
        data: Dict[str, Any] = yaml.safe_load(f) or {}

    http = _section(data, "http")
    auth = _section(data, "auth")
    relaunch = _section(data, "relaunch")
    log_cfg = _section(data, "logging")

    options = RelaunchOptions(
        argv=str(relaunch.get("argv", "inherit")),
        env=str(relaunch.get("env", "inherit")),
    )

    exit_delay_s = float(relaunch.get("exit_delay_s", 0.3))
    if exit_delay_s < 0:
        raise ValueError("config.relaunch.exit_delay_s no puede ser negativo")

    log_level = str(log_cfg.get("level", "INFO")).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"config.logging.level desconocido: {log_level}")

    log_file = log_cfg.get("file")
    if log_file:
        log_file = os.path.expanduser(str(log_file))

    return RelauncherConfig(
        http_host=str(http.get("host", "127.0.0.1")),
        http_port=int(http.get("port", 8080)),
        auth_token=str(auth.get("token", "")),
        config_path=str(path),
        relaunch=options,
        exit_after=bool(relaunch.get("exit_after", True)),
        exit_delay_s=exit_delay_s,
        log_level=log_level,
        log_file=log_file or None,
    )

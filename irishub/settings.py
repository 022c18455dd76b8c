#===============================================================================
#  Iris_Application_Hub | settings.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Runtime settings resolved from the environment, with defaults from
#  constants.py. Config lives in a per-user folder:
#    Windows       : %APPDATA%\iris
#    Linux / macOS : $XDG_CONFIG_HOME/iris (or ~/.config/iris)
#  IRIS_HOME overrides the folder for portable installs and tests.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .constants import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    KILL_TIMEOUT_SECONDS,
    LOG_DIR_NAME,
    POLL_INTERVAL_MS,
)


def default_config_dir(env: Optional[Mapping[str, str]] = None) -> Path:
    env = os.environ if env is None else env
    home = (env.get("IRIS_HOME") or "").strip()
    if home:
        return Path(home)
    if os.name == "nt" and env.get("APPDATA"):
        return Path(env["APPDATA"]) / CONFIG_DIR_NAME
    xdg = (env.get("XDG_CONFIG_HOME") or "").strip()
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / CONFIG_DIR_NAME


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    try:
        return max(100, int(env.get(name, default)))
    except (TypeError, ValueError):
        return default


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
    try:
        return max(0.1, float(env.get(name, default)))
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class Settings:
    config_dir: Path
    terminal: str = ""                      # forced terminal emulator (POSIX)
    poll_interval_ms: int = POLL_INTERVAL_MS
    kill_timeout: float = KILL_TIMEOUT_SECONDS
    log_level: str = "INFO"

    @property
    def config_path(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME

    @property
    def log_dir(self) -> Path:
        return self.config_dir / LOG_DIR_NAME

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        return cls(
            config_dir=default_config_dir(env),
            terminal=(env.get("IRIS_TERMINAL") or "").strip(),
            poll_interval_ms=_int_env(env, "IRIS_POLL_MS", POLL_INTERVAL_MS),
            kill_timeout=_float_env(env, "IRIS_KILL_TIMEOUT", KILL_TIMEOUT_SECONDS),
            log_level=(env.get("IRIS_LOG_LEVEL") or "INFO").strip().upper(),
        )

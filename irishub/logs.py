#===============================================================================
#  Iris_Application_Hub | logs.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Logging setup: rotating file under <config dir>/logs/iris.log plus stderr.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .constants import LOG_FILE_NAME

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(log_dir: Path, level: str = "INFO") -> Path:
    """Configure the root logger once and return the log file path."""
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # idempotent: a second call (tests, re-entry) does not stack handlers
    for h in list(root.handlers):
        if getattr(h, "_iris_handler", False):
            root.removeHandler(h)
            h.close()

    formatter = logging.Formatter(LOG_FORMAT)

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
    file_handler.setFormatter(formatter)
    file_handler._iris_handler = True  # type: ignore[attr-defined]
    root.addHandler(file_handler)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    stream_handler._iris_handler = True  # type: ignore[attr-defined]
    root.addHandler(stream_handler)

    return log_path

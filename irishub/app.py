#===============================================================================
#  Iris_Application_Hub | app.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Application bootstrap: settings, logging, config store, process manager and
#  the main window. Used by ./main.py and the "iris-hub" console script.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import sys

from PySide6.QtWidgets import QApplication

from .config_store import ConfigStore
from .constants import APP_TITLE
from .icons import IconCatalog
from .logs import setup_logging
from .main_window import MainWindow
from .manager import ProcessManager
from .settings import Settings

logger = logging.getLogger(__name__)


def main() -> int:
    settings = Settings.from_env()
    log_path = setup_logging(settings.log_dir, settings.log_level)
    logger.info("%s starting; config at %s, log at %s", APP_TITLE, settings.config_path, log_path)

    store = ConfigStore(settings.config_path)
    manager = ProcessManager.from_settings(store, settings)
    icons = IconCatalog(settings.config_dir / "icons")

    app = QApplication(sys.argv)
    app.setApplicationName(APP_TITLE)
    w = MainWindow(settings, store, manager, icons)
    w.show()
    # launched terminals are detached and keep running after the hub closes
    return app.exec()

#===============================================================================
#  Iris_Application_Hub | errors.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Exceptions raised by the hub. The UI catches IrisError around every action.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from typing import Optional


class IrisError(RuntimeError):
    """Base class for every error the hub reports to the user."""


class InvalidDirectory(IrisError):
    def __init__(self, path: str):
        super().__init__(f"Working directory does not exist: {path}")
        self.path = path


class NoCommands(IrisError):
    def __init__(self, app_name: str = ""):
        label = f" '{app_name}'" if app_name else ""
        super().__init__(f"Application{label} has no commands configured.")


class SpawnFailed(IrisError):
    """The terminal could not be started. The registry is left untouched."""


class OSQueryFailed(IrisError):
    """The OS process table could not be read for a pid."""

    def __init__(self, pid: Optional[int] = None, reason: str = ""):
        msg = f"Could not query process {pid}" if pid is not None else "Could not read the process table"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
        self.pid = pid


class UnknownApplication(IrisError):
    def __init__(self, app_id: str):
        super().__init__(f"No application with id '{app_id}'.")
        self.app_id = app_id


class ConfigError(IrisError):
    """A configuration file could not be read or parsed."""

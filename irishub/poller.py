#===============================================================================
#  Iris_Application_Hub | poller.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  One reconciliation pass per UI tick: settles loading entries on the pid
#  their script reported and drops entries whose root process has exited
#  (command finished, terminal closed by the user, ...).
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from .errors import OSQueryFailed, SpawnFailed
from .launcher import resolve_pending
from .models import RunningProcess
from .process_tree import is_alive
from .registry import ProcessRegistry

logger = logging.getLogger(__name__)


class StatusPoller:
    def __init__(
        self,
        registry: ProcessRegistry,
        liveness: Callable[[int, Optional[float]], bool] = is_alive,
        resolver: Callable[[RunningProcess], RunningProcess] = resolve_pending,
    ):
        self.registry = registry
        self._is_alive = liveness
        self._resolve = resolver

    def tick(self) -> List[str]:
        """Settle loading entries, prune dead ones; return the app ids that changed."""
        changed: List[str] = []
        for app_id, process in self.registry.snapshot():
            process.reap()
            # a Stop/Restart may have replaced the entry since the snapshot,
            # hence remove_if / replace_if below
            if process.loading:
                try:
                    settled = self._resolve(process)
                except SpawnFailed as e:
                    logger.error("'%s' failed to start: %s", app_id, e)
                    if self.registry.remove_if(app_id, process):
                        changed.append(app_id)
                    continue
                if settled is not process and self.registry.replace_if(app_id, process, settled):
                    logger.info("'%s' is running (pid %s)", app_id, settled.pid)
                    changed.append(app_id)
                continue

            try:
                alive = self._is_alive(process.pid, process.create_time)
            except OSQueryFailed as e:
                logger.warning("Skipping '%s' this tick: %s", app_id, e)
                continue
            if alive:
                continue
            if self.registry.remove_if(app_id, process):
                logger.info("'%s' (pid %s) exited; no longer running", app_id, process.pid)
                changed.append(app_id)
        return changed

#===============================================================================
#  Iris_Application_Hub | manager.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Run / Stop / Restart for configured applications. Ties together the config
#  store, terminal launcher, process registry, tree terminator and poller.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import math
import threading
from typing import Dict, List, Optional, Protocol, Set, Tuple

from .errors import OSQueryFailed, SpawnFailed, UnknownApplication
from .launcher import TerminalLauncher
from .models import ApplicationConfig, RunningProcess, TerminationResult
from .poller import StatusPoller
from .process_tree import ProcessTreeTerminator
from .registry import ProcessRegistry
from .settings import Settings

logger = logging.getLogger(__name__)


class ConfigSource(Protocol):
    def get(self, app_id: str) -> Optional[ApplicationConfig]:
        ...


class ProcessManager:
    """Lifecycle of every application's terminal.

    run/stop/restart are serialised by one lock; the registry has its own so
    status reads never wait on a launch in progress.
    """

    def __init__(
        self,
        configs: ConfigSource,
        registry: Optional[ProcessRegistry] = None,
        launcher: Optional[TerminalLauncher] = None,
        terminator: Optional[ProcessTreeTerminator] = None,
        poller: Optional[StatusPoller] = None,
    ):
        self.configs = configs
        self.registry = registry or ProcessRegistry()
        self.launcher = launcher or TerminalLauncher(self.registry)
        self.terminator = terminator or ProcessTreeTerminator()
        self.poller = poller or StatusPoller(self.registry, resolver=self.launcher.resolve)
        self._lock = threading.RLock()

    @classmethod
    def from_settings(cls, configs: ConfigSource, settings: Settings) -> "ProcessManager":
        registry = ProcessRegistry()
        return cls(
            configs,
            registry=registry,
            launcher=TerminalLauncher(registry, terminal=settings.terminal),
            terminator=ProcessTreeTerminator(timeout=settings.kill_timeout),
        )

    def _app(self, app_id: str) -> ApplicationConfig:
        app = self.configs.get(app_id)
        if app is None:
            raise UnknownApplication(app_id)
        return app

    # ----------------------------
    # Actions
    # ----------------------------
    def run(self, app_id: str) -> RunningProcess:
        with self._lock:
            return self.launcher.launch(self._app(app_id))

    def stop(self, app_id: str) -> TerminationResult:
        """Terminate the app's process tree and forget it.

        The entry is cleared even when some processes survive or the process
        table cannot be read; a straggler is preferred over a stuck "running".
        """
        with self._lock:
            entry = self.registry.get(app_id)
            if entry is None:
                return TerminationResult()
            try:
                # an exited child of ours must not linger as a zombie root
                entry.reap()
                target = self._settle_now(entry)
                if target is None:
                    result = TerminationResult()
                else:
                    result = self.terminator.terminate(target.pid, target.create_time)
            finally:
                self.registry.remove_if(app_id, entry)
            logger.info("Stopped '%s' (%d terminated, %d survivors)", app_id, result.terminated, len(result.survivors))
            return result

    def _settle_now(self, entry: RunningProcess) -> Optional[RunningProcess]:
        """The entry's final root pid, without waiting; None when its terminal never started."""
        try:
            return self.launcher.resolve(entry, now=math.inf)
        except SpawnFailed as e:
            logger.info("'%s' never started: %s", entry.app_id, e)
            return None

    def restart(self, app_id: str) -> RunningProcess:
        """Stop (full or partial) then launch again.

        When the launch fails the app is left without an entry and the error
        propagates.
        """
        with self._lock:
            app = self._app(app_id)
            try:
                self.stop(app_id)
            except OSQueryFailed as e:
                logger.warning("Restart of '%s': stop could not inspect processes: %s", app_id, e)
            return self.launcher.launch(app)

    def stop_all(self) -> Dict[str, TerminationResult]:
        results: Dict[str, TerminationResult] = {}
        for app_id in list(self.list_running()):
            try:
                results[app_id] = self.stop(app_id)
            except OSQueryFailed as e:
                logger.warning("Stop of '%s' could not inspect processes: %s", app_id, e)
        return results

    # ----------------------------
    # Status
    # ----------------------------
    def poll(self) -> List[str]:
        with self._lock:
            return self.poller.tick()

    def is_running(self, app_id: str) -> bool:
        return app_id in self.registry

    def is_loading(self, app_id: str) -> bool:
        entry = self.registry.get(app_id)
        return entry is not None and entry.loading

    def list_running(self) -> Set[str]:
        return {app_id for app_id, _ in self.registry.snapshot()}

    def snapshot(self) -> List[Tuple[str, RunningProcess]]:
        return self.registry.snapshot()

#===============================================================================
#  Iris_Application_Hub | process_tree.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Process table snapshots, descendant discovery, liveness checks and
#  whole-tree termination (terminate, wait, kill, wait) on top of psutil.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Callable, Dict, List, Optional, Set

import psutil

from .constants import CREATE_TIME_TOLERANCE, KILL_TIMEOUT_SECONDS
from .errors import OSQueryFailed
from .models import TerminationResult

logger = logging.getLogger(__name__)

# pid -> parent pid
ProcessTable = Dict[int, int]


def snapshot_process_table() -> ProcessTable:
    """Read pid -> ppid for every visible process."""
    table: ProcessTable = {}
    try:
        for p in psutil.process_iter(attrs=["pid", "ppid"]):
            ppid = p.info.get("ppid")
            if ppid is None:
                continue
            table[p.info["pid"]] = ppid
    except psutil.Error as e:
        raise OSQueryFailed(reason=str(e)) from e
    return table


def enumerate_descendants(pid: int, table: ProcessTable) -> Set[int]:
    """Every pid transitively parented by pid (pid itself excluded)."""
    return set(children_first(pid, table)[:-1])


def children_first(pid: int, table: ProcessTable) -> List[int]:
    """pid and its descendants, every process listed after all of its own descendants."""
    children: Dict[int, List[int]] = defaultdict(list)
    for child, parent in table.items():
        if child != parent:
            children[parent].append(child)

    # breadth-first from pid, reversed: deeper levels come out first
    order = [pid]
    seen = {pid}
    i = 0
    while i < len(order):
        for child in children.get(order[i], ()):
            if child not in seen:
                seen.add(child)
                order.append(child)
        i += 1
    order.reverse()
    return order


def process_create_time(pid: int) -> Optional[float]:
    """OS start time of pid, or None when it cannot be read."""
    try:
        return psutil.Process(pid).create_time()
    except psutil.Error:
        return None


def _same_process(proc: psutil.Process, create_time: Optional[float]) -> bool:
    if create_time is None:
        return True
    return abs(proc.create_time() - create_time) <= CREATE_TIME_TOLERANCE


def is_alive(pid: int, create_time: Optional[float] = None) -> bool:
    """True while pid is in the process table and not a zombie.

    With create_time, a pid now owned by a different process counts as dead.
    Raises OSQueryFailed when the OS refuses to answer.
    """
    try:
        proc = psutil.Process(pid)
        if proc.status() == psutil.STATUS_ZOMBIE:
            return False
        return _same_process(proc, create_time)
    except psutil.NoSuchProcess:
        return False
    except psutil.AccessDenied:
        # it exists, we just may not look at it
        return True
    except psutil.Error as e:
        raise OSQueryFailed(pid, str(e)) from e


def _still_running(proc: psutil.Process) -> bool:
    try:
        return proc.is_running() and proc.status() != psutil.STATUS_ZOMBIE
    except psutil.NoSuchProcess:
        return False
    except psutil.AccessDenied:
        return True


def _signal_all(procs: List[psutil.Process], action: str) -> None:
    for proc in procs:
        try:
            getattr(proc, action)()
        except psutil.NoSuchProcess:
            pass
        except psutil.AccessDenied:
            logger.warning("Access denied trying to %s pid %s", action, proc.pid)


class ProcessTreeTerminator:
    """Terminates a root pid and everything below it.

    The wait after each signal round is bounded by timeout; there are no
    retries beyond the final kill.
    """

    def __init__(
        self,
        timeout: float = KILL_TIMEOUT_SECONDS,
        table_provider: Callable[[], ProcessTable] = snapshot_process_table,
    ):
        self.timeout = timeout
        self._table = table_provider

    def terminate(self, root_pid: int, create_time: Optional[float] = None) -> TerminationResult:
        """Stop root_pid and its descendants.

        A root that already exited (zombie included) or whose pid now belongs
        to another process (create_time mismatch) counts as gone.
        """
        table = self._table()
        if root_pid not in table or not is_alive(root_pid, create_time):
            logger.info("Process %s already gone; nothing to stop", root_pid)
            return TerminationResult()

        procs: List[psutil.Process] = []
        # leaves before their parents, root last
        for pid in children_first(root_pid, table):
            try:
                procs.append(psutil.Process(pid))
            except psutil.NoSuchProcess:
                continue
        if not procs:
            return TerminationResult()

        _signal_all(procs, "terminate")
        _gone, alive = psutil.wait_procs(procs, timeout=self.timeout)

        if alive:
            _signal_all(alive, "kill")
            _gone, alive = psutil.wait_procs(alive, timeout=self.timeout)

        survivors = sorted(p.pid for p in alive if _still_running(p))
        result = TerminationResult(terminated=len(procs) - len(survivors), survivors=survivors)
        if result.partial:
            logger.warning(
                "Process tree of %s partially terminated; survivors: %s",
                root_pid,
                ", ".join(str(p) for p in survivors),
            )
        else:
            logger.info("Terminated %d process(es) under %s", result.terminated, root_pid)
        return result

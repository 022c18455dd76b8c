#===============================================================================
#  Iris_Application_Hub | registry.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  The one table of applications currently considered running. Every access
#  goes through a single lock; callers only ever see whole entries.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import threading
from typing import Dict, List, Optional, Tuple

from .models import RunningProcess


class ProcessRegistry:
    """Thread-safe app id -> RunningProcess map, kept in insertion order."""

    def __init__(self):
        self._lock = threading.Lock()
        self._entries: Dict[str, RunningProcess] = {}

    def insert(self, app_id: str, process: RunningProcess) -> None:
        with self._lock:
            # re-inserting moves the entry to the end
            self._entries.pop(app_id, None)
            self._entries[app_id] = process

    def remove(self, app_id: str) -> Optional[RunningProcess]:
        with self._lock:
            return self._entries.pop(app_id, None)

    def remove_if(self, app_id: str, process: RunningProcess) -> bool:
        """Remove app_id only while it still maps to this exact entry."""
        with self._lock:
            if self._entries.get(app_id) is process:
                del self._entries[app_id]
                return True
            return False

    def replace_if(self, app_id: str, old: RunningProcess, new: RunningProcess) -> bool:
        """Swap in new only while app_id still maps to old."""
        with self._lock:
            if self._entries.get(app_id) is old:
                self._entries[app_id] = new
                return True
            return False

    def get(self, app_id: str) -> Optional[RunningProcess]:
        with self._lock:
            return self._entries.get(app_id)

    def snapshot(self) -> List[Tuple[str, RunningProcess]]:
        with self._lock:
            return list(self._entries.items())

    def __contains__(self, app_id: object) -> bool:
        with self._lock:
            return app_id in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

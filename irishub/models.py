#===============================================================================
#  Iris_Application_Hub | models.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Shared data models used across the hub: application configs, command steps,
#  registry entries and termination results.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class CommandStep:
    """One command line plus the input lines typed into it once it starts."""
    command: str
    inputs: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"command": self.command}
        if self.inputs:
            d["inputs"] = list(self.inputs)
        return d

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "CommandStep":
        inputs = d.get("inputs") or []
        return CommandStep(command=str(d.get("command", "")), inputs=tuple(str(x) for x in inputs))


@dataclass(frozen=True)
class ApplicationConfig:
    """A named working directory plus an ordered command sequence."""
    id: str
    name: str
    icon: str = ""          # icon catalog key, e.g. "react", "python"
    working_dir: str = ""
    steps: Tuple[CommandStep, ...] = ()

    @property
    def has_commands(self) -> bool:
        return any(s.command.strip() for s in self.steps)

    def with_changes(self, **changes: Any) -> "ApplicationConfig":
        if "steps" in changes:
            changes["steps"] = tuple(changes["steps"])
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "icon": self.icon,
            "working_dir": self.working_dir,
            "steps": [s.to_dict() for s in self.steps],
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "ApplicationConfig":
        return ApplicationConfig(
            id=str(d.get("id", "")),
            name=str(d.get("name", "")),
            icon=str(d.get("icon", "")),
            working_dir=str(d.get("working_dir", "")),
            steps=tuple(CommandStep.from_dict(s) for s in d.get("steps") or []),
        )


@dataclass(frozen=True)
class RunningProcess:
    """Registry entry: the root of a launched terminal's process tree.

    While pid_file is set the entry is still loading: pid is the spawned
    terminal's and the script has not reported its own pid yet.
    """
    app_id: str
    pid: int
    started_at: float = field(default_factory=time.time)
    # OS start time of pid (psutil create_time); tells a reused pid apart
    create_time: Optional[float] = None
    pid_file: Optional[Path] = None
    settle_by: float = 0.0                  # time.monotonic() deadline for pid_file
    # Popen handle of the spawned child, kept so its exit can be reaped.
    handle: Optional[Any] = field(default=None, compare=False, repr=False)

    @property
    def loading(self) -> bool:
        return self.pid_file is not None

    def settled(self, pid: int, create_time: Optional[float]) -> "RunningProcess":
        return replace(self, pid=pid, create_time=create_time, pid_file=None, settle_by=0.0)

    def reap(self) -> None:
        if self.handle is not None:
            try:
                self.handle.poll()
            except OSError:
                pass


@dataclass(frozen=True)
class TerminationResult:
    terminated: int = 0
    survivors: List[int] = field(default_factory=list)

    @property
    def partial(self) -> bool:
        return bool(self.survivors)

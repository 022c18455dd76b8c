#===============================================================================
#  Iris_Application_Hub | launcher.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Opens a new OS terminal window running an application's command script and
#  records the root process in the registry. Windows gets its own console,
#  macOS goes through Terminal.app, Linux uses the first terminal emulator found.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import hashlib
import logging
import os
import re
import shlex
import shutil
import subprocess
import sys
import tempfile
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from .constants import PIDFILE_TIMEOUT_SECONDS, POSIX_TERMINALS, SCRIPT_PREFIX
from .errors import SpawnFailed
from .models import ApplicationConfig, RunningProcess
from .process_tree import process_create_time
from .registry import ProcessRegistry
from .sequencer import POSIX, WINDOWS, Program, build, window_title

logger = logging.getLogger(__name__)


def platform_name() -> str:
    if sys.platform.startswith("win"):
        return "windows"
    if sys.platform == "darwin":
        return "darwin"
    return "linux"


def detect_terminal(forced: str = "", env: Optional[Dict[str, str]] = None) -> str:
    """Pick a terminal emulator for Linux/BSD desktops ("" when none found)."""
    if forced:
        return forced
    env = os.environ if env is None else env
    from_env = (env.get("TERMINAL") or "").strip()
    if from_env and shutil.which(from_env):
        return from_env
    for candidate in POSIX_TERMINALS:
        if shutil.which(candidate):
            return candidate
    return ""


def posix_terminal_argv(term: str, title: str, script: Path) -> List[str]:
    run = ["/bin/sh", str(script)]
    joined = " ".join(shlex.quote(a) for a in run)
    name = Path(term).name
    if name == "gnome-terminal":
        return [term, "--title", title, "--"] + run
    if name == "konsole":
        return [term, "-p", f"tabtitle={title}", "-e"] + run
    if name == "xfce4-terminal":
        return [term, "--title", title, "--command", joined]
    if name == "lxterminal":
        return [term, "-t", title, "-e", joined]
    if name == "xterm":
        return [term, "-T", title, "-e"] + run
    return [term, "-e"] + run


def file_id(app_id: str) -> str:
    """File-name-safe id; the hash keeps ids like "a b" and "a_b" apart."""
    safe = re.sub(r"[^A-Za-z0-9_-]+", "_", app_id) or "app"
    digest = hashlib.sha1(app_id.encode("utf-8")).hexdigest()[:8]
    return f"{safe}_{digest}"


class TerminalLauncher:
    """Spawns terminals and registers their root process.

    spawner defaults to subprocess.Popen; it must return an object exposing
    .pid and .poll().
    """

    def __init__(
        self,
        registry: ProcessRegistry,
        terminal: str = "",
        spawner: Callable[..., Any] = subprocess.Popen,
        script_dir: Optional[Path] = None,
        pidfile_timeout: float = PIDFILE_TIMEOUT_SECONDS,
        os_name: Optional[str] = None,
        create_time_of: Callable[[int], Optional[float]] = process_create_time,
    ):
        self.registry = registry
        self.terminal = terminal
        self.script_dir = Path(script_dir) if script_dir else Path(tempfile.gettempdir())
        self.pidfile_timeout = pidfile_timeout
        self.os_name = os_name or platform_name()
        self._spawn = spawner
        self._create_time_of = create_time_of

    @property
    def dialect(self) -> str:
        return WINDOWS if self.os_name == "windows" else POSIX

    def script_path(self, app: ApplicationConfig, program: Program) -> Path:
        return self.script_dir / f"{SCRIPT_PREFIX}{file_id(app.id)}{program.suffix}"

    def launch(self, app: ApplicationConfig) -> RunningProcess:
        """Open a terminal for app, or return its entry if it already runs.

        Raises InvalidDirectory / NoCommands from the sequencer and SpawnFailed
        when the terminal cannot be started. The registry only changes on
        success. On POSIX the entry starts out loading; resolve_pending turns
        it into the script's own pid once the pid file shows up.
        """
        existing = self.registry.get(app.id)
        if existing is not None:
            logger.info("'%s' already running (pid %s); not spawning again", app.name, existing.pid)
            return existing

        stem = file_id(app.id)
        pid_file = self.script_dir / f"{SCRIPT_PREFIX}{stem}.pid" if self.dialect == POSIX else None
        program = build(
            app.working_dir,
            app.steps,
            title=app.name,
            dialect=self.dialect,
            script_id=stem,
            pid_file=pid_file,
        )
        script = self.script_path(app, program)
        self._write_script(script, program, pid_file)

        argv, kwargs = self.terminal_command(app, script)
        started_at = time.time()
        try:
            proc = self._spawn(argv, cwd=app.working_dir, **kwargs)
        except (OSError, ValueError) as e:
            logger.error("Failed to start terminal for '%s': %s", app.name, e)
            raise SpawnFailed(f"Could not start a terminal for '{app.name}': {e}") from e

        rc = proc.poll()
        if rc not in (None, 0):
            raise SpawnFailed(f"Terminal for '{app.name}' exited with code {rc}")

        entry = RunningProcess(
            app_id=app.id,
            pid=proc.pid,
            started_at=started_at,
            create_time=self._create_time_of(proc.pid),
            pid_file=pid_file,
            settle_by=time.monotonic() + max(0.0, self.pidfile_timeout),
            handle=proc,
        )
        self.registry.insert(app.id, entry)
        logger.info(
            "Launched '%s' (pid %s%s) via %s", app.name, proc.pid, ", loading" if entry.loading else "", argv[0]
        )
        return entry

    def _write_script(self, script: Path, program: Program, pid_file: Optional[Path]) -> None:
        try:
            self.script_dir.mkdir(parents=True, exist_ok=True)
            if pid_file is not None and pid_file.exists():
                pid_file.unlink()
            # batch files are read in the console's code page; keep CRLF as built
            script.write_text(program.text, encoding="utf-8", newline="")
            if program.dialect == POSIX:
                script.chmod(0o755)
        except OSError as e:
            raise SpawnFailed(f"Could not write launch script {script}: {e}") from e

    def terminal_command(self, app: ApplicationConfig, script: Path) -> Tuple[List[str], Dict[str, Any]]:
        title = window_title(app.name)

        if self.os_name == "windows":
            flags = getattr(subprocess, "CREATE_NEW_CONSOLE", 0) | getattr(subprocess, "CREATE_NEW_PROCESS_GROUP", 0)
            return ["cmd", "/c", str(script)], {"creationflags": flags}

        detached = {
            "start_new_session": True,
            "stdin": subprocess.DEVNULL,
            "stdout": subprocess.DEVNULL,
            "stderr": subprocess.DEVNULL,
        }

        if self.os_name == "darwin":
            inner = f"/bin/sh {shlex.quote(str(script))}"
            escaped = inner.replace("\\", "\\\\").replace('"', '\\"')
            apple_script = f'tell application "Terminal" to do script "{escaped}"'
            return ["osascript", "-e", apple_script], detached

        term = detect_terminal(self.terminal)
        if not term:
            raise SpawnFailed("No terminal emulator found. Install one or set IRIS_TERMINAL.")
        return posix_terminal_argv(term, title, script), detached

    def resolve(self, entry: RunningProcess, now: Optional[float] = None) -> RunningProcess:
        return resolve_pending(entry, now, self._create_time_of)


def resolve_pending(
    entry: RunningProcess,
    now: Optional[float] = None,
    create_time_of: Callable[[int], Optional[float]] = process_create_time,
) -> RunningProcess:
    """Settle a loading entry on the pid its script reported.

    Returns entry unchanged while it is still within its settle_by window.
    Past the deadline the spawned pid is kept. Terminal front-ends like
    gnome-terminal or osascript hand the work to another process and exit,
    so their pid says little about the app. Raises SpawnFailed when the
    terminal exited with an error before the script reported.
    """
    if not entry.loading:
        return entry

    pid = _read_pid_file(entry.pid_file)
    if pid is not None:
        return entry.settled(pid, create_time_of(pid))

    rc = entry.handle.poll() if entry.handle is not None else None
    if rc not in (None, 0):
        raise SpawnFailed(f"Terminal for '{entry.app_id}' exited with code {rc}")

    now = time.monotonic() if now is None else now
    if now < entry.settle_by:
        return entry

    logger.warning("No pid file for '%s'; tracking pid %s", entry.app_id, entry.pid)
    return entry.settled(entry.pid, entry.create_time)


def _read_pid_file(pid_file: Path) -> Optional[int]:
    try:
        text = pid_file.read_text(encoding="utf-8").strip()
    except OSError:
        return None
    return int(text) if text.isdigit() else None

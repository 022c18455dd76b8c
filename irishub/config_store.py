#===============================================================================
#  Iris_Application_Hub | config_store.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Load/save of the configured applications (config.json), plus import/export.
#  Imported applications are appended with fresh ids.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import json
import logging
import os
import re
import threading
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import ConfigError
from .models import ApplicationConfig, CommandStep

logger = logging.getLogger(__name__)

_ANSWER_RE = re.compile(r"^[0-9.]+$")
_last_id = 0
_id_lock = threading.Lock()


def new_app_id() -> str:
    """Time based id (nanoseconds since epoch), unique within the process."""
    global _last_id
    with _id_lock:
        candidate = time.time_ns()
        if candidate <= _last_id:
            candidate = _last_id + 1
        _last_id = candidate
        return str(candidate)


def looks_like_answer(line: str) -> bool:
    """A version number, menu choice or y/n/s reply typed into a prompt."""
    s = line.strip()
    return bool(_ANSWER_RE.match(s)) or s.lower() in ("y", "n", "s")


def steps_from_legacy(commands: List[str]) -> List[CommandStep]:
    """Convert an old flat command list into steps.

    Older configs stored answers for interactive batch scripts as the next
    "command", e.g. ["setPath.bat", "18.12.0", "mvn spring-boot:run"].
    """
    steps: List[CommandStep] = []
    i = 0
    while i < len(commands):
        cmd = str(commands[i])
        nxt = str(commands[i + 1]) if i + 1 < len(commands) else None
        if nxt is not None and cmd.strip().lower().endswith((".bat", ".cmd")) and looks_like_answer(nxt):
            steps.append(CommandStep(command=cmd, inputs=(nxt.strip(),)))
            i += 2
            continue
        steps.append(CommandStep(command=cmd))
        i += 1
    return steps


def _record_to_config(record: Dict[str, Any]) -> ApplicationConfig:
    if "steps" not in record and isinstance(record.get("commands"), list):
        record = dict(record)
        record["steps"] = [s.to_dict() for s in steps_from_legacy(record["commands"])]
    if "icon" not in record and "icon_emoji" in record:
        record = dict(record, icon=record["icon_emoji"])
    return ApplicationConfig.from_dict(record)


def parse_document(data: Any) -> List[ApplicationConfig]:
    if isinstance(data, dict):
        records = data.get("apps", [])
    elif isinstance(data, list):
        records = data
    else:
        raise ConfigError("Expected an object with an 'apps' list")
    if not isinstance(records, list):
        raise ConfigError("'apps' must be a list")
    return [_record_to_config(r) for r in records if isinstance(r, dict)]


def dump_document(apps: List[ApplicationConfig]) -> str:
    return json.dumps({"apps": [a.to_dict() for a in apps]}, indent=2, ensure_ascii=False)


class ConfigStore:
    """JSON-backed list of applications at a fixed per-user path."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()
        self._apps: List[ApplicationConfig] = self._read()

    def _read(self) -> List[ApplicationConfig]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return parse_document(data)
        except (OSError, ValueError, ConfigError) as e:
            logger.warning("Could not load %s (%s); starting with no applications", self.path, e)
            return []

    def _write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(dump_document(self._apps), encoding="utf-8")
        os.replace(tmp, self.path)

    # ----------------------------
    # CRUD
    # ----------------------------
    def load_all(self) -> List[ApplicationConfig]:
        with self._lock:
            return list(self._apps)

    def get(self, app_id: str) -> Optional[ApplicationConfig]:
        with self._lock:
            for app in self._apps:
                if app.id == app_id:
                    return app
            return None

    def save(self, config: ApplicationConfig) -> ApplicationConfig:
        """Insert or replace by id; new applications go to the end."""
        if not config.id:
            config = config.with_changes(id=new_app_id())
        with self._lock:
            for i, app in enumerate(self._apps):
                if app.id == config.id:
                    self._apps[i] = config
                    break
            else:
                self._apps.append(config)
            self._write()
        return config

    def delete(self, app_id: str) -> bool:
        with self._lock:
            kept = [a for a in self._apps if a.id != app_id]
            if len(kept) == len(self._apps):
                return False
            self._apps = kept
            self._write()
            return True

    def reorder(self, ordered_ids: List[str]) -> None:
        """Apply a full display order; ids not listed keep their relative order at the end."""
        with self._lock:
            by_id = {a.id: a for a in self._apps}
            ordered = [by_id.pop(i) for i in ordered_ids if i in by_id]
            self._apps = ordered + [a for a in self._apps if a.id in by_id]
            self._write()

    # ----------------------------
    # Import / export
    # ----------------------------
    def export_to(self, path: Path) -> None:
        Path(path).write_text(dump_document(self.load_all()), encoding="utf-8")

    def import_from(self, path: Path) -> List[ApplicationConfig]:
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigError(f"Could not read {path}: {e}") from e
        except ValueError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e

        imported = [a.with_changes(id=new_app_id()) for a in parse_document(data)]
        with self._lock:
            self._apps.extend(imported)
            self._write()
        logger.info("Imported %d application(s) from %s", len(imported), path)
        return imported

#===============================================================================
#  Iris_Application_Hub | sequencer.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Turns an application's ordered command steps into one script that a new
#  terminal window runs top to bottom. A failing step never stops the script;
#  everything stays visible in the one terminal.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from .constants import BATCH_CALL_PREFIXES, BATCH_CALL_SUFFIXES, SCRIPT_PREFIX, TITLE_PREFIX
from .errors import InvalidDirectory, NoCommands
from .models import CommandStep

WINDOWS = "windows"
POSIX = "posix"

_BATCH_SPECIALS = "^&|<>()"


@dataclass(frozen=True)
class Program:
    text: str
    dialect: str

    @property
    def suffix(self) -> str:
        return ".bat" if self.dialect == WINDOWS else ".sh"


def current_dialect() -> str:
    return WINDOWS if os.name == "nt" else POSIX


def window_title(app_name: str) -> str:
    return f"{TITLE_PREFIX} {app_name}".strip()


def build(
    working_dir: str,
    steps: Iterable[CommandStep],
    title: str = "",
    dialect: Optional[str] = None,
    script_id: str = "app",
    pid_file: Optional[Path] = None,
) -> Program:
    """Build the terminal program for a working directory and its steps.

    Raises InvalidDirectory when working_dir is missing and NoCommands when no
    step carries a command. Input lines of a step are fed to that step only.
    pid_file (POSIX only) is where the script records its own pid.
    """
    if not working_dir or not Path(working_dir).is_dir():
        raise InvalidDirectory(working_dir)

    runnable = [s for s in steps if s.command.strip()]
    if not runnable:
        raise NoCommands(title)

    dialect = dialect or current_dialect()
    if dialect == WINDOWS:
        text = _batch_script(working_dir, runnable, window_title(title), script_id)
    else:
        text = _shell_script(working_dir, runnable, window_title(title), pid_file)
    return Program(text=text, dialect=dialect)


# ----------------------------
# Windows batch
# ----------------------------
def _batch_escape(text: str) -> str:
    out = text.replace("%", "%%")
    for ch in _BATCH_SPECIALS:
        out = out.replace(ch, "^" + ch)
    return out


def needs_call(command: str) -> bool:
    lower = command.strip().lower()
    return lower.startswith(BATCH_CALL_PREFIXES) or lower.endswith(BATCH_CALL_SUFFIXES)


def _batch_script(working_dir: str, steps: List[CommandStep], title: str, script_id: str) -> str:
    title_line = f"title {_batch_escape(title)}"
    lines = ["@echo off", title_line, f'cd /d "{working_dir}"']

    for i, step in enumerate(steps, start=1):
        cmd = step.command.strip()
        if step.inputs:
            input_file = f'"%TEMP%\\{SCRIPT_PREFIX}input_{script_id}_{i}.txt"'
            lines.append("(")
            # "echo(" prints the text verbatim, including empty lines and "on"/"off"
            lines.extend(f"echo({_batch_escape(value)}" for value in step.inputs)
            lines.append(f") > {input_file}")
            lines.append(f"call {cmd} < {input_file}")
            lines.append(f"del {input_file} 2>nul")
        elif needs_call(cmd):
            lines.append(f"call {cmd}")
        else:
            lines.append(cmd)
        # commands like npm overwrite the console title
        lines.append(title_line)

    lines.append("cmd /k")
    return "\r\n".join(lines) + "\r\n"


# ----------------------------
# POSIX shell
# ----------------------------
def _heredoc_tag(index: int, inputs: Iterable[str]) -> str:
    tag = f"IRIS_INPUT_{index}"
    values = set(inputs)
    while tag in values:
        tag += "_"
    return tag


def _shell_script(working_dir: str, steps: List[CommandStep], title: str, pid_file: Optional[Path]) -> str:
    lines = ["#!/bin/sh"]
    if pid_file is not None:
        lines.append(f"echo $$ > {shlex.quote(str(pid_file))}")
    lines.append(f"printf '\\033]0;%s\\007' {shlex.quote(title)}")
    lines.append(f"cd {shlex.quote(working_dir)} || exit 1")

    for i, step in enumerate(steps, start=1):
        cmd = step.command.strip()
        if step.inputs:
            tag = _heredoc_tag(i, step.inputs)
            # the brace group hands the input to the whole command line
            lines.append("{")
            lines.append(cmd)
            lines.append(f"}} <<'{tag}'")
            lines.extend(step.inputs)
            lines.append(tag)
        else:
            lines.append(cmd)

    lines.append('exec "${SHELL:-/bin/sh}" -i')
    return "\n".join(lines) + "\n"

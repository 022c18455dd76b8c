#===============================================================================
#  Iris_Application_Hub | utils.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Display helpers shared by the UI and the text format of the step editor.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from typing import Iterable, List

from .models import CommandStep


def truncate_path(path: str, max_len: int) -> str:
    """Keep the tail of long paths: "...\\Projects\\MyApp"."""
    if len(path) <= max_len:
        return path
    if max_len <= 3:
        return path[-max_len:] if max_len > 0 else ""
    return "..." + path[len(path) - max_len + 3:]


# ----------------------------
# Steps <-> editor text
# ----------------------------
# One command per line; lines starting with "> " are typed into the command
# above them.
INPUT_MARK = ">"


def format_steps_text(steps: Iterable[CommandStep]) -> str:
    lines: List[str] = []
    for step in steps:
        lines.append(step.command)
        lines.extend(f"{INPUT_MARK} {value}" for value in step.inputs)
    return "\n".join(lines)


def parse_steps_text(text: str) -> List[CommandStep]:
    """Parse the editor text back into steps.

    Raises ValueError when an input line comes before any command.
    """
    commands: List[str] = []
    inputs: List[List[str]] = []
    for lineno, raw in enumerate((text or "").splitlines(), start=1):
        line = raw.rstrip()
        if not line.strip():
            continue
        stripped = line.lstrip()
        if stripped.startswith(INPUT_MARK):
            if not commands:
                raise ValueError(f"Line {lineno}: input line has no command above it")
            value = stripped[len(INPUT_MARK):]
            if value.startswith(" "):
                value = value[1:]
            inputs[-1].append(value)
            continue
        commands.append(stripped)
        inputs.append([])
    return [CommandStep(command=c, inputs=tuple(i)) for c, i in zip(commands, inputs)]

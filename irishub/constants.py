#===============================================================================
#  Iris_Application_Hub | constants.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Central place for names, defaults, theme colors and terminal conventions.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

APP_TITLE = "Iris Application Hub"
CONFIG_DIR_NAME = "iris"
CONFIG_FILE_NAME = "config.json"
LOG_DIR_NAME = "logs"
LOG_FILE_NAME = "iris.log"

# Terminal window titles are "[IRIS] <app name>"
TITLE_PREFIX = "[IRIS]"
SCRIPT_PREFIX = "iris_"

# --- Lifecycle defaults (overridable through Settings) ---
POLL_INTERVAL_MS = 1500
KILL_TIMEOUT_SECONDS = 3.0
PIDFILE_TIMEOUT_SECONDS = 3.0
CREATE_TIME_TOLERANCE = 0.05      # seconds; same pid + same start time = same process

# Commands that must be invoked with "call" inside a batch script so control
# returns to the script once they finish.
BATCH_CALL_PREFIXES = ("npm ", "yarn ", "pnpm ", "npx ", "dotnet ", "cargo ")
BATCH_CALL_SUFFIXES = (".bat", ".cmd")

# Probed in order when neither IRIS_TERMINAL nor $TERMINAL is set.
POSIX_TERMINALS = (
    "gnome-terminal",
    "konsole",
    "xfce4-terminal",
    "lxterminal",
    "x-terminal-emulator",
    "xterm",
)

# --- Metro style theme ---
HUB_BG = "#101010"
RUNNING_COLOR = "#107C10"   # green
STOPPED_COLOR = "#2D2D30"   # graphite
LOADING_COLOR = "#CA5010"   # orange
ACCENT_COLOR = "#0078D7"    # blue

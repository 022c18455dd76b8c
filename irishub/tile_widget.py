#===============================================================================
#  Iris_Application_Hub | tile_widget.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Metro style application tile (icon, name, working directory and a
#  stopped / starting / running badge; the background color carries the
#  status) and the reorderable grid that holds the tiles.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from PySide6.QtCore import Qt, QSize
from PySide6.QtGui import QFont, QIcon
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QListWidget, QVBoxLayout

from .constants import LOADING_COLOR, RUNNING_COLOR, STOPPED_COLOR

TILE_SIZE = QSize(260, 120)
GRID_SIZE = QSize(272, 132)
ICON_SIZE = QSize(32, 32)


@dataclass
class TileVisual:
    title: str
    subtitle: str = ""
    running: bool = False
    loading: bool = False
    icon: Optional[QIcon] = None

    @property
    def bg_color(self) -> str:
        if self.loading:
            return LOADING_COLOR
        return RUNNING_COLOR if self.running else STOPPED_COLOR

    @property
    def badge(self) -> str:
        if self.loading:
            return "◌ Starting…"
        return "● Running" if self.running else "○ Stopped"


class TileWidget(QFrame):
    """A flat tile used inside a TileList item."""

    def __init__(self, visual: TileVisual, size: QSize = TILE_SIZE, parent=None):
        super().__init__(parent)
        self.setObjectName("HubTile")
        self.setFixedSize(size)
        self.setStyleSheet(f"QFrame#HubTile {{ background: {visual.bg_color}; }}")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 10, 10, 10)
        layout.setSpacing(4)

        top = QHBoxLayout()
        icon_label = QLabel()
        icon_label.setFixedSize(ICON_SIZE)
        if visual.icon:
            icon_label.setPixmap(visual.icon.pixmap(ICON_SIZE))
        top.addWidget(icon_label)
        top.addStretch(1)

        badge = QLabel(visual.badge)
        badge_font = QFont("Segoe UI", 8)
        badge_font.setBold(True)
        badge.setFont(badge_font)
        dimmed = not (visual.running or visual.loading)
        badge.setStyleSheet("color: rgba(255,255,255,0.6);" if dimmed else "color: white;")
        top.addWidget(badge, 0, Qt.AlignTop)
        layout.addLayout(top)
        layout.addStretch(1)

        name = QLabel(visual.title)
        name_font = QFont("Segoe UI", 11)
        name_font.setBold(True)
        name.setFont(name_font)
        name.setStyleSheet("color: white;")
        name.setWordWrap(True)
        layout.addWidget(name)

        if visual.subtitle.strip():
            path = QLabel(visual.subtitle)
            path.setFont(QFont("Segoe UI", 9))
            path.setStyleSheet("color: rgba(255,255,255,0.85);")
            layout.addWidget(path)


class TileList(QListWidget):
    """Icon-mode grid of tiles; drag & drop reorders in place."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setViewMode(QListWidget.IconMode)
        self.setResizeMode(QListWidget.Adjust)
        self.setMovement(QListWidget.Snap)
        self.setGridSize(GRID_SIZE)
        self.setUniformItemSizes(True)
        self.setSpacing(6)
        self.setDragDropMode(QListWidget.InternalMove)
        self.setSelectionMode(QListWidget.SingleSelection)

    def keys_in_order(self) -> List[str]:
        """App ids in on-screen order."""
        return [self.item(i).data(Qt.UserRole) for i in range(self.count())]

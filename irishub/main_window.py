#===============================================================================
#  Iris_Application_Hub | main_window.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Main Metro style window of the hub:
#    - One tile per application, green while its terminal is running
#    - Drag & drop ordering (persisted to config.json)
#    - Search by name or working directory
#    - Double-click runs / stops; right-click: Run, Stop, Restart, Edit, Delete
#    - Add, Import, Export, Stop all
#    - A timer settles starting applications and prunes those whose terminal
#      exited on its own
#===============================================================================

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QAction, QIcon
from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidgetItem,
    QMainWindow,
    QMenu,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from .app_dialog import AppDialog
from .config_store import ConfigStore
from .constants import ACCENT_COLOR, APP_TITLE, HUB_BG
from .errors import ConfigError, IrisError
from .icons import IconCatalog
from .manager import ProcessManager
from .models import ApplicationConfig
from .settings import Settings
from .tile_widget import TILE_SIZE, TileList, TileVisual, TileWidget
from .utils import truncate_path

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, settings: Settings, store: ConfigStore, manager: ProcessManager, icons: IconCatalog):
        super().__init__()
        self.setWindowTitle(APP_TITLE)
        self.resize(900, 600)

        self.settings = settings
        self.store = store
        self.manager = manager
        self.icons = icons
        self.apps_by_id: Dict[str, ApplicationConfig] = {}

        self.setStyleSheet(f"""
        QMainWindow {{ background: {HUB_BG}; }}
        QLabel {{ color: white; font-family: "Segoe UI"; }}
        QLineEdit {{ background: #1a1a1a; color: white; border: 1px solid #2a2a2a; padding: 5px; }}
        QToolButton, QPushButton {{
            font-family: "Segoe UI";
            color: white;
            background: #1a1a1a;
            border: 1px solid #2a2a2a;
            padding: 6px 10px;
        }}
        QToolButton:hover, QPushButton:hover {{ background: #222; }}
        QToolButton:pressed, QPushButton:pressed {{ background: #2a2a2a; }}
        QPushButton#AddButton {{ background: {ACCENT_COLOR}; border: none; }}
        """)

        root = QWidget()
        self.setCentralWidget(root)
        layout = QVBoxLayout(root)
        layout.setContentsMargins(14, 14, 14, 14)
        layout.setSpacing(10)

        header = QHBoxLayout()
        header.addWidget(QLabel(f"<b>{APP_TITLE}</b>"))
        header.addStretch(1)

        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Search by name or folder…")
        self.search_edit.setClearButtonEnabled(True)
        self.search_edit.textChanged.connect(lambda *_: self.rebuild_tiles())
        header.addWidget(self.search_edit)

        self.btn_add = QPushButton("Add")
        self.btn_add.setObjectName("AddButton")
        self.btn_add.clicked.connect(self.add_app)
        header.addWidget(self.btn_add)

        self.btn_import = QPushButton("Import")
        self.btn_import.clicked.connect(self.import_config)
        header.addWidget(self.btn_import)

        self.btn_export = QPushButton("Export")
        self.btn_export.clicked.connect(self.export_config)
        header.addWidget(self.btn_export)

        self.btn_stop_all = QPushButton("Stop all")
        self.btn_stop_all.clicked.connect(self.stop_all)
        header.addWidget(self.btn_stop_all)

        layout.addLayout(header)

        self.tiles = TileList()
        self.tiles.itemDoubleClicked.connect(self.toggle_item)
        self.tiles.setContextMenuPolicy(Qt.CustomContextMenu)
        self.tiles.customContextMenuRequested.connect(self.open_context_menu)
        self.tiles.model().rowsMoved.connect(lambda *_: self.persist_order_from_ui())
        layout.addWidget(self.tiles, 1)

        self.empty_label = QLabel("No applications yet. Click <b>Add</b> to create one.")
        self.empty_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.empty_label)

        self.footer = QLabel("")
        self.footer.setStyleSheet("color: rgba(255,255,255,0.6);")
        layout.addWidget(self.footer)

        self.poll_timer = QTimer(self)
        self.poll_timer.setInterval(settings.poll_interval_ms)
        self.poll_timer.timeout.connect(self.poll_status)
        self.poll_timer.start()

        self.refresh()

    # ----------------------------
    # Refresh / rebuild
    # ----------------------------
    def poll_status(self):
        changed = self.manager.poll()
        if changed:
            self.rebuild_tiles()

    def refresh(self):
        apps = self.store.load_all()
        self.apps_by_id = {a.id: a for a in apps}
        self.rebuild_tiles()

    def _matches_search(self, app: ApplicationConfig) -> bool:
        needle = self.search_edit.text().strip().lower()
        if not needle:
            return True
        return needle in app.name.lower() or needle in app.working_dir.lower()

    def _icon_for(self, app: ApplicationConfig) -> Optional[QIcon]:
        path = self.icons.path_for(app.icon)
        return QIcon(str(path)) if path else None

    def rebuild_tiles(self):
        self.tiles.clear()
        running = self.manager.list_running()
        loading = {app_id for app_id, p in self.manager.snapshot() if p.loading}
        shown = 0

        for app in self.store.load_all():
            if not self._matches_search(app):
                continue
            steps = len(app.steps)
            subtitle = truncate_path(app.working_dir, 36) if app.working_dir else "No working directory"
            subtitle += f"  •  {steps} command{'s' if steps != 1 else ''}"

            item = QListWidgetItem()
            item.setData(Qt.UserRole, app.id)
            item.setSizeHint(TILE_SIZE)
            self.tiles.addItem(item)
            tile = TileWidget(
                TileVisual(
                    title=app.name,
                    subtitle=subtitle,
                    running=app.id in running,
                    loading=app.id in loading,
                    icon=self._icon_for(app),
                )
            )
            self.tiles.setItemWidget(item, tile)
            shown += 1

        # reordering a filtered view would drop the hidden tiles from the order
        self.tiles.setDragEnabled(not self.search_edit.text().strip())

        total = len(self.apps_by_id)
        self.empty_label.setVisible(total == 0)
        starting = f"  •  {len(loading)} starting" if loading else ""
        self.footer.setText(f"{len(running)} running / {total} apps" + starting + (f"  •  {shown} shown" if shown != total else ""))

    def persist_order_from_ui(self):
        self.store.reorder(self.tiles.keys_in_order())

    # ----------------------------
    # Lifecycle actions
    # ----------------------------
    def _guard(self, title: str, action: Callable[[], object]) -> None:
        try:
            action()
        except IrisError as e:
            QMessageBox.critical(self, title, str(e))
        except Exception as e:
            logger.exception("%s: unexpected error", title)
            QMessageBox.critical(self, title, f"Unexpected error: {e}")
        self.rebuild_tiles()

    def run_app(self, app_id: str):
        self._guard("Run failed", lambda: self.manager.run(app_id))

    def stop_app(self, app_id: str):
        def _stop():
            result = self.manager.stop(app_id)
            if result.partial:
                QMessageBox.warning(
                    self,
                    "Stopped with leftovers",
                    "Some processes did not exit:\n" + ", ".join(str(p) for p in result.survivors),
                )

        self._guard("Stop failed", _stop)

    def restart_app(self, app_id: str):
        self._guard("Restart failed", lambda: self.manager.restart(app_id))

    def stop_all(self):
        self._guard("Stop all failed", self.manager.stop_all)

    def toggle_item(self, item: QListWidgetItem):
        app_id = item.data(Qt.UserRole)
        if self.manager.is_running(app_id):
            self.stop_app(app_id)
        else:
            self.run_app(app_id)

    # ----------------------------
    # Config actions
    # ----------------------------
    def add_app(self):
        dlg = AppDialog(self.icons, parent=self)
        if dlg.exec() and dlg.result_config():
            self.store.save(dlg.result_config())
            self.refresh()

    def edit_app(self, app_id: str):
        app = self.store.get(app_id)
        if not app:
            return
        dlg = AppDialog(self.icons, app=app, parent=self)
        if dlg.exec() and dlg.result_config():
            self.store.save(dlg.result_config())
            if self.manager.is_running(app_id):
                QMessageBox.information(self, "Saved", "Changes apply the next time the application starts.")
            self.refresh()

    def delete_app(self, app_id: str):
        app = self.store.get(app_id)
        if not app:
            return
        res = QMessageBox.question(
            self,
            "Delete application",
            f"Delete '{app.name}'?" + ("\n\nIt is running and will be stopped first." if self.manager.is_running(app_id) else ""),
            QMessageBox.Yes | QMessageBox.No,
        )
        if res != QMessageBox.Yes:
            return
        if self.manager.is_running(app_id):
            self.stop_app(app_id)
        self.store.delete(app_id)
        self.refresh()

    def export_config(self):
        path, _ = QFileDialog.getSaveFileName(self, "Export applications", str(Path.home() / "iris-apps.json"), "JSON (*.json)")
        if not path:
            return
        try:
            self.store.export_to(Path(path))
        except OSError as e:
            QMessageBox.critical(self, "Export failed", str(e))

    def import_config(self):
        path, _ = QFileDialog.getOpenFileName(self, "Import applications", str(Path.home()), "JSON (*.json)")
        if not path:
            return
        try:
            imported = self.store.import_from(Path(path))
        except ConfigError as e:
            QMessageBox.critical(self, "Import failed", str(e))
            return
        QMessageBox.information(self, "Import", f"Imported {len(imported)} application(s).")
        self.refresh()

    # ----------------------------
    # Context menu
    # ----------------------------
    def open_context_menu(self, pos):
        item = self.tiles.itemAt(pos)
        if not item:
            return
        app_id = item.data(Qt.UserRole)
        running = self.manager.is_running(app_id)

        menu = QMenu(self)
        act_run = QAction("Run", self)
        act_stop = QAction("Stop", self)
        act_restart = QAction("Restart", self)
        act_edit = QAction("Edit…", self)
        act_delete = QAction("Delete…", self)

        act_run.setEnabled(not running)
        act_stop.setEnabled(running)
        act_restart.setEnabled(running)

        actions: List[QAction] = [act_run, act_stop, act_restart]
        for act in actions:
            menu.addAction(act)
        menu.addSeparator()
        menu.addAction(act_edit)
        menu.addSeparator()
        menu.addAction(act_delete)

        chosen = menu.exec(self.tiles.mapToGlobal(pos))
        if not chosen:
            return

        if chosen == act_run:
            self.run_app(app_id)
        elif chosen == act_stop:
            self.stop_app(app_id)
        elif chosen == act_restart:
            self.restart_app(app_id)
        elif chosen == act_edit:
            self.edit_app(app_id)
        elif chosen == act_delete:
            self.delete_app(app_id)

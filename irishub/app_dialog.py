#===============================================================================
#  Iris_Application_Hub | app_dialog.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Add / edit form for an application: name, icon, working directory and the
#  command steps (one command per line, "> " lines are typed into the command
#  above them).
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from pathlib import Path
from typing import Optional

from PySide6.QtGui import QFont, QIcon
from PySide6.QtWidgets import (
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QFileDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from .icons import IconCatalog
from .models import ApplicationConfig
from .utils import format_steps_text, parse_steps_text

STEPS_HINT = (
    "One command per line. Lines starting with \"> \" are typed into the command above, e.g.\n"
    "setPath.bat\n"
    "> 18.12.0\n"
    "mvn spring-boot:run"
)


class AppDialog(QDialog):
    def __init__(self, icons: IconCatalog, app: Optional[ApplicationConfig] = None, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Edit application" if app else "New application")
        self.setMinimumWidth(560)
        self._original = app
        self._result: Optional[ApplicationConfig] = None

        self.name_edit = QLineEdit(app.name if app else "")

        self.icon_combo = QComboBox()
        self.icon_combo.setEditable(True)
        self.icon_combo.addItem("")
        for name in icons.names():
            path = icons.path_for(name)
            self.icon_combo.addItem(QIcon(str(path)) if path else QIcon(), name)
        self.icon_combo.setCurrentText(app.icon if app else "")

        self.dir_edit = QLineEdit(app.working_dir if app else "")
        browse = QPushButton("Browse…")
        browse.clicked.connect(self.browse_dir)
        dir_row = QHBoxLayout()
        dir_row.setContentsMargins(0, 0, 0, 0)
        dir_row.addWidget(self.dir_edit, 1)
        dir_row.addWidget(browse)
        dir_widget = QWidget()
        dir_widget.setLayout(dir_row)

        self.steps_edit = QPlainTextEdit(format_steps_text(app.steps) if app else "")
        self.steps_edit.setFont(QFont("Consolas", 10))
        self.steps_edit.setPlaceholderText(STEPS_HINT)

        form = QFormLayout()
        form.addRow("Name", self.name_edit)
        form.addRow("Icon", self.icon_combo)
        form.addRow("Working directory", dir_widget)
        form.addRow("Commands", self.steps_edit)

        hint = QLabel(STEPS_HINT.split("\n")[0])
        hint.setWordWrap(True)

        buttons = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)

        layout = QVBoxLayout(self)
        layout.addLayout(form)
        layout.addWidget(hint)
        layout.addWidget(buttons)

    def browse_dir(self):
        start = self.dir_edit.text().strip() or str(Path.home())
        folder = QFileDialog.getExistingDirectory(self, "Working directory", start)
        if folder:
            self.dir_edit.setText(folder)

    def accept(self):
        name = self.name_edit.text().strip()
        if not name:
            QMessageBox.warning(self, "Missing name", "Give the application a name.")
            return

        try:
            steps = parse_steps_text(self.steps_edit.toPlainText())
        except ValueError as e:
            QMessageBox.warning(self, "Invalid commands", str(e))
            return

        working_dir = self.dir_edit.text().strip()
        if working_dir and not Path(working_dir).is_dir():
            res = QMessageBox.question(
                self,
                "Directory not found",
                f"'{working_dir}' does not exist yet.\n\nSave anyway?",
                QMessageBox.Yes | QMessageBox.No,
            )
            if res != QMessageBox.Yes:
                return

        values = dict(
            name=name,
            icon=self.icon_combo.currentText().strip(),
            working_dir=working_dir,
            steps=steps,
        )
        if self._original:
            self._result = self._original.with_changes(**values)
        else:
            self._result = ApplicationConfig(id="", **{**values, "steps": tuple(steps)})
        super().accept()

    def result_config(self) -> Optional[ApplicationConfig]:
        return self._result

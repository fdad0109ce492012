"""Desktop window for previewing and applying asset renames."""
from __future__ import annotations

import html
import logging
import os
import sys
from typing import List, Optional

from PyQt6.QtCore import Qt, QTimer, QUrl
from PyQt6.QtGui import QBrush, QColor, QDesktopServices, QDragEnterEvent, QDropEvent
from PyQt6.QtWidgets import (
    QApplication,
    QButtonGroup,
    QCheckBox,
    QComboBox,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMenuBar,
    QMessageBox,
    QPushButton,
    QRadioButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from . import __version__
from .constants import (
    ASSET_TYPE_PREFIX_LABELS,
    ASSET_TYPE_PREFIXES,
    DESCRIPTOR_OPTIONS,
    OUTPUT_MODE_CUSTOM,
    OUTPUT_MODE_ORIGINAL,
    STYLE_GUIDE_URL,
    VARIANT_OPTIONS,
)
from .errors import DirectoryUnreadable, RenamerError, ValidationError
from .log import CallbackLogHandler, setup_logging
from .naming import NameChangeTracker
from .preview import OutputConfig, PreviewRow
from .session import RenameSession
from .settings import Settings, load_settings, save_settings

logger = logging.getLogger(__name__)

HIGHLIGHT_COLOR = "#FF0660"
TEXT_COLOR = "#1F1F1F"
CONFLICT_COLOR = "#E13328"
RENAME_COLOR = "#389E0D"
UNCHANGED_COLOR = "#8C8C8C"
HIGHLIGHT_MS = 500


class QtFolderPicker:
    """Folder chooser backed by the native dialog; cancelling returns ``None``."""

    def __init__(self, parent: QWidget | None = None, title: str = "Select folder"):
        self._parent = parent
        self._title = title

    def select(self, start: str = "") -> Optional[str]:
        directory = QFileDialog.getExistingDirectory(self._parent, self._title, start or os.getcwd())
        return directory or None


def render_name_html(name: str, highlighted: set, conflict: bool) -> str:
    spans = []
    for i, ch in enumerate(name):
        color = HIGHLIGHT_COLOR if i in highlighted else TEXT_COLOR
        spans.append(f'<span style="color:{color}">{html.escape(ch)}</span>')
    if conflict:
        spans.append(f'<span style="color:{CONFLICT_COLOR}">&nbsp;&nbsp;(prefix conflict)</span>')
    return "".join(spans)


class RenamerWindow(QWidget):
    """Main window: folder, output location, naming rule and the preview table."""

    COL_SELECT = 0
    COL_ORIGINAL = 1
    COL_DESCRIPTOR = 2
    COL_NEW_NAME = 3
    COL_STATUS = 4

    def __init__(self, session: Optional[RenameSession] = None, settings: Optional[Settings] = None,
                 settings_path: Optional[str] = None):
        super().__init__()
        self.setWindowTitle("Asset Renamer")
        self.resize(770, 840)
        self.setAcceptDrops(True)

        self.settings_path = settings_path
        self.settings = settings or load_settings(settings_path)
        self.session = session or RenameSession(
            output=OutputConfig(self.settings.output_mode, self.settings.output_path)
        )
        self.folder_picker = QtFolderPicker(self, "Select folder")
        self.output_picker = QtFolderPicker(self, "Select output folder")
        self._name_changes = NameChangeTracker()

        outer = QVBoxLayout(self)
        outer.setMenuBar(self._build_menu())

        # ----- input folder
        path_row = QHBoxLayout()
        outer.addLayout(path_row)
        self.path_edit = QLineEdit(self)
        self.path_edit.setPlaceholderText("Drop a folder here or click Browse")
        self.path_edit.returnPressed.connect(self.handle_manual_path)
        self.browse_button = QPushButton("Browse…", self)
        self.browse_button.clicked.connect(self.choose_directory)
        path_row.addWidget(QLabel("Input folder:", self))
        path_row.addWidget(self.path_edit, 1)
        path_row.addWidget(self.browse_button)

        # ----- output location
        output_row = QHBoxLayout()
        outer.addLayout(output_row)
        self.original_radio = QRadioButton("Original folder", self)
        self.custom_radio = QRadioButton("Other folder", self)
        self.output_group = QButtonGroup(self)
        self.output_group.addButton(self.original_radio)
        self.output_group.addButton(self.custom_radio)
        self.output_edit = QLineEdit(self)
        self.output_edit.setReadOnly(True)
        self.output_edit.setPlaceholderText("Choose an output folder")
        self.output_button = QPushButton("Choose…", self)
        self.output_button.clicked.connect(self.choose_output_directory)
        output_row.addWidget(QLabel("Output:", self))
        output_row.addWidget(self.original_radio)
        output_row.addWidget(self.custom_radio)
        output_row.addWidget(self.output_edit, 1)
        output_row.addWidget(self.output_button)

        # ----- naming rule
        outer.addWidget(QLabel("Rename rule: Prefix_Name_Descriptor_Variant", self))
        rule_row = QHBoxLayout()
        outer.addLayout(rule_row)
        self.prefix_combo = QComboBox(self)
        for prefix in ASSET_TYPE_PREFIXES:
            self.prefix_combo.addItem(f"{prefix} - {ASSET_TYPE_PREFIX_LABELS.get(prefix, prefix)}", prefix)
        self.name_edit = QLineEdit(self)
        self.name_edit.setPlaceholderText("e.g. Soldier or Soldier_Helmet")
        self.rule_descriptor_edit = QLineEdit(self)
        self.rule_descriptor_edit.setPlaceholderText("Pick descriptors in the preview")
        self.rule_descriptor_edit.setEnabled(False)
        self.variant_combo = QComboBox(self)
        self.variant_combo.setEditable(True)
        self.variant_combo.addItems(VARIANT_OPTIONS)
        for caption, widget in (("Prefix", self.prefix_combo), ("Name", self.name_edit),
                                ("Descriptor", self.rule_descriptor_edit), ("Variant", self.variant_combo)):
            column = QVBoxLayout()
            column.addWidget(QLabel(caption, self))
            column.addWidget(widget)
            rule_row.addLayout(column, 1)

        # ----- actions
        action_row = QHBoxLayout()
        outer.addLayout(action_row)
        self.refresh_button = QPushButton("Refresh file list", self)
        self.refresh_button.clicked.connect(self.refresh_files)
        self.execute_button = QPushButton("Rename", self)
        self.execute_button.clicked.connect(self.execute_renames)
        action_row.addWidget(self.refresh_button)
        action_row.addWidget(self.execute_button)
        action_row.addStretch(1)

        # ----- preview
        toggle_row = QHBoxLayout()
        outer.addLayout(toggle_row)
        self.select_all_box = QCheckBox("Select all", self)
        self.select_all_box.clicked.connect(self.handle_select_all)
        self.count_label = QLabel(self)
        self.manual_box = QCheckBox("Manual descriptors", self)
        self.manual_box.toggled.connect(self.handle_manual_toggle)
        self.force_prefix_box = QCheckBox("Force prefix from file type", self)
        self.force_prefix_box.toggled.connect(self.handle_force_prefix_toggle)
        toggle_row.addWidget(self.select_all_box)
        toggle_row.addWidget(self.count_label, 1)
        toggle_row.addWidget(self.manual_box)
        toggle_row.addWidget(self.force_prefix_box)

        self.table = QTableWidget(0, 5, self)
        self.table.setHorizontalHeaderLabels(["", "Original name", "Descriptor", "New name", "Status"])
        self.table.verticalHeader().setVisible(False)
        self.table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.table.setColumnWidth(self.COL_SELECT, 36)
        self.table.setColumnWidth(self.COL_NEW_NAME, 280)
        self.table.setColumnWidth(self.COL_STATUS, 90)
        self.load_column_widths()
        outer.addWidget(self.table, 1)

        self.status_label = QLabel(self)
        self.status_label.setStyleSheet("color:#555;font-size:11px;")
        outer.addWidget(self.status_label)
        self._log_handler = CallbackLogHandler(self.status_label.setText)
        self._log_handler.setLevel(logging.WARNING)
        self._log_handler.setFormatter(logging.Formatter("%(message)s"))
        logging.getLogger("asset_renamer").addHandler(self._log_handler)

        self._sync_controls_from_session()
        self._connect_rule_signals()
        if self.settings.last_folder and os.path.isdir(self.settings.last_folder):
            self.path_edit.setText(self.settings.last_folder)

    def _build_menu(self) -> QMenuBar:
        menu_bar = QMenuBar(self)
        help_menu = menu_bar.addMenu("Help")
        guide = help_menu.addAction("UE5 style guide")
        guide.triggered.connect(lambda: QDesktopServices.openUrl(QUrl(STYLE_GUIDE_URL)))
        help_menu.addSeparator()
        about = help_menu.addAction("About Asset Renamer")
        about.triggered.connect(self.show_about)
        return menu_bar

    def _sync_controls_from_session(self) -> None:
        rule = self.session.rule
        self.prefix_combo.setCurrentIndex(max(0, self.prefix_combo.findData(rule.asset_type_prefix)))
        self.name_edit.setText(rule.asset_name)
        self.variant_combo.setEditText(rule.variant)
        self.manual_box.setChecked(self.session.toggles.use_manual_descriptor)
        self.force_prefix_box.setChecked(self.session.toggles.force_auto_prefix)
        output = self.session.output
        (self.custom_radio if output.is_custom else self.original_radio).setChecked(True)
        self.output_edit.setText(output.path)
        self._update_output_visibility()
        self._update_actions()

    def _connect_rule_signals(self) -> None:
        self.prefix_combo.currentIndexChanged.connect(self.handle_rule_changed)
        self.name_edit.textChanged.connect(self.handle_rule_changed)
        self.variant_combo.editTextChanged.connect(self.handle_rule_changed)
        self.output_group.buttonToggled.connect(self.handle_output_mode_changed)

    def show_about(self) -> None:
        QMessageBox.information(
            self, "About Asset Renamer",
            f"Asset Renamer {__version__}\nRenames files before import into Unreal Engine.",
        )

    # ----- directory handling -------------------------------------------------
    def handle_manual_path(self) -> None:
        text = self.path_edit.text().strip()
        if text:
            self.load_directory(text)

    def choose_directory(self) -> None:
        directory = self.folder_picker.select(self.session.folder_path or "")
        if directory:
            self.path_edit.setText(directory)
            self.load_directory(directory)

    def choose_output_directory(self) -> None:
        directory = self.output_picker.select(self.session.output.path)
        if directory:
            self.output_edit.setText(directory)
            self._apply_rows(self.session.set_output(path=directory))

    def load_directory(self, directory: str, reset: bool = True) -> None:
        self._set_busy(True)
        try:
            self.session.load_folder(directory, reset_selection=reset, reset_descriptors=reset)
        except DirectoryUnreadable as exc:
            logger.warning("Load failed: %s", exc)
            QMessageBox.warning(self, "Invalid directory", str(exc))
            return
        except RenamerError as exc:
            QMessageBox.warning(self, "Busy", str(exc))
            return
        finally:
            self._set_busy(False)
        if reset:
            self._name_changes.clear()
        self.settings.last_folder = directory
        self._apply_rows(self.session.rows)

    def refresh_files(self) -> None:
        if self.session.folder_path:
            self.load_directory(self.session.folder_path, reset=False)

    # ----- drag and drop ------------------------------------------------------
    def dragEnterEvent(self, event: QDragEnterEvent) -> None:
        if event.mimeData().hasUrls():
            event.acceptProposedAction()

    def dropEvent(self, event: QDropEvent) -> None:
        for url in event.mimeData().urls():
            local = url.toLocalFile()
            if local and os.path.isdir(local):
                self.path_edit.setText(local)
                self.load_directory(local)
                event.acceptProposedAction()
                return

    # ----- global rule and toggles -------------------------------------------
    def handle_rule_changed(self, *_args) -> None:
        self._apply_rows(self.session.set_rule(
            asset_type_prefix=self.prefix_combo.currentData(),
            asset_name=self.name_edit.text(),
            variant=self.variant_combo.currentText(),
        ))

    def handle_manual_toggle(self, checked: bool) -> None:
        self._apply_rows(self.session.set_toggles(use_manual_descriptor=checked))

    def handle_force_prefix_toggle(self, checked: bool) -> None:
        self._apply_rows(self.session.set_toggles(force_auto_prefix=checked))

    def handle_output_mode_changed(self, _button, checked: bool) -> None:
        if not checked:
            return
        mode = OUTPUT_MODE_CUSTOM if self.custom_radio.isChecked() else OUTPUT_MODE_ORIGINAL
        self._update_output_visibility()
        self._apply_rows(self.session.set_output(mode=mode))

    def _update_output_visibility(self) -> None:
        custom = self.custom_radio.isChecked()
        self.output_edit.setVisible(custom)
        self.output_button.setVisible(custom)

    # ----- per-row edits ------------------------------------------------------
    def handle_select_all(self, checked: bool) -> None:
        rows = self.session.set_all_selected(checked)
        for index, row in enumerate(rows):
            box = self._cell_checkbox(index)
            if box is not None:
                box.blockSignals(True)
                box.setChecked(row.selected)
                box.blockSignals(False)
        self._update_counts()

    def handle_select_item(self, path: str, checked: bool) -> None:
        self.session.set_selected(path, checked)
        self._update_counts()

    def handle_descriptor_changed(self, path: str, combo: QComboBox) -> None:
        self._refresh_row(path, self.session.set_descriptor(path, combo.currentData()))

    def handle_manual_descriptor_changed(self, path: str, text: str) -> None:
        self._refresh_row(path, self.session.set_manual_descriptor(path, text))

    # ----- rename -------------------------------------------------------------
    def execute_renames(self) -> None:
        self._set_busy(True)
        try:
            result = self.session.execute()
        except ValidationError as exc:
            QMessageBox.warning(self, "Nothing renamed", str(exc))
            return
        except RenamerError as exc:
            QMessageBox.critical(self, "Rename failed", str(exc))
            return
        finally:
            self._set_busy(False)

        self._apply_rows(self.session.rows)
        if result.ok:
            QMessageBox.information(self, "Done", result.summary())
        else:
            details = "\n".join(f.error or f.old_path for f in result.failures)
            QMessageBox.warning(self, "Some renames failed", f"{result.summary()}\n\n{details}")

    # ----- table rendering ----------------------------------------------------
    def _apply_rows(self, rows: List[PreviewRow]) -> None:
        """Rebuild the whole table from freshly generated rows."""
        self.table.setRowCount(0)
        manual = self.session.toggles.use_manual_descriptor
        for index, row in enumerate(rows):
            self.table.insertRow(index)
            self._fill_row(index, row, manual)
        self._update_counts()

    def _fill_row(self, index: int, row: PreviewRow, manual: bool) -> None:
        path = row.original_path

        box = QCheckBox(self)
        box.setChecked(row.selected)
        box.toggled.connect(lambda checked, p=path: self.handle_select_item(p, checked))
        holder = QWidget(self)
        holder_layout = QHBoxLayout(holder)
        holder_layout.setContentsMargins(0, 0, 0, 0)
        holder_layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
        holder_layout.addWidget(box)
        self.table.setCellWidget(index, self.COL_SELECT, holder)

        original_item = QTableWidgetItem(row.original_name)
        original_item.setToolTip(path)
        self.table.setItem(index, self.COL_ORIGINAL, original_item)

        if manual:
            edit = QLineEdit(row.manual_descriptor, self)
            edit.setPlaceholderText("Descriptor")
            edit.textEdited.connect(lambda text, p=path: self.handle_manual_descriptor_changed(p, text))
            self.table.setCellWidget(index, self.COL_DESCRIPTOR, edit)
        else:
            combo = QComboBox(self)
            for value, label in DESCRIPTOR_OPTIONS:
                combo.addItem(label, value)
            found = combo.findData(row.descriptor)
            if found < 0:
                combo.addItem(row.descriptor, row.descriptor)
                found = combo.count() - 1
            combo.setCurrentIndex(found)
            combo.currentIndexChanged.connect(lambda _i, p=path, c=combo: self.handle_descriptor_changed(p, c))
            self.table.setCellWidget(index, self.COL_DESCRIPTOR, combo)

        self._fill_name_cells(index, row)

    def _fill_name_cells(self, index: int, row: PreviewRow) -> None:
        highlighted = self._name_changes.update(row.original_path, row.new_name)

        label = QLabel(render_name_html(row.new_name, highlighted, row.has_prefix_conflict), self)
        label.setTextFormat(Qt.TextFormat.RichText)
        label.setToolTip(row.new_path)
        self.table.setCellWidget(index, self.COL_NEW_NAME, label)
        if highlighted:
            plain = render_name_html(row.new_name, set(), row.has_prefix_conflict)
            QTimer.singleShot(HIGHLIGHT_MS, lambda lbl=label, text=plain: _reset_label(lbl, text))

        status = QTableWidgetItem("will rename" if row.will_rename else "unchanged")
        status.setForeground(QBrush(QColor(RENAME_COLOR if row.will_rename else UNCHANGED_COLOR)))
        self.table.setItem(index, self.COL_STATUS, status)

    def _refresh_row(self, path: str, rows: List[PreviewRow]) -> None:
        for index, row in enumerate(rows):
            if row.original_path == path:
                self._fill_name_cells(index, row)
                break

    def _cell_checkbox(self, index: int) -> Optional[QCheckBox]:
        holder = self.table.cellWidget(index, self.COL_SELECT)
        return holder.findChild(QCheckBox) if holder is not None else None

    def _update_counts(self) -> None:
        total = len(self.session.rows)
        selected = self.session.selected_count
        self.count_label.setText(f"Preview ({total} files, {selected} selected)")
        self.select_all_box.blockSignals(True)
        if total and selected == total:
            self.select_all_box.setCheckState(Qt.CheckState.Checked)
        elif selected:
            self.select_all_box.setCheckState(Qt.CheckState.PartiallyChecked)
        else:
            self.select_all_box.setCheckState(Qt.CheckState.Unchecked)
        self.select_all_box.blockSignals(False)
        self._update_actions()

    def _update_actions(self) -> None:
        self.execute_button.setEnabled(self.session.can_execute)
        self.refresh_button.setEnabled(bool(self.session.folder_path) and not self.session.busy)

    def _set_busy(self, busy: bool) -> None:
        if busy:
            QApplication.setOverrideCursor(Qt.CursorShape.WaitCursor)
        else:
            QApplication.restoreOverrideCursor()
        for widget in (self.browse_button, self.refresh_button, self.execute_button):
            widget.setEnabled(not busy)
        if not busy:
            self._update_actions()

    # ----- layout state -------------------------------------------------------
    def load_column_widths(self) -> None:
        widths = self.settings.column_widths
        for column, width in zip((self.COL_ORIGINAL, self.COL_DESCRIPTOR), widths):
            self.table.setColumnWidth(column, max(30, int(width)))

    def save_column_widths(self) -> None:
        self.settings.column_widths = [
            self.table.columnWidth(self.COL_ORIGINAL),
            self.table.columnWidth(self.COL_DESCRIPTOR),
        ]

    def closeEvent(self, event) -> None:
        self.save_column_widths()
        self.settings.output_mode = self.session.output.mode
        self.settings.output_path = self.session.output.path
        save_settings(self.settings, self.settings_path)
        logging.getLogger("asset_renamer").removeHandler(self._log_handler)
        super().closeEvent(event)


def _reset_label(label: QLabel, text: str) -> None:
    try:
        label.setText(text)
    except RuntimeError:
        # label was destroyed by a table rebuild
        pass


def main() -> int:
    settings = load_settings()
    setup_logging(settings.log_level)
    app = QApplication(sys.argv)
    window = RenamerWindow(settings=settings)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())

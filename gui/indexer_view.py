"""
------------------------------------------------------------------------------
Project:        NIDPro
File:           gui/indexer_view.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Database management view. Drive folder settings, drop zone
                for batch ingestion with per-file progress, Drive sync and
                the list of active records with export and wipe.
------------------------------------------------------------------------------
"""

from typing import List, Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (QFileDialog, QFrame, QHBoxLayout, QLabel, QLineEdit, QListWidget,
                             QListWidgetItem, QMessageBox, QPushButton, QVBoxLayout, QWidget)

from core.config import AppConfig, DEFAULT_DRIVE_FOLDER_ID
from core.drive import DriveSyncStub, parse_drive_folder_id
from core.exporter import RecordExporter
from core.ingestion import IngestionPipeline, collect_supported
from core.logger import get_logger
from core.models.record import FileProgress, IdentityRecord
from core.models.types import FileStatus
from core.store import RecordStore
from gui.utils import caption_label, show_selectable_message_box
from gui.workers import DriveSyncWorker, IngestWorker

logger = get_logger("gui.indexer")

FILE_FILTER = "Documents (*.pdf *.png *.jpg *.jpeg *.webp *.bmp *.gif *.tif *.tiff)"

STATUS_MARKERS = {
    FileStatus.PENDING: "○",
    FileStatus.PROCESSING: "⟳",
    FileStatus.DONE: "✓",
    FileStatus.FAILED: "✗",
}


class DropZone(QFrame):
    """Accepts dragged PDF and image files."""
    files_dropped = pyqtSignal(list)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setAcceptDrops(True)
        self.setObjectName("DropZone")
        self._set_dragging(False)

        layout = QVBoxLayout(self)
        hint = QLabel("Drag and drop your PDF files or images here")
        hint.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(hint)
        self.btn_select = QPushButton("Select Files to Process")
        layout.addWidget(self.btn_select, 0, Qt.AlignmentFlag.AlignCenter)

    def _set_dragging(self, dragging: bool):
        color = "#6366f1" if dragging else "#cbd5e1"
        self.setStyleSheet(f"#DropZone {{ border: 2px dashed {color}; border-radius: 24px; padding: 24px; }}")

    def dragEnterEvent(self, event):
        if event.mimeData().hasUrls():
            self._set_dragging(True)
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragLeaveEvent(self, event):
        self._set_dragging(False)

    def dropEvent(self, event):
        self._set_dragging(False)
        paths = [url.toLocalFile() for url in event.mimeData().urls() if url.isLocalFile()]
        supported = collect_supported(paths)
        event.acceptProposedAction()
        if supported:
            self.files_dropped.emit([str(p) for p in supported])


class IndexerView(QWidget):
    """
    Indexer tab. Owns the batch and Drive sync workers; only one of them
    can run at a time.
    """
    records_changed = pyqtSignal()
    records_cleared = pyqtSignal()
    first_records_added = pyqtSignal()

    def __init__(
        self,
        store: RecordStore,
        pipeline: IngestionPipeline,
        drive_stub: DriveSyncStub,
        app_config: Optional[AppConfig] = None,
        parent=None
    ):
        super().__init__(parent)
        self.store = store
        self.pipeline = pipeline
        self.drive_stub = drive_stub
        self.app_config = app_config
        self.queue: List[FileProgress] = []
        self.is_processing = False
        self.is_syncing = False
        self._worker = None
        self._was_empty = False

        self.drive_folder_id = store.persistence.load_drive_folder_id() or DEFAULT_DRIVE_FOLDER_ID

        self._setup_ui()
        self.refresh_records()

    def _setup_ui(self):
        layout = QVBoxLayout(self)

        # Header
        header = QHBoxLayout()
        title_box = QVBoxLayout()
        title = QLabel("Database Management")
        title.setStyleSheet("font-size: 26px; font-weight: 900;")
        title_box.addWidget(title)
        title_box.addWidget(QLabel("Processing BN/ENG Identity Files"))
        header.addLayout(title_box)
        header.addStretch()
        counter_box = QVBoxLayout()
        counter_box.addWidget(caption_label("Records"))
        self.lbl_record_count = QLabel("0")
        self.lbl_record_count.setStyleSheet("font-size: 20px; font-weight: 900; color: #4f46e5;")
        counter_box.addWidget(self.lbl_record_count)
        header.addLayout(counter_box)
        layout.addLayout(header)

        # Drive Settings
        drive_box = QVBoxLayout()
        drive_row = QHBoxLayout()
        drive_info = QVBoxLayout()
        drive_info.addWidget(caption_label("Cloud Drive Sync Settings"))
        self.lbl_drive_id = QLabel()
        self.lbl_drive_id.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        drive_info.addWidget(self.lbl_drive_id)
        drive_row.addLayout(drive_info, 1)
        self.btn_drive_setup = QPushButton("Setup Link")
        self.btn_drive_setup.clicked.connect(self.toggle_drive_settings)
        drive_row.addWidget(self.btn_drive_setup)
        drive_box.addLayout(drive_row)

        self.drive_editor = QWidget()
        editor_row = QHBoxLayout(self.drive_editor)
        editor_row.setContentsMargins(0, 0, 0, 0)
        self.edit_drive = QLineEdit()
        self.edit_drive.setPlaceholderText("https://drive.google.com/drive/folders/...")
        editor_row.addWidget(self.edit_drive, 1)
        self.btn_drive_save = QPushButton("Save Configuration")
        self.btn_drive_save.clicked.connect(self.save_drive_config)
        editor_row.addWidget(self.btn_drive_save)
        self.drive_editor.setVisible(False)
        drive_box.addWidget(self.drive_editor)
        layout.addLayout(drive_box)
        self._update_drive_label()

        # Upload
        upload_row = QHBoxLayout()
        self.drop_zone = DropZone()
        self.drop_zone.files_dropped.connect(self.start_batch)
        self.drop_zone.btn_select.clicked.connect(self.select_files)
        upload_row.addWidget(self.drop_zone, 2)

        self.btn_drive_sync = QPushButton("Start Drive Sync")
        self.btn_drive_sync.clicked.connect(self.start_drive_sync)
        upload_row.addWidget(self.btn_drive_sync, 1)
        layout.addLayout(upload_row)

        # Progress
        self.progress_panel = QWidget()
        progress_layout = QVBoxLayout(self.progress_panel)
        progress_layout.setContentsMargins(0, 0, 0, 0)
        self.lbl_progress_summary = QLabel()
        progress_layout.addWidget(self.lbl_progress_summary)
        self.list_progress = QListWidget()
        progress_layout.addWidget(self.list_progress)
        self.btn_clear_history = QPushButton("Clear History")
        self.btn_clear_history.clicked.connect(self.clear_history)
        progress_layout.addWidget(self.btn_clear_history, 0, Qt.AlignmentFlag.AlignRight)
        self.progress_panel.setVisible(False)
        layout.addWidget(self.progress_panel)

        # Active Records
        records_header = QHBoxLayout()
        records_header.addWidget(caption_label("Active Records"))
        self.btn_export_all = QPushButton("Export CSV")
        self.btn_export_all.clicked.connect(self.export_all)
        records_header.addWidget(self.btn_export_all)
        records_header.addStretch()
        self.btn_wipe = QPushButton("Wipe All")
        self.btn_wipe.setStyleSheet("color: #f87171; font-weight: bold;")
        self.btn_wipe.clicked.connect(self.confirm_clear_index)
        records_header.addWidget(self.btn_wipe)
        layout.addLayout(records_header)

        self.list_records = QListWidget()
        layout.addWidget(self.list_records, 1)

    # --- Drive settings ---

    def _update_drive_label(self):
        self.lbl_drive_id.setText(f"ID: {self.drive_folder_id}")

    def toggle_drive_settings(self):
        visible = not self.drive_editor.isVisibleTo(self)
        self.drive_editor.setVisible(visible)
        self.btn_drive_setup.setText("Cancel" if visible else "Setup Link")

    def save_drive_config(self):
        if self.is_processing or self.is_syncing:
            return
        new_id = parse_drive_folder_id(self.edit_drive.text())
        if not new_id:
            return
        self.drive_folder_id = new_id
        self.store.persistence.save_drive_folder_id(new_id)
        self.edit_drive.clear()
        self.drive_editor.setVisible(False)
        self.btn_drive_setup.setText("Setup Link")
        self._update_drive_label()
        logger.info(f"Drive folder set to {new_id}")

    # --- Batch ingestion ---

    def _set_busy(self):
        busy = self.is_processing or self.is_syncing
        self.drop_zone.btn_select.setEnabled(not busy)
        self.drop_zone.btn_select.setText("Processing Batch..." if self.is_processing else "Select Files to Process")
        self.drop_zone.setAcceptDrops(not busy)
        self.btn_drive_sync.setEnabled(not busy)
        self.btn_drive_sync.setText("Syncing Drive..." if self.is_syncing else "Start Drive Sync")
        self.btn_wipe.setEnabled(not busy)
        self.btn_drive_save.setEnabled(not busy)
        self.btn_clear_history.setVisible(not self.is_processing)

    def select_files(self):
        paths, _ = QFileDialog.getOpenFileNames(self, "Select Files to Process", "", FILE_FILTER)
        if paths:
            self.start_batch(paths)

    def start_batch(self, paths: List[str]):
        """Queues the files and starts the ingestion worker."""
        if not paths or self.is_processing or self.is_syncing:
            return
        self.is_processing = True
        self._was_empty = self.store.is_empty()
        self.queue = [FileProgress(index=i, name=p.replace("\\", "/").split("/")[-1]) for i, p in enumerate(paths)]
        self._render_queue()
        self._set_busy()

        self._worker = IngestWorker(self.pipeline, paths)
        self._worker.queued.connect(self.on_queued)
        self._worker.progress.connect(self.on_progress)
        self._worker.finished_batch.connect(self.on_batch_finished)
        self._worker.failed.connect(self.on_batch_failed)
        self._worker.start()

    def on_queued(self, queue: List[FileProgress]):
        self.queue = list(queue)
        self._render_queue()

    def on_progress(self, event: FileProgress):
        if 0 <= event.index < len(self.queue):
            self.queue[event.index] = event
        self._render_queue()

    def on_batch_finished(self, extracted: List[IdentityRecord], admitted: List[IdentityRecord]):
        self.is_processing = False
        self._set_busy()
        self._render_queue()
        self.refresh_records()
        if admitted:
            self.records_changed.emit()
            if self._was_empty:
                self.first_records_added.emit()

    def on_batch_failed(self, message: str):
        self.is_processing = False
        self._set_busy()
        show_selectable_message_box(self, "Batch", message, QMessageBox.Icon.Warning)

    def _render_queue(self):
        self.list_progress.clear()
        for item in self.queue:
            text = f"{STATUS_MARKERS[item.status]}  {item.name}"
            if item.status == FileStatus.DONE and item.count is not None:
                text += f"  ({item.count} record(s))"
            elif item.status == FileStatus.FAILED and item.error:
                text += f"  - {item.error}"
            QListWidgetItem(text, self.list_progress)

        done = sum(1 for q in self.queue if q.status == FileStatus.DONE)
        failed = sum(1 for q in self.queue if q.status == FileStatus.FAILED)
        extracted = sum(q.count or 0 for q in self.queue)
        self.lbl_progress_summary.setText(
            f"{done + failed}/{len(self.queue)} processed  |  {done} done  |  {failed} failed  |  {extracted} extracted"
        )
        self.progress_panel.setVisible(bool(self.queue))

    def clear_history(self):
        self.queue = []
        self._render_queue()

    # --- Drive sync ---

    def start_drive_sync(self):
        if self.is_processing or self.is_syncing:
            return
        self.is_syncing = True
        self._was_empty = self.store.is_empty()
        self._set_busy()
        self._worker = DriveSyncWorker(self.drive_stub, self.store, self.drive_folder_id)
        self._worker.finished_sync.connect(self.on_drive_synced)
        self._worker.failed.connect(self.on_drive_sync_failed)
        self._worker.start()

    def on_drive_synced(self, admitted: List[IdentityRecord]):
        self.is_syncing = False
        self._set_busy()
        self.refresh_records()
        if admitted:
            self.records_changed.emit()
            if self._was_empty:
                self.first_records_added.emit()

    def on_drive_sync_failed(self, message: str):
        self.is_syncing = False
        self._set_busy()
        show_selectable_message_box(self, "Drive Sync", message, QMessageBox.Icon.Warning)

    # --- Records ---

    def refresh_records(self):
        records = self.store.records
        self.lbl_record_count.setText(str(len(records)))
        self.list_records.clear()
        if not records:
            placeholder = QListWidgetItem("No records indexed yet", self.list_records)
            placeholder.setFlags(Qt.ItemFlag.NoItemFlags)
        for rec in reversed(records):
            serial = f"  Ser: {rec.voter_serial}" if rec.voter_serial else ""
            QListWidgetItem(
                f"{rec.full_name_bn}  |  {rec.nid_number}{serial}  |  {rec.date_of_birth}  |  {rec.source_file}",
                self.list_records
            )
        self.btn_export_all.setVisible(bool(records))

    def export_all(self):
        records = self.store.records
        if not records:
            return
        out_dir = self.app_config.get_export_dir() if self.app_config else "."
        try:
            path = RecordExporter.export_csv(records, "full_database", out_dir)
        except OSError as e:
            logger.error(f"CSV export failed: {e}")
            show_selectable_message_box(self, "Export CSV", f"Export failed: {e}", QMessageBox.Icon.Critical)
            return
        if path:
            show_selectable_message_box(self, "Export CSV", f"Saved to {path}", QMessageBox.Icon.Information)

    def confirm_clear_index(self):
        answer = QMessageBox.question(
            self, "Wipe All", "Clear database? / ডাটাবেস মুছে ফেলবেন?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        )
        if answer == QMessageBox.StandardButton.Yes:
            self.clear_index()

    def clear_index(self):
        self.store.clear()
        self.refresh_records()
        self.records_cleared.emit()

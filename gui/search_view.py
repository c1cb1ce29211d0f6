"""
------------------------------------------------------------------------------
Project:        NIDPro
File:           gui/search_view.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Identity portal view. Query by NID (last 4 digits or full
                number) plus date of birth, result cards with server copy
                printing and CSV export of the hits.
------------------------------------------------------------------------------
"""

import re
from typing import List, Optional

from PyQt6.QtCore import QDate, Qt, pyqtSignal
from PyQt6.QtWidgets import (QDateEdit, QFrame, QGridLayout, QHBoxLayout, QLabel, QLineEdit,
                             QMessageBox, QPushButton, QScrollArea, QVBoxLayout, QWidget)

from core.config import AppConfig
from core.exporter import RecordExporter
from core.logger import get_logger
from core.models.record import IdentityRecord, SearchFilters
from core.search import SearchEngine
from gui.printing import print_server_copy
from gui.utils import caption_label, show_selectable_message_box
from gui.workers import SearchWorker

logger = get_logger("gui.search")


class RecordCard(QFrame):
    """Result card for a single identity record."""
    print_requested = pyqtSignal(object)

    def __init__(self, record: IdentityRecord, parent=None):
        super().__init__(parent)
        self.record = record
        self.setFrameShape(QFrame.Shape.StyledPanel)
        self.setObjectName("RecordCard")
        self.setStyleSheet("#RecordCard { background: white; border: 1px solid #e2e8f0; border-radius: 16px; }")
        self._setup_ui()

    def _setup_ui(self):
        rec = self.record
        layout = QHBoxLayout(self)
        layout.setContentsMargins(24, 20, 24, 20)

        left = QVBoxLayout()
        left.addWidget(caption_label("Full Name / নাম"))
        name_bn = QLabel(rec.full_name_bn)
        name_bn.setStyleSheet("font-size: 20px; font-weight: bold;")
        left.addWidget(name_bn)
        name_en = QLabel(rec.full_name_en.upper())
        name_en.setStyleSheet("color: #64748b; font-weight: bold;")
        left.addWidget(name_en)

        if rec.voter_serial:
            self.lbl_serial = QLabel(f"Voter Serial: {rec.voter_serial}")
            self.lbl_serial.setStyleSheet("color: #4f46e5; font-weight: bold;")
            left.addWidget(self.lbl_serial)

        parents = QGridLayout()
        parents.addWidget(caption_label("Father / পিতা"), 0, 0)
        parents.addWidget(QLabel(f"{rec.father_name_bn or 'N/A'}\n{(rec.father_name_en or 'N/A').upper()}"), 1, 0)
        parents.addWidget(caption_label("Mother / মাতা"), 0, 1)
        parents.addWidget(QLabel(f"{rec.mother_name_bn or 'N/A'}\n{(rec.mother_name_en or 'N/A').upper()}"), 1, 1)
        left.addLayout(parents)

        left.addWidget(caption_label("NID Identification"))
        nid = QLabel(rec.nid_number)
        nid.setStyleSheet("font-family: monospace; font-size: 20px; font-weight: bold;")
        nid.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        left.addWidget(nid)
        layout.addLayout(left, 1)

        right = QVBoxLayout()
        right.addWidget(caption_label("DOB / জন্ম তারিখ"), 0, Qt.AlignmentFlag.AlignRight)
        dob = QLabel(rec.date_of_birth)
        dob.setStyleSheet("font-family: monospace; font-size: 16px; font-weight: bold;")
        right.addWidget(dob, 0, Qt.AlignmentFlag.AlignRight)
        right.addStretch()
        self.btn_print = QPushButton("Print Server Copy")
        self.btn_print.setStyleSheet("background: #0f172a; color: white; padding: 8px 18px; font-weight: bold;")
        self.btn_print.clicked.connect(lambda: self.print_requested.emit(self.record))
        right.addWidget(self.btn_print)
        hint = QLabel("Includes BN/ENG Layout")
        hint.setStyleSheet("color: #94a3b8; font-size: 8px; font-style: italic;")
        right.addWidget(hint, 0, Qt.AlignmentFlag.AlignCenter)
        layout.addLayout(right)


class SearchView(QWidget):
    """
    Search tab. The query runs in a SearchWorker so the latency floor
    does not block the UI.
    """

    def __init__(self, engine: SearchEngine, app_config: Optional[AppConfig] = None, parent=None):
        super().__init__(parent)
        self.engine = engine
        self.app_config = app_config
        self.results: List[IdentityRecord] = []
        self.has_searched = False
        self.is_searching = False
        self._worker: Optional[SearchWorker] = None
        self._cards: List[RecordCard] = []
        self._setup_ui()

    def _setup_ui(self):
        layout = QVBoxLayout(self)

        title = QLabel("Identity Portal")
        title.setStyleSheet("font-size: 32px; font-weight: 900;")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(title)
        subtitle = QLabel("SECURE SERVER VERIFICATION")
        subtitle.setStyleSheet("color: #64748b; font-size: 11px; font-weight: bold;")
        subtitle.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(subtitle)

        # Query Form
        form = QHBoxLayout()
        self.edit_nid = QLineEdit()
        self.edit_nid.setPlaceholderText("Last 4 digits or Full NID")
        self.edit_nid.textEdited.connect(self._on_nid_edited)
        self.edit_nid.returnPressed.connect(self.on_search_clicked)
        form.addWidget(self.edit_nid, 2)

        self.edit_dob = QDateEdit()
        self.edit_dob.setDisplayFormat("yyyy-MM-dd")
        self.edit_dob.setCalendarPopup(True)
        self.edit_dob.setDate(QDate(1990, 1, 1))
        form.addWidget(self.edit_dob, 1)

        self.btn_search = QPushButton("Search")
        self.btn_search.clicked.connect(self.on_search_clicked)
        form.addWidget(self.btn_search)
        layout.addLayout(form)

        # Results Header
        header = QHBoxLayout()
        header.addWidget(caption_label("Search Results"))
        self.lbl_count = QLabel("0 Match")
        self.lbl_count.setStyleSheet("color: #4f46e5; font-weight: bold;")
        header.addWidget(self.lbl_count)
        header.addStretch()
        self.btn_export = QPushButton("Export CSV")
        self.btn_export.clicked.connect(self.export_results)
        header.addWidget(self.btn_export)
        self.results_header = QWidget()
        self.results_header.setLayout(header)
        layout.addWidget(self.results_header)

        # Results Area
        self.results_container = QWidget()
        self.results_layout = QVBoxLayout(self.results_container)
        self.results_layout.addStretch()
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self.results_container)
        layout.addWidget(scroll, 1)

        self.lbl_empty = QLabel("No match / খুঁজে পাওয়া যায়নি")
        self.lbl_empty.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.lbl_empty.setStyleSheet("color: #94a3b8; font-weight: bold; padding: 40px; border: 2px dashed #e2e8f0;")
        layout.addWidget(self.lbl_empty)

        self._refresh_visibility()

    def _on_nid_edited(self, text: str):
        cleaned = re.sub(r"\D", "", text)
        if cleaned != text:
            self.edit_nid.setText(cleaned)

    def current_filters(self) -> SearchFilters:
        return SearchFilters(
            nid_query=self.edit_nid.text(),
            dob=self.edit_dob.date().toString("yyyy-MM-dd"),
        )

    def on_search_clicked(self):
        if self.is_searching or not self.edit_nid.text().strip():
            return
        self.run_search(self.current_filters())

    def run_search(self, filters: SearchFilters):
        """Starts the query in the background."""
        self.is_searching = True
        self.has_searched = True
        self.btn_search.setEnabled(False)
        self.btn_search.setText("Searching...")

        self._worker = SearchWorker(self.engine, filters)
        self._worker.results_ready.connect(self.show_results)
        self._worker.start()

    def show_results(self, results: List[IdentityRecord]):
        self.is_searching = False
        self.has_searched = True
        self.btn_search.setEnabled(True)
        self.btn_search.setText("Search")
        self.results = list(results)

        for card in self._cards:
            self.results_layout.removeWidget(card)
            card.deleteLater()
        self._cards = []

        for rec in self.results:
            card = RecordCard(rec)
            card.print_requested.connect(self.print_record)
            self.results_layout.insertWidget(self.results_layout.count() - 1, card)
            self._cards.append(card)

        self.lbl_count.setText(f"{len(self.results)} Match")
        self._refresh_visibility()

    def reset(self):
        """Forgets the last search (after the index was wiped)."""
        self.has_searched = False
        self.show_results([])
        self.has_searched = False
        self._refresh_visibility()

    def _refresh_visibility(self):
        self.results_header.setVisible(self.has_searched)
        self.btn_export.setVisible(bool(self.results))
        self.lbl_empty.setVisible(self.has_searched and not self.results)

    def print_record(self, record: IdentityRecord):
        print_server_copy(record, self)

    def export_results(self):
        if not self.results:
            return
        out_dir = self.app_config.get_export_dir() if self.app_config else "."
        try:
            path = RecordExporter.export_csv(self.results, "search_results", out_dir)
        except OSError as e:
            logger.error(f"CSV export failed: {e}")
            show_selectable_message_box(self, "Export CSV", f"Export failed: {e}", QMessageBox.Icon.Critical)
            return
        if path:
            show_selectable_message_box(self, "Export CSV", f"Saved to {path}", QMessageBox.Icon.Information)

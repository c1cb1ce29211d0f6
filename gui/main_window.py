"""
------------------------------------------------------------------------------
Project:        NIDPro
File:           gui/main_window.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Main application window hosting the Search and Indexer tabs.
------------------------------------------------------------------------------
"""

from typing import Optional

from PyQt6.QtCore import QTimer
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import QMainWindow, QTabWidget

from core.config import AppConfig
from core.drive import DriveSyncStub
from core.ingestion import IngestionPipeline
from core.logger import get_logger
from core.search import SearchEngine
from core.store import RecordStore
from gui.indexer_view import IndexerView
from gui.search_view import SearchView

logger = get_logger("gui.main_window")

# Delay before jumping to the search tab after the first records arrived
SWITCH_TO_SEARCH_MS = 1000


class MainWindow(QMainWindow):
    """
    Wires the shared record store into the two views.
    """

    TAB_SEARCH = 0
    TAB_INDEXER = 1

    def __init__(
        self,
        store: RecordStore,
        pipeline: IngestionPipeline,
        engine: SearchEngine,
        drive_stub: DriveSyncStub,
        app_config: Optional[AppConfig] = None
    ):
        super().__init__()
        self.store = store
        self.app_config = app_config
        self.setWindowTitle("NID Pro")
        self.resize(1200, 860)

        self.search_view = SearchView(engine, app_config=app_config)
        self.indexer_view = IndexerView(store, pipeline, drive_stub, app_config=app_config)

        self.tabs = QTabWidget()
        self.tabs.addTab(self.search_view, "Search")
        self.tabs.addTab(self.indexer_view, "Indexer")
        self.setCentralWidget(self.tabs)

        self.indexer_view.first_records_added.connect(self.on_first_records_added)
        self.indexer_view.records_cleared.connect(self.search_view.reset)
        self.indexer_view.records_changed.connect(self.update_status)
        self.indexer_view.records_cleared.connect(self.update_status)

        self._create_menu()
        self.update_status()

    def _create_menu(self):
        file_menu = self.menuBar().addMenu("&File")
        quit_action = QAction("&Quit", self)
        quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

    def update_status(self):
        self.statusBar().showMessage(f"{len(self.store)} record(s) indexed")

    def on_first_records_added(self):
        logger.info("First records indexed, switching to search")
        QTimer.singleShot(SWITCH_TO_SEARCH_MS, lambda: self.tabs.setCurrentIndex(self.TAB_SEARCH))

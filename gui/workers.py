"""
------------------------------------------------------------------------------
Project:        NIDPro
File:           gui/workers.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Background threads for ingestion, search and Drive sync.
                Core events are relayed to the widgets via Qt signals.
------------------------------------------------------------------------------
"""

from typing import List

from PyQt6.QtCore import QThread, pyqtSignal

from core.drive import DriveSyncStub
from core.ingestion import FileBlob, IngestionPipeline
from core.logger import get_logger
from core.models.record import SearchFilters
from core.search import SearchEngine
from core.store import RecordStore

logger = get_logger("gui.workers")


class IngestWorker(QThread):
    """
    Worker thread running one ingestion batch.
    """
    queued = pyqtSignal(list)  # FileProgress entries, all pending
    progress = pyqtSignal(object)  # FileProgress
    finished_batch = pyqtSignal(list, list)  # extracted, admitted
    failed = pyqtSignal(str)

    def __init__(self, pipeline: IngestionPipeline, paths: List[str]):
        super().__init__()
        self.pipeline = pipeline
        self.paths = paths

    def run(self):
        blobs = [FileBlob.from_path(path) for path in self.paths]

        try:
            run = self.pipeline.start(blobs)
            self.queued.emit(list(run.queue))
            for event in run:
                self.progress.emit(event)
            self.finished_batch.emit(run.extracted, run.admitted)
        except Exception as e:
            logger.exception("Ingestion batch aborted")
            self.failed.emit(str(e))


class SearchWorker(QThread):
    """Runs a query including the configured latency floor."""
    results_ready = pyqtSignal(list)

    def __init__(self, engine: SearchEngine, filters: SearchFilters):
        super().__init__()
        self.engine = engine
        self.filters = filters

    def run(self):
        self.results_ready.emit(self.engine.search(self.filters))


class DriveSyncWorker(QThread):
    """Runs the Drive sync stand-in and admits its records."""
    finished_sync = pyqtSignal(list)  # admitted records
    failed = pyqtSignal(str)

    def __init__(self, stub: DriveSyncStub, store: RecordStore, folder_id: str):
        super().__init__()
        self.stub = stub
        self.store = store
        self.folder_id = folder_id

    def run(self):
        try:
            admitted = self.stub.sync(self.store, self.folder_id)
        except Exception as e:
            logger.exception("Drive sync aborted")
            self.failed.emit(str(e) or "Drive sync failed")
            return
        self.finished_sync.emit(admitted)

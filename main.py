"""
------------------------------------------------------------------------------
Project:        NIDPro
File:           main.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Application entry point. Initializes the Qt environment and
                the core components (Store, Extractor, Pipeline, Search)
                before launching the main window.
------------------------------------------------------------------------------
"""

import sys
import argparse

from PyQt6.QtWidgets import QApplication
from PyQt6.QtCore import QCoreApplication

from core.ai.gemini_extractor import GeminiExtractor
from core.config import AppConfig
from core.drive import DriveSyncStub
from core.ingestion import IngestionPipeline
from core.logger import setup_logging, get_logger
from core.search import SearchEngine
from core.store import RecordStore, SettingsPersistence
from gui.main_window import MainWindow


def main() -> None:
    """
    NIDPro Entry Point.
    Initializes infrastructure and launches the GUI.
    """
    parser = argparse.ArgumentParser(description="NIDPro - NID Record Indexer")
    parser.add_argument("-P", "--profile", type=str, help="Application profile for isolation (e.g. 'dev')")
    args, unknown = parser.parse_known_args()

    app = QApplication(sys.argv)

    app_id = "nidpro"
    if args.profile:
        app_id = f"nidpro-{args.profile}"

    QCoreApplication.setApplicationName(app_id)

    app_config = AppConfig(profile=args.profile)

    setup_logging(
        level=app_config.get_log_level(),
        log_file=str(app_config.get_log_file_path()),
        component_levels=app_config.get_log_components()
    )
    logger = get_logger("core")
    logger.info(f"NIDPro started (Profile: {args.profile or 'default'})")

    # 1. Initialize Infrastructure
    store = RecordStore(SettingsPersistence(app_config))
    store.load()

    # 2. Initialize Logic
    timeout = app_config.get_extraction_timeout()
    extractor = GeminiExtractor(
        app_config.get_api_key(),
        model_name=app_config.get_gemini_model(),
        timeout=timeout or None
    )
    pipeline = IngestionPipeline(extractor, store)
    engine = SearchEngine(store, delay=app_config.get_search_delay_ms() / 1000.0)
    drive_stub = DriveSyncStub()

    # 3. Initialize GUI
    window = MainWindow(store, pipeline, engine, drive_stub, app_config=app_config)
    if args.profile:
        window.setWindowTitle(f"{window.windowTitle()} [PROFILE: {args.profile.upper()}]")

    window.show()

    # 4. Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()

"""
------------------------------------------------------------------------------
Project:        NIDPro
File:           gui/printing.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Print support for the server copy: preview dialog and direct
                PDF output through QtPrintSupport.
------------------------------------------------------------------------------
"""

from PyQt6.QtGui import QTextDocument
from PyQt6.QtPrintSupport import QPrinter, QPrintPreviewDialog

from core.logger import get_logger
from core.models.record import IdentityRecord
from core.server_copy import ServerCopyRenderer

logger = get_logger("gui.printing")


def build_document(record: IdentityRecord) -> QTextDocument:
    doc = QTextDocument()
    doc.setHtml(ServerCopyRenderer().render_html(record))
    return doc


def print_server_copy(record: IdentityRecord, parent=None) -> None:
    """Opens a print preview for the record's server copy."""
    doc = build_document(record)
    printer = QPrinter(QPrinter.PrinterMode.HighResolution)
    dialog = QPrintPreviewDialog(printer, parent)
    dialog.setWindowTitle(f"NID Server Copy - {record.full_name_en}")
    dialog.paintRequested.connect(doc.print)
    dialog.exec()


def save_server_copy_pdf(record: IdentityRecord, path: str) -> None:
    """Writes the record's server copy to a PDF file."""
    doc = build_document(record)
    printer = QPrinter(QPrinter.PrinterMode.HighResolution)
    printer.setOutputFormat(QPrinter.OutputFormat.PdfFormat)
    printer.setOutputFileName(path)
    doc.print(printer)
    logger.info(f"Server copy for {record.id} written to {path}")

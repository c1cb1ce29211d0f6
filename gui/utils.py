"""
------------------------------------------------------------------------------
Project:        NIDPro
File:           gui/utils.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Small shared GUI helpers (message boxes, label styling).
------------------------------------------------------------------------------
"""

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QLabel, QMessageBox


def show_selectable_message_box(parent, title, text, icon=None, buttons=None):
    """
    Shows a QMessageBox with text selection enabled.
    """
    msg = QMessageBox(parent)
    if title: msg.setWindowTitle(title)
    if text: msg.setText(text)

    if icon: msg.setIcon(icon)
    if buttons:
        msg.setStandardButtons(buttons)
    else:
        msg.setStandardButtons(QMessageBox.StandardButton.Ok)

    msg.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse | Qt.TextInteractionFlag.LinksAccessibleByMouse)

    return msg.exec()


def caption_label(text: str) -> QLabel:
    """Small uppercase grey caption used above values."""
    lbl = QLabel(text.upper())
    lbl.setStyleSheet("color: #94a3b8; font-size: 9px; font-weight: bold;")
    return lbl

"""
------------------------------------------------------------------------------
Project:        NIDPro
File:           core/logger.py
Version:        1.1.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Logging for NIDPro. One 'nidpro' logger tree with console and
                rotating file output, per-component levels, NID masking for
                log lines and DEBUG channels for AI responses, store
                admissions and per-file ingestion events.
------------------------------------------------------------------------------
"""

import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Optional

APP_LOGGER_NAME = "nidpro"

LOG_FORMAT = "%(asctime)s [%(levelname).4s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Rotation of app.log
MAX_LOG_BYTES = 2 * 1024 * 1024
LOG_BACKUPS = 3

# Raw AI answers can hold whole voter lists
MAX_RESPONSE_CHARS = 4000

# Visible trailing digits of a masked identifier
NID_VISIBLE_DIGITS = 4


def _build_handlers(log_file: Optional[str]) -> List[logging.Handler]:
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            str(path), maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
        ))

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[str] = None,
    component_levels: Optional[Dict[str, str]] = None
) -> None:
    """
    (Re)configures the 'nidpro' logger tree.

    Args:
        level: Default level name (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional log file, rotated at MAX_LOG_BYTES.
        component_levels: Level overrides per component, e.g. {'ai': 'DEBUG'}.
    """
    root = logging.getLogger(APP_LOGGER_NAME)

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    for handler in _build_handlers(log_file):
        root.addHandler(handler)

    for component, cmp_level in (component_levels or {}).items():
        set_component_level(component, cmp_level)


def get_logger(name: str) -> logging.Logger:
    """Returns 'nidpro.<name>'; names already below the root are kept."""
    if name == APP_LOGGER_NAME or name.startswith(APP_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{APP_LOGGER_NAME}.{name}")


def set_component_level(component: str, level: str) -> None:
    """Changes the level of one component. Unknown level names are ignored."""
    numeric_level = getattr(logging, level.upper(), None)
    if isinstance(numeric_level, int):
        get_logger(component).setLevel(numeric_level)


def mask_nid(value: Optional[str]) -> str:
    """
    Hides all but the last digits of an identifier, e.g. '*********4321'.
    Short fragments (search suffixes) are returned unchanged.
    """
    text = value or ""
    if len(text) <= NID_VISIBLE_DIGITS:
        return text
    return "*" * (len(text) - NID_VISIBLE_DIGITS) + text[-NID_VISIBLE_DIGITS:]


def log_ai_interaction(prompt: str, response: str, payload: Optional[Any] = None) -> None:
    """
    Dumps one extraction round trip on 'nidpro.ai.raw' (DEBUG only).
    Long responses are cut at MAX_RESPONSE_CHARS.
    """
    logger = get_logger("ai.raw")
    if not logger.isEnabledFor(logging.DEBUG):
        return

    shown = response if len(response) <= MAX_RESPONSE_CHARS else response[:MAX_RESPONSE_CHARS] + " [...]"
    logger.debug(f"PROMPT:\n{prompt.strip()}")
    logger.debug(f"RESPONSE ({len(response)} chars):\n{shown}")
    if payload:
        logger.debug(f"PARSED:\n{json.dumps(payload, indent=2, ensure_ascii=False)}")


def log_store_event(action: str, admitted: int = 0, total: int = 0) -> None:
    """Store mutation trace on 'nidpro.store.events' (DEBUG only)."""
    logger = get_logger("store.events")
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"STORE: {action} | ADMITTED: {admitted} | TOTAL: {total}")


def log_file_event(name: str, status: str, detail: Any = None) -> None:
    """Per-file ingestion trace on 'nidpro.ingestion.events' (DEBUG only)."""
    logger = get_logger("ingestion.events")
    if logger.isEnabledFor(logging.DEBUG):
        suffix = f" | {detail}" if detail is not None else ""
        logger.debug(f"FILE: {name} | {status.upper()}{suffix}")

"""Audit trail for calculator state changes, plus application logging setup."""

import json
import logging
import os
from pathlib import Path

from src.utils import iso_now

AUDIT_DIR = Path(os.environ.get("CALCULATOR_LOG_DIR") or Path(__file__).resolve().parent.parent / "logs")
AUDIT_FILE = AUDIT_DIR / "audit.log"
APP_LOG_FILE = AUDIT_DIR / "app.log"


def _ensure_log_dir():
    AUDIT_DIR.mkdir(parents=True, exist_ok=True)


def audit_log(
    action: str,
    status: str,
    *,
    entity: int | None = None,
    category: int | None = None,
    level: int | None = None,
    modifier: bool | None = None,
    total: int | None = None,
    ceiling: int | None = None,
    error: str | None = None,
    extra: dict | None = None,
):
    """Append a structured audit entry to the audit log (JSONL)."""
    entry = {
        "timestamp": iso_now(),
        "action": action,
        "status": status,
    }
    if entity is not None:
        entry["entity"] = entity
    if category is not None:
        entry["category"] = category
    if level is not None:
        entry["level"] = level
    if modifier is not None:
        entry["modifier"] = modifier
    if total is not None:
        entry["total"] = total
    if ceiling is not None:
        entry["ceiling"] = ceiling
    if error:
        entry["error"] = error
    if extra:
        entry.update(extra)

    try:
        _ensure_log_dir()
        with open(AUDIT_FILE, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry, default=str) + "\n")
    except OSError as e:
        logging.getLogger("card_calculator").warning("Audit write failed: %s", e)


def setup_app_logging():
    """Configure application logging to console and file."""
    logger = logging.getLogger("card_calculator")
    if logger.handlers:
        return logger
    logger.setLevel(logging.DEBUG)

    fmt = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"

    # Console
    ch = logging.StreamHandler()
    ch.setLevel(logging.INFO)
    ch.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    logger.addHandler(ch)

    # File
    try:
        _ensure_log_dir()
        fh = logging.FileHandler(APP_LOG_FILE, encoding="utf-8")
    except OSError:
        logger.warning("Log directory %s not writable; console logging only", AUDIT_DIR)
    else:
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
        logger.addHandler(fh)

    # Library modules under src/ log through their own module loggers.
    src_logger = logging.getLogger("src")
    for handler in logger.handlers:
        src_logger.addHandler(handler)
    src_logger.setLevel(logging.DEBUG)

    return logger

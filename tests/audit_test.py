"""Audit log entries and application logging setup."""

import json
import logging

from card_calculator import audit


def test_audit_log_appends_jsonl(tmp_path, monkeypatch):
    monkeypatch.setattr(audit, "AUDIT_DIR", tmp_path)
    monkeypatch.setattr(audit, "AUDIT_FILE", tmp_path / "audit.log")
    audit.audit_log("set_count", "success", entity=1, category=0, total=100)
    audit.audit_log("reset_all", "success")
    lines = (tmp_path / "audit.log").read_text(encoding="utf-8").splitlines()
    first = json.loads(lines[0])
    assert first["action"] == "set_count"
    assert first["entity"] == 1
    assert first["category"] == 0
    assert first["total"] == 100
    assert "entity" not in json.loads(lines[1])


def test_core_module_logs_share_app_handlers():
    """Messages from src.* modules go to the same handlers as the app logger."""
    logger = audit.setup_app_logging()
    src_logger = logging.getLogger("src")
    assert logger.handlers
    assert all(h in src_logger.handlers for h in logger.handlers)
    assert logging.getLogger("src.state.codec").getEffectiveLevel() == logging.DEBUG

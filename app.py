#!/usr/bin/env python3
"""Flask JSON API for the card score calculator (local, single user)."""

import os

from flask import Flask, jsonify, request
from dotenv import load_dotenv

load_dotenv()

from card_calculator.audit import audit_log, setup_app_logging
from card_calculator.service import categories_view, open_calculator, parse_category, state_view

log = setup_app_logging()

app = Flask(__name__)


def _json_body() -> dict:
    """Request JSON as a dict; missing, malformed or non-object bodies become {}."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _calculator():
    """Calculator for this process; state is loaded from the store on first use."""
    calc = app.config.get("CALCULATOR")
    if calc is None:
        calc = open_calculator(app.config.get("STATE_DIR"))
        app.config["CALCULATOR"] = calc
        log.info("Calculator state loaded: level=%d modifier=%s", calc.level, calc.modifier)
    return calc


def _mutate(action: str, apply, entity_id: int | None = None, index=None):
    """Run one state mutation, audit it, and return the updated state view."""
    calc = _calculator()
    try:
        category = parse_category(index) if index is not None else None
        apply(calc, category)
    except (KeyError, IndexError) as e:
        audit_log(action=action, status="error", entity=entity_id, error=str(e))
        log.warning("%s rejected: %s", action, e)
        return jsonify({"error": str(e.args[0] if e.args else e), "code": "NOT_FOUND"}), 404

    audit_log(
        action=action,
        status="success",
        entity=entity_id,
        category=category,
        level=calc.level,
        modifier=calc.modifier,
        total=calc.total(entity_id) if entity_id is not None else None,
        ceiling=calc.ceiling,
    )
    return jsonify(state_view(calc))


@app.route("/api/state", methods=["GET"])
def api_state():
    return jsonify(state_view(_calculator()))


@app.route("/api/categories", methods=["GET"])
def api_categories():
    return jsonify({"categories": categories_view()})


@app.route("/api/level", methods=["PUT"])
def api_set_level():
    """Set the tier. Non-numeric or < 1 becomes 1; no upper bound."""
    data = _json_body()
    return _mutate("set_level", lambda calc, _: calc.set_level(data.get("level")))


@app.route("/api/level/step", methods=["POST"])
def api_step_level():
    data = _json_body()
    try:
        delta = int(data.get("delta", 1))
    except (TypeError, ValueError):
        return jsonify({"error": "delta must be an integer"}), 400
    return _mutate("step_level", lambda calc, _: calc.step_level(delta))


@app.route("/api/modifier/toggle", methods=["POST"])
def api_toggle_modifier():
    return _mutate("toggle_modifier", lambda calc, _: calc.toggle_modifier())


@app.route("/api/entities/<int:entity_id>/counts/<index>", methods=["PUT"])
def api_set_count(entity_id: int, index: str):
    """Set one count. Values are floored, negatives become 0, capped categories clamp."""
    data = _json_body()
    value = data.get("value")
    return _mutate(
        "set_count",
        lambda calc, category: calc.set_count(entity_id, category, value),
        entity_id,
        index,
    )


@app.route("/api/entities/<int:entity_id>/counts/<index>/increment", methods=["POST"])
def api_increment(entity_id: int, index: str):
    return _mutate(
        "increment",
        lambda calc, category: calc.increment(entity_id, category),
        entity_id,
        index,
    )


@app.route("/api/entities/<int:entity_id>/counts/<index>/decrement", methods=["POST"])
def api_decrement(entity_id: int, index: str):
    return _mutate(
        "decrement",
        lambda calc, category: calc.decrement(entity_id, category),
        entity_id,
        index,
    )


@app.route("/api/entities/<int:entity_id>/reset", methods=["POST"])
def api_reset_entity(entity_id: int):
    return _mutate("reset_entity", lambda calc, _: calc.reset_entity(entity_id), entity_id)


@app.route("/api/reset", methods=["POST"])
def api_reset_all():
    """Zero all three characters; tier and modifier are kept."""
    return _mutate("reset_all", lambda calc, _: calc.reset_all())


if __name__ == "__main__":
    port = int(os.getenv("CALCULATOR_PORT", "5000"))
    calc = _calculator()
    log.info(
        "Card calculator starting on http://127.0.0.1:%d | level=%d ceiling=%d | Logs: logs/app.log | Audit: logs/audit.log",
        port,
        calc.level,
        calc.ceiling,
    )
    app.run(debug=True, port=port)

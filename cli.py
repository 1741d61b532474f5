#!/usr/bin/env python3
"""CLI for the card score calculator. State persists between runs in the state directory."""

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from card_calculator.audit import audit_log
from card_calculator.service import categories_view, open_calculator, parse_category, state_view


def _print_state(calc, as_json: bool) -> None:
    view = state_view(calc)
    if as_json:
        print(json.dumps(view, indent=2, ensure_ascii=False))
        return
    modifier = "on" if view["modifier"] else "off"
    print(f"Tier {view['level']} (modifier {modifier}) -> ceiling {view['ceiling']}pt")
    for item in view["entities"]:
        flag = "OVER" if item["over_limit"] else "ok"
        print(f"\nCharacter {item['id']}: {item['total']}/{view['ceiling']} [{flag}]")
        for i, cat in enumerate(item["per_category"]):
            cap = f"/{cat['cap']}" if cat["cap"] is not None else ""
            print(f"  [{i}] {cat['label']}: {cat['count']}{cap} = {cat['points']}pt")


def cmd_show(calc, args: argparse.Namespace) -> None:
    """Read-only; the state is printed after dispatch."""


def cmd_categories(calc, args: argparse.Namespace) -> None:
    cats = categories_view()
    if args.json:
        print(json.dumps(cats, indent=2, ensure_ascii=False))
        return
    for c in cats:
        cap = c["cap"] if c["cap"] is not None else "-"
        print(f"  [{c['index']}] {c['key']:<18} cap={cap:<3} {c['label']}")


def cmd_set_level(calc, args: argparse.Namespace) -> None:
    calc.set_level(args.level)


def cmd_step_level(calc, args: argparse.Namespace) -> None:
    calc.step_level(args.delta)


def cmd_toggle_modifier(calc, args: argparse.Namespace) -> None:
    calc.toggle_modifier()


def cmd_set(calc, args: argparse.Namespace) -> None:
    calc.set_count(args.entity, parse_category(args.category), args.value)


def cmd_inc(calc, args: argparse.Namespace) -> None:
    calc.increment(args.entity, parse_category(args.category))


def cmd_dec(calc, args: argparse.Namespace) -> None:
    calc.decrement(args.entity, parse_category(args.category))


def cmd_reset(calc, args: argparse.Namespace) -> None:
    calc.reset_entity(args.entity)


def cmd_reset_all(calc, args: argparse.Namespace) -> None:
    calc.reset_all()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Card score calculator for three characters")
    parser.add_argument("--state-dir", type=Path, default=None, help="State directory (or CALCULATOR_STATE_DIR env)")
    parser.add_argument("--json", action="store_true", help="Output JSON")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("show", help="Print tier, ceiling and every character's total").set_defaults(func=cmd_show)
    sub.add_parser("categories", help="List card categories with caps").set_defaults(func=cmd_categories)

    p_level = sub.add_parser("set-level", help="Set the tier (values below 1 become 1)")
    p_level.add_argument("level", help="New tier")
    p_level.set_defaults(func=cmd_set_level)

    p_step = sub.add_parser("step-level", help="Raise or lower the tier by DELTA")
    p_step.add_argument("delta", type=int, help="e.g. 1 or -1")
    p_step.set_defaults(func=cmd_step_level)

    sub.add_parser("toggle-modifier", help="Flip the +1 tier modifier").set_defaults(func=cmd_toggle_modifier)

    p_set = sub.add_parser("set", help="Set a card count (clamped to the category cap)")
    p_set.add_argument("entity", type=int, help="Character 1-3")
    p_set.add_argument("category", help="Category index 0-7")
    p_set.add_argument("value", help="New count")
    p_set.set_defaults(func=cmd_set)

    for name, func, help_text in (
        ("inc", cmd_inc, "Add one card (no-op at the cap)"),
        ("dec", cmd_dec, "Remove one card (never below 0)"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("entity", type=int, help="Character 1-3")
        p.add_argument("category", help="Category index 0-7")
        p.set_defaults(func=func)

    p_reset = sub.add_parser("reset", help="Zero one character's counts")
    p_reset.add_argument("entity", type=int, help="Character 1-3")
    p_reset.set_defaults(func=cmd_reset)

    sub.add_parser("reset-all", help="Zero all characters (tier is kept)").set_defaults(func=cmd_reset_all)

    args = parser.parse_args(argv)

    calc = open_calculator(args.state_dir)
    try:
        args.func(calc, args)
    except (KeyError, IndexError) as e:
        audit_log(action=args.command, status="error", error=str(e), extra={"source": "cli"})
        print(f"Error: {e.args[0] if e.args else e}", file=sys.stderr)
        sys.exit(1)

    if args.command == "categories":
        return
    if args.command != "show":
        audit_log(
            action=args.command,
            status="success",
            entity=getattr(args, "entity", None),
            level=calc.level,
            modifier=calc.modifier,
            ceiling=calc.ceiling,
            extra={"source": "cli"},
        )
    _print_state(calc, args.json)


if __name__ == "__main__":
    main()

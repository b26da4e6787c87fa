import argparse
import logging

from bubbles import BubbleColor
from engine import BubbleEngine, ShotOutcome
import render


def _load(path: str) -> BubbleEngine:
    eng = BubbleEngine(rows=0)
    eng.load_json(path)
    return eng


def _color(name: str) -> BubbleColor:
    try:
        return BubbleColor[name.upper()]
    except KeyError:
        raise argparse.ArgumentTypeError(
            f"unknown color {name!r}; choose from {', '.join(c.name for c in BubbleColor)}"
        ) from None


def _report(result) -> None:
    if result is None:
        print("Aim rejected: shots must travel upward")
        return
    placed = f" at ({result.placed.row},{result.placed.col})" if result.placed else ""
    print(f"{result.outcome.value}{placed}: popped {len(result.popped)}, "
          f"dropped {len(result.dropped)}, items {[i.name for i in result.items]}")
    if result.outcome is ShotOutcome.NO_SNAP:
        print("No free cell: game over")
    elif result.crossed_death_line:
        print("Death line crossed: game over")
    elif result.cleared:
        print("Field cleared: victory")


def cmd_new(args):
    eng = BubbleEngine(rows=args.rows, seed=args.seed)
    eng.save_json(args.out)
    print(f"Field with {len(eng.field)} bubbles saved to {args.out}")


def cmd_shoot(args):
    eng = _load(args.field)
    result = eng.play_shot((args.x, args.y), args.color)
    _report(result)
    eng.save_json(args.save or args.field)


def cmd_beam(args):
    eng = _load(args.field)
    result = eng.fire_beam(args.angle)
    _report(result)
    eng.save_json(args.save or args.field)


def cmd_push(args):
    eng = BubbleEngine(rows=0, seed=args.seed)
    eng.load_json(args.field)
    new_rows = eng.push_rows(args.rows)
    print(f"Pushed {len(new_rows)} new bubbles")
    if eng.crossed_death_line():
        print("Death line crossed: game over")
    eng.save_json(args.save or args.field)


def cmd_summary(args):
    eng = _load(args.field)
    print(eng.summary())


def cmd_export(args):
    eng = _load(args.field)
    render.render_topdown(eng.field, args.png, eng.mods, show_grid=not args.no_grid)
    print(f"Saved {args.png}")


def main():
    ap = argparse.ArgumentParser(description="Headless CLI for the bubble grid engine")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = ap.add_subparsers()

    ap_new = sub.add_parser("new", help="Generate a new field")
    ap_new.add_argument("--rows", type=int, default=5)
    ap_new.add_argument("--seed", type=int, default=None)
    ap_new.add_argument("--out", default="field.json")
    ap_new.set_defaults(func=cmd_new)

    ap_shoot = sub.add_parser("shoot", help="Fire a bubble at a pixel target")
    ap_shoot.add_argument("field")
    ap_shoot.add_argument("x", type=float)
    ap_shoot.add_argument("y", type=float)
    ap_shoot.add_argument("--color", type=_color, default=BubbleColor.RED)
    ap_shoot.add_argument("--save", default=None, help="Write result here instead of in place")
    ap_shoot.set_defaults(func=cmd_shoot)

    ap_beam = sub.add_parser("beam", help="Fire an instant laser beam")
    ap_beam.add_argument("field")
    ap_beam.add_argument("angle", type=float, help="Radians, screen space (up is -pi/2)")
    ap_beam.add_argument("--save", default=None)
    ap_beam.set_defaults(func=cmd_beam)

    ap_push = sub.add_parser("push", help="Push new rows in from the ceiling")
    ap_push.add_argument("field")
    ap_push.add_argument("--rows", type=int, default=2)
    ap_push.add_argument("--seed", type=int, default=None)
    ap_push.add_argument("--save", default=None)
    ap_push.set_defaults(func=cmd_push)

    ap_sum = sub.add_parser("summary", help="Print summary")
    ap_sum.add_argument("field")
    ap_sum.set_defaults(func=cmd_summary)

    ap_exp = sub.add_parser("export", help="Render field to PNG")
    ap_exp.add_argument("--field", required=True, help="Field JSON file")
    ap_exp.add_argument("--png", required=True, help="PNG path")
    ap_exp.add_argument("--no-grid", action="store_true", help="Hide empty cell markers")
    ap_exp.set_defaults(func=cmd_export)

    args = ap.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    if hasattr(args, "func"):
        args.func(args)
    else:
        ap.print_help()

if __name__ == "__main__":
    main()

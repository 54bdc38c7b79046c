from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import re
import sys

from calchrono.core.errors import CalendarError
from calchrono.core.time import parse_ymd

_DATE_RE = re.compile(r"^-?\d{1,9}-\d{1,2}-\d{1,2}$")

LOG_FORMAT = "%(asctime)s  [%(levelname)s]  %(name)s › %(message)s"


def _setup_logging(verbose: int) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S")


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _parse_field(s: str) -> tuple[str, int]:
    if "=" not in s:
        raise argparse.ArgumentTypeError(f"expected FIELD=VALUE, got {s!r}")
    key, value = s.split("=", 1)
    try:
        return key.strip(), int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"value of {key} must be an integer, got {value!r}") from None


def cmd_list(argv: list[str]) -> int:
    import calchrono

    p = argparse.ArgumentParser(prog="calchrono list", description="List registered calendars")
    p.parse_args(argv)

    for name in calchrono.list_calendars():
        cal = calchrono.get_calendar(name)
        eras = ", ".join(e.name for e in cal.eras)
        print(f"{cal.id:<14} {cal.calendar_type:<14} eras: {eras}")
    return 0


def cmd_convert(argv: list[str]) -> int:
    import calchrono

    p = argparse.ArgumentParser(prog="calchrono convert", description="Convert a date between calendars")
    p.add_argument("date", help="YYYY-MM-DD (proleptic year in the source calendar)")
    p.add_argument("--from", dest="source", default="ISO", help="source calendar (default: ISO)")
    p.add_argument("--to", dest="targets", action="append", default=[],
                   help="target calendar (repeatable; default: all)")
    args = p.parse_args(argv)

    src = calchrono.date(*parse_ymd(args.date), calendar=args.source)
    targets = args.targets or calchrono.list_calendars()
    print(f"{src}  (epoch day {src.to_epoch_day()})")
    for name in targets:
        try:
            print(f"  {calchrono.convert(src, name)}")
        except CalendarError as ex:
            print(f"  {name}: {ex}")
    return 0


def cmd_resolve(argv: list[str]) -> int:
    import calchrono

    p = argparse.ArgumentParser(prog="calchrono resolve", description="Resolve a date from calendar fields")
    p.add_argument("fields", nargs="+", type=_parse_field, help="FIELD=VALUE, e.g. year=2024 month=2 day=30")
    p.add_argument("--calendar", default="ISO")
    p.add_argument("--style", choices=["strict", "smart", "lenient"], default="smart")
    args = p.parse_args(argv)

    d = calchrono.resolve_date(args.fields, args.style, calendar=args.calendar)
    if d is None:
        print("unresolved: not enough fields to determine a date")
        return 1
    print(f"{d}  (ISO {d.to_iso().isoformat()}, epoch day {d.to_epoch_day()})")
    return 0


def cmd_table(argv: list[str]) -> int:
    import calchrono

    p = argparse.ArgumentParser(prog="calchrono table", description="Month table of one year")
    p.add_argument("year", type=int)
    p.add_argument("--calendar", default="Hijrah-civil")
    args = p.parse_args(argv)

    rows = calchrono.months_in_year(args.year, calendar=args.calendar)
    total = 0
    for r in rows:
        total += r["length"]
        print(f"{r['year']:>6}-{r['month']:02d}  {r['length']:>2} days  "
              f"{r['first_iso'].isoformat()} .. {r['last_iso'].isoformat()}")
    print(f"year length: {total}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Shorthand: `calchrono YYYY-MM-DD ...` converts an ISO date.
    if argv and _DATE_RE.match(argv[0]):
        return cmd_convert(argv)

    p = argparse.ArgumentParser(prog="calchrono", description="Multi-calendar chronology toolkit CLI.")
    p.add_argument("-v", "--verbose", action="count", default=0, help="more logging (-v info, -vv debug)")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("list", help="List registered calendars")
    sub.add_parser("convert", help="Convert a date between calendars")
    sub.add_parser("resolve", help="Resolve a date from calendar fields")
    sub.add_parser("table", help="Print the month table of one year")

    p_diag = sub.add_parser("diag", help="Diagnostics tools (need the diagnostics extra)")
    p_diag.add_argument("tool", choices=["month-table"], help="Which diagnostic to run")

    args, rest = p.parse_known_args(argv)
    _setup_logging(args.verbose)

    commands = {
        "list": cmd_list,
        "convert": cmd_convert,
        "resolve": cmd_resolve,
        "table": cmd_table,
    }
    try:
        if args.cmd in commands:
            return commands[args.cmd](rest)
        if args.cmd == "diag":
            tool_map = {
                "month-table": "calchrono.diagnostics.month_table",
            }
            return _run_module_main(tool_map[args.tool], rest)
    except (CalendarError, KeyError) as ex:
        print(f"error: {ex}", file=sys.stderr)
        return 2

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())

#!/usr/bin/env python3
"""
Month-table diagnostics for a tabulated calendar.

Prints the month-length and year-length distribution of the table and,
with --out, plots the drift of each month start against a uniform mean
month (the average month length over the whole table).
"""
from __future__ import annotations

import argparse
from typing import List, Optional

import calchrono
from calchrono.engines.variable_month import VariableMonthDayCount, VariableMonthTable


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "calchrono[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "calchrono[diagnostics]"') from e


def table_of(calendar: str) -> VariableMonthTable:
    day_count = calchrono.get_calendar(calendar).day_count
    if not isinstance(day_count, VariableMonthDayCount):
        raise SystemExit(f"Calendar '{calendar}' is not table driven")
    return day_count.table


def month_stats(np, table: VariableMonthTable):
    starts = np.asarray(table.month_starts, dtype=np.int64)
    lengths = np.diff(starts)
    years = np.arange(table.min_year, table.max_year + 1)
    year_lengths = lengths.reshape(-1, 12).sum(axis=1)
    return starts, lengths, years, year_lengths


def drift(np, starts):
    """Month starts minus a uniform mean month from the first start, in days."""
    n = np.arange(len(starts))
    mean_month = (starts[-1] - starts[0]) / (len(starts) - 1)
    return starts - (starts[0] + n * mean_month), mean_month


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Month-length statistics of a tabulated calendar.")
    p.add_argument("--calendar", default="Hijrah-civil")
    p.add_argument("--out", default=None, help="Write a drift plot to this file (PNG/PDF)")
    p.add_argument("--dpi", type=int, default=150)
    args = p.parse_args(argv)

    np = _need_numpy()
    table = table_of(args.calendar)
    starts, lengths, years, year_lengths = month_stats(np, table)
    offsets, mean_month = drift(np, starts)

    print(f"{args.calendar}: years {table.min_year}..{table.max_year}, {len(lengths)} months")
    values, counts = np.unique(lengths, return_counts=True)
    for v, c in zip(values, counts):
        print(f"  month length {int(v)}: {int(c)}")
    values, counts = np.unique(year_lengths, return_counts=True)
    for v, c in zip(values, counts):
        print(f"  year length {int(v)}: {int(c)}")
    leap = int((year_lengths > 354).sum())
    print(f"  leap years: {leap} of {len(years)}")
    print(f"  mean month: {mean_month:.6f} days")
    print(f"  drift against mean month: {offsets.min():+.3f} .. {offsets.max():+.3f} days")

    if args.out:
        plt = _need_matplotlib()
        fig, ax = plt.subplots(figsize=(12, 3.6))
        x = table.min_year + np.arange(len(offsets)) / 12.0
        ax.plot(x, offsets, lw=0.8, color="0.15")
        ax.axhline(0.0, lw=0.6, color="0.6")
        ax.set_xlabel("Year")
        ax.set_ylabel("Month start - mean (days)")
        ax.set_title(f"{args.calendar}: month starts against a {mean_month:.4f}-day mean month")
        fig.tight_layout()
        fig.savefig(args.out, dpi=args.dpi)
        print(f"Wrote {args.out}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""Diagnostics package.

Optional tools; they need the diagnostics extra (numpy, matplotlib).
"""

__all__ = ["month_table"]

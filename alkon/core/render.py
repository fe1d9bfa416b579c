"""Plain-text table rendering, aligned like ``column -t``."""
from __future__ import annotations
from typing import Iterable, List, Optional, Sequence


def format_table(rows: Iterable[Sequence[object]], header: Optional[Sequence[str]] = None, gap: int = 2) -> str:
    """Render rows as left-aligned columns separated by `gap` spaces.

    Args:
        rows: Table body; cells are converted with ``str``.
        header: Optional first row.
        gap: Number of spaces between columns.

    Returns:
        The table text without a trailing newline, or "" for no rows and
        no header. Trailing whitespace is stripped from each line.
    """
    table: List[List[str]] = [[str(c) for c in r] for r in ([header] if header else [])]
    table += [[str(c) for c in r] for r in rows]
    if not table:
        return ""
    ncols = max(len(r) for r in table)
    widths = [max((len(r[i]) for r in table if i < len(r)), default=0) for i in range(ncols)]
    sep = " " * gap
    return "\n".join(sep.join(c.ljust(widths[i]) for i, c in enumerate(r)).rstrip() for r in table)

"""Human-readable table rendering. Deterministic: same Results, same text."""

from __future__ import annotations

from typing import Any, List

from kubedig.core.models import Results


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple, set)):
        return ", ".join(str(v) for v in value)
    return str(value)


def render_results(results: Results) -> str:
    lines: List[str] = [f"### {results.name.upper()} ###"]

    if results.headers or results.contents:
        headers = [h.upper() for h in results.headers]
        rows = [[_cell(c) for c in row] for row in results.contents]
        ncols = max([len(headers)] + [len(r) for r in rows])
        widths = [0] * ncols
        for row in [headers] + rows:
            for i, c in enumerate(row):
                widths[i] = max(widths[i], len(c))

        def _fmt(row: List[str]) -> str:
            padded = [c.ljust(widths[i]) for i, c in enumerate(row)]
            return "  ".join(padded).rstrip()

        if headers:
            lines.append(_fmt(headers))
        for row in rows:
            lines.append(_fmt(row))

    for comment in results.comments:
        lines.append(f"# {comment}")
    return "\n".join(lines)


def render_all(all_results: List[Results]) -> str:
    return "\n\n".join(render_results(r) for r in all_results)

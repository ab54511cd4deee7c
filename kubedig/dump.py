"""JSON/YAML dump helpers (CLI-friendly, testable).

We keep CLI printing logic out of core modules; these return plain dicts/strings.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Literal

import yaml

from kubedig.core.models import Results

DumpFormat = Literal["json", "yaml"]


def results_to_json_dict(results: Results) -> Dict[str, Any]:
    """
    One bucket as a dict: rows become objects keyed by header.

    Rows without headers are kept positional under `rows`.
    """
    out: Dict[str, Any] = {"name": results.name}
    if results.comments:
        out["comments"] = list(results.comments)
    if results.headers:
        out["results"] = [dict(zip(results.headers, row)) for row in results.contents]
    else:
        out["rows"] = [list(row) for row in results.contents]
    return out


def dump_results(all_results: List[Results], fmt: DumpFormat = "json") -> str:
    payload = [results_to_json_dict(r) for r in all_results]
    if fmt == "yaml":
        return yaml.safe_dump(payload, sort_keys=False, default_flow_style=False)
    return json.dumps(payload, indent=2, sort_keys=False)

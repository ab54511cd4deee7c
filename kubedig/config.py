"""Runtime settings (env/ConfigMap driven).

CLI flags override these; everything here has a safe default so the tool runs with no env at all.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

OUTPUT_FORMATS = ("human", "json", "yaml")


def _env_bool(name: str, default: bool = False) -> bool:
    raw = (os.getenv(name) or "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "y", "on")


def _env_str(name: str) -> Optional[str]:
    raw = (os.getenv(name) or "").strip()
    return raw or None


@dataclass(frozen=True)
class Settings:
    # None means "resolve from the current context".
    namespace: Optional[str] = None
    output: str = "human"
    log_level: str = "WARNING"
    # Buckets that declare side effects are refused unless this is set.
    side_effects: bool = False


def load_settings() -> Settings:
    """
    Load settings from env.

    Recognised vars:
    - KUBEDIG_NAMESPACE=my-namespace
    - KUBEDIG_OUTPUT=human|json|yaml
    - KUBEDIG_LOG_LEVEL=DEBUG|INFO|WARNING|ERROR
    - KUBEDIG_SIDE_EFFECTS=0|1
    """
    output = (_env_str("KUBEDIG_OUTPUT") or "human").lower()
    if output not in OUTPUT_FORMATS:
        output = "human"

    return Settings(
        namespace=_env_str("KUBEDIG_NAMESPACE"),
        output=output,
        log_level=(_env_str("KUBEDIG_LOG_LEVEL") or "WARNING").upper(),
        side_effects=_env_bool("KUBEDIG_SIDE_EFFECTS", False),
    )

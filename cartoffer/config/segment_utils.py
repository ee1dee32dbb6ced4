"""
User segment map utilities.

Provides the user_id -> customer segment mapping served by the mock
segment endpoint and used by the static segment resolver, via either:
- Environment variable CARTOFFER_SEGMENT_MAP containing a JSON object
- JSON file at cartoffer/config/segments.json
Fallback: the default test users (1 -> p1, 2 -> p2, 3 -> p3).
"""

import json
import os
from pathlib import Path
from typing import Dict, Any


DEFAULT_SEGMENT_MAP: Dict[int, str] = {1: "p1", 2: "p2", 3: "p3"}

_CACHE: Dict[int, str] | None = None


def _normalize(data: Dict[Any, Any]) -> Dict[int, str]:
    """Keys arrive as JSON strings; user ids are integers. Non-string segments are skipped."""
    segments = {}
    for k, v in data.items():
        if not isinstance(v, str) or not v:
            print(f"Skipping user {k}: segment {v!r} is not a label")
            continue
        segments[int(k)] = v
    return segments


def get_segment_map() -> Dict[int, str]:
    global _CACHE
    if _CACHE is not None:
        return _CACHE

    # 1) Env var
    env_val = os.getenv("CARTOFFER_SEGMENT_MAP")
    if env_val:
        try:
            m = json.loads(env_val)
            if isinstance(m, dict):
                _CACHE = _normalize(m)
                return _CACHE
        except (ValueError, TypeError) as e:
            print(f"Ignoring invalid CARTOFFER_SEGMENT_MAP: {e}")

    # 2) JSON file
    cfg_path = Path(__file__).parent / "segments.json"
    if cfg_path.exists():
        try:
            data = json.loads(cfg_path.read_text(encoding="utf-8"))
            if isinstance(data, dict):
                _CACHE = _normalize(data)
                return _CACHE
        except (ValueError, TypeError) as e:
            print(f"Ignoring invalid {cfg_path.name}: {e}")

    _CACHE = dict(DEFAULT_SEGMENT_MAP)
    return _CACHE


def reset_segment_map_cache():
    """Drop the cached map so the next call re-reads env and file."""
    global _CACHE
    _CACHE = None

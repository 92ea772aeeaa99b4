from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


DEFAULT_CONFIG_PATH = "config/params.yaml"

DEFAULTS: Dict[str, Any] = {
    "figma": {
        "base_url": "https://api.figma.com/v1",
        "file_key": None,
        "frame_ids": [],
        "frame_names": [],
        "scales": [1],
        "format": "png",
        "timeout_s": 30.0,
    },
    "snapshot": {"out_dir": "data/figmassets"},
    "logging": {"level": "INFO"},
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load YAML params over the built-in defaults.
    A missing file yields the defaults; a file that is not a mapping is rejected.
    """
    p = Path(path or DEFAULT_CONFIG_PATH)
    if not p.exists():
        return copy.deepcopy(DEFAULTS)
    with p.open("r") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config {p} must be a YAML mapping")
    return _merge(DEFAULTS, data)

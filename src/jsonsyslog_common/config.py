from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Union

import yaml

from jsonsyslog_common.models import SendOptions


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {p}")
    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError("YAML root must be a mapping/dict")
    return data


def load_send_options(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a send-options file. Keys may be kebab-case (server-name) and must
    name SendOptions fields; values are validated later, after merging.
    """
    options = {str(k).replace("-", "_"): v for k, v in load_yaml(path).items()}
    unknown = sorted(set(options) - set(SendOptions.model_fields))
    if unknown:
        raise ValueError(f"Unknown send options in {path}: {', '.join(unknown)}")
    return options

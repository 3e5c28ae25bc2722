from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Optional

ENV_PREFIX = "TEXTSCRUB_"


def _parse_env_line(raw_line: str) -> Optional[tuple]:
    line = raw_line.strip()
    if not line or line.startswith("#"):
        return None
    if line.startswith("export "):
        line = line[len("export ") :].strip()
    if "=" not in line:
        return None

    key, value = line.split("=", 1)
    key = key.strip()
    value = value.strip()
    if not key:
        return None
    if value and len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
        value = value[1:-1]
    elif " #" in value:
        value = value.split(" #", 1)[0].rstrip()
    return key, value


def load_env_file(path: str | Path | None = None, override: bool = False) -> Dict[str, str]:
    """Export ``TEXTSCRUB_*`` entries from a dotenv file; other keys are ignored."""
    env_path = Path(path or os.getenv("TEXTSCRUB_ENV_FILE", ".env"))
    if not env_path.is_file():
        return {}

    loaded: Dict[str, str] = {}
    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        parsed = _parse_env_line(raw_line)
        if parsed is None:
            continue
        key, value = parsed
        if not key.startswith(ENV_PREFIX):
            continue
        if not override and key in os.environ:
            continue
        os.environ[key] = value
        loaded[key] = value
    return loaded

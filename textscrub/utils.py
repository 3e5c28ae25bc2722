from __future__ import annotations

from pathlib import Path
from typing import Any, Dict


def load_json(path: str | Path) -> Dict[str, Any]:
    import json

    with Path(path).open("r", encoding="utf-8") as f:
        return json.load(f)


def write_json(path: str | Path, payload: Any) -> None:
    import json

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)


def escape_non_printable(text: str) -> str:
    out = []
    for ch in text:
        if ch in {"\n", "\r", "\t"} or not (ch.isprintable() or ch.isspace()):
            out.append(ch.encode("unicode_escape").decode("ascii"))
        elif ch.isspace():
            out.append(" ")
        else:
            out.append(ch)
    return "".join(out)

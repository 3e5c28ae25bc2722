from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional
import logging
import os

import jsonschema
try:
    import yaml
except ImportError:  # pragma: no cover - exercised only in minimal environments
    yaml = None

from textscrub.models import NormalizerSettings
from textscrub.utils import load_json

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _read_settings_file(path: Path) -> Dict[str, Any]:
    suffix = path.suffix.lower()
    with path.open("r", encoding="utf-8") as f:
        if suffix in {".yaml", ".yml"}:
            if yaml is None:
                raise RuntimeError(
                    "PyYAML is required to load YAML settings. Install dependencies from pyproject.toml."
                )
            payload = yaml.safe_load(f)
        elif suffix == ".json":
            import json

            payload = json.load(f)
        else:
            raise ValueError(f"Unsupported settings format: {suffix}")
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValueError("Settings file must be a mapping object")
    return payload


def _apply_env_overrides(payload: Dict[str, Any]) -> Dict[str, Any]:
    defaults = NormalizerSettings()
    overrides = {
        "max_token_chars": _env_int(
            "TEXTSCRUB_MAX_TOKEN_CHARS", payload.get("max_token_chars", defaults.max_token_chars)
        ),
        "language_filter": _env_bool(
            "TEXTSCRUB_LANGUAGE_FILTER", payload.get("language_filter", defaults.language_filter)
        ),
        "language_confidence_threshold": _env_float(
            "TEXTSCRUB_LANGUAGE_THRESHOLD",
            payload.get("language_confidence_threshold", defaults.language_confidence_threshold),
        ),
        "allowed_language": os.getenv(
            "TEXTSCRUB_ALLOWED_LANGUAGE", payload.get("allowed_language", defaults.allowed_language)
        ),
    }
    merged = dict(payload)
    merged.update(overrides)
    return merged


def load_settings_schema() -> Dict[str, Any]:
    schema_path = Path(__file__).resolve().parent / "schemas" / "settings_schema.json"
    return load_json(schema_path)


def load_settings(path: Optional[str | Path] = None) -> NormalizerSettings:
    payload: Dict[str, Any] = {}
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")
        payload = _read_settings_file(path)
        jsonschema.validate(instance=payload, schema=load_settings_schema())

    payload = _apply_env_overrides(payload)
    settings = NormalizerSettings.model_validate(payload)
    logger.info(
        "settings_loaded path=%s max_token_chars=%s language_filter=%s threshold=%s",
        path,
        settings.max_token_chars,
        settings.language_filter,
        settings.language_confidence_threshold,
    )
    return settings

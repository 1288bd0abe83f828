"""Helpers to load, validate and persist configuration files."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .schema import ReportSettings

CONFIG_DIR = Path(__file__).resolve().parent

ENV_KEYS = {
    "PUSHSTREAM_INPUT": "input_path",
    "PUSHSTREAM_OUTPUT": "output_path",
    "PUSHSTREAM_INTERVAL_S": "interval_s",
    "PUSHSTREAM_DECIMALS": "decimals",
    "PUSHSTREAM_VALIDATE_ORDER": "validate_order",
    "PUSHSTREAM_LOG_LEVEL": "log_level",
}


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at {path}, found {type(data).__name__}")
    return data


def _write_yaml(path: Path, payload: Mapping[str, Any]):
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        yaml.safe_dump(dict(payload), fh, sort_keys=False, allow_unicode=True)


def load_report_settings(
    path: Optional[Path] = None, base: Optional[ReportSettings] = None
) -> ReportSettings:
    """Read and validate the report settings from report.yaml.

    Keys missing from the file keep the value in ``base`` (the built-in
    defaults when omitted).
    """

    cfg_path = Path(path) if path is not None else CONFIG_DIR / "report.yaml"
    payload = base.to_dict() if base is not None else {}
    payload.update(_read_yaml(cfg_path))
    return ReportSettings.from_mapping(payload)


def save_report_settings(settings: ReportSettings, path: Optional[Path] = None):
    """Persist the report settings using the canonical schema."""

    cfg_path = Path(path) if path is not None else CONFIG_DIR / "report.yaml"
    _write_yaml(cfg_path, settings.to_dict())


def report_settings_from_env(env: Mapping[str, Any]) -> ReportSettings:
    """Create report settings from environment variables over the defaults."""

    payload = default_report_settings().to_dict()
    for env_key, field_name in ENV_KEYS.items():
        value = env.get(env_key)
        if value is None or value == "":
            continue
        payload[field_name] = value
    return ReportSettings.from_mapping(payload)


def default_report_settings() -> ReportSettings:
    """Return the built-in report settings (60 s window, tab-separated files)."""

    return ReportSettings()

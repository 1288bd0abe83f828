"""Configuration schemas and persistence helpers for the report runner."""

from .schema import ReportSettings
from .store import (
    default_report_settings,
    load_report_settings,
    report_settings_from_env,
    save_report_settings,
)

__all__ = [
    "ReportSettings",
    "default_report_settings",
    "load_report_settings",
    "report_settings_from_env",
    "save_report_settings",
]

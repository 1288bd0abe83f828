"""Reporte de ventana deslizante (count, sum, min, max) sobre series temporales."""

from .metrics import ReportMetrics
from .model import (
    TSData,
    TSDataFormatError,
    TSReportData,
    WindowState,
    format_report,
    parse_ts_data,
)
from .windowed import OutOfOrderTimestampError, generate_windowed_report, window_step

__all__ = [
    "OutOfOrderTimestampError",
    "ReportMetrics",
    "TSData",
    "TSDataFormatError",
    "TSReportData",
    "WindowState",
    "format_report",
    "generate_windowed_report",
    "parse_ts_data",
    "window_step",
]

import json
import logging
import time
from typing import Dict, Optional

from .model import TSReportData


class ReportMetrics:
    """Accumulator for report run counters, logged as a JSON payload."""

    def __init__(self, log_interval_s: float = 30.0, logger: logging.Logger | None = None) -> None:
        self.log_interval_s = max(0.0, float(log_interval_s))
        self._logger = logger or logging.getLogger(__name__)
        self._start_time = time.time()
        self._last_log_time = self._start_time
        self._counters = self._initial_counters()
        self._last_snapshot = self._counters.copy()
        self._last_window_count: Optional[int] = None

    @staticmethod
    def _initial_counters() -> Dict[str, int]:
        return {
            "lines_read": 0,
            "reports_emitted": 0,
            "points_evicted": 0,
            "max_window_size": 0,
        }

    @property
    def counters(self) -> Dict[str, int]:
        return self._counters.copy()

    def record_line(self, _line: object = None) -> None:
        self._counters["lines_read"] += 1
        self.maybe_log()

    def record_report(self, report: TSReportData) -> None:
        previous = self._last_window_count
        if previous is not None:
            evicted = previous - report.count + 1
            if evicted > 0:
                self._counters["points_evicted"] += evicted
        self._last_window_count = report.count
        self._counters["reports_emitted"] += 1
        if report.count > self._counters["max_window_size"]:
            self._counters["max_window_size"] = report.count
        self.maybe_log()

    def maybe_log(self, force: bool = False) -> None:
        now = time.time()
        interval = now - self._last_log_time
        if not force and (self.log_interval_s <= 0.0 or interval < self.log_interval_s):
            return

        payload = self._build_payload(now, interval)
        self._last_log_time = now
        self._last_snapshot = self._counters.copy()

        self._logger.info("report_metrics %s", json.dumps(payload, sort_keys=True))

    def _build_payload(self, now: float, interval: float) -> Dict[str, object]:
        delta = {
            key: self._counters[key] - self._last_snapshot.get(key, 0)
            for key in self._counters
        }
        return {
            "type": "report_metrics",
            "uptime_s": round(now - self._start_time, 3),
            "interval_s": round(interval, 3),
            "counters": self._counters.copy(),
            "delta": delta,
        }

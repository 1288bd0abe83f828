"""Typed configuration models implemented with dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _as_str(value: Any, field_name: str, *, optional: bool = False) -> Optional[str]:
    if value is None:
        if optional:
            return None
        raise ValueError(f"'{field_name}' es obligatorio")
    text = str(value).strip()
    if not text and not optional:
        raise ValueError(f"'{field_name}' no puede estar vacío")
    return text or None


def _as_int(value: Any, field_name: str) -> int:
    if value is None:
        raise ValueError(f"'{field_name}' es obligatorio")
    if isinstance(value, bool):
        raise ValueError(f"'{field_name}' debe ser un entero válido")
    try:
        result = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"'{field_name}' debe ser un entero válido") from exc
    return result


def _as_float(value: Any, field_name: str) -> float:
    if value is None:
        raise ValueError(f"'{field_name}' es obligatorio")
    try:
        result = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"'{field_name}' debe ser numérico") from exc
    return result


def _as_bool(value: Any, default: bool = True) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in {"1", "true", "yes", "si", "sí"}:
        return True
    if text in {"0", "false", "no"}:
        return False
    return default


@dataclass
class ReportSettings:
    input_path: str = "data.txt"
    output_path: str = "output.txt"
    interval_s: int = 60
    decimals: int = 5
    delimiter: str = "\t"
    encoding: str = "utf-8"
    validate_order: bool = True
    metrics_log_interval_s: float = 30.0
    log_level: str = "INFO"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "ReportSettings":
        if not data:
            return cls()
        input_path = _as_str(data.get("input_path", "data.txt"), "input_path")
        output_path = _as_str(data.get("output_path", "output.txt"), "output_path")

        interval_s = _as_int(data.get("interval_s", 60), "interval_s")
        if interval_s <= 0:
            raise ValueError("interval_s debe ser > 0")

        decimals = _as_int(data.get("decimals", 5), "decimals")
        if decimals < 0:
            raise ValueError("decimals debe ser >= 0")

        # el delimitador por defecto es un tabulador: no se aplica strip()
        delimiter_raw = data.get("delimiter", "\t")
        delimiter = "" if delimiter_raw is None else str(delimiter_raw)
        if not delimiter:
            raise ValueError("'delimiter' no puede estar vacío")

        encoding = _as_str(data.get("encoding", "utf-8"), "encoding") or "utf-8"
        validate_order = _as_bool(data.get("validate_order"), True)

        metrics_interval = _as_float(
            data.get("metrics_log_interval_s", 30.0),
            "metrics_log_interval_s",
        )
        if metrics_interval < 0:
            raise ValueError("metrics_log_interval_s debe ser >= 0")

        log_level = (_as_str(data.get("log_level", "INFO"), "log_level") or "INFO").upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(f"log_level debe ser uno de {', '.join(LOG_LEVELS)}")

        return cls(
            input_path=input_path,
            output_path=output_path,
            interval_s=interval_s,
            decimals=decimals,
            delimiter=delimiter,
            encoding=encoding,
            validate_order=validate_order,
            metrics_log_interval_s=metrics_interval,
            log_level=log_level,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "input_path": self.input_path,
            "output_path": self.output_path,
            "interval_s": self.interval_s,
            "decimals": self.decimals,
            "delimiter": self.delimiter,
            "encoding": self.encoding,
            "validate_order": self.validate_order,
            "metrics_log_interval_s": self.metrics_log_interval_s,
            "log_level": self.log_level,
        }

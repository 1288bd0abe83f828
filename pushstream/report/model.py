"""Modelos del reporte de ventana deslizante: puntos, estado de ventana y registros."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple

_TIMESTAMP_RE = re.compile(r"[+-]?[0-9]+")
_MEASUREMENT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class TSDataFormatError(ValueError):
    """Línea de entrada que no tiene el formato ``timestamp<TAB>medida``."""


@dataclass(frozen=True)
class TSData:
    """Punto de una serie temporal: segundos desde epoch y su medida."""

    timestamp: int
    measurement: float


@dataclass(frozen=True)
class WindowState:
    """Estado de la ventana tras absorber el último punto.

    ``buffer`` contiene, en orden de llegada, los puntos a menos de
    ``interval`` segundos del más reciente; ``count``, ``sum``, ``min`` y
    ``max`` se mantienen consistentes con ese contenido. Cada ``absorb``
    devuelve un estado nuevo y deja intacto el anterior.
    """

    buffer: Tuple[TSData, ...]
    count: int
    sum: float
    min: float
    max: float

    @classmethod
    def initial(cls, data: TSData) -> "WindowState":
        value = data.measurement
        return cls(buffer=(data,), count=1, sum=value, min=value, max=value)

    @property
    def start_timestamp(self) -> int:
        return self.buffer[0].timestamp

    @property
    def latest_timestamp(self) -> int:
        return self.buffer[-1].timestamp

    def absorb(self, data: TSData, interval: int) -> "WindowState":
        evicted = 0
        evicted_sum = 0.0
        for buffered in self.buffer:
            if data.timestamp - buffered.timestamp < interval:
                break
            evicted += 1
            evicted_sum += buffered.measurement

        new_buffer = self.buffer[evicted:] + (data,)
        if evicted:
            # los puntos desalojados pudieron ser el mínimo o el máximo
            values = [point.measurement for point in new_buffer]
            new_min, new_max = min(values), max(values)
        else:
            new_min = min(self.min, data.measurement)
            new_max = max(self.max, data.measurement)

        return WindowState(
            buffer=new_buffer,
            count=self.count - evicted + 1,
            sum=self.sum - evicted_sum + data.measurement,
            min=new_min,
            max=new_max,
        )


@dataclass(frozen=True)
class TSReportData:
    """Registro emitido por cada punto de entrada."""

    timestamp: int
    measurement: float
    count: int
    sum: float
    min: float
    max: float

    @classmethod
    def from_state(cls, data: TSData, state: WindowState) -> "TSReportData":
        return cls(
            timestamp=data.timestamp,
            measurement=data.measurement,
            count=state.count,
            sum=state.sum,
            min=state.min,
            max=state.max,
        )

    def __str__(self) -> str:
        return format_report(self)


def parse_ts_data(line: str, delimiter: str = "\t") -> TSData:
    """Convierte una línea ``timestamp<delim>medida`` en ``TSData``."""

    fields = line.split(delimiter)
    if len(fields) != 2:
        raise TSDataFormatError(f"Se esperaban 2 campos separados por {delimiter!r}, se obtuvieron {len(fields)}: {line!r}")
    # sólo dígitos ASCII: sin espacios, separadores "_" ni nan/inf
    if not _TIMESTAMP_RE.fullmatch(fields[0]):
        raise TSDataFormatError(f"Timestamp no entero en la línea {line!r}")
    if not _MEASUREMENT_RE.fullmatch(fields[1]):
        raise TSDataFormatError(f"Medida no numérica en la línea {line!r}")
    return TSData(timestamp=int(fields[0]), measurement=float(fields[1]))


def format_report(report: TSReportData, *, decimals: int = 5, delimiter: str = "\t") -> str:
    def fmt(value: float) -> str:
        return f"{value:.{decimals}f}"

    return delimiter.join(
        [
            str(report.timestamp),
            fmt(report.measurement),
            str(report.count),
            fmt(report.sum),
            fmt(report.min),
            fmt(report.max),
        ]
    )

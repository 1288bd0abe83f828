"""Agregación de ventana deslizante construida sobre ``PushStream.map_with_state``."""

from __future__ import annotations

from typing import Optional, Tuple

from pushstream.streams import PushStream

from .model import TSData, TSReportData, WindowState


class OutOfOrderTimestampError(ValueError):
    """Un punto llegó con timestamp menor que el último absorbido."""


def window_step(
    state: Optional[WindowState],
    data: TSData,
    interval: int,
    *,
    validate_order: bool = True,
) -> Tuple[WindowState, TSReportData]:
    """Transición pura ``(estado, punto) -> (nuevo_estado, registro)``."""

    if state is None:
        new_state = WindowState.initial(data)
    else:
        if validate_order and data.timestamp < state.latest_timestamp:
            raise OutOfOrderTimestampError(
                f"Timestamp {data.timestamp} anterior al último absorbido ({state.latest_timestamp})"
            )
        new_state = state.absorb(data, interval)
    return new_state, TSReportData.from_state(data, new_state)


def generate_windowed_report(
    stream: PushStream[TSData],
    interval: int,
    *,
    validate_order: bool = True,
) -> PushStream[TSReportData]:
    """Genera un registro por punto con count/sum/min/max de los últimos ``interval`` segundos.

    Se asume que los timestamps no decrecen; con ``validate_order`` se
    rechaza la entrada desordenada en lugar de producir un resultado indefinido.
    """

    if isinstance(interval, bool) or not isinstance(interval, int) or interval <= 0:
        raise ValueError(f"interval debe ser un entero > 0, se recibió {interval!r}")

    def step(state: Optional[WindowState], data: TSData) -> Tuple[WindowState, TSReportData]:
        return window_step(state, data, interval, validate_order=validate_order)

    return stream.map_with_state(None, step)

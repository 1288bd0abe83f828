"""Celda de asignación única usada por ``PushStream.fold``."""

from __future__ import annotations

from typing import Callable, Generator, Generic, List, TypeVar

U = TypeVar("U")

_PENDING = object()


class FoldResult(Generic[U]):
    """Resultado diferido que se resuelve exactamente una vez.

    La entrega de los streams es síncrona, así que cuando ``push_completion``
    retorna el valor ya está disponible. ``await`` sobre un resultado resuelto
    devuelve el valor sin suspender; sobre uno pendiente lanza ``RuntimeError``
    porque ningún planificador podría resolverlo más tarde.
    """

    def __init__(self) -> None:
        self._value: object = _PENDING
        self._callbacks: List[Callable[["FoldResult[U]"], None]] = []

    def done(self) -> bool:
        return self._value is not _PENDING

    def resolve(self, value: U) -> None:
        if self.done():
            raise RuntimeError("FoldResult ya fue resuelto")
        self._value = value
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback(self)

    def result(self) -> U:
        if not self.done():
            raise RuntimeError("FoldResult todavía no fue resuelto; el stream no ha completado")
        return self._value  # type: ignore[return-value]

    def add_done_callback(self, callback: Callable[["FoldResult[U]"], None]) -> None:
        """Registra ``callback``; se ejecuta de inmediato si ya hay valor."""

        if self.done():
            callback(self)
            return
        self._callbacks.append(callback)

    def __await__(self) -> Generator[None, None, U]:
        return self.result()
        yield  # pragma: no cover - convierte el método en generador

    def __repr__(self) -> str:
        state = f"value={self._value!r}" if self.done() else "pending"
        return f"FoldResult({state})"

"""Stream push síncrono con combinadores encadenables."""

from __future__ import annotations

import logging
from typing import Callable, Generic, Iterable, List, Tuple, TypeVar

from .deferred import FoldResult
from .observer import FunctionObserver, Observer

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")
V = TypeVar("V")
S = TypeVar("S")


class StreamCompletedError(RuntimeError):
    """Operación sobre un stream que ya emitió su señal de fin."""


class PushStream(Generic[T]):
    """Canal de difusión ordenado de elementos más una señal de fin.

    Los observers reciben los elementos en el orden en que se publican y en
    el orden en que se suscribieron. Un observer que se registra tarde no ve
    los elementos publicados antes de su suscripción. La entrega es síncrona:
    ``push`` no retorna hasta que toda la cadena aguas abajo terminó de
    reaccionar.
    """

    def __init__(self, name: str | None = None) -> None:
        self.name = name
        self._observers: List[Observer[T]] = []
        self._completed = False
        self._pushed = 0

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return f"<PushStream{label} observers={len(self._observers)} pushed={self._pushed} completed={self._completed}>"

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    @property
    def pushed_count(self) -> int:
        return self._pushed

    # Suscripción y publicación -----------------------------------------------
    def subscribe(self, observer: Observer[T]) -> Observer[T]:
        """Registra ``observer`` al final de la lista y notifica la suscripción."""

        self._ensure_open("subscribe")
        self._observers.append(observer)
        on_subscribe = getattr(observer, "on_subscribe", None)
        if on_subscribe is not None:
            on_subscribe(self)
        return observer

    def push(self, element: T) -> None:
        self._ensure_open("push")
        self._pushed += 1
        # los que se suscriben durante la entrega reciben desde el próximo elemento
        for observer in tuple(self._observers):
            observer.on_next(self, element)

    def push_all(self, *elements: T) -> None:
        for element in elements:
            self.push(element)

    def push_completion(self) -> None:
        """Envía la señal de fin a todos los observers (una única vez)."""

        self._ensure_open("push_completion")
        self._completed = True
        logger.debug(
            "Stream %r completado tras %d elementos hacia %d observers",
            self.name,
            self._pushed,
            len(self._observers),
        )
        for observer in tuple(self._observers):
            observer.on_complete(self)

    def push_all_and_complete(self, *elements: T) -> None:
        self.push_all(*elements)
        self.push_completion()

    def _ensure_open(self, operation: str) -> None:
        if self._completed:
            raise StreamCompletedError(f"{operation}() sobre un stream ya completado: {self!r}")

    # Combinadores ------------------------------------------------------------
    def foreach(self, fn: Callable[[T], object]) -> Observer[T]:
        """Aplica ``fn`` a cada elemento por sus efectos secundarios."""

        return self.subscribe(FunctionObserver(fn))

    def map(self, mapper: Callable[[T], U]) -> "PushStream[U]":
        observer: _MapperObserver[T, U, U] = _MapperObserver(mapper, _push_one)
        self.subscribe(observer)
        return observer.mapped_stream

    def map_with_state(self, initial: S, mapper: Callable[[S, T], Tuple[S, U]]) -> "PushStream[U]":
        """Mapea cada elemento llevando un estado ``(estado, elemento) -> (nuevo_estado, salida)``."""

        observer: _StatefulMapperObserver[T, U, S] = _StatefulMapperObserver(initial, mapper)
        self.subscribe(observer)
        return observer.mapped_stream

    def flat_map(self, mapper: Callable[[T], Iterable[U]]) -> "PushStream[U]":
        observer: _MapperObserver[T, Iterable[U], U] = _MapperObserver(mapper, _push_many)
        self.subscribe(observer)
        return observer.mapped_stream

    def fold(self, initial: U, folder: Callable[[U, T], U]) -> FoldResult[U]:
        """Acumula un único valor; el resultado se resuelve al completar el stream."""

        observer: _FoldObserver[T, U] = _FoldObserver(initial, folder)
        self.subscribe(observer)
        return observer.result


def _push_one(stream: PushStream[V], value: V) -> None:
    stream.push(value)


def _push_many(stream: PushStream[V], values: Iterable[V]) -> None:
    for value in values:
        stream.push(value)


class _MapperObserver(Observer[T], Generic[T, U, V]):
    """Republica en un stream propio el resultado de ``mapper`` aplicado a cada elemento."""

    def __init__(self, mapper: Callable[[T], U], emit: Callable[[PushStream[V], U], None]) -> None:
        self.mapped_stream: PushStream[V] = PushStream()
        self._mapper = mapper
        self._emit = emit

    def on_next(self, stream: PushStream, element: T) -> None:
        self._emit(self.mapped_stream, self._mapper(element))

    def on_complete(self, stream: PushStream) -> None:
        self.mapped_stream.push_completion()


class _StatefulMapperObserver(Observer[T], Generic[T, U, S]):
    def __init__(self, initial: S, mapper: Callable[[S, T], Tuple[S, U]]) -> None:
        self.mapped_stream: PushStream[U] = PushStream()
        self._state = initial
        self._mapper = mapper

    def on_next(self, stream: PushStream, element: T) -> None:
        new_state, mapped = self._mapper(self._state, element)
        self._state = new_state
        self.mapped_stream.push(mapped)

    def on_complete(self, stream: PushStream) -> None:
        self.mapped_stream.push_completion()


class _FoldObserver(Observer[T], Generic[T, U]):
    def __init__(self, initial: U, folder: Callable[[U, T], U]) -> None:
        self.result: FoldResult[U] = FoldResult()
        self._value = initial
        self._folder = folder

    def on_next(self, stream: PushStream, element: T) -> None:
        self._value = self._folder(self._value, element)

    def on_complete(self, stream: PushStream) -> None:
        self.result.resolve(self._value)

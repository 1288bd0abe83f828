"""Contrato de los observers que se suscriben a un ``PushStream``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:  # pragma: no cover - hints only
    from .stream import PushStream

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)


@runtime_checkable
class Observer(Protocol[T_contra]):
    """Reacciones de un suscriptor a los eventos de un stream.

    ``on_subscribe`` es opcional: ``PushStream.subscribe`` sólo lo invoca si
    el observer lo define. Las clases que heredan explícitamente del
    protocolo lo obtienen como no-op.
    """

    def on_subscribe(self, stream: "PushStream") -> None:
        """Se invoca una vez, justo después de registrarse en ``stream``."""

    def on_next(self, stream: "PushStream", element: T_contra) -> None:
        """Recibe un elemento emitido por ``stream``."""

    def on_complete(self, stream: "PushStream") -> None:
        """Recibe la señal de fin de ``stream``."""


class FunctionObserver(Observer[T], Generic[T]):
    """Observer que aplica una función a cada elemento e ignora el fin del stream."""

    def __init__(self, fn: Callable[[T], object]) -> None:
        self._fn = fn

    def on_next(self, stream: "PushStream", element: T) -> None:
        self._fn(element)

    def on_complete(self, stream: "PushStream") -> None:
        pass

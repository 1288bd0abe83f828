"""Productores que publican una secuencia finita en un ``PushStream``."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Generic, Iterable, TypeVar

from .stream import PushStream

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Source(ABC, Generic[T]):
    """Dueño de un stream al que publica datos cuando se invoca ``start``.

    Todas las transformaciones y observers deben registrarse sobre ``stream``
    antes de llamar a ``start``: lo publicado antes de una suscripción se
    pierde para ese observer.
    """

    def __init__(self, name: str | None = None) -> None:
        self.stream: PushStream[T] = PushStream(name=name)

    @abstractmethod
    def start(self) -> None:
        """Publica todos los elementos y luego la señal de fin."""


class IterableSource(Source[T]):
    """Publica los elementos de un iterable en memoria."""

    def __init__(self, elements: Iterable[T], name: str | None = None) -> None:
        super().__init__(name=name)
        self._elements = elements

    def start(self) -> None:
        count = 0
        for element in self._elements:
            self.stream.push(element)
            count += 1
        self.stream.push_completion()
        logger.info("IterableSource publicó %d elementos", count)

"""Adaptadores de entrada/salida de archivos de texto línea a línea."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, TextIO

from .observer import Observer
from .source import Source
from .stream import PushStream

logger = logging.getLogger(__name__)


class TextFileSource(Source[str]):
    """Lee un archivo línea a línea y publica cada línea sin su terminador."""

    def __init__(self, path: str | Path, *, encoding: str = "utf-8") -> None:
        super().__init__(name=str(path))
        self.path = Path(path)
        self.encoding = encoding

    def start(self) -> None:
        logger.info("Leyendo líneas desde %s", self.path)
        count = 0
        with self.path.open("r", encoding=self.encoding, newline="") as fh:
            for line in fh:
                self.stream.push(line.rstrip("\r\n"))
                count += 1
        self.stream.push_completion()
        logger.info("Lectura de %s finalizada: %d líneas publicadas", self.path, count)


class TextFileSink(Observer[str]):
    """Escribe cada línea recibida en un archivo de salida.

    El archivo se abre (truncando) al suscribirse y se cierra al recibir la
    señal de fin del stream.
    """

    def __init__(self, path: str | Path, *, encoding: str = "utf-8") -> None:
        self.path = Path(path)
        self.encoding = encoding
        self.lines_written = 0
        self._fh: Optional[TextIO] = None

    # API del Observer ---------------------------------------------------------
    def on_subscribe(self, stream: PushStream) -> None:
        if self._fh is not None:
            raise RuntimeError(f"TextFileSink para {self.path} ya está suscrito a un stream")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = self.path.open("w", encoding=self.encoding, newline="\n")

    def on_next(self, stream: PushStream, element: str) -> None:
        if self._fh is None:
            raise RuntimeError(f"TextFileSink para {self.path} no está abierto")
        self._fh.write(element)
        self._fh.write("\n")
        self.lines_written += 1

    def on_complete(self, stream: PushStream) -> None:
        self.close()

    # API auxiliar ------------------------------------------------------------
    @property
    def is_open(self) -> bool:
        return self._fh is not None

    def close(self) -> None:
        if self._fh is None:
            return
        fh, self._fh = self._fh, None
        fh.flush()
        fh.close()
        logger.info("TextFileSink cerrado: %d líneas escritas en %s", self.lines_written, self.path)

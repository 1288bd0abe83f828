"""Motor de streams push: observers, combinadores, fuentes y adaptadores de archivo."""

from .deferred import FoldResult
from .observer import FunctionObserver, Observer
from .source import IterableSource, Source
from .stream import PushStream, StreamCompletedError
from .text_file import TextFileSink, TextFileSource

__all__ = [
    "FoldResult",
    "FunctionObserver",
    "IterableSource",
    "Observer",
    "PushStream",
    "Source",
    "StreamCompletedError",
    "TextFileSink",
    "TextFileSource",
]

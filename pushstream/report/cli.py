"""Genera el reporte de ventana deslizante de un archivo ``timestamp<TAB>medida``."""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from dataclasses import replace
from functools import partial
from pathlib import Path
from typing import Callable, Optional, Sequence, Tuple, TypeVar

from pushstream.config import ReportSettings, load_report_settings, report_settings_from_env
from pushstream.streams import TextFileSink, TextFileSource

from .metrics import ReportMetrics
from .model import format_report, parse_ts_data
from .windowed import generate_windowed_report

logger = logging.getLogger(__name__)

R = TypeVar("R")


def time_and_run(func: Callable[[], R]) -> Tuple[float, R]:
    """Ejecuta ``func`` y devuelve ``(segundos_transcurridos, resultado)``."""

    start = time.perf_counter()
    output = func()
    return time.perf_counter() - start, output


def run_report(settings: ReportSettings, *, metrics: Optional[ReportMetrics] = None) -> int:
    """Procesa ``settings.input_path`` y devuelve la cantidad de registros escritos."""

    metrics = metrics or ReportMetrics(log_interval_s=settings.metrics_log_interval_s)

    source = TextFileSource(settings.input_path, encoding=settings.encoding)
    lines = source.stream
    lines.foreach(metrics.record_line)

    ts_stream = lines.map(partial(parse_ts_data, delimiter=settings.delimiter))
    reports = generate_windowed_report(
        ts_stream,
        settings.interval_s,
        validate_order=settings.validate_order,
    )
    reports.foreach(metrics.record_report)

    text_reports = reports.map(
        partial(format_report, decimals=settings.decimals, delimiter=settings.delimiter)
    )
    written = text_reports.fold(0, lambda total, _line: total + 1)
    sink = TextFileSink(settings.output_path, encoding=settings.encoding)
    text_reports.subscribe(sink)

    try:
        source.start()
    finally:
        # si la corrida aborta el stream nunca completa y el sink sigue abierto
        sink.close()
        metrics.maybe_log(force=True)
    return written.result()


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"se esperaba un entero: {text!r}") from exc
    if value <= 0:
        raise argparse.ArgumentTypeError("el intervalo debe ser > 0")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pushstream-report", description=__doc__)
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Archivo YAML con la configuración del reporte",
    )
    parser.add_argument("--input", dest="input_path", default=None, help="Archivo de entrada")
    parser.add_argument("--output", dest="output_path", default=None, help="Archivo de salida")
    parser.add_argument(
        "--interval",
        dest="interval_s",
        type=_positive_int,
        default=None,
        help="Largo de la ventana en segundos",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
    )
    return parser


def _resolve_settings(args: argparse.Namespace) -> ReportSettings:
    settings = report_settings_from_env(os.environ)
    if args.config is not None:
        settings = load_report_settings(args.config, base=settings)
    overrides = {
        name: getattr(args, name)
        for name in ("input_path", "output_path", "interval_s", "log_level")
        if getattr(args, name) is not None
    }
    return replace(settings, **overrides)


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        settings = _resolve_settings(args)
    except OSError as exc:
        logger.error("No se pudo leer la configuración: %s", exc)
        return 1
    except ValueError as exc:
        parser.error(f"configuración inválida: {exc}")

    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=getattr(logging, settings.log_level),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    try:
        elapsed, written = time_and_run(lambda: run_report(settings))
    except (OSError, ValueError) as exc:
        logger.error("Reporte abortado: %s", exc)
        return 1

    logger.info("%d registros escritos en %s", written, settings.output_path)
    print(f"Took {elapsed:.3f} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())

from __future__ import annotations

from typing import Any, Protocol

from node_map.utils.enumerators import DiagnosticEvent
from node_map.utils.logs import get_logger

logger = get_logger("diagnostics")


class DiagnosticSink(Protocol):
    """Destino de los avisos del NodeMap. Ninguno de los dos bloquea la ejecución."""
    def deprecation(self, message: str, **fields: Any) -> None: ...
    def warn(self, message: str, **fields: Any) -> None: ...


class LoggerSink:
    """Sink por defecto: ambos eventos van al logger JSON del paquete con nivel WARNING."""

    def __init__(self, log=None):
        self._logger = log or logger

    def deprecation(self, message: str, **fields: Any) -> None:
        self._logger.warning(message, extra={"event": DiagnosticEvent.DEPRECATION.value, **fields})

    def warn(self, message: str, **fields: Any) -> None:
        self._logger.warning(message, extra={"event": DiagnosticEvent.OVERRIDE.value, **fields})

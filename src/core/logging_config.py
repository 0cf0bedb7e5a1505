"""Configuración de logging.

Por qué stderr:
- Todo el log sale por Rich a stderr; stdout solo lleva la ayuda y la línea
  de resultado, que otros scripts parsean.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAMESPACES = ("cli", "core", "adapters")


def setup_logging(level: str = "ERROR") -> logging.Logger:
    """Configura los loggers del paquete.

    Args:
        level: Nivel de logging (DEBUG, INFO, WARNING, ERROR).

    Returns:
        El logger `core` ya configurado.
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s"))

    for namespace in LOGGER_NAMESPACES:
        logger = logging.getLogger(namespace)
        logger.setLevel(numeric_level)
        # Llamadas repetidas (tests) no deben acumular handlers.
        logger.handlers.clear()
        logger.addHandler(handler)

    return logging.getLogger("core")

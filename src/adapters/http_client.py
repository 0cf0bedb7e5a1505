"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts (5s conexión / 8s totales), headers y redirecciones.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.

httpx solo ofrece timeouts por operación (connect/read/write/pool); el límite
total de la petición lo impone `Deadline`: se comprueba en cada petición y
respuesta (cada salto de redirección) y entre chunks del cuerpo, y recorta
los timeouts de cada petición al tiempo restante.
"""

from __future__ import annotations

import time

import httpx

from core.config import AppSettings

_TIMEOUT_PHASES = ("connect", "read", "write", "pool")


class Deadline:
    """Límite de tiempo total para una operación.

    No corre hasta que se llama a `start()`; `check()` antes de eso no hace nada.
    """

    def __init__(self, seconds: float) -> None:
        self._seconds = seconds
        self._expires_at: float | None = None

    def start(self) -> None:
        self._expires_at = time.monotonic() + self._seconds

    def remaining(self) -> float | None:
        if self._expires_at is None:
            return None
        return self._expires_at - time.monotonic()

    def check(self, message: httpx.Request | httpx.Response | None = None) -> None:
        """Lanza `httpx.TimeoutException` si el plazo venció.

        Acepta la petición/respuesta para poder usarse como event hook. Con
        una petición, además recorta sus timeouts por operación al tiempo
        restante: ningún salto de redirección bloquea más allá del límite.
        """

        remaining = self.remaining()
        if remaining is None:
            return
        request = message if isinstance(message, httpx.Request) else None
        if isinstance(message, httpx.Response):
            request = message.request
        if remaining <= 0:
            raise httpx.TimeoutException(
                f"total timeout of {self._seconds:g}s exceeded",
                request=request,
            )
        if isinstance(message, httpx.Request):
            timeouts = message.extensions.get("timeout") or {}
            message.extensions["timeout"] = {
                phase: remaining if timeouts.get(phase) is None else min(timeouts[phase], remaining)
                for phase in _TIMEOUT_PHASES
            }


def build_timeout(settings: AppSettings) -> httpx.Timeout:
    """Timeout por operación, acotado por el total."""

    total = settings.total_timeout_seconds
    return httpx.Timeout(total, connect=min(settings.connect_timeout_seconds, total))


def build_client(
    settings: AppSettings | None = None,
    *,
    deadline: Deadline | None = None,
    transport: httpx.BaseTransport | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con los defaults de la herramienta.

    Por qué un builder:
    - Centraliza timeouts/headers para shorten y unshorten.
    - `transport` permite sustituir la red en tests.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "*/*",
    }
    if extra_headers:
        headers.update(extra_headers)

    event_hooks: dict[str, list] = {}
    if deadline is not None:
        event_hooks = {"request": [deadline.check], "response": [deadline.check]}

    return httpx.Client(
        timeout=build_timeout(settings),
        follow_redirects=True,
        max_redirects=settings.max_redirects,
        headers=headers,
        event_hooks=event_hooks,
        transport=transport,
    )

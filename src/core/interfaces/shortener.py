"""Contrato de un servicio de acortado de URLs.

Por qué Protocol:
- El dispatcher no necesita conocer el proveedor (TinyURL) ni el cliente HTTP.
- Los tests sustituyen el servicio por un stub sin herencia.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import UrlResult


@runtime_checkable
class UrlShortener(Protocol):
    """Contrato mínimo: acortar y resolver.

    Reglas de diseño:
    - Ambos métodos son síncronos; el proceso hace una sola petición bloqueante.
    - Nunca lanzan por fallos de red: devuelven `UrlResult.failure(...)`.
    """

    def shorten(self, long_url: str) -> UrlResult:
        """Acorta `long_url` a través del proveedor."""

        ...

    def unshorten(self, short_url: str) -> UrlResult:
        """Sigue las redirecciones de `short_url` y devuelve la URL final."""

        ...

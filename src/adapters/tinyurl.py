"""Adaptador TinyURL: acortar y resolver URLs sobre httpx.

Fase única:
- `shorten` llama a `api-create.php` y devuelve el cuerpo en texto plano.
- `unshorten` hace HEAD siguiendo redirecciones y devuelve la URL efectiva.

Ningún fallo de red sale de aquí como excepción: todo se convierte en
`UrlResult.failure(ErrorKind...)`.
"""

from __future__ import annotations

import logging
from types import TracebackType
from urllib.parse import quote

import httpx

from adapters.http_client import Deadline, build_client
from core.config import AppSettings
from core.domain.models import ErrorKind, UrlResult
from core.interfaces.shortener import UrlShortener

logger = logging.getLogger(__name__)

# httpx.InvalidURL does not derive from httpx.HTTPError; hosts with invalid
# IDNA labels fail while parsing the URL with `idna.IDNAError` (a UnicodeError).
_TRANSPORT_ERRORS = (httpx.HTTPError, httpx.InvalidURL, UnicodeError)


def encode_query_value(value: str) -> str:
    """Percent-encoding de `value` como valor de query completo.

    Solo quedan sin escapar los caracteres no reservados de RFC 3986
    (`A-Z a-z 0-9 - . _ ~`). Lanza `UnicodeEncodeError` si `value` no es
    representable en UTF-8.
    """

    return quote(value, safe="", encoding="utf-8", errors="strict")


def with_default_scheme(url: str) -> str:
    return url if "://" in url else "http://" + url


class TinyUrlShortener(UrlShortener):
    """Cliente de la API pública de TinyURL.

    Se usa como context manager: el `httpx.Client` se crea en la primera
    operación y se cierra en `__exit__`, haya o no error.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport
        self._deadline = Deadline(self._settings.total_timeout_seconds)
        self._client: httpx.Client | None = None

    def __enter__(self) -> "TinyUrlShortener":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def _ensure_client(self) -> httpx.Client | None:
        if self._client is None:
            try:
                self._client = build_client(
                    self._settings,
                    deadline=self._deadline,
                    transport=self._transport,
                )
            except (OSError, ValueError) as exc:
                logger.warning("Could not build HTTP client: %r", exc)
                return None
        return self._client

    def build_api_url(self, encoded_url: str) -> str:
        separator = "&" if "?" in self._settings.api_url else "?"
        return f"{self._settings.api_url}{separator}url={encoded_url}"

    def shorten(self, long_url: str) -> UrlResult:
        try:
            encoded = encode_query_value(long_url)
        except UnicodeEncodeError as exc:
            logger.warning("URL encoding failed: %s", exc)
            return UrlResult.failure(ErrorKind.ENCODING_FAILED)

        if len(encoded) > self._settings.max_encoded_length:
            logger.info(
                "Encoded URL is %d bytes, limit is %d",
                len(encoded),
                self._settings.max_encoded_length,
            )
            return UrlResult.failure(ErrorKind.URL_TOO_LONG)

        client = self._ensure_client()
        if client is None:
            return UrlResult.failure(ErrorKind.CLIENT_INIT)

        api_url = self.build_api_url(encoded)
        logger.debug("GET %s", api_url)
        self._deadline.start()
        try:
            with client.stream("GET", api_url, follow_redirects=False) as response:
                body = bytearray()
                for chunk in response.iter_bytes():
                    self._deadline.check(response)
                    body.extend(chunk)
                text = body.decode(response.encoding or "utf-8", errors="replace")
        except MemoryError:
            logger.warning("Out of memory while reading response from %s", api_url)
            return UrlResult.failure(ErrorKind.OUT_OF_MEMORY)
        except _TRANSPORT_ERRORS as exc:
            logger.warning("Shorten request failed: %r", exc)
            return UrlResult.failure(ErrorKind.SHORTEN_NETWORK)

        if response.status_code >= 400:
            logger.warning("Shortening service answered HTTP %d", response.status_code)
        return UrlResult.success(text)

    def unshorten(self, short_url: str) -> UrlResult:
        client = self._ensure_client()
        if client is None:
            return UrlResult.failure(ErrorKind.CLIENT_INIT)

        target = with_default_scheme(short_url)
        logger.debug("HEAD %s", target)
        self._deadline.start()
        try:
            response = client.head(target)
        except _TRANSPORT_ERRORS as exc:
            logger.warning("Unshorten request failed: %r", exc)
            return UrlResult.failure(ErrorKind.UNSHORTEN_NETWORK)

        for hop in response.history:
            logger.debug("%d %s -> %s", hop.status_code, hop.url, hop.headers.get("Location", ""))

        final_url = str(response.url)
        if 200 <= response.status_code < 400 and final_url:
            return UrlResult.success(final_url)

        logger.info("Final response HTTP %d for %s", response.status_code, final_url)
        return UrlResult.failure(ErrorKind.INVALID_REDIRECT)

"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta del descriptor de petición (URL no vacía) en el borde.
- Un resultado tipado (`value` | `error`) en lugar de un canal de strings
  mezclado; la CLI lo vuelve a formatear como texto plano.

Nota:
- Estos modelos describen *qué* se pide y *qué* se obtuvo, no *cómo*.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict


class Mode(str, Enum):
    """Operación solicitada desde la línea de comandos."""

    SHORTEN = "shorten"
    UNSHORTEN = "unshorten"


class ErrorKind(str, Enum):
    """Taxonomía de fallos de una operación.

    El `message` de cada miembro es el texto exacto que imprime la CLI; los
    scripts que parsean la salida dependen de estos strings.
    """

    OUT_OF_MEMORY = "out_of_memory"
    CLIENT_INIT = "client_init"
    ENCODING_FAILED = "encoding_failed"
    URL_TOO_LONG = "url_too_long"
    SHORTEN_NETWORK = "shorten_network"
    UNSHORTEN_NETWORK = "unshorten_network"
    INVALID_REDIRECT = "invalid_redirect"

    @property
    def message(self) -> str:
        return _ERROR_MESSAGES[self]


_ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.OUT_OF_MEMORY: "Error: Memory allocation failed",
    ErrorKind.CLIENT_INIT: "Error: Could not initialize curl",
    ErrorKind.ENCODING_FAILED: "Error: URL encoding failed",
    ErrorKind.URL_TOO_LONG: "Error: URL too long for API",
    ErrorKind.SHORTEN_NETWORK: "Error: Could not shorten URL (network failure)",
    ErrorKind.UNSHORTEN_NETWORK: "Error: Could not unshorten URL (network issue)",
    ErrorKind.INVALID_REDIRECT: "Error: Invalid or failed redirect response",
}


class UrlRequest(BaseModel):
    """Descriptor de petición: modo + URL de entrada.

    Se construye a partir de argv y no se modifica después.
    """

    model_config = ConfigDict(frozen=True)

    mode: Mode = Field(
        ...,
        description="Operación a ejecutar (shorten/unshorten).",
    )
    url: str = Field(
        ...,
        min_length=1,
        description="URL de entrada tal y como llegó por argv.",
    )


class UrlResult(BaseModel):
    """Resultado de una operación: exactamente uno de `value` o `error`."""

    model_config = ConfigDict(frozen=True)

    value: str | None = Field(
        default=None,
        description="URL resultante (acortada o resuelta).",
    )
    error: ErrorKind | None = Field(
        default=None,
        description="Tipo de fallo si la operación no tuvo éxito.",
    )

    @model_validator(mode="after")
    def _exactly_one(self) -> "UrlResult":
        if (self.value is None) == (self.error is None):
            raise ValueError("'value' and 'error' are mutually exclusive and one is required")
        return self

    @classmethod
    def success(cls, value: str) -> "UrlResult":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorKind) -> "UrlResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def render(self) -> str:
        """Texto que se imprime en la CLI (éxito o mensaje de error)."""

        if self.error is not None:
            return self.error.message
        assert self.value is not None
        return self.value

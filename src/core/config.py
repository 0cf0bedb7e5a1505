"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Los defaults reproducen el comportamiento histórico de la herramienta;
  ninguna variable es obligatoria.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TINYURL_API_URL = "https://tinyurl.com/api-create.php"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación."""

    model_config = SettingsConfigDict(
        env_prefix="SHORTURL_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    api_url: str = Field(
        default=TINYURL_API_URL,
        min_length=1,
        description="Endpoint de creación de TinyURL (recibe `?url=`).",
    )
    connect_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Timeout de conexión (segundos).",
    )
    total_timeout_seconds: float = Field(
        default=8.0,
        gt=0,
        description="Tiempo máximo de la petición completa, redirecciones incluidas (segundos).",
    )
    max_encoded_length: int = Field(
        default=900,
        ge=1,
        description="Longitud máxima de la URL ya codificada que acepta la API.",
    )
    max_redirects: int = Field(
        default=30,
        ge=0,
        description="Redirecciones máximas al resolver una URL corta.",
    )
    user_agent: str = Field(
        default="shorturl/0.1",
        min_length=1,
        description="User-Agent de las peticiones salientes.",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="ERROR",
        description="Nivel de logging (se escribe en stderr).",
    )
    strict_exit_codes: bool = Field(
        default=False,
        description="Usar un código de salida distinto por cada tipo de error.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

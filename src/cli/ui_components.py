"""Texto de salida de la CLI.

Por qué separar componentes:
- Evita mezclar el dispatch con el formato exacto de salida.
- Las líneas de resultado son un contrato: scripts externos las parsean.
"""

from __future__ import annotations

from core.domain.models import Mode, UrlResult

USAGE_ERROR = "Error: Invalid command or missing argument."

RESULT_PREFIXES: dict[Mode, str] = {
    Mode.SHORTEN: "Shortened URL: ",
    Mode.UNSHORTEN: "Original URL: ",
}

_HELP_TEMPLATE = """
===========================================
 URL Shortener & Unshortener Tool
===========================================

Usage:
 {prog} [option] [url]

Options:
 -s <url> Shorten a long URL using TinyURL API
 -u <url> Unshorten a short URL to reveal its target
 -h Show this help message

Examples:
 {prog} -s https://example.com
 {prog} -u https://tinyurl.com/abc123

Notes:
 * Requires internet connectivity.
"""


def render_help(prog_name: str) -> str:
    """Texto de ayuda con el nombre del programa invocado."""

    return _HELP_TEMPLATE.format(prog=prog_name)


def format_result_line(mode: Mode, result: UrlResult) -> str:
    return RESULT_PREFIXES[mode] + result.render()

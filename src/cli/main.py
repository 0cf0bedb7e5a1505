"""CLI (Typer) de shorturl.

Por qué sin parsing de Typer:
- La lista de argumentos llega intacta al dispatcher (incluido `--`), así
  `-s`, `-u`, `-h` y los flags desconocidos conservan el comportamiento y los
  códigos de salida históricos.
- La ayuda y las opciones propias de Typer están desactivadas.
"""

from __future__ import annotations

from typing import List, Optional

import typer
from typer.core import TyperCommand

from adapters.tinyurl import TinyUrlShortener
from cli.ui_components import USAGE_ERROR, format_result_line, render_help
from core.config import AppSettings
from core.logging_config import setup_logging
from core.services.dispatcher import DispatchOutcome, dispatch

DEFAULT_PROG_NAME = "shorturl"
RAW_ARGS_KEY = "shorturl.raw_args"

_CONTEXT_SETTINGS = {
    "ignore_unknown_options": True,
    "allow_extra_args": True,
    "help_option_names": [],
}


class RawArgsCommand(TyperCommand):
    """Guarda argv tal cual antes de que Click lo procese (Click descarta `--`)."""

    def parse_args(self, ctx: typer.Context, args: List[str]) -> List[str]:
        ctx.meta[RAW_ARGS_KEY] = list(args)
        return super().parse_args(ctx, args)


app = typer.Typer(
    add_completion=False,
    add_help_option=False,
    context_settings=_CONTEXT_SETTINGS,
    help="Shorten URLs with TinyURL or resolve short URLs to their target.",
)


def build_shortener(settings: AppSettings) -> TinyUrlShortener:
    return TinyUrlShortener(settings)


def print_outcome(outcome: DispatchOutcome, prog_name: str) -> None:
    if outcome.usage_error:
        typer.echo(USAGE_ERROR, err=True)
    if outcome.request is not None and outcome.result is not None:
        typer.echo(format_result_line(outcome.request.mode, outcome.result))
    if outcome.show_help:
        typer.echo(render_help(prog_name))


@app.command(cls=RawArgsCommand, context_settings=_CONTEXT_SETTINGS, add_help_option=False)
def main(
    ctx: typer.Context,
    args: Optional[List[str]] = typer.Argument(None, metavar="[option] [url]"),
) -> None:
    """Shorten (-s) or unshorten (-u) a single URL."""

    settings = AppSettings()
    setup_logging(settings.log_level)

    raw_args = ctx.meta.get(RAW_ARGS_KEY, args or [])
    outcome = dispatch(
        raw_args,
        lambda: build_shortener(settings),
        strict_exit_codes=settings.strict_exit_codes,
    )
    print_outcome(outcome, ctx.find_root().info_name or DEFAULT_PROG_NAME)
    raise typer.Exit(code=int(outcome.exit_code))


def run() -> None:
    app()

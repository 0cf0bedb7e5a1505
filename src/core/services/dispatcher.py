"""Dispatcher de operaciones sobre URLs.

Convierte la lista de argumentos en una `Invocation`, ejecuta la operación
sobre un `UrlShortener` y devuelve un `DispatchOutcome` que imprime la CLI.
Aquí no se escribe nada en stdout/stderr.

Tabla de argumentos:

    []              -> help, exit 1
    ["-h", ...]     -> help, exit 0
    ["-s", url]     -> shorten
    ["-u", url]     -> unshorten
    cualquier otro  -> error de uso + ayuda, exit 0 (2 con códigos estrictos)
"""

from __future__ import annotations

import logging
from contextlib import AbstractContextManager
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, Sequence

from pydantic import ValidationError

from core.domain.models import ErrorKind, Mode, UrlRequest, UrlResult
from core.interfaces.shortener import UrlShortener

logger = logging.getLogger(__name__)

HELP_FLAG = "-h"
MODE_FLAGS: dict[str, Mode] = {
    "-s": Mode.SHORTEN,
    "-u": Mode.UNSHORTEN,
}

ShortenerFactory = Callable[[], AbstractContextManager[UrlShortener]]


class InvocationKind(str, Enum):
    NO_ARGS = "no_args"
    HELP = "help"
    OPERATION = "operation"
    INVALID = "invalid"


class ExitCode(IntEnum):
    """Códigos de salida del proceso.

    Sin códigos estrictos solo se usan `OK` y `NO_ARGS`.
    """

    OK = 0
    NO_ARGS = 1
    USAGE = 2
    OUT_OF_MEMORY = 3
    CLIENT_INIT = 4
    ENCODING_FAILED = 5
    URL_TOO_LONG = 6
    SHORTEN_NETWORK = 7
    UNSHORTEN_NETWORK = 8
    INVALID_REDIRECT = 9

    @classmethod
    def for_error(cls, kind: ErrorKind) -> "ExitCode":
        return cls[kind.name]


@dataclass(frozen=True)
class Invocation:
    """Línea de comandos ya interpretada."""

    kind: InvocationKind
    request: UrlRequest | None = None


@dataclass(frozen=True)
class DispatchOutcome:
    """Qué debe imprimir la CLI y con qué código salir."""

    exit_code: int
    show_help: bool = False
    usage_error: bool = False
    request: UrlRequest | None = None
    result: UrlResult | None = None


def parse_invocation(args: Sequence[str]) -> Invocation:
    if not args:
        return Invocation(InvocationKind.NO_ARGS)

    flag = args[0]
    if flag == HELP_FLAG:
        return Invocation(InvocationKind.HELP)

    mode = MODE_FLAGS.get(flag)
    if mode is None or len(args) != 2:
        return Invocation(InvocationKind.INVALID)

    try:
        request = UrlRequest(mode=mode, url=args[1])
    except ValidationError:
        return Invocation(InvocationKind.INVALID)
    return Invocation(InvocationKind.OPERATION, request)


def run_request(request: UrlRequest, shortener: UrlShortener) -> UrlResult:
    if request.mode is Mode.SHORTEN:
        return shortener.shorten(request.url)
    return shortener.unshorten(request.url)


def dispatch(
    args: Sequence[str],
    shortener_factory: ShortenerFactory,
    *,
    strict_exit_codes: bool = False,
) -> DispatchOutcome:
    """Interpreta `args`, ejecuta como mucho una operación y describe el resultado.

    El shortener (y su cliente HTTP) solo se crea para una operación real y
    siempre se libera antes de volver.
    """

    invocation = parse_invocation(args)
    logger.debug("Invocation: %s", invocation.kind.value)

    if invocation.kind is InvocationKind.NO_ARGS:
        return DispatchOutcome(exit_code=ExitCode.NO_ARGS, show_help=True)

    if invocation.kind is InvocationKind.HELP:
        return DispatchOutcome(exit_code=ExitCode.OK, show_help=True)

    if invocation.kind is InvocationKind.INVALID:
        return DispatchOutcome(
            exit_code=ExitCode.USAGE if strict_exit_codes else ExitCode.OK,
            show_help=True,
            usage_error=True,
        )

    request = invocation.request
    assert request is not None
    with shortener_factory() as shortener:
        result = run_request(request, shortener)

    exit_code = ExitCode.OK
    if strict_exit_codes and result.error is not None:
        exit_code = ExitCode.for_error(result.error)
    return DispatchOutcome(exit_code=exit_code, request=request, result=result)

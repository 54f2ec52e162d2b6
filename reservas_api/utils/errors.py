import logging
from typing import Any, Dict, List

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ReservaError(Exception):
    """Base error; ``mensaje`` is what the client gets to read."""

    status_code = 500
    mensaje = "Error en el servidor"

    def __init__(self, mensaje: str = None):
        if mensaje is not None:
            self.mensaje = mensaje
        super().__init__(self.mensaje)

    def body(self) -> Dict[str, Any]:
        return {"mensaje": self.mensaje}


class PayloadValidationError(ReservaError):
    status_code = 400
    mensaje = "Datos de la reserva no válidos"

    def __init__(self, errors: List[Dict[str, Any]]):
        self.errors = errors
        super().__init__()

    def body(self) -> Dict[str, Any]:
        return {"errors": self.errors}


class ReservaNotFound(ReservaError):
    status_code = 404
    mensaje = "Reserva no encontrada"


class StorageError(ReservaError):
    status_code = 500


class RateLimitExceeded(ReservaError):
    status_code = 429

    def __init__(self, mensaje: str, retry_after: int):
        self.retry_after = retry_after
        super().__init__(mensaje)


def error_response(exc: ReservaError) -> JSONResponse:
    headers = None
    if isinstance(exc, RateLimitExceeded):
        headers = {"Retry-After": str(exc.retry_after)}
    return JSONResponse(status_code=exc.status_code, content=exc.body(), headers=headers)


async def reserva_error_handler(request: Request, exc: ReservaError) -> JSONResponse:
    if exc.status_code >= 500:
        # details were already logged where the error was raised
        logger.error("%s %s -> %s", request.method, request.url.path, exc.mensaje)
    return error_response(exc)

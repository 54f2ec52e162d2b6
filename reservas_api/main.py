import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .config import settings
from .database import Base, engine
from .models import reserva as reserva_model  # noqa: F401  registers the table on Base
from .routes import reservas as reservas_router
from .utils.errors import RateLimitExceeded, ReservaError, error_response, reserva_error_handler
from .utils.rate_limiter import FixedWindowRateLimiter

logger = logging.getLogger("uvicorn.error")

app = FastAPI(
    title="Reservas - REST API",
    description="API REST para guardar, consultar, actualizar y eliminar reservas de eventos",
    version="1.0.0"
)

limiter = FixedWindowRateLimiter(
    max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
    window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
)


def _client_key(request: Request) -> str:
    return request.client.host if request.client else "anonymous"


# Registered before CORS so CORS wraps it and 429s still carry the CORS headers
@app.middleware("http")
async def _rate_limit(request: Request, call_next):
    if not settings.RATE_LIMIT_ENABLED:
        return await call_next(request)

    key = _client_key(request)
    result = limiter.hit(key)
    if not result.allowed:
        logger.warning("Rate limit exceeded for %s on %s %s", key, request.method, request.url.path)
        response = error_response(RateLimitExceeded(
            settings.RATE_LIMIT_MESSAGE,
            retry_after=FixedWindowRateLimiter.retry_after_seconds(result),
        ))
    else:
        response = await call_next(request)
    response.headers["X-RateLimit-Limit"] = str(result.limit)
    response.headers["X-RateLimit-Remaining"] = str(result.remaining)
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(ReservaError, reserva_error_handler)


@app.exception_handler(RequestValidationError)
async def _invalid_request_handler(request: Request, exc: RequestValidationError):
    # only reachable for malformed JSON; the routes take the body as-is
    return JSONResponse(
        status_code=400,
        content={"errors": [{"campo": "body", "mensaje": "El cuerpo de la petición no es JSON válido", "valor": None}]},
    )


app.include_router(reservas_router.router)

static_dir = Path(settings.STATIC_DIR)
if static_dir.is_dir():
    app.mount("/static", StaticFiles(directory=static_dir), name="static")


@app.get("/")
def read_root():
    return {
        "message": "Reservas - REST API",
        "version": "1.0.0",
        "service": "REST API (Python/FastAPI)",
        "status": "running"
    }


@app.on_event("startup")
def on_startup():
    if settings.CREATE_TABLES_ON_STARTUP:
        Base.metadata.create_all(bind=engine)
    logger.info("Reservas API ready (rate limit %s req / %ss)", settings.RATE_LIMIT_MAX_REQUESTS, settings.RATE_LIMIT_WINDOW_SECONDS)


def run():
    import uvicorn

    logger.info("Servidor corriendo en el puerto %s", settings.PORT)
    uvicorn.run(
        "reservas_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL,
    )


if __name__ == "__main__":
    run()
